# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Internal utilities for desyde.

This package contains implementation details that are not part of the
public API. Do not import from this package directly in user code.
"""
