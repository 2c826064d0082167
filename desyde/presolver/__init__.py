# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Presolver hand-off.

Results of the optional presolver pass and the rule that turns them into
enforced or forbidden processor mappings for the main search.
"""

from .bridge import PresolverBridge
from .handoff import ForbiddenAssignment, HandoffMode, MappingConstraint, MappingHandoff
from .results import MappingCombination, PresolverResults, SolutionValues

__all__ = [
    "PresolverBridge",
    "PresolverResults",
    "SolutionValues",
    "MappingCombination",
    "MappingHandoff",
    "HandoffMode",
    "MappingConstraint",
    "ForbiddenAssignment",
]
