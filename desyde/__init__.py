# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""
DeSyDe: design space exploration of dataflow applications on MPSoCs.

Run configuration for a constraint-programming search that maps streaming
dataflow applications onto multiprocessor platforms, optimizing throughput,
power, or latency over one or more sequential optimization steps, optionally
seeded by a presolver pass.

Quick Start:
    >>> from desyde import Config
    >>> config = Config()
    >>> config.parse(["--inputs", "apps/", "--output", "out/", "--criteria", "throughput"])
    0
    >>> config.do_optimize_thput()
    True
"""

__version__ = "0.1.0"

from .errors import (
    ConfigError,
    ConfigIOError,
    IllegalStateError,
    InvalidFormatError,
    StepRangeError,
)
from .settings import Config, Settings
from .presolver import (
    MappingCombination,
    MappingHandoff,
    PresolverBridge,
    PresolverResults,
    SolutionValues,
)

__all__ = [
    "Config",
    "Settings",
    "PresolverBridge",
    "PresolverResults",
    "SolutionValues",
    "MappingCombination",
    "MappingHandoff",
    "ConfigError",
    "ConfigIOError",
    "IllegalStateError",
    "InvalidFormatError",
    "StepRangeError",
]
