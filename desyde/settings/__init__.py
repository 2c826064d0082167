# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""DeSyDe configuration module.

Provides the option domains, the resolved Settings record, and the Config
object that sequences optimization steps.
"""

from .types import (
    CPModel,
    LogLevel,
    MultiStepHeuristic,
    OptCriterion,
    OutputFileType,
    OutputPrintFrequency,
    PresolverModel,
    SearchType,
    ThroughputPropagator,
)
from .schema import Settings
from .criteria import CriteriaResolver
from .steps import StepSequencer
from .config import Config

__all__ = [
    "Config",
    "Settings",
    "CriteriaResolver",
    "StepSequencer",
    "CPModel",
    "LogLevel",
    "MultiStepHeuristic",
    "OptCriterion",
    "OutputFileType",
    "OutputPrintFrequency",
    "PresolverModel",
    "SearchType",
    "ThroughputPropagator",
]
