# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Resolved run settings.

Settings is the record filled once by Config.parse(). Every field is frozen
after construction except ``optimization_step``, the cursor the step
sequencer advances between optimization steps.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from desyde.settings.types import (
    CPModel,
    MultiStepHeuristic,
    OptCriterion,
    OutputFileType,
    OutputPrintFrequency,
    PresolverModel,
    SearchType,
    ThroughputPropagator,
)


class Settings(BaseModel):
    """All resolved parameters of a DSE run."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    # Paths
    inputs_paths: tuple[Path, ...] = Field(
        frozen=True, min_length=1, description="Input directories or files"
    )
    output_path: Path = Field(frozen=True, description="Output directory")

    # Models and search
    model: CPModel = Field(default=CPModel.SDF, frozen=True)
    pre_models: tuple[PresolverModel, ...] = Field(
        default=(PresolverModel.NO_PRE,), frozen=True
    )
    pre_heuristics: tuple[MultiStepHeuristic, ...] = Field(
        default=(MultiStepHeuristic.NO_HEURISTIC,), frozen=True
    )
    search: SearchType = Field(default=SearchType.OPTIMIZE, frozen=True)
    pre_search: SearchType = Field(default=SearchType.ALL, frozen=True)
    pre_multi_step_search: SearchType = Field(default=SearchType.OPTIMIZE, frozen=True)

    # Optimization steps
    optimization_step: int = Field(default=0, ge=0, description="Current optimization step")
    criteria: tuple[OptCriterion, ...] = Field(
        default=(), frozen=True, description="Governing criterion of each optimization step"
    )

    # Timeouts in milliseconds, 0 disables the limit
    timeout_first: int = Field(default=0, ge=0, frozen=True)
    timeout_all: int = Field(default=0, ge=0, frozen=True)
    pre_timeout_first: int = Field(default=0, ge=0, frozen=True)
    pre_timeout_all: int = Field(default=0, ge=0, frozen=True)

    # Solver tuning
    luby_scale: int = Field(default=100, ge=0, frozen=True)
    threads: int = Field(default=1, ge=1, frozen=True)
    no_good_depth: int = Field(default=75, ge=0, frozen=True)
    th_prop: ThroughputPropagator = Field(default=ThroughputPropagator.SSE, frozen=True)

    # Output
    out_file_type: OutputFileType = Field(default=OutputFileType.ALL_OUT, frozen=True)
    out_print_freq: OutputPrintFrequency = Field(
        default=OutputPrintFrequency.LAST, frozen=True
    )
    print_metrics: tuple[OptCriterion, ...] = Field(default=(), frozen=True)

    # Timing-driven network configuration
    config_tdn: bool = Field(default=False, frozen=True)
    tdn_config_path: Path | None = Field(default=None, frozen=True)
