# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Program settings of a DeSyDe run.

Config is filled once from command-line tokens by parse(). After that the
settings are read-only except for the optimization step, which the search
driver advances between the steps of a staged optimization.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from desyde._internal.logging import LogSetup
from desyde.errors import IllegalStateError
from desyde.presolver.bridge import PresolverBridge
from desyde.presolver.results import PresolverResults
from desyde.settings import options
from desyde.settings.dump import render_settings, write_config_file
from desyde.settings.schema import Settings
from desyde.settings.steps import StepSequencer
from desyde.settings.types import PresolverModel

logger = logging.getLogger(__name__)


class Config:
    """Run configuration, step sequencing, and presolver hand-off."""

    def __init__(self):
        self._settings: Settings | None = None
        self._sequencer: StepSequencer | None = None
        self._log_setup: LogSetup | None = None
        self._presolver = PresolverBridge()

    @classmethod
    def from_settings(cls, settings: Settings) -> Config:
        """Create a configuration from already resolved settings."""
        config = cls()
        config._install(settings)
        return config

    def _install(self, settings: Settings, log_setup: LogSetup | None = None) -> None:
        self._settings = settings
        self._sequencer = StepSequencer(settings)
        self._log_setup = log_setup
        self._presolver = PresolverBridge()

    def parse(self, tokens: Sequence[str]) -> int:
        """Resolve settings from command-line tokens.

        Returns:
            0 once settings are populated, 1 if only help was printed

        Raises:
            InvalidFormatError: Malformed tokens or unknown option values
            ConfigIOError: Unusable input, output, log, or config paths
            IllegalStateError: Options applied out of order
        """
        resolution = options.resolve(list(tokens))
        if resolution is None:
            return 1

        # Written before anything is installed so a failed dump leaves the
        # current configuration in place
        if resolution.dump_path is not None:
            write_config_file(resolution.settings, resolution.dump_path, resolution.log_setup)

        resolution.log_setup.apply()
        self._install(resolution.settings, resolution.log_setup)

        logger.info(
            "Configured %s search over %d input(s), output in %s",
            self._settings.search.token,
            len(self._settings.inputs_paths),
            self._settings.output_path,
        )
        if resolution.dump_path is not None:
            logger.info("Settings written to %s", resolution.dump_path)
        return 0

    def _require_configured(self) -> None:
        if self._settings is None:
            raise IllegalStateError(
                "Settings accessed before configuration",
                details=["Call parse() first"],
            )

    @property
    def settings(self) -> Settings:
        self._require_configured()
        return self._settings

    @property
    def _steps(self) -> StepSequencer:
        self._require_configured()
        return self._sequencer

    # ------------------------------------------------------------------
    # Settings dump
    # ------------------------------------------------------------------

    def print_settings(self) -> str:
        return render_settings(self.settings, self._log_setup)

    def dump_config_file(self, path: Path | str) -> Path:
        path = write_config_file(self.settings, path, self._log_setup)
        logger.info("Settings written to %s", path)
        return path

    # ------------------------------------------------------------------
    # Optimization steps
    # ------------------------------------------------------------------

    def inc_optimization_step(self) -> int:
        return self._steps.advance()

    def do_optimize(self) -> bool:
        """Whether any optimization criterion is configured."""
        return self._steps.do_optimize()

    def do_optimize_thput(self, step: int | None = None) -> bool:
        return self._steps.do_optimize_thput(step)

    def do_optimize_power(self, step: int | None = None) -> bool:
        return self._steps.do_optimize_power(step)

    def do_multi_step(self) -> bool:
        return self._steps.do_multi_step()

    def do_presolve(self) -> bool:
        """Whether a presolver model other than no-presolve is configured."""
        return any(m is not PresolverModel.NO_PRE for m in self.settings.pre_models)

    # ------------------------------------------------------------------
    # Presolver hand-off
    # ------------------------------------------------------------------

    def set_presolver_results(self, results: PresolverResults) -> None:
        self._presolver.set(results)

    def get_presolver_results(self) -> PresolverResults | None:
        return self._presolver.get()

    def is_presolved(self) -> bool:
        return self._presolver.is_presolved()

    # ------------------------------------------------------------------
    # Tokens for reports
    # ------------------------------------------------------------------

    def get_out_freq(self) -> str:
        return self.settings.out_print_freq.token

    def get_search_type(self) -> str:
        return self.settings.search.token
