# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Cursor over the steps of a staged optimization run."""

import logging

from desyde.errors import StepRangeError
from desyde.settings.criteria import CriteriaResolver
from desyde.settings.schema import Settings
from desyde.settings.types import OptCriterion

logger = logging.getLogger(__name__)


class StepSequencer:
    """Tracks the active optimization step of a run.

    The cursor lives in ``settings.optimization_step`` and only moves forward,
    one step per advance(). It is driven by a single thread; concurrent
    advance() calls need external serialization.
    """

    def __init__(self, settings: Settings):
        self._settings = settings
        self._resolver = CriteriaResolver(settings.criteria)

    @property
    def current_step(self) -> int:
        return self._settings.optimization_step

    @property
    def resolver(self) -> CriteriaResolver:
        return self._resolver

    def advance(self) -> int:
        """Move to the next optimization step.

        Returns:
            The new current step

        Raises:
            StepRangeError: If the current step is already the last one
        """
        step = self.current_step
        if step + 1 >= len(self._resolver):
            raise StepRangeError(
                f"Cannot advance past optimization step {step}",
                details=[f"Run has {len(self._resolver)} optimization step(s)"],
            )

        self._settings.optimization_step = step + 1
        logger.debug(
            "Optimization step %d -> %d (%s)",
            step, step + 1, self._resolver.governing_criterion(step + 1).token,
        )
        return step + 1

    def _step_or_current(self, step: int | None) -> int:
        return self.current_step if step is None else step

    def do_optimize(self) -> bool:
        return len(self._resolver) > 0

    def do_optimize_thput(self, step: int | None = None) -> bool:
        criterion = self._resolver.governing_criterion(self._step_or_current(step))
        return criterion is OptCriterion.THROUGHPUT

    def do_optimize_power(self, step: int | None = None) -> bool:
        criterion = self._resolver.governing_criterion(self._step_or_current(step))
        return criterion is OptCriterion.POWER

    def do_multi_step(self) -> bool:
        return self._resolver.is_multi_step()
