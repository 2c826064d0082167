# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Lookup of the optimization criterion governing each step."""

from desyde.errors import StepRangeError
from desyde.settings.types import OptCriterion


class CriteriaResolver:
    """Answers which criterion governs a step of a (possibly multi-step) run.

    Args:
        criteria: Ordered criteria, one entry per optimization step
    """

    def __init__(self, criteria: tuple[OptCriterion, ...]):
        self._criteria = tuple(criteria)

    def __len__(self) -> int:
        return len(self._criteria)

    @property
    def criteria(self) -> tuple[OptCriterion, ...]:
        return self._criteria

    def has_criterion(self, kind: OptCriterion) -> bool:
        return kind in self._criteria

    def is_multi_step(self) -> bool:
        return len(self._criteria) > 1

    def governing_criterion(self, step: int) -> OptCriterion:
        """Return the criterion optimized at ``step``.

        Raises:
            StepRangeError: If ``step`` is not a valid index into the criteria
        """
        if not 0 <= step < len(self._criteria):
            raise StepRangeError(
                f"Optimization step {step} is out of range",
                details=[f"{len(self._criteria)} criteria configured: "
                         f"{', '.join(c.token for c in self._criteria) or 'none'}"],
            )
        return self._criteria[step]
