# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Conversion of presolver results into constraints for the main search.

The presolver communicates through one index and one sequence of candidate
combinations. With ``n`` candidates:

* ``it_mapping < n``: the combination at ``it_mapping`` is enforced, each of
  its (task, processor) pairs becomes an equality constraint.
* ``it_mapping >= n``: no combination is trusted, and every candidate's exact
  assignment set is forbidden.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from desyde.presolver.results import MappingCombination, PresolverResults

logger = logging.getLogger(__name__)


class HandoffMode(Enum):
    ENFORCE = "enforce"
    FORBID_ALL = "forbid-all"


@dataclass(frozen=True)
class MappingConstraint:
    """Equality constraint binding a task to a processor."""

    task: int
    processor: int


@dataclass(frozen=True)
class ForbiddenAssignment:
    """Exclusion of one exact assignment set.

    A solution violates it only if every (task, processor) pair holds.
    """

    assignments: tuple[tuple[int, int], ...]


@dataclass(frozen=True)
class MappingHandoff:
    """Hand-off decision derived from PresolverResults.

    Attributes:
        mode: Whether a combination is enforced or all are forbidden
        enforced: The enforced combination (ENFORCE only)
        forbidden: Combinations to exclude (FORBID_ALL only)
    """

    mode: HandoffMode
    enforced: MappingCombination | None = None
    forbidden: tuple[MappingCombination, ...] = ()

    @classmethod
    def from_results(cls, results: PresolverResults) -> MappingHandoff:
        candidates = results.one_proc_mappings
        if results.it_mapping < len(candidates):
            logger.debug(
                "Enforcing presolver mapping %d of %d", results.it_mapping, len(candidates)
            )
            return cls(mode=HandoffMode.ENFORCE, enforced=candidates[results.it_mapping])

        logger.debug("Forbidding all %d presolver mappings", len(candidates))
        return cls(mode=HandoffMode.FORBID_ALL, forbidden=candidates)

    @property
    def is_enforcing(self) -> bool:
        return self.mode is HandoffMode.ENFORCE

    def constraints(self) -> Iterator[MappingConstraint | ForbiddenAssignment]:
        """Yield the constraints the main search model must add."""
        if self.mode is HandoffMode.ENFORCE:
            for task, processor in self.enforced.assignments:
                yield MappingConstraint(task=task, processor=processor)
        elif self.mode is HandoffMode.FORBID_ALL:
            for combination in self.forbidden:
                yield ForbiddenAssignment(assignments=combination.assignments)
        else:
            raise ValueError(f"Unknown hand-off mode: {self.mode}")
