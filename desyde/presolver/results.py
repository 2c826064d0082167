# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

from __future__ import annotations

import operator
from dataclasses import dataclass, field
from datetime import timedelta
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from desyde.presolver.handoff import MappingHandoff


@dataclass(frozen=True)
class SolutionValues:
    """One result snapshot of a solver run.

    Attributes:
        time: Elapsed time when the solution was found
        values: Objective values of the solution, in criteria order
    """

    time: timedelta
    values: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(operator.index(v) for v in self.values))


@dataclass(frozen=True)
class MappingCombination:
    """A candidate assignment of tasks to processors.

    Attributes:
        key: Label the presolver attaches to the combination
        assignments: Ordered (task, processor) pairs
    """

    key: int
    assignments: tuple[tuple[int, int], ...]

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "assignments",
            tuple(
                (operator.index(task), operator.index(proc)) for task, proc in self.assignments
            ),
        )

    def __len__(self) -> int:
        return len(self.assignments)


def _as_combination(position: int, candidate) -> MappingCombination:
    """Accept a combination, or a plain sequence of (task, processor) pairs keyed by position."""
    if isinstance(candidate, MappingCombination):
        return candidate
    try:
        return MappingCombination(key=position, assignments=candidate)
    except (TypeError, ValueError) as e:
        raise TypeError(
            f"Mapping combination {position} must be a sequence of (task, processor) pairs, "
            f"got {candidate!r}"
        ) from e


@dataclass(frozen=True)
class PresolverResults:
    """Output of the presolver phase, handed once to the main search.

    Attributes:
        it_mapping: Selects the hand-off mode. Below the number of candidate
            combinations it indexes the combination to enforce; at or above
            it, every combination is forbidden.
        one_proc_mappings: Candidate mapping combinations
        opt_results: Full optimization trace of the presolver
        print_results: Snapshots kept for reporting
        presolver_delay: Total presolving time
    """

    it_mapping: int
    one_proc_mappings: tuple[MappingCombination, ...] = ()
    opt_results: tuple[SolutionValues, ...] = ()
    print_results: tuple[SolutionValues, ...] = ()
    presolver_delay: timedelta = field(default_factory=timedelta)

    def __post_init__(self) -> None:
        if self.it_mapping < 0:
            raise ValueError(f"it_mapping must be non-negative, got {self.it_mapping}")

        object.__setattr__(
            self,
            "one_proc_mappings",
            tuple(_as_combination(i, c) for i, c in enumerate(self.one_proc_mappings)),
        )
        object.__setattr__(self, "opt_results", tuple(self.opt_results))
        object.__setattr__(self, "print_results", tuple(self.print_results))

    def handoff(self) -> MappingHandoff:
        """Decide how the main search uses the candidate combinations."""
        from desyde.presolver.handoff import MappingHandoff

        return MappingHandoff.from_results(self)
