# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Option domains for DeSyDe runs.

Each domain is a closed enum whose values are the tokens accepted on the
command line and in configuration files.
"""

from __future__ import annotations

import logging
from enum import Enum

from desyde.errors import InvalidFormatError


class _TokenEnum(Enum):
    """Enum resolved from a user-supplied token."""

    @classmethod
    def from_token(cls, token: str):
        """Resolve a token to an enum member.

        Matching ignores case and surrounding whitespace.

        Raises:
            InvalidFormatError: If the token names no member of this domain
        """
        normalized = str(token).strip().lower()
        for member in cls:
            if member.value == normalized:
                return member

        valid = ", ".join(m.value for m in cls)
        domain = _DOMAIN_NAMES.get(cls.__name__, "option")
        raise InvalidFormatError(
            f"Invalid {domain} '{token}'",
            details=[f"Must be one of: {valid}"],
        )

    @classmethod
    def from_tokens(cls, tokens) -> tuple:
        return tuple(cls.from_token(t) for t in tokens)

    @property
    def token(self) -> str:
        return self.value


class CPModel(_TokenEnum):
    """Constraint model used by the main search."""

    NONE = "none"
    SDF = "single-rate"
    SDF_PR_ONLINE = "single-rate-with-online-presolve"


class SearchType(_TokenEnum):
    """Search strategies of the solver.

    Attributes:
        NONE: Build the model but do not search
        FIRST: Stop at the first solution
        ALL: Enumerate all solutions
        OPTIMIZE: Branch-and-bound on the governing criterion
        OPTIMIZE_IT: Iterative optimization with restarts
        GIST_ALL: Interactive search tree, all solutions
        GIST_OPT: Interactive search tree, optimization
    """

    NONE = "none"
    FIRST = "first"
    ALL = "all"
    OPTIMIZE = "optimize"
    OPTIMIZE_IT = "optimize-iterative"
    GIST_ALL = "gist-all"
    GIST_OPT = "gist-optimal"


class OptCriterion(_TokenEnum):
    NONE = "none"
    POWER = "power"
    THROUGHPUT = "throughput"
    LATENCY = "latency"


class PresolverModel(_TokenEnum):
    NO_PRE = "no-presolve"
    ONE_PROC_MAPPINGS = "one-processor-mappings"


class MultiStepHeuristic(_TokenEnum):
    NO_HEURISTIC = "no-heuristic"
    STAGED = "staged-heuristic"


class ThroughputPropagator(_TokenEnum):
    """Algorithm used to bound throughput during search.

    Attributes:
        SSE: Single-step estimate
        MCR: Maximum cycle ratio
    """

    SSE = "single-step-estimate"
    MCR = "max-cycle-ratio"


class OutputFileType(_TokenEnum):
    ALL_OUT = "all"
    TXT = "text"
    CSV = "csv"
    CSV_MOST = "csv-most"
    XML = "xml"


class OutputPrintFrequency(_TokenEnum):
    ALL_SOL = "all-solutions"
    LAST = "last"
    EVERY_N = "every-n"
    FIRST_AND_LAST = "first-and-last"


class LogLevel(_TokenEnum):
    """Verbosity of the console and file log."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    def to_logging_level(self) -> int:
        return {
            LogLevel.DEBUG: logging.DEBUG,
            LogLevel.INFO: logging.INFO,
            LogLevel.WARNING: logging.WARNING,
            LogLevel.ERROR: logging.ERROR,
        }[self]


# Domain names used in error messages
_DOMAIN_NAMES = {
    "CPModel": "model",
    "SearchType": "search type",
    "OptCriterion": "optimization criterion",
    "PresolverModel": "presolver model",
    "MultiStepHeuristic": "presolver heuristic",
    "ThroughputPropagator": "throughput propagator",
    "OutputFileType": "output file type",
    "OutputPrintFrequency": "output print frequency",
    "LogLevel": "log level",
}
