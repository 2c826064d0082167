# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

import logging
import threading

from desyde.errors import IllegalStateError
from desyde.presolver.results import PresolverResults

logger = logging.getLogger(__name__)


class PresolverBridge:
    """Set-once cell carrying presolver results into the main search.

    One producer writes before the main search starts; any number of search
    workers read afterwards. The stored results are immutable, so reads take
    no lock.
    """

    def __init__(self):
        self._results: PresolverResults | None = None
        self._lock = threading.Lock()

    def set(self, results: PresolverResults) -> None:
        """Store the presolver results.

        Raises:
            IllegalStateError: If results were already stored
            TypeError: If ``results`` is not a PresolverResults
        """
        if not isinstance(results, PresolverResults):
            raise TypeError(f"Expected PresolverResults, got {type(results).__name__}")

        with self._lock:
            if self._results is not None:
                raise IllegalStateError(
                    "Presolver results are already set",
                    details=["Results are handed to the main search exactly once per run"],
                )
            self._results = results

        logger.info(
            "Presolver results stored: %d candidate mapping(s), it_mapping=%d",
            len(results.one_proc_mappings), results.it_mapping,
        )

    def get(self) -> PresolverResults | None:
        return self._results

    def is_presolved(self) -> bool:
        return self._results is not None
