# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

from enum import IntEnum

# ============================================================================
# CLI Names
# ============================================================================

CLI_NAME = "desyde"

# ============================================================================
# Files
# ============================================================================

DEFAULT_LOG_FILE = "out.log"

# ============================================================================
# Exit Codes
# ============================================================================


class ExitCode(IntEnum):
    """Process exit codes (BSD sysexits.h)."""

    SUCCESS = 0
    USAGE = 64
    DATAERR = 65
    SOFTWARE = 70
    IOERR = 74
    INTERRUPTED = 130  # Standard SIGINT exit code
