# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Logging configuration using Python's standard logging with Rich.

Console output goes through a RichHandler, and every run also writes a log
file in its output directory. Log paths must be established before log
levels are set.

Usage:
    from desyde._internal.logging import LogSetup

    log_setup = LogSetup()
    log_setup.set_log_paths(output_dir / "out.log")
    log_setup.set_log_levels([LogLevel.INFO, LogLevel.DEBUG])
    log_setup.apply()

    # In application code
    import logging
    logger = logging.getLogger(__name__)
    logger.info("Processing...")
"""

import logging
import os
from pathlib import Path

from desyde.errors import ConfigIOError, IllegalStateError, InvalidFormatError
from desyde.settings.types import LogLevel

LOGGER_NAME = "desyde"

# Marks handlers installed here so repeated setup replaces them
_HANDLER_MARK = "_desyde_handler"


def setup_logging(
    console_level: int = logging.WARNING,
    log_file: Path | None = None,
    file_level: int = logging.DEBUG,
) -> None:
    """Attach console and file handlers to the ``desyde`` logger.

    Calling again replaces the handlers of the previous call.

    Raises:
        ConfigIOError: If the log file cannot be opened
    """
    from rich.logging import RichHandler

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_MARK, False):
            logger.removeHandler(handler)
            handler.close()

    console = RichHandler(
        rich_tracebacks=(console_level == logging.DEBUG),
        show_path=False,
        markup=True,
        show_time=False,
    )
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    setattr(console, _HANDLER_MARK, True)
    logger.addHandler(console)

    levels = [console_level]
    if log_file is not None:
        try:
            file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        except OSError as e:
            raise ConfigIOError(f"Cannot open log file {log_file}: {e.strerror or e}") from e
        file_handler.setLevel(file_level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s")
        )
        setattr(file_handler, _HANDLER_MARK, True)
        logger.addHandler(file_handler)
        levels.append(file_level)

    logger.setLevel(min(levels))


class LogSetup:
    """Staged logging configuration: paths first, then levels."""

    def __init__(self):
        self.log_file: Path | None = None
        self.console_level = LogLevel.WARNING
        self.file_level = LogLevel.DEBUG

    def set_log_paths(self, log_file: Path | str) -> None:
        """Establish the log file location.

        The parent directory is created if missing.

        Raises:
            ConfigIOError: If the directory cannot be created or written
        """
        path = Path(log_file)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigIOError(
                f"Cannot create log directory {path.parent}: {e.strerror or e}"
            ) from e

        if path.is_dir():
            raise ConfigIOError(f"Log path {path} is a directory")
        if not os.access(path.parent, os.W_OK):
            raise ConfigIOError(f"Log directory {path.parent} is not writable")

        self.log_file = path

    def set_log_levels(self, levels) -> None:
        """Set console and file verbosity.

        One level applies to both; two levels are console then file.

        Raises:
            IllegalStateError: If log paths have not been set
            InvalidFormatError: If a level is unknown or more than two are given
        """
        if self.log_file is None:
            raise IllegalStateError(
                "Log levels set before log paths",
                details=["Call set_log_paths() first"],
            )

        resolved = [
            lvl if isinstance(lvl, LogLevel) else LogLevel.from_token(lvl) for lvl in levels
        ]
        if len(resolved) == 1:
            self.console_level = self.file_level = resolved[0]
        elif len(resolved) == 2:
            self.console_level, self.file_level = resolved
        elif resolved:
            raise InvalidFormatError(
                f"Expected one or two log levels, got {len(resolved)}",
                details=["Usage: --log-level CONSOLE [--log-level FILE]"],
            )

    def apply(self) -> None:
        setup_logging(
            console_level=self.console_level.to_logging_level(),
            log_file=self.log_file,
            file_level=self.file_level.to_logging_level(),
        )
