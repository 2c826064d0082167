# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Configuration exception hierarchy.

Every error raised while resolving or querying run settings derives from
ConfigError and carries the exit code the CLI reports for it.
"""

from desyde.constants import ExitCode


class ConfigError(Exception):
    """Base exception for all configuration errors.

    Attributes:
        message: Main error message
        details: Optional list of additional detail lines
        exit_code: Suggested exit code for this error type (class attribute)
    """

    exit_code: int = ExitCode.USAGE

    def __init__(self, message: str, details: list[str] | None = None):
        self.message = message
        self.details = details or []
        super().__init__(message)

    def format_for_console(self) -> str:
        """Format error message for console output.

        Returns:
            Formatted error message with details
        """
        lines = [f"[red]Error:[/red] {self.message}"]
        if self.details:
            lines.append("")
            for detail in self.details:
                lines.append(f"  • {detail}")
        return "\n".join(lines)


class InvalidFormatError(ConfigError):
    """A token matches no recognized value, or the argument list is malformed."""

    exit_code = ExitCode.DATAERR


class ConfigIOError(ConfigError, OSError):
    """A path cannot be read or written."""

    exit_code = ExitCode.IOERR


class IllegalStateError(ConfigError):
    """An option was set before the setting it depends on.

    Raised, for example, when log levels are set before log paths.
    """

    exit_code = ExitCode.SOFTWARE


class StepRangeError(ConfigError, IndexError):
    """A step-qualified query or advance falls outside the criteria sequence."""

    exit_code = ExitCode.SOFTWARE
