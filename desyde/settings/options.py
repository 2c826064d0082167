# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Resolution of command-line tokens into Settings.

Option values come from three sources, highest priority first:

1. Command-line tokens
2. The YAML file named by ``--config``
3. Built-in defaults (Field defaults of Settings)

Relative paths resolve against where they are specified: command-line paths
against the current working directory, config-file paths against the
directory of the config file.

Resolution is free of side effects on the caller's state. Apart from creating
the output directory, nothing is touched until every option has been
validated, so a rejected token leaves an existing configuration unchanged.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import click
import yaml
from pydantic import ValidationError

from desyde._internal.logging import LogSetup
from desyde.constants import CLI_NAME, DEFAULT_LOG_FILE
from desyde.errors import ConfigIOError, InvalidFormatError
from desyde.settings.schema import Settings
from desyde.settings.types import (
    CPModel,
    MultiStepHeuristic,
    OptCriterion,
    OutputFileType,
    OutputPrintFrequency,
    PresolverModel,
    SearchType,
    ThroughputPropagator,
)

logger = logging.getLogger(__name__)

# Options taking several values (repeat the flag, or use a list in YAML)
MULTI_VALUE_OPTIONS = frozenset({
    "inputs",
    "log_level",
    "criteria",
    "timeout",
    "presolver_model",
    "presolver_heuristic",
    "presolver_timeout",
    "print_metrics",
})

INT_OPTIONS = {
    # name: minimum
    "luby_scale": 0,
    "threads": 1,
    "no_good_depth": 0,
    "timeout": 0,
    "presolver_timeout": 0,
}

# Options that only exist on the command line
_CLI_ONLY_OPTIONS = frozenset({"config", "dump_config"})


def build_command() -> click.Command:
    """Build the click command describing every run option."""
    params = [
        click.Option(["-c", "--config"], help="YAML file with option values"),
        click.Option(["-i", "--inputs"], multiple=True, help="Input path (repeatable)"),
        click.Option(["-o", "--output"], help="Output directory"),
        click.Option(["--log-file"], help=f"Log file [default: OUTPUT/{DEFAULT_LOG_FILE}]"),
        click.Option(
            ["--log-level"], multiple=True, metavar="LEVEL",
            help="Log level: debug|info|warning|error. Give twice for console, then file",
        ),
        click.Option(["--tdn-config"], help="Timing-driven network configuration file"),
        click.Option(["--model"], help="CP model"),
        click.Option(["--search"], help="Main search type"),
        click.Option(
            ["--criteria"], multiple=True,
            help="Optimization criterion of each step (repeatable)",
        ),
        click.Option(
            ["--timeout"], multiple=True, type=click.INT,
            help="Main search timeouts in ms: FIRST [ALL]",
        ),
        click.Option(["--luby-scale"], type=click.INT, help="Luby restart scale"),
        click.Option(["--threads"], type=click.INT, help="Number of solver threads"),
        click.Option(["--no-good-depth"], type=click.INT, help="No-good recording depth"),
        click.Option(["--th-prop"], help="Throughput propagator"),
        click.Option(["--presolver-model"], multiple=True, help="Presolver model (repeatable)"),
        click.Option(
            ["--presolver-heuristic"], multiple=True, help="Presolver heuristic (repeatable)"
        ),
        click.Option(["--presolver-search"], help="Presolver search type"),
        click.Option(["--multi-step-search"], help="Search type of multi-step presolving"),
        click.Option(
            ["--presolver-timeout"], multiple=True, type=click.INT,
            help="Presolver timeouts in ms: FIRST [ALL]",
        ),
        click.Option(["--out-file-type"], help="Output file type"),
        click.Option(["--out-print-freq"], help="Output print frequency"),
        click.Option(["--print-metrics"], multiple=True, help="Metric to print (repeatable)"),
        click.Option(["--dump-config"], help="Write the resolved options to this YAML file"),
    ]
    return click.Command(
        CLI_NAME,
        params=params,
        context_settings={"help_option_names": ["-h", "--help"]},
        help="Design space exploration of dataflow applications on MPSoC platforms.",
    )


def parse_tokens(tokens: list[str]) -> dict[str, Any] | None:
    """Parse command-line tokens into raw option values.

    Returns:
        Mapping of option name to value, or None if help was requested

    Raises:
        InvalidFormatError: If the tokens are malformed
    """
    command = build_command()
    try:
        ctx = command.make_context(CLI_NAME, list(tokens))
    except click.exceptions.Exit:
        return None
    except click.ClickException as e:
        raise InvalidFormatError(e.format_message()) from e

    return dict(ctx.params)


def load_config_file(path: Path) -> dict[str, Any]:
    """Load option values from a YAML config file.

    Raises:
        ConfigIOError: If the file cannot be read
        InvalidFormatError: If the file is not a valid option mapping
    """
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigIOError(f"Cannot read config file {path}: {e.strerror or e}") from e
    except yaml.YAMLError as e:
        if hasattr(e, "problem_mark"):
            mark = e.problem_mark
            location = f"line {mark.line + 1}, column {mark.column + 1}"
        else:
            location = "unknown location"
        raise InvalidFormatError(
            f"Invalid YAML in config file: {path}",
            details=[f"Error at {location}: {getattr(e, 'problem', None) or e}"],
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidFormatError(f"Config file {path} must contain a mapping of options")

    known = set(build_command_param_names()) - _CLI_ONLY_OPTIONS
    unknown = sorted(str(k) for k in data if k not in known)
    if unknown:
        raise InvalidFormatError(
            f"Unknown option(s) in config file {path}: {', '.join(unknown)}",
            details=[f"Known options: {', '.join(sorted(known))}"],
        )

    return data


def build_command_param_names() -> list[str]:
    return [p.name for p in build_command().params if p.name != "help"]


def _is_unset(value: Any) -> bool:
    return value is None or value == () or value == []


def _as_list(name: str, value: Any) -> list:
    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, dict):
        raise InvalidFormatError(f"Option '{name}' expects a value or a list, got a mapping")
    return [value]


def _resolve_path(value: Any, base_dir: Path) -> Path:
    path = Path(os.path.expanduser(str(value)))
    return path if path.is_absolute() else (base_dir / path).resolve()


def merge_options(
    cli_values: dict[str, Any],
    file_values: dict[str, Any] | None = None,
    file_dir: Path | None = None,
) -> dict[str, Any]:
    """Merge command-line and config-file values.

    Command-line values win. Path options are made absolute relative to their
    source. Multi-value options are returned as lists.
    """
    cwd = Path.cwd()
    file_values = file_values or {}
    file_dir = file_dir or cwd
    path_options = {"inputs", "output", "log_file", "tdn_config"}

    merged: dict[str, Any] = {}
    for name in set(cli_values) | set(file_values):
        if name in _CLI_ONLY_OPTIONS:
            continue

        cli_value = cli_values.get(name)
        if not _is_unset(cli_value):
            value, base = cli_value, cwd
        elif not _is_unset(file_values.get(name)):
            value, base = file_values[name], file_dir
        else:
            continue

        if name in MULTI_VALUE_OPTIONS:
            value = _as_list(name, value)
        elif isinstance(value, (list, tuple, dict)):
            raise InvalidFormatError(f"Option '{name}' expects a single value")

        if name in path_options:
            value = [_resolve_path(v, base) for v in value] if name == "inputs" \
                else _resolve_path(value, base)

        merged[name] = value

    return merged


def _to_int(name: str, value: Any) -> int:
    minimum = INT_OPTIONS[name]
    if isinstance(value, bool):
        raise InvalidFormatError(f"Option '{name}' expects an integer, got {value!r}")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise InvalidFormatError(f"Option '{name}' expects an integer, got {value!r}")
    if number != value and not isinstance(value, str):
        raise InvalidFormatError(f"Option '{name}' expects an integer, got {value!r}")
    if number < minimum:
        raise InvalidFormatError(f"Option '{name}' must be at least {minimum}, got {number}")
    return number


def split_timeouts(name: str, values: list) -> tuple[int, int]:
    """Split a timeout list into (first-solution, all-solutions) timeouts.

    One value applies to both phases.

    Raises:
        InvalidFormatError: If more than two values are given
    """
    timeouts = [_to_int(name, v) for v in values]
    if not timeouts:
        return 0, 0
    if len(timeouts) == 1:
        return timeouts[0], timeouts[0]
    if len(timeouts) == 2:
        return timeouts[0], timeouts[1]
    raise InvalidFormatError(
        f"Option '{name}' takes one or two values, got {len(timeouts)}",
        details=["Usage: FIRST [ALL] in milliseconds"],
    )


def resolve_enum_options(raw: dict[str, Any]) -> dict[str, Any]:
    """Translate enumerated and integer options to Settings fields.

    Pure: touches no files.
    """
    fields: dict[str, Any] = {}

    scalar_enums = {
        "model": ("model", CPModel),
        "search": ("search", SearchType),
        "presolver_search": ("pre_search", SearchType),
        "multi_step_search": ("pre_multi_step_search", SearchType),
        "th_prop": ("th_prop", ThroughputPropagator),
        "out_file_type": ("out_file_type", OutputFileType),
        "out_print_freq": ("out_print_freq", OutputPrintFrequency),
    }
    for option, (field_name, enum_cls) in scalar_enums.items():
        if option in raw:
            fields[field_name] = enum_cls.from_token(raw[option])

    list_enums = {
        "criteria": ("criteria", OptCriterion),
        "presolver_model": ("pre_models", PresolverModel),
        "presolver_heuristic": ("pre_heuristics", MultiStepHeuristic),
        "print_metrics": ("print_metrics", OptCriterion),
    }
    for option, (field_name, enum_cls) in list_enums.items():
        if option in raw:
            fields[field_name] = enum_cls.from_tokens(raw[option])

    for option in ("luby_scale", "threads", "no_good_depth"):
        if option in raw:
            fields[option] = _to_int(option, raw[option])

    if "timeout" in raw:
        fields["timeout_first"], fields["timeout_all"] = split_timeouts(
            "timeout", raw["timeout"]
        )
    if "presolver_timeout" in raw:
        fields["pre_timeout_first"], fields["pre_timeout_all"] = split_timeouts(
            "presolver_timeout", raw["presolver_timeout"]
        )

    return fields


def check_input_paths(paths: list[Path]) -> tuple[Path, ...]:
    """Check that every input path exists and is readable.

    Raises:
        ConfigIOError: If no path is given or a path is missing or unreadable
    """
    if not paths:
        raise ConfigIOError("No input paths given", details=["Use --inputs PATH"])

    for path in paths:
        if not path.exists():
            raise ConfigIOError(f"Input path does not exist: {path}")
        if not os.access(path, os.R_OK):
            raise ConfigIOError(f"Input path is not readable: {path}")
    return tuple(paths)


def prepare_output_path(path: Path | None) -> Path:
    """Create the output directory if needed and check it is writable.

    Raises:
        ConfigIOError: If the directory cannot be created or written
    """
    if path is None:
        raise ConfigIOError("No output path given", details=["Use --output DIR"])

    if path.exists() and not path.is_dir():
        raise ConfigIOError(f"Output path is not a directory: {path}")
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigIOError(f"Cannot create output directory {path}: {e.strerror or e}") from e
    if not os.access(path, os.W_OK):
        raise ConfigIOError(f"Output directory is not writable: {path}")
    return path


def check_tdn_config(path: Path) -> Path:
    if not path.is_file():
        raise ConfigIOError(f"TDN configuration file does not exist: {path}")
    return path


@dataclass
class Resolution:
    """Outcome of resolving a token list."""

    settings: Settings
    log_setup: LogSetup
    dump_path: Path | None = None


def resolve(tokens: list[str]) -> Resolution | None:
    """Resolve command-line tokens into Settings.

    Returns:
        The resolution, or None if help was requested

    Raises:
        InvalidFormatError: Malformed tokens or unknown enum values
        ConfigIOError: Unusable input, output, log, or config paths
        IllegalStateError: Options applied out of order
    """
    cli_values = parse_tokens(tokens)
    if cli_values is None:
        return None

    file_values, file_dir = {}, None
    if cli_values.get("config"):
        config_path = _resolve_path(cli_values["config"], Path.cwd())
        file_values = load_config_file(config_path)
        file_dir = config_path.parent
        logger.debug("Loaded options from %s", config_path)

    raw = merge_options(cli_values, file_values, file_dir)
    fields = resolve_enum_options(raw)

    fields["inputs_paths"] = check_input_paths(raw.get("inputs", []))
    fields["output_path"] = prepare_output_path(raw.get("output"))
    if "tdn_config" in raw:
        fields["tdn_config_path"] = check_tdn_config(raw["tdn_config"])
        fields["config_tdn"] = True

    log_setup = LogSetup()
    log_setup.set_log_paths(raw.get("log_file", fields["output_path"] / DEFAULT_LOG_FILE))
    log_setup.set_log_levels(raw.get("log_level", []))

    try:
        settings = Settings(**fields)
    except ValidationError as e:
        details = [
            f"{'.'.join(str(x) for x in err['loc'])}: {err['msg']}" for err in e.errors()
        ]
        raise InvalidFormatError("Configuration validation failed", details=details) from e

    dump_path = None
    if cli_values.get("dump_config"):
        dump_path = _resolve_path(cli_values["dump_config"], Path.cwd())

    return Resolution(settings=settings, log_setup=log_setup, dump_path=dump_path)
