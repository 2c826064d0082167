# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Rendering of resolved settings for reproducibility records.

Two renderings exist: a human-readable table (render_settings) and a YAML
file of option values (write_config_file) that ``--config`` reads back into
an equivalent Settings.
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from rich.console import Console
from rich.table import Table

from desyde.errors import ConfigIOError

if TYPE_CHECKING:
    from desyde._internal.logging import LogSetup
    from desyde.settings.schema import Settings


def _tokens(values) -> list[str]:
    return [v.token for v in values]


def settings_to_options(settings: Settings, log_setup: LogSetup | None = None) -> dict[str, Any]:
    """Express settings as option values keyed by option name.

    The step cursor is runtime state and is not included.
    """
    options: dict[str, Any] = {
        "inputs": [str(p) for p in settings.inputs_paths],
        "output": str(settings.output_path),
        "model": settings.model.token,
        "search": settings.search.token,
        "criteria": _tokens(settings.criteria),
        "timeout": [settings.timeout_first, settings.timeout_all],
        "luby_scale": settings.luby_scale,
        "threads": settings.threads,
        "no_good_depth": settings.no_good_depth,
        "th_prop": settings.th_prop.token,
        "presolver_model": _tokens(settings.pre_models),
        "presolver_heuristic": _tokens(settings.pre_heuristics),
        "presolver_search": settings.pre_search.token,
        "multi_step_search": settings.pre_multi_step_search.token,
        "presolver_timeout": [settings.pre_timeout_first, settings.pre_timeout_all],
        "out_file_type": settings.out_file_type.token,
        "out_print_freq": settings.out_print_freq.token,
        "print_metrics": _tokens(settings.print_metrics),
    }
    if settings.tdn_config_path is not None:
        options["tdn_config"] = str(settings.tdn_config_path)

    if log_setup is not None and log_setup.log_file is not None:
        options["log_file"] = str(log_setup.log_file)
        options["log_level"] = [log_setup.console_level.token, log_setup.file_level.token]

    return options


def render_settings(settings: Settings, log_setup: LogSetup | None = None) -> str:
    """Render settings as a plain-text table."""
    table = Table(title="DeSyDe Settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    def _fmt(value: Any) -> str:
        if isinstance(value, list):
            return ", ".join(str(v) for v in value) if value else "-"
        return str(value)

    options = settings_to_options(settings, log_setup)

    table.add_row("Paths", "")
    for name in ("inputs", "output", "log_file", "tdn_config"):
        if name in options:
            table.add_row(f"  {name}", _fmt(options[name]))

    table.add_row("Main search", "")
    for name in ("model", "search", "criteria", "timeout", "luby_scale",
                 "threads", "no_good_depth", "th_prop"):
        table.add_row(f"  {name}", _fmt(options[name]))
    table.add_row("  optimization_step", str(settings.optimization_step))

    table.add_row("Presolver", "")
    for name in ("presolver_model", "presolver_heuristic", "presolver_search",
                 "multi_step_search", "presolver_timeout"):
        table.add_row(f"  {name}", _fmt(options[name]))

    table.add_row("Output", "")
    for name in ("out_file_type", "out_print_freq", "print_metrics", "log_level"):
        if name in options:
            table.add_row(f"  {name}", _fmt(options[name]))
    table.add_row("  config_tdn", str(settings.config_tdn))

    buffer = io.StringIO()
    console = Console(file=buffer, width=100, no_color=True, force_terminal=False)
    console.print(table)
    return buffer.getvalue()


def write_config_file(
    settings: Settings, path: Path | str, log_setup: LogSetup | None = None
) -> Path:
    """Write settings as a YAML options file.

    Raises:
        ConfigIOError: If the file cannot be written
    """
    path = Path(path)
    options = settings_to_options(settings, log_setup)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            f.write("# DeSyDe run options, readable with --config\n")
            yaml.safe_dump(options, f, default_flow_style=False, sort_keys=False)
    except OSError as e:
        raise ConfigIOError(f"Cannot write config file {path}: {e.strerror or e}") from e
    return path
