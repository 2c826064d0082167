# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

import logging
import sys

from rich.console import Console

from desyde.constants import CLI_NAME, ExitCode
from desyde.errors import ConfigError
from desyde.settings import Config

logger = logging.getLogger(__name__)

console = Console()


def run(argv: list[str]) -> int:
    """Resolve the run configuration and report it.

    Returns:
        Process exit code
    """
    config = Config()
    if config.parse(argv) != 0:
        # Help was printed, nothing to configure
        return ExitCode.SUCCESS

    console.print(config.print_settings(), markup=False, highlight=False)

    settings = config.settings
    if config.do_multi_step():
        steps = " -> ".join(c.token for c in settings.criteria)
        logger.info("Multi-step optimization: %s", steps)
    elif config.do_optimize():
        logger.info("Optimizing %s", settings.criteria[0].token)
    else:
        logger.info("No optimization criterion, search type %s", config.get_search_type())

    if config.do_presolve():
        logger.info(
            "Presolving with %s", ", ".join(m.token for m in settings.pre_models)
        )
    return ExitCode.SUCCESS


def main() -> None:
    """Console entry point with consistent error handling."""
    try:
        sys.exit(run(sys.argv[1:]))
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(ExitCode.INTERRUPTED)
    except ConfigError as e:
        console.print(e.format_for_console())
        sys.exit(e.exit_code)
    except Exception as e:
        console.print(f"[red]Unexpected error:[/red] {e}")
        logging.exception(f"Unexpected error in {CLI_NAME} CLI")
        sys.exit(ExitCode.SOFTWARE)


if __name__ == "__main__":
    main()
