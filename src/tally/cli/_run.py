"""tally — wire Store, Dispatcher and View to the terminal and run the loop."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from rich.console import Console

from tally.core.constants import ExitCode

logger = logging.getLogger(__name__)


def cmd_run(config_path: str, log_level: str, console: Console, err_console: Console) -> None:
    """Load config, run the counter UI in the foreground, and exit with its status."""
    from tally.core.config import load_config
    from tally.core.dispatcher import Dispatcher
    from tally.core.exceptions import ConfigError, StatePoisonedError, TerminalError
    from tally.core.logging_setup import configure_logging
    from tally.core.store import Store
    from tally.ui.terminal import KeyboardInput, TerminalSurface, terminal_session
    from tally.ui.view import View

    try:
        config = load_config(Path(config_path) if config_path else None)
    except ConfigError as exc:
        err_console.print(f"[red]Config error:[/red] {exc}")
        sys.exit(ExitCode.CONFIG_ERROR)

    if log_level:
        config.logging.level = log_level.upper()

    try:
        configure_logging(config.logging, config.log_path)
    except OSError as exc:
        err_console.print(f"[red]Cannot open log file[/red] {config.log_path}: {exc}")
        sys.exit(ExitCode.ENV_ERROR)

    if not console.is_terminal:
        err_console.print("[red]Not a terminal:[/red] stdout must be an interactive terminal.")
        sys.exit(ExitCode.ENV_ERROR)

    store = Store()
    dispatcher = Dispatcher(store)

    try:
        with terminal_session() as fd, TerminalSurface(console) as surface:
            view = View(
                surface,
                KeyboardInput(fd),
                dispatcher,
                poll_timeout=config.loop.poll_timeout,
            )
            view.run()
    except TerminalError as exc:
        err_console.print(f"[red]Not a terminal:[/red] {exc}")
        sys.exit(ExitCode.ENV_ERROR)
    except KeyboardInterrupt:
        logger.info("Interrupted")
        sys.exit(ExitCode.INTERRUPTED)
    except (OSError, StatePoisonedError) as exc:
        logger.exception("Event loop failed")
        err_console.print(f"[red]Error:[/red] {exc}")
        sys.exit(ExitCode.ERROR)
