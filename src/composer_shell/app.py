from __future__ import annotations

import asyncio
import logging
import sys

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import NestedCompleter
from prompt_toolkit.history import FileHistory

from composer.utils.loop_runner import ensure_background_loop
from composer_shell.core.command_registry import COMMAND_HIERARCHY, register_all_commands
from composer_shell.core.context.shell_context import ShellContext
from composer_shell.core.core import execute_sequence, parse_command_line
from composer_shell.core.managers.config_manager import config_manager
from composer_shell.core.utils.configure_logging import configure_logger
from composer_shell.core.utils.path_utils import PathUtils
from composer_shell.core.xngine import QUIT_CODE

configure_logger(
    config_manager.get_nested("debug.level", "INFO"),
    module_specific_levels=config_manager.get_nested("debug.module_levels"),
    silenced_loggers=config_manager.get_nested("debug.silenced_loggers"),
)
logger = logging.getLogger(__name__)


def _setup_windows_event_loop_if_needed() -> None:
    """Installs the Windows selector policy when running on Windows."""
    if not sys.platform.startswith("win"):
        return
    try:
        asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())
        logger.info("Using WindowsSelectorEventLoopPolicy for asyncio on Windows.")
    except Exception as exc:  # pragma: no cover
        logger.warning("Could not set WindowsSelectorEventLoopPolicy: %s", exc)


def _bootstrap() -> ShellContext:
    _setup_windows_event_loop_if_needed()
    register_all_commands()
    ensure_background_loop()
    logger.debug("Background asyncio event loop is running.")
    return ShellContext()


def start_shell() -> None:
    """Starts the interactive REPL of the Composer shell."""
    ctx = _bootstrap()
    print("Welcome to Composer Shell 1.0 (type 'help' for commands)")

    history_path = PathUtils.get_shell_history_file()
    session = PromptSession(
        history=FileHistory(str(history_path)),
        completer=NestedCompleter.from_nested_dict(COMMAND_HIERARCHY),
        complete_while_typing=True,
    )
    ctx.prompt_session = session
    logger.info("Shell startup; history file at: %s", history_path)

    try:
        while True:
            try:
                line = session.prompt("Composer>> ").strip()
            except (EOFError, KeyboardInterrupt):
                break

            commands = parse_command_line(line)
            if not commands:
                continue

            if execute_sequence(commands, ctx) == QUIT_CODE:
                break
    finally:
        print("Bye!")


def main(argv: list[str] | None = None) -> int:
    """
    Entrypoint. With arguments, runs them as one command line and exits with
    its exit code; without, starts the interactive shell.
    """
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        start_shell()
        return 0

    ctx = _bootstrap()
    name, *args = argv
    code = execute_sequence([(name, args, None)], ctx)
    return 0 if code == QUIT_CODE else code


if __name__ == "__main__":
    sys.exit(main())
