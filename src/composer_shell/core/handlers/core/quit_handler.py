# src/composer_shell/core/handlers/core/quit_handler.py
from composer_shell.core.context.shell_context import ShellContext
from composer_shell.core.xngine import QUIT_CODE


def handle_quit(_args, _ctx: ShellContext, _stdin=None) -> int:
    """Signals the shell to stop."""
    return QUIT_CODE
