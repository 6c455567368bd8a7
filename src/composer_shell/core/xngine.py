# src/composer_shell/core/xngine.py
from __future__ import annotations

import inspect
import logging
from typing import Callable, Dict, List, Optional, Tuple

from composer_shell.core.context.shell_context import ShellContext

QUIT_CODE = 130
NOT_FOUND_CODE = 127


class ExecuteEngine:
    """
    Runs parsed command sequences against the command registry, honouring
    the ';', '&&' and '||' operators.
    """

    def __init__(
            self,
            *,
            command_registry: Dict[str, Callable[..., int]],
            logger: Optional[logging.Logger] = None,
    ) -> None:
        self._commands = command_registry
        self._log = logger or logging.getLogger(__name__)

    def execute_sequence(
            self,
            commands: List[Tuple[str, List[str], Optional[str]]],
            context: Optional[ShellContext] = None,
    ) -> int:
        ctx = context or ShellContext()
        last_exit = 0

        for name, args, op in commands:
            if op == "&&" and last_exit != 0:
                continue
            if op == "||" and last_exit == 0:
                continue

            handler = self._commands.get(name)
            if handler is None:
                print(f"command not found: {name}")
                last_exit = NOT_FOUND_CODE
                continue

            try:
                last_exit = self._call_handler(handler, args, ctx)
            except Exception as e:
                self._log.error("Command '%s' failed: %s", name, e, exc_info=True)
                print(f"❌ {name}: {e}")
                last_exit = 1

            if last_exit == QUIT_CODE:
                return QUIT_CODE

        return last_exit

    @staticmethod
    def _call_handler(handler, args, ctx) -> int:
        if len(inspect.signature(handler).parameters) >= 3:
            return int(handler(args, ctx, None))
        return int(handler(args, ctx))
