# src/composer_shell/core/context/shell_context.py
import logging
from typing import Any, Optional

from composer.controllers.convert_controller import ConversionSession

logger = logging.getLogger(__name__)


class ShellContext:
    """
    Session variables and core state of the shell, including the conversion
    session that keeps the last successful result.
    """

    def __init__(self):
        self._vars = {}
        self.session = ConversionSession()
        self.prompt_session: Optional[Any] = None

    def set(self, key: str, value: str) -> None:
        """Sets a context variable."""
        self._vars[key] = value

    def get(self, key: str) -> Optional[str]:
        """Retrieves a context variable. Returns None if key does not exist."""
        return self._vars.get(key)

    def __repr__(self) -> str:
        return f"<ShellContext has_result={self.session.has_result()} vars_count={len(self._vars)}>"
