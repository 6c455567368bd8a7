# src/composer_shell/core/utils/path_utils.py
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class PathUtils:
    """
    A central utility for reliably retrieving important package and user paths.
    """

    # --- Package specific paths

    @staticmethod
    def get_shell_package_root() -> Path:
        return Path(__file__).resolve().parents[2]

    @staticmethod
    def get_settings_file() -> Path:
        return PathUtils.get_shell_package_root() / "settings.json"

    @staticmethod
    def get_handlers_dir() -> Path:
        return PathUtils.get_shell_package_root() / "core" / "handlers"

    # --- User specific paths ---

    @staticmethod
    def get_shell_history_file() -> Path:
        """
        Returns the path to the shell history file in the user's home directory.
        (e.g., ~/.composer_shell_history)
        """
        return Path.home() / ".composer_shell_history"

    @staticmethod
    def get_user_documents_dir() -> Path:
        """
        Returns the absolute path to the current user's Documents directory.
        """
        return Path.home() / "Documents"

    # --- Helper methods ---

    @staticmethod
    def get_export_dir(configured: Optional[str] = None) -> Path:
        """
        Directory conversions are written to: the configured directory when
        set, otherwise Documents/composer_exports. Created if missing.
        """
        path = Path(configured).expanduser() if configured else PathUtils.get_user_documents_dir() / "composer_exports"
        path.mkdir(parents=True, exist_ok=True)
        return path

    @staticmethod
    def resolve_output_path(output: str) -> Path:
        """Absolute paths are kept; relative paths land in the export directory."""
        path = Path(output).expanduser()
        if path.is_absolute():
            return path
        return PathUtils.get_export_dir() / path
