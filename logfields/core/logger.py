"""logfields Logger - Cross-platform, self-cleaning logging utility."""

import logging
import platform
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from logfields.core.config import internal_settings, settings


class FieldsLogger:
    """
    Logging utility for the field registry.

    Features:
    - Console output on stdout
    - Optional size-rotated log file in a cross-platform directory
    """

    def __init__(self, name: str = "logfields"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(settings.log_level.upper())
        self._setup_handlers()

    def _get_log_dir(self) -> Path:
        """Cross-platform log directory discovery."""
        if settings.log_dir is not None:
            log_dir = settings.log_dir
        elif platform.system() == "Windows":
            # Windows: %LOCALAPPDATA%\logfields\logs
            log_dir = Path.home() / "AppData/Local/logfields/logs"
        else:
            # Linux/macOS: XDG state directory
            log_dir = Path.home() / ".local/state/logfields/logs"

        log_dir.mkdir(parents=True, exist_ok=True)
        return log_dir

    def _setup_handlers(self):
        """Set up console and, when enabled, rotating file handlers."""
        # Prevent double logging if handlers already exist
        if self.logger.handlers:
            return

        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        self.logger.addHandler(console_handler)

        if not settings.log_to_file:
            return

        try:
            log_file = self._get_log_dir() / "logfields.log"
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=internal_settings["logging"]["max_bytes"],
                backupCount=internal_settings["logging"]["backup_count"],
                encoding="utf-8",
            )
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)
        except OSError as e:
            # Keep the host application running on console logging
            self.logger.warning(f"Could not set up file logging: {e}")
            self.logger.info("Continuing with console logging only")


# Global instance
logger = FieldsLogger().logger
