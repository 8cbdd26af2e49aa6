"""Linux-native logging for the shuffle player service.

This module provides structured logging that integrates with Linux logging
infrastructure: stderr output (collected by systemd/journald when running
as a service) plus a rotating log file under the XDG data directory.
"""

# ============================================================================
# Standard Library Imports (alphabetical)
# ============================================================================
import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Optional

# ============================================================================
# Third-Party Imports (alphabetical, with version requirements)
# ============================================================================
# None

# ============================================================================
# Local Imports (grouped by package, alphabetical)
# ============================================================================
# None

ROOT_LOGGER_NAME = "shuffleplayer"


class LinuxLogger:
    """
    Linux-native logger with file and console output.

    Supports:
    - File logging to XDG data directory
    - Console output for track announcements, warnings and errors
    - Environment variable control (SHUFFLEPLAYER_DEBUG)
    """

    _initialized: bool = False

    def __init__(self, log_dir: Optional[Path] = None):
        """
        Initialize the logger.

        Args:
            log_dir: Directory for log files (defaults to XDG data dir)
        """
        self.logger = logging.getLogger(ROOT_LOGGER_NAME)
        if LinuxLogger._initialized:
            return

        self.logger.setLevel(
            logging.DEBUG if os.getenv("SHUFFLEPLAYER_DEBUG") else logging.INFO
        )

        # Prevent duplicate handlers
        if self.logger.handlers:
            LinuxLogger._initialized = True
            return

        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        # Console handler (stderr). The service is unattended, so track
        # announcements at INFO belong on the console as well.
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(formatter)
        self.logger.addHandler(console_handler)

        if log_dir is None:
            xdg_data = os.getenv("XDG_DATA_HOME", Path.home() / ".local" / "share")
            log_dir = Path(xdg_data) / "shuffleplayer" / "logs"

        try:
            log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                log_dir / "shuffleplayer.log",
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=5,
            )
        except OSError as e:
            # Console logging alone still works; a read-only home is not fatal.
            self.logger.warning("File logging disabled (%s): %s", log_dir, e)
        else:
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

        LinuxLogger._initialized = True

    @classmethod
    def get_logger(cls, name: str = ROOT_LOGGER_NAME) -> logging.Logger:
        """
        Get a logger instance.

        Module loggers are children of the service logger, so they pick up
        its handlers once LinuxLogger has been initialized in main().

        Args:
            name: Logger name (creates child logger)

        Returns:
            Logger instance
        """
        root = logging.getLogger(ROOT_LOGGER_NAME)
        if name == ROOT_LOGGER_NAME:
            return root
        return root.getChild(name)


# Convenience functions
def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Get a logger instance."""
    return LinuxLogger.get_logger(name)
