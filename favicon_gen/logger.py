"""
Logging setup for favicon-gen runs.

Each run writes a timestamped log file next to an archive of older runs,
and echoes INFO and above to the console (stderr, so the generated HTML on
stdout stays clean).
"""

import logging
import shutil
from datetime import datetime
from pathlib import Path


class LogSetup:
    """Sets up logging for the application with file and console handlers."""

    def __init__(self, log_dir="logs", archive_dir="logs/archive"):
        """
        Initialize logging setup.

        Args:
            log_dir: Directory to store current logs (default: logs/)
            archive_dir: Directory to store archived logs (default: logs/archive/)
        """
        self.log_dir = Path(log_dir)
        self.archive_dir = Path(archive_dir)

        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.archive_dir.mkdir(parents=True, exist_ok=True)

    def setup_logging(self, verbose=False):
        """
        Configure logging with both file and console output.

        Args:
            verbose: Show DEBUG messages on the console too

        Returns:
            tuple: (logging.Logger, Path of the new log file)
        """
        self._archive_existing_logs()

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_filepath = self.log_dir / f"run_{timestamp}.log"

        logger = logging.getLogger()
        logger.setLevel(logging.DEBUG)

        # Remove any existing handlers to avoid duplicates
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)

        formatter = logging.Formatter(
            fmt="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

        file_handler = logging.FileHandler(log_filepath, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        # Pillow logs every chunk it parses at DEBUG
        logging.getLogger("PIL").setLevel(logging.WARNING)

        return logger, log_filepath

    def _archive_existing_logs(self):
        """Move log files of previous runs into the archive directory."""
        for log_file in self.log_dir.glob("run_*.log"):
            if log_file.is_file():
                try:
                    shutil.move(str(log_file), str(self.archive_dir / log_file.name))
                except OSError as e:
                    logging.getLogger(__name__).warning(
                        f"Could not archive log file {log_file.name}: {e}"
                    )


def setup_logging(log_dir="logs", archive_dir=None, verbose=False):
    """
    Convenience function to set up logging.

    Args:
        log_dir: Directory to store current logs
        archive_dir: Directory to store archived logs (default: <log_dir>/archive)
        verbose: Show DEBUG messages on the console too

    Returns:
        tuple: (logger, log_filepath)
    """
    if archive_dir is None:
        archive_dir = Path(log_dir) / "archive"
    return LogSetup(log_dir, archive_dir).setup_logging(verbose=verbose)
