import logging
import logging.handlers
import os
from datetime import datetime
from pathlib import Path

from basebot.lib.get_platform import get_platform

PACKAGE = "basebot"


def get_log_directory() -> Path:
    """Get the log directory path based on the operating system

    Returns:
        Path: The path to the log directory

    Raises:
        OSError: If the operating system is unsupported
    """
    platform = get_platform()

    if platform == "unknown":
        raise OSError("Unsupported OS. Can't determine logs folder.")

    user_home = Path.home()
    if platform == "windows":
        return user_home / "AppData" / "Local" / PACKAGE / "Logs"

    return user_home / ".config" / PACKAGE / "logs"  # macOs and Linux use the same log path


def clean_old_logs(log_dir: Path, max_files: int = 5):
    """Remove old log files, keeping only the most recent `max_files` logs

    Args:
        log_dir (Path): The directory where the log files are stored.
        max_files (int, optional): The maximum number of log files to keep. Defaults to 5.
    """
    log_files = sorted(log_dir.glob("*.log"), key=os.path.getmtime)
    while len(log_files) > max_files:
        old_log = log_files.pop(0)
        old_log.unlink()


class CustomFormatter(logging.Formatter):
    def format(self, record):
        record.levelname = record.levelname.ljust(8)
        return super().format(record)


def configure_logger(
    log_level: int = logging.DEBUG, log_dir: Path | None = None, max_log_files: int = 5
) -> Path:
    """Configures the logger with log file, format and level

    Logs go to a file named after the current date and time in `log_dir` and to the
    console. The console format leaves out the timestamp; the file keeps it.

    Args:
        log_level (int): The log level to log at. Defaults to logging.DEBUG.
        log_dir (Path | None): Where to store the logs. Defaults to system default.
        max_log_files (int): Keeps only the previous (n) number of log files. Defaults to 5.

    Returns:
        Path: The log file being written.
    """
    if log_dir is None:
        log_dir = get_log_directory()

    log_dir.mkdir(exist_ok=True, parents=True)
    clean_old_logs(log_dir=log_dir, max_files=max_log_files)

    log_filename = log_dir / datetime.now().strftime("%Y-%m-%d_%H-%M-%S.log")

    file_handler = logging.handlers.RotatingFileHandler(
        log_filename, maxBytes=10 * 1024**2, backupCount=5
    )
    stream_handler = logging.StreamHandler()

    file_handler.setFormatter(
        CustomFormatter("[%(asctime)s] %(levelname)s %(message)s", datefmt="%d.%m.%Y %H:%M:%S")
    )
    stream_handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))

    logging.basicConfig(level=log_level, handlers=[file_handler, stream_handler], force=True)
    return log_filename
