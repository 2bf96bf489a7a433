"""
Shared logging configuration.

Console output stays terse; a session adds a timestamped log file and a full
transcript for audit.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path

from fontsync import __version__

_console = logging.StreamHandler()
_console.setLevel(logging.INFO)

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(message)s",
    handlers=[_console],
)

logger = logging.getLogger("fontsync")
logger.setLevel(logging.DEBUG)

LOG_FORMAT = "%(asctime)s %(levelname)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def transcript_path(log_file: Path) -> Path:
    """Transcript file next to the log: fontsync.log -> fontsync-transcript.log."""
    return log_file.with_name(f"{log_file.stem}-transcript{log_file.suffix or '.log'}")


@contextmanager
def session_log(log_file: Path) -> Iterator[Path]:
    """
    Attach the session log and transcript handlers for the duration of a run.

    The log file is appended to across runs (INFO and above); the transcript
    is rewritten each session and captures every record including DEBUG.

    Args:
        log_file: Path of the persistent log

    Yields:
        Path of the transcript file
    """
    log_file.parent.mkdir(parents=True, exist_ok=True)
    transcript = transcript_path(log_file)
    formatter = logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)

    file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(formatter)

    transcript_handler = logging.FileHandler(transcript, mode="w", encoding="utf-8")
    transcript_handler.setLevel(logging.DEBUG)
    transcript_handler.setFormatter(formatter)

    logger.addHandler(file_handler)
    logger.addHandler(transcript_handler)
    logger.debug(
        f"Transcript started {datetime.now():%Y-%m-%d %H:%M:%S} (fontsync {__version__})"
    )
    try:
        yield transcript
    finally:
        logger.debug("Transcript ended")
        for handler in (file_handler, transcript_handler):
            logger.removeHandler(handler)
            handler.close()
