"""Tests for session logging."""

from fontsync.utils.logging import logger, session_log, transcript_path


def test_transcript_path(tmp_path):
    assert transcript_path(tmp_path / "fontsync.log") == tmp_path / "fontsync-transcript.log"


def test_session_writes_log_and_transcript(tmp_path):
    """Test INFO goes to both files and DEBUG only to the transcript."""
    log_file = tmp_path / "logs" / "fontsync.log"
    handlers_before = list(logger.handlers)

    with session_log(log_file) as transcript:
        logger.info("Installed font: Inter (Type: ttf)")
        logger.debug("Probing /mnt/usb")

    log_text = log_file.read_text(encoding="utf-8")
    transcript_text = transcript.read_text(encoding="utf-8")
    assert "INFO: Installed font: Inter (Type: ttf)" in log_text
    assert "Probing /mnt/usb" not in log_text
    assert "Probing /mnt/usb" in transcript_text
    assert "Transcript ended" in transcript_text
    assert logger.handlers == handlers_before


def test_log_appends_across_sessions(tmp_path):
    log_file = tmp_path / "fontsync.log"

    with session_log(log_file):
        logger.info("first run")
    with session_log(log_file) as transcript:
        logger.info("second run")

    log_text = log_file.read_text(encoding="utf-8")
    assert "first run" in log_text and "second run" in log_text
    assert "first run" not in transcript.read_text(encoding="utf-8")
