"""
Reconciliation pass orchestration.

Resolves the source folder, installs every font found there and, after an
operator confirmation, optionally removes them again.
"""

import sys
from collections.abc import Callable
from pathlib import Path

import click

from fontsync import __version__
from fontsync.config.settings import Settings
from fontsync.core.catalog import FontCatalog, FontRecord
from fontsync.core.errors import FontSyncError, SourceNotFoundError
from fontsync.core.ledger import open_ledger
from fontsync.operations.install import InstallEngine, InstallReport
from fontsync.operations.source import resolve_source
from fontsync.operations.uninstall import Uninstaller
from fontsync.utils.logging import logger, session_log
from fontsync.utils.system import notify_font_change

UNINSTALL_PROMPT = "Uninstall the fonts found in the source folder?"

Confirm = Callable[[str], bool]


def prompt_uninstall(question: str) -> bool:
    """Ask the operator on the terminal; defaults to no, as do EOF and Ctrl-C."""
    try:
        return click.confirm(question, default=False)
    except click.Abort:
        logger.info("No answer to uninstall question; keeping fonts installed")
        return False


def install_with_progress(
    engine: InstallEngine,
    records: list[FontRecord],
    *,
    show_progress: bool = True,
) -> InstallReport:
    """Run the install pass, drawing a progress bar on stderr when asked."""
    if not show_progress or not records:
        return engine.run(records)

    with click.progressbar(
        length=len(records), label="Installing fonts", file=sys.stderr
    ) as bar:

        def advance(current: int, _total: int) -> None:
            bar.update(current - bar.pos)

        return engine.run(records, progress=advance)


def reconcile(
    settings: Settings,
    *,
    silent: bool = False,
    confirm: Confirm = prompt_uninstall,
    show_progress: bool = True,
) -> None:
    """
    One reconciliation pass.

    Args:
        settings: Run configuration
        silent: Skip the uninstall question (no uninstall this run)
        confirm: Asks the operator whether to uninstall
        show_progress: Draw a progress bar during install

    Raises:
        SourceNotFoundError: If no mounted root holds the source folder
        FontSyncError: If the ledger cannot be opened
        OSError: If the source tree cannot be read
    """
    source_dir = resolve_source(settings.source_path)
    if source_dir is None:
        raise SourceNotFoundError(settings.source_path)
    logger.info(f"Source folder: {source_dir}")

    catalog = FontCatalog(settings.dedup_mode)
    ledger = open_ledger(settings)

    records = catalog.scan(source_dir)
    engine = InstallEngine(settings.font_dir, ledger)
    changed = install_with_progress(engine, records, show_progress=show_progress).changed

    if not silent and confirm(UNINSTALL_PROMPT):
        logger.info("Uninstall confirmed by operator")
        uninstaller = Uninstaller(settings.font_dir, ledger)
        changed = uninstaller.run(catalog.scan(source_dir)).changed or changed

    if changed:
        notify_font_change(settings.font_dir)


def run_sync(
    settings: Settings,
    *,
    silent: bool = False,
    confirm: Confirm = prompt_uninstall,
    show_progress: bool = True,
) -> bool:
    """
    Run a reconciliation pass inside a logging session.

    Fatal errors are logged, never raised; the session log is always closed.

    Returns:
        True if the pass ran to completion, False on a fatal error
    """
    try:
        with session_log(settings.log_file) as transcript:
            return _run_session(settings, transcript, silent, confirm, show_progress)
    except OSError as e:
        logger.error(f"Failed to open log file {settings.log_file}: {e}")
        return False


def _run_session(
    settings: Settings,
    transcript: Path,
    silent: bool,
    confirm: Confirm,
    show_progress: bool,
) -> bool:
    logger.info(f"Font sync started (fontsync {__version__})")
    logger.info(f"Transcript: {transcript}")

    try:
        reconcile(settings, silent=silent, confirm=confirm, show_progress=show_progress)
    except FontSyncError as e:
        logger.error(str(e))
        return False
    except OSError as e:
        logger.error(f"Font sync failed: {e}")
        return False
    except Exception as e:
        logger.exception(f"Font sync failed: {e}")
        return False
    finally:
        logger.info("Font sync finished")

    return True
