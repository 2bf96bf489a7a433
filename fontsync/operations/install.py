"""
Font installation.

Checks each candidate against the ledger, copies missing fonts into the
destination directory, registers them and reads the registration back.
"""

import shutil
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from fontsync.config.paths import DEFAULT_TYPE_LABEL, TYPE_LABELS
from fontsync.core.catalog import FontRecord
from fontsync.core.errors import PerFontError, VerificationMismatch
from fontsync.core.ledger import FontLedger
from fontsync.utils.logging import logger

ProgressCallback = Callable[[int, int], None]


def type_label(extension: str) -> str:
    """Ledger label for an extension: ttf -> "(TrueType)"."""
    return TYPE_LABELS.get(extension.lower(), DEFAULT_TYPE_LABEL)


def registry_name(record: FontRecord) -> str:
    """Ledger display name: "Arial Bold (TrueType)"."""
    return f"{record.family} {type_label(record.extension)}"


def is_installed(ledger: FontLedger, record: FontRecord) -> bool:
    """Whether any ledger entry names this family with a file of the same type."""
    matches = ledger.find_by_substring_and_suffix(record.family, f".{record.extension}")
    return bool(matches)


class InstallStatus(Enum):
    SKIPPED = "skipped"
    INSTALLED = "installed"
    VERIFY_FAILED = "verify_failed"
    FAILED = "failed"


@dataclass(frozen=True)
class InstallOutcome:
    """Result of installing one font."""

    record: FontRecord
    status: InstallStatus
    registry_name: str
    copied: bool = False
    registered: bool = False
    reason: str | None = None


@dataclass
class InstallReport:
    """Aggregated results of an install pass."""

    outcomes: list[InstallOutcome] = field(default_factory=list)

    def count(self, status: InstallStatus) -> int:
        return sum(1 for o in self.outcomes if o.status is status)

    @property
    def copies(self) -> int:
        return sum(1 for o in self.outcomes if o.copied)

    @property
    def ledger_writes(self) -> int:
        return sum(1 for o in self.outcomes if o.registered)

    @property
    def changed(self) -> bool:
        return self.copies > 0 or self.ledger_writes > 0


class InstallEngine:
    """
    Installs fonts into a destination directory and ledger.

    Args:
        font_dir: Destination font directory
        ledger: Ledger the fonts are registered in
    """

    def __init__(self, font_dir: Path, ledger: FontLedger):
        self.font_dir = font_dir
        self.ledger = ledger

    def install(self, record: FontRecord) -> InstallOutcome:
        """
        Install one font.

        Never raises for copy, encoding or ledger failures; they become a
        FAILED outcome.
        An existing destination file of the same name is reused as is.

        Args:
            record: Font to install

        Returns:
            Outcome of the install
        """
        name = registry_name(record)
        destination = self.font_dir / record.file_name
        copied = registered = False

        try:
            if is_installed(self.ledger, record):
                return InstallOutcome(record, InstallStatus.SKIPPED, name)

            if not destination.exists():
                self.font_dir.mkdir(parents=True, exist_ok=True)
                shutil.copy2(record.path, destination)
                copied = True

            self.ledger.write(name, record.file_name)
            registered = True

            verified = self.ledger.get(name) == record.file_name and destination.exists()
        except (OSError, UnicodeError, PerFontError) as e:
            return InstallOutcome(
                record,
                InstallStatus.FAILED,
                name,
                copied=copied,
                registered=registered,
                reason=str(e),
            )

        if not verified:
            mismatch = VerificationMismatch(
                f"{name} not readable from the ledger after writing"
            )
            return InstallOutcome(
                record,
                InstallStatus.VERIFY_FAILED,
                name,
                copied=copied,
                registered=True,
                reason=str(mismatch),
            )
        return InstallOutcome(
            record, InstallStatus.INSTALLED, name, copied=copied, registered=True
        )

    def run(
        self,
        records: list[FontRecord],
        progress: ProgressCallback | None = None,
    ) -> InstallReport:
        """
        Install every record in order, logging each outcome.

        Args:
            records: Fonts to install
            progress: Called with (current, total) after each font

        Returns:
            Report of all outcomes
        """
        report = InstallReport()
        total = len(records)
        logger.info(f"Installing {total} fonts into {self.font_dir}")

        for i, record in enumerate(records, 1):
            outcome = self.install(record)
            log_install_outcome(outcome)
            report.outcomes.append(outcome)
            if progress:
                progress(i, total)

        logger.info("Install Summary")
        logger.info(f"  Installed:      {report.count(InstallStatus.INSTALLED)}")
        logger.info(f"  Already there:  {report.count(InstallStatus.SKIPPED)}")
        unverified = report.count(InstallStatus.VERIFY_FAILED)
        if unverified:
            logger.warning(f"  Unverified:     {unverified}")
        failed = report.count(InstallStatus.FAILED)
        if failed:
            logger.error(f"  Failed:         {failed}")
        return report


def log_install_outcome(outcome: InstallOutcome) -> None:
    record = outcome.record
    if outcome.status is InstallStatus.SKIPPED:
        logger.info(f"Font already installed: {record.family} (Type: {record.extension})")
    elif outcome.status is InstallStatus.INSTALLED:
        logger.info(f"Installed font: {record.family} (Type: {record.extension})")
    elif outcome.status is InstallStatus.VERIFY_FAILED:
        logger.warning(f"Font registration could not be verified: {outcome.reason}")
    else:
        logger.error(f"Failed to install font {record.family}: {outcome.reason}")
