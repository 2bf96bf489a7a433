"""
Font removal.

Targets are taken from the source tree, not the ledger: a font whose source
file is gone is left installed.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from fontsync.core.catalog import FontRecord
from fontsync.core.errors import PerFontError
from fontsync.core.ledger import FontLedger
from fontsync.operations.install import registry_name
from fontsync.utils.logging import logger


class UninstallStatus(Enum):
    UNINSTALLED = "uninstalled"
    FILE_NOT_FOUND = "file_not_found"
    FAILED = "failed"


@dataclass(frozen=True)
class UninstallOutcome:
    """Result of removing one font."""

    record: FontRecord
    status: UninstallStatus
    registry_name: str
    entry_removed: bool = False
    reason: str | None = None


@dataclass
class UninstallReport:
    """Aggregated results of an uninstall pass."""

    outcomes: list[UninstallOutcome] = field(default_factory=list)

    def count(self, status: UninstallStatus) -> int:
        return sum(1 for o in self.outcomes if o.status is status)

    @property
    def changed(self) -> bool:
        return any(
            o.entry_removed or o.status is UninstallStatus.UNINSTALLED
            for o in self.outcomes
        )


class Uninstaller:
    """
    Removes fonts from a destination directory and ledger.

    Args:
        font_dir: Destination font directory
        ledger: Ledger the fonts were registered in
    """

    def __init__(self, font_dir: Path, ledger: FontLedger):
        self.font_dir = font_dir
        self.ledger = ledger

    def uninstall(self, record: FontRecord) -> UninstallOutcome:
        """
        Delete the ledger entry and destination file for one font.

        Missing entries and files are not errors.
        """
        name = registry_name(record)
        destination = self.font_dir / record.file_name
        entry_removed = False

        try:
            entry_removed = self.ledger.delete(name)
            if not destination.exists():
                return UninstallOutcome(
                    record, UninstallStatus.FILE_NOT_FOUND, name, entry_removed
                )
            destination.unlink()
        except (OSError, UnicodeError, PerFontError) as e:
            return UninstallOutcome(
                record, UninstallStatus.FAILED, name, entry_removed, reason=str(e)
            )

        return UninstallOutcome(record, UninstallStatus.UNINSTALLED, name, entry_removed)

    def run(self, records: list[FontRecord]) -> UninstallReport:
        """Uninstall every record in order, logging each outcome."""
        report = UninstallReport()
        logger.info(f"Uninstalling {len(records)} fonts from {self.font_dir}")

        for record in records:
            outcome = self.uninstall(record)
            log_uninstall_outcome(outcome)
            report.outcomes.append(outcome)

        logger.info("Uninstall Summary")
        logger.info(f"  Uninstalled:    {report.count(UninstallStatus.UNINSTALLED)}")
        logger.info(f"  Not found:      {report.count(UninstallStatus.FILE_NOT_FOUND)}")
        failed = report.count(UninstallStatus.FAILED)
        if failed:
            logger.error(f"  Failed:         {failed}")
        return report


def log_uninstall_outcome(outcome: UninstallOutcome) -> None:
    if outcome.status is UninstallStatus.UNINSTALLED:
        logger.info(f"Uninstalled font: {outcome.registry_name}")
    elif outcome.status is UninstallStatus.FILE_NOT_FOUND:
        logger.info(f"Font file not found: {outcome.record.file_name}")
    else:
        logger.error(f"Failed to uninstall font {outcome.registry_name}: {outcome.reason}")
