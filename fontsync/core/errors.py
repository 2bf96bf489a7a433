"""
Exception hierarchy.

Only ConfigError and SourceNotFoundError are meant to leave the batch loop;
the per-font errors are converted to outcome values at the font boundary.
"""


class FontSyncError(Exception):
    """Base class for all fontsync errors."""


class ConfigError(FontSyncError):
    """Configuration file missing or invalid. Raised before any font is processed."""


class SourceNotFoundError(FontSyncError):
    """The source font folder could not be found on any mounted root."""

    def __init__(self, source: str):
        self.source = source
        super().__init__(f"Source font folder not found: {source}")


class PerFontError(FontSyncError):
    """Copy or ledger failure affecting a single font."""


class LedgerError(PerFontError):
    """The font ledger backend rejected a read or write."""


class NameExtractionError(FontSyncError):
    """A font's name table could not be read."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not read font name from {path}: {reason}")


class VerificationMismatch(FontSyncError):
    """A font was registered but the registration could not be read back."""
