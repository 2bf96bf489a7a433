"""
Run configuration.

Loads the TOML configuration file once and hands out an immutable Settings
value that is passed explicitly to each component.
"""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

from fontsync.config.paths import CONFIG_ENV_VAR, DEFAULT_CONFIG_FILE, JSON_LEDGER_NAME
from fontsync.core.catalog import DedupMode
from fontsync.core.errors import ConfigError

REQUIRED_KEYS = ("font_dir", "log_file", "source_path")
LEDGER_BACKENDS = ("auto", "registry", "json")


@dataclass(frozen=True)
class Settings:
    """Configuration for one reconciliation pass."""

    font_dir: Path  # destination font directory
    log_file: Path
    source_path: str  # relative to a drive or mount root
    dedup_mode: DedupMode = DedupMode.EXTENSION
    ledger: str = "auto"
    ledger_file: Path | None = None

    @property
    def json_ledger_path(self) -> Path:
        """Path of the JSON ledger, defaulting to a file in the font directory."""
        return self.ledger_file or self.font_dir / JSON_LEDGER_NAME


def default_config_path() -> Path:
    """Config file location: $FONTSYNC_CONFIG, else fontsync.toml in the working directory."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    return Path(env_path) if env_path else DEFAULT_CONFIG_FILE


def load_settings(path: Path | None = None) -> Settings:
    """
    Load settings from a TOML file.

    The file must contain a [fontsync] table with font_dir, log_file and
    source_path. Optional keys: dedup_by ("extension" or "basename"),
    ledger ("auto", "registry", "json") and ledger_file.

    Args:
        path: Config file; defaults to default_config_path()

    Returns:
        Parsed Settings

    Raises:
        ConfigError: If the file is missing, unreadable or incomplete
    """
    path = path or default_config_path()
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Failed to read config file {path}: {e}") from e

    table = data.get("fontsync")
    if not isinstance(table, dict):
        raise ConfigError(f"Missing [fontsync] table in {path}")

    for key in REQUIRED_KEYS:
        value = table.get(key)
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(f"Missing required config key: {key}")

    dedup_by = table.get("dedup_by", DedupMode.EXTENSION.value)
    try:
        dedup_mode = DedupMode(dedup_by)
    except ValueError:
        choices = ", ".join(m.value for m in DedupMode)
        raise ConfigError(
            f"Invalid dedup_by {dedup_by!r} (expected one of: {choices})"
        ) from None

    ledger = table.get("ledger", "auto")
    if ledger not in LEDGER_BACKENDS:
        raise ConfigError(
            f"Invalid ledger {ledger!r} (expected one of: {', '.join(LEDGER_BACKENDS)})"
        )

    ledger_file = table.get("ledger_file")
    if ledger_file is not None and not isinstance(ledger_file, str):
        raise ConfigError("ledger_file must be a string")

    return Settings(
        font_dir=Path(table["font_dir"]),
        log_file=Path(table["log_file"]),
        source_path=table["source_path"],
        dedup_mode=dedup_mode,
        ledger=ledger,
        ledger_file=Path(ledger_file) if ledger_file else None,
    )
