"""Configuration management for Enharmonic.

Config resolution order (highest priority first):
1. Programmatic (EnharmonicConfig constructed in code)
2. Environment variables (DB_PATH, PROGRAM_ID, MINT_DECIMALS, MINT_SUPPLY_CAP)
3. Config file (~/.config/enharmonic/config.json, managed by `enharmonic config`)
4. Hardcoded defaults

The coherence threshold and scoring weights are program constants, not config.
"""

import json
import logging
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any

from .ledger.derivation import DEFAULT_PROGRAM_ID
from .ledger.token import DEFAULT_DECIMALS


logger = logging.getLogger(__name__)


# =============================================================================
# Config file location
# =============================================================================

CONFIG_DIR = Path.home() / ".config" / "enharmonic"
CONFIG_FILE = CONFIG_DIR / "config.json"


# =============================================================================
# Config dataclasses
# =============================================================================


@dataclass
class ProgramConfig:
    """Program identity used for address and capability derivation."""

    program_id: str = DEFAULT_PROGRAM_ID


@dataclass
class MintConfig:
    """Defaults for mints created by `enharmonic mint create`."""

    decimals: int = DEFAULT_DECIMALS
    supply_cap: int | None = None


@dataclass
class DefaultsConfig:
    """Non-program default settings."""

    db_path: str = "./storage/enharmonic.db"


# =============================================================================
# Main config class
# =============================================================================


@dataclass
class EnharmonicConfig:
    """Top-level enharmonic configuration.

    Examples:
        # Package use: no files needed
        config = EnharmonicConfig(defaults=DefaultsConfig(db_path=":memory:"))

        # CLI use: loads from ~/.config/enharmonic/config.json
        config = EnharmonicConfig.load()
    """

    program: ProgramConfig = field(default_factory=ProgramConfig)
    mint: MintConfig = field(default_factory=MintConfig)
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)

    @classmethod
    def load(cls) -> "EnharmonicConfig":
        """Load config from file + env vars.

        Priority: env var values > config.json values > defaults.
        """
        config = cls()

        # Layer 1: Load from config file if it exists
        if CONFIG_FILE.exists():
            try:
                with open(CONFIG_FILE) as f:
                    data = json.load(f)
                _apply_dict(config, data)
            except (json.JSONDecodeError, OSError) as exc:
                logger.warning("Failed to load config from %s: %s", CONFIG_FILE, exc)

        # Layer 2: Env var overrides
        if val := os.environ.get("DB_PATH"):
            config.defaults.db_path = val
        if val := os.environ.get("PROGRAM_ID"):
            config.program.program_id = val
        if val := os.environ.get("MINT_DECIMALS"):
            try:
                config.mint.decimals = int(val)
            except ValueError:
                logger.warning("Invalid MINT_DECIMALS=%r, ignoring", val)
        if val := os.environ.get("MINT_SUPPLY_CAP"):
            try:
                config.mint.supply_cap = int(val)
            except ValueError:
                logger.warning("Invalid MINT_SUPPLY_CAP=%r, ignoring", val)

        return config

    def save(self) -> None:
        """Save config to ~/.config/enharmonic/config.json."""
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        with open(CONFIG_FILE, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for display."""
        return {
            "program": asdict(self.program),
            "mint": asdict(self.mint),
            "defaults": asdict(self.defaults),
        }

    @property
    def db_path(self) -> str:
        return self.defaults.db_path

    @db_path.setter
    def db_path(self, value: str) -> None:
        self.defaults.db_path = value


# =============================================================================
# Config dict application
# =============================================================================


def _apply_dict(config: EnharmonicConfig, data: dict) -> None:
    """Apply a dict of values onto an EnharmonicConfig."""
    for zone in ("program", "mint", "defaults"):
        if zone in data and isinstance(data[zone], dict):
            target = getattr(config, zone)
            for k, v in data[zone].items():
                if hasattr(target, k):
                    setattr(target, k, v)


# =============================================================================
# Global config singleton
# =============================================================================

_config: EnharmonicConfig | None = None


def get_config() -> EnharmonicConfig:
    """Get the global EnharmonicConfig instance.

    First call loads from file + env vars. Subsequent calls return cached instance.
    Use configure() to replace the global config programmatically.
    """
    global _config
    if _config is None:
        _config = EnharmonicConfig.load()
    return _config


def configure(config: EnharmonicConfig) -> None:
    """Set the global EnharmonicConfig programmatically."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset the global config (forces reload on next get_config())."""
    global _config
    _config = None
