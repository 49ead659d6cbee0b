"""Data models for keyline-config."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

DEFAULT_CONFIG_DIR = Path("etc") / "configs"
CONFIG_SUFFIX = ".cfg"


class SaveMode(Enum):
    """How ``ConfigStore.save`` treats the existing file.

    MERGE rewrites only changed lines and appends new keys.
    FORCE merges, but falls back to a full rewrite if the file cannot be read.
    REWRITE always replaces the file with one line per entry.
    """

    MERGE = "merge"
    FORCE = "force"
    REWRITE = "rewrite"


@dataclass(frozen=True)
class ConfigEntry:
    """A single setting.

    Attributes:
        key: Non-empty, case-sensitive setting name
        value: Raw string value; typed interpretation happens on read
    """

    key: str
    value: str
