"""Configuration data models for the message parser command line.

Each data class is one INI section; field names are the keys inside it.
"""

from __future__ import annotations

from dataclasses import dataclass, field

__all__: list[str] = ["Config"]


@dataclass
class General:
    DEBUG: bool = False
    LOG_FILE: str = ""


@dataclass
class Emoji:
    TABLE_FILE: str = ""


@dataclass
class Timestamp:
    TIMEZONE: str = "UTC"
    DEFAULT_STYLE: str = "f"


@dataclass
class Output:
    FORMAT: str = "tree"


@dataclass
class Config:
    GENERAL: General = field(default_factory=General)
    EMOJI: Emoji = field(default_factory=Emoji)
    TIMESTAMP: Timestamp = field(default_factory=Timestamp)
    OUTPUT: Output = field(default_factory=Output)
