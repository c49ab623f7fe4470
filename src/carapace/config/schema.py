"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal

Severity = Literal["critical", "high", "medium", "low", "info"]

VALID_RULESETS = ("general", "attack", "quality", "solidity")
VALID_LOG_LEVELS = ("debug", "info", "warning", "error")

DEFAULT_MAX_TOKENS = 12_000


@dataclass
class ChunkingConfig:
    max_tokens: int = DEFAULT_MAX_TOKENS  # per-chunk budget handed to the reviewer


@dataclass
class OutputConfig:
    format: Literal["terminal", "json"] = "terminal"
    show_summary: bool = True


@dataclass
class RulesConfig:
    rulesets: List[str] = field(default_factory=lambda: ["general", "attack", "quality"])
    enable: List[str] = field(default_factory=list)  # empty = all enabled
    disable: List[str] = field(default_factory=list)


@dataclass
class IgnoreConfig:
    files: List[str] = field(default_factory=list)  # fnmatch globs


@dataclass
class LoggingConfig:
    level: str = "warning"
    json: bool = False


@dataclass
class CarapaceConfig:
    version: str = "1.0"
    chunking: ChunkingConfig = field(default_factory=ChunkingConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    rules: RulesConfig = field(default_factory=RulesConfig)
    ignore: IgnoreConfig = field(default_factory=IgnoreConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
