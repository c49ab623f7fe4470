"""Load and merge configuration from .carapace.toml and env vars."""

from __future__ import annotations

import dataclasses
import difflib
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import structlog

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from carapace.config.schema import (
    VALID_LOG_LEVELS,
    VALID_RULESETS,
    CarapaceConfig,
    ChunkingConfig,
    IgnoreConfig,
    LoggingConfig,
    OutputConfig,
    RulesConfig,
)

logger = structlog.get_logger(__name__)

CONFIG_FILENAME = ".carapace.toml"


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(repo_root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = repo_root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    for key in raw:
        if key not in valid_fields:
            logger.warning("unknown_config_key", section=section, key=key)
    return cls(**{k: v for k, v in raw.items() if k in valid_fields})


def _did_you_mean(value: str, choices: tuple[str, ...]) -> Optional[str]:
    matches = difflib.get_close_matches(value.lower(), choices, n=1, cutoff=0.6)
    return matches[0] if matches else None


def _validate(cfg: CarapaceConfig) -> None:
    """Reject hard errors, drop soft ones with a warning."""
    max_tokens = cfg.chunking.max_tokens
    if isinstance(max_tokens, bool) or not isinstance(max_tokens, int) or max_tokens <= 0:
        raise ConfigError(f"chunking.max_tokens must be a positive integer, got {max_tokens!r}")
    if cfg.output.format not in ("terminal", "json"):
        raise ConfigError(f"output.format must be 'terminal' or 'json', got {cfg.output.format!r}")
    for key, value in (
        ("rules.rulesets", cfg.rules.rulesets),
        ("rules.enable", cfg.rules.enable),
        ("rules.disable", cfg.rules.disable),
        ("ignore.files", cfg.ignore.files),
    ):
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ConfigError(f"{key} must be a list of strings, got {value!r}")

    valid = []
    for name in cfg.rules.rulesets:
        if name in VALID_RULESETS:
            valid.append(name)
        else:
            logger.warning(
                "unknown_ruleset",
                ruleset=name,
                suggestion=_did_you_mean(str(name), VALID_RULESETS),
            )
    if valid:
        cfg.rules.rulesets = valid
    else:
        cfg.rules.rulesets = RulesConfig().rulesets

    if cfg.logging.level not in VALID_LOG_LEVELS:
        logger.warning(
            "invalid_log_level",
            level=cfg.logging.level,
            suggestion=_did_you_mean(str(cfg.logging.level), VALID_LOG_LEVELS),
        )
        cfg.logging.level = LoggingConfig().level


def _merge_env_overrides(cfg: CarapaceConfig) -> None:
    """Apply CARAPACE_* environment variable overrides."""
    if val := os.environ.get("CARAPACE_MAX_TOKENS"):
        try:
            tokens = int(val)
        except ValueError:
            tokens = 0
        if tokens > 0:
            cfg.chunking.max_tokens = tokens
    if val := os.environ.get("CARAPACE_FORMAT"):
        if val in ("terminal", "json"):
            cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("CARAPACE_LOG_LEVEL"):
        if val.lower() in VALID_LOG_LEVELS:
            cfg.logging.level = val.lower()
    if val := os.environ.get("CARAPACE_DISABLE_RULES"):
        cfg.rules.disable.extend(r.strip() for r in val.split(",") if r.strip())
    if val := os.environ.get("CARAPACE_IGNORE_PATHS"):
        cfg.ignore.files.extend(p.strip() for p in val.split(os.pathsep) if p.strip())


def load_config(
    repo_root: Path,
    config_override: Optional[str] = None,
) -> CarapaceConfig:
    """Load, validate, and return a CarapaceConfig."""
    config_path = find_config_file(repo_root, config_override)

    if config_path is None:
        cfg = CarapaceConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = CarapaceConfig(
            version=str(raw.get("version", "1.0")),
            chunking=_build_section(raw, ChunkingConfig, "chunking"),
            output=_build_section(raw, OutputConfig, "output"),
            rules=_build_section(raw, RulesConfig, "rules"),
            ignore=_build_section(raw, IgnoreConfig, "ignore"),
            logging=_build_section(raw, LoggingConfig, "logging"),
        )
        _validate(cfg)

    _merge_env_overrides(cfg)
    return cfg
