"""
utils/config.py
Optional YAML configuration for check-connection.

Precedence: built-in defaults < config file < command-line flags.

Example check-connection.yaml:

    timeout_ms: 3000
    asn_timeout_s: 10
    format: text
    log_level: INFO
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Optional

import yaml

from utils.constants import DEFAULT_TIMEOUT_MS, OUTPUT_FORMATS
from utils.validators import validate_timeout_ms


class ConfigError(ValueError):
    """Raised when the configuration file or an override is invalid."""


@dataclass(frozen=True)
class CheckConfig:
    timeout_ms:    int = DEFAULT_TIMEOUT_MS
    asn_timeout_s: Optional[float] = None    # None = wait for the server to close
    format:        str = "text"
    log_level:     str = "INFO"

    def override(self, **values: Any) -> "CheckConfig":
        """Return a copy with every non-None value applied, validated."""
        changes = {k: v for k, v in values.items() if v is not None}
        return _validated(replace(self, **changes))


_KEYS = {"timeout_ms", "asn_timeout_s", "format", "log_level"}


def load_config(path: str | Path | None) -> CheckConfig:
    """
    Load configuration from a YAML file.

    A missing file is not an error and yields the defaults.
    Raises ConfigError on unreadable YAML, unknown keys or bad values.
    """
    if path is None:
        return CheckConfig()
    try:
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except FileNotFoundError:
        return CheckConfig()
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigError(f"{path}: top level must be a mapping")

    unknown = set(raw) - _KEYS
    if unknown:
        raise ConfigError(f"{path}: unknown keys {sorted(map(str, unknown))}")

    return CheckConfig().override(**raw)


def _validated(cfg: CheckConfig) -> CheckConfig:
    ok, err = validate_timeout_ms(cfg.timeout_ms)
    if not ok:
        raise ConfigError(err)

    if cfg.asn_timeout_s is not None:
        if isinstance(cfg.asn_timeout_s, bool) or not isinstance(cfg.asn_timeout_s, (int, float)):
            raise ConfigError("asn_timeout_s must be a number of seconds")
        if cfg.asn_timeout_s <= 0:
            raise ConfigError(f"asn_timeout_s must be positive, got {cfg.asn_timeout_s}")

    if cfg.format not in OUTPUT_FORMATS:
        raise ConfigError(f"format must be one of {list(OUTPUT_FORMATS)}, got {cfg.format!r}")

    if not isinstance(cfg.log_level, str) or cfg.log_level.upper() not in {
        "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL",
    }:
        raise ConfigError(f"Unknown log_level {cfg.log_level!r}")

    return cfg


__all__ = ["CheckConfig", "ConfigError", "load_config"]
