"""Configuration helpers for the cloudbuild CLI."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from cloudbuild.client import DEFAULT_API_BASE

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

DEFAULT_CONFIG_PATH = Path.home() / ".cloudbuild" / "config.toml"
DEFAULT_TIMEOUT = 30.0
API_BASE_ENV_VAR = "CLOUDBUILD_API_BASE"


@dataclass(frozen=True)
class CLIConfig:
    api_base: str = DEFAULT_API_BASE
    timeout: float = DEFAULT_TIMEOUT


class ConfigError(ValueError):
    """Raised when CLI config is invalid."""


def _read_config_file(path: Path) -> dict[str, Any]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid TOML in {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"cannot read {path}: {exc.strerror or exc}") from exc


def _to_timeout(value: Any) -> float:
    if isinstance(value, bool):
        raise ConfigError("timeout must be a positive number")
    try:
        timeout = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError("timeout must be a positive number") from exc
    if timeout <= 0:
        raise ConfigError("timeout must be a positive number")
    return timeout


def load_cli_config(path: str | Path | None = None) -> CLIConfig:
    config_path = Path(path) if path else DEFAULT_CONFIG_PATH
    parsed: dict[str, Any] = _read_config_file(config_path) if config_path.exists() else {}

    section = parsed.get("cli")
    if isinstance(section, dict):
        source = section
    elif section is None:
        source = parsed
    else:
        raise ConfigError("[cli] must be a table")

    env_api_base = os.getenv(API_BASE_ENV_VAR)
    configured_api_base = str(source.get("api_base", DEFAULT_API_BASE)).strip()
    api_base = env_api_base.strip() if env_api_base else configured_api_base
    if not api_base:
        raise ConfigError("api_base must not be empty")

    timeout = _to_timeout(source.get("timeout", DEFAULT_TIMEOUT))

    return CLIConfig(api_base=api_base, timeout=timeout)
