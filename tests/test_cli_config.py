from __future__ import annotations

import pytest

from cloudbuild.cli.config import ConfigError, load_cli_config
from cloudbuild.client import DEFAULT_API_BASE


def test_default_api_base_is_production(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("CLOUDBUILD_API_BASE", raising=False)
    config = load_cli_config(tmp_path / "missing.toml")
    assert config.api_base == DEFAULT_API_BASE
    assert config.timeout == 30.0


def test_env_api_base_overrides_config_file(tmp_path, monkeypatch) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text('api_base = "http://localhost:8080"\n', encoding="utf-8")
    monkeypatch.setenv("CLOUDBUILD_API_BASE", "https://env.cloudbuild.example")
    config = load_cli_config(config_path)
    assert config.api_base == "https://env.cloudbuild.example"


def test_cli_table_is_read(tmp_path, monkeypatch) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text('[cli]\napi_base = "http://localhost:8080"\ntimeout = 2.5\n', encoding="utf-8")
    monkeypatch.delenv("CLOUDBUILD_API_BASE", raising=False)
    config = load_cli_config(config_path)
    assert config.api_base == "http://localhost:8080"
    assert config.timeout == 2.5


def test_cli_must_be_a_table(tmp_path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text('cli = "nope"\n', encoding="utf-8")
    with pytest.raises(ConfigError, match=r"\[cli\]"):
        load_cli_config(config_path)


@pytest.mark.parametrize("raw", ["0", "-1", '"soon"', "true"])
def test_timeout_rejects_invalid_values(tmp_path, raw: str) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text(f"timeout = {raw}\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_cli_config(config_path)


def test_empty_api_base_is_rejected(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("CLOUDBUILD_API_BASE", raising=False)
    config_path = tmp_path / "config.toml"
    config_path.write_text('api_base = "  "\n', encoding="utf-8")
    with pytest.raises(ConfigError):
        load_cli_config(config_path)


def test_invalid_toml_is_config_error(tmp_path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text("api_base = ", encoding="utf-8")
    with pytest.raises(ConfigError, match="invalid TOML"):
        load_cli_config(config_path)


def test_unreadable_config_is_config_error(tmp_path) -> None:
    config_dir = tmp_path / "config.toml"
    config_dir.mkdir()
    with pytest.raises(ConfigError, match="cannot read"):
        load_cli_config(config_dir)
