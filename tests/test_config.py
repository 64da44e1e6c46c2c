"""Tests for wren.config — AppConfig and environment.json loading."""

import dataclasses
import json
from pathlib import Path

import pytest

from wren.config import AppConfig, load_config
from wren.errors import ConfigurationError


def _write(path: Path, data: object) -> Path:
    path.write_text(json.dumps(data))
    return path


class TestAppConfig:
    def test_defaults(self) -> None:
        config = AppConfig()
        assert config.host == "0.0.0.0"
        assert config.port == 8080
        assert config.https_port == 8443
        assert config.public_dir == "public"
        assert config.index_page == "index.html"
        assert config.not_found_page == "404.html"
        assert config.workers == 0
        assert config.debug is False

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            AppConfig().port = 1  # type: ignore[misc]

    def test_tls_disabled_without_files(self, tmp_path) -> None:
        config = AppConfig(ssl_certfile=tmp_path / "a.crt", ssl_keyfile=tmp_path / "a.key")
        assert not config.tls_enabled

    def test_tls_disabled_when_unset(self) -> None:
        assert not AppConfig(ssl_certfile=None, ssl_keyfile=None).tls_enabled

    def test_tls_enabled(self, tmp_path) -> None:
        cert = tmp_path / "a.crt"
        key = tmp_path / "a.key"
        cert.write_text("cert")
        key.write_text("key")
        assert AppConfig(ssl_certfile=cert, ssl_keyfile=key).tls_enabled

    def test_tls_needs_both_files(self, tmp_path) -> None:
        cert = tmp_path / "a.crt"
        cert.write_text("cert")
        assert not AppConfig(ssl_certfile=cert, ssl_keyfile=tmp_path / "a.key").tls_enabled


class TestLoadConfig:
    def test_legacy_keys(self, tmp_path) -> None:
        path = _write(tmp_path / "environment.json", {"PORT": 3000, "PORT_HTTPS": 3443})
        config = load_config(path)
        assert config.port == 3000
        assert config.https_port == 3443

    def test_field_names(self, tmp_path) -> None:
        path = _write(tmp_path / "environment.json", {"host": "127.0.0.1", "debug": True})
        config = load_config(path)
        assert config.host == "127.0.0.1"
        assert config.debug is True

    def test_lists_become_tuples(self, tmp_path) -> None:
        path = _write(tmp_path / "environment.json", {"cors_origins": ["https://a.example"]})
        assert load_config(path).cors_origins == ("https://a.example",)

    def test_relative_paths_resolve_against_file(self, tmp_path) -> None:
        path = _write(
            tmp_path / "environment.json",
            {"public_dir": "dist", "ssl_certfile": "SSL/cert.crt"},
        )
        config = load_config(path)
        assert Path(config.public_dir) == tmp_path / "dist"
        assert Path(config.ssl_certfile) == tmp_path / "SSL" / "cert.crt"

    def test_absolute_paths_kept(self, tmp_path) -> None:
        target = str(tmp_path / "elsewhere")
        path = _write(tmp_path / "environment.json", {"public_dir": target})
        assert load_config(path).public_dir == target

    def test_overrides_win(self, tmp_path) -> None:
        path = _write(tmp_path / "environment.json", {"PORT": 3000})
        assert load_config(path, port=4000).port == 4000

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path) -> None:
        path = tmp_path / "environment.json"
        path.write_text("{PORT: 3000")
        with pytest.raises(ConfigurationError, match="not valid JSON"):
            load_config(path)

    def test_not_an_object(self, tmp_path) -> None:
        path = _write(tmp_path / "environment.json", [3000])
        with pytest.raises(ConfigurationError, match="JSON object"):
            load_config(path)

    def test_unknown_key(self, tmp_path) -> None:
        path = _write(tmp_path / "environment.json", {"PROT": 3000})
        with pytest.raises(ConfigurationError, match="PROT"):
            load_config(path)
