"""Tests for settings.py: NavigatorConfig and load_settings."""

import os
from pathlib import Path

import pytest

from wsnav.settings import NavigatorConfig, load_settings

BASIC = """\
[navigator]
persistence_url = "http://localhost:8080/api"
execution_url = "http://localhost:8080/tests"
"""


def write_settings(config_dir: Path, body: str) -> None:
    config_dir.mkdir(parents=True, exist_ok=True)
    (config_dir / "settings.toml").write_text(body)


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    # keep a developer's local .env out of the tests
    monkeypatch.chdir(tmp_path)


class TestNavigatorConfig:
    def test_settings_file(self, tmp_path: Path):
        cfg = NavigatorConfig(
            persistence_url="http://p", execution_url="http://e", config_dir=tmp_path
        )
        assert cfg.settings_file == tmp_path / "settings.toml"

    def test_defaults(self, tmp_path: Path):
        cfg = NavigatorConfig(
            persistence_url="http://p", execution_url="http://e", config_dir=tmp_path
        )
        assert cfg.auth_token == ""
        assert cfg.poll_interval == 1.0
        assert cfg.error_delay == 1.0
        assert cfg.request_timeout == 10.0
        assert cfg.refresh_interval == 2.0


class TestLoadSettings:
    def test_basic(self, tmp_path: Path):
        config_dir = tmp_path / "cfg"
        write_settings(config_dir, BASIC)

        cfg = load_settings(config_dir)
        assert cfg.persistence_url == "http://localhost:8080/api"
        assert cfg.execution_url == "http://localhost:8080/tests"
        assert cfg.config_dir == config_dir
        assert cfg.poll_interval == 1.0

    def test_tuning_values(self, tmp_path: Path):
        write_settings(
            tmp_path,
            BASIC + "poll_interval = 0.5\nerror_delay = 3\nrefresh_interval = 0\n",
        )
        cfg = load_settings(tmp_path)
        assert cfg.poll_interval == 0.5
        assert cfg.error_delay == 3.0
        assert cfg.refresh_interval == 0.0

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "nowhere")

    def test_missing_url(self, tmp_path: Path):
        write_settings(tmp_path, '[navigator]\npersistence_url = "http://p"\n')
        with pytest.raises(ValueError, match="execution_url"):
            load_settings(tmp_path)

    def test_missing_section(self, tmp_path: Path):
        write_settings(tmp_path, "[other]\nkey = 1\n")
        with pytest.raises(ValueError, match="persistence_url"):
            load_settings(tmp_path)

    def test_bad_number(self, tmp_path: Path):
        write_settings(tmp_path, BASIC + 'poll_interval = "often"\n')
        with pytest.raises(ValueError, match="poll_interval"):
            load_settings(tmp_path)

    def test_negative_number(self, tmp_path: Path):
        write_settings(tmp_path, BASIC + "error_delay = -1\n")
        with pytest.raises(ValueError, match="error_delay"):
            load_settings(tmp_path)

    def test_token_from_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("WSNAV_TEST_TOKEN", "s3cret")
        write_settings(tmp_path, BASIC + 'auth_token_env = "WSNAV_TEST_TOKEN"\n')
        assert load_settings(tmp_path).auth_token == "s3cret"

    def test_token_from_dotenv(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("WSNAV_DOTENV_TOKEN", raising=False)
        write_settings(tmp_path, BASIC + 'auth_token_env = "WSNAV_DOTENV_TOKEN"\n')
        (tmp_path / ".env").write_text("WSNAV_DOTENV_TOKEN=from-file\n")

        try:
            cfg = load_settings(tmp_path)
        finally:
            os.environ.pop("WSNAV_DOTENV_TOKEN", None)
        assert cfg.auth_token == "from-file"

    def test_unset_token_env_warns(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        caplog: pytest.LogCaptureFixture,
    ):
        monkeypatch.delenv("WSNAV_MISSING_TOKEN", raising=False)
        write_settings(tmp_path, BASIC + 'auth_token_env = "WSNAV_MISSING_TOKEN"\n')

        cfg = load_settings(tmp_path)
        assert cfg.auth_token == ""
        assert "WSNAV_MISSING_TOKEN" in caplog.text

    def test_default_dir_from_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("WSNAV_DIR", str(tmp_path))
        write_settings(tmp_path, BASIC)
        assert load_settings().config_dir == tmp_path
