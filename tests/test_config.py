import pytest

from core.config import AppSettings, get_user_config_dir, load_config_file
from core.errors import ConfigError


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("HEAVERC_API_BASE_URL", "http://lxbox.host.s:8081/")
    monkeypatch.setenv("HEAVERC_HTTP_TIMEOUT_SECONDS", "3.5")
    settings = AppSettings(_env_file=None)
    assert settings.api_base_url == "http://lxbox.host.s:8081/"
    assert settings.http_timeout_seconds == 3.5


def test_defaults(monkeypatch):
    monkeypatch.delenv("HEAVERC_API_BASE_URL", raising=False)
    settings = AppSettings(_env_file=None)
    assert settings.api_base_url is None
    assert settings.user_agent.startswith("heaverc/")


def test_user_config_dir_honours_xdg(monkeypatch, tmp_path):
    monkeypatch.setattr("sys.platform", "linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert get_user_config_dir() == tmp_path / "heaverc"


class TestConfigFile:
    def test_reads_base_url(self, tmp_path):
        path = tmp_path / "heaverc.toml"
        path.write_text('[api]\nbase_url = "http://lxbox.host.s:8081/"\n')
        assert load_config_file(path) == "http://lxbox.host.s:8081/"

    def test_missing_key(self, tmp_path):
        path = tmp_path / "heaverc.toml"
        path.write_text("[api]\n")
        with pytest.raises(ConfigError, match="base_url"):
            load_config_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config_file(tmp_path / "absent.toml")

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / "heaverc.toml"
        path.write_text("[api\n")
        with pytest.raises(ConfigError):
            load_config_file(path)
