"""
Tests du chargement de configuration.
"""
import pytest

from gamehub_proxy.config import loader
from gamehub_proxy.config.settings import Settings
from gamehub_proxy.core.constants import (
    DEFAULT_REFRESHER_AUTH_VALUE,
    DEFAULT_SECRET_KEY,
    DEFAULT_STATIC_BASE_URL,
)
from gamehub_proxy.core.exceptions import ConfigurationError

ENV_VARS = [
    "GAMEHUB_STATIC_BASE_URL",
    "GAMEHUB_METADATA_BASE_URL",
    "GAMEHUB_NEWS_BASE_URL",
    "TOKEN_REFRESHER_URL",
    "GAMEHUB_SECRET_KEY",
    "TOKEN_REFRESHER_AUTH",
    loader.CONFIG_PATH_ENV,
]

CONFIG_TOML = """
[upstreams]
static_base_url = "https://static.example/"
token_refresher_url = "${TOKEN_REFRESHER_URL}"

[credentials]
secret_key = "${GAMEHUB_SECRET_KEY}"
refresher_auth_value = "${TOKEN_REFRESHER_AUTH}"

[fallback]
cache_ttl_seconds = 120

[http]
timeout = 12
"""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    loader._clear_config_cache()
    yield
    loader._clear_config_cache()


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(CONFIG_TOML, encoding="utf-8")
    return path


def test_missing_file_raises(tmp_path):
    with pytest.raises(ConfigurationError) as exc_info:
        loader.load_config(str(tmp_path / "absent.toml"))
    assert exc_info.value.code == "config_error"


def test_invalid_toml_raises(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("[upstreams\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        loader.load_config(str(path))


def test_env_expansion(config_file, monkeypatch):
    monkeypatch.setenv("TOKEN_REFRESHER_URL", "https://refresher.example")
    config = loader.load_config(str(config_file))
    assert config["upstreams"]["token_refresher_url"] == "https://refresher.example"


def test_unexpanded_values_fall_back_to_defaults(config_file):
    settings = Settings.from_config(loader.load_config(str(config_file)))
    assert settings.upstreams.token_refresher_url == ""
    assert settings.credentials.secret_key == DEFAULT_SECRET_KEY
    assert settings.credentials.refresher_auth_value == DEFAULT_REFRESHER_AUTH_VALUE


def test_sections_parsed(config_file):
    settings = Settings.from_config(loader.load_config(str(config_file)))
    assert settings.upstreams.static_base_url == "https://static.example"
    assert settings.fallback.cache_ttl_seconds == 120
    assert settings.fallback.cache_enabled is True
    assert settings.http_timeout == 12.0
    assert settings.credentials.token_ttl_seconds == 14400


def test_env_overrides_file(config_file, monkeypatch):
    monkeypatch.setenv("GAMEHUB_STATIC_BASE_URL", "https://mirror.example/")
    monkeypatch.setenv("GAMEHUB_SECRET_KEY", "self-hosted-secret")
    settings = Settings.from_config(loader.load_config(str(config_file)))
    assert settings.upstreams.static_base_url == "https://mirror.example"
    assert settings.credentials.secret_key == "self-hosted-secret"


def test_config_path_from_env(config_file, monkeypatch):
    monkeypatch.setenv(loader.CONFIG_PATH_ENV, str(config_file))
    config = loader.get_config()
    assert config["fallback"]["cache_ttl_seconds"] == 120


def test_reload_config(config_file):
    loader.load_config(str(config_file))
    config_file.write_text('[http]\ntimeout = 3\n', encoding="utf-8")
    assert loader.load_config(str(config_file))["http"]["timeout"] == 12
    assert loader.reload_config(str(config_file))["http"]["timeout"] == 3


def test_empty_config_uses_defaults():
    settings = Settings.from_config({})
    assert settings.upstreams.static_base_url == DEFAULT_STATIC_BASE_URL
    assert settings.static_url("/base/getBaseInfo") == f"{DEFAULT_STATIC_BASE_URL}/base/getBaseInfo"


def test_token_cache_key(settings):
    assert settings.token_cache_key == "https://refresher.test/token-cached"


def test_credentials_not_compiled_in(config_file):
    settings = Settings.from_config(loader.load_config(str(config_file)))
    assert settings.credentials.secret_key == ""
    assert settings.credentials.refresher_auth_value == ""


def test_refresher_auth_env_override(config_file, monkeypatch):
    monkeypatch.setenv("TOKEN_REFRESHER_AUTH", "internal-auth")
    settings = Settings.from_config(loader.load_config(str(config_file)))
    assert settings.credentials.refresher_auth_value == "internal-auth"
