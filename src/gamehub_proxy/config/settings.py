"""
Dataclasses pour la configuration.
"""
import os
from dataclasses import dataclass, field
from typing import Dict, Any, Optional

from ..core.constants import (
    DEFAULT_STATIC_BASE_URL,
    DEFAULT_METADATA_BASE_URL,
    DEFAULT_NEWS_BASE_URL,
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_PLACEHOLDER_TOKEN,
    DEFAULT_REFRESHER_AUTH_HEADER,
    DEFAULT_REFRESHER_AUTH_VALUE,
    DEFAULT_SECRET_KEY,
    TOKEN_CACHE_TTL,
    TOKEN_CACHE_SUFFIX,
    FALLBACK_CACHE_TTL,
    FALLBACK_CACHE_MAX_ENTRIES,
)
from .loader import get_section, is_unexpanded

# Variables d'environnement prioritaires sur config.toml
ENV_OVERRIDES = {
    "static_base_url": "GAMEHUB_STATIC_BASE_URL",
    "metadata_base_url": "GAMEHUB_METADATA_BASE_URL",
    "news_base_url": "GAMEHUB_NEWS_BASE_URL",
    "token_refresher_url": "TOKEN_REFRESHER_URL",
    "secret_key": "GAMEHUB_SECRET_KEY",
    "refresher_auth_value": "TOKEN_REFRESHER_AUTH",
}


def _pick(data: Dict[str, Any], key: str, default: Any) -> Any:
    """Lit une clé en ignorant les `${VAR}` non résolus."""
    value = data.get(key, default)
    if value is None or is_unexpanded(value):
        return default
    return value


def _env(name: str) -> Optional[str]:
    value = os.environ.get(name)
    return value if value else None


@dataclass
class UpstreamConfig:
    """URLs de base des upstreams."""
    static_base_url: str = DEFAULT_STATIC_BASE_URL
    metadata_base_url: str = DEFAULT_METADATA_BASE_URL
    news_base_url: str = DEFAULT_NEWS_BASE_URL
    token_refresher_url: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UpstreamConfig":
        """Crée une instance depuis un dictionnaire."""
        values = {
            "static_base_url": _pick(data, "static_base_url", DEFAULT_STATIC_BASE_URL),
            "metadata_base_url": _pick(data, "metadata_base_url", DEFAULT_METADATA_BASE_URL),
            "news_base_url": _pick(data, "news_base_url", DEFAULT_NEWS_BASE_URL),
            "token_refresher_url": _pick(data, "token_refresher_url", ""),
        }
        for key in values:
            override = _env(ENV_OVERRIDES[key])
            if override:
                values[key] = override
        return cls(**{k: v.rstrip("/") for k, v in values.items()})


@dataclass
class CredentialConfig:
    """Configuration de l'intercepteur de token."""
    secret_key: str = DEFAULT_SECRET_KEY
    placeholder_token: str = DEFAULT_PLACEHOLDER_TOKEN
    refresher_auth_header: str = DEFAULT_REFRESHER_AUTH_HEADER
    refresher_auth_value: str = DEFAULT_REFRESHER_AUTH_VALUE
    token_ttl_seconds: int = TOKEN_CACHE_TTL

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CredentialConfig":
        """Crée une instance depuis un dictionnaire."""
        return cls(
            secret_key=_env(ENV_OVERRIDES["secret_key"]) or _pick(data, "secret_key", DEFAULT_SECRET_KEY),
            placeholder_token=_pick(data, "placeholder_token", DEFAULT_PLACEHOLDER_TOKEN),
            refresher_auth_header=_pick(data, "refresher_auth_header", DEFAULT_REFRESHER_AUTH_HEADER),
            refresher_auth_value=(
                _env(ENV_OVERRIDES["refresher_auth_value"])
                or _pick(data, "refresher_auth_value", DEFAULT_REFRESHER_AUTH_VALUE)
            ),
            token_ttl_seconds=int(_pick(data, "token_ttl_seconds", TOKEN_CACHE_TTL)),
        )


@dataclass
class FallbackConfig:
    """Configuration du proxy de repli vers le dépôt statique."""
    cache_enabled: bool = True
    cache_ttl_seconds: int = FALLBACK_CACHE_TTL
    cache_max_entries: int = FALLBACK_CACHE_MAX_ENTRIES

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FallbackConfig":
        """Crée une instance depuis un dictionnaire."""
        return cls(
            cache_enabled=bool(data.get("cache_enabled", True)),
            cache_ttl_seconds=int(data.get("cache_ttl_seconds", FALLBACK_CACHE_TTL)),
            cache_max_entries=int(data.get("cache_max_entries", FALLBACK_CACHE_MAX_ENTRIES)),
        )


@dataclass
class Settings:
    """Configuration globale de l'application."""
    upstreams: UpstreamConfig = field(default_factory=UpstreamConfig)
    credentials: CredentialConfig = field(default_factory=CredentialConfig)
    fallback: FallbackConfig = field(default_factory=FallbackConfig)
    http_timeout: float = DEFAULT_HTTP_TIMEOUT

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "Settings":
        """Crée une instance depuis la configuration chargée."""
        http = get_section(config, "http")
        return cls(
            upstreams=UpstreamConfig.from_dict(get_section(config, "upstreams")),
            credentials=CredentialConfig.from_dict(get_section(config, "credentials")),
            fallback=FallbackConfig.from_dict(get_section(config, "fallback")),
            http_timeout=float(http.get("timeout", DEFAULT_HTTP_TIMEOUT)),
        )

    @property
    def token_cache_key(self) -> str:
        """Clé synthétique du token en cache."""
        return f"{self.upstreams.token_refresher_url}{TOKEN_CACHE_SUFFIX}"

    def static_url(self, path: str) -> str:
        """URL complète d'un chemin du dépôt statique."""
        return f"{self.upstreams.static_base_url}{path}"

    def metadata_url(self, path: str) -> str:
        """URL complète d'un endpoint du service de métadonnées."""
        return f"{self.upstreams.metadata_base_url}{path}"

    def news_url(self, path: str) -> str:
        """URL complète d'un endpoint de l'agrégateur de news."""
        return f"{self.upstreams.news_base_url}{path}"
