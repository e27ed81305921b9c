"""
Configuration de GameHub API Proxy.
"""

from .loader import load_config, reload_config, get_config
from .settings import Settings, UpstreamConfig, CredentialConfig, FallbackConfig

__all__ = [
    "load_config",
    "reload_config",
    "get_config",
    "Settings",
    "UpstreamConfig",
    "CredentialConfig",
    "FallbackConfig",
]
