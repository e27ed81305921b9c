"""
Noyau de GameHub API Proxy: constantes, exceptions, signature.
"""

from .exceptions import (
    GameHubProxyError,
    ConfigurationError,
)
from .signature import generate_signature, build_sign_string, render_value

__all__ = [
    "GameHubProxyError",
    "ConfigurationError",
    "generate_signature",
    "build_sign_string",
    "render_value",
]
