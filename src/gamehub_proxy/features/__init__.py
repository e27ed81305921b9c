"""
Fonctionnalités du proxy appliquées avant le routage.
"""

from .token_interceptor import InboundRequest, TokenInterceptor

__all__ = [
    "InboundRequest",
    "TokenInterceptor",
]
