"""
Intercepteur du token factice (détection, substitution, re-signature).
"""

from .interceptor import (
    InboundRequest,
    Detection,
    TokenInterceptor,
    detect_placeholder,
    substitute_token,
    resign_body,
)

__all__ = [
    "InboundRequest",
    "Detection",
    "TokenInterceptor",
    "detect_placeholder",
    "substitute_token",
    "resign_body",
]
