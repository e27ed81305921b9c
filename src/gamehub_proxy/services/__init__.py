"""
Services applicatifs: cache du token et cache edge du proxy de repli.
"""

from .token_cache import TokenCache, extract_token, mask_token
from .edge_cache import EdgeCache, CachedResponse

__all__ = [
    "TokenCache",
    "extract_token",
    "mask_token",
    "EdgeCache",
    "CachedResponse",
]
