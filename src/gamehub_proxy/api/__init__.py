"""
API HTTP de GameHub API Proxy.
"""

from .router import api_router

__all__ = ["api_router"]
