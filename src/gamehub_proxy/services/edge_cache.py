"""
Cache des réponses du proxy de repli.

Remplace le cache edge de la plateforme d'origine ("cache everything",
5 minutes): toute réponse upstream est gardée, y compris les non-200.
"""
from dataclasses import dataclass, field
from typing import Dict, Optional

from cachetools import TTLCache

from ..config.settings import FallbackConfig


@dataclass
class CachedResponse:
    """Réponse upstream complète mise en cache."""
    status_code: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""


class EdgeCache:
    """Cache TTL des réponses du dépôt statique, indexé par chemin."""

    def __init__(self, ttl: int, max_entries: int, enabled: bool = True):
        self.enabled = enabled
        self.ttl = ttl
        self._cache: TTLCache = TTLCache(maxsize=max_entries, ttl=ttl)

    @classmethod
    def from_config(cls, config: FallbackConfig) -> "EdgeCache":
        return cls(
            ttl=config.cache_ttl_seconds,
            max_entries=config.cache_max_entries,
            enabled=config.cache_enabled,
        )

    def get(self, path: str) -> Optional[CachedResponse]:
        if not self.enabled:
            return None
        return self._cache.get(path)

    def put(self, path: str, entry: CachedResponse):
        if self.enabled:
            self._cache[path] = entry

    def clear(self):
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)
