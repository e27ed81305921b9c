"""
Cache du vrai token GameHub.

Le token est obtenu auprès du refresher (`GET <refresher>/token`) puis gardé
4 heures dans un TTLCache. L'écriture en cache est lancée en tâche de fond,
jamais attendue par la requête en cours.
"""
import asyncio
import logging
from typing import Any, Dict, Optional, Set

from cachetools import TTLCache

from ..config.settings import Settings
from ..core.constants import TOKEN_FIELD
from ..proxy.client import UpstreamClient

logger = logging.getLogger(__name__)


def mask_token(token: str) -> str:
    """Aperçu court d'un token pour les logs."""
    if len(token) <= 8:
        return "***"
    return f"{token[:6]}..."


def extract_token(payload: Any) -> Optional[str]:
    """Extrait le champ `token` d'un payload du refresher."""
    if isinstance(payload, dict):
        token = payload.get(TOKEN_FIELD)
        if isinstance(token, str) and token:
            return token
    return None


class TokenCache:
    """
    Résout le vrai token à substituer au token factice.

    Gère:
    - La lecture du cache (clé synthétique fixe)
    - L'appel au refresher en cas de miss
    - L'écriture en cache en tâche détachée
    """

    def __init__(self, upstream: UpstreamClient, settings: Settings):
        self.upstream = upstream
        self.settings = settings
        self.cache_key = settings.token_cache_key
        self._cache: TTLCache = TTLCache(maxsize=1, ttl=settings.credentials.token_ttl_seconds)
        self._pending: Set[asyncio.Task] = set()

    @property
    def enabled(self) -> bool:
        """False si aucun refresher n'est configuré."""
        return bool(self.settings.upstreams.token_refresher_url)

    def get_cached(self) -> Optional[Dict[str, Any]]:
        """Retourne le payload en cache ou None (expiré ou absent)."""
        return self._cache.get(self.cache_key)

    async def _store(self, payload: Dict[str, Any]):
        self._cache[self.cache_key] = payload

    def schedule_store(self, payload: Dict[str, Any]) -> asyncio.Task:
        """
        Planifie l'écriture en cache sans l'attendre.

        La référence à la tâche est gardée jusqu'à sa fin.
        """
        task = asyncio.create_task(self._store(payload))
        self._pending.add(task)
        task.add_done_callback(self._on_store_done)
        return task

    def _on_store_done(self, task: asyncio.Task):
        self._pending.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"[TOKEN] Échec écriture cache: {error}")

    async def drain(self):
        """Attend les écritures en cache en cours (arrêt, tests)."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def fetch_fresh(self) -> Optional[str]:
        """
        Demande un token neuf au refresher.

        Returns:
            Le token, ou None si le refresher répond en erreur
        """
        credentials = self.settings.credentials
        headers = {}
        if credentials.refresher_auth_value:
            headers[credentials.refresher_auth_header] = credentials.refresher_auth_value
        response = await self.upstream.get(
            f"{self.settings.upstreams.token_refresher_url}/token",
            headers=headers,
        )

        if not response.is_success:
            logger.error(
                f"[TOKEN] Échec récupération du token auprès du refresher (HTTP {response.status_code})"
            )
            return None

        payload = response.json()
        token = extract_token(payload)
        if token is None:
            logger.error("[TOKEN] Réponse du refresher sans champ token")
            return None

        self.schedule_store(payload)
        logger.info(f"[TOKEN] Nouveau token récupéré et mis en cache: {mask_token(token)}")
        return token

    async def resolve(self) -> Optional[str]:
        """
        Retourne le vrai token (cache puis refresher).

        Returns:
            Le token, ou None s'il n'a pas pu être obtenu
        """
        if not self.enabled:
            logger.warning("[TOKEN] Aucun refresher configuré, token factice conservé")
            return None

        cached = self.get_cached()
        if cached is not None:
            token = extract_token(cached)
            if token:
                logger.info(f"[TOKEN] Utilisation du token en cache: {mask_token(token)}")
                return token

        logger.info("[TOKEN] Cache miss, récupération d'un token neuf...")
        return await self.fetch_fresh()
