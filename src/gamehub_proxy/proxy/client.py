"""
Client HTTPX partagé pour les appels upstream.

Un seul AsyncClient est ouvert pendant la vie de l'application (lifespan
FastAPI). Aucun retry: un upstream en échec fait échouer la requête entière.
"""
from typing import Dict, List, Mapping, Optional, Tuple, Union

import httpx

from ..core.constants import DEFAULT_HTTP_TIMEOUT, HOP_BY_HOP_HEADERS

# Headers recalculés ou négociés par httpx pour la nouvelle connexion
_REWRITTEN_HEADERS = {"host", "content-length", "accept-encoding"}

HeaderTypes = Union[Mapping[str, str], List[Tuple[str, str]]]


def forwardable_headers(headers: Union[httpx.Headers, Mapping[str, str]]) -> List[Tuple[str, str]]:
    """
    Filtre les headers entrants avant de les relayer à un upstream.

    Args:
        headers: Headers de la requête entrante (les répétitions sont conservées)

    Returns:
        Paires (nom, valeur) sans Host, Content-Length, Accept-Encoding ni hop-by-hop
    """
    items = headers.multi_items() if isinstance(headers, httpx.Headers) else headers.items()
    return [
        (key, value)
        for key, value in items
        if key.lower() not in _REWRITTEN_HEADERS and key.lower() not in HOP_BY_HOP_HEADERS
    ]


def response_headers(headers: httpx.Headers) -> Dict[str, str]:
    """Recopie les headers d'une réponse upstream (sans hop-by-hop)."""
    return {
        key: value
        for key, value in headers.items()
        if key.lower() not in HOP_BY_HOP_HEADERS
    }


class UpstreamClient:
    """
    Client HTTP vers les upstreams (dépôt statique, métadonnées, news, refresher).

    Gère:
    - Un timeout global configurable
    - Le cycle de vie de la connexion (pool partagé)
    """

    def __init__(
        self,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "UpstreamClient":
        self.open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    def open(self) -> httpx.AsyncClient:
        """Ouvre le client sous-jacent (idempotent)."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout, connect=10.0),
                transport=self._transport,
                limits=httpx.Limits(
                    max_keepalive_connections=20,
                    max_connections=50
                )
            )
        return self._client

    async def aclose(self):
        """Ferme le client et ses connexions."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        return self.open()

    def build_request(
        self,
        method: str,
        url: str,
        headers: Optional[HeaderTypes] = None,
        content: Optional[bytes] = None
    ) -> httpx.Request:
        """Construit une requête HTTPX."""
        return self.client.build_request(method, url, headers=headers, content=content)

    async def get(
        self,
        url: str,
        headers: Optional[HeaderTypes] = None,
        params: Optional[Mapping[str, object]] = None
    ) -> httpx.Response:
        """GET et lecture complète de la réponse."""
        return await self.client.get(url, headers=headers, params=params)

    async def post(
        self,
        url: str,
        content: bytes,
        headers: Optional[HeaderTypes] = None
    ) -> httpx.Response:
        """POST d'un body brut et lecture complète de la réponse."""
        return await self.client.post(url, content=content, headers=headers)

    async def stream_get(self, url: str) -> httpx.Response:
        """
        GET en mode streaming.

        L'appelant doit fermer la réponse (`aclose`) une fois le body consommé.
        """
        request = self.build_request("GET", url)
        return await self.client.send(request, stream=True)


def create_upstream_client(
    timeout: float = DEFAULT_HTTP_TIMEOUT,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> UpstreamClient:
    """
    Crée un client upstream.

    Args:
        timeout: Timeout global en secondes
        transport: Transport httpx alternatif (tests)

    Returns:
        Instance de UpstreamClient
    """
    return UpstreamClient(timeout=timeout, transport=transport)
