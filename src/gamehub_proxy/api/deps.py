"""
Dépendances FastAPI partagées par les routes.
"""
import httpx
from fastapi import Request

from ..config.settings import Settings
from ..features.token_interceptor import InboundRequest, TokenInterceptor
from ..proxy.client import UpstreamClient
from ..services.edge_cache import EdgeCache


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_upstream(request: Request) -> UpstreamClient:
    return request.app.state.upstream


def get_edge_cache(request: Request) -> EdgeCache:
    return request.app.state.edge_cache


def raw_request_path(request: Request) -> str:
    """
    Chemin tel qu'envoyé par le client, encodage `%XX` conservé.

    `request.url.path` est décodé: `%3F` y deviendrait un vrai `?`.
    """
    raw_path = request.scope.get("raw_path")
    if not raw_path:
        return request.url.path
    return raw_path.split(b"?", 1)[0].decode("latin-1")


async def intercepted_request(request: Request) -> InboundRequest:
    """
    Lit la requête entrante et applique l'intercepteur de token.

    Déclarée au niveau du router: elle s'exécute avant chaque route, et
    FastAPI met son résultat en cache pour la durée de la requête.
    """
    inbound = InboundRequest(
        method=request.method,
        path=raw_request_path(request),
        headers=httpx.Headers(request.headers.raw),
        body=await request.body(),
    )
    interceptor: TokenInterceptor = request.app.state.interceptor
    return await interceptor.intercept(inbound)
