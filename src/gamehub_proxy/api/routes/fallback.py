"""
Proxy de repli: toute requête non routée est relayée au dépôt statique.

Le statut et les headers upstream sont conservés, les headers CORS ajoutés
et `Cache-Control: public, max-age=300` imposé. Les réponses (non-200
comprises) restent 5 minutes dans le cache edge.
"""
import logging
from typing import Dict

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response, StreamingResponse

from ...config.settings import Settings
from ...features.token_interceptor import InboundRequest
from ...proxy.client import UpstreamClient, response_headers
from ...proxy.responses import with_cors
from ...services.edge_cache import CachedResponse, EdgeCache
from ..deps import get_edge_cache, get_settings, get_upstream, intercepted_request

logger = logging.getLogger(__name__)

router = APIRouter()

# OPTIONS est traité par le middleware avant routage; les autres méthodes
# arrivent par `method_not_routed`
FALLBACK_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD"]


def fallback_headers(upstream_headers: Dict[str, str], ttl: int) -> Dict[str, str]:
    """Headers upstream + CORS + Cache-Control imposé."""
    headers = with_cors(upstream_headers)
    headers["cache-control"] = f"public, max-age={ttl}"
    return headers


async def relay_to_static(
    inbound: InboundRequest,
    upstream: UpstreamClient,
    settings: Settings,
    edge_cache: EdgeCache
) -> Response:
    """
    Relaie le chemin brut (encodage conservé) au dépôt statique.

    Le chemin brut sert aussi de clé au cache edge.
    """
    path = inbound.path
    ttl = settings.fallback.cache_ttl_seconds

    cached = edge_cache.get(path)
    if cached is not None:
        logger.debug(f"[CACHE] Hit {path}")
        return Response(
            content=cached.body,
            status_code=cached.status_code,
            headers=fallback_headers(cached.headers, ttl),
        )

    upstream_response = await upstream.stream_get(settings.static_url(path))
    status_code = upstream_response.status_code
    headers = response_headers(upstream_response.headers)
    logger.debug(f"[PROXY] {inbound.method} {path} -> HTTP {status_code}")

    async def relay_body():
        chunks = []
        try:
            async for chunk in upstream_response.aiter_raw():
                chunks.append(chunk)
                yield chunk
        finally:
            await upstream_response.aclose()
        # Uniquement si le body a été lu en entier
        edge_cache.put(path, CachedResponse(status_code, headers, b"".join(chunks)))

    return StreamingResponse(
        relay_body(),
        status_code=status_code,
        headers=fallback_headers(headers, ttl),
    )


@router.api_route("/{full_path:path}", methods=FALLBACK_METHODS)
async def proxy_to_static(
    inbound: InboundRequest = Depends(intercepted_request),
    upstream: UpstreamClient = Depends(get_upstream),
    settings: Settings = Depends(get_settings),
    edge_cache: EdgeCache = Depends(get_edge_cache),
):
    return await relay_to_static(inbound, upstream, settings, edge_cache)


async def method_not_routed(request: Request, exc: Exception) -> Response:
    """
    Gestionnaire du 405 de routage.

    Le repli couvre tous les chemins: un 405 ne vient que d'une méthode
    hors FALLBACK_METHODS (PROPFIND, ...), relayée comme les autres.
    """
    inbound = await intercepted_request(request)
    return await relay_to_static(
        inbound,
        get_upstream(request),
        get_settings(request),
        get_edge_cache(request),
    )
