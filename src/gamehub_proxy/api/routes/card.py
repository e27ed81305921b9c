"""
Routes /card/*: fiche jeu, news et icônes.
"""
import logging
import time

from fastapi import APIRouter, Depends

from ...config.settings import Settings
from ...core.constants import DEFAULT_NEWS_PAGE_SIZE
from ...core.signature import render_value
from ...features.token_interceptor import InboundRequest
from ...proxy.client import UpstreamClient, forwardable_headers
from ...proxy.responses import json_response, error_response
from ...proxy.transformers import int_or_default, strip_game_detail
from ..deps import get_settings, get_upstream, intercepted_request

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/card/getGameDetail")
async def get_game_detail(
    inbound: InboundRequest = Depends(intercepted_request),
    upstream: UpstreamClient = Depends(get_upstream),
    settings: Settings = Depends(get_settings),
):
    """
    Relaie la fiche jeu au service de métadonnées.

    Headers et body partent tels quels (la signature en dépend); les
    sections de recommandation sont retirées de la réponse.
    """
    response = await upstream.post(
        settings.metadata_url("/card/getGameDetail"),
        content=inbound.body,
        headers=forwardable_headers(inbound.headers),
    )
    return json_response(strip_game_detail(response.json()))


@router.post("/card/getNewsList")
async def get_news_list(
    inbound: InboundRequest = Depends(intercepted_request),
    upstream: UpstreamClient = Depends(get_upstream),
    settings: Settings = Depends(get_settings),
):
    """Liste de news paginée via l'agrégateur."""
    body = inbound.json_object()
    page = int_or_default(body.get("page"), 1)
    page_size = int_or_default(body.get("page_size"), DEFAULT_NEWS_PAGE_SIZE)

    response = await upstream.get(
        settings.news_url("/api/news/list"),
        params={"page": page, "page_size": page_size},
    )

    if not response.is_success:
        logger.warning(f"[NEWS] Agrégateur en erreur (HTTP {response.status_code})")
        # Enveloppe vide en HTTP 200: l'application affiche simplement une liste vide
        return error_response(200, "Failed to fetch news", time="", data=[], code=500)

    return json_response(response.json())


@router.post("/card/getNewsGuideDetail")
async def get_news_guide_detail(
    inbound: InboundRequest = Depends(intercepted_request),
    upstream: UpstreamClient = Depends(get_upstream),
    settings: Settings = Depends(get_settings),
):
    """Détail d'une news via l'agrégateur."""
    body = inbound.json_object()
    news_id = body.get("id")

    if not news_id:
        return error_response(400, "Missing id parameter", time="", data=None)

    response = await upstream.get(
        settings.news_url(f"/api/news/detail/{render_value(news_id)}")
    )

    if not response.is_success:
        return error_response(404, "News not found", time="", data=None)

    return json_response(response.json())


@router.post("/card/getGameIcon")
async def get_game_icon():
    """Icônes de jeux: réponse vide, aucun upstream."""
    return json_response({
        "code": 200,
        "msg": "",
        "time": str(int(time.time())),
        "data": []
    })
