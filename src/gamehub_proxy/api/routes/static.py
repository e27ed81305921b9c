"""
Routes servies directement depuis le dépôt statique.
"""
from fastapi import APIRouter, Depends

from ...config.settings import Settings
from ...core.constants import STATIC_JSON_ROUTES, STEAM_HOST_PATH
from ...proxy.client import UpstreamClient
from ...proxy.responses import json_response, text_response, error_response
from ..deps import get_settings, get_upstream

router = APIRouter()


async def proxy_static_json(upstream: UpstreamClient, settings: Settings, path: str):
    """GET d'un JSON du dépôt statique, renvoyé tel quel (500 si échec)."""
    response = await upstream.get(settings.static_url(path))
    if not response.is_success:
        return error_response(500, STATIC_JSON_ROUTES[path])
    return json_response(response.json())


@router.post("/base/getBaseInfo")
async def get_base_info(
    upstream: UpstreamClient = Depends(get_upstream),
    settings: Settings = Depends(get_settings),
):
    return await proxy_static_json(upstream, settings, "/base/getBaseInfo")


@router.post("/cloud/game/check_user_timer")
async def check_user_timer(
    upstream: UpstreamClient = Depends(get_upstream),
    settings: Settings = Depends(get_settings),
):
    """Timer utilisateur (synchronisation cloud Steam)."""
    return await proxy_static_json(upstream, settings, "/cloud/game/check_user_timer")


@router.post("/game/getDnsIpPool")
async def get_dns_ip_pool(
    upstream: UpstreamClient = Depends(get_upstream),
    settings: Settings = Depends(get_settings),
):
    """Pool DNS (vide: connexions Steam directes)."""
    return await proxy_static_json(upstream, settings, "/game/getDnsIpPool")


@router.get("/game/getSteamHost")
async def get_steam_host(
    upstream: UpstreamClient = Depends(get_upstream),
    settings: Settings = Depends(get_settings),
):
    """IPs des CDN Steam, en texte brut."""
    response = await upstream.get(settings.static_url(STEAM_HOST_PATH))
    if not response.is_success:
        return error_response(500, "Failed to fetch Steam hosts")
    return text_response(response.text)
