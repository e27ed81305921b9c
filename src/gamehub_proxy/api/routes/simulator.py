"""
Routes /simulator/*: configuration GPU et listes de composants.
"""
import logging

from fastapi import APIRouter, Depends

from ...config.settings import Settings
from ...core.constants import DEFAULT_MANIFEST_PAGE_SIZE
from ...features.token_interceptor import InboundRequest
from ...proxy.client import UpstreamClient
from ...proxy.responses import json_response, error_response, dumps_compact
from ...proxy.transformers import (
    int_or_default,
    manifest_path_for_type,
    normalize_manifest,
    paginate_manifest,
    sanitize_script_body,
)
from ..deps import get_settings, get_upstream, intercepted_request

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/simulator/executeScript")
async def execute_script(
    inbound: InboundRequest = Depends(intercepted_request),
    upstream: UpstreamClient = Depends(get_upstream),
    settings: Settings = Depends(get_settings),
):
    """
    Relaie la demande de config GPU sans l'empreinte de l'appareil.

    Les headers d'origine ne sont pas transmis.
    """
    body = inbound.json_object()
    sanitized_body = sanitize_script_body(body)

    logger.info(
        f"[PRIVACY] executeScript - GPU vendor: {body.get('gpu_vendor')}, empreinte appareil retirée"
    )

    response = await upstream.post(
        settings.metadata_url("/simulator/executeScript"),
        content=dumps_compact(sanitized_body).encode("utf-8"),
        headers={"Content-Type": "application/json"},
    )
    return json_response(response.json())


@router.post("/simulator/v2/getComponentList")
async def get_component_list(
    inbound: InboundRequest = Depends(intercepted_request),
    upstream: UpstreamClient = Depends(get_upstream),
    settings: Settings = Depends(get_settings),
):
    """
    Liste de composants lue depuis le manifest du dépôt statique.

    Le manifest contient la liste complète: la pagination est faite ici.
    """
    body = inbound.json_object()
    manifest_path = manifest_path_for_type(body.get("type"))
    page = int_or_default(body.get("page"), 1)
    page_size = int_or_default(body.get("page_size"), DEFAULT_MANIFEST_PAGE_SIZE)

    if manifest_path is None:
        return error_response(400, "Invalid type parameter")

    response = await upstream.get(settings.static_url(manifest_path))

    if not response.is_success:
        return error_response(500, "Failed to fetch manifest")

    manifest = normalize_manifest(response.json())
    return json_response(paginate_manifest(manifest, page, page_size))
