"""
GameHub API Proxy - Application FastAPI Factory.
Routage, interception du token factice et proxy vers le dépôt statique.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, Request

from .api.router import api_router
from .api.routes.fallback import method_not_routed
from .config.loader import load_config
from .config.settings import Settings
from .features.token_interceptor import TokenInterceptor
from .proxy.client import create_upstream_client
from .proxy.responses import error_response, preflight_response
from .services.edge_cache import EdgeCache
from .services.token_cache import TokenCache

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> FastAPI:
    """
    Factory pour créer l'application FastAPI.

    Args:
        settings: Configuration explicite (sinon chargée depuis config.toml)
        transport: Transport httpx alternatif pour les upstreams (tests)

    Returns:
        Instance configurée de FastAPI
    """
    if settings is None:
        settings = Settings.from_config(load_config())

    upstream = create_upstream_client(timeout=settings.http_timeout, transport=transport)
    token_cache = TokenCache(upstream, settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Gestion du cycle de vie de l'application."""
        _startup(app)
        yield
        await _shutdown(app)

    # Pas de /docs ni /openapi.json: tout chemin non routé part au dépôt statique
    app = FastAPI(
        title="GameHub API Proxy",
        description="Routeur entre l'application GameHub et ses upstreams",
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.upstream = upstream
    app.state.token_cache = token_cache
    app.state.interceptor = TokenInterceptor(token_cache, settings.credentials)
    app.state.edge_cache = EdgeCache.from_config(settings.fallback)

    @app.middleware("http")
    async def preflight_and_errors(request: Request, call_next):
        """
        Preflight OPTIONS avant tout routage, puis frontière d'erreur unique:
        toute exception devient un 500 `{code, msg: "Error: ..."}` avec CORS.
        """
        if request.method == "OPTIONS":
            return preflight_response()
        try:
            return await call_next(request)
        except Exception as e:
            logger.exception(f"[PROXY] Erreur non gérée sur {request.method} {request.url.path}")
            return error_response(500, f"Error: {e}")

    app.include_router(api_router)
    # Méthodes hors du jeu du repli (PROPFIND, ...): relayées elles aussi
    app.add_exception_handler(405, method_not_routed)

    return app


def _startup(app: FastAPI):
    """Initialisation au démarrage."""
    settings: Settings = app.state.settings
    app.state.upstream.open()

    print("🚀 Démarrage de GameHub API Proxy...")
    print(f"✅ Dépôt statique: {settings.upstreams.static_base_url}")
    print(f"✅ Service de métadonnées: {settings.upstreams.metadata_base_url}")
    print(f"✅ Agrégateur de news: {settings.upstreams.news_base_url}")
    if settings.upstreams.token_refresher_url:
        print(f"✅ Refresher de token: {settings.upstreams.token_refresher_url}")
    else:
        print("⚠️  Aucun refresher de token configuré (TOKEN_REFRESHER_URL)")
    if not settings.credentials.secret_key:
        print("⚠️  Aucun secret de signature configuré (GAMEHUB_SECRET_KEY)")
        logger.warning("[CONFIG] Secret de signature vide: les bodies re-signés seront rejetés")
    if settings.upstreams.token_refresher_url and not settings.credentials.refresher_auth_value:
        print("⚠️  Aucune authentification du refresher configurée (TOKEN_REFRESHER_AUTH)")
        logger.warning("[CONFIG] Header d'authentification du refresher vide")


async def _shutdown(app: FastAPI):
    """Arrêt de l'application."""
    print("\n👋 Arrêt du serveur...")

    await app.state.token_cache.drain()
    await app.state.upstream.aclose()

    print("✅ Serveur arrêté proprement")
