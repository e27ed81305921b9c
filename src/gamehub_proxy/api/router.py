"""
Router principal de l'API.

L'ordre d'inclusion est l'ordre de priorité: routes exactes d'abord,
proxy de repli en dernier.
"""
from fastapi import APIRouter, Depends

from .deps import intercepted_request
from .routes import card, simulator, static, fallback

# L'intercepteur de token s'applique à toutes les routes, repli compris
api_router = APIRouter(dependencies=[Depends(intercepted_request)])

api_router.include_router(card.router, tags=["card"])
api_router.include_router(simulator.router, tags=["simulator"])
api_router.include_router(static.router, tags=["static"])

# Doit rester la dernière route enregistrée
api_router.include_router(fallback.router, tags=["fallback"])
