"""
Interception du token factice.

L'application mobile envoie un token factice (`fake-token`) à la place du
vrai. Avant tout routage, le proxy le détecte dans les headers ou le body,
obtient le vrai token et le substitue, en recalculant la signature du body.
"""
import json
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

import httpx

from ...config.settings import CredentialConfig
from ...core.constants import SIGNATURE_FIELD, TOKEN_FIELD
from ...core.exceptions import GameHubProxyError
from ...core.signature import generate_signature
from ...proxy.responses import dumps_compact
from ...services.token_cache import TokenCache

logger = logging.getLogger(__name__)

AUTHORIZATION_HEADER = "authorization"
TOKEN_HEADER = "token"


@dataclass
class InboundRequest:
    """
    Requête entrante, body déjà lu.

    Les headers restent multi-valués (`x-a: 1` et `x-a: 2` sont relayés tous
    les deux) et insensibles à la casse.
    """
    method: str
    path: str
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    body: bytes = b""

    def __post_init__(self):
        if not isinstance(self.headers, httpx.Headers):
            self.headers = httpx.Headers(self.headers)

    def header(self, name: str) -> Optional[str]:
        return self.headers.get(name.lower())

    @property
    def text(self) -> str:
        return self.body.decode("utf-8")

    def json(self) -> Any:
        """Décode le body JSON (lève ValueError si invalide)."""
        return json.loads(self.body)

    def json_object(self) -> Dict[str, Any]:
        """Décode le body JSON et exige un objet."""
        body = self.json()
        if not isinstance(body, dict):
            raise GameHubProxyError(
                message="Body JSON attendu sous forme d'objet",
                code="invalid_body"
            )
        return body

    @property
    def is_json_post(self) -> bool:
        content_type = self.header("content-type") or ""
        return self.method == "POST" and "application/json" in content_type


@dataclass
class Detection:
    """Emplacements où le token factice a été trouvé."""
    in_authorization: bool = False
    in_token_header: bool = False
    in_body: bool = False

    @property
    def found(self) -> bool:
        return self.in_authorization or self.in_token_header or self.in_body


def detect_placeholder(request: InboundRequest, placeholder: str) -> Detection:
    """
    Cherche le token factice dans la requête.

    - Header Authorization: sous-chaîne
    - Header token: égalité stricte
    - Body d'un POST JSON: sous-chaîne
    """
    authorization = request.header(AUTHORIZATION_HEADER)
    token_header = request.header(TOKEN_HEADER)

    return Detection(
        in_authorization=bool(authorization) and placeholder in authorization,
        in_token_header=token_header == placeholder,
        in_body=request.is_json_post and placeholder.encode("utf-8") in request.body,
    )


def resign_body(body: bytes, real_token: str, secret_key: str) -> bytes:
    """
    Remplace le token du body et recalcule sa signature.

    Args:
        body: Body JSON d'origine
        real_token: Vrai token
        secret_key: Secret partagé de signature

    Returns:
        Body JSON compact re-signé
    """
    body_json = json.loads(body)
    if not isinstance(body_json, dict):
        raise GameHubProxyError(
            message="Body JSON attendu sous forme d'objet",
            code="invalid_body"
        )
    body_json[TOKEN_FIELD] = real_token
    body_json[SIGNATURE_FIELD] = generate_signature(body_json, secret_key)
    return dumps_compact(body_json).encode("utf-8")


def substitute_token(
    request: InboundRequest,
    detection: Detection,
    placeholder: str,
    real_token: str,
    secret_key: str
) -> InboundRequest:
    """Construit la requête réécrite avec le vrai token."""
    headers = request.headers.copy()

    if detection.in_authorization:
        headers[AUTHORIZATION_HEADER] = headers[AUTHORIZATION_HEADER].replace(placeholder, real_token, 1)
    if detection.in_token_header:
        headers[TOKEN_HEADER] = real_token

    body = request.body
    if detection.in_body:
        body = resign_body(body, real_token, secret_key)
        logger.info("[TOKEN] Token factice remplacé et signature régénérée")

    return replace(request, headers=headers, body=body)


class TokenInterceptor:
    """Substitue le vrai token au token factice avant routage."""

    def __init__(self, token_cache: TokenCache, credentials: CredentialConfig):
        self.token_cache = token_cache
        self.credentials = credentials

    async def intercept(self, request: InboundRequest) -> InboundRequest:
        """
        Retourne la requête d'origine ou sa version réécrite.

        Sans vrai token (refresher en erreur), la requête part inchangée.
        """
        placeholder = self.credentials.placeholder_token
        detection = detect_placeholder(request, placeholder)
        if not detection.found:
            return request

        real_token = await self.token_cache.resolve()
        if not real_token:
            logger.error("[TOKEN] Vrai token indisponible, requête transmise telle quelle")
            return request

        logger.info("[TOKEN] Remplacement du token factice par le vrai token")
        return substitute_token(
            request,
            detection,
            placeholder,
            real_token,
            self.credentials.secret_key,
        )
