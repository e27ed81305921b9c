"""
Construction des réponses renvoyées au client mobile.

Toutes les réponses portent les headers CORS.
"""
import json
from typing import Any, Optional

from fastapi.responses import JSONResponse, Response

from ..core.constants import CORS_HEADERS

_UNSET = object()


def with_cors(headers: Optional[dict] = None) -> dict:
    """
    Fusionne des headers avec le jeu CORS (CORS prioritaire).

    Les noms sont mis en minuscules pour éviter les doublons de casse.
    """
    merged = {key.lower(): value for key, value in (headers or {}).items()}
    merged.update({key.lower(): value for key, value in CORS_HEADERS.items()})
    return merged


def json_response(content: Any, status_code: int = 200) -> JSONResponse:
    """Réponse JSON + CORS."""
    return JSONResponse(content=content, status_code=status_code, headers=with_cors())


def text_response(text: str, status_code: int = 200) -> Response:
    """Réponse texte brut + CORS."""
    return Response(
        content=text,
        status_code=status_code,
        media_type="text/plain",
        headers=with_cors(),
    )


def preflight_response() -> Response:
    """Réponse vide au preflight OPTIONS."""
    return Response(status_code=200, headers=with_cors())


def error_envelope(code: int, msg: str, time: Any = _UNSET, data: Any = _UNSET) -> dict:
    """
    Construit l'enveloppe d'erreur `{code, msg, time?, data?}`.

    `time` et `data` ne sont présents que s'ils sont fournis (None inclus).
    """
    envelope = {"code": code, "msg": msg}
    if time is not _UNSET:
        envelope["time"] = time
    if data is not _UNSET:
        envelope["data"] = data
    return envelope


def error_response(
    status_code: int,
    msg: str,
    time: Any = _UNSET,
    data: Any = _UNSET,
    code: Optional[int] = None
) -> JSONResponse:
    """Réponse d'erreur JSON (le `code` de l'enveloppe suit le statut par défaut)."""
    envelope = error_envelope(code if code is not None else status_code, msg, time=time, data=data)
    return json_response(envelope, status_code=status_code)


# Au-delà, JSON.stringify passe en notation exponentielle
_JS_INTEGER_LIMIT = 1e21


def js_numbers(obj: Any) -> Any:
    """Ramène les flottants entiers (`1.0`) à des entiers, comme JSON.stringify."""
    if isinstance(obj, float) and obj.is_integer() and abs(obj) < _JS_INTEGER_LIMIT:
        return int(obj)
    if isinstance(obj, dict):
        return {key: js_numbers(value) for key, value in obj.items()}
    if isinstance(obj, list):
        return [js_numbers(item) for item in obj]
    return obj


def dumps_compact(obj: Any) -> str:
    """Sérialise en JSON compact (`{"a":1}`), sans échappement ASCII."""
    return json.dumps(js_numbers(obj), separators=(",", ":"), ensure_ascii=False)
