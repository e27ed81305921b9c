"""
Transformations des bodies et réponses entre le client mobile et les upstreams.
"""
from typing import Dict, Any, List, Optional

from ..core.constants import (
    GAME_DETAIL_STRIPPED_FIELDS,
    GENERIC_GPU_VERSION,
    GENERIC_GPU_DEVICE_NAME,
    GENERIC_GAME_TYPE,
    GENERIC_GAME_ID,
    GENERIC_CLIENT_PARAMS,
    GENERIC_GPU_DRIVER_VERSION,
    PASSTHROUGH_SCRIPT_FIELDS,
    TYPE_TO_MANIFEST,
)


def coerce_int(value: Any) -> Optional[int]:
    """
    Convertit une valeur JSON en entier si elle en représente un.

    Accepte les entiers, les flottants entiers et les chaînes numériques.
    Les booléens sont refusés.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def int_or_default(value: Any, default: int) -> int:
    """Entier de la requête, ou la valeur par défaut si absent, nul ou invalide."""
    coerced = coerce_int(value)
    return coerced if coerced else default


def manifest_path_for_type(component_type: Any) -> Optional[str]:
    """
    Retourne le chemin du manifest pour un type de composant.

    Args:
        component_type: Champ `type` du body (1 à 7)

    Returns:
        Chemin dans le dépôt statique, ou None si le type est inconnu
    """
    return TYPE_TO_MANIFEST.get(coerce_int(component_type))


def strip_game_detail(response_data: Any) -> Any:
    """Retire les sections de recommandation de la fiche jeu."""
    if isinstance(response_data, dict):
        data = response_data.get("data")
        if isinstance(data, dict):
            for field_name in GAME_DETAIL_STRIPPED_FIELDS:
                data.pop(field_name, None)
    return response_data


def sanitize_script_body(body: Dict[str, Any]) -> Dict[str, Any]:
    """
    Construit le body envoyé à /simulator/executeScript.

    Seul `gpu_vendor` décide de la config renvoyée: tout le reste de
    l'empreinte de l'appareil est remplacé par des valeurs génériques.
    `token`, `sign` et `time` sont conservés pour l'authentification.
    Les champs absents de la requête d'origine sont omis.
    """
    sanitized = {
        "gpu_vendor": body.get("gpu_vendor"),
        "gpu_version": GENERIC_GPU_VERSION,
        "gpu_device_name": GENERIC_GPU_DEVICE_NAME,
        "game_type": body.get("game_type") or GENERIC_GAME_TYPE,
        "token": body.get("token"),
        "game_id": GENERIC_GAME_ID,
        "sign": body.get("sign"),
        "time": body.get("time"),
        "clientparams": GENERIC_CLIENT_PARAMS,
        "gpu_system_driver_version": GENERIC_GPU_DRIVER_VERSION,
    }
    for field_name in PASSTHROUGH_SCRIPT_FIELDS:
        if field_name not in body:
            del sanitized[field_name]
    return sanitized


def normalize_manifest(manifest: Any) -> Any:
    """Renomme `data.components` en `data.list`."""
    if isinstance(manifest, dict):
        data = manifest.get("data")
        if isinstance(data, dict) and data.get("components") is not None:
            data["list"] = data.pop("components")
    return manifest


def paginate_items(items: List[Any], page: int, page_size: int) -> List[Any]:
    """Découpe une page de la liste complète (hors bornes: liste vide ou partielle)."""
    start = (page - 1) * page_size
    return items[start:start + page_size]


def paginate_manifest(manifest: Any, page: int, page_size: int) -> Any:
    """
    Pagine `data.list` d'un manifest côté proxy.

    L'upstream renvoie toujours la liste complète: `total` reflète la
    longueur avant découpage (ou `data.total` s'il est fourni).
    """
    if not isinstance(manifest, dict):
        return manifest
    data = manifest.get("data")
    if not isinstance(data, dict) or not isinstance(data.get("list"), list):
        return manifest

    all_items = data["list"]
    total = data.get("total") or len(all_items)

    data["list"] = paginate_items(all_items, page, page_size)
    data["page"] = page
    data["pageSize"] = page_size
    data["total"] = total
    return manifest
