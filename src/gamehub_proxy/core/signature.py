"""
Signature des requêtes GameHub.

Le client mobile signe chaque body: paires `clé=valeur` triées par clé,
jointes par `&`, suivies de `&<secret>`, puis MD5 en hexadécimal minuscule.
Quand le token du body change, la signature doit être recalculée.
"""
import hashlib
from typing import Any, Dict

from .constants import SIGNATURE_FIELD


def render_value(value: Any) -> str:
    """
    Rend une valeur comme le client mobile la concatène dans la chaîne signée.

    Args:
        value: Valeur issue d'un body JSON décodé

    Returns:
        Représentation texte utilisée dans la chaîne à signer
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, list):
        return ",".join("" if item is None else render_value(item) for item in value)
    if isinstance(value, dict):
        return "[object Object]"
    return str(value)


def build_sign_string(params: Dict[str, Any], secret_key: str) -> str:
    """Construit la chaîne `k1=v1&k2=v2&<secret>` (hors champ `sign`)."""
    sorted_keys = sorted(k for k in params if k != SIGNATURE_FIELD)
    param_string = "&".join(f"{key}={render_value(params[key])}" for key in sorted_keys)
    return f"{param_string}&{secret_key}"


def generate_signature(params: Dict[str, Any], secret_key: str) -> str:
    """
    Calcule la signature d'un body plat.

    Args:
        params: Body JSON décodé (le champ `sign` est ignoré)
        secret_key: Secret partagé avec le client mobile

    Returns:
        Digest MD5 en hexadécimal minuscule
    """
    sign_string = build_sign_string(params, secret_key)
    return hashlib.md5(sign_string.encode("utf-8")).hexdigest().lower()
