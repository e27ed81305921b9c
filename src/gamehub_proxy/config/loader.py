"""src.gamehub_proxy.config.loader

Chargement de la configuration TOML.

Note d'architecture:
- Le package `config/` est consommé par `main.py` et les services.
- Il ne doit dépendre que de `core/` afin d'éviter les imports circulaires.
"""
import os
import re
from pathlib import Path
from typing import Dict, Any, Optional

from ..core.exceptions import ConfigurationError

# Variable d'environnement pointant vers un config.toml alternatif
CONFIG_PATH_ENV = "GAMEHUB_PROXY_CONFIG"

_ENV_VAR_PATTERN = re.compile(r'\$\{([^}]+)\}')

# Cache global de configuration
_config_cache: Optional[Dict[str, Any]] = None


def _expand_env_vars(obj: Any) -> Any:
    """
    Récursivement étend les variables d'environnement ${VAR} dans la config.

    Les variables absentes de l'environnement sont laissées telles quelles.
    """
    if isinstance(obj, str):
        def replace_env_var(match):
            var_name = match.group(1)
            return os.environ.get(var_name, match.group(0))
        return _ENV_VAR_PATTERN.sub(replace_env_var, obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(item) for item in obj]
    return obj


def is_unexpanded(value: Any) -> bool:
    """True si la valeur contient encore un `${VAR}` non résolu."""
    return isinstance(value, str) and bool(_ENV_VAR_PATTERN.search(value))


def _clear_config_cache():
    """Vide le cache de configuration."""
    global _config_cache
    _config_cache = None


def default_config_path() -> str:
    """
    Retourne le chemin du config.toml à utiliser.

    Priorité: variable GAMEHUB_PROXY_CONFIG, puis config.toml à la racine
    du projet (parent de src/).
    """
    env_path = os.environ.get(CONFIG_PATH_ENV)
    if env_path:
        return env_path

    # Structure: project/src/gamehub_proxy/config/loader.py
    current_file = os.path.abspath(__file__)
    project_dir = os.path.dirname(os.path.dirname(os.path.dirname(os.path.dirname(current_file))))
    return os.path.join(project_dir, "config.toml")


def load_config(config_path: str = None) -> Dict[str, Any]:
    """
    Charge la configuration depuis config.toml.

    Args:
        config_path: Chemin vers le fichier config (optionnel)

    Returns:
        Dictionnaire de configuration

    Raises:
        ConfigurationError: Si le fichier n'existe pas ou est invalide
    """
    global _config_cache

    if _config_cache is not None:
        return _config_cache

    if config_path is None:
        config_path = default_config_path()

    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(
            message=f"Fichier de configuration non trouvé: {config_path}",
            config_key="config_path"
        )

    try:
        import tomllib
    except ImportError:
        import tomli as tomllib

    try:
        with open(path, "rb") as f:
            raw_config = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(
            message=f"config.toml invalide: {e}",
            config_key="config_path"
        ) from e

    _config_cache = _expand_env_vars(raw_config)
    return _config_cache


def reload_config(config_path: str = None) -> Dict[str, Any]:
    """
    Recharge la configuration depuis le fichier.

    Returns:
        Nouvelle configuration chargée
    """
    _clear_config_cache()
    return load_config(config_path)


def get_config() -> Dict[str, Any]:
    """Retourne la configuration en cache (la charge si nécessaire)."""
    if _config_cache is None:
        return load_config()
    return _config_cache


def get_section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    """Retourne une section de la config, ou un dict vide."""
    section = config.get(name, {})
    return section if isinstance(section, dict) else {}
