"""
Point d'entrée pour `python -m gamehub_proxy`.
"""
import argparse
import logging
import os

import uvicorn

from .config.loader import CONFIG_PATH_ENV


def main():
    """Fonction principale."""
    parser = argparse.ArgumentParser(description="GameHub API Proxy")
    parser.add_argument("--host", default="0.0.0.0", help="Host (défaut: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8787, help="Port (défaut: 8787)")
    parser.add_argument("--reload", action="store_true", help="Activer le reload auto")
    parser.add_argument("--config", default=None, help="Chemin vers config.toml")
    parser.add_argument("--log-level", default="info", help="Niveau de log (défaut: info)")

    args = parser.parse_args()

    if args.config:
        # Relu par le loader, y compris dans le process de reload
        os.environ[CONFIG_PATH_ENV] = args.config

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    print(f"🚀 Démarrage de GameHub API Proxy sur {args.host}:{args.port}")

    uvicorn.run(
        "gamehub_proxy.main:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level
    )


if __name__ == "__main__":
    main()
