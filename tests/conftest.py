"""
Configuration des tests pytest.
"""
import os
import sys

import pytest
import respx
from fastapi.testclient import TestClient

# Ajoute src au path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from gamehub_proxy.config.settings import Settings, UpstreamConfig, CredentialConfig  # noqa: E402
from gamehub_proxy.main import create_app  # noqa: E402


@pytest.fixture
def settings():
    """Configuration de test: upstreams fictifs, refresher configuré."""
    return Settings(
        upstreams=UpstreamConfig(
            static_base_url="https://static.test",
            metadata_base_url="https://meta.test",
            news_base_url="https://news.test",
            token_refresher_url="https://refresher.test",
        ),
        credentials=CredentialConfig(
            secret_key="test-secret",
            refresher_auth_value="internal-auth",
        ),
    )


@pytest.fixture
def upstream_mock():
    """Intercepte tout le trafic httpx vers les upstreams."""
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app, upstream_mock):
    """TestClient avec lifespan (boucle persistante entre les requêtes)."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def component_manifest():
    """Manifest de 25 composants, format `data.components`."""
    return {
        "code": 200,
        "msg": "",
        "data": {
            "components": [
                {"id": i, "name": f"box64-{i}", "url": f"https://cdn.test/box64-{i}.tzst"}
                for i in range(1, 26)
            ]
        }
    }
