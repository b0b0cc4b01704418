import json
import pytest
from unittest.mock import MagicMock
from handlers.proxy_config import ProxyConfig

FRONTEND_URL = "https://nanobanana.example.com"
API_KEY = "secret_key_123"


@pytest.fixture(scope="function")
def proxy_config():
    """Configuração completa, sem depender de os.environ."""
    return ProxyConfig(
        api_key=API_KEY,
        frontend_url=FRONTEND_URL,
        deployment_marker="nanobanana-git-main.vercel.app",
    )


@pytest.fixture(scope="function")
def upstream_response():
    """Resposta de sucesso do Gemini (generateContent)."""
    response = MagicMock()
    response.ok = True
    response.status_code = 200
    response.json.return_value = {
        "candidates": [{
            "content": {"parts": [{"inlineData": {"mimeType": "image/png", "data": "iVBORw0KGgo="}}]}
        }]
    }
    return response


@pytest.fixture(scope="function")
def http_session(upstream_response):
    """Mock do requests.Session injetado no handler."""
    session = MagicMock()
    session.post.return_value = upstream_response
    return session


@pytest.fixture
def make_event():
    """Monta um evento do API Gateway (REST v1)."""
    def _make(method="POST", body=None, origin=FRONTEND_URL, headers=None):
        event_headers = {"Content-Type": "application/json"}
        if origin is not None:
            event_headers["Origin"] = origin
        event_headers.update(headers or {})
        return {
            "httpMethod": method,
            "headers": event_headers,
            "body": json.dumps(body) if body is not None else None,
        }
    return _make
