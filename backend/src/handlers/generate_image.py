import json
import logging
import os

import requests

from handlers.cors import ALLOWED_METHODS, cors_headers
from handlers.proxy_config import ProxyConfig
from handlers.proxy_models import InvalidRequestBody, ProxyRequest, ProxyResponse

logger = logging.getLogger(__name__)
logger.setLevel(os.environ.get("LOG_LEVEL", "INFO").upper())
# urllib3 loga a URL completa (com ?key=) em DEBUG
logging.getLogger("urllib3").setLevel(logging.WARNING)

MISSING_KEY_MESSAGE = "API key is not configured on the server."
UPSTREAM_FALLBACK_MESSAGE = "An error occurred with the Google API."
INTERNAL_ERROR_MESSAGE = "An internal server error occurred."

# --- Padrão Singleton para a sessão HTTP (reuso de conexão em Warm Start) ---
_HTTP_SESSION = None


def get_http_session():
    global _HTTP_SESSION
    if _HTTP_SESSION is None:
        _HTTP_SESSION = requests.Session()
    return _HTTP_SESSION


def _upstream_error_message(data):
    error = data.get("error") if isinstance(data, dict) else None
    if isinstance(error, dict) and isinstance(error.get("message"), str) and error["message"]:
        return error["message"]
    return UPSTREAM_FALLBACK_MESSAGE


def _redact(text, secret):
    # Exceções do requests carregam a URL completa, com ?key=
    return text.replace(secret, "***") if secret else text


def lambda_handler(event, context, config=None, http_session=None):
    """
    Proxy seguro para o generateContent do Gemini.
    O frontend manda o payload sem chave; a chave é anexada aqui no servidor.

    Args:
        config: ProxyConfig opcional para testes (padrão: lido do ambiente).
        http_session: requests.Session opcional para testes.
    """
    config = config if config else ProxyConfig.from_env()
    request = ProxyRequest.from_event(event or {})
    return handle(request, config, http_session).to_lambda()


def handle(request, config, http_session=None):
    # 1. CORS: presente em todas as respostas, inclusive erros
    headers = cors_headers(config, request.origin)

    # 2. Preflight
    if request.method == "OPTIONS":
        return ProxyResponse.empty(200, headers)

    # 3. Apenas POST
    if request.method != "POST":
        headers["Allow"] = ALLOWED_METHODS
        return ProxyResponse.error(405, "Method Not Allowed", headers)

    # 4. Chave do servidor (nunca exposta ao cliente)
    if not config.has_api_key:
        logger.error(MISSING_KEY_MESSAGE)
        return ProxyResponse.error(500, MISSING_KEY_MESSAGE, headers)

    try:
        payload = request.json_body()
    except InvalidRequestBody as e:
        logger.warning("Body inválido recebido: %s", e)
        return ProxyResponse.error(400, "Invalid JSON body", headers)

    session = http_session if http_session else get_http_session()

    try:
        # 5. Repasse do body, serializado sem alterações
        logger.info("Encaminhando requisição para %s", config.endpoint)
        upstream = session.post(
            config.upstream_url(),
            data=json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8"),
            headers={"Content-Type": "application/json"},
        )
        data = upstream.json()

        # 6. Erro do Google: propaga status e mensagem
        if not upstream.ok:
            logger.error("Google API Error (%s): %s", upstream.status_code, data)
            return ProxyResponse.error(upstream.status_code, _upstream_error_message(data), headers)

        # 7. Sucesso
        return ProxyResponse(200, headers, data)

    except Exception as e:
        # 8. Falha de rede, resposta que não é JSON, etc.
        logger.error("Falha ao chamar a Google API: %s: %s",
                     type(e).__name__, _redact(str(e), config.api_key))
        return ProxyResponse.error(500, INTERNAL_ERROR_MESSAGE, headers)
