from typing import Dict, List, Optional

from handlers.proxy_config import DEV_ORIGINS, ProxyConfig

ALLOWED_METHODS = "POST, OPTIONS"
ALLOWED_HEADERS = "Content-Type"


def allowed_origins(config: ProxyConfig, origin: Optional[str] = None) -> List[str]:
    """
    Whitelist de origens para esta requisição.
    Previews da plataforma de deploy só entram quando o marcador está presente.
    """
    origins = []
    if config.frontend_url:
        origins.append(config.frontend_url)
    origins.extend(DEV_ORIGINS)

    if config.deployment_marker and origin and origin.endswith(config.preview_suffix):
        origins.append(origin)

    return origins


def cors_headers(config: ProxyConfig, origin: Optional[str]) -> Dict[str, str]:
    headers = {
        "Access-Control-Allow-Methods": ALLOWED_METHODS,
        "Access-Control-Allow-Headers": ALLOWED_HEADERS,
        "Vary": "Origin",
    }
    # Origem ausente ou fora da lista: sem Allow-Origin, o browser bloqueia a leitura
    if origin and origin in allowed_origins(config, origin):
        headers["Access-Control-Allow-Origin"] = origin
    return headers
