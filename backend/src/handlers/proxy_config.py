import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta/models"
DEFAULT_IMAGE_MODEL = "gemini-2.5-flash-image-preview"
DEFAULT_PREVIEW_SUFFIX = ".vercel.app"

# Origens fixas de desenvolvimento (React dev server e Live Server)
DEV_ORIGINS = (
    "http://localhost:3000",
    "http://127.0.0.1:5500",
)


def _read(environ: Mapping[str, str], name: str) -> Optional[str]:
    # Variável vazia conta como ausente
    value = environ.get(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class ProxyConfig:
    """
    Configuração do proxy, lida do ambiente a cada invocação.
    Injetada no handler para que os testes não precisem mexer em os.environ.
    """
    # repr=False: a chave nunca aparece em logs ou tracebacks
    api_key: Optional[str] = field(default=None, repr=False)
    frontend_url: Optional[str] = None
    deployment_marker: Optional[str] = None
    preview_suffix: str = DEFAULT_PREVIEW_SUFFIX
    model: str = DEFAULT_IMAGE_MODEL

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ProxyConfig":
        env = os.environ if environ is None else environ
        return cls(
            api_key=_read(env, "GEMINI_API_KEY"),
            frontend_url=_read(env, "FRONTEND_URL"),
            deployment_marker=_read(env, "VERCEL_URL"),
            preview_suffix=_read(env, "PREVIEW_ORIGIN_SUFFIX") or DEFAULT_PREVIEW_SUFFIX,
            model=_read(env, "GEMINI_IMAGE_MODEL") or DEFAULT_IMAGE_MODEL,
        )

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    @property
    def endpoint(self) -> str:
        """URL do generateContent sem a chave (seguro para logs)."""
        return f"{GEMINI_API_BASE}/{self.model}:generateContent"

    def upstream_url(self) -> str:
        # A chave vai como query parameter, nunca logar esta URL
        return f"{self.endpoint}?key={self.api_key}"

