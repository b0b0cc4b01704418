import base64
import binascii
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from requests.structures import CaseInsensitiveDict


class InvalidRequestBody(ValueError):
    """Body recebido não é JSON válido."""


def _reject_constant(name):
    # NaN/Infinity não são JSON válido para o Google
    raise InvalidRequestBody(f"Constante JSON inválida: {name}")


def _event_method(event: Mapping[str, Any]) -> str:
    # REST API (v1) usa httpMethod; HTTP API (v2) usa requestContext.http.method
    method = event.get("httpMethod")
    if not method:
        method = ((event.get("requestContext") or {}).get("http") or {}).get("method")
    return (method or "").upper()


@dataclass
class ProxyRequest:
    method: str
    headers: CaseInsensitiveDict
    raw_body: Optional[str] = None
    is_base64: bool = False

    @classmethod
    def from_event(cls, event: Mapping[str, Any]) -> "ProxyRequest":
        return cls(
            method=_event_method(event),
            headers=CaseInsensitiveDict(event.get("headers") or {}),
            raw_body=event.get("body"),
            is_base64=bool(event.get("isBase64Encoded")),
        )

    @property
    def origin(self) -> Optional[str]:
        return self.headers.get("Origin")

    def json_body(self) -> Any:
        """
        Body já parseado. Vazio vira None (serializado como null no repasse).
        """
        if not self.raw_body:
            return None

        raw_body = self.raw_body
        if self.is_base64:
            try:
                raw_body = base64.b64decode(raw_body, validate=True).decode("utf-8")
            except (binascii.Error, UnicodeDecodeError) as e:
                raise InvalidRequestBody("Body em base64 inválido") from e

        try:
            return json.loads(raw_body, parse_constant=_reject_constant)
        except ValueError as e:
            raise InvalidRequestBody(str(e)) from e


@dataclass
class ProxyResponse:
    status_code: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: Any = None
    # Distingue "sem body" de um JSON null vindo do upstream
    is_empty: bool = False

    @classmethod
    def error(cls, status_code: int, message: str, headers: Optional[Dict[str, str]] = None) -> "ProxyResponse":
        return cls(status_code, dict(headers or {}), {"error": message})

    @classmethod
    def empty(cls, status_code: int, headers: Optional[Dict[str, str]] = None) -> "ProxyResponse":
        return cls(status_code, dict(headers or {}), None, is_empty=True)

    def to_lambda(self) -> Dict[str, Any]:
        """Formato de resposta do API Gateway (proxy integration)."""
        headers = dict(self.headers)
        if self.is_empty:
            body = ""
        else:
            headers["Content-Type"] = "application/json"
            body = json.dumps(self.body)

        return {
            "statusCode": self.status_code,
            "headers": headers,
            "body": body,
        }
