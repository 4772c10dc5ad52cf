"""Cliente xmlmc (XML sobre HTTP) para instancias Hornbill.

Uso típico:

```
url = get_url_from_name("demo")
with Xmlmc(url) as c:
    c.set_param("UserId", "administrator")
    c.set_param("password", base64.b64encode(b"password").decode())
    body = c.invoke("session", "userLogon")
```

Cada `invoke` limpia los parámetros pendientes al recibir respuesta, así el
mismo objeto (y su pool de conexiones) se reutiliza para muchas llamadas.

Nota: no es thread-safe. Un objeto por hilo, o sincronización externa.
"""

from __future__ import annotations

import logging
from typing import Iterable

import httpx

from hornbill_apilib.adapters.http_client import build_client
from hornbill_apilib.core.config import AppSettings
from hornbill_apilib.core.errors import (
    ClientConstructionError,
    DecodingError,
    ProtocolError,
    TransportError,
)
from hornbill_apilib.core.params import AttributeLike, ParamsBuilder
from hornbill_apilib.core.xml import xml_encode

logger = logging.getLogger(__name__)

CONTENT_TYPE = "text/xmlmc"
JSON_ACCEPT = "text/json"


def _cookie_text(raw: bytes) -> str | None:
    """Valor de cabecera como texto, solo si es ASCII visible (o espacio/tab)."""

    if all(b == 0x09 or 0x20 <= b < 0x7F for b in raw):
        return raw.decode("ascii")
    return None


class Xmlmc:
    """Estado de una conexión lógica contra un endpoint xmlmc."""

    def __init__(
        self,
        server: str,
        settings: AppSettings | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        settings = settings or AppSettings()
        self._server = server if server.endswith("/") else f"{server}/"
        self._params = ParamsBuilder()
        self._status_code = 0
        self._count = 0
        self._session_id = ""
        self._api_key = ""
        self._trace = ""
        self._json_response = False
        self._copy_headers = False
        self._headers = httpx.Headers()
        self._user_agent = settings.user_agent
        self._timeout = settings.http_timeout_seconds

        try:
            self._client = build_client(
                settings,
                user_agent=self._user_agent,
                timeout=self._timeout,
                transport=transport,
            )
        except (ValueError, TypeError) as exc:
            raise ClientConstructionError(str(exc)) from exc

    def __enter__(self) -> "Xmlmc":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    # Parámetros ---------------------------------------------------------

    def set_param(self, key: str, value: object) -> None:
        """Añade `<key>value</key>`; el valor se escapa y se limpia a UTF-8 válido.

        ```
        c.set_param("username", "admin")
        ```
        """

        self._params.set_param(key, value)

    def set_param_attr(self, key: str, value: object, attribs: Iterable[AttributeLike]) -> None:
        """Añade `<key attr="v" >value</key>`. Todo o nada si algún nombre es inválido."""

        self._params.set_param_attr(key, value, attribs)

    set_param_with_attributes = set_param_attr

    def open_element(self, element: str) -> None:
        self._params.open_element(element)

    def close_element(self, element: str) -> None:
        self._params.close_element(element)

    def get_params(self) -> str:
        return self._params.render()

    def clear_params(self) -> None:
        self._params.clear()

    # Configuración ------------------------------------------------------

    def _reconfigure_client(self, user_agent: str, timeout: float) -> bool:
        """Aplica UA/timeout al cliente HTTP existente (mismo pool y transport).

        La configuración nueva se construye entera antes de aplicarla; si falla
        el cliente queda como estaba.
        """

        try:
            headers = httpx.Headers({"User-Agent": user_agent})
            timeout_config = httpx.Timeout(timeout)
        except (ValueError, TypeError) as exc:
            logger.warning("could not reconfigure http client, keeping the previous settings: %s", exc)
            return False
        self._client.headers.update(headers)
        self._client.timeout = timeout_config
        return True

    def set_user_agent(self, user_agent: str) -> None:
        """Cambia el User-Agent del cliente HTTP.

        Si el valor no es válido en una cabecera se conserva el anterior.
        """

        if self._reconfigure_client(user_agent, self._timeout):
            self._user_agent = user_agent

    def set_timeout(self, seconds: float) -> None:
        if self._reconfigure_client(self._user_agent, seconds):
            self._timeout = seconds

    def set_json_response(self, enabled: bool) -> None:
        """Pide respuestas JSON (`Accept: text/json`) en lugar de XML."""

        self._json_response = enabled

    def set_apikey(self, api_key: str) -> None:
        self._api_key = api_key

    def set_sessionid(self, session_id: str) -> None:
        self._session_id = session_id

    def set_trace(self, trace: str) -> None:
        """Identificador de traza que viaja en cada `<methodCall>`."""

        self._trace = trace

    def set_copy_headers(self, enabled: bool) -> None:
        """Guarda las cabeceras de cada respuesta para `get_headers()`."""

        self._copy_headers = enabled
        # Limpiar siempre para no filtrar cabeceras de una llamada previa.
        self._headers = httpx.Headers()

    # Accesores ----------------------------------------------------------

    def get_server_url(self) -> str:
        return self._server

    def get_status_code(self) -> int:
        return self._status_code

    def get_count(self) -> int:
        return self._count

    def get_headers(self) -> httpx.Headers:
        return self._headers.copy()

    def get_session_id(self) -> str:
        return self._session_id

    def get_user_agent(self) -> str:
        return self._user_agent

    def get_timeout(self) -> float:
        return self._timeout

    # Invocación ---------------------------------------------------------

    def build_body(self, service: str, method: str) -> str:
        """Envoltorio `<methodCall>` con los parámetros pendientes."""

        trace = f"goApi/{self._trace}" if self._trace else "goApi"
        body = (
            f'<methodCall service="{xml_encode(service)}" method="{xml_encode(method)}"'
            f' trace="{xml_encode(trace)}">'
        )
        if not self._params:
            return body + "</methodCall>"
        return f"{body}\n<params>{self._params.fragment}\n</params></methodCall>"

    def build_url(self, service: str, method: str) -> str:
        return f"{self._server}{service}/?method={method}"

    def _request_headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": CONTENT_TYPE,
            "User-Agent": self._user_agent,
            "Cookie": self._session_id,
        }
        if self._api_key:
            headers["Authorization"] = f"ESP-APIKEY {self._api_key}"
        if self._json_response:
            headers["Accept"] = JSON_ACCEPT
        return headers

    def _update_session(self, response: httpx.Response) -> None:
        raw = [v for k, v in response.headers.raw if k.lower() == b"set-cookie"]
        if not raw:
            return
        cookie = _cookie_text(raw[0])
        if cookie is None:
            logger.debug("ignoring undecodable Set-Cookie header")
            return
        self._session_id = cookie.split(";", 1)[0]

    def invoke(self, service: str, method: str) -> str:
        """POST de los parámetros pendientes a `service::method`.

        Devuelve el body de la respuesta (XML, o JSON con `set_json_response`).
        Lanza `TransportError`, `ProtocolError` (status != 200) o `DecodingError`.
        """

        url = self.build_url(service, method)
        body = self.build_body(service, method)
        logger.debug("xmlmc invoke %s::%s -> %s", service, method, url)

        try:
            response = self._client.post(url, content=body.encode("utf-8"), headers=self._request_headers())
        except httpx.HTTPError as exc:
            raise TransportError(str(exc)) from exc
        except UnicodeEncodeError as exc:
            # Session id o API key no ASCII: la petición no llega a salir.
            raise TransportError(f"request headers must be ASCII: {exc}") from exc

        self._count += 1
        self._status_code = response.status_code
        if self._copy_headers:
            self._headers = response.headers.copy()
        self.clear_params()

        if response.status_code != httpx.codes.OK:
            logger.debug("xmlmc %s::%s returned HTTP %s", service, method, response.status_code)
            raise ProtocolError(status_code=response.status_code)

        self._update_session(response)

        try:
            return response.content.decode(response.charset_encoding or "utf-8")
        except (UnicodeDecodeError, LookupError) as exc:
            raise DecodingError(str(exc)) from exc
