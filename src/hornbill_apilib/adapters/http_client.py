"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts y User-Agent del cliente xmlmc y del discovery.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

import httpx

from hornbill_apilib.core.config import AppSettings


def build_client(
    settings: AppSettings | None = None,
    *,
    user_agent: str | None = None,
    timeout: float | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` síncrono.

    `user_agent`/`timeout` explícitos ganan sobre `settings`.
    Lanza `ValueError` si el User-Agent no es representable en una cabecera.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": user_agent if user_agent is not None else settings.user_agent,
    }
    return httpx.Client(
        timeout=httpx.Timeout(timeout if timeout is not None else settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


def build_discovery_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    settings = settings or AppSettings()
    return build_client(
        settings,
        user_agent=settings.discovery_user_agent,
        timeout=settings.discovery_timeout_seconds,
        transport=transport,
    )
