"""Resolver de endpoints: nombre de instancia -> URL xmlmc.

Flujo:
1) Probe (GET) al host primario de zoneinfo. Si falla la conexión o el
   status no es 200, se usa el host de respaldo.
2) GET del documento zoneinfo (timeout corto, UA fijo).
3) `message == "Success"` -> `apiEndpoint`, o `endpoint + "xmlmc/"`.

Nunca lanza: cualquier fallo se registra en el log y devuelve `None`.
Pensado para llamarse una vez por programa y reutilizar la URL.
"""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from hornbill_apilib.adapters.http_client import build_discovery_client
from hornbill_apilib.core.config import AppSettings
from hornbill_apilib.core.domain.models import ZoneInfoDocument

logger = logging.getLogger(__name__)


def zoneinfo_urls(name: str, settings: AppSettings | None = None) -> tuple[str, str]:
    """Devuelve (url_primaria, url_respaldo) para la instancia `name`."""

    settings = settings or AppSettings()
    return (
        settings.discovery_primary_url.format(instance=name),
        settings.discovery_backup_url.format(instance=name),
    )


def _select_zoneinfo_url(client: httpx.Client, url: str, backup_url: str) -> str:
    try:
        response = client.get(url)
    except httpx.HTTPError as exc:
        logger.warning("zoneinfo probe failed for %s: %s; using %s", url, exc, backup_url)
        return backup_url
    if response.status_code != httpx.codes.OK:
        logger.warning("zoneinfo probe returned HTTP %s for %s; using %s", response.status_code, url, backup_url)
        return backup_url
    return url


def fetch_zoneinfo(
    name: str,
    settings: AppSettings | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
) -> ZoneInfoDocument | None:
    """Descarga y valida el documento zoneinfo de `name`."""

    if settings is None:
        try:
            settings = AppSettings()
        except ValidationError as exc:
            logger.warning("invalid HORNBILL_* settings, zoneinfo lookup skipped: %s", exc)
            return None
    url, backup_url = zoneinfo_urls(name, settings)

    with build_discovery_client(settings, transport=transport) as client:
        url = _select_zoneinfo_url(client, url, backup_url)
        try:
            response = client.get(url)
        except httpx.HTTPError as exc:
            logger.warning("zoneinfo request failed for %s: %s", url, exc)
            return None

    try:
        return ZoneInfoDocument.model_validate_json(response.content)
    except ValidationError as exc:
        logger.warning("zoneinfo document from %s could not be parsed: %s", url, exc)
        return None


def get_url_from_name(
    name: str,
    settings: AppSettings | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
) -> str | None:
    """URL base xmlmc de la instancia `name`, o `None` si no se pudo resolver.

    ```
    url = get_url_from_name("demo")
    ```
    """

    document = fetch_zoneinfo(name, settings, transport=transport)
    if document is None:
        return None

    zone = document.zoneinfo
    if not zone.ok:
        logger.warning("zoneinfo lookup for %r returned %r", name, zone.message)
        return None
    return zone.xmlmc_url()
