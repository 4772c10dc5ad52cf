"""Cliente Python para la API xmlmc de Hornbill.

Punto de entrada público:
- `get_url_from_name(instance)` resuelve la URL de la instancia.
- `Xmlmc(url)` construye parámetros e invoca servicios.
"""

from __future__ import annotations

import logging

from hornbill_apilib.adapters import Xmlmc, fetch_zoneinfo, get_url_from_name
from hornbill_apilib.core.domain.models import Attribute, ZoneInfo, ZoneInfoDocument
from hornbill_apilib.core.errors import (
    ClientConstructionError,
    DecodingError,
    InvalidNameError,
    ProtocolError,
    TransportError,
    XmlmcError,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.1.0"

__all__ = [
    "Attribute",
    "ClientConstructionError",
    "DecodingError",
    "InvalidNameError",
    "ProtocolError",
    "TransportError",
    "Xmlmc",
    "XmlmcError",
    "ZoneInfo",
    "ZoneInfoDocument",
    "fetch_zoneinfo",
    "get_url_from_name",
]
