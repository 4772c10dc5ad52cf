"""Adaptadores de I/O (HTTP).

Por qué un paquete:
- Agrupa todo lo que habla con la red: discovery de zoneinfo y cliente xmlmc.
- El Core (params, xml, config) no importa nada de aquí.
"""

from hornbill_apilib.adapters.discovery import fetch_zoneinfo, get_url_from_name
from hornbill_apilib.adapters.xmlmc import Xmlmc

__all__ = [
    "Xmlmc",
    "fetch_zoneinfo",
    "get_url_from_name",
]
