"""Excepciones del cliente xmlmc.

Todas heredan de `XmlmcError` para que la CLI (y quien use la librería)
pueda capturarlas en un único punto.
"""

from __future__ import annotations


class XmlmcError(Exception):
    """Base de todos los errores de la librería."""


class ClientConstructionError(XmlmcError):
    """No se pudo construir el cliente HTTP subyacente."""


class InvalidNameError(XmlmcError, ValueError):
    """Nombre de elemento o atributo XML inválido (vacío o con caracteres no permitidos)."""


class TransportError(XmlmcError):
    """Fallo de conexión/timeout: no se recibió respuesta."""


class ProtocolError(XmlmcError):
    """El servidor respondió con un status distinto de 200."""

    def __init__(self, message: str = "Non 200 Status code", *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DecodingError(XmlmcError):
    """El body de la respuesta no es texto válido."""
