"""Helpers XML para construir el payload xmlmc.

Por qué aquí:
- Son funciones puras (sin I/O), compartidas por el builder de params y el
  cliente HTTP.
- El patrón de nombres se compila una sola vez a nivel de módulo.
"""

from __future__ import annotations

import re

_VALID_NAME = re.compile(r"[A-Za-z0-9_]+")

_ENTITIES = {
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&apos;",
    "&": "&amp;",
}


def is_valid_name(name: str) -> bool:
    """Nombre de elemento/atributo válido: ASCII alfanumérico o `_`, no vacío."""

    return _VALID_NAME.fullmatch(name) is not None


def clean_text(value: object) -> str:
    """Normaliza `value` a texto UTF-8 válido.

    - `bytes`: se decodifica como UTF-8, secuencias inválidas -> U+FFFD.
    - `str`: los surrogates sueltos (no codificables) -> U+FFFD.
    - Cualquier otro tipo pasa por `str()`.
    """

    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    if not isinstance(value, str):
        value = str(value)
    return value.encode("utf-8", errors="surrogatepass").decode("utf-8", errors="replace")


def xml_encode(value: str) -> str:
    return "".join(_ENTITIES.get(c, c) for c in value)
