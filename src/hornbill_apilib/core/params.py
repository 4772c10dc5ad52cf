"""Construcción del fragmento `<params>` de una llamada xmlmc.

Por qué separado del cliente:
- Es lógica pura (sin HTTP), fácil de testear de forma aislada.
- `Xmlmc` delega aquí y solo se ocupa de sesión/transporte.

Contrato:
- Los parámetros se acumulan en orden de llamada.
- Una validación fallida no modifica el fragmento (append atómico).
- El balance open/close es responsabilidad de quien llama.
"""

from __future__ import annotations

from typing import Iterable, Tuple, Union

from hornbill_apilib.core.domain.models import Attribute
from hornbill_apilib.core.errors import InvalidNameError
from hornbill_apilib.core.xml import clean_text, is_valid_name, xml_encode

AttributeLike = Union[Attribute, Tuple[str, object]]


def _check_element(name: str) -> None:
    if not name:
        raise InvalidNameError("Xml element cannot be empty")
    if not is_valid_name(name):
        raise InvalidNameError("Xml element can only contain alphanumeric and underscores")


def _check_attribute(name: str) -> None:
    if not name:
        raise InvalidNameError("Xml attribute name cannot be empty")
    if not is_valid_name(name):
        raise InvalidNameError("Xml attribute name can only contain alphanumeric and underscores")


def _escape(value: object) -> str:
    return xml_encode(clean_text(value))


def _as_pair(attribute: AttributeLike) -> tuple[str, object]:
    if isinstance(attribute, Attribute):
        return attribute.key, attribute.value
    key, value = attribute
    return key, value


class ParamsBuilder:
    """Acumula elementos XML para el bloque `<params>`."""

    def __init__(self) -> None:
        self._parts: list[str] = []

    def __bool__(self) -> bool:
        return bool(self._parts)

    @property
    def fragment(self) -> str:
        """Fragmento crudo, sin el envoltorio `<params>`."""

        return "".join(self._parts)

    def set_param(self, name: str, value: object) -> None:
        _check_element(name)
        self._parts.append(f"<{name}>{_escape(value)}</{name}>")

    def set_param_attr(self, name: str, value: object, attributes: Iterable[AttributeLike]) -> None:
        """Como `set_param`, con atributos en la etiqueta de apertura.

        Cada atributo se renderiza como ` key="value" ` (espacio antes y
        después), p.ej. `<test2 attr1="x" >value2</test2>`.
        """

        _check_element(name)
        pairs = [_as_pair(a) for a in attributes]
        # Validar todo antes de tocar el fragmento.
        for key, _ in pairs:
            _check_attribute(key)

        attrs = "".join(f' {key}="{_escape(attr_value)}" ' for key, attr_value in pairs)
        self._parts.append(f"<{name}{attrs}>{_escape(value)}</{name}>")

    def open_element(self, name: str) -> None:
        _check_element(name)
        self._parts.append(f"<{name}>")

    def close_element(self, name: str) -> None:
        _check_element(name)
        self._parts.append(f"</{name}>")

    def render(self) -> str:
        """`""` si no hay nada pendiente, si no `<params>...</params>`."""

        if not self._parts:
            return ""
        return f"<params>{self.fragment}</params>"

    def clear(self) -> None:
        self._parts = []
