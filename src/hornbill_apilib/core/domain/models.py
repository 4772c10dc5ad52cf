"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- El documento de discovery (zoneinfo) llega como JSON; validarlo con un
  modelo evita `dict.get` dispersos por el resolver.
- `Attribute` documenta el contrato de los atributos de un parámetro.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class Attribute(BaseModel):
    """Atributo `key="value"` que se añade a un elemento de parámetros."""

    key: str = Field(
        ...,
        description="Nombre del atributo (misma regla que los elementos XML).",
    )
    value: str = Field(
        default="",
        description="Valor del atributo (se escapa al renderizar).",
    )


class ZoneInfo(BaseModel):
    """Registro `zoneinfo` del documento de discovery de una instancia."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    cluster_fqn: str | None = Field(
        default=None,
        alias="clusterFqn",
        description="FQDN del cluster que aloja la instancia.",
    )
    release_stream: str | None = Field(
        default=None,
        alias="releaseStream",
        description="Release stream de la instancia.",
    )
    endpoint: str = Field(
        ...,
        description="Endpoint genérico de la instancia (sin `xmlmc/`).",
    )
    api_endpoint: str | None = Field(
        default=None,
        alias="apiEndpoint",
        description="Endpoint específico de la API (versiones nuevas del documento).",
    )
    message: str = Field(
        ...,
        description="Resultado del lookup; `Success` si la instancia existe.",
    )

    @property
    def ok(self) -> bool:
        return self.message == "Success"

    def xmlmc_url(self) -> str:
        """URL base xmlmc: `apiEndpoint` si existe, si no `endpoint + "xmlmc/"`."""

        if self.api_endpoint is not None:
            return self.api_endpoint
        # Documentos antiguos no traen apiEndpoint.
        return self.endpoint + "xmlmc/"


class ZoneInfoDocument(BaseModel):
    model_config = ConfigDict(extra="ignore")

    zoneinfo: ZoneInfo
