"""Configuración del Core.

Por qué aquí:
- Centraliza defaults y variables de entorno (pydantic-settings) sin
  contaminar el cliente ni la CLI.
- Los setters del cliente (`set_user_agent`, `set_apikey`, ...) siempre
  tienen prioridad: estos valores solo son el punto de partida.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_USER_AGENT = "python_apilib/1.1"
DEFAULT_DISCOVERY_USER_AGENT = "hornbill-apilib-discovery/1.1"
PRIMARY_ZONEINFO_URL = "https://files.hornbill.com/instances/{instance}/zoneinfo"
BACKUP_ZONEINFO_URL = "https://files.hornbill.co/instances/{instance}/zoneinfo"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "hornbill-apilib"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "hornbill-apilib"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "hornbill-apilib"
    return Path.home() / ".config" / "hornbill-apilib"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario.

    Las claves con valor `None` se ignoran (no borran lo existente).
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# hornbill-apilib user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la librería y la CLI.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el cliente.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="HORNBILL_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout por invocación xmlmc (segundos).",
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        min_length=1,
        description="User-Agent enviado en cada invocación.",
    )

    discovery_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout del lookup de zoneinfo (segundos).",
    )
    discovery_user_agent: str = Field(
        default=DEFAULT_DISCOVERY_USER_AGENT,
        min_length=1,
        description="User-Agent para el servicio de discovery.",
    )
    discovery_primary_url: str = Field(
        default=PRIMARY_ZONEINFO_URL,
        min_length=8,
        description="Plantilla del host primario de zoneinfo (`{instance}`).",
    )
    discovery_backup_url: str = Field(
        default=BACKUP_ZONEINFO_URL,
        min_length=8,
        description="Plantilla del host de respaldo de zoneinfo (`{instance}`).",
    )

    # Solo los usa la CLI; la librería recibe la URL/credenciales por código.
    instance: str | None = Field(
        default=None,
        description="Nombre de la instancia por defecto para la CLI.",
    )
    server_url: str | None = Field(
        default=None,
        description="URL xmlmc fija (evita el discovery).",
    )
    api_key: str | None = Field(
        default=None,
        description="API key por defecto para la CLI.",
    )
