"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

import httpx
from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from hornbill_apilib.core.domain.models import ZoneInfo


def print_banner(console: Console) -> None:
    title = Text("hornbill-apilib", style="bold cyan")
    subtitle = Text("xmlmc • discovery • sesiones", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_headers_table(headers: httpx.Headers) -> Table:
    """Tabla con las cabeceras capturadas de la última respuesta."""

    table = Table(title=f"Response headers ({len(headers)})")
    table.add_column("Header", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    for key, value in headers.multi_items():
        table.add_row(key, value)
    return table


def build_zoneinfo_panel(zone: ZoneInfo) -> Panel:
    body = Text()
    body.append(f"Message: {zone.message}\n")
    body.append(f"Endpoint: {zone.endpoint}\n")
    body.append(f"API endpoint: {zone.api_endpoint or '-'}\n")
    body.append(f"Cluster: {zone.cluster_fqn or '-'}\n", style="dim")
    body.append(f"Release stream: {zone.release_stream or '-'}", style="dim")
    style = "green" if zone.ok else "red"
    return Panel(body, title=Text("zoneinfo", style=f"bold {style}"), border_style=style)
