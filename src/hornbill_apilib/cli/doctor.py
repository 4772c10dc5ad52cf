"""Doctor command for environment diagnostics."""

from __future__ import annotations

from typing import Optional

import httpx
import typer
from rich.console import Console
from rich.table import Table

from hornbill_apilib.adapters.discovery import fetch_zoneinfo, zoneinfo_urls
from hornbill_apilib.adapters.http_client import build_discovery_client
from hornbill_apilib.cli.ui_components import build_zoneinfo_panel
from hornbill_apilib.core.config import AppSettings, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        with build_discovery_client(settings) as client:
            response = client.get(url)
    except httpx.HTTPError as exc:
        return False, str(exc)
    return response.status_code == httpx.codes.OK, f"HTTP {response.status_code}"


@app.command()
def run(
    instance: Optional[str] = typer.Option(None, "--instance", "-i", help="Instance to resolve (defaults to HORNBILL_INSTANCE)."),
) -> None:
    """Check both zoneinfo hosts and the configured instance."""

    settings = AppSettings()
    instance = instance or settings.instance

    table = Table(title="hornbill-apilib Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    if settings.api_key:
        table.add_row("API key", "OK", "Authorization header will be sent")
    else:
        table.add_row("API key", "OPTIONAL", "No key set -> use session::userLogon")
    table.add_row("User-Agent", "OK", settings.user_agent)

    if not instance:
        table.add_row("Instance", "SKIPPED", "Pass --instance or set HORNBILL_INSTANCE")
        _console.print(table)
        return

    primary, backup = zoneinfo_urls(instance, settings)
    for label, url in (("zoneinfo (primary)", primary), ("zoneinfo (backup)", backup)):
        ok, detail = _check_http(url, settings)
        table.add_row(label, "OK" if ok else "FAIL", f"{url} -> {detail}")

    document = fetch_zoneinfo(instance, settings)
    if document is None:
        table.add_row("Instance", "FAIL", f"{instance!r} could not be resolved")
    else:
        table.add_row("Instance", "OK" if document.zoneinfo.ok else "FAIL", document.zoneinfo.xmlmc_url())

    _console.print(table)
    if document is not None:
        _console.print(build_zoneinfo_panel(document.zoneinfo))


@app.command()
def configure() -> None:
    """Interactive setup (stores defaults in the user config .env)."""

    instance = typer.prompt("Instance name", default="", show_default=False).strip()
    api_key = typer.prompt("API key (empty to skip)", default="", hide_input=True, show_default=False).strip()

    if not instance and not api_key:
        raise typer.BadParameter("instance or api key is required")

    env_path = write_user_env_vars(
        {
            "HORNBILL_INSTANCE": instance or None,
            "HORNBILL_API_KEY": api_key or None,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
