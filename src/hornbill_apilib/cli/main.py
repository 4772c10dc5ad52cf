"""CLI (Typer) sobre la librería.

Por qué una CLI:
- Sirve de demostración ejecutable del flujo resolve -> params -> invoke.
- Permite probar una instancia sin escribir código (`hornbill invoke ...`).

La CLI no añade semántica: todo pasa por `get_url_from_name` y `Xmlmc`.
"""

from __future__ import annotations

import base64
from typing import List, Optional

import typer
from rich.console import Console
from rich.text import Text

from hornbill_apilib.adapters.discovery import get_url_from_name
from hornbill_apilib.adapters.xmlmc import Xmlmc
from hornbill_apilib.cli import doctor
from hornbill_apilib.cli.ui_components import build_headers_table, print_banner
from hornbill_apilib.core.config import AppSettings
from hornbill_apilib.core.errors import XmlmcError

app = typer.Typer(no_args_is_help=True, help="Client for the Hornbill xmlmc API.")
app.add_typer(doctor.app, name="doctor")

_err_console = Console(stderr=True)


def _fail(message: str) -> typer.Exit:
    _err_console.print(Text(message, style="red"))
    return typer.Exit(code=1)


def _open_client(server: str, settings: AppSettings) -> Xmlmc:
    return Xmlmc(server, settings)


def _resolve_server(url: str | None, instance: str | None, settings: AppSettings) -> str:
    server = url or settings.server_url
    if server:
        return server
    instance = instance or settings.instance
    if not instance:
        raise _fail("No endpoint: pass --url or --instance (or set HORNBILL_INSTANCE).")
    server = get_url_from_name(instance, settings)
    if server is None:
        raise _fail(f"Could not resolve instance {instance!r}.")
    return server


def _parse_params(raw: list[str]) -> list[tuple[str, str]]:
    params: list[tuple[str, str]] = []
    for item in raw:
        if "=" not in item:
            raise typer.BadParameter(f"expected key=value, got {item!r}", param_hint="--param")
        key, value = item.split("=", 1)
        params.append((key.strip(), value))
    return params


@app.command()
def resolve(instance: str = typer.Argument(..., help="Instance name, e.g. 'demo'.")) -> None:
    """Print the xmlmc endpoint of an instance."""

    server = get_url_from_name(instance, AppSettings())
    if server is None:
        raise _fail(f"Could not resolve instance {instance!r}.")
    typer.echo(server)


@app.command()
def invoke(
    service: str = typer.Argument(..., help="Service, e.g. 'session'."),
    method: str = typer.Argument(..., help="Method, e.g. 'getSessionInfo'."),
    param: Optional[List[str]] = typer.Option(None, "--param", "-p", help="Parameter as key=value (repeatable)."),
    instance: Optional[str] = typer.Option(None, "--instance", "-i", help="Instance name to resolve."),
    url: Optional[str] = typer.Option(None, "--url", help="xmlmc URL (skips discovery)."),
    api_key: Optional[str] = typer.Option(None, "--api-key", help="API key (ESP-APIKEY)."),
    session: Optional[str] = typer.Option(None, "--session", help="Existing session token."),
    trace: Optional[str] = typer.Option(None, "--trace", help="Trace identifier."),
    json_response: bool = typer.Option(False, "--json", help="Ask for a JSON response."),
    show_headers: bool = typer.Option(False, "--headers", help="Print the response headers."),
    user_agent: Optional[str] = typer.Option(None, "--user-agent", help="Override the User-Agent."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the request without sending it."),
) -> None:
    """Invoke SERVICE::METHOD and print the response body."""

    settings = AppSettings()
    params = _parse_params(param or [])
    server = _resolve_server(url, instance, settings)

    with _open_client(server, settings) as client:
        try:
            for key, value in params:
                client.set_param(key, value)
        except XmlmcError as exc:
            raise _fail(str(exc))

        api_key = api_key or settings.api_key
        if api_key:
            client.set_apikey(api_key)
        if session:
            client.set_sessionid(session)
        if trace:
            client.set_trace(trace)
        if user_agent:
            client.set_user_agent(user_agent)
        client.set_json_response(json_response)
        client.set_copy_headers(show_headers)

        if dry_run:
            typer.echo(f"POST {client.build_url(service, method)}")
            typer.echo(client.build_body(service, method))
            return

        try:
            body = client.invoke(service, method)
        except XmlmcError as exc:
            if client.get_status_code():
                _err_console.print(f"HTTP {client.get_status_code()}", style="dim")
            raise _fail(str(exc))

        if show_headers:
            _err_console.print(build_headers_table(client.get_headers()))
        typer.echo(body)


@app.command()
def logon(
    user: str = typer.Argument(..., help="User id."),
    password: str = typer.Option(..., prompt=True, hide_input=True, help="Password (sent base64 encoded)."),
    instance: Optional[str] = typer.Option(None, "--instance", "-i", help="Instance name to resolve."),
    url: Optional[str] = typer.Option(None, "--url", help="xmlmc URL (skips discovery)."),
) -> None:
    """Call session::userLogon and print the resulting session id."""

    settings = AppSettings()
    server = _resolve_server(url, instance, settings)

    with _open_client(server, settings) as client:
        client.set_param("UserId", user)
        client.set_param("password", base64.b64encode(password.encode("utf-8")).decode("ascii"))
        try:
            client.invoke("session", "userLogon")
        except XmlmcError as exc:
            raise _fail(str(exc))
        typer.echo(client.get_session_id())


@app.callback()
def main(
    quiet: bool = typer.Option(True, "--quiet/--banner", help="Show the banner before running."),
) -> None:
    if not quiet:
        print_banner(_err_console)


def run() -> None:
    app()
