"""Command-line interface for soapx.

Posts a raw SOAP envelope through the same transport used by the library,
which is handy to check timeouts, credentials or header overrides against a
live service without an envelope layer.

Example:
    >>> # From terminal:
    >>> # soapx --version
    >>> # soapx send https://ws.example.com/quote -f request.xml --action GetQuote --attempts 3
    >>> # cat request.xml | soapx send https://ws.example.com/quote --soap-version 2 --insecure
    >>> # soapx headers --soap-version 2 --action GetQuote -H "X-Tenant: acme"
"""

import sys
from pathlib import Path
from typing import Annotated, Optional

import typer

from soapx import __version__
from soapx.client import LOGIN_OPTION, PASSWORD_OPTION, SoapClient
from soapx.errors import ConfigError, TransportError
from soapx.models.enums import SoapVersion
from soapx.observability import configure_logging
from soapx.transport.headers import build_headers

app = typer.Typer(help="SOAP transport CLI.")

EXIT_TRANSPORT_ERROR = 1
EXIT_CONFIG_ERROR = 2


def _version_callback(value: bool) -> None:
    """Print the version and exit when requested."""
    if value:
        typer.echo(__version__)
        raise typer.Exit()


VERSION_OPTION = typer.Option(
    False,
    "--version",
    help="Show soapx version and exit.",
    callback=_version_callback,
    is_eager=True,
)

ACTION_OPTION = typer.Option("", "--action", "-a", help="SOAP action of the operation.")
SOAP_VERSION_OPTION = typer.Option(
    int(SoapVersion.SOAP_1_1), "--soap-version", help="SOAP version: 1 (SOAP 1.1) or 2 (SOAP 1.2)."
)
CONTENT_TYPE_OPTION = typer.Option(
    None,
    "--content-type",
    help="Content-Type override. For SOAP 1.2, {SOAPACTION} is replaced by the action.",
)
HEADER_OPTION = typer.Option(
    None, "--header", "-H", help='Custom header as "Name: Value". Repeatable.'
)


def _parse_headers(values: list[str] | None) -> dict[str, str]:
    """Parse repeated ``Name: Value`` options into an ordered mapping."""
    headers: dict[str, str] = {}
    for raw in values or []:
        name, separator, value = raw.partition(":")
        if not separator or not name.strip():
            raise typer.BadParameter(f'Header must look like "Name: Value", got: {raw!r}')
        headers[name.strip()] = value.strip()
    return headers


@app.callback()
def cli(
    version: bool = VERSION_OPTION,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log transport events."),
) -> None:
    """soapx CLI entrypoint."""
    configure_logging(log_level="DEBUG" if verbose else "WARNING", force=True)


@app.command("headers")
def headers(
    action: str = ACTION_OPTION,
    soap_version: int = SOAP_VERSION_OPTION,
    content_type: Optional[str] = CONTENT_TYPE_OPTION,
    header: Optional[list[str]] = HEADER_OPTION,
) -> None:
    """Print the HTTP headers a request would carry."""
    for line in build_headers(soap_version, action, _parse_headers(header), content_type):
        typer.echo(line)


@app.command("send")
def send(
    location: Annotated[str, typer.Argument(help="Endpoint URL.")],
    body_file: Annotated[
        Optional[Path],
        typer.Option("--body-file", "-f", help="File with the SOAP envelope. Reads stdin if omitted."),
    ] = None,
    action: str = ACTION_OPTION,
    soap_version: int = SOAP_VERSION_OPTION,
    content_type: Optional[str] = CONTENT_TYPE_OPTION,
    header: Optional[list[str]] = HEADER_OPTION,
    login: Annotated[Optional[str], typer.Option("--login", help="Basic auth login.")] = None,
    password: Annotated[
        Optional[str], typer.Option("--password", help="Basic auth password.")
    ] = None,
    connect_timeout: Annotated[
        int, typer.Option("--connect-timeout", help="Connect timeout in seconds, 0 disables.")
    ] = 0,
    read_timeout: Annotated[
        Optional[int],
        typer.Option("--read-timeout", help="Read timeout in seconds, 0 disables."),
    ] = None,
    attempts: Annotated[int, typer.Option("--attempts", help="Total number of attempts.")] = 1,
    insecure: Annotated[
        bool, typer.Option("--insecure", "-k", help="Skip SSL certificate verification.")
    ] = False,
    one_way: Annotated[
        bool, typer.Option("--one-way", help="Do not read the response body.")
    ] = False,
) -> None:
    """Send a SOAP envelope and print the response body."""
    if body_file is not None:
        try:
            request = body_file.read_text(encoding="utf-8")
        except OSError as exc:
            raise typer.BadParameter(f"Cannot read body file: {exc}") from exc
    else:
        request = sys.stdin.read()

    options: dict[str, str] = {}
    if login is not None:
        options[LOGIN_OPTION] = login
        if password is not None:
            options[PASSWORD_OPTION] = password

    try:
        client = SoapClient(None, options, connect_timeout, attempts, read_timeout)
        client.set_ignore_cert_verify(insecure).set_content_type(content_type)
        client.set_headers(_parse_headers(header))
    except ConfigError as exc:
        typer.echo(f"Invalid configuration: {exc.message}", err=True)
        raise typer.Exit(EXIT_CONFIG_ERROR) from exc

    try:
        response = client.do_request(request, location, action, soap_version, one_way)
    except TransportError as exc:
        typer.echo(
            f"{exc.message} Last error ({client.last_conn_errno}): {client.last_conn_err_text}",
            err=True,
        )
        raise typer.Exit(EXIT_TRANSPORT_ERROR) from exc

    if response:
        typer.echo(response)


def main() -> None:
    """Run the soapx CLI."""
    app()


if __name__ == "__main__":
    main()
