"""CLI entry point for inspecting host resolution.

Usage:
    netresolve bind
    netresolve publish "#eth0#" --config node.yml
    netresolve resolve "#local#"
    netresolve interfaces --all
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from ..core.config import Settings
from ..core.exceptions import NetResolveError
from ..resolution.ec2 import register_ec2_resolvers
from ..resolution.network_service import NetworkService

# Initialize app
app = typer.Typer(
    name="netresolve",
    help="Resolve bind and publish host settings to network addresses",
    add_completion=False,
)

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_time=False, show_path=False)],
    )


def _build_service(config: Optional[Path], ec2: bool) -> NetworkService:
    try:
        service = NetworkService(settings=Settings.load(config))
    except NetResolveError as e:
        console.print(f"[red]Error: {escape(str(e))}[/]")
        raise typer.Exit(1)
    if ec2:
        register_ec2_resolvers(service)
    return service


def _print_address(label: str, address) -> None:
    if address is None:
        console.print(f"{label}: [yellow]no preference[/]")
    else:
        console.print(f"{label}: [green]{address}[/]")


CONFIG_OPTION = typer.Option(
    None,
    "--config", "-c",
    help="Path to a YAML settings file",
)
EC2_OPTION = typer.Option(
    False,
    "--ec2",
    help="Register the #ec2:...# metadata resolvers",
)
VERBOSE_OPTION = typer.Option(
    False,
    "--verbose", "-v",
    help="Enable verbose logging",
)


@app.command()
def bind(
    host: Optional[str] = typer.Argument(None, help="Explicit bind host override"),
    config: Optional[Path] = CONFIG_OPTION,
    ec2: bool = EC2_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Show the address sockets would bind to."""
    setup_logging(verbose)
    service = _build_service(config, ec2)
    try:
        address = service.resolve_bind_host_address(host)
    except NetResolveError as e:
        console.print(f"[red]Error: {escape(str(e))}[/]")
        raise typer.Exit(1)
    _print_address("Bind address", address)


@app.command()
def publish(
    host: Optional[str] = typer.Argument(None, help="Explicit publish host override"),
    config: Optional[Path] = CONFIG_OPTION,
    ec2: bool = EC2_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Show the address advertised to peers."""
    setup_logging(verbose)
    service = _build_service(config, ec2)
    try:
        address = service.resolve_publish_host_address(host)
    except NetResolveError as e:
        console.print(f"[red]Error: {escape(str(e))}[/]")
        raise typer.Exit(1)
    _print_address("Publish address", address)


@app.command()
def resolve(
    value: str = typer.Argument(..., help="Host value, e.g. 10.0.0.1, #local#, #eth0#"),
    ec2: bool = EC2_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Resolve a single host value, ignoring configured defaults."""
    setup_logging(verbose)
    service = NetworkService(settings=Settings())
    if ec2:
        register_ec2_resolvers(service)
    try:
        address = service.resolve_inet_address(value)
    except NetResolveError as e:
        console.print(f"[red]Error: {escape(str(e))}[/]")
        raise typer.Exit(1)
    _print_address(value, address)


@app.command()
def interfaces(
    show_all: bool = typer.Option(
        False,
        "--all", "-a",
        help="Include loopback and down interfaces",
    ),
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """List network interfaces usable as #name# tokens."""
    setup_logging(verbose)
    service = NetworkService(settings=Settings())

    table = Table(title="Network Interfaces")
    table.add_column("Name", style="cyan")
    table.add_column("Display Name")
    table.add_column("Up", justify="center")
    table.add_column("Loopback", justify="center")
    table.add_column("Addresses")

    for interface in service.network_utils.get_all_available_interfaces():
        if not show_all and (not interface.is_up or interface.is_loopback):
            continue
        table.add_row(
            interface.name,
            interface.display_name,
            "yes" if interface.is_up else "no",
            "yes" if interface.is_loopback else "no",
            ", ".join(str(a) for a in interface.addresses) or "-",
        )

    console.print(table)


@app.command()
def version() -> None:
    """Show version information."""
    from .. import __version__
    console.print(f"netresolve v{__version__}")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
