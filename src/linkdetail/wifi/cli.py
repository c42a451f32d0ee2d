"""
Wi-Fi details CLI commands.
"""

import json

import click
from rich.console import Console
from rich.table import Table

from linkdetail.config import get_config
from linkdetail.exceptions import ConfigError
from linkdetail.wifi.core import (
    WifiConnection,
    SavedNetwork,
    calculate_signal_level,
    can_forget,
    forget_request,
    summarize_wifi,
)

console = Console()


@click.group()
def wifi():
    """Wi-Fi connection details."""
    pass


@wifi.command()
@click.option("--ssid", help="Network SSID")
@click.option("--rssi", type=int, help="Received signal strength (dBm)")
@click.option("--frequency", type=int, help="Channel frequency (MHz)")
@click.option("--link-speed", type=int, default=-1, show_default=True, help="Link speed (Mbps)")
@click.option("--mac", "mac_address", help="Device MAC address")
@click.option("--ephemeral", is_flag=True, help="Connection has no saved config")
@click.option("--network-id", type=int, help="Saved configuration id")
@click.option("--passpoint-fqdn", help="FQDN of a saved Passpoint config")
@click.option("--json-output", "json_out", is_flag=True, help="Output as JSON")
def details(
    ssid: str | None,
    rssi: int | None,
    frequency: int | None,
    link_speed: int,
    mac_address: str | None,
    ephemeral: bool,
    network_id: int | None,
    passpoint_fqdn: str | None,
    json_out: bool,
):
    """Show signal, band, link speed and forget options for a connection.

    Examples:
        linkdetail wifi details --rssi -60 --frequency 5180 --link-speed 433
        linkdetail wifi details --ssid Cafe --ephemeral --rssi -80 --frequency 2437
    """
    if passpoint_fqdn is not None and network_id is None:
        raise click.UsageError("--passpoint-fqdn requires --network-id")

    try:
        config = get_config()
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    connection = WifiConnection(
        ssid=ssid,
        rssi=rssi,
        frequency=frequency,
        link_speed=link_speed,
        mac_address=mac_address,
        ephemeral=ephemeral,
    )
    saved = None
    if network_id is not None:
        saved = SavedNetwork(
            network_id=network_id,
            is_passpoint=passpoint_fqdn is not None,
            fqdn=passpoint_fqdn,
        )

    summary = summarize_wifi(connection, config)
    request = forget_request(connection, saved)

    if json_out:
        output = summary.to_dict()
        output["can_forget"] = can_forget(connection, saved)
        output["forget_action"] = request.action.value
        output["forget_target"] = request.target
        click.echo(json.dumps(output, indent=2))
        return

    table = Table(title=f"Wi-Fi Details: {ssid or 'current network'}", show_header=False, box=None)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="white")

    if summary.signal_label:
        table.add_row("Signal Strength", f"{summary.signal_label} ({rssi} dBm)")
    if summary.link_speed_text:
        table.add_row("Link Speed", summary.link_speed_text)
    table.add_row("Frequency", summary.band.value if summary.band else "[dim]Unknown[/dim]")
    if summary.mac_address:
        table.add_row("MAC Address", summary.mac_address)

    if can_forget(connection, saved):
        table.add_row("Forget", f"{request.action.value} ({request.target})")
    else:
        table.add_row("Forget", "[dim]Not available[/dim]")

    console.print(table)


@wifi.command()
@click.argument("rssi", type=int)
@click.option("--levels", type=int, default=None, help="Number of signal levels")
def signal(rssi: int, levels: int | None):
    """Map an RSSI (dBm) onto a signal level.

    Examples:
        linkdetail wifi signal -- -67
        linkdetail wifi signal --levels 5 -- -67
    """
    try:
        config = get_config()
        num_levels = levels if levels is not None else config.signal_levels
        level = calculate_signal_level(rssi, num_levels)
    except (ConfigError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    if num_levels == config.signal_levels:
        console.print(f"{level}/{num_levels - 1} [cyan]{config.signal_labels[level]}[/cyan]")
    else:
        console.print(f"{level}/{num_levels - 1}")
