"""
Link state CLI commands.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import json
import sys

import click
from rich.console import Console
from rich.table import Table

from linkdetail.exceptions import LinkDetailError
from linkdetail.link.core import can_sign_in, prefix_length_to_netmask, summarize
from linkdetail.link.models import LinkSnapshot, LinkSummary, NetworkCapabilities
from linkdetail.link.watcher import LinkStateWatcher, LinkUpdate

console = Console()


def load_snapshot_file(path: str) -> dict:
    """Read a snapshot JSON document from a file, or stdin for '-'."""
    if path == "-":
        return json.load(sys.stdin)
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def capabilities_from_json(data: dict) -> NetworkCapabilities | None:
    if "capabilities" not in data:
        return None
    return NetworkCapabilities.of(*(data.get("capabilities") or []))


def render_summary(summary: LinkSummary | None, title: str, sign_in: bool = False) -> Table:
    """Render a summary as a table, leaving out absent fields."""
    table = Table(title=title, show_header=False, box=None)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="white")

    if summary is not None:
        if summary.has_ipv4_address:
            table.add_row("IP Address", summary.ipv4_address)
        if summary.has_subnet_mask:
            table.add_row("Subnet Mask", summary.subnet_mask)
        if summary.has_gateway:
            table.add_row("Gateway", summary.gateway)
        for i, server in enumerate(summary.dns_servers):
            table.add_row("DNS" if i == 0 else "", server)
        if summary.has_ipv6_addresses:
            table.add_row("", "")
            for i, address in enumerate(summary.ipv6_addresses):
                table.add_row("IPv6 Addresses" if i == 0 else "", address)

    if sign_in:
        table.add_row("", "")
        table.add_row("Captive Portal", "[yellow]Sign in to network[/yellow]")

    if not table.rows:
        table.add_row("[dim]No IP details[/dim]", "")

    return table


def _update_to_dict(update: LinkUpdate) -> dict:
    return {
        "network": update.network,
        "summary": update.summary.to_dict() if update.summary else None,
        "sign_in_available": update.sign_in_available,
    }


@click.group()
def link():
    """Network link state summaries."""
    pass


@link.command("summarize")
@click.argument("snapshot_file", type=click.Path(exists=True, allow_dash=True))
@click.option("--json-output", "json_out", is_flag=True, help="Output as JSON")
def summarize_cmd(snapshot_file: str, json_out: bool):
    """Summarize a link snapshot (JSON file, or - for stdin).

    \b
    Snapshot format:
        {
          "addresses": ["192.168.1.10", "fe80::1"],
          "routes": [{"destination": "192.168.1.0/24"},
                     {"destination": "0.0.0.0/0", "gateway": "192.168.1.1"}],
          "dns_servers": ["8.8.8.8", "8.8.4.4"],
          "capabilities": ["internet", "captive_portal"]
        }

    Examples:
        linkdetail link summarize wlan0.json
        cat wlan0.json | linkdetail link summarize - --json-output
    """
    try:
        data = load_snapshot_file(snapshot_file)
        snapshot = LinkSnapshot.from_dict(data)
        capabilities = capabilities_from_json(data)
        summary = summarize(snapshot)
    except (LinkDetailError, OSError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    sign_in = can_sign_in(capabilities)

    if json_out:
        output = summary.to_dict()
        output["sign_in_available"] = sign_in
        click.echo(json.dumps(output, indent=2))
        return

    console.print(render_summary(summary, f"Link Details: {snapshot_file}", sign_in))


@link.command()
@click.argument("prefix_length", type=int)
def netmask(prefix_length: int):
    """Convert an IPv4 prefix length to a subnet mask.

    Examples:
        linkdetail link netmask 24
    """
    mask = prefix_length_to_netmask(prefix_length)
    if mask is None:
        console.print(f"[red]Error:[/red] invalid IPv4 prefix length /{prefix_length}")
        raise SystemExit(1)
    console.print(mask)


@link.command()
@click.argument("events_file", type=click.Path(exists=True, allow_dash=True))
@click.option("--json-output", "json_out", is_flag=True, help="Output as JSON lines")
def watch(events_file: str, json_out: bool):
    """Replay link-state events and print every resulting update.

    Each line of EVENTS_FILE is a JSON object with an "event" of
    start, link_properties, capabilities, lost or stop, plus "network"
    and the snapshot / capabilities the event carries. Duplicate or
    foreign events produce no output.

    Examples:
        linkdetail link watch events.jsonl
    """
    def on_update(update: LinkUpdate):
        if json_out:
            click.echo(json.dumps(_update_to_dict(update)))
        else:
            console.print(render_summary(
                update.summary, f"Network {update.network}", update.sign_in_available
            ))

    def on_lost(network):
        if json_out:
            click.echo(json.dumps({"network": network, "lost": True}))
        else:
            console.print(f"[yellow]Network {network} lost[/yellow]")

    watcher = LinkStateWatcher(on_update=on_update, on_lost=on_lost)

    stream = sys.stdin if events_file == "-" else open(events_file, encoding="utf-8")
    try:
        for lineno, line in enumerate(stream, 1):
            line = line.strip()
            if not line:
                continue
            try:
                _dispatch_event(watcher, json.loads(line))
            except (LinkDetailError, ValueError) as e:
                console.print(f"[red]Error:[/red] line {lineno}: {e}")
                raise SystemExit(1)
    finally:
        if stream is not sys.stdin:
            stream.close()


def _dispatch_event(watcher: LinkStateWatcher, event: dict) -> None:
    kind = event.get("event")
    network = event.get("network")
    snapshot = LinkSnapshot.from_dict(event["snapshot"]) if event.get("snapshot") else None

    if kind == "start":
        watcher.start(network, snapshot, capabilities_from_json(event))
    elif kind == "link_properties":
        if snapshot is None:
            raise ValueError("link_properties event needs a snapshot")
        watcher.on_link_properties_changed(network, snapshot)
    elif kind == "capabilities":
        watcher.on_capabilities_changed(network, capabilities_from_json(event) or NetworkCapabilities())
    elif kind == "lost":
        watcher.on_lost(network)
    elif kind == "stop":
        watcher.stop()
    else:
        raise ValueError(f"Unknown event type: {kind!r}")
