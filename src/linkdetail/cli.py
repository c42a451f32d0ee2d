"""
LinkDetail command line entry point.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import click

from linkdetail import __version__
from linkdetail.exceptions import ConfigError
from linkdetail.link.cli import link
from linkdetail.logging_config import configure_logging
from linkdetail.wifi.cli import wifi


@click.group()
@click.version_option(__version__, prog_name="linkdetail")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--log-file/--no-log-file", default=None, help="Also log to ~/.linkdetail/logs")
def main(debug: bool, log_file: bool | None):
    """Network link and Wi-Fi details.

    \b
    Examples:
        linkdetail link summarize wlan0.json
        linkdetail link netmask 22
        linkdetail wifi details --rssi=-60 --frequency 5180
    """
    try:
        configure_logging(debug=debug, log_to_file=log_file)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)


main.add_command(link)
main.add_command(wifi)


if __name__ == "__main__":
    main()
