"""
Core link-state summarization.

Reduces a LinkSnapshot to the handful of values a network details screen
shows: IPv4 address, IPv6 addresses, subnet mask, gateway and DNS servers.
"""

import logging

from netaddr import AddrFormatError, IPNetwork

from linkdetail.link.models import (
    Capability,
    LinkSnapshot,
    LinkSummary,
    NetworkCapabilities,
    RouteInfo,
)

logger = logging.getLogger(__name__)

ALL_ONES_V4 = "255.255.255.255"
DNS_SEPARATOR = ","


def prefix_length_to_netmask(prefix_length: int) -> str | None:
    """Convert an IPv4 prefix length to a dotted-quad netmask.

    Returns None for anything outside 0-32.
    """
    if isinstance(prefix_length, bool) or not isinstance(prefix_length, int):
        return None
    if not 0 <= prefix_length <= 32:
        return None
    try:
        net = IPNetwork(f"{ALL_ONES_V4}/{prefix_length}")
    except (AddrFormatError, ValueError):
        return None
    return str(net.network)


class LinkStateSummarizer:
    """Stateless converter from LinkSnapshot to LinkSummary."""

    def summarize(self, snapshot: LinkSnapshot) -> LinkSummary:
        """Summarize a snapshot.

        Raises:
            InvalidAddressFormat: an address's family tag disagrees with its
                byte length.
        """
        for address in snapshot.iter_addresses():
            address.validate()

        # Every IPv4 match overwrites the previous one, so the last one is shown
        ipv4_address = None
        ipv6_addresses = []
        for address in snapshot.addresses:
            if address.is_ipv4:
                ipv4_address = address.host_address
            elif address.is_ipv6:
                ipv6_addresses.append(address.host_address)

        summary = LinkSummary(
            ipv4_address=ipv4_address,
            ipv6_addresses=tuple(ipv6_addresses),
            subnet_mask=self._subnet_mask(snapshot.routes),
            gateway=self._gateway(snapshot.routes),
            dns_text=DNS_SEPARATOR.join(
                server.host_address for server in snapshot.dns_servers if server.is_ipv4
            ),
        )
        logger.debug(
            "Summarized link: %d addresses, %d routes, %d DNS servers",
            len(snapshot.addresses), len(snapshot.routes), len(snapshot.dns_servers),
        )
        return summary

    @staticmethod
    def _subnet_mask(routes: tuple[RouteInfo, ...]) -> str | None:
        for route in routes:
            prefix = route.destination
            if prefix is not None and prefix.address.is_ipv4 and prefix.prefix_length > 0:
                mask = prefix_length_to_netmask(prefix.prefix_length)
                if mask is None:
                    logger.debug("Ignoring bad IPv4 prefix length %r", prefix.prefix_length)
                return mask
        return None

    @staticmethod
    def _gateway(routes: tuple[RouteInfo, ...]) -> str | None:
        for route in routes:
            if route.has_gateway and route.gateway.is_ipv4:
                return route.gateway.host_address
        return None


def can_sign_in(capabilities: NetworkCapabilities | None) -> bool:
    """Whether the network is behind a captive portal the user can sign into."""
    return capabilities is not None and capabilities.has_capability(Capability.CAPTIVE_PORTAL)


_summarizer = LinkStateSummarizer()


def summarize(snapshot: LinkSnapshot) -> LinkSummary:
    """Summarize a link snapshot."""
    return _summarizer.summarize(snapshot)
