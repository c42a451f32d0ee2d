"""
Unit tests for link-state summarization.
"""

import pytest

from linkdetail.exceptions import InvalidAddressFormat
from linkdetail.link.core import (
    LinkStateSummarizer,
    can_sign_in,
    prefix_length_to_netmask,
    summarize,
)
from linkdetail.link.models import (
    AddressFamily,
    Capability,
    IpPrefix,
    LinkAddress,
    LinkSnapshot,
    LinkSummary,
    NetworkCapabilities,
    RouteInfo,
)


def addr(text: str) -> LinkAddress:
    return LinkAddress.parse(text)


def route(destination: str | None = None, gateway: str | None = None) -> RouteInfo:
    return RouteInfo(
        destination=IpPrefix.parse(destination) if destination else None,
        gateway=addr(gateway) if gateway else None,
    )


class TestPrefixLengthToNetmask:
    """Test IPv4 prefix length to netmask conversion."""

    @pytest.mark.parametrize("prefix_length,expected", [
        (0, "0.0.0.0"),
        (8, "255.0.0.0"),
        (20, "255.255.240.0"),
        (24, "255.255.255.0"),
        (30, "255.255.255.252"),
        (32, "255.255.255.255"),
    ])
    def test_valid_lengths(self, prefix_length, expected):
        assert prefix_length_to_netmask(prefix_length) == expected

    @pytest.mark.parametrize("prefix_length", [-1, 33, 64, 128])
    def test_out_of_range_is_absent(self, prefix_length):
        assert prefix_length_to_netmask(prefix_length) is None

    def test_non_integer_is_absent(self):
        assert prefix_length_to_netmask("24") is None
        assert prefix_length_to_netmask(True) is None


class TestAddresses:
    """Test IPv4 / IPv6 address selection."""

    def test_home_wifi(self, home_wifi_snapshot):
        summary = summarize(home_wifi_snapshot)

        assert summary.ipv4_address == "192.168.1.23"
        assert summary.ipv6_addresses == ("fe80::1c2b:3cff:fe4d:5e6f", "2001:db8:1::23")

    def test_no_ipv4_address(self):
        snapshot = LinkSnapshot(addresses=[addr("fe80::1"), addr("2001:db8::5")])

        summary = summarize(snapshot)

        assert summary.ipv4_address is None
        assert not summary.has_ipv4_address

    def test_last_ipv4_address_wins(self):
        snapshot = LinkSnapshot(addresses=[
            addr("10.0.0.1"),
            addr("fe80::1"),
            addr("10.0.0.2"),
            addr("10.0.0.3"),
        ])

        assert summarize(snapshot).ipv4_address == "10.0.0.3"

    def test_ipv6_order_and_duplicates_preserved(self):
        snapshot = LinkSnapshot(addresses=[
            addr("2001:db8::2"),
            addr("10.0.0.1"),
            addr("fe80::1"),
            addr("2001:db8::2"),
        ])

        summary = summarize(snapshot)

        assert summary.ipv6_addresses == ("2001:db8::2", "fe80::1", "2001:db8::2")

    def test_ipv6_is_compressed_lowercase(self):
        snapshot = LinkSnapshot(addresses=[addr("2001:0DB8:0000:0000:0000:0000:0000:0001")])

        assert summarize(snapshot).ipv6_addresses == ("2001:db8::1",)

    def test_empty_snapshot(self):
        summary = summarize(LinkSnapshot())

        assert summary == LinkSummary()
        assert summary.ipv4_address is None
        assert summary.ipv6_addresses == ()
        assert summary.subnet_mask is None
        assert summary.gateway is None
        assert summary.dns_text == ""


class TestSubnetMask:
    """Test subnet mask derivation from routes."""

    def test_prefix_24(self):
        snapshot = LinkSnapshot(routes=[route("192.168.1.0/24")])

        assert summarize(snapshot).subnet_mask == "255.255.255.0"

    def test_zero_prefix_excluded(self):
        snapshot = LinkSnapshot(routes=[route("0.0.0.0/0", "192.168.1.1")])

        summary = summarize(snapshot)

        assert summary.subnet_mask is None
        assert not summary.has_subnet_mask

    def test_default_route_skipped_for_connected_route(self):
        snapshot = LinkSnapshot(routes=[
            route("0.0.0.0/0", "10.1.0.1"),
            route("10.1.0.0/22"),
        ])

        assert summarize(snapshot).subnet_mask == "255.255.252.0"

    def test_first_qualifying_route_wins(self):
        snapshot = LinkSnapshot(routes=[
            route("172.16.0.0/12"),
            route("192.168.1.0/24"),
        ])

        assert summarize(snapshot).subnet_mask == "255.240.0.0"

    def test_ipv6_destination_ignored(self):
        snapshot = LinkSnapshot(routes=[route("2001:db8::/64"), route("fe80::/64")])

        assert summarize(snapshot).subnet_mask is None

    def test_invalid_prefix_length_degrades_to_absent(self):
        bad = RouteInfo(destination=IpPrefix(addr("10.0.0.0"), 40))
        snapshot = LinkSnapshot(routes=[bad, route("192.168.1.0/24")])

        summary = summarize(snapshot)

        assert summary.subnet_mask is None

    def test_route_without_destination(self):
        snapshot = LinkSnapshot(routes=[route(gateway="192.168.1.1")])

        assert summarize(snapshot).subnet_mask is None


class TestGateway:
    """Test gateway selection from routes."""

    def test_first_ipv4_gateway_wins(self):
        snapshot = LinkSnapshot(routes=[
            route("0.0.0.0/0", "192.168.1.1"),
            route("10.0.0.0/8", "192.168.1.254"),
        ])

        assert summarize(snapshot).gateway == "192.168.1.1"

    def test_ipv6_gateway_ignored(self):
        snapshot = LinkSnapshot(routes=[
            route("::/0", "fe80::1"),
            route("0.0.0.0/0", "192.168.1.1"),
        ])

        assert summarize(snapshot).gateway == "192.168.1.1"

    def test_unspecified_gateway_is_no_gateway(self):
        snapshot = LinkSnapshot(routes=[
            route("192.168.1.0/24", "0.0.0.0"),
            route("0.0.0.0/0", "192.168.1.1"),
        ])

        assert summarize(snapshot).gateway == "192.168.1.1"

    def test_no_gateway(self, home_wifi_snapshot):
        snapshot = LinkSnapshot(
            addresses=home_wifi_snapshot.addresses,
            routes=[route("192.168.1.0/24")],
        )

        summary = summarize(snapshot)

        assert summary.gateway is None
        assert not summary.has_gateway


class TestDns:
    """Test DNS text assembly."""

    def test_ipv4_servers_joined(self):
        snapshot = LinkSnapshot(dns_servers=[
            addr("2001:4860:4860::8888"),
            addr("8.8.8.8"),
            addr("8.8.4.4"),
        ])

        summary = summarize(snapshot)

        assert summary.dns_text == "8.8.8.8,8.8.4.4"
        assert summary.dns_servers == ["8.8.8.8", "8.8.4.4"]

    def test_no_servers(self):
        summary = summarize(LinkSnapshot(dns_servers=[]))

        assert summary.dns_text == ""
        assert not summary.has_dns
        assert summary.dns_servers == []

    def test_ipv6_only_servers(self):
        snapshot = LinkSnapshot(dns_servers=[addr("2606:4700:4700::1111")])

        assert summarize(snapshot).dns_text == ""


class TestInvalidAddressFormat:
    """Test family / byte-length validation."""

    def test_ipv4_tag_with_16_bytes(self):
        bad = LinkAddress(family=AddressFamily.IPV4, packed=bytes(16))
        snapshot = LinkSnapshot(addresses=[addr("10.0.0.1"), bad])

        with pytest.raises(InvalidAddressFormat, match="ipv4"):
            summarize(snapshot)

    def test_ipv6_tag_with_4_bytes(self):
        bad = LinkAddress(family=AddressFamily.IPV6, packed=bytes([8, 8, 8, 8]))

        with pytest.raises(InvalidAddressFormat) as exc_info:
            summarize(LinkSnapshot(dns_servers=[bad]))

        assert exc_info.value.family == "ipv6"
        assert exc_info.value.length == 4

    def test_bad_gateway(self):
        bad = LinkAddress(family=AddressFamily.IPV4, packed=b"\x0a\x00\x00")
        snapshot = LinkSnapshot(routes=[RouteInfo(gateway=bad)])

        with pytest.raises(InvalidAddressFormat):
            summarize(snapshot)

    def test_bad_route_destination(self):
        bad = IpPrefix(LinkAddress(family=AddressFamily.IPV4, packed=bytes(16)), 24)

        with pytest.raises(InvalidAddressFormat):
            summarize(LinkSnapshot(routes=[RouteInfo(destination=bad)]))


class TestDeterminism:
    """Test that summarizing has no hidden state."""

    def test_same_input_same_output(self, home_wifi_snapshot):
        summarizer = LinkStateSummarizer()

        first = summarizer.summarize(home_wifi_snapshot)
        second = summarizer.summarize(home_wifi_snapshot)

        assert first == second
        assert first == summarize(home_wifi_snapshot)

    def test_full_summary(self, home_wifi_snapshot):
        summary = summarize(home_wifi_snapshot)

        assert summary.to_dict() == {
            "ipv4_address": "192.168.1.23",
            "ipv6_addresses": ["fe80::1c2b:3cff:fe4d:5e6f", "2001:db8:1::23"],
            "subnet_mask": "255.255.255.0",
            "gateway": "192.168.1.1",
            "dns": "8.8.8.8,8.8.4.4",
        }


class TestCanSignIn:
    """Test captive portal sign-in availability."""

    def test_captive_portal(self):
        caps = NetworkCapabilities.of(Capability.INTERNET, Capability.CAPTIVE_PORTAL)

        assert can_sign_in(caps)

    def test_validated_network(self):
        assert not can_sign_in(NetworkCapabilities.of("internet", "validated"))

    def test_unknown_capabilities(self):
        assert not can_sign_in(None)
