"""
Data models for network link state.

Immutable snapshots of a link's addresses, routes and DNS servers as handed
over by the network layer, and the display-ready summary derived from them.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from netaddr import AddrFormatError, IPAddress, IPNetwork

from linkdetail.exceptions import InvalidAddressFormat, SnapshotParseError


# =============================================================================
# Enumerations
# =============================================================================

class AddressFamily(str, Enum):
    """IP address families."""
    IPV4 = "ipv4"
    IPV6 = "ipv6"


class Capability(str, Enum):
    """Network capabilities relevant to the details screen."""
    INTERNET = "internet"
    VALIDATED = "validated"
    CAPTIVE_PORTAL = "captive_portal"
    NOT_METERED = "not_metered"
    TRUSTED = "trusted"


# Packed length in bytes for each family
FAMILY_LENGTHS = {
    AddressFamily.IPV4: 4,
    AddressFamily.IPV6: 16,
}

FAMILY_VERSIONS = {
    AddressFamily.IPV4: 4,
    AddressFamily.IPV6: 6,
}


# =============================================================================
# Addresses and routes
# =============================================================================

@dataclass(frozen=True)
class LinkAddress:
    """A single IP address tagged with its family.

    The family tag and the packed bytes are supplied independently by the
    network layer, so they are only checked by ``validate()``.
    """
    family: AddressFamily
    packed: bytes

    @classmethod
    def parse(cls, text: str) -> "LinkAddress":
        """Build an address from its textual form (e.g. ``192.168.1.10``)."""
        if not isinstance(text, str):
            raise SnapshotParseError("Address must be a string", text)
        try:
            ip = IPAddress(text.strip())
        except (AddrFormatError, ValueError) as e:
            raise SnapshotParseError("Invalid IP address", text) from e

        family = AddressFamily.IPV4 if ip.version == 4 else AddressFamily.IPV6
        return cls(family=family, packed=ip.packed)

    def validate(self) -> None:
        """Raise InvalidAddressFormat if the family tag and byte length disagree."""
        expected = FAMILY_LENGTHS.get(self.family)
        if expected is None or len(self.packed) != expected:
            family = getattr(self.family, "value", str(self.family))
            raise InvalidAddressFormat(family, len(self.packed))

    @property
    def is_ipv4(self) -> bool:
        return self.family == AddressFamily.IPV4

    @property
    def is_ipv6(self) -> bool:
        return self.family == AddressFamily.IPV6

    @property
    def is_unspecified(self) -> bool:
        """True for 0.0.0.0 and ::."""
        return not any(self.packed)

    @property
    def host_address(self) -> str:
        """Textual host address (dotted quad or compressed IPv6)."""
        self.validate()
        value = int.from_bytes(self.packed, "big")
        return str(IPAddress(value, FAMILY_VERSIONS[self.family]))

    def __str__(self) -> str:
        return self.host_address


@dataclass(frozen=True)
class IpPrefix:
    """Route destination: an address plus a prefix length."""
    address: LinkAddress
    prefix_length: int

    @classmethod
    def parse(cls, text: str) -> "IpPrefix":
        """Parse CIDR notation (``192.168.1.0/24``)."""
        if not isinstance(text, str) or "/" not in text:
            raise SnapshotParseError("Destination must be in CIDR notation", text)
        try:
            net = IPNetwork(text.strip())
        except (AddrFormatError, ValueError) as e:
            raise SnapshotParseError("Invalid destination prefix", text) from e

        family = AddressFamily.IPV4 if net.version == 4 else AddressFamily.IPV6
        return cls(
            address=LinkAddress(family=family, packed=net.network.packed),
            prefix_length=net.prefixlen,
        )

    def __str__(self) -> str:
        return f"{self.address}/{self.prefix_length}"


@dataclass(frozen=True)
class RouteInfo:
    """A route entry with an optional destination and optional gateway."""
    destination: IpPrefix | None = None
    gateway: LinkAddress | None = None

    @property
    def has_gateway(self) -> bool:
        """True when the route goes through a real next hop.

        Directly connected routes carry an unspecified gateway (0.0.0.0 or ::),
        which does not count.
        """
        return self.gateway is not None and not self.gateway.is_unspecified


# =============================================================================
# Snapshot and summary
# =============================================================================

@dataclass(frozen=True)
class LinkSnapshot:
    """Point-in-time link properties for one network."""
    addresses: tuple[LinkAddress, ...] = ()
    routes: tuple[RouteInfo, ...] = ()
    dns_servers: tuple[LinkAddress, ...] = ()

    def __post_init__(self):
        # Accept any iterable but store tuples so snapshots stay hashable
        object.__setattr__(self, "addresses", tuple(self.addresses))
        object.__setattr__(self, "routes", tuple(self.routes))
        object.__setattr__(self, "dns_servers", tuple(self.dns_servers))

    def iter_addresses(self):
        """Yield every address the snapshot references."""
        yield from self.addresses
        for route in self.routes:
            if route.destination is not None:
                yield route.destination.address
            if route.gateway is not None:
                yield route.gateway
        yield from self.dns_servers

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LinkSnapshot":
        """Build a snapshot from its JSON form.

        Addresses and DNS servers may be plain strings or objects with an
        explicit ``family`` and either ``address`` text or ``packed`` hex.
        Routes are objects with optional ``destination`` (CIDR) and
        ``gateway`` keys.
        """
        if not isinstance(data, dict):
            raise SnapshotParseError("Snapshot must be an object", data)

        addresses = [_address_from_json(a) for a in _list_field(data, "addresses")]
        dns_servers = [_address_from_json(a) for a in _list_field(data, "dns_servers")]

        routes = []
        for entry in _list_field(data, "routes"):
            if not isinstance(entry, dict):
                raise SnapshotParseError("Route must be an object", entry)
            destination = entry.get("destination")
            gateway = entry.get("gateway")
            routes.append(RouteInfo(
                destination=IpPrefix.parse(destination) if destination else None,
                gateway=_address_from_json(gateway) if gateway else None,
            ))

        return cls(addresses=addresses, routes=routes, dns_servers=dns_servers)

    def to_dict(self) -> dict[str, Any]:
        return {
            "addresses": [_address_to_json(a) for a in self.addresses],
            "routes": [
                {
                    "destination": str(r.destination) if r.destination else None,
                    "gateway": _address_to_json(r.gateway) if r.gateway else None,
                }
                for r in self.routes
            ],
            "dns_servers": [_address_to_json(a) for a in self.dns_servers],
        }


@dataclass(frozen=True)
class NetworkCapabilities:
    """Capabilities advertised for a network."""
    capabilities: frozenset[Capability] = frozenset()

    @classmethod
    def of(cls, *capabilities: Capability | str) -> "NetworkCapabilities":
        try:
            return cls(frozenset(Capability(c) for c in capabilities))
        except ValueError as e:
            raise SnapshotParseError("Unknown capability", str(e)) from e

    def has_capability(self, capability: Capability) -> bool:
        return capability in self.capabilities

    def to_list(self) -> list[str]:
        return sorted(c.value for c in self.capabilities)


@dataclass(frozen=True)
class LinkSummary:
    """Display-ready summary of a link. ``None`` marks an absent field."""
    ipv4_address: str | None = None
    ipv6_addresses: tuple[str, ...] = field(default_factory=tuple)
    subnet_mask: str | None = None
    gateway: str | None = None
    dns_text: str = ""

    @property
    def has_ipv4_address(self) -> bool:
        return self.ipv4_address is not None

    @property
    def has_ipv6_addresses(self) -> bool:
        return bool(self.ipv6_addresses)

    @property
    def has_subnet_mask(self) -> bool:
        return self.subnet_mask is not None

    @property
    def has_gateway(self) -> bool:
        return self.gateway is not None

    @property
    def has_dns(self) -> bool:
        return bool(self.dns_text)

    @property
    def dns_servers(self) -> list[str]:
        return self.dns_text.split(",") if self.dns_text else []

    def to_dict(self) -> dict[str, Any]:
        return {
            "ipv4_address": self.ipv4_address,
            "ipv6_addresses": list(self.ipv6_addresses),
            "subnet_mask": self.subnet_mask,
            "gateway": self.gateway,
            "dns": self.dns_text,
        }


# =============================================================================
# JSON helpers
# =============================================================================

def _list_field(data: dict[str, Any], key: str) -> list:
    value = data.get(key) or []
    if not isinstance(value, list):
        raise SnapshotParseError(f"'{key}' must be a list", value)
    return value


def _address_from_json(value: Any) -> LinkAddress:
    if isinstance(value, str):
        return LinkAddress.parse(value)
    if not isinstance(value, dict):
        raise SnapshotParseError("Address must be a string or an object", value)

    try:
        family = AddressFamily(str(value.get("family", "")).lower())
    except ValueError as e:
        raise SnapshotParseError("Unknown address family", value.get("family")) from e

    if "packed" in value:
        try:
            packed = bytes.fromhex(value["packed"])
        except (TypeError, ValueError) as e:
            raise SnapshotParseError("Invalid packed address", value["packed"]) from e
    elif "address" in value:
        packed = LinkAddress.parse(value["address"]).packed
    else:
        raise SnapshotParseError("Address object needs 'address' or 'packed'", value)

    # Family is kept as tagged; a mismatch surfaces when the snapshot is summarized
    return LinkAddress(family=family, packed=packed)


def _address_to_json(address: LinkAddress) -> dict[str, str]:
    return {"family": address.family.value, "packed": address.packed.hex()}
