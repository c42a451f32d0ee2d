"""
Link State Module

Models for link snapshots and summaries, the summarizer that turns one
into the other, and a watcher that re-summarizes on change.
"""

from linkdetail.exceptions import InvalidAddressFormat, SnapshotParseError
from linkdetail.link.models import (
    AddressFamily,
    Capability,
    LinkAddress,
    IpPrefix,
    RouteInfo,
    LinkSnapshot,
    LinkSummary,
    NetworkCapabilities,
)
from linkdetail.link.core import (
    LinkStateSummarizer,
    summarize,
    prefix_length_to_netmask,
    can_sign_in,
)
from linkdetail.link.watcher import LinkStateWatcher, LinkUpdate

__all__ = [
    # Models
    "AddressFamily",
    "Capability",
    "LinkAddress",
    "IpPrefix",
    "RouteInfo",
    "LinkSnapshot",
    "LinkSummary",
    "NetworkCapabilities",
    # Summarization
    "LinkStateSummarizer",
    "summarize",
    "prefix_length_to_netmask",
    "can_sign_in",
    # Watching
    "LinkStateWatcher",
    "LinkUpdate",
    # Errors
    "InvalidAddressFormat",
    "SnapshotParseError",
]
