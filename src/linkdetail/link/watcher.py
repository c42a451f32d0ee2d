"""
Link-state watcher.

Sits between a network-observation source (connectivity callbacks, a
netlink monitor, a test) and a presentation layer. Tracks one network,
drops duplicate or foreign updates, and re-summarizes the link only when
its properties or capabilities actually change.

Example:
    >>> watcher = LinkStateWatcher(on_update=render)
    >>> watcher.start("wlan0", snapshot, capabilities)
    >>> watcher.on_link_properties_changed("wlan0", new_snapshot)
    >>> watcher.on_lost("wlan0")
"""

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Hashable

from linkdetail.exceptions import InvalidAddressFormat
from linkdetail.link.core import LinkStateSummarizer, can_sign_in
from linkdetail.link.models import LinkSnapshot, LinkSummary, NetworkCapabilities
from linkdetail.logging_config import track_error

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LinkUpdate:
    """What the presentation layer needs after a link change.

    Attributes:
        network: Network the update belongs to.
        summary: Link summary, or None when no link properties are known
            (every IP-layer field is hidden).
        sign_in_available: Whether the captive-portal sign-in action applies.
    """
    network: Hashable
    summary: LinkSummary | None
    sign_in_available: bool


class LinkStateWatcher:
    """Debounces link-state callbacks for a single network.

    Thread Safety:
        Callbacks may arrive from any thread. Each event is built and
        delivered while holding a dispatch lock, so ``on_update`` and
        ``on_lost`` see events in the order the watcher applied them. The
        lock is reentrant; the callbacks may call back into the watcher.
    """

    def __init__(
        self,
        on_update: Callable[[LinkUpdate], None],
        on_lost: Callable[[Hashable], None] | None = None,
        summarizer: LinkStateSummarizer | None = None,
    ):
        self._on_update = on_update
        self._on_lost = on_lost
        self._summarizer = summarizer or LinkStateSummarizer()
        self._dispatch_lock = threading.RLock()
        self._network: Hashable | None = None
        self._snapshot: LinkSnapshot | None = None
        self._capabilities: NetworkCapabilities | None = None

    @property
    def network(self) -> Hashable | None:
        return self._network

    @property
    def is_active(self) -> bool:
        return self._network is not None

    def start(
        self,
        network: Hashable,
        snapshot: LinkSnapshot | None = None,
        capabilities: NetworkCapabilities | None = None,
    ) -> LinkUpdate:
        """Bind to a network and publish its initial state."""
        if network is None:
            raise ValueError("network must not be None")

        with self._dispatch_lock:
            update = self._build_update(network, snapshot, capabilities)
            self._network = network
            self._snapshot = snapshot
            self._capabilities = capabilities

            logger.debug("Watching network %s", network)
            self._on_update(update)
        return update

    def stop(self) -> None:
        """Unbind; later callbacks are ignored until start() is called again."""
        with self._dispatch_lock:
            network = self._network
            self._clear()
        if network is not None:
            logger.debug("Stopped watching network %s", network)

    def on_link_properties_changed(
        self, network: Hashable, snapshot: LinkSnapshot
    ) -> LinkUpdate | None:
        """Handle new link properties; returns the update, or None if ignored.

        Raises:
            InvalidAddressFormat: the snapshot holds a malformed address. The
                previous snapshot stays current.
        """
        with self._dispatch_lock:
            if network is None or network != self._network or snapshot == self._snapshot:
                return None
            update = self._build_update(network, snapshot, self._capabilities)
            self._snapshot = snapshot
            self._on_update(update)
        return update

    def on_capabilities_changed(
        self, network: Hashable, capabilities: NetworkCapabilities
    ) -> LinkUpdate | None:
        """Handle new capabilities; returns the update, or None if ignored."""
        with self._dispatch_lock:
            if network is None or network != self._network or capabilities == self._capabilities:
                return None
            update = self._build_update(network, self._snapshot, capabilities)
            self._capabilities = capabilities
            self._on_update(update)
        return update

    def on_lost(self, network: Hashable) -> bool:
        """Handle loss of a network. Returns True if it was the watched one."""
        with self._dispatch_lock:
            if network is None or network != self._network:
                return False
            self._clear()

            logger.info("Network %s lost", network)
            if self._on_lost is not None:
                self._on_lost(network)
        return True

    def _clear(self) -> None:
        self._network = None
        self._snapshot = None
        self._capabilities = None

    def _build_update(
        self,
        network: Hashable,
        snapshot: LinkSnapshot | None,
        capabilities: NetworkCapabilities | None,
    ) -> LinkUpdate:
        summary = None
        if snapshot is not None:
            try:
                summary = self._summarizer.summarize(snapshot)
            except InvalidAddressFormat as e:
                track_error(
                    "invalid_address_format",
                    str(e),
                    context={"network": network},
                )
                raise
        return LinkUpdate(
            network=network,
            summary=summary,
            sign_in_available=can_sign_in(capabilities),
        )
