"""
Wi-Fi radio details.

Signal strength buckets, frequency band naming, link speed text and the
forget / sign-in rules shown on a Wi-Fi network details screen.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from linkdetail.config import LinkDetailConfig, get_config

logger = logging.getLogger(__name__)

# RSSI range mapped onto signal levels (dBm)
MIN_RSSI = -100
MAX_RSSI = -55

# Levels used for the signal icon
ICON_SIGNAL_LEVELS = 5

# Band edges in MHz, lower bound inclusive
LOWER_FREQ_24GHZ = 2400
HIGHER_FREQ_24GHZ = 2500
LOWER_FREQ_5GHZ = 4900
HIGHER_FREQ_5GHZ = 5900


class FrequencyBand(str, Enum):
    """Wi-Fi frequency bands."""
    BAND_24GHZ = "2.4 GHz"
    BAND_5GHZ = "5 GHz"


class ForgetAction(str, Enum):
    """How a network gets forgotten."""
    NONE = "none"
    DISABLE_EPHEMERAL = "disable_ephemeral"  # by SSID
    REMOVE_PASSPOINT = "remove_passpoint"  # by FQDN
    FORGET_CONFIG = "forget_config"  # by network id


@dataclass(frozen=True)
class WifiConnection:
    """Radio-level info about the current Wi-Fi connection."""
    ssid: str | None = None
    rssi: int | None = None  # dBm, None when unknown
    frequency: int | None = None  # MHz
    link_speed: int = -1  # Mbps, negative when unknown
    mac_address: str | None = None
    ephemeral: bool = False


@dataclass(frozen=True)
class SavedNetwork:
    """A saved Wi-Fi configuration."""
    network_id: int
    is_passpoint: bool = False
    fqdn: str | None = None


@dataclass(frozen=True)
class ForgetRequest:
    """What the host must do to forget a network."""
    action: ForgetAction
    target: str | int | None = None


@dataclass(frozen=True)
class WifiSummary:
    """Display-ready Wi-Fi radio details. ``None`` marks an absent field."""
    signal_level: int | None = None
    signal_label: str | None = None
    icon_level: int | None = None
    band: FrequencyBand | None = None
    link_speed_text: str | None = None
    mac_address: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "signal_level": self.signal_level,
            "signal_strength": self.signal_label,
            "icon_level": self.icon_level,
            "frequency_band": self.band.value if self.band else None,
            "link_speed": self.link_speed_text,
            "mac_address": self.mac_address,
        }


def calculate_signal_level(rssi: int, num_levels: int) -> int:
    """Map an RSSI onto ``num_levels`` buckets (0 is weakest)."""
    if num_levels < 2:
        raise ValueError(f"num_levels must be at least 2, got {num_levels}")
    if rssi <= MIN_RSSI:
        return 0
    if rssi >= MAX_RSSI:
        return num_levels - 1
    return int((rssi - MIN_RSSI) * (num_levels - 1) / (MAX_RSSI - MIN_RSSI))


def signal_strength_label(rssi: int | None, config: LinkDetailConfig | None = None) -> str | None:
    """Human-readable signal strength, None when the RSSI is unknown."""
    if rssi is None:
        return None
    config = config or get_config()
    level = calculate_signal_level(rssi, config.signal_levels)
    return config.signal_labels[level]


def frequency_band(frequency: int | None) -> FrequencyBand | None:
    """Name the band a frequency (MHz) falls into."""
    if frequency is None:
        return None
    if LOWER_FREQ_24GHZ <= frequency < HIGHER_FREQ_24GHZ:
        return FrequencyBand.BAND_24GHZ
    if LOWER_FREQ_5GHZ <= frequency < HIGHER_FREQ_5GHZ:
        return FrequencyBand.BAND_5GHZ
    logger.error("Unexpected frequency %s", frequency)
    return None


def link_speed_text(link_speed: int | None) -> str | None:
    if link_speed is None or link_speed < 0:
        return None
    return f"{link_speed} Mbps"


def can_forget(connection: WifiConnection | None, saved: SavedNetwork | None) -> bool:
    """A network can be forgotten if it is ephemeral or has a saved config."""
    return (connection is not None and connection.ephemeral) or saved is not None


def forget_request(connection: WifiConnection | None, saved: SavedNetwork | None) -> ForgetRequest:
    """Decide how to forget a network.

    Ephemeral connections are disabled by SSID; saved Passpoint configs are
    removed by FQDN; other saved configs are forgotten by network id.
    """
    if connection is not None and connection.ephemeral:
        return ForgetRequest(ForgetAction.DISABLE_EPHEMERAL, connection.ssid)
    if saved is not None:
        if saved.is_passpoint:
            return ForgetRequest(ForgetAction.REMOVE_PASSPOINT, saved.fqdn)
        return ForgetRequest(ForgetAction.FORGET_CONFIG, saved.network_id)
    return ForgetRequest(ForgetAction.NONE)


def summarize_wifi(connection: WifiConnection, config: LinkDetailConfig | None = None) -> WifiSummary:
    """Build the radio part of a network details screen."""
    config = config or get_config()

    signal_level = None
    icon_level = None
    if connection.rssi is not None:
        signal_level = calculate_signal_level(connection.rssi, config.signal_levels)
        icon_level = calculate_signal_level(connection.rssi, ICON_SIGNAL_LEVELS)

    return WifiSummary(
        signal_level=signal_level,
        signal_label=config.signal_labels[signal_level] if signal_level is not None else None,
        icon_level=icon_level,
        band=frequency_band(connection.frequency),
        link_speed_text=link_speed_text(connection.link_speed),
        mac_address=connection.mac_address,
    )
