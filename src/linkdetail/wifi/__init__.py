"""
Wi-Fi Details Module

Signal strength, frequency band, link speed and forget rules for the
current Wi-Fi connection.
"""

from linkdetail.wifi.core import (
    FrequencyBand,
    ForgetAction,
    ForgetRequest,
    WifiConnection,
    SavedNetwork,
    WifiSummary,
    calculate_signal_level,
    signal_strength_label,
    frequency_band,
    link_speed_text,
    can_forget,
    forget_request,
    summarize_wifi,
)

__all__ = [
    "FrequencyBand",
    "ForgetAction",
    "ForgetRequest",
    "WifiConnection",
    "SavedNetwork",
    "WifiSummary",
    "calculate_signal_level",
    "signal_strength_label",
    "frequency_band",
    "link_speed_text",
    "can_forget",
    "forget_request",
    "summarize_wifi",
]
