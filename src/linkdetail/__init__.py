"""
LinkDetail - Network link detail summaries

Turns point-in-time snapshots of a network link (addresses, routes,
DNS servers, capabilities and Wi-Fi radio info) into display-ready
summaries for a network details screen or a terminal.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

__version__ = "0.1.0"
__author__ = "DNS Science.io"
__copyright__ = "Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company"
