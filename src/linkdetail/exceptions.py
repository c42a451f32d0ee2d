"""
Exception hierarchy for LinkDetail.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""


class LinkDetailError(Exception):
    """Base exception for all LinkDetail errors."""
    pass


class InvalidAddressFormat(LinkDetailError):
    """Address family tag disagrees with the address byte length."""

    def __init__(self, family: str, length: int):
        self.family = family
        self.length = length
        super().__init__(
            f"Invalid {family} address: {length} bytes"
        )


class SnapshotParseError(LinkDetailError):
    """Raised when a serialized link snapshot cannot be parsed."""

    def __init__(self, message: str, value: object = None):
        self.value = value
        if value is not None:
            super().__init__(f"{message}: {value!r}")
        else:
            super().__init__(message)


class ConfigError(LinkDetailError):
    """Invalid configuration value."""
    pass
