"""
Validation utilities for the gasless SDK.

Provides input validation functions for:
- Ethereum addresses
- Endpoint URLs
- Hex-encoded byte strings

Address and URL validators raise ValidationError (or subclasses) on failure.
"""

from __future__ import annotations

import re
from typing import Union
from urllib.parse import urlparse

from eth_utils import is_checksum_address
from web3 import Web3

from gasless_sdk.errors import InvalidAddressError, ValidationError

HEX_DATA_PATTERN = re.compile(r"^0x([0-9a-fA-F]{2})*$")


def validate_address(address: str, field_name: str = "address") -> str:
    """
    Validate Ethereum address format.

    Lower- and upper-case addresses are accepted as-is; mixed-case
    addresses must carry a valid EIP-55 checksum.

    Args:
        address: Address to validate
        field_name: Field name for error messages

    Returns:
        Checksummed address

    Raises:
        InvalidAddressError: If address is invalid
    """
    if not address:
        raise InvalidAddressError("", field=field_name, reason=f"{field_name} is required")

    if not isinstance(address, str):
        raise InvalidAddressError(
            str(address),
            field=field_name,
            reason=f"{field_name} must be a string",
        )

    if not re.match(r"^0x[0-9a-fA-F]{40}$", address):
        raise InvalidAddressError(
            address,
            field=field_name,
            reason="must be 0x followed by 40 hex characters",
        )

    if not Web3.is_address(address) or not has_valid_checksum(address):
        raise InvalidAddressError(address, field=field_name, reason="bad EIP-55 checksum")

    return Web3.to_checksum_address(address)


def has_valid_checksum(address: str) -> bool:
    """
    Check the EIP-55 checksum of a 0x-prefixed address.

    All-lowercase and all-uppercase addresses carry no checksum and pass;
    a mixed-case address must match its checksum exactly.
    """
    body = address[2:]
    if body == body.lower() or body == body.upper():
        return True
    return is_checksum_address(address)


def is_valid_address(address: object) -> bool:
    return (
        isinstance(address, str)
        and address.startswith("0x")
        and Web3.is_address(address)
        and has_valid_checksum(address)
    )


def validate_endpoint_url(url: str, field_name: str = "url") -> str:
    """
    Validate an endpoint URL.

    Only the shape is checked: http(s) scheme and a hostname. Local
    bundlers are legitimate during development, so private hosts are
    allowed.

    Args:
        url: URL to validate
        field_name: Field name for error messages

    Returns:
        The URL, unmodified

    Raises:
        ValidationError: If URL is missing or malformed
    """
    if not url:
        raise ValidationError(
            f"{field_name} is required",
            details={"field": field_name, "value": None},
        )

    if not isinstance(url, str):
        raise ValidationError(
            f"{field_name} must be a string",
            details={"field": field_name, "value": str(url)},
        )

    try:
        parsed = urlparse(url)
    except ValueError:
        raise ValidationError(
            f"Invalid {field_name}: malformed URL",
            details={"field": field_name, "value": url},
        )

    if parsed.scheme not in ("http", "https", "ws", "wss"):
        raise ValidationError(
            f"Invalid {field_name}: scheme must be http(s) or ws(s)",
            details={"field": field_name, "value": url, "scheme": parsed.scheme},
        )

    if not parsed.hostname:
        raise ValidationError(
            f"Invalid {field_name}: missing hostname",
            details={"field": field_name, "value": url},
        )

    return url


def hex_to_bytes(value: Union[str, bytes, bytearray]) -> bytes:
    """
    Convert 0x-prefixed hex or a bytes-like value to ``bytes``.

    Raises:
        ValueError: If the value is neither bytes nor well-formed 0x hex
    """
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, str) and HEX_DATA_PATTERN.match(value):
        return bytes.fromhex(value[2:])
    raise ValueError(f"expected bytes or 0x-prefixed even-length hex, got {value!r}")


__all__ = [
    "validate_address",
    "is_valid_address",
    "has_valid_checksum",
    "validate_endpoint_url",
    "hex_to_bytes",
]
