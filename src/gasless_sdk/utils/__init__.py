"""
Gasless SDK utilities.

This module provides logging and validation helpers for the SDK.
"""

from gasless_sdk.utils.logging import (
    configure_logging,
    disable_logging,
    enable_debug,
    get_logger,
    set_level,
)
from gasless_sdk.utils.validation import (
    hex_to_bytes,
    has_valid_checksum,
    is_valid_address,
    validate_address,
    validate_endpoint_url,
)

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "set_level",
    "enable_debug",
    "disable_logging",
    # Validation
    "validate_address",
    "is_valid_address",
    "has_valid_checksum",
    "validate_endpoint_url",
    "hex_to_bytes",
]
