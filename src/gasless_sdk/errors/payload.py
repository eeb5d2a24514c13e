"""
Exceptions raised while building payloads locally.

None of these involve the network: they come from configuration checks,
business input validation, ABI encoding and secure randomness.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from gasless_sdk.errors.base import GaslessError


class ConfigurationError(GaslessError):
    """
    Raised when an endpoint or contract address is missing or malformed.

    Example:
        >>> raise ConfigurationError("bundler_url is required", field="bundler_url")
    """

    code = "CONFIGURATION_ERROR"

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if field:
            details["field"] = field

        super().__init__(message, details=details)
        self.field = field


class ValidationError(GaslessError):
    """Raised when business input is malformed or out of range."""

    code = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str,
        *,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details=details)


class InvalidAddressError(ValidationError):
    """
    Raised when an Ethereum address is not well formed.

    Example:
        >>> raise InvalidAddressError("0x123", field="recipient")
    """

    code = "INVALID_ADDRESS"

    def __init__(
        self,
        address: str,
        *,
        field: str = "address",
        reason: Optional[str] = None,
    ) -> None:
        message = f"Invalid {field}: {address!r}"
        if reason:
            message += f" ({reason})"

        super().__init__(
            message,
            details={"field": field, "value": address, "reason": reason},
        )
        self.address = address
        self.field = field
        self.reason = reason


class InvalidAmountError(ValidationError):
    """
    Raised when an amount or value is negative, non-finite or too large.

    Example:
        >>> raise InvalidAmountError("-1", field="amount", reason="cannot be negative")
    """

    code = "INVALID_AMOUNT"

    def __init__(
        self,
        amount: str,
        *,
        field: str = "amount",
        reason: Optional[str] = None,
    ) -> None:
        message = f"Invalid {field}: {amount}"
        if reason:
            message += f" ({reason})"

        super().__init__(
            message,
            details={"field": field, "value": amount, "reason": reason},
        )
        self.amount = amount
        self.field = field
        self.reason = reason


class EncodingError(GaslessError):
    """
    Raised when arguments do not match a function signature, or when a
    signature or payload cannot be parsed.

    Example:
        >>> raise EncodingError("expected 2 arguments, got 1", function="transfer")
    """

    code = "ENCODING_ERROR"

    def __init__(
        self,
        message: str,
        *,
        function: Optional[str] = None,
        parameter: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if function:
            details["function"] = function
        if parameter:
            details["parameter"] = parameter

        super().__init__(message, details=details)
        self.function = function
        self.parameter = parameter


class RandomnessUnavailableError(GaslessError):
    """Raised when the secure random source cannot deliver bytes."""

    code = "RANDOMNESS_UNAVAILABLE"

    def __init__(
        self,
        message: str = "Secure random source is unavailable",
        *,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details=details)
