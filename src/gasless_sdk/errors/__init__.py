"""
Exception hierarchy for the gasless SDK.

    GaslessError
    ├── ConfigurationError
    ├── ValidationError
    │   ├── InvalidAddressError
    │   └── InvalidAmountError
    ├── EncodingError
    ├── RandomnessUnavailableError
    ├── OperationError
    └── InvalidStateTransitionError
"""

from gasless_sdk.errors.base import GaslessError
from gasless_sdk.errors.operation import InvalidStateTransitionError, OperationError
from gasless_sdk.errors.payload import (
    ConfigurationError,
    EncodingError,
    InvalidAddressError,
    InvalidAmountError,
    RandomnessUnavailableError,
    ValidationError,
)

__all__ = [
    "GaslessError",
    "ConfigurationError",
    "ValidationError",
    "InvalidAddressError",
    "InvalidAmountError",
    "EncodingError",
    "RandomnessUnavailableError",
    "OperationError",
    "InvalidStateTransitionError",
]
