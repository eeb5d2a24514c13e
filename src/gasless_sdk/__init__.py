"""
Gasless SDK - sponsored Safe smart-account operations.

Builds contract calls locally (ABI encoding, random token ids, fixed-point
amount scaling) and sequences them through an external account-abstraction
client: init, build, sign, execute.

Quick Start:
    >>> from gasless_sdk import GaslessWorkflow, load_config_from_env
    >>> import asyncio
    >>>
    >>> async def main():
    ...     workflow = GaslessWorkflow(load_config_from_env(), client=safe_client)
    ...     result = await workflow.send(signer, safe_address, to="0x...", amount=10.5)
    ...     print(f"User operation: {result.user_operation_hash}")
    ...
    >>> asyncio.run(main())

Modules:
- `abi`: Function signatures, calldata encoding and decoding
- `random_id`: Secure random uint256 token ids
- `builder`: ContractCall construction, transfer and mint builders
- `workflow`: GaslessWorkflow orchestrator and account client protocols
- `config`: NetworkConfig and environment loading
- `errors`: Exception hierarchy
"""

from gasless_sdk.version import __version__, __version_info__

from gasless_sdk.errors import (
    ConfigurationError,
    EncodingError,
    GaslessError,
    InvalidAddressError,
    InvalidAmountError,
    InvalidStateTransitionError,
    OperationError,
    RandomnessUnavailableError,
    ValidationError,
)
from gasless_sdk.states import OperationState, Stage
from gasless_sdk.abi import (
    AbiParameter,
    FunctionSignature,
    decode_call,
    encode_call,
    encode_call_hex,
    find_function,
)
from gasless_sdk.random_id import generate_random_uint256, system_random_source
from gasless_sdk.models import (
    ContractCall,
    InitOptions,
    OperationResult,
    PaymasterOptions,
    TransferRequest,
)
from gasless_sdk.builder import (
    SAFE_MINT_FUNCTION,
    TRANSFER_FUNCTION,
    build_mint_operation,
    build_operation,
    build_transfer_operation,
    build_transfer_request,
    encode_safe_mint_data,
    to_smallest_unit,
)
from gasless_sdk.config import (
    NETWORKS,
    Network,
    NetworkConfig,
    get_network_config,
    load_config_from_env,
)
from gasless_sdk.workflow import AccountClient, AccountSession, GaslessWorkflow

__all__ = [
    # Version
    "__version__",
    "__version_info__",
    # Errors
    "GaslessError",
    "ConfigurationError",
    "ValidationError",
    "InvalidAddressError",
    "InvalidAmountError",
    "EncodingError",
    "RandomnessUnavailableError",
    "OperationError",
    "InvalidStateTransitionError",
    # States
    "OperationState",
    "Stage",
    # Call Encoder
    "AbiParameter",
    "FunctionSignature",
    "encode_call",
    "encode_call_hex",
    "decode_call",
    "find_function",
    # Random ids
    "generate_random_uint256",
    "system_random_source",
    # Models
    "ContractCall",
    "TransferRequest",
    "PaymasterOptions",
    "InitOptions",
    "OperationResult",
    # Builder
    "TRANSFER_FUNCTION",
    "SAFE_MINT_FUNCTION",
    "to_smallest_unit",
    "build_operation",
    "build_transfer_request",
    "build_transfer_operation",
    "encode_safe_mint_data",
    "build_mint_operation",
    # Config
    "Network",
    "NetworkConfig",
    "NETWORKS",
    "get_network_config",
    "load_config_from_env",
    # Workflow
    "AccountClient",
    "AccountSession",
    "GaslessWorkflow",
]
