"""
Shared fixtures for gasless SDK tests.
"""

from typing import Any, Dict, List, Optional, Tuple

import pytest

from gasless_sdk import NetworkConfig


# =============================================================================
# Test Constants
# =============================================================================

SAFE_ADDRESS = "0x" + "5a" * 20
RECIPIENT = "0x" + "b0" * 20
USDC_ADDRESS = "0x" + "0c" * 20
NFT_ADDRESS = "0x" + "af" * 20
PAYMASTER_ADDRESS = "0x" + "9a" * 20
USER_OPERATION_HASH = "0x" + "ee" * 32


# =============================================================================
# Account client test double
# =============================================================================


class StageFailure(Exception):
    """Raised by the stub client at the configured stage."""


class RecordingSession:
    """Session double that records every call in order."""

    def __init__(self, client: "RecordingClient") -> None:
        self._client = client

    async def create_transaction(self, transactions: List[Dict[str, str]]) -> Any:
        self._client.record("create_transaction", transactions)
        return {"unsigned": transactions}

    async def sign_safe_operation(self, safe_operation: Any) -> Any:
        self._client.record("sign_safe_operation", safe_operation)
        return {"signed": safe_operation}

    async def execute_transaction(self, executable: Any) -> str:
        self._client.record("execute_transaction", executable)
        return self._client.user_operation_hash

    async def wait_for_receipt(self, user_operation_hash: str) -> Dict[str, Any]:
        self._client.record("wait_for_receipt", user_operation_hash)
        return self._client.receipt


class RecordingClient:
    """Account client double.

    Args:
        fail_at: Method name that raises StageFailure instead of returning
        receipt: Receipt returned from wait_for_receipt
    """

    def __init__(
        self,
        fail_at: Optional[str] = None,
        receipt: Optional[Dict[str, Any]] = None,
        user_operation_hash: str = USER_OPERATION_HASH,
    ) -> None:
        self.fail_at = fail_at
        self.receipt = receipt if receipt is not None else {"success": True}
        self.user_operation_hash = user_operation_hash
        self.calls: List[Tuple[str, Any]] = []

    def record(self, method: str, argument: Any) -> None:
        self.calls.append((method, argument))
        if method == self.fail_at:
            raise StageFailure(f"{method} failed")

    @property
    def methods(self) -> List[str]:
        return [name for name, _ in self.calls]

    def argument(self, method: str) -> Any:
        return next(arg for name, arg in self.calls if name == method)

    async def init(self, options: Dict[str, Any]) -> RecordingSession:
        self.record("init", options)
        return RecordingSession(self)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def config() -> NetworkConfig:
    return NetworkConfig(
        rpc_url="https://rpc.sepolia.example/v2/key",
        bundler_url="https://bundler.example/rpc?apikey=abc",
        paymaster_url="https://paymaster.example/rpc?apikey=abc",
        paymaster_address=PAYMASTER_ADDRESS,
        usdc_address=USDC_ADDRESS,
        nft_address=NFT_ADDRESS,
        usdc_decimals=6,
        chain_id=11155111,
    )


@pytest.fixture
def client() -> RecordingClient:
    return RecordingClient()


@pytest.fixture
def signer() -> Dict[str, Any]:
    """Opaque passkey-style signer descriptor."""
    return {"rawId": "passkey-1", "coordinates": {"x": "0x01", "y": "0x02"}}


@pytest.fixture
def fixed_random_source():
    """Random source returning bytes 0..31, so the uint256 is deterministic."""
    requests: List[int] = []

    def source(n: int) -> bytes:
        requests.append(n)
        return bytes(range(n))

    source.requests = requests
    return source


@pytest.fixture
def make_client():
    """Factory for clients that fail at a given method."""
    return RecordingClient
