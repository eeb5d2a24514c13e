from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .errors import InvalidStateTransitionError
from .states import OperationState, is_valid_transition

__all__ = [
    "ContractCall",
    "TransferRequest",
    "PaymasterOptions",
    "InitOptions",
    "OperationTracker",
    "OperationResult",
]


@dataclass(frozen=True)
class ContractCall:
    """A single call the Safe account executes.

    Attributes:
        to: Checksummed target contract address
        value: Native currency attached to the call (wei)
        data: Calldata (selector + ABI-encoded arguments)
    """
    to: str
    value: int
    data: bytes

    @property
    def data_hex(self) -> str:
        return "0x" + self.data.hex()

    def to_dict(self) -> Dict[str, str]:
        """Render as the meta-transaction dict the account client consumes."""
        return {"to": self.to, "value": str(self.value), "data": self.data_hex}


@dataclass(frozen=True)
class TransferRequest:
    """ERC-20 transfer from a Safe account.

    Attributes:
        sender: Safe account the tokens leave from
        recipient: Address receiving the tokens
        amount: Amount in the token's smallest unit (USDC: 6 decimals)
        token_address: ERC-20 contract address
    """
    sender: str
    recipient: str
    amount: int
    token_address: str

    def to_call(self) -> ContractCall:
        from .builder import TRANSFER_FUNCTION, build_operation
        from .abi import encode_call

        payload = encode_call(TRANSFER_FUNCTION, [self.recipient, self.amount])
        return build_operation(self.token_address, payload, value=0)


@dataclass(frozen=True)
class PaymasterOptions:
    paymaster_url: str
    paymaster_address: str
    is_sponsored: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isSponsored": self.is_sponsored,
            "paymasterAddress": self.paymaster_address,
            "paymasterUrl": self.paymaster_url,
        }


@dataclass(frozen=True)
class InitOptions:
    """Options handed to ``AccountClient.init``.

    Endpoints and the signer are passed through exactly as configured.
    """
    provider: str
    signer: Any
    bundler_url: str
    paymaster_options: PaymasterOptions
    owners: Tuple[str, ...] = ()
    threshold: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "provider": self.provider,
            "signer": self.signer,
            "bundlerUrl": self.bundler_url,
            "paymasterOptions": self.paymaster_options.to_dict(),
            "options": {
                "owners": list(self.owners),
                "threshold": self.threshold,
            },
        }


@dataclass
class OperationTracker:
    """Mutable state holder for one workflow invocation."""
    state: OperationState = OperationState.INIT
    history: List[OperationState] = field(default_factory=lambda: [OperationState.INIT])

    def advance(self, new_state: OperationState) -> None:
        if not is_valid_transition(self.state, new_state):
            raise InvalidStateTransitionError(self.state, new_state)
        self.state = new_state
        self.history.append(new_state)


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a submitted operation.

    Attributes:
        user_operation_hash: Handle returned by the bundler
        state: SUBMITTED, or CONFIRMED when the receipt was awaited
        calls: Calls packed into the operation
        history: States the operation went through
        receipt: Receipt returned by the account client, if awaited
    """
    user_operation_hash: str
    state: OperationState
    calls: Tuple[ContractCall, ...]
    history: Tuple[OperationState, ...]
    receipt: Optional[Dict[str, Any]] = None
