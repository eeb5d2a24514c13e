"""
Workflow orchestrator for gasless Safe operations.

Sequences one account-abstraction operation against an external account
client (e.g. a Safe 4337 pack binding):

    init -> create_transaction -> sign_safe_operation -> execute_transaction
         [-> wait_for_receipt]

Every stage awaits the previous one; nothing is retried, batched or
cached, and a fresh session is initialized per invocation. A failure in
the client is re-raised as OperationError tagged with the stage, so the
caller can see whether the operation may already have reached the bundler.

Example:
    >>> workflow = GaslessWorkflow(load_config_from_env(), client=my_safe_client)
    >>> result = await workflow.send(signer, safe_address, to="0x...", amount=10.5)
    >>> print(result.user_operation_hash)
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol, Sequence, runtime_checkable

from gasless_sdk.builder import Amount, build_mint_operation, build_transfer_operation
from gasless_sdk.config import NetworkConfig
from gasless_sdk.constants import DEFAULT_THRESHOLD
from gasless_sdk.errors import OperationError, ValidationError
from gasless_sdk.models import (
    ContractCall,
    InitOptions,
    OperationResult,
    OperationTracker,
    PaymasterOptions,
)
from gasless_sdk.random_id import RandomSource
from gasless_sdk.states import OperationState, Stage
from gasless_sdk.utils.logging import get_logger
from gasless_sdk.utils.validation import validate_address

_logger = get_logger(__name__)


@runtime_checkable
class AccountSession(Protocol):
    """An initialized smart-account session."""

    async def create_transaction(self, transactions: List[Dict[str, str]]) -> Any:
        """Wrap meta-transactions into an unsigned Safe operation."""

    async def sign_safe_operation(self, safe_operation: Any) -> Any:
        """Sign the Safe operation with the session's signer."""

    async def execute_transaction(self, executable: Any) -> str:
        """Send the signed operation to the bundler; return its hash."""

    async def wait_for_receipt(self, user_operation_hash: str) -> Dict[str, Any]:
        """Wait until the bundler reports the operation as included."""


@runtime_checkable
class AccountClient(Protocol):
    """Factory for account sessions."""

    async def init(self, options: Dict[str, Any]) -> AccountSession:
        """Create a session from the options rendered by InitOptions.to_dict()."""


class GaslessWorkflow:
    """
    One-shot sequencer for sponsored Safe operations.

    Args:
        config: Endpoints and contract addresses; validated immediately
        client: Account client implementing AccountClient
        random_source: Byte source for random token ids (tests only)
        owners: Additional Safe owners passed to ``init``
        threshold: Safe signature threshold

    Raises:
        ConfigurationError: If config is incomplete or malformed
    """

    def __init__(
        self,
        config: NetworkConfig,
        client: AccountClient,
        *,
        random_source: Optional[RandomSource] = None,
        owners: Sequence[str] = (),
        threshold: int = DEFAULT_THRESHOLD,
    ) -> None:
        self._config = config.validate()
        self._client = client
        self._random_source = random_source
        self._owners = tuple(validate_address(o, "owner") for o in owners)
        if isinstance(threshold, bool) or not isinstance(threshold, int) or threshold < 1:
            raise ValidationError(
                "threshold must be a positive int",
                details={"field": "threshold", "value": repr(threshold)},
            )
        self._threshold = threshold

    @property
    def config(self) -> NetworkConfig:
        return self._config

    def init_options(self, signer: Any) -> InitOptions:
        return InitOptions(
            provider=self._config.rpc_url,
            signer=signer,
            bundler_url=self._config.bundler_url,
            paymaster_options=PaymasterOptions(
                paymaster_url=self._config.paymaster_url,
                paymaster_address=self._config.paymaster_address,
                is_sponsored=self._config.sponsored,
            ),
            owners=self._owners,
            threshold=self._threshold,
        )

    async def mint_nft(
        self,
        signer: Any,
        safe_address: str,
        token_id: Optional[int] = None,
        *,
        wait: bool = False,
    ) -> OperationResult:
        """
        Mint an NFT to the Safe itself.

        Args:
            signer: Opaque signer (e.g. passkey descriptor), passed to ``init``
            safe_address: Safe account receiving the token
            token_id: Token id; a random uint256 is drawn when None
            wait: Also wait for the receipt

        Returns:
            OperationResult with the user operation hash
        """
        call = build_mint_operation(
            self._config.require_nft_address(),
            safe_address,
            token_id,
            self._random_source,
        )
        return await self.submit(signer, [call], wait=wait)

    async def send(
        self,
        signer: Any,
        safe_address: str,
        to: str,
        amount: Amount,
        *,
        wait: bool = False,
    ) -> OperationResult:
        """
        Send USDC from the Safe.

        Args:
            signer: Opaque signer, passed to ``init``
            safe_address: Safe account sending the tokens
            to: Recipient address
            amount: Amount in whole USDC (e.g. 10.5); truncated to 6 decimals
            wait: Also wait for the receipt

        Raises:
            ValidationError: Before any network call, on bad addresses or amount
            OperationError: If the account client fails at any stage
        """
        call = build_transfer_operation(
            safe_address,
            to,
            amount,
            self._config.usdc_address,
            self._config.usdc_decimals,
        )
        return await self.submit(signer, [call], wait=wait)

    async def submit(
        self,
        signer: Any,
        calls: Sequence[ContractCall],
        *,
        wait: bool = False,
    ) -> OperationResult:
        """
        Run init, build, sign and execute for ``calls`` as one operation.

        Returns:
            OperationResult in SUBMITTED state, or CONFIRMED when ``wait``

        Raises:
            ValidationError: If calls is empty or holds non-ContractCall items
            OperationError: Tagged with the failing stage
        """
        calls = tuple(calls)
        if not calls or not all(isinstance(c, ContractCall) for c in calls):
            raise ValidationError("calls must be a non-empty sequence of ContractCall")

        tracker = OperationTracker()
        transactions = [c.to_dict() for c in calls]
        targets = [c.to for c in calls]

        session = await self._run_stage(
            tracker, Stage.INIT, self._client, "init", self.init_options(signer).to_dict()
        )

        safe_operation = await self._run_stage(
            tracker, Stage.BUILD, session, "create_transaction", transactions
        )
        tracker.advance(OperationState.BUILT)
        _logger.debug("Safe operation built", extra={"targets": targets})

        signed = await self._run_stage(
            tracker, Stage.SIGN, session, "sign_safe_operation", safe_operation
        )
        tracker.advance(OperationState.SIGNED)
        _logger.debug("Safe operation signed")

        user_operation_hash = await self._run_stage(
            tracker, Stage.EXECUTE, session, "execute_transaction", signed
        )
        tracker.advance(OperationState.SUBMITTED)
        _logger.info(
            "User operation submitted",
            extra={"user_operation_hash": user_operation_hash, "targets": targets},
        )

        receipt = None
        if wait:
            receipt = await self._run_stage(
                tracker,
                Stage.CONFIRM,
                session,
                "wait_for_receipt",
                user_operation_hash,
                user_operation_hash=user_operation_hash,
            )
            if isinstance(receipt, dict) and receipt.get("success") is False:
                tracker.advance(OperationState.FAILED)
                error = OperationError(
                    Stage.CONFIRM,
                    RuntimeError("user operation reverted on-chain"),
                    state=OperationState.SUBMITTED,
                    user_operation_hash=user_operation_hash,
                    details={"receipt": receipt},
                )
                _logger.error(
                    "User operation reverted", extra={"user_operation_hash": user_operation_hash}
                )
                raise error
            tracker.advance(OperationState.CONFIRMED)
            _logger.info(
                "User operation confirmed", extra={"user_operation_hash": user_operation_hash}
            )

        return OperationResult(
            user_operation_hash=user_operation_hash,
            state=tracker.state,
            calls=calls,
            history=tuple(tracker.history),
            receipt=receipt,
        )

    async def _run_stage(
        self,
        tracker: OperationTracker,
        stage: Stage,
        target: Any,
        method: str,
        *args: Any,
        user_operation_hash: Optional[str] = None,
    ) -> Any:
        """Await ``target.method(*args)``, wrapping any failure in OperationError.

        The method is looked up inside the guarded block, so a client that
        lacks a stage surfaces as a failure of that stage.
        """
        _logger.debug("Starting stage", extra={"stage": stage.value, "state": tracker.state.value})
        try:
            return await getattr(target, method)(*args)
        except Exception as exc:
            last_state = tracker.state
            tracker.advance(OperationState.FAILED)
            error = OperationError(
                stage,
                exc,
                state=last_state,
                user_operation_hash=user_operation_hash,
            )
            _logger.error(
                "Stage failed",
                extra={
                    "stage": stage.value,
                    "last_state": last_state.value,
                    "cause": error.details["cause"],
                },
            )
            raise error from exc


__all__ = ["AccountSession", "AccountClient", "GaslessWorkflow"]
