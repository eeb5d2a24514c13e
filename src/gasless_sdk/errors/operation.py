"""
Exceptions raised while driving the account client.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from gasless_sdk.errors.base import GaslessError
from gasless_sdk.states import SUBMISSION_STAGES, OperationState, Stage


class OperationError(GaslessError):
    """
    Raised when the account client fails at one workflow stage.

    The original exception is chained as ``__cause__`` and also kept on
    ``cause``. ``state`` is the last state the operation reached before
    the failure, so a caller can tell a signed-but-unsent operation from
    one that was never built.

    Example:
        >>> try:
        ...     await workflow.send(signer, safe, to, 10)
        ... except OperationError as exc:
        ...     if not exc.submission_attempted:
        ...         ...  # safe to resubmit
    """

    code = "OPERATION_ERROR"

    def __init__(
        self,
        stage: Stage,
        cause: BaseException,
        *,
        state: OperationState,
        user_operation_hash: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        details["stage"] = stage.value
        details["state"] = state.value
        details["cause"] = f"{type(cause).__name__}: {cause}"

        super().__init__(
            f"Operation failed at {stage.value} stage: {cause}",
            user_operation_hash=user_operation_hash,
            details=details,
        )
        self.stage = stage
        self.cause = cause
        self.state = state

    @property
    def submission_attempted(self) -> bool:
        """True when the operation may have reached the bundler."""
        return self.stage in SUBMISSION_STAGES

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["stage"] = self.stage.value
        data["state"] = self.state.value
        data["submission_attempted"] = self.submission_attempted
        return data


class InvalidStateTransitionError(GaslessError):
    """Raised when an operation is moved to a state it cannot reach."""

    code = "INVALID_STATE_TRANSITION"

    def __init__(self, current: OperationState, requested: OperationState) -> None:
        super().__init__(
            f"Cannot transition from {current.value} to {requested.value}",
            details={"current": current.value, "requested": requested.value},
        )
        self.current = current
        self.requested = requested
