"""
Base exception class for the gasless SDK.

Subclasses declare their machine-readable ``code`` as a class attribute;
the related user operation hash (once the bundler returned one) and a
details dictionary travel with every instance for structured logging.
"""

from __future__ import annotations

from typing import Any, ClassVar, Dict, Optional


def _short_hash(value: str) -> str:
    if len(value) <= 14:
        return value
    return f"{value[:10]}...{value[-4:]}"


class GaslessError(Exception):
    """
    Base exception for all gasless SDK errors.

    Attributes:
        message: Human-readable error description.
        code: Machine-readable error code, fixed per subclass.
        user_operation_hash: Hash returned by the bundler, if any.
        details: Extra context, safe to log.

    Example:
        >>> try:
        ...     await workflow.send(signer, safe, to, 10)
        ... except GaslessError as exc:
        ...     _logger.error(exc.message, extra={"error": exc.to_dict()})
    """

    code: ClassVar[str] = "GASLESS_ERROR"

    def __init__(
        self,
        message: str,
        *,
        user_operation_hash: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.user_operation_hash = user_operation_hash
        self.details = dict(details or {})

    def __str__(self) -> str:
        text = f"[{self.code}] {self.message}"
        if self.user_operation_hash:
            text += f" (userOp {_short_hash(self.user_operation_hash)})"
        return text

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, code={self.code!r})"

    def to_dict(self) -> Dict[str, Any]:
        """Serializable view; ``user_operation_hash`` only appears once known."""
        data: Dict[str, Any] = {
            "error": type(self).__name__,
            "code": self.code,
            "message": self.message,
            "details": dict(self.details),
        }
        if self.user_operation_hash is not None:
            data["user_operation_hash"] = self.user_operation_hash
        return data
