"""Operation Builder - lowering business requests into contract calls.

This module provides:
- Generic ContractCall construction with address/value/payload checks
- Fixed-point scaling of human amounts into token smallest units
- ERC-20 transfer and ERC-721 safeMint call builders

Amounts are scaled from their decimal digits and truncated toward zero,
never with float multiplication: ``10.5`` USDC is exactly
``10500000`` and a fractional remainder below one smallest unit is
dropped rather than rounded up.
"""

from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from .abi import FunctionSignature, encode_call
from .constants import (
    ABI_SELECTOR_LENGTH,
    ERC20_TRANSFER_SIGNATURE,
    MAX_TOKEN_DECIMALS,
    MAX_UINT256,
    SAFE_MINT_ABI,
    USDC_DECIMALS,
)
from .errors import EncodingError, InvalidAmountError, ValidationError
from .models import ContractCall, TransferRequest
from .random_id import RandomSource, generate_random_uint256
from .utils.validation import hex_to_bytes, validate_address

TRANSFER_FUNCTION = FunctionSignature.parse(ERC20_TRANSFER_SIGNATURE)
SAFE_MINT_FUNCTION = FunctionSignature.from_abi(SAFE_MINT_ABI)

Amount = Union[int, float, str, Decimal]


def _validate_value(value: int, field: str = "value") -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidAmountError(repr(value), field=field, reason="must be an int")
    if value < 0:
        raise InvalidAmountError(str(value), field=field, reason="cannot be negative")
    if value > MAX_UINT256:
        raise InvalidAmountError(str(value), field=field, reason="exceeds uint256")
    return value


def to_smallest_unit(amount: Amount, decimals: int = USDC_DECIMALS) -> int:
    """Scale a human amount to the token's integer smallest unit.

    Args:
        amount: Amount in whole tokens (int, float, Decimal or numeric str)
        decimals: Token decimals (USDC: 6)

    Returns:
        ``trunc(amount * 10**decimals)``

    Raises:
        InvalidAmountError: If amount is not numeric, not finite, negative,
            or does not fit in uint256
        ValidationError: If decimals is outside 0..77

    Example:
        >>> to_smallest_unit(10.5, 6)
        10500000
        >>> to_smallest_unit("0.0000019", 6)
        1
    """
    if isinstance(decimals, bool) or not isinstance(decimals, int) \
            or not 0 <= decimals <= MAX_TOKEN_DECIMALS:
        raise ValidationError(
            f"decimals must be an int in [0, {MAX_TOKEN_DECIMALS}]",
            details={"field": "decimals", "value": repr(decimals)},
        )

    if isinstance(amount, bool) or not isinstance(amount, (int, float, str, Decimal)):
        raise InvalidAmountError(repr(amount), reason="must be a number")

    try:
        # str() round-trips floats to their shortest repr, so 10.5 stays 10.5
        value = Decimal(str(amount).strip()) if not isinstance(amount, Decimal) else amount
    except InvalidOperation:
        raise InvalidAmountError(repr(amount), reason="must be a number")

    if not value.is_finite():
        raise InvalidAmountError(str(amount), reason="must be finite")
    if value < 0:
        raise InvalidAmountError(str(amount), reason="cannot be negative")

    if value == 0:
        return 0
    # 10**78 > 2**256; rejects huge exponents before building the integer
    if value.adjusted() + decimals >= 78:
        raise InvalidAmountError(str(amount), reason="exceeds uint256 after scaling")

    # Exact integer arithmetic on the decimal digits; Decimal contexts round at 28 digits.
    _, digits, exponent = value.as_tuple()
    coefficient = int("".join(map(str, digits)))
    shift = exponent + decimals
    scaled = coefficient * 10**shift if shift >= 0 else coefficient // 10**-shift
    if scaled > MAX_UINT256:
        raise InvalidAmountError(str(amount), reason="exceeds uint256 after scaling")
    return scaled


def build_operation(target: str, payload: Union[bytes, str], value: int = 0) -> ContractCall:
    """Build a ContractCall.

    Args:
        target: Contract address
        payload: Calldata (bytes or 0x hex), at least a 4-byte selector
        value: Native currency to attach, in wei

    Raises:
        InvalidAddressError: If target is not a well-formed address
        InvalidAmountError: If value is negative or exceeds uint256
        EncodingError: If payload is not bytes/hex or shorter than a selector
    """
    to = validate_address(target, "target")
    value = _validate_value(value)

    try:
        data = hex_to_bytes(payload)
    except ValueError as exc:
        raise EncodingError(f"Invalid payload: {exc}") from exc
    if len(data) < ABI_SELECTOR_LENGTH:
        raise EncodingError(
            f"Payload must contain at least a {ABI_SELECTOR_LENGTH}-byte selector",
            details={"length": len(data)},
        )

    return ContractCall(to=to, value=value, data=data)


def build_transfer_request(
    sender: str,
    recipient: str,
    amount: Amount,
    token_address: str,
    decimals: int = USDC_DECIMALS,
) -> TransferRequest:
    return TransferRequest(
        sender=validate_address(sender, "sender"),
        recipient=validate_address(recipient, "recipient"),
        amount=to_smallest_unit(amount, decimals),
        token_address=validate_address(token_address, "token_address"),
    )


def build_transfer_operation(
    sender: str,
    recipient: str,
    amount: Amount,
    token_address: str,
    decimals: int = USDC_DECIMALS,
) -> ContractCall:
    """Build an ERC-20 ``transfer(recipient, amount)`` call.

    Zero amounts are legal. The call carries no native value; tokens move
    through the token contract.

    Raises:
        InvalidAmountError: If amount is negative or not finite
        InvalidAddressError: If any address is malformed
    """
    return build_transfer_request(sender, recipient, amount, token_address, decimals).to_call()


def encode_safe_mint_data(
    to: str,
    token_id: Optional[int] = None,
    random_source: Optional[RandomSource] = None,
) -> str:
    """Encode ``safeMint(to, tokenId)`` calldata as 0x hex.

    A fresh random 256-bit token id is drawn when ``token_id`` is None.
    """
    if token_id is None:
        token_id = generate_random_uint256(random_source)
    return "0x" + encode_call(SAFE_MINT_FUNCTION, [validate_address(to, "to"), token_id]).hex()


def build_mint_operation(
    nft_address: str,
    to: str,
    token_id: Optional[int] = None,
    random_source: Optional[RandomSource] = None,
) -> ContractCall:
    return build_operation(nft_address, encode_safe_mint_data(to, token_id, random_source))


__all__ = [
    "TRANSFER_FUNCTION",
    "SAFE_MINT_FUNCTION",
    "to_smallest_unit",
    "build_operation",
    "build_transfer_request",
    "build_transfer_operation",
    "encode_safe_mint_data",
    "build_mint_operation",
]
