"""
Tests for the operation builder.

Tests cover:
- Fixed-point amount scaling and truncation
- ContractCall construction and validation
- ERC-20 transfer and safeMint builders
"""

from decimal import Decimal

import pytest
from web3 import Web3

from gasless_sdk import (
    SAFE_MINT_FUNCTION,
    TRANSFER_FUNCTION,
    ContractCall,
    EncodingError,
    InvalidAddressError,
    InvalidAmountError,
    ValidationError,
    build_mint_operation,
    build_operation,
    build_transfer_operation,
    build_transfer_request,
    decode_call,
    encode_safe_mint_data,
    to_smallest_unit,
)
from tests.conftest import NFT_ADDRESS, RECIPIENT, SAFE_ADDRESS, USDC_ADDRESS


class TestToSmallestUnit:
    """Tests for to_smallest_unit."""

    @pytest.mark.parametrize(
        "amount,expected",
        [
            (10.5, 10_500_000),
            ("10.5", 10_500_000),
            (Decimal("10.5"), 10_500_000),
            (10, 10_000_000),
            (0.1, 100_000),
            (0.29, 290_000),
            ("1234567890123456789012345.123456", 1234567890123456789012345123456),
            (0, 0),
            (0.0, 0),
            ("0", 0),
        ],
    )
    def test_exact_scaling(self, amount, expected) -> None:
        assert to_smallest_unit(amount, 6) == expected

    def test_truncates_toward_zero(self) -> None:
        assert to_smallest_unit("0.0000019", 6) == 1
        assert to_smallest_unit("1.9999999", 6) == 1_999_999
        assert to_smallest_unit("0.0000001", 6) == 0

    def test_other_decimals(self) -> None:
        assert to_smallest_unit("1.5", 18) == 1_500_000_000_000_000_000
        assert to_smallest_unit("7.9", 0) == 7

    @pytest.mark.parametrize("amount", [-1, -0.000001, "-5", Decimal("-1")])
    def test_negative_rejected(self, amount) -> None:
        with pytest.raises(InvalidAmountError, match="cannot be negative"):
            to_smallest_unit(amount, 6)

    @pytest.mark.parametrize("amount", [float("nan"), float("inf"), "Infinity", Decimal("NaN")])
    def test_non_finite_rejected(self, amount) -> None:
        with pytest.raises(InvalidAmountError, match="must be finite"):
            to_smallest_unit(amount, 6)

    @pytest.mark.parametrize("amount", ["ten", None, True, [1]])
    def test_non_numeric_rejected(self, amount) -> None:
        with pytest.raises(InvalidAmountError):
            to_smallest_unit(amount, 6)

    def test_overflow_rejected(self) -> None:
        with pytest.raises(InvalidAmountError, match="exceeds uint256"):
            to_smallest_unit(2**256, 6)
        with pytest.raises(InvalidAmountError, match="exceeds uint256"):
            to_smallest_unit("1e100", 6)

    @pytest.mark.parametrize("decimals", [-1, 78, 6.0, True])
    def test_bad_decimals(self, decimals) -> None:
        with pytest.raises(ValidationError):
            to_smallest_unit(1, decimals)

    def test_invalid_amount_is_validation_error(self) -> None:
        with pytest.raises(ValidationError):
            to_smallest_unit(-1, 6)


class TestBuildOperation:
    """Tests for build_operation."""

    def test_builds_call(self) -> None:
        call = build_operation(NFT_ADDRESS, "0xa9059cbb", value=5)
        assert call == ContractCall(
            to=Web3.to_checksum_address(NFT_ADDRESS), value=5, data=bytes.fromhex("a9059cbb")
        )

    def test_to_dict(self) -> None:
        call = build_operation(NFT_ADDRESS, b"\x01\x02\x03\x04")
        assert call.to_dict() == {
            "to": Web3.to_checksum_address(NFT_ADDRESS),
            "value": "0",
            "data": "0x01020304",
        }

    def test_immutable(self) -> None:
        call = build_operation(NFT_ADDRESS, b"\x01\x02\x03\x04")
        with pytest.raises(AttributeError):
            call.value = 1

    @pytest.mark.parametrize("target", ["", "0x1234", "not-an-address", None])
    def test_bad_target(self, target) -> None:
        with pytest.raises(InvalidAddressError):
            build_operation(target, b"\x01\x02\x03\x04")

    @pytest.mark.parametrize("value", [-1, 2**256, 1.0, True])
    def test_bad_value(self, value) -> None:
        with pytest.raises(InvalidAmountError):
            build_operation(NFT_ADDRESS, b"\x01\x02\x03\x04", value=value)

    @pytest.mark.parametrize("payload", [b"", b"\x01\x02\x03", "0x123", "a9059cbb", 1234])
    def test_bad_payload(self, payload) -> None:
        with pytest.raises(EncodingError):
            build_operation(NFT_ADDRESS, payload)


class TestBuildTransferOperation:
    """Tests for build_transfer_operation."""

    def test_transfer_call(self) -> None:
        call = build_transfer_operation(SAFE_ADDRESS, RECIPIENT, 10.5, USDC_ADDRESS)
        assert call.to == Web3.to_checksum_address(USDC_ADDRESS)
        assert call.value == 0
        assert call.data[:4] == TRANSFER_FUNCTION.selector
        assert decode_call(TRANSFER_FUNCTION, call.data) == {
            "recipient": Web3.to_checksum_address(RECIPIENT),
            "amount": 10_500_000,
        }

    def test_zero_amount_allowed(self) -> None:
        call = build_transfer_operation(SAFE_ADDRESS, RECIPIENT, 0, USDC_ADDRESS)
        assert decode_call(TRANSFER_FUNCTION, call.data)["amount"] == 0

    def test_negative_amount_rejected(self) -> None:
        with pytest.raises(ValidationError):
            build_transfer_operation(SAFE_ADDRESS, RECIPIENT, -1, USDC_ADDRESS)

    def test_custom_decimals(self) -> None:
        call = build_transfer_operation(SAFE_ADDRESS, RECIPIENT, "2", USDC_ADDRESS, decimals=18)
        assert decode_call(TRANSFER_FUNCTION, call.data)["amount"] == 2 * 10**18

    @pytest.mark.parametrize("field", ["sender", "recipient", "token_address"])
    def test_bad_addresses(self, field) -> None:
        kwargs = dict(
            sender=SAFE_ADDRESS, recipient=RECIPIENT, amount=1, token_address=USDC_ADDRESS
        )
        kwargs[field] = "0xnope"
        with pytest.raises(InvalidAddressError) as exc_info:
            build_transfer_operation(**kwargs)
        assert exc_info.value.field == field

    def test_transfer_request(self) -> None:
        request = build_transfer_request(SAFE_ADDRESS, RECIPIENT, "1.25", USDC_ADDRESS)
        assert request.sender == Web3.to_checksum_address(SAFE_ADDRESS)
        assert request.amount == 1_250_000
        assert request.to_call() == build_transfer_operation(
            SAFE_ADDRESS, RECIPIENT, "1.25", USDC_ADDRESS
        )


class TestMint:
    """Tests for safeMint builders."""

    def test_fixed_token_id(self) -> None:
        data = encode_safe_mint_data(SAFE_ADDRESS, 42)
        assert data.startswith(SAFE_MINT_FUNCTION.selector_hex)
        assert decode_call(SAFE_MINT_FUNCTION, data) == {
            "to": Web3.to_checksum_address(SAFE_ADDRESS),
            "tokenId": 42,
        }

    def test_random_token_id(self, fixed_random_source) -> None:
        call = build_mint_operation(NFT_ADDRESS, SAFE_ADDRESS, random_source=fixed_random_source)
        decoded = decode_call(SAFE_MINT_FUNCTION, call.data)
        assert decoded["tokenId"] == int.from_bytes(bytes(range(32)), "little")
        assert call.to == Web3.to_checksum_address(NFT_ADDRESS)
        assert call.value == 0

    def test_fresh_id_per_call(self) -> None:
        first = encode_safe_mint_data(SAFE_ADDRESS)
        second = encode_safe_mint_data(SAFE_ADDRESS)
        assert first != second

    def test_bad_recipient(self) -> None:
        with pytest.raises(InvalidAddressError):
            encode_safe_mint_data("0x12", 1)
