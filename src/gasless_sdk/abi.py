"""Call Encoder - ABI function signatures and calldata.

This module turns a function declaration plus ordered arguments into the
canonical calldata a contract expects:

    selector (4 bytes, keccak256 of the canonical signature) || eth_abi.encode(args)

Declarations come from human-readable ABI items or JSON ABI fragments.
Arguments are checked against the declared types before encoding, so a
mismatch is reported as EncodingError naming the offending parameter
instead of a low-level eth_abi failure.

Supported types: address, bool, string, bytes, bytes1..bytes32,
uint8..uint256, int8..int256 and arrays of those (T[], T[k]).
Tuples are not supported.

Example:
    >>> transfer = FunctionSignature.parse(
    ...     "function transfer(address recipient, uint256 amount) returns (bool)"
    ... )
    >>> transfer.selector.hex()
    'a9059cbb'
    >>> data = encode_call(transfer, ["0x" + "11" * 20, 10_500_000])
    >>> decode_call(transfer, data)["amount"]
    10500000
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from eth_abi import decode as abi_decode
from eth_abi import encode as abi_encode
from eth_abi.exceptions import DecodingError as AbiDecodingError
from eth_abi.exceptions import EncodingError as AbiEncodingError
from eth_utils import function_signature_to_4byte_selector, to_checksum_address

from .constants import ABI_SELECTOR_LENGTH
from .errors import EncodingError
from .utils.validation import hex_to_bytes, is_valid_address

_TYPE_RE = re.compile(r"^(?P<base>[a-z]+)(?P<bits>\d*)(?P<dims>(\[\d*\])*)$")
_DIM_RE = re.compile(r"\[(\d*)\]")
_FUNCTION_RE = re.compile(
    r"^\s*(?:function\s+)?(?P<name>(?!function\b)[A-Za-z_$][A-Za-z0-9_$]*)\s*"
    r"\((?P<inputs>[^()]*)\)\s*"
    r"(?P<modifiers>(?:\s*(?:external|public|view|pure|payable|nonpayable))*)\s*"
    r"(?:returns\s*\((?P<outputs>[^()]*)\))?\s*;?\s*$"
)
_DATA_LOCATIONS = frozenset({"memory", "calldata", "storage", "indexed"})
_MUTABILITIES = frozenset({"pure", "view", "nonpayable", "payable"})


def normalize_type(abi_type: str) -> str:
    """Return the canonical form of ``abi_type``.

    ``uint``/``int`` become ``uint256``/``int256``; unsupported or malformed
    types raise EncodingError.
    """
    match = _TYPE_RE.match(abi_type.strip()) if isinstance(abi_type, str) else None
    if not match:
        raise EncodingError(f"Malformed ABI type: {abi_type!r}")

    base, bits, dims = match.group("base"), match.group("bits"), match.group("dims")

    if base in ("uint", "int"):
        width = int(bits) if bits else 256
        if width % 8 or not 8 <= width <= 256:
            raise EncodingError(f"Invalid integer width in ABI type: {abi_type!r}")
        base = f"{base}{width}"
    elif base == "bytes" and bits:
        if not 1 <= int(bits) <= 32:
            raise EncodingError(f"Invalid fixed bytes width in ABI type: {abi_type!r}")
        base = f"bytes{int(bits)}"
    elif base in ("address", "bool", "string", "bytes") and not bits:
        pass
    else:
        raise EncodingError(f"Unsupported ABI type: {abi_type!r}")

    for size in _DIM_RE.findall(dims):
        if size and int(size) == 0:
            raise EncodingError(f"Fixed array size must be positive: {abi_type!r}")

    return base + dims


@dataclass(frozen=True)
class AbiParameter:
    """One named, typed function parameter."""

    type: str
    name: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", normalize_type(self.type))


ParameterLike = Union[AbiParameter, Tuple[str, str], Mapping[str, Any]]


def _to_parameter(param: ParameterLike) -> AbiParameter:
    if isinstance(param, AbiParameter):
        return param
    if isinstance(param, Mapping):
        if param.get("components") or str(param.get("type", "")).startswith("tuple"):
            raise EncodingError(f"Tuple parameters are not supported: {param!r}")
        return AbiParameter(type=param.get("type", ""), name=param.get("name") or "")
    if isinstance(param, tuple) and len(param) == 2:
        name, abi_type = param
        return AbiParameter(type=abi_type, name=name or "")
    raise EncodingError(f"Cannot interpret ABI parameter: {param!r}")


@dataclass(frozen=True)
class FunctionSignature:
    """A contract function declaration.

    Only the name and input types take part in the selector; outputs and
    state mutability are carried for completeness and ``to_abi()``.

    ``inputs``/``outputs`` accept AbiParameter objects, ``(name, type)``
    pairs or JSON ABI parameter dicts.
    """

    name: str
    inputs: Tuple[AbiParameter, ...] = ()
    outputs: Tuple[AbiParameter, ...] = ()
    state_mutability: str = "nonpayable"
    _selector: bytes = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not re.match(r"^[A-Za-z_$][A-Za-z0-9_$]*$", self.name):
            raise EncodingError(f"Invalid function name: {self.name!r}")
        if self.state_mutability not in _MUTABILITIES:
            raise EncodingError(
                f"Invalid state mutability: {self.state_mutability!r}", function=self.name
            )

        object.__setattr__(self, "inputs", tuple(_to_parameter(p) for p in self.inputs))
        object.__setattr__(self, "outputs", tuple(_to_parameter(p) for p in self.outputs))
        object.__setattr__(
            self, "_selector", function_signature_to_4byte_selector(self.canonical)
        )

    @property
    def input_types(self) -> List[str]:
        return [p.type for p in self.inputs]

    @property
    def canonical(self) -> str:
        """Canonical signature, e.g. ``transfer(address,uint256)``."""
        return f"{self.name}({','.join(self.input_types)})"

    @property
    def selector(self) -> bytes:
        return self._selector

    @property
    def selector_hex(self) -> str:
        return "0x" + self._selector.hex()

    @classmethod
    def parse(cls, text: str) -> "FunctionSignature":
        """Parse a human-readable ABI item.

        Accepts ``"function transfer(address recipient, uint256 amount)
        returns (bool)"`` as well as the bare ``"transfer(address,uint256)"``.
        """
        match = _FUNCTION_RE.match(text) if isinstance(text, str) else None
        if not match:
            raise EncodingError(f"Cannot parse function declaration: {text!r}")

        modifiers = match.group("modifiers").split()
        mutability = next((m for m in modifiers if m in _MUTABILITIES), "nonpayable")

        return cls(
            name=match.group("name"),
            inputs=tuple(_parse_parameters(match.group("inputs"), text)),
            outputs=tuple(_parse_parameters(match.group("outputs") or "", text)),
            state_mutability=mutability,
        )

    @classmethod
    def from_abi(cls, entry: Mapping[str, Any]) -> "FunctionSignature":
        """Build a signature from a JSON ABI fragment."""
        if entry.get("type", "function") != "function":
            raise EncodingError(f"ABI entry is not a function: {entry.get('type')!r}")

        mutability = entry.get("stateMutability")
        if not mutability:
            # Pre-0.4.16 fragments only carry constant/payable flags.
            if entry.get("payable"):
                mutability = "payable"
            elif entry.get("constant"):
                mutability = "view"
            else:
                mutability = "nonpayable"

        return cls(
            name=entry.get("name", ""),
            inputs=tuple(entry.get("inputs") or ()),
            outputs=tuple(entry.get("outputs") or ()),
            state_mutability=mutability,
        )

    def to_abi(self) -> Dict[str, Any]:
        return {
            "type": "function",
            "name": self.name,
            "inputs": [{"name": p.name, "type": p.type} for p in self.inputs],
            "outputs": [{"name": p.name, "type": p.type} for p in self.outputs],
            "stateMutability": self.state_mutability,
        }


def _parse_parameters(text: str, declaration: str) -> List[AbiParameter]:
    params = []
    if not text.strip():
        return params

    for part in text.split(","):
        tokens = [t for t in part.split() if t not in _DATA_LOCATIONS]
        if not tokens or len(tokens) > 2:
            raise EncodingError(f"Cannot parse parameter {part.strip()!r} in {declaration!r}")
        params.append(AbiParameter(type=tokens[0], name=tokens[1] if len(tokens) == 2 else ""))
    return params


def find_function(abi: Sequence[Mapping[str, Any]], name: str) -> FunctionSignature:
    """Pick the function called ``name`` out of a JSON ABI list."""
    matches = [e for e in abi if e.get("type", "function") == "function" and e.get("name") == name]
    if not matches:
        raise EncodingError(f"Function {name!r} not found in ABI", function=name)
    if len(matches) > 1:
        raise EncodingError(
            f"Function {name!r} is overloaded in ABI; pass a FunctionSignature instead",
            function=name,
        )
    return FunctionSignature.from_abi(matches[0])


# ------------------------------------------------------------------
# Encoding
# ------------------------------------------------------------------

def _split_array(abi_type: str) -> Tuple[str, Optional[int]]:
    """Split the outermost array dimension: ``uint8[2][]`` -> (``uint8[2]``, None)."""
    inner, _, last = abi_type[:-1].rpartition("[")
    return inner, int(last) if last else None


def _check_value(abi_type: str, value: Any, function: str, parameter: str) -> Any:
    """Validate ``value`` against ``abi_type`` and return it in eth_abi form."""

    def fail(reason: str) -> EncodingError:
        return EncodingError(
            f"{function}: argument {parameter!r} ({abi_type}) {reason}",
            function=function,
            parameter=parameter,
            details={"type": abi_type, "value": repr(value)},
        )

    if abi_type.endswith("]"):
        inner, size = _split_array(abi_type)
        if isinstance(value, (str, bytes, bytearray)) or not isinstance(value, (list, tuple)):
            raise fail("must be a list")
        if size is not None and len(value) != size:
            raise fail(f"must have exactly {size} elements, got {len(value)}")
        return [
            _check_value(inner, item, function, f"{parameter}[{i}]")
            for i, item in enumerate(value)
        ]

    if abi_type == "address":
        if not is_valid_address(value):
            raise fail("must be a 0x-prefixed 20-byte address with a valid checksum")
        return to_checksum_address(value)

    if abi_type == "bool":
        if not isinstance(value, bool):
            raise fail("must be a bool")
        return value

    if abi_type == "string":
        if not isinstance(value, str):
            raise fail("must be a str")
        try:
            value.encode("utf-8")
        except UnicodeEncodeError:
            raise fail("must be valid UTF-8")
        return value

    if abi_type.startswith("bytes"):
        try:
            data = hex_to_bytes(value)
        except ValueError:
            raise fail("must be bytes or 0x-prefixed hex")
        width = abi_type[len("bytes"):]
        if width and len(data) != int(width):
            raise fail(f"must be exactly {width} bytes, got {len(data)}")
        return data

    # uintN / intN
    if isinstance(value, bool) or not isinstance(value, int):
        raise fail("must be an int")
    signed = abi_type.startswith("int")
    bits = int(abi_type[3 if signed else 4:])
    low, high = (-(2 ** (bits - 1)), 2 ** (bits - 1) - 1) if signed else (0, 2**bits - 1)
    if not low <= value <= high:
        raise fail(f"is out of range [{low}, {high}]")
    return value


def _coerce_signature(signature: Union[FunctionSignature, str]) -> FunctionSignature:
    if isinstance(signature, FunctionSignature):
        return signature
    if isinstance(signature, str):
        return FunctionSignature.parse(signature)
    raise EncodingError(f"Expected a FunctionSignature, got {type(signature).__name__}")


def encode_call(signature: Union[FunctionSignature, str], args: Sequence[Any]) -> bytes:
    """Encode a contract call.

    Pure and deterministic: identical inputs always produce identical bytes.

    Args:
        signature: FunctionSignature, or a human-readable declaration
        args: Argument values in declaration order

    Returns:
        ``selector || abi-encoded arguments``

    Raises:
        EncodingError: On wrong arity, wrong type or out-of-range value
    """
    sig = _coerce_signature(signature)

    if isinstance(args, (str, bytes, bytearray, Mapping)) or not isinstance(args, Sequence):
        raise EncodingError(
            f"{sig.name}: arguments must be an ordered sequence", function=sig.name
        )
    if len(args) != len(sig.inputs):
        raise EncodingError(
            f"{sig.name}: expected {len(sig.inputs)} arguments, got {len(args)}",
            function=sig.name,
            details={"expected": len(sig.inputs), "got": len(args)},
        )

    values = [
        _check_value(param.type, value, sig.name, param.name or f"#{index}")
        for index, (param, value) in enumerate(zip(sig.inputs, args))
    ]

    try:
        body = abi_encode(sig.input_types, values)
    except AbiEncodingError as exc:
        raise EncodingError(f"{sig.name}: {exc}", function=sig.name) from exc

    return sig.selector + body


def encode_call_hex(signature: Union[FunctionSignature, str], args: Sequence[Any]) -> str:
    return "0x" + encode_call(signature, args).hex()


def _normalize_decoded(abi_type: str, value: Any) -> Any:
    if abi_type.endswith("]"):
        inner, _ = _split_array(abi_type)
        return [_normalize_decoded(inner, item) for item in value]
    if abi_type == "address":
        return to_checksum_address(value)
    return value


def decode_call(
    signature: Union[FunctionSignature, str],
    payload: Union[bytes, str],
) -> Dict[str, Any]:
    """Decode calldata produced for ``signature``.

    Args:
        signature: Declaration the payload was encoded for
        payload: Calldata as bytes or 0x hex

    Returns:
        Mapping of parameter name (or ``#index`` for unnamed ones) to value.
        Addresses are checksummed, arrays are lists.

    Raises:
        EncodingError: If the selector does not match or the body is malformed
    """
    sig = _coerce_signature(signature)

    try:
        data = hex_to_bytes(payload)
    except ValueError as exc:
        raise EncodingError(str(exc), function=sig.name) from exc

    if data[:ABI_SELECTOR_LENGTH] != sig.selector:
        raise EncodingError(
            f"{sig.name}: selector mismatch, expected {sig.selector_hex}, "
            f"got 0x{data[:ABI_SELECTOR_LENGTH].hex()}",
            function=sig.name,
        )

    try:
        values = abi_decode(sig.input_types, data[ABI_SELECTOR_LENGTH:])
    except AbiDecodingError as exc:
        raise EncodingError(f"{sig.name}: malformed calldata: {exc}", function=sig.name) from exc

    return {
        (param.name or f"#{index}"): _normalize_decoded(param.type, value)
        for index, (param, value) in enumerate(zip(sig.inputs, values))
    }


__all__ = [
    "AbiParameter",
    "FunctionSignature",
    "normalize_type",
    "find_function",
    "encode_call",
    "encode_call_hex",
    "decode_call",
]
