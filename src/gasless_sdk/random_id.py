"""Random 256-bit identifiers.

Token ids for ``safeMint`` are drawn from the operating system's CSPRNG.
The byte source is injectable so tests can pin the output; production
code never falls back to a weaker generator.
"""

import secrets
from typing import Callable, Optional

from .constants import UINT256_BYTES
from .errors import RandomnessUnavailableError

RandomSource = Callable[[int], bytes]


def system_random_source(n: int) -> bytes:
    """Return ``n`` bytes from the OS CSPRNG."""
    return secrets.token_bytes(n)


def generate_random_uint256(source: Optional[RandomSource] = None) -> int:
    """Generate a uniformly distributed integer in [0, 2**256 - 1].

    Exactly 32 bytes are drawn and composed little-endian: byte ``i``
    contributes ``byte[i] * 256**i``.

    Args:
        source: Callable returning ``n`` random bytes. Defaults to
            :func:`system_random_source`.

    Returns:
        Random unsigned 256-bit integer

    Raises:
        RandomnessUnavailableError: If the source fails or returns
            anything other than 32 bytes
    """
    source = source or system_random_source

    try:
        raw = source(UINT256_BYTES)
    except (NotImplementedError, OSError) as exc:
        raise RandomnessUnavailableError(
            f"Secure random source failed: {exc}",
            details={"source": getattr(source, "__name__", repr(source))},
        ) from exc

    if not isinstance(raw, (bytes, bytearray)) or len(raw) != UINT256_BYTES:
        got = len(raw) if isinstance(raw, (bytes, bytearray)) else type(raw).__name__
        raise RandomnessUnavailableError(
            f"Random source returned {got}, expected {UINT256_BYTES} bytes",
            details={"expected": UINT256_BYTES, "got": str(got)},
        )

    return int.from_bytes(raw, "little")


__all__ = ["RandomSource", "system_random_source", "generate_random_uint256"]
