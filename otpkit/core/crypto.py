"""
Cryptographic primitives for otpkit.

HMAC           : ``cryptography`` (SHA1 / SHA256 / SHA512)
Randomness     : ``secrets`` (CSPRNG)
Comparison     : ``hmac.compare_digest`` (constant time)
"""

import hmac
import secrets
from typing import Sequence

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.hmac import HMAC

# ── Constants ────────────────────────────────────────────────────────────────

_HASHES: dict[str, type[hashes.HashAlgorithm]] = {
    "sha1": hashes.SHA1,
    "sha256": hashes.SHA256,
    "sha512": hashes.SHA512,
}


# ── HMAC ──────────────────────────────────────────────────────────────────────

def hmac_digest(key: bytes, message: bytes, algorithm: str = "sha1") -> bytes:
    """
    Compute ``HMAC(key, message)`` with the named hash.

    Args:
        key:       Raw key bytes.
        message:   Message bytes (the 8-byte counter for HOTP).
        algorithm: ``sha1``, ``sha256`` or ``sha512``.

    Returns:
        The full digest (20, 32 or 64 bytes).

    Raises:
        ValueError: If the algorithm is not supported.
    """
    try:
        hash_cls = _HASHES[algorithm.lower()]
    except KeyError:
        raise ValueError(f"Unsupported HMAC algorithm '{algorithm}'.") from None
    mac = HMAC(key, hash_cls())
    mac.update(message)
    return mac.finalize()


# ── Randomness ───────────────────────────────────────────────────────────────

def random_symbols(alphabet: Sequence[str], count: int) -> str:
    """Return ``count`` symbols drawn uniformly from ``alphabet`` with a CSPRNG."""
    return "".join(secrets.choice(alphabet) for _ in range(count))


def constant_time_compare(a: str, b: str) -> bool:
    """Return True if *a* == *b* in constant time (timing-safe)."""
    return hmac.compare_digest(a.encode(), b.encode())
