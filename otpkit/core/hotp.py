"""
HOTP (HMAC-based One-Time Password) implementation following RFC 4226.
"""

import struct
from enum import Enum

from otpkit.core import base32
from otpkit.core.crypto import hmac_digest
from otpkit.core.utils import validate_digits
from otpkit.exceptions import InvalidSecretError

MAX_COUNTER = 2**64 - 1


class Algorithm(str, Enum):
    """Supported HMAC algorithms."""

    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"


_ALG_MAP: dict[str, str] = {
    Algorithm.SHA1: "sha1",
    Algorithm.SHA256: "sha256",
    Algorithm.SHA512: "sha512",
}


def oath_truncate(digest: bytes, digits: int = 6) -> str:
    """
    Dynamic truncation (RFC 4226 §5.3).

    Args:
        digest: HMAC digest, at least 20 bytes.
        digits: Number of OTP digits.

    Returns:
        Zero-padded OTP string.

    Raises:
        InvalidConfigurationError: If ``digits`` is out of range.
    """
    validate_digits(digits)
    offset = digest[-1] & 0x0F
    code = struct.unpack(">I", digest[offset : offset + 4])[0] & 0x7FFFFFFF
    otp = code % (10**digits)
    return str(otp).zfill(digits)


def generate_hotp(
    secret_bytes: bytes,
    counter: int,
    digits: int = 6,
    algorithm: Algorithm = Algorithm.SHA1,
) -> str:
    """
    Generate an HOTP code.

    Args:
        secret_bytes: Raw decoded secret bytes.
        counter:      Synchronisation counter value (unsigned 64-bit).
        digits:       Number of OTP digits.
        algorithm:    HMAC algorithm.

    Returns:
        Zero-padded OTP string.

    Raises:
        InvalidSecretError: If ``secret_bytes`` is empty.
        ValueError: If ``counter`` does not fit in an unsigned 64-bit integer.
        InvalidConfigurationError: If ``digits`` is out of range.
    """
    validate_digits(digits)
    if not secret_bytes:
        raise InvalidSecretError("Secret decodes to an empty key.")
    if not 0 <= counter <= MAX_COUNTER:
        raise ValueError(f"Counter must be between 0 and {MAX_COUNTER}, got {counter}.")
    msg = struct.pack(">Q", counter)
    digest = hmac_digest(secret_bytes, msg, _ALG_MAP[algorithm])
    return oath_truncate(digest, digits)


def decode_secret(secret: str) -> bytes:
    """
    Decode a base32 secret into HMAC key bytes.

    Raises:
        InvalidSecretError: If the secret is not base32 or decodes to nothing.
    """
    try:
        key = base32.b32decode(secret)
    except ValueError as exc:
        raise InvalidSecretError(f"Invalid base32 secret: {exc}") from exc
    if not key:
        raise InvalidSecretError("Secret decodes to an empty key.")
    return key


def oath_hotp(
    secret: str,
    counter: int,
    digits: int = 6,
    algorithm: Algorithm = Algorithm.SHA1,
) -> str:
    """HOTP for a base32 ``secret``; see :func:`generate_hotp`."""
    return generate_hotp(decode_secret(secret), counter, digits, algorithm)
