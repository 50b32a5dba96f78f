"""
TOTP (Time-based One-Time Password) implementation following RFC 6238.

Produces codes identical to Google Authenticator.
"""

import time
from typing import Optional

from otpkit.core.hotp import Algorithm, oath_hotp
from otpkit.core.utils import validate_period

DEFAULT_PERIOD = 30
DEFAULT_DIGITS = 6


def now() -> float:
    """Current Unix time in seconds."""
    return time.time()


def timestamp_to_counter(timestamp: float, period: int = DEFAULT_PERIOD) -> int:
    """
    Convert a Unix timestamp to a TOTP counter: ``floor(timestamp / period)``.

    Raises:
        InvalidConfigurationError: If ``period`` is out of range.
        ValueError: If ``timestamp`` is negative.
    """
    validate_period(period)
    if timestamp < 0:
        raise ValueError("Timestamp must not be before the Unix epoch.")
    return int(timestamp // period)


def current_code(
    secret: str,
    timestamp: Optional[float] = None,
    period: int = DEFAULT_PERIOD,
    digits: int = DEFAULT_DIGITS,
    algorithm: Algorithm = Algorithm.SHA1,
) -> str:
    """
    Current TOTP code for a base32 ``secret``.

    Args:
        secret:    Base32 secret.
        timestamp: Override Unix timestamp (uses time.time() if None).
        period:    Time step in seconds (default 30).
        digits:    Number of digits in the OTP (default 6).
        algorithm: HMAC algorithm (default SHA1 for GA compatibility).

    Returns:
        OTP string, zero-padded to ``digits`` characters.
    """
    t = timestamp if timestamp is not None else now()
    return oath_hotp(secret, timestamp_to_counter(t, period), digits, algorithm)


def remaining_seconds(period: int = DEFAULT_PERIOD, timestamp: Optional[float] = None) -> int:
    """Return seconds until the current TOTP window expires."""
    t = timestamp if timestamp is not None else now()
    return period - (int(t) % period)
