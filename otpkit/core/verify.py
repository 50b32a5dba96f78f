"""
Window-tolerant TOTP verification.

Candidates are scanned oldest-first over ``counter - window .. counter + window``.
Counters below zero or above the 64-bit range are skipped, never wrapped.
Malformed submissions never raise; they simply do not match.
"""

import logging
from typing import Optional

from otpkit.core.crypto import constant_time_compare
from otpkit.core.hotp import MAX_COUNTER, Algorithm, decode_secret, generate_hotp
from otpkit.core.totp import DEFAULT_DIGITS, DEFAULT_PERIOD, now, timestamp_to_counter
from otpkit.core.utils import (
    clean_code,
    is_well_formed_code,
    validate_digits,
    validate_period,
    validate_window,
)

logger = logging.getLogger(__name__)

DEFAULT_WINDOW = 4


def _window_counters(base: int, window: int, minimum: int = 0) -> range:
    first = max(base - window, minimum, 0)
    last = min(base + window, MAX_COUNTER)
    return range(first, last + 1)


def _find_counter(
    secret: str,
    code: object,
    window: int,
    timestamp: Optional[float],
    period: int,
    digits: int,
    algorithm: Algorithm,
    minimum: int = 0,
) -> Optional[int]:
    validate_window(window)
    validate_digits(digits)
    validate_period(period)
    key = decode_secret(secret)
    token = clean_code(code)
    if not is_well_formed_code(token, digits):
        return None

    t = timestamp if timestamp is not None else now()
    base = timestamp_to_counter(t, period)
    for counter in _window_counters(base, window, minimum):
        if constant_time_compare(token, generate_hotp(key, counter, digits, algorithm)):
            logger.debug("Code matched at counter %d (offset %+d)", counter, counter - base)
            return counter
    return None


def verify_key(
    secret: str,
    code: object,
    window: int = DEFAULT_WINDOW,
    timestamp: Optional[float] = None,
    period: int = DEFAULT_PERIOD,
    digits: int = DEFAULT_DIGITS,
    algorithm: Algorithm = Algorithm.SHA1,
) -> bool:
    """
    Validate a TOTP code within ±``window`` time steps.

    Args:
        secret:    Base32 secret.
        code:      Code submitted by the user.
        window:    Allowed skew in steps; 0 checks only the current step.
        timestamp: Override Unix timestamp.
        period:    Time step in seconds.
        digits:    Expected number of digits.
        algorithm: HMAC algorithm.

    Returns:
        True if the code matches any counter in the window.

    Raises:
        InvalidSecretError: If the secret cannot be decoded.
        InvalidConfigurationError: If window, period or digits are out of range.
    """
    return _find_counter(secret, code, window, timestamp, period, digits, algorithm) is not None


def verify_key_newer(
    secret: str,
    code: object,
    minimum_counter: int,
    window: int = DEFAULT_WINDOW,
    timestamp: Optional[float] = None,
    period: int = DEFAULT_PERIOD,
    digits: int = DEFAULT_DIGITS,
    algorithm: Algorithm = Algorithm.SHA1,
) -> Optional[int]:
    """
    Like :func:`verify_key`, but only accept counters from ``minimum_counter`` on.

    ``minimum_counter`` itself is still accepted; only older counters are
    rejected.  To refuse a code that was already used, pass the last accepted
    counter plus one.

    Returns:
        The smallest matching counter not below ``minimum_counter``, or None
        if there is no such match.
    """
    return _find_counter(
        secret, code, window, timestamp, period, digits, algorithm, minimum=minimum_counter
    )
