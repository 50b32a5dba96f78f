"""
Utility helpers for otpkit.
"""

from otpkit.core import base32
from otpkit.exceptions import InvalidConfigurationError, InvalidSecretError

MIN_DIGITS = 6
MAX_DIGITS = 8
MIN_PERIOD = 1
MAX_PERIOD = 300


# ── Secrets ───────────────────────────────────────────────────────────────────

def normalize_secret(secret: str) -> str:
    """
    Normalise a user-supplied base32 secret: strip spaces and dashes,
    uppercase, drop ``=`` padding.

    Args:
        secret: Raw secret string, e.g. ``"jbsw y3dp-ehpk 3pxp"``.

    Returns:
        Canonical base32 secret.

    Raises:
        InvalidBase32CharacterError: If the string contains invalid characters.
        InvalidSecretError: If nothing remains after normalisation.
    """
    secret = secret.strip().upper().replace(" ", "").replace("-", "")
    secret = secret.rstrip(base32.PAD_CHAR)
    if not secret:
        raise InvalidSecretError("Secret is empty.")
    # Decoding validates the alphabet.
    base32.b32decode(secret)
    return secret


# ── User input ────────────────────────────────────────────────────────────────

def clean_code(code: object) -> str:
    """
    Coerce a submitted code to a string and strip surrounding whitespace.

    Non-string input yields an empty string so it simply fails to match.
    """
    if isinstance(code, int) and not isinstance(code, bool):
        code = str(code)
    if not isinstance(code, str):
        return ""
    return code.strip()


def is_well_formed_code(code: str, digits: int) -> bool:
    """True if ``code`` is exactly ``digits`` ASCII digits."""
    return len(code) == digits and code.isascii() and code.isdigit()


# ── Display ───────────────────────────────────────────────────────────────────

def format_otp(code: str, group: int = 3) -> str:
    """
    Format an OTP code with spaces for readability.

    Example::

        >>> format_otp("123456")
        "123 456"

    Args:
        code:  Digit string.
        group: Digit grouping size.

    Returns:
        Spaced OTP string.
    """
    return " ".join(code[i : i + group] for i in range(0, len(code), group))


# ── Validation ────────────────────────────────────────────────────────────────

def validate_digits(digits: int) -> None:
    if not isinstance(digits, int) or not MIN_DIGITS <= digits <= MAX_DIGITS:
        raise InvalidConfigurationError(
            f"Digits must be between {MIN_DIGITS} and {MAX_DIGITS}.", field="digits"
        )


def validate_period(period: int) -> None:
    if not isinstance(period, int) or not MIN_PERIOD <= period <= MAX_PERIOD:
        raise InvalidConfigurationError(
            f"Period must be between {MIN_PERIOD} and {MAX_PERIOD} seconds.",
            field="period",
        )


def validate_window(window: int) -> None:
    if not isinstance(window, int) or window < 0:
        raise InvalidConfigurationError("Window must be a non-negative integer.", field="window")
