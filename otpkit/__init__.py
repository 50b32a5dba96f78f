"""
otpkit – HOTP/TOTP engine compatible with Google Authenticator.

RFC 4226 / RFC 6238 code generation, window-tolerant verification with
replay protection, base32 secrets and secret generation.
"""

from otpkit.config import ConfigHolder, OTPConfig
from otpkit.core.base32 import VALID_FOR_B32, b32decode, b32encode, remove_invalid_chars, to_base32
from otpkit.core.hotp import Algorithm, generate_hotp, oath_hotp, oath_truncate
from otpkit.core.secret import generate_secret_key
from otpkit.core.totp import current_code, remaining_seconds, timestamp_to_counter
from otpkit.core.verify import verify_key, verify_key_newer
from otpkit.engine import OTPEngine
from otpkit.exceptions import (
    ErrorKind,
    IncompatibleSecretLengthError,
    InvalidBase32CharacterError,
    InvalidConfigurationError,
    InvalidSecretError,
    OTPError,
)

__version__ = "1.0.0"

__all__ = [
    "Algorithm",
    "ConfigHolder",
    "ErrorKind",
    "IncompatibleSecretLengthError",
    "InvalidBase32CharacterError",
    "InvalidConfigurationError",
    "InvalidSecretError",
    "OTPConfig",
    "OTPEngine",
    "OTPError",
    "VALID_FOR_B32",
    "b32decode",
    "b32encode",
    "current_code",
    "generate_hotp",
    "generate_secret_key",
    "oath_hotp",
    "oath_truncate",
    "remaining_seconds",
    "remove_invalid_chars",
    "timestamp_to_counter",
    "to_base32",
    "verify_key",
    "verify_key_newer",
]
