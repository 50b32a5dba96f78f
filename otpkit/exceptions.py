"""
Exception hierarchy for otpkit.

Every error derives from :class:`OTPError`, itself a ``ValueError``, and
carries an :class:`ErrorKind` tag so callers can branch on ``exc.kind``
without importing each class.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Machine-readable error categories."""

    INVALID_BASE32_CHARACTER = "invalid_base32_character"
    INVALID_SECRET = "invalid_secret"
    INCOMPATIBLE_SECRET_LENGTH = "incompatible_secret_length"
    INVALID_CONFIGURATION = "invalid_configuration"


class OTPError(ValueError):
    """Base class for all otpkit errors."""

    kind: ErrorKind


class InvalidBase32CharacterError(OTPError):
    """Raised when base32 input contains a symbol outside ``A-Z2-7``."""

    kind = ErrorKind.INVALID_BASE32_CHARACTER

    def __init__(self, character: str) -> None:
        self.character = character
        super().__init__(f"Invalid base32 character {character!r}.")


class InvalidSecretError(OTPError):
    """Raised when a secret decodes to no usable key material."""

    kind = ErrorKind.INVALID_SECRET


class IncompatibleSecretLengthError(OTPError):
    """Raised when a generated secret would not work with Google Authenticator."""

    kind = ErrorKind.INCOMPATIBLE_SECRET_LENGTH

    def __init__(self, length: int) -> None:
        self.length = length
        super().__init__(
            f"Secret length {length} is incompatible with Google Authenticator; "
            "use a power of two of at least 16 or disable compatibility enforcement."
        )


class InvalidConfigurationError(OTPError):
    """Raised when a configuration value is out of range."""

    kind = ErrorKind.INVALID_CONFIGURATION

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        self.field = field
        super().__init__(message)
