"""
Secret key generation.

Secrets are base32 text built from CSPRNG symbols.  Google Authenticator only
copes with secrets whose length is a power of two of at least 16 symbols
(80 bits), so that constraint is enforced unless the caller opts out.
"""

import logging

from otpkit.core.base32 import VALID_FOR_B32, to_base32
from otpkit.core.crypto import random_symbols
from otpkit.exceptions import IncompatibleSecretLengthError, InvalidSecretError

logger = logging.getLogger(__name__)

DEFAULT_SECRET_LENGTH = 16
MIN_COMPATIBLE_LENGTH = 16


def is_compatible_length(length: int) -> bool:
    """True if a secret of ``length`` symbols works with Google Authenticator."""
    return length >= MIN_COMPATIBLE_LENGTH and length & (length - 1) == 0


def generate_secret_key(
    length: int = DEFAULT_SECRET_LENGTH,
    prefix: str = "",
    enforce_compatibility: bool = True,
) -> str:
    """
    Generate a random base32 secret.

    Args:
        length:                Number of random base32 symbols.
        prefix:                Optional text (e.g. an account id) whose base32
                               encoding is prepended to the random part.
        enforce_compatibility: Reject secrets Google Authenticator cannot use.

    Returns:
        ``to_base32(prefix)`` followed by ``length`` random symbols.

    Raises:
        InvalidSecretError: If ``length`` is not positive.
        IncompatibleSecretLengthError: If enforcement is on and the total
            length is not compatible.
    """
    if not isinstance(length, int) or length < 1:
        raise InvalidSecretError("Secret length must be a positive integer.")

    head = to_base32(prefix) if prefix else ""
    total = len(head) + length
    if not is_compatible_length(total):
        if enforce_compatibility:
            raise IncompatibleSecretLengthError(total)
        logger.debug("Generating %d-symbol secret without compatibility enforcement", total)

    return head + random_symbols(VALID_FOR_B32, length)
