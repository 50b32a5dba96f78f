"""
High-level OTP engine.

Bundles the base32 codec, secret generator, TOTP generator and verifier
behind one object that owns its own configuration.  Several engines with
different defaults can coexist; one engine can be shared between threads.

Usage::

    engine = OTPEngine()
    secret = engine.generate_secret_key()
    ...
    matched = engine.verify_key_newer(secret, submitted, last_counter + 1)
    if matched is not None:
        store(matched)
"""

import logging
from typing import Optional

from otpkit.config import ConfigHolder, OTPConfig
from otpkit.core import base32, hotp, secret as secret_gen, totp, verify
from otpkit.qr import uri

logger = logging.getLogger(__name__)


class OTPEngine:
    """Generate and verify Google Authenticator compatible codes."""

    VALID_FOR_B32 = base32.VALID_FOR_B32

    def __init__(self, config: Optional[OTPConfig] = None) -> None:
        """
        Args:
            config: Initial defaults; :class:`OTPConfig` defaults when None.
        """
        self._holder = ConfigHolder(config)

    # ── Configuration ────────────────────────────────────────────────────

    @property
    def config(self) -> OTPConfig:
        """Current configuration snapshot."""
        return self._holder.get()

    def configure(self, **changes) -> "OTPEngine":
        """Update several defaults at once; see :meth:`ConfigHolder.update`."""
        new = self._holder.update(**changes)
        logger.info("Engine configuration updated: %s", ", ".join(sorted(changes)))
        logger.debug("Active configuration: %r", new)
        return self

    def set_window(self, window: int) -> "OTPEngine":
        return self.configure(window=window)

    def get_window(self, window: Optional[int] = None) -> int:
        """Return ``window`` if given, else the configured default."""
        return window if window is not None else self.config.window

    def set_period(self, period: int) -> "OTPEngine":
        return self.configure(period=period)

    def set_digits(self, digits: int) -> "OTPEngine":
        return self.configure(digits=digits)

    def set_enforce_compatibility(self, enforce: bool) -> "OTPEngine":
        return self.configure(enforce_compatibility=enforce)

    # ── Base32 ───────────────────────────────────────────────────────────

    @staticmethod
    def to_base32(text: str) -> str:
        return base32.to_base32(text)

    @staticmethod
    def base32_decode(secret: str) -> bytes:
        return base32.b32decode(secret)

    @staticmethod
    def remove_invalid_chars(secret: str) -> str:
        return base32.remove_invalid_chars(secret)

    # ── Secrets ──────────────────────────────────────────────────────────

    def generate_secret_key(self, length: int = secret_gen.DEFAULT_SECRET_LENGTH, prefix: str = "") -> str:
        """
        Generate a new random secret.

        Raises:
            IncompatibleSecretLengthError: If compatibility is enforced and
                the resulting length is not usable by Google Authenticator.
        """
        return secret_gen.generate_secret_key(
            length, prefix, enforce_compatibility=self.config.enforce_compatibility
        )

    # ── Codes ────────────────────────────────────────────────────────────

    def get_timestamp(self, timestamp: Optional[float] = None) -> int:
        """Counter for ``timestamp`` (default: now) under the configured period."""
        t = timestamp if timestamp is not None else totp.now()
        return totp.timestamp_to_counter(t, self.config.period)

    def oath_hotp(self, secret: str, counter: int) -> str:
        cfg = self.config
        return hotp.oath_hotp(secret, counter, cfg.digits, cfg.algorithm)

    def get_current_otp(self, secret: str, timestamp: Optional[float] = None) -> str:
        cfg = self.config
        return totp.current_code(secret, timestamp, cfg.period, cfg.digits, cfg.algorithm)

    def remaining_seconds(self, timestamp: Optional[float] = None) -> int:
        return totp.remaining_seconds(self.config.period, timestamp)

    def provisioning_uri(self, issuer: str, account: str, secret: str) -> str:
        """``otpauth://`` URI for ``secret`` carrying this engine's period, digits and algorithm."""
        cfg = self.config
        return uri.otpauth_uri(issuer, account, secret, cfg.period, cfg.digits, cfg.algorithm)

    # ── Verification ─────────────────────────────────────────────────────

    def verify_key(
        self,
        secret: str,
        code: str,
        window: Optional[int] = None,
        timestamp: Optional[float] = None,
    ) -> bool:
        """
        Check ``code`` against the window around ``timestamp`` (default now).

        A code can be accepted more than once while it stays inside the
        window; use :meth:`verify_key_newer` to prevent replay.
        """
        cfg = self.config
        ok = verify.verify_key(
            secret,
            code,
            window=self.get_window(window),
            timestamp=timestamp,
            period=cfg.period,
            digits=cfg.digits,
            algorithm=cfg.algorithm,
        )
        if not ok:
            logger.debug("Code rejected")
        return ok

    def verify_key_newer(
        self,
        secret: str,
        code: str,
        minimum_counter: int,
        window: Optional[int] = None,
        timestamp: Optional[float] = None,
    ) -> Optional[int]:
        """
        Check ``code`` but only accept counters from ``minimum_counter`` on.

        Returns:
            The matched counter, or None.  Pass the matched counter plus one
            as ``minimum_counter`` next time to refuse the same code again.
        """
        cfg = self.config
        counter = verify.verify_key_newer(
            secret,
            code,
            minimum_counter,
            window=self.get_window(window),
            timestamp=timestamp,
            period=cfg.period,
            digits=cfg.digits,
            algorithm=cfg.algorithm,
        )
        if counter is None:
            logger.debug("Code rejected (minimum counter %d)", minimum_counter)
        return counter
