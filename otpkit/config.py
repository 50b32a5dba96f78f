"""
Engine configuration.

:class:`OTPConfig` is immutable; :class:`ConfigHolder` swaps whole snapshots
under a lock, so readers always see a consistent set of defaults.
"""

import threading
from dataclasses import dataclass, replace
from typing import Any, Optional

from otpkit.core.hotp import Algorithm
from otpkit.core.utils import validate_digits, validate_period, validate_window
from otpkit.core.verify import DEFAULT_WINDOW
from otpkit.exceptions import InvalidConfigurationError


@dataclass(frozen=True)
class OTPConfig:
    """Process-wide defaults for one engine."""

    period: int = 30
    digits: int = 6
    window: int = DEFAULT_WINDOW
    enforce_compatibility: bool = True
    algorithm: Algorithm = Algorithm.SHA1

    def __post_init__(self) -> None:
        validate_period(self.period)
        validate_digits(self.digits)
        validate_window(self.window)
        if not isinstance(self.enforce_compatibility, bool):
            raise InvalidConfigurationError(
                "enforce_compatibility must be a boolean.", field="enforce_compatibility"
            )
        try:
            object.__setattr__(self, "algorithm", Algorithm(self.algorithm))
        except ValueError:
            raise InvalidConfigurationError(
                f"Unsupported algorithm '{self.algorithm}'. Supported: SHA1, SHA256, SHA512.",
                field="algorithm",
            ) from None


class ConfigHolder:
    """Thread-safe holder for an :class:`OTPConfig` snapshot."""

    def __init__(self, config: Optional[OTPConfig] = None) -> None:
        self._config = config or OTPConfig()
        self._lock = threading.Lock()

    def get(self) -> OTPConfig:
        with self._lock:
            return self._config

    def update(self, **changes: Any) -> OTPConfig:
        """
        Replace selected fields and return the new snapshot.

        Raises:
            InvalidConfigurationError: If a value is out of range or the field
                is unknown.  The previous snapshot stays in place.
        """
        unknown = set(changes) - set(OTPConfig.__dataclass_fields__)
        if unknown:
            raise InvalidConfigurationError(
                f"Unknown configuration field(s): {', '.join(sorted(unknown))}.",
                field=sorted(unknown)[0],
            )
        with self._lock:
            self._config = replace(self._config, **changes)
            return self._config
