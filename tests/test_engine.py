"""Tests for otpkit.engine and otpkit.config."""

import logging
from concurrent.futures import ThreadPoolExecutor

import pytest

from otpkit import OTPEngine
from otpkit.config import DEFAULT_WINDOW, ConfigHolder, OTPConfig
from otpkit.core.hotp import Algorithm
from otpkit.exceptions import ErrorKind, IncompatibleSecretLengthError, InvalidConfigurationError

SECRET = "ADUMJO5634NPDEKW"
BASE_COUNTER = 26213400


def at(counter: int) -> int:
    return counter * 30


@pytest.fixture
def engine() -> OTPEngine:
    return OTPEngine()


# ── Configuration ─────────────────────────────────────────────────────────────

def test_default_config() -> None:
    cfg = OTPConfig()
    assert cfg.period == 30
    assert cfg.digits == 6
    assert cfg.window == DEFAULT_WINDOW == 4
    assert cfg.enforce_compatibility is True
    assert cfg.algorithm is Algorithm.SHA1


@pytest.mark.parametrize(
    "changes,field",
    [
        ({"window": -1}, "window"),
        ({"period": 0}, "period"),
        ({"digits": 0}, "digits"),
        ({"digits": 9}, "digits"),
        ({"algorithm": "MD5"}, "algorithm"),
        ({"enforce_compatibility": "yes"}, "enforce_compatibility"),
    ],
)
def test_invalid_config_values(changes: dict, field: str) -> None:
    with pytest.raises(InvalidConfigurationError) as info:
        OTPConfig(**changes)
    assert info.value.field == field
    assert info.value.kind is ErrorKind.INVALID_CONFIGURATION


def test_algorithm_string_is_coerced() -> None:
    assert OTPConfig(algorithm="SHA256").algorithm is Algorithm.SHA256


def test_holder_update_is_copy_on_write() -> None:
    holder = ConfigHolder()
    before = holder.get()
    after = holder.update(window=1)
    assert before.window == DEFAULT_WINDOW
    assert after.window == 1
    assert holder.get() is after


def test_holder_rejects_unknown_field() -> None:
    holder = ConfigHolder()
    with pytest.raises(InvalidConfigurationError, match="Unknown"):
        holder.update(colour="blue")


def test_set_window(engine: OTPEngine) -> None:
    engine.set_window(6)
    assert engine.get_window() == 6
    assert engine.get_window(1) == 1


def test_failed_update_keeps_previous_config(engine: OTPEngine) -> None:
    engine.set_window(3)
    with pytest.raises(InvalidConfigurationError):
        engine.set_window(-1)
    assert engine.get_window() == 3


def test_engines_are_independent() -> None:
    a = OTPEngine()
    b = OTPEngine(OTPConfig(window=0))
    a.set_window(2)
    assert b.get_window() == 0
    assert a.verify_key(SECRET, "558854", timestamp=at(BASE_COUNTER))
    assert not b.verify_key(SECRET, "558854", timestamp=at(BASE_COUNTER))


def test_configuration_is_logged(engine: OTPEngine, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="otpkit.engine"):
        engine.set_period(60)
    assert "period" in caplog.text


# ── Window defaults ───────────────────────────────────────────────────────────

def test_default_window_drives_verification(engine: OTPEngine) -> None:
    engine.set_window(0)
    assert not engine.verify_key(SECRET, "558854", None, at(BASE_COUNTER))

    engine.set_window(2)
    assert engine.verify_key(SECRET, "558854", None, at(26213400))
    assert engine.verify_key(SECRET, "558854", None, at(26213399))
    assert engine.verify_key(SECRET, "558854", None, at(26213398))
    assert engine.verify_key(SECRET, "558854", None, at(26213396))
    assert not engine.verify_key(SECRET, "558854", None, at(26213395))


def test_verify_key_newer(engine: OTPEngine) -> None:
    ts = at(BASE_COUNTER)
    assert engine.verify_key_newer(SECRET, "512396", 26213401, 2, ts) is None
    assert engine.verify_key_newer(SECRET, "410272", 26213401, 2, ts) == 26213401
    assert engine.verify_key_newer(SECRET, "239815", 26213401, 2, ts) == 26213402
    assert engine.verify_key_newer(SECRET, "313366", 26213401, 2, ts) is None


# ── Secrets ───────────────────────────────────────────────────────────────────

def test_generate_secret_key(engine: OTPEngine) -> None:
    assert len(engine.generate_secret_key()) == 16
    assert len(engine.generate_secret_key(32)) == 32
    assert engine.generate_secret_key(59, "ant").startswith("MFXHI")
    assert set(engine.generate_secret_key()) <= set(OTPEngine.VALID_FOR_B32)


def test_compatibility_toggle(engine: OTPEngine) -> None:
    with pytest.raises(IncompatibleSecretLengthError):
        engine.generate_secret_key(17)
    secret = engine.set_enforce_compatibility(False).generate_secret_key(17)
    assert len(secret) == 17
    assert len(engine.get_current_otp(secret)) == 6


def test_base32_helpers(engine: OTPEngine) -> None:
    assert engine.to_base32("PragmaRX") == "KBZGCZ3NMFJFQ"
    assert engine.remove_invalid_chars(SECRET + "!1-@@@") == SECRET
    assert engine.base32_decode(SECRET)[:2] == bytes([0, 232])


# ── Codes ─────────────────────────────────────────────────────────────────────

def test_get_timestamp(engine: OTPEngine) -> None:
    assert engine.get_timestamp(at(BASE_COUNTER) + 15) == BASE_COUNTER
    assert isinstance(engine.get_timestamp(), int)
    engine.set_period(60)
    assert engine.get_timestamp(120) == 2


def test_get_current_otp(engine: OTPEngine) -> None:
    assert engine.get_current_otp(SECRET, at(BASE_COUNTER)) == "512396"
    assert len(engine.get_current_otp(SECRET)) == 6


def test_oath_hotp(engine: OTPEngine) -> None:
    assert engine.oath_hotp(SECRET, 26213398) == "558854"


def test_eight_digit_engine() -> None:
    engine = OTPEngine(OTPConfig(digits=8))
    rfc_secret = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"
    assert engine.get_current_otp(rfc_secret, 59) == "94287082"
    assert engine.verify_key(rfc_secret, "94287082", 0, 59)
    assert not engine.verify_key(rfc_secret, "287082", 0, 59)


def test_remaining_seconds(engine: OTPEngine) -> None:
    assert engine.remaining_seconds(29) == 1


def test_provisioning_uri_follows_configuration(engine: OTPEngine) -> None:
    assert engine.provisioning_uri("Acme", "bob", SECRET) == (
        "otpauth://totp/Acme:bob?secret=ADUMJO5634NPDEKW&issuer=Acme"
    )
    engine.set_digits(8)
    assert engine.provisioning_uri("Acme", "bob", SECRET).endswith("&digits=8")


# ── Concurrency ───────────────────────────────────────────────────────────────

def test_shared_engine_across_threads(engine: OTPEngine) -> None:
    ts = at(BASE_COUNTER)

    def check(i: int) -> bool:
        if i % 5 == 0:
            engine.set_window(i % 3 + 2)
        return engine.verify_key(SECRET, "558854", timestamp=ts)

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(check, range(200)))
    assert all(results)
