"""Tests for the otpkit command line."""

import pytest

from otpkit.__main__ import main
from otpkit.core.totp import current_code, now, timestamp_to_counter

SECRET = "ADUMJO5634NPDEKW"


def test_secret_default(capsys: pytest.CaptureFixture) -> None:
    assert main(["secret"]) == 0
    assert len(capsys.readouterr().out.strip()) == 16


def test_secret_incompatible_length(caplog: pytest.LogCaptureFixture) -> None:
    assert main(["secret", "--length", "17"]) == 2
    assert "incompatible" in caplog.text


def test_secret_no_enforce(capsys: pytest.CaptureFixture) -> None:
    assert main(["secret", "--length", "17", "--no-enforce"]) == 0
    assert len(capsys.readouterr().out.strip()) == 17


def test_code(capsys: pytest.CaptureFixture) -> None:
    assert main(["code", SECRET]) == 0
    out = capsys.readouterr().out.strip()
    assert len(out) == 6 and out.isdigit()


def test_code_pretty(capsys: pytest.CaptureFixture) -> None:
    assert main(["code", SECRET, "--pretty"]) == 0
    assert len(capsys.readouterr().out.strip()) == 7


def test_verify_valid(capsys: pytest.CaptureFixture) -> None:
    assert main(["verify", SECRET, current_code(SECRET)]) == 0
    assert capsys.readouterr().out.strip() == "valid"


def test_verify_malformed(capsys: pytest.CaptureFixture) -> None:
    assert main(["verify", SECRET, "abc"]) == 1
    assert capsys.readouterr().out.strip() == "invalid"


def test_verify_min_counter(capsys: pytest.CaptureFixture) -> None:
    t = now()
    counter = timestamp_to_counter(t)
    code = current_code(SECRET, timestamp=t)
    assert main(["verify", SECRET, code, "--min-counter", str(counter)]) == 0
    assert capsys.readouterr().out.strip() == str(counter)
    assert main(["verify", SECRET, code, "--min-counter", str(counter + 1)]) == 1


def test_verify_invalid_secret(caplog: pytest.LogCaptureFixture) -> None:
    assert main(["verify", "", "123456"]) == 2
    assert "empty" in caplog.text


def test_uri_chart(capsys: pytest.CaptureFixture) -> None:
    assert main(["uri", "PragmaRX", "acr+pragmarx@antoniocarlosribeiro.com", SECRET, "--chart"]) == 0
    assert capsys.readouterr().out.strip().endswith("%26issuer%3DPragmaRX")


def test_uri_otpauth(capsys: pytest.CaptureFixture) -> None:
    assert main(["uri", "Acme", "alice", SECRET]) == 0
    out = capsys.readouterr().out.strip()
    assert out == "otpauth://totp/Acme:alice?secret=ADUMJO5634NPDEKW&issuer=Acme"


def test_invalid_digits_option(caplog: pytest.LogCaptureFixture) -> None:
    assert main(["--digits", "4", "code", SECRET]) == 2
    assert "Digits" in caplog.text
