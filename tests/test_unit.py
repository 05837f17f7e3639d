import logging

import pytest

from errors import BadRequest, CaptchaError, Conflict, ServerError, Unauthorized
from main import check_session_secret
from redirects.resolver import matches_host, strip_port


@pytest.mark.parametrize(
    "host, expected",
    [
        ("example.com", True),
        ("example.com:8080", True),
        ("other.com", False),
        ("sub.example.com", False),
        ("example.com.evil.org", False),
        ("Example.com", False),
    ],
)
def test_matches_host(host, expected):
    assert matches_host(host, "example.com") is expected


@pytest.mark.parametrize(
    "host, bare",
    [
        ("sho.rt", "sho.rt"),
        ("sho.rt:3000", "sho.rt"),
        ("localhost:8000", "localhost"),
        ("[::1]:8000", "[::1]"),
        ("[::1]", "[::1]"),
        ("[2001:db8::1]", "[2001:db8::1]"),
    ],
)
def test_strip_port(host, bare):
    assert strip_port(host) == bare


def test_error_status_codes():
    assert BadRequest().status_code == 400
    assert Unauthorized().status_code == 401
    assert Conflict().status_code == 400
    assert ServerError().status_code == 500


def test_captcha_error_status_depends_on_cause():
    assert CaptchaError().status_code == 400
    assert CaptchaError("Server configuration error.", misconfigured=True).status_code == 500


def test_error_body_carries_extra_fields():
    err = CaptchaError("Captcha verification failed.", errors=["invalid-input-response"])
    assert err.to_dict() == {
        "message": "Captcha verification failed.",
        "errors": ["invalid-input-response"],
    }
    assert ServerError().to_dict() == {"message": "Internal server error."}


def test_random_session_secret_is_reported(caplog):
    with caplog.at_level(logging.WARNING, logger="uvicorn"):
        assert check_session_secret(False) is False
    assert "SECRET is not set" in caplog.text

    caplog.clear()
    with caplog.at_level(logging.WARNING, logger="uvicorn"):
        assert check_session_secret(True) is True
    assert caplog.text == ""
