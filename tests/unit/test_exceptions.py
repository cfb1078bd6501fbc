"""Unit tests for the error taxonomy"""

from wallet_gateway.domain.exceptions import (
    ConfigNotFoundError,
    ConfigValidationError,
    GatewayError,
    PaymentError,
    ProviderError,
    ProviderNotFoundError,
    ProviderStateError,
    ProviderTransportError,
)


def test_from_http_response_with_upstream_message():
    error = ProviderError.from_http_response(422, "ovo", "/auth/verify", {"message": "Invalid OTP"})

    assert error.message == "HTTP 422 error from ovo: Invalid OTP"
    assert str(error) == error.message
    assert error.code == 422
    assert error.provider == "ovo"
    assert error.endpoint == "/auth/verify"
    assert error.response == {"message": "Invalid OTP"}
    assert error.context == {"http_code": 422}


def test_from_http_response_without_body():
    error = ProviderError.from_http_response(503, "gopay", "/wallet/balance")

    assert error.message == "HTTP 503 error from gopay"
    assert error.response == {}


def test_add_context_chains():
    """Test add_context mutates only the context and returns the error"""
    error = PaymentError("boom", provider="ovo")

    result = error.add_context("attempt", 1).add_context("phone", "08*******89")

    assert result is error
    assert error.context == {"attempt": 1, "phone": "08*******89"}
    assert error.message == "boom"


def test_context_is_copied():
    context = {"key": "value"}
    error = PaymentError("boom", context=context)
    context["key"] = "changed"
    assert error.context == {"key": "value"}


def test_cause_is_chained():
    original = ProviderStateError("not ready", provider="gopay")
    error = GatewayError("Login failed: not ready", provider="gopay", cause=original)

    assert error.cause is original
    assert error.__cause__ is original


def test_hierarchy():
    """Test the families callers catch on"""
    assert issubclass(ProviderTransportError, ProviderError)
    assert issubclass(ProviderStateError, ProviderError)
    assert issubclass(ProviderNotFoundError, GatewayError)
    assert issubclass(ConfigValidationError, GatewayError)
    assert issubclass(ConfigNotFoundError, PaymentError)
    assert not issubclass(ProviderError, GatewayError)
