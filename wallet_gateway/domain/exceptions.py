"""Error types raised by providers, the gateway and configuration"""

from typing import Any, Dict, Optional


class PaymentError(Exception):
    """Base exception for the wallet gateway"""

    def __init__(
        self,
        message: str = "",
        code: int = 0,
        provider: str = "",
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ):
        self.message = message
        self.code = code
        self.provider = provider
        self.context = dict(context or {})
        self.cause = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def add_context(self, key: str, value: Any) -> "PaymentError":
        """Attach an extra context entry; returns self for chaining"""
        self.context[key] = value
        return self


class ProviderError(PaymentError):
    """Upstream provider failed or refused the call"""

    def __init__(
        self,
        message: str = "",
        code: int = 0,
        provider: str = "",
        endpoint: str = "",
        response: Optional[Dict[str, Any]] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message, code, provider, context, cause)
        self.endpoint = endpoint
        self.response = dict(response or {})

    @classmethod
    def from_http_response(
        cls,
        status_code: int,
        provider: str,
        endpoint: str,
        response: Optional[Dict[str, Any]] = None,
    ) -> "ProviderError":
        """Build an error for an HTTP status >= 400"""
        response = response or {}
        message = f"HTTP {status_code} error from {provider}"
        if response.get("message"):
            message += f": {response['message']}"

        return cls(
            message,
            code=status_code,
            provider=provider,
            endpoint=endpoint,
            response=response,
            context={"http_code": status_code},
        )


class ProviderTransportError(ProviderError):
    """Request never produced an HTTP response (connect failure, timeout)"""

    pass


class ProviderStateError(ProviderError):
    """Call made in the wrong authentication state; no request was sent"""

    pass


class GatewayError(PaymentError):
    """Gateway-level failure, usually wrapping a ProviderError"""

    pass


class ProviderNotFoundError(GatewayError):
    """Requested provider is not registered on the gateway"""

    pass


class ConfigurationError(GatewayError):
    """Base for configuration problems"""

    pass


class ConfigValidationError(ConfigurationError):
    """A configuration value violates a constraint"""

    pass


class ConfigNotFoundError(ConfigurationError):
    """Configuration file or provider section is missing"""

    pass


class ConfigFormatError(ConfigurationError):
    """Configuration file is malformed or of an unsupported type"""

    pass
