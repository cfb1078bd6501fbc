"""Payment gateway façade over the configured wallet providers"""

from typing import Any, Dict, List, Mapping, Optional

import httpx

from wallet_gateway.domain.configuration import Configuration
from wallet_gateway.domain.exceptions import (
    ConfigValidationError,
    GatewayError,
    ProviderError,
    ProviderNotFoundError,
)
from wallet_gateway.domain.interfaces import LoggerInterface, PaymentProvider
from wallet_gateway.infrastructure.observability.logging import NullLogger
from wallet_gateway.infrastructure.observability.metrics import record_operation
from wallet_gateway.infrastructure.providers.registry import create_provider, is_known_provider
from wallet_gateway.utils.masking import mask_phone_number


class PaymentGateway:
    """
    Single entry point for all configured wallet providers.

    The config maps provider names to provider settings, e.g.
    {"ovo": {...}, "gopay": {"password": "..."}}. One provider instance is
    created per recognised key and kept for the gateway's lifetime.

    Provider failures are re-raised as GatewayError with the original
    ProviderError as cause; logout() reports failure by returning False.
    Instances are not safe for concurrent use.
    """

    def __init__(
        self,
        config: Optional[Mapping[str, Any]] = None,
        logger: Optional[LoggerInterface] = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self._config = dict(config or {})
        self._logger = logger or NullLogger()
        self._providers: Dict[str, PaymentProvider] = {}

        self._initialize_providers(transport)

    @classmethod
    def from_configuration(
        cls,
        configuration: Configuration,
        logger: Optional[LoggerInterface] = None,
        transport: httpx.BaseTransport | None = None,
    ) -> "PaymentGateway":
        """Build a gateway for every enabled provider in a Configuration"""
        default_timeout = configuration.get("timeout")
        providers = {}
        for name in configuration.get_enabled_providers():
            provider_config = configuration.get_provider_config(name)
            if provider_config.get("timeout") is None and default_timeout is not None:
                provider_config["timeout"] = default_timeout
            providers[name] = provider_config
        return cls(providers, logger, transport)

    def _initialize_providers(self, transport: httpx.BaseTransport | None) -> None:
        for key, provider_config in self._config.items():
            name = str(key).lower()
            if not is_known_provider(name) or provider_config is None or name in self._providers:
                continue
            if not isinstance(provider_config, Mapping):
                raise ConfigValidationError(f"Configuration for provider {name} must be a mapping", provider=name)
            self._providers[name] = create_provider(name, provider_config, transport)

        self._logger.info(
            "Payment providers initialized",
            {"available_providers": self.get_available_providers()},
        )

    def _get_provider(self, provider: str) -> PaymentProvider:
        name = provider.lower()
        if name not in self._providers:
            available = self.get_available_providers()
            raise ProviderNotFoundError(
                f"Provider '{provider}' is not configured or available "
                f"(available providers: {', '.join(available) or 'none'})",
                provider=name,
                context={"available_providers": available},
            )
        return self._providers[name]

    def _fail(self, operation: str, prefix: str, provider: str, error: ProviderError) -> GatewayError:
        record_operation(provider, operation, succeeded=False)
        return GatewayError(
            f"{prefix}: {error.message}",
            code=error.code,
            provider=provider,
            context=error.context,
            cause=error,
        )

    def login(self, provider: str, phone: str) -> Dict[str, Any]:
        """
        Start authentication with a provider.

        Raises:
            ProviderNotFoundError: provider is not registered
            GatewayError: the provider rejected the login
        """
        self._logger.info(
            f"Attempting login to {provider}",
            {"provider": provider, "phone": mask_phone_number(phone)},
        )
        instance = self._get_provider(provider)

        try:
            result = instance.login(phone)
        except ProviderError as e:
            self._logger.error(
                f"Login to {provider} failed",
                {"provider": provider, "error": e.message, "endpoint": e.endpoint},
            )
            raise self._fail("login", "Login failed", instance.name, e) from e

        self._logger.info(
            f"Login to {provider} successful",
            {"provider": provider, "requires_verification": result.get("requires_verification", False)},
        )
        record_operation(instance.name, "login", succeeded=True)
        return result

    def verify_code(self, provider: str, code: str) -> Dict[str, Any]:
        self._logger.info(f"Verifying code for {provider}", {"provider": provider})
        instance = self._get_provider(provider)

        try:
            result = instance.verify_code(code)
        except ProviderError as e:
            self._logger.error(
                f"Code verification for {provider} failed",
                {"provider": provider, "error": e.message, "endpoint": e.endpoint},
            )
            raise self._fail("verify_code", "Code verification failed", instance.name, e) from e

        self._logger.info(
            f"Code verification for {provider} successful",
            {"provider": provider, "authenticated": result.get("authenticated", False)},
        )
        record_operation(instance.name, "verify_code", succeeded=True)
        return result

    def get_balance(self, provider: str) -> Dict[str, Any]:
        self._logger.info(f"Getting balance from {provider}", {"provider": provider})
        instance = self._get_provider(provider)

        try:
            result = instance.get_balance()
        except ProviderError as e:
            self._logger.error(
                f"Failed to get balance from {provider}",
                {"provider": provider, "error": e.message},
            )
            raise self._fail("get_balance", "Failed to get balance", instance.name, e) from e

        self._logger.info(
            f"Balance retrieved from {provider}",
            {"provider": provider, "balance": result.get("balance", 0)},
        )
        record_operation(instance.name, "get_balance", succeeded=True)
        return result

    def get_transactions(self, provider: str, limit: int = 10) -> Dict[str, Any]:
        self._logger.info(
            f"Getting transactions from {provider}",
            {"provider": provider, "limit": limit},
        )
        instance = self._get_provider(provider)

        try:
            result = instance.get_transactions(limit)
        except ProviderError as e:
            self._logger.error(
                f"Failed to get transactions from {provider}",
                {"provider": provider, "error": e.message},
            )
            raise self._fail("get_transactions", "Failed to get transactions", instance.name, e) from e

        self._logger.info(
            f"Transactions retrieved from {provider}",
            {"provider": provider, "transaction_count": len(result.get("transactions", []))},
        )
        record_operation(instance.name, "get_transactions", succeeded=True)
        return result

    def is_authenticated(self, provider: str) -> bool:
        return self._get_provider(provider).is_authenticated()

    def logout(self, provider: str) -> bool:
        """Log out of a provider; returns False instead of raising on provider failure"""
        self._logger.info(f"Logging out from {provider}", {"provider": provider})
        instance = self._get_provider(provider)

        try:
            result = instance.logout()
        except ProviderError as e:
            self._logger.warning(
                f"Logout from {provider} failed, but continuing",
                {"provider": provider, "error": e.message},
            )
            record_operation(instance.name, "logout", succeeded=False)
            return False

        self._logger.info(f"Logout from {provider} successful", {"provider": provider})
        record_operation(instance.name, "logout", succeeded=True)
        return result

    def get_available_providers(self) -> List[str]:
        return list(self._providers)

    def set_logger(self, logger: LoggerInterface) -> "PaymentGateway":
        self._logger = logger
        return self
