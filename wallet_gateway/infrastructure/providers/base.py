"""Behaviour shared by the HTTP wallet providers"""

import logging
from typing import Any, Dict, Mapping, Optional, Type, TypeVar

import httpx
from pydantic import ValidationError

from wallet_gateway.config import settings
from wallet_gateway.domain.exceptions import ProviderError, ProviderStateError
from wallet_gateway.domain.interfaces import PaymentProvider
from wallet_gateway.domain.models import BalanceResponse, TransactionHistoryResponse, UpstreamResponse
from wallet_gateway.infrastructure.clients.http import ProviderDescriptor, ProviderHttpClient

logger = logging.getLogger(__name__)

ResponseT = TypeVar("ResponseT", bound=UpstreamResponse)


class HttpWalletProvider(PaymentProvider):
    """
    Base class for providers talking to a JSON wallet API.

    Subclasses declare NAME, DEFAULT_BASE_URL and USER_AGENT, supply their
    auth headers and implement the login/verify steps. Balance, history and
    logout behave the same for every provider.
    """

    NAME = ""
    DEFAULT_BASE_URL = ""
    USER_AGENT = ""
    NOT_AUTHENTICATED_MESSAGE = "User not authenticated. Please login and verify code first."

    def __init__(self, config: Optional[Mapping[str, Any]] = None, transport: httpx.BaseTransport | None = None):
        config = config or {}
        self.phone: str = ""
        self.auth_token: str = ""
        self.authenticated = False
        self.http = ProviderHttpClient(
            ProviderDescriptor(
                name=self.NAME,
                base_url=config.get("base_url") or self.DEFAULT_BASE_URL,
                user_agent=self.USER_AGENT,
                timeout=config.get("timeout") or settings.http_timeout_seconds,
            ),
            transport=transport,
        )

    @property
    def name(self) -> str:
        return self.NAME

    def auth_headers(self) -> Dict[str, str]:
        """Headers identifying the current session"""
        if self.auth_token:
            return {"Authorization": f"Bearer {self.auth_token}"}
        return {}

    def clear_session(self) -> None:
        self.auth_token = ""
        self.authenticated = False

    def _request(self, method: str, endpoint: str, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self.http.request(method, endpoint, data, self.auth_headers())

    def _parse(self, model: Type[ResponseT], endpoint: str, data: Dict[str, Any]) -> ResponseT:
        """Validate an upstream body; null fields fall back to model defaults"""
        try:
            return model.model_validate({key: value for key, value in data.items() if value is not None})
        except ValidationError as e:
            raise ProviderError(
                f"Invalid response from {self.NAME}: {e.error_count()} field(s) failed validation",
                provider=self.NAME,
                endpoint=endpoint,
                response=data,
                cause=e,
            ) from e

    def _ensure_authenticated(self) -> None:
        if not self.is_authenticated():
            raise ProviderStateError(self.NOT_AUTHENTICATED_MESSAGE, provider=self.NAME)

    def _transaction_query(self, limit: int) -> Dict[str, Any]:
        return {"limit": limit}

    def is_authenticated(self) -> bool:
        return self.authenticated and bool(self.auth_token)

    def get_balance(self) -> Dict[str, Any]:
        self._ensure_authenticated()

        endpoint = "/wallet/balance"
        response = self._request("GET", endpoint)
        parsed = self._parse(BalanceResponse, endpoint, response)

        return {
            "success": True,
            "balance": parsed.balance,
            "currency": parsed.currency,
            "data": response,
        }

    def get_transactions(self, limit: int = 10) -> Dict[str, Any]:
        self._ensure_authenticated()

        endpoint = "/transaction/history"
        response = self._request("GET", endpoint, self._transaction_query(limit))
        parsed = self._parse(TransactionHistoryResponse, endpoint, response)

        return {
            "success": True,
            "transactions": parsed.transactions,
            "total": parsed.total,
            "data": response,
        }

    def logout(self) -> bool:
        if not self.is_authenticated():
            return True

        try:
            self._request("POST", "/auth/logout")
        except ProviderError as e:
            # Local state is cleared regardless of the upstream outcome
            logger.warning("Upstream logout failed for %s: %s", self.NAME, e.message)

        self.clear_session()
        return True
