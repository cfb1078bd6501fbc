"""OVO wallet provider (phone + OTP login, device-id correlated)"""

import secrets
from typing import Any, Dict, Mapping, Optional

import httpx

from wallet_gateway.domain.exceptions import ProviderStateError
from wallet_gateway.domain.models import LoginResponse, VerifyResponse
from wallet_gateway.infrastructure.providers.base import HttpWalletProvider


def generate_device_id() -> str:
    return f"device_{secrets.token_hex(8)}"


class OvoProvider(HttpWalletProvider):
    """
    Client for the OVO API.

    Login always asks for an OTP. Every request carries the Device-Id header;
    the bearer token is added once verify_code() has obtained it.
    """

    NAME = "ovo"
    DEFAULT_BASE_URL = "https://api.ovo.id"
    USER_AGENT = "OVO/1.0"

    def __init__(self, config: Optional[Mapping[str, Any]] = None, transport: httpx.BaseTransport | None = None):
        super().__init__(config, transport)
        self.device_id: str = (config or {}).get("device_id") or generate_device_id()

    def auth_headers(self) -> Dict[str, str]:
        return {"Device-Id": self.device_id, **super().auth_headers()}

    def login(self, phone: str) -> Dict[str, Any]:
        self.phone = phone

        endpoint = "/auth/login"
        response = self._request("POST", endpoint, {"phone": phone, "device_id": self.device_id})
        parsed = self._parse(LoginResponse, endpoint, response)

        if parsed.auth_token:
            self.auth_token = parsed.auth_token

        return {
            "success": True,
            "message": "Login request sent successfully",
            "requires_verification": True,
            "data": response,
        }

    def verify_code(self, code: str) -> Dict[str, Any]:
        if not self.phone:
            raise ProviderStateError("Phone number not set. Please call login() first.", provider=self.NAME)

        endpoint = "/auth/verify"
        response = self._request(
            "POST", endpoint, {"phone": self.phone, "code": code, "device_id": self.device_id}
        )
        parsed = self._parse(VerifyResponse, endpoint, response)

        if parsed.auth_token:
            self.auth_token = parsed.auth_token
            self.authenticated = True

        return {
            "success": True,
            "message": "Code verified successfully",
            "authenticated": self.authenticated,
            "data": response,
        }

    def confirm_security_code(self, security_code: str) -> Dict[str, Any]:
        """Confirm the account security PIN for the current session"""
        self._ensure_authenticated()

        endpoint = "/auth/confirm-security"
        response = self._request("POST", endpoint, {"security_code": security_code})

        return {
            "success": True,
            "message": "Security code confirmed",
            "data": response,
        }
