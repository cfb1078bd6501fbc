"""GoPay wallet provider (phone + password + OTP login, session-id correlated)"""

from typing import Any, Dict, Mapping, Optional

import httpx

from wallet_gateway.domain.exceptions import ProviderStateError
from wallet_gateway.domain.models import LoginResponse, VerifyResponse
from wallet_gateway.infrastructure.providers.base import HttpWalletProvider


class GoPayProvider(HttpWalletProvider):
    """
    Client for the GoPay API.

    Login needs the account password from config (or set_password()). The
    upstream answers with a session id and says whether an OTP is required;
    verify_code() exchanges session id + OTP for the bearer token.
    """

    NAME = "gopay"
    DEFAULT_BASE_URL = "https://api.gojekapi.com"
    USER_AGENT = "GoPay/1.0"
    NOT_AUTHENTICATED_MESSAGE = "User not authenticated. Please login and verify OTP first."

    def __init__(self, config: Optional[Mapping[str, Any]] = None, transport: httpx.BaseTransport | None = None):
        super().__init__(config, transport)
        config = config or {}
        self.phone = config.get("phone") or ""
        self.password: str = config.get("password") or ""
        self.session_id: str = ""

    def auth_headers(self) -> Dict[str, str]:
        headers = super().auth_headers()
        if self.session_id:
            headers["Session-Id"] = self.session_id
        return headers

    def clear_session(self) -> None:
        super().clear_session()
        self.session_id = ""

    def set_password(self, password: str) -> "GoPayProvider":
        self.password = password
        return self

    def set_phone(self, phone: str) -> "GoPayProvider":
        self.phone = phone
        return self

    def login(self, phone: str) -> Dict[str, Any]:
        self.phone = phone

        if not self.password:
            raise ProviderStateError("Password not set. Please provide password in config.", provider=self.NAME)

        endpoint = "/auth/login"
        response = self._request("POST", endpoint, {"phone": phone, "password": self.password})
        parsed = self._parse(LoginResponse, endpoint, response)

        if parsed.session_id:
            self.session_id = parsed.session_id

        return {
            "success": True,
            "message": "Login request sent successfully",
            "requires_verification": parsed.requires_otp,
            "data": response,
        }

    def verify_code(self, code: str) -> Dict[str, Any]:
        if not self.session_id:
            raise ProviderStateError("Session ID not set. Please call login() first.", provider=self.NAME)

        endpoint = "/auth/verify-otp"
        response = self._request("POST", endpoint, {"session_id": self.session_id, "otp": code})
        parsed = self._parse(VerifyResponse, endpoint, response)

        if parsed.auth_token:
            self.auth_token = parsed.auth_token
            self.authenticated = True

        return {
            "success": True,
            "message": "OTP verified successfully",
            "authenticated": self.authenticated,
            "data": response,
        }

    def _transaction_query(self, limit: int) -> Dict[str, Any]:
        return {"limit": limit, "offset": 0}
