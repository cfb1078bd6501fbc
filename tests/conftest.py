"""Pytest fixtures for testing"""

import json
from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest

from wallet_gateway.domain.interfaces import LoggerInterface
from wallet_gateway.gateway import PaymentGateway
from wallet_gateway.infrastructure.providers.gopay import GoPayProvider
from wallet_gateway.infrastructure.providers.ovo import OvoProvider


class RecordingLogger(LoggerInterface):
    """Keeps every log call as (level, message, context)"""

    def __init__(self):
        self.records: List[Tuple[str, str, Dict[str, Any]]] = []

    def log(self, level: str, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self.records.append((level, message, dict(context or {})))

    def levels(self) -> List[str]:
        return [level for level, _, _ in self.records]


class WalletApiStub:
    """Serves canned replies per (method, path) and records every request"""

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Any] = {}
        self.requests: List[httpx.Request] = []

    def reply(self, method: str, path: str, body: Any = None, status_code: int = 200) -> "WalletApiStub":
        self.routes[(method, path)] = (status_code, body)
        return self

    def raise_error(self, method: str, path: str, error: Exception) -> "WalletApiStub":
        self.routes[(method, path)] = error
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": "Not found"})
        if isinstance(route, Exception):
            raise route
        status_code, body = route
        if body is None:
            return httpx.Response(status_code)
        return httpx.Response(status_code, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls(self, path: str) -> List[httpx.Request]:
        return [request for request in self.requests if request.url.path == path]

    @staticmethod
    def body(request: httpx.Request) -> Dict[str, Any]:
        return json.loads(request.content)


@pytest.fixture
def wallet_api() -> WalletApiStub:
    return WalletApiStub()


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def ovo(wallet_api: WalletApiStub) -> OvoProvider:
    """OVO provider with a fixed device id"""
    return OvoProvider({"device_id": "device_test"}, transport=wallet_api.transport)


@pytest.fixture
def gopay(wallet_api: WalletApiStub) -> GoPayProvider:
    """GoPay provider with a configured password"""
    return GoPayProvider({"password": "secret"}, transport=wallet_api.transport)


@pytest.fixture
def gateway(wallet_api: WalletApiStub, recording_logger: RecordingLogger) -> PaymentGateway:
    """Gateway with both providers wired to the stub API"""
    return PaymentGateway(
        {
            "ovo": {"enabled": True, "device_id": "device_test"},
            "gopay": {"enabled": True, "phone": "08123456789", "password": "secret"},
        },
        logger=recording_logger,
        transport=wallet_api.transport,
    )


@pytest.fixture
def authenticated_ovo_api(wallet_api: WalletApiStub) -> WalletApiStub:
    """Stub API with a successful OVO login + verify flow"""
    wallet_api.reply("POST", "/auth/login", {"status": "otp_sent"})
    wallet_api.reply("POST", "/auth/verify", {"auth_token": "ovo-token"})
    return wallet_api
