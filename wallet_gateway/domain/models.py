"""Upstream response shapes shared by the wallet providers"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict


class UpstreamResponse(BaseModel):
    """Base for provider payloads; unknown fields are kept"""

    model_config = ConfigDict(extra="allow")


class LoginResponse(UpstreamResponse):
    """Reply to POST /auth/login"""

    auth_token: Optional[str] = None
    session_id: Optional[str] = None
    requires_otp: bool = False


class VerifyResponse(UpstreamResponse):
    """Reply to the OTP verification endpoint"""

    auth_token: Optional[str] = None


class BalanceResponse(UpstreamResponse):
    """Reply to GET /wallet/balance"""

    balance: Union[int, float] = 0
    currency: str = "IDR"


class TransactionHistoryResponse(UpstreamResponse):
    """Reply to GET /transaction/history"""

    transactions: List[Dict[str, Any]] = []
    total: int = 0
