"""
Capability interfaces.

PaymentProvider is the contract every wallet provider implements;
LoggerInterface is the structured log sink the gateway writes to.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class PaymentProvider(ABC):
    """
    Contract shared by all wallet providers.

    Each instance owns its authentication state and is driven through
    login() -> verify_code() before balance or history can be read.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Registry key of the provider (e.g. "ovo", "gopay")"""
        pass

    @abstractmethod
    def login(self, phone: str) -> Dict[str, Any]:
        """
        Start authentication for a phone number.

        Returns:
            Result dict with at least "success" and "requires_verification"

        Raises:
            ProviderError: Upstream rejected the request or was unreachable
        """
        pass

    @abstractmethod
    def verify_code(self, code: str) -> Dict[str, Any]:
        """
        Complete authentication with the OTP sent to the user.

        Raises:
            ProviderStateError: login() has not established a session
            ProviderError: Upstream rejected the code
        """
        pass

    @abstractmethod
    def get_balance(self) -> Dict[str, Any]:
        """Return {"success", "balance", "currency", "data"}"""
        pass

    @abstractmethod
    def get_transactions(self, limit: int = 10) -> Dict[str, Any]:
        """Return {"success", "transactions", "total", "data"}"""
        pass

    @abstractmethod
    def is_authenticated(self) -> bool:
        pass

    @abstractmethod
    def logout(self) -> bool:
        """Clear local session state; upstream failures are not raised"""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, authenticated={self.is_authenticated()})"


class LoggerInterface(ABC):
    """Leveled log sink; implementations must never raise"""

    @abstractmethod
    def log(self, level: str, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        pass

    def emergency(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self.log("emergency", message, context)

    def alert(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self.log("alert", message, context)

    def critical(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self.log("critical", message, context)

    def error(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self.log("error", message, context)

    def warning(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self.log("warning", message, context)

    def notice(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self.log("notice", message, context)

    def info(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self.log("info", message, context)

    def debug(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self.log("debug", message, context)
