"""Known provider implementations, keyed by lower-cased name"""

from typing import Any, Dict, Mapping, Optional, Type

import httpx

from wallet_gateway.domain.interfaces import PaymentProvider
from wallet_gateway.infrastructure.providers.base import HttpWalletProvider
from wallet_gateway.infrastructure.providers.gopay import GoPayProvider
from wallet_gateway.infrastructure.providers.ovo import OvoProvider

PROVIDERS: Dict[str, Type[HttpWalletProvider]] = {
    OvoProvider.NAME: OvoProvider,
    GoPayProvider.NAME: GoPayProvider,
}


def is_known_provider(name: str) -> bool:
    return name.lower() in PROVIDERS


def create_provider(
    name: str,
    config: Optional[Mapping[str, Any]] = None,
    transport: httpx.BaseTransport | None = None,
) -> PaymentProvider:
    """
    Instantiate the provider registered under name.

    Raises:
        KeyError: name is not a known provider
    """
    provider_class = PROVIDERS[name.lower()]
    return provider_class(config, transport=transport)
