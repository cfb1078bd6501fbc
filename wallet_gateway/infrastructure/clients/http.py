"""Shared HTTP request executor for wallet provider APIs"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from wallet_gateway.domain.exceptions import ProviderError, ProviderTransportError
from wallet_gateway.infrastructure.observability.metrics import (
    provider_latency_histogram,
    provider_request_counter,
)

logger = logging.getLogger(__name__)

WRITE_METHODS = {"POST", "PUT", "PATCH"}


@dataclass(frozen=True)
class ProviderDescriptor:
    """What the executor needs to know about one upstream API"""

    name: str
    base_url: str
    user_agent: str
    timeout: float = 30


class ProviderHttpClient:
    """Executes JSON requests against one provider API"""

    def __init__(self, descriptor: ProviderDescriptor, transport: httpx.BaseTransport | None = None):
        self.descriptor = descriptor
        self._transport = transport

    def build_headers(self, headers: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        """Default JSON headers plus the caller's auth/session headers"""
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": self.descriptor.user_agent,
            **(headers or {}),
        }

    def request(
        self,
        method: str,
        endpoint: str,
        data: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        """
        Send one request and return the decoded JSON body.

        Write methods carry data as a JSON body, other methods as query
        parameters. A body that is not JSON decodes to {}; a JSON body that is
        not an object is returned as {"data": body}.

        Raises:
            ProviderTransportError: Connection failure or timeout
            ProviderError: HTTP status >= 400
        """
        method = method.upper()
        provider = self.descriptor.name
        url = self.descriptor.base_url.rstrip("/") + endpoint

        request_kwargs: Dict[str, Any] = {"headers": self.build_headers(headers)}
        if data:
            if method in WRITE_METHODS:
                request_kwargs["json"] = data
            else:
                request_kwargs["params"] = data

        logger.debug("%s %s", method, url, extra={"provider": provider})
        start_time = time.time()

        try:
            with httpx.Client(timeout=self.descriptor.timeout, transport=self._transport) as client:
                response = client.request(method, url, **request_kwargs)
        except httpx.TimeoutException as e:
            provider_request_counter.labels(provider=provider, endpoint=endpoint, outcome="transport_error").inc()
            raise ProviderTransportError(
                f"Request to {provider} timed out after {self.descriptor.timeout}s",
                provider=provider,
                endpoint=endpoint,
                context={"transport_error": str(e)},
                cause=e,
            ) from e
        except httpx.RequestError as e:
            provider_request_counter.labels(provider=provider, endpoint=endpoint, outcome="transport_error").inc()
            raise ProviderTransportError(
                f"Transport error: {e}",
                provider=provider,
                endpoint=endpoint,
                context={"transport_error": str(e)},
                cause=e,
            ) from e
        finally:
            provider_latency_histogram.labels(provider=provider).observe(time.time() - start_time)

        body = self._decode(response)

        if response.status_code >= 400:
            provider_request_counter.labels(provider=provider, endpoint=endpoint, outcome="http_error").inc()
            raise ProviderError.from_http_response(response.status_code, provider, endpoint, body)

        provider_request_counter.labels(provider=provider, endpoint=endpoint, outcome="success").inc()
        return body

    @staticmethod
    def _decode(response: httpx.Response) -> Dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            return {}
        if body is None:
            return {}
        if not isinstance(body, dict):
            return {"data": body}
        return body
