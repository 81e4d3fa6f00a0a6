"""
Base Service Client for the storefront REST API

Base class for all storefront API clients. Handles:
1. Base URL resolution from configuration
2. Bearer token authentication
3. HTTP client management
4. Timeouts, error-body decoding and retries for idempotent reads

Usage:
    class OrderClient(BaseServiceClient):
        service_name = "order_service"

        async def get_order(self, order_id: str):
            return await self.request("GET", f"/orders/{order_id}")
"""

import httpx
import logging
from typing import Any, Callable, Dict, Optional
from abc import ABC
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from .exceptions import ServiceClientError, ServiceUnavailableError

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], Optional[str]]


class BaseServiceClient(ABC):
    """
    Storefront API client base

    Subclasses set ``service_name`` and call ``request``. Tests inject a
    ``client`` object exposing httpx.AsyncClient's request methods.
    """

    service_name: str = None

    def __init__(
        self,
        base_url: Optional[str] = None,
        token_provider: Optional[TokenProvider] = None,
        timeout: Optional[float] = None,
        retry_attempts: Optional[int] = None,
        client: Optional[Any] = None,
    ):
        """
        Initialize service client

        Args:
            base_url: API base URL (defaults to STOREFRONT_API_URL)
            token_provider: Callable returning the session bearer token, if any
            timeout: Request timeout in seconds
            retry_attempts: Attempts for idempotent GET requests
            client: Pre-built HTTP client (dependency injection)
        """
        if not self.service_name:
            raise ValueError(f"{self.__class__.__name__} must define 'service_name'")

        if base_url is None or timeout is None or retry_attempts is None:
            from core.config import get_settings
            api_config = get_settings().api
            base_url = base_url or api_config.base_url
            timeout = timeout if timeout is not None else api_config.timeout
            retry_attempts = retry_attempts if retry_attempts is not None else api_config.retry_attempts

        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.retry_attempts = max(1, retry_attempts)
        self.token_provider = token_provider

        self.client = client or httpx.AsyncClient(
            timeout=timeout,
            headers={
                "Content-Type": "application/json",
                "Accept": "application/json",
            }
        )

        logger.debug(f"Initialized {self.service_name} client: {self.base_url}")

    async def close(self):
        """Close HTTP client"""
        await self.client.aclose()
        logger.debug(f"Closed {self.service_name} client")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def _auth_headers(self) -> Dict[str, str]:
        token = self.token_provider() if self.token_provider else None
        if token:
            return {"Authorization": f"Bearer {token}"}
        return {}

    # ========================================
    # Request handling
    # ========================================

    async def request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Send a request and decode the JSON body

        GET requests are retried on transport failures; mutations are sent
        exactly once.

        Raises:
            ServiceClientError: non-2xx response
            ServiceUnavailableError: connection failure or timeout
        """
        if method.upper() != "GET" or self.retry_attempts == 1:
            return await self._send(method, path, json=json, params=params)

        @retry(
            stop=stop_after_attempt(self.retry_attempts),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
            retry=retry_if_exception_type(ServiceUnavailableError),
            reraise=True
        )
        async def _retry_wrapper():
            return await self._send(method, path, json=json, params=params)

        try:
            return await _retry_wrapper()
        except ServiceUnavailableError as e:
            logger.error(f"[{self.service_name}] {method} {path} failed after retries: {e}")
            raise

    async def _send(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        url = f"{self.base_url}{path}"
        send = getattr(self.client, method.lower())
        kwargs: Dict[str, Any] = {"headers": self._auth_headers()}
        if json is not None:
            kwargs["json"] = json
        if params:
            kwargs["params"] = params

        try:
            response = await send(url, **kwargs)
        except httpx.TimeoutException as e:
            raise ServiceUnavailableError(f"{self.service_name} request timed out", timed_out=True) from e
        except httpx.TransportError as e:
            raise ServiceUnavailableError(f"{self.service_name} unreachable: {e}") from e

        if response.status_code >= 400:
            raise ServiceClientError(self._error_message(response), status_code=response.status_code)

        return response.json()

    @staticmethod
    def _error_message(response) -> str:
        """Prefer the server's {error} or {message} text over a bare status line"""
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            message = body.get("error") or body.get("message")
            if message:
                return str(message)
        return f"HTTP {response.status_code}"

    async def health_check(self) -> bool:
        """
        Check API reachability

        Returns:
            True when /health answers 200
        """
        try:
            await self._send("GET", "/health")
            return True
        except ServiceClientError as e:
            logger.warning(f"{self.service_name} health check failed: {e}")
            return False


__all__ = ["BaseServiceClient", "TokenProvider"]
