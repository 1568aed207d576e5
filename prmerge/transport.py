"""
Async HTTP transport for the GitHub REST API.

Handles authentication headers, request/response logging and parsing of
error responses into typed exceptions. Requests are never retried here:
retry and backoff decisions belong to the caller.
"""

import time
from typing import Any

import httpx

from prmerge.config import DEFAULT_TIMEOUT
from prmerge.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    GitHubError,
    NotFoundError,
    RateLimitedError,
    ServerError,
    ValidationError,
)
from prmerge.logging import log_http_request, log_http_response

GITHUB_MEDIA_TYPE = "application/vnd.github+json"
GITHUB_API_VERSION = "2022-11-28"
DEFAULT_RETRY_AFTER = 60


class AsyncHTTPTransport:
    """
    Async HTTP transport layer for GitHub.

    Handles:
    - Token authentication on every request
    - DEBUG logging of requests and responses with the token masked
    - Error response parsing into typed exceptions
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize async HTTP transport.

        Args:
            base_url: Base URL for API requests (e.g., "https://api.github.com/")
            token: GitHub API token
            timeout: Request timeout in seconds
            client: Pre-built httpx client (for custom transports in tests)
        """
        self.base_url = base_url
        self.timeout = timeout
        self._headers = {
            "Accept": GITHUB_MEDIA_TYPE,
            "Authorization": f"Bearer {token}",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
        }

        self._client = client or httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers=self._headers,
        )
        self._owns_client = client is None

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "AsyncHTTPTransport":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> Any:
        """
        Make an authenticated request.

        Args:
            method: HTTP method
            path: API path (e.g., "/repos/Clever/microplane/pulls/1")
            params: Query parameters
            body: Request body (for PUT/POST/PATCH)

        Returns:
            Parsed JSON response, or an empty dict for responses without a body

        Raises:
            GitHubError: On API or connection errors
        """
        log_http_request(method, path, self._headers, body)
        started = time.monotonic()

        try:
            response = await self._client.request(
                method, path, params=params, json=body, headers=self._headers
            )
        except httpx.RequestError as e:
            raise ServerError("CONNECTION_ERROR", str(e)) from e

        log_http_response(
            response.status_code, path, (time.monotonic() - started) * 1000
        )

        if response.status_code >= 400:
            raise self._parse_error_response(response)

        if response.status_code == 204 or not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise ServerError(
                "INVALID_RESPONSE",
                f"Response from {path} is not JSON",
                response.status_code,
            ) from e

    def _parse_error_response(self, response: httpx.Response) -> GitHubError:
        """
        Parse an error response into a typed exception.

        Args:
            response: HTTP response with error status

        Returns:
            Appropriate GitHubError subclass
        """
        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        status_code = response.status_code
        code = f"HTTP_{status_code}"
        message = data.get("message") or f"HTTP {status_code}"
        errors = data.get("errors")
        if isinstance(errors, list) and errors:
            details = [e.get("message", "") if isinstance(e, dict) else str(e) for e in errors]
            details = [d for d in details if d]
            if details:
                message = f"{message}: {'; '.join(details)}"

        if status_code == 429 or (
            status_code == 403 and response.headers.get("X-RateLimit-Remaining") == "0"
        ):
            return RateLimitedError(
                "RATE_LIMITED", message, self._retry_after(response), status_code
            )
        elif status_code == 401:
            return AuthenticationError(code, message, status_code)
        elif status_code == 403:
            return AuthorizationError(code, message, status_code)
        elif status_code == 404:
            return NotFoundError(code, message, status_code)
        elif status_code == 409:
            return ConflictError(code, message, status_code)
        elif status_code >= 500:
            return ServerError(code, message, status_code)
        else:
            return ValidationError(code, message, status_code)

    def _retry_after(self, response: httpx.Response) -> int:
        """Seconds until GitHub accepts requests again."""
        retry_after = response.headers.get("Retry-After")
        if retry_after:
            try:
                return int(retry_after)
            except ValueError:
                return DEFAULT_RETRY_AFTER

        reset = response.headers.get("X-RateLimit-Reset")
        if reset:
            try:
                return max(0, int(reset) - int(time.time()))
            except ValueError:
                return DEFAULT_RETRY_AFTER

        return DEFAULT_RETRY_AFTER
