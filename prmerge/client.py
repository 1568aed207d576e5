"""
Async GitHub client.

Provides the hosting-API operations the merge step consumes.
"""

from collections.abc import Mapping
from typing import Any

import httpx

from prmerge.clients import GitClient, PullsClient, ReposClient
from prmerge.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, DEFAULT_UPLOAD_URL, GitHubConfig
from prmerge.transport import AsyncHTTPTransport


class GitHubClient:
    """
    Async client for the GitHub REST API.

    Aggregates the resource clients used by the merge step.

    Example:
        ```python
        import asyncio
        from prmerge import GitHubClient

        async def main():
            async with GitHubClient.from_env() as client:
                pr = await client.pulls.get("Clever", "microplane", 123)
                print(pr.mergeable)

        asyncio.run(main())
        ```
    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        upload_url: str = DEFAULT_UPLOAD_URL,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the GitHub client.

        Args:
            token: GitHub API token
            base_url: API endpoint (default: https://api.github.com/)
            upload_url: Upload endpoint (default: https://uploads.github.com/)
            timeout: Request timeout in seconds (default: 30.0)
            http_client: Pre-built httpx client (optional)
        """
        self.base_url = base_url
        self.upload_url = upload_url
        self.timeout = timeout

        self._transport = AsyncHTTPTransport(
            base_url=base_url,
            token=token,
            timeout=timeout,
            client=http_client,
        )

        self.pulls = PullsClient(self._transport)
        self.repos = ReposClient(self._transport)
        self.git = GitClient(self._transport)

    @classmethod
    def from_config(cls, config: GitHubConfig) -> "GitHubClient":
        """Create a client from a GitHubConfig."""
        return cls(
            token=config.token,
            base_url=config.base_url,
            upload_url=config.upload_url,
            timeout=config.timeout,
        )

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> "GitHubClient":
        """
        Create a client from environment variables.

        Environment variables:
            GITHUB_API_TOKEN: API token (required)
            GITHUB_URL: Alternate API endpoint (optional)

        Raises:
            ConfigurationError: If required environment variables are missing
        """
        return cls.from_config(GitHubConfig.from_env(environ, timeout=timeout))

    @property
    def transport(self) -> AsyncHTTPTransport:
        """Get the underlying HTTP transport (for advanced use cases)."""
        return self._transport

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._transport.close()

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()
