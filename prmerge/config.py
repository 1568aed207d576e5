"""
Environment configuration for the GitHub client.

Environment variables:
    GITHUB_API_TOKEN: Token used for every API call (required)
    GITHUB_URL: Alternate API endpoint, e.g. a GitHub Enterprise
        "https://github.example.com/api/v3/" (optional)
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass

from prmerge.exceptions import ConfigurationError

DEFAULT_BASE_URL = "https://api.github.com/"
DEFAULT_UPLOAD_URL = "https://uploads.github.com/"
DEFAULT_TIMEOUT = 30.0


def endpoints_for(url: str) -> tuple[str, str]:
    """
    Derive the API and upload endpoints from an alternate base URL.

    The base always ends in "/" and the upload endpoint is the base
    followed by "upload/".

    Args:
        url: Alternate API endpoint

    Returns:
        Tuple of (base_url, upload_url)

    Raises:
        ConfigurationError: If the URL is not an absolute http(s) URL
    """
    url = url.strip()
    if not url.startswith(("http://", "https://")):
        raise ConfigurationError(f"Invalid GITHUB_URL: {url!r}. Must be an http(s) URL")

    base_url = url if url.endswith("/") else url + "/"
    return base_url, base_url + "upload/"


@dataclass(frozen=True)
class GitHubConfig:
    """Connection settings for the GitHub API."""

    token: str
    base_url: str = DEFAULT_BASE_URL
    upload_url: str = DEFAULT_UPLOAD_URL
    timeout: float = DEFAULT_TIMEOUT

    def __repr__(self) -> str:
        return (
            f"GitHubConfig(token='[REDACTED]', base_url={self.base_url!r}, "
            f"upload_url={self.upload_url!r}, timeout={self.timeout!r})"
        )

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> "GitHubConfig":
        """
        Load configuration from environment variables.

        Args:
            environ: Mapping to read instead of os.environ
            timeout: Request timeout in seconds

        Raises:
            ConfigurationError: If GITHUB_API_TOKEN is missing or GITHUB_URL is invalid
        """
        env = os.environ if environ is None else environ

        token = env.get("GITHUB_API_TOKEN")
        if not token:
            raise ConfigurationError("GITHUB_API_TOKEN environment variable not set")

        alternate = env.get("GITHUB_URL")
        if alternate:
            base_url, upload_url = endpoints_for(alternate)
        else:
            base_url, upload_url = DEFAULT_BASE_URL, DEFAULT_UPLOAD_URL

        return cls(
            token=token,
            base_url=base_url,
            upload_url=upload_url,
            timeout=timeout,
        )
