"""
Mock GitHub client and limiters for testing.

Provides a MockGitHubClient that mimics the real client interface without
making actual API calls, and limiters that hand out permits instantly or
never.
"""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, TypeVar

from prmerge.types.pulls import CombinedStatus, MergeResult, PullRequest, Review

T = TypeVar("T")


@dataclass
class MockResponse:
    """Configuration for a mock response."""

    data: Any
    error: Exception | None = None
    call_count: int = 0


@dataclass
class MockCall:
    """Record of a method call."""

    method: str
    args: tuple[Any, ...]
    kwargs: dict[str, Any]
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class _MockResource:
    """Shared response lookup for the mock resource clients."""

    def __init__(self, mock_client: "MockGitHubClient") -> None:
        self._mock = mock_client
        self._responses: dict[str, MockResponse] = {}

    def _get_response(self, method: str, default: T) -> T:
        """Get configured response or default."""
        if method in self._responses:
            resp = self._responses[method]
            resp.call_count += 1
            if resp.error:
                raise resp.error
            if resp.data is not None:
                return resp.data
        return default


class MockPullsClient(_MockResource):
    """Mock pulls client for testing."""

    def configure_get(
        self,
        response: PullRequest | None = None,
        error: Exception | None = None,
    ) -> None:
        """Configure the response for get() calls."""
        self._responses["get"] = MockResponse(data=response, error=error)

    def configure_list_reviews(
        self,
        response: list[Review] | None = None,
        error: Exception | None = None,
    ) -> None:
        """Configure the response for list_reviews() calls."""
        self._responses["list_reviews"] = MockResponse(data=response, error=error)

    def configure_merge(
        self,
        response: MergeResult | None = None,
        error: Exception | None = None,
    ) -> None:
        """Configure the response for merge() calls."""
        self._responses["merge"] = MockResponse(data=response, error=error)

    async def get(self, owner: str, repo: str, number: int) -> PullRequest:
        """Mock get method."""
        self._mock._record_call("pulls.get", (owner, repo, number), {})
        return self._get_response("get", PullRequest(
            number=number,
            state="open",
            merged=False,
            mergeable=True,
            merge_commit_sha=None,
            head_ref="feature",
            head_sha="mock-head-sha",
            base_ref="main",
            title="Mock PR",
        ))

    async def list_reviews(self, owner: str, repo: str, number: int) -> list[Review]:
        """Mock list_reviews method."""
        self._mock._record_call("pulls.list_reviews", (owner, repo, number), {})
        return self._get_response("list_reviews", [])

    async def merge(self, owner: str, repo: str, number: int) -> MergeResult:
        """Mock merge method."""
        self._mock._record_call("pulls.merge", (owner, repo, number), {})
        return self._get_response("merge", MergeResult(
            merged=True,
            sha="mock-merge-sha",
            message="Pull Request successfully merged",
        ))


class MockReposClient(_MockResource):
    """Mock repos client for testing."""

    def configure_get_combined_status(
        self,
        response: CombinedStatus | None = None,
        error: Exception | None = None,
    ) -> None:
        """Configure the response for get_combined_status() calls."""
        self._responses["get_combined_status"] = MockResponse(data=response, error=error)

    async def get_combined_status(self, owner: str, repo: str, ref: str) -> CombinedStatus:
        """Mock get_combined_status method."""
        self._mock._record_call("repos.get_combined_status", (owner, repo, ref), {})
        return self._get_response("get_combined_status", CombinedStatus(
            state="success",
            sha=ref,
        ))


class MockGitClient(_MockResource):
    """Mock git client for testing."""

    def configure_delete_ref(self, error: Exception | None = None) -> None:
        """Configure the error raised by delete_ref() calls."""
        self._responses["delete_ref"] = MockResponse(data=None, error=error)

    async def delete_ref(self, owner: str, repo: str, ref: str) -> None:
        """Mock delete_ref method."""
        self._mock._record_call("git.delete_ref", (owner, repo, ref), {})
        self._get_response("delete_ref", None)


class MockGitHubClient:
    """
    Mock GitHub client for testing.

    Provides the same interface as GitHubClient but returns configurable
    mock responses instead of making real API calls.

    Example:
        ```python
        from prmerge.testing import MockGitHubClient, create_mock_pull_request

        mock = MockGitHubClient()
        mock.pulls.configure_get(response=create_mock_pull_request(mergeable=False))

        with pytest.raises(NotMergeableError):
            await merge(request, mock, api_limiter, merge_limiter)

        assert mock.call_count("pulls.get") == 1
        assert not mock.was_called("pulls.merge")
        ```
    """

    def __init__(self, events: list[str] | None = None) -> None:
        """
        Initialize the mock client.

        Args:
            events: Shared log that every call name is appended to, so
                calls can be ordered against limiter permits
        """
        self._calls: list[MockCall] = []
        self.events = events if events is not None else []

        self.pulls = MockPullsClient(self)
        self.repos = MockReposClient(self)
        self.git = MockGitClient(self)

    def _record_call(
        self,
        method: str,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> None:
        """Record a method call for verification."""
        self._calls.append(MockCall(method=method, args=args, kwargs=kwargs))
        self.events.append(method)

    def was_called(self, method: str) -> bool:
        """
        Check if a method was called.

        Args:
            method: Method name (e.g., "pulls.merge", "git.delete_ref")
        """
        return any(call.method == method for call in self._calls)

    def call_count(self, method: str) -> int:
        """Get the number of times a method was called."""
        return sum(1 for call in self._calls if call.method == method)

    def get_calls(self, method: str | None = None) -> list[MockCall]:
        """Get recorded calls, optionally filtered by method."""
        if method is None:
            return list(self._calls)
        return [call for call in self._calls if call.method == method]

    def reset(self) -> None:
        """Reset all recorded calls and configured responses."""
        self._calls.clear()
        self.events.clear()
        self.pulls._responses.clear()
        self.repos._responses.clear()
        self.git._responses.clear()

    async def close(self) -> None:
        """No-op for compatibility with real client."""
        pass

    async def __aenter__(self) -> "MockGitHubClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()


class CountingLimiter:
    """Limiter that grants every permit immediately and counts them."""

    def __init__(self, name: str = "limiter", events: list[str] | None = None) -> None:
        self.name = name
        self.acquired = 0
        self.events = events if events is not None else []

    async def acquire(self) -> None:
        self.acquired += 1
        self.events.append(f"permit:{self.name}")


class BlockingLimiter:
    """Limiter that never grants a permit. ``waiting`` is set once someone blocks on it."""

    def __init__(self) -> None:
        self.waiting = asyncio.Event()
        self._never = asyncio.Event()

    async def acquire(self) -> None:
        self.waiting.set()
        await self._never.wait()


__all__ = [
    "MockGitHubClient",
    "MockCall",
    "MockResponse",
    "CountingLimiter",
    "BlockingLimiter",
]
