"""
Pytest fixtures for testing code built on prmerge.

Provides the mock client, limiters and sample GitHub objects.
"""

from datetime import datetime, timezone
from typing import Any, Generator

import pytest

from prmerge.testing.mock import CountingLimiter, MockGitHubClient
from prmerge.types.merge import MergeRequest
from prmerge.types.pulls import CombinedStatus, MergeResult, PullRequest, Review


# ============================================================================
# Mock Client Fixtures
# ============================================================================


@pytest.fixture
def events() -> list[str]:
    """Shared log of GitHub calls and permits, in the order they happened."""
    return []


@pytest.fixture
def mock_client(events: list[str]) -> Generator[MockGitHubClient, None, None]:
    """
    Provide a MockGitHubClient for testing.

    Example:
        ```python
        async def test_merges(mock_client, api_limiter, merge_limiter, merge_request):
            await merge(merge_request, mock_client, api_limiter, merge_limiter)
            assert mock_client.call_count("pulls.merge") == 1
        ```
    """
    client = MockGitHubClient(events=events)
    yield client
    client.reset()


@pytest.fixture
def api_limiter(events: list[str]) -> CountingLimiter:
    """Provide an API-call limiter that grants permits immediately."""
    return CountingLimiter("api", events=events)


@pytest.fixture
def merge_limiter(events: list[str]) -> CountingLimiter:
    """Provide a merge-submission limiter that grants permits immediately."""
    return CountingLimiter("merge", events=events)


@pytest.fixture
def merge_request() -> MergeRequest:
    """Provide a request that enforces both build success and review approval."""
    return create_merge_request()


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def sample_pull_request() -> PullRequest:
    """Provide an open, mergeable PullRequest."""
    return create_mock_pull_request()


@pytest.fixture
def sample_review() -> Review:
    """Provide an approving Review."""
    return create_mock_review()


@pytest.fixture
def sample_combined_status() -> CombinedStatus:
    """Provide a successful CombinedStatus."""
    return CombinedStatus(state="success", sha="head-sha", total_count=1)


@pytest.fixture
def sample_merge_result() -> MergeResult:
    """Provide a successful MergeResult."""
    return MergeResult(merged=True, sha="merge-sha", message="Pull Request successfully merged")


# ============================================================================
# Helper Functions
# ============================================================================


def create_merge_request(**kwargs: Any) -> MergeRequest:
    """
    Create a MergeRequest with customizable fields.

    Both readiness requirements are enabled unless overridden.
    """
    defaults: dict[str, Any] = {
        "org": "Clever",
        "repo": "microplane",
        "pr_number": 123,
        "commit_sha": "head-sha",
        "require_review_approval": True,
        "require_build_success": True,
    }
    defaults.update(kwargs)
    return MergeRequest(**defaults)


def create_mock_pull_request(number: int = 123, **kwargs: Any) -> PullRequest:
    """
    Create a PullRequest with customizable fields.

    Args:
        number: Pull request number
        **kwargs: Additional fields to override

    Returns:
        PullRequest object, open and mergeable by default
    """
    defaults: dict[str, Any] = {
        "state": "open",
        "merged": False,
        "mergeable": True,
        "merge_commit_sha": None,
        "head_ref": "feature",
        "head_sha": "head-sha",
        "base_ref": "main",
        "title": "Test PR",
        "draft": False,
        "html_url": f"https://github.com/Clever/microplane/pull/{number}",
    }
    defaults.update(kwargs)
    return PullRequest(number=number, **defaults)


def create_mock_review(state: str = "APPROVED", review_id: int = 1, **kwargs: Any) -> Review:
    """Create a Review in the given state."""
    defaults: dict[str, Any] = {
        "user": "reviewer",
        "submitted_at": datetime(2024, 1, 15, 10, 30, 0, tzinfo=timezone.utc),
    }
    defaults.update(kwargs)
    return Review(id=review_id, state=state, **defaults)


__all__ = [
    # Fixtures (exported for documentation, actual fixtures are auto-discovered)
    "events",
    "mock_client",
    "api_limiter",
    "merge_limiter",
    "merge_request",
    "sample_pull_request",
    "sample_review",
    "sample_combined_status",
    "sample_merge_result",
    # Helper functions
    "create_merge_request",
    "create_mock_pull_request",
    "create_mock_review",
]
