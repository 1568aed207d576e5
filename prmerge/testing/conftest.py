"""
Pytest plugin for prmerge testing fixtures.

To use these fixtures in your tests, add this to your conftest.py:

    pytest_plugins = ["prmerge.testing.conftest"]
"""

# Re-export all fixtures for pytest auto-discovery
from prmerge.testing.fixtures import (
    api_limiter,
    events,
    merge_limiter,
    merge_request,
    mock_client,
    sample_combined_status,
    sample_merge_result,
    sample_pull_request,
    sample_review,
)

__all__ = [
    "events",
    "mock_client",
    "api_limiter",
    "merge_limiter",
    "merge_request",
    "sample_pull_request",
    "sample_review",
    "sample_combined_status",
    "sample_merge_result",
]
