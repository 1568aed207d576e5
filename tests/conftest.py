"""Shared fixtures for the prmerge test suite."""

from prmerge.testing.conftest import (  # noqa: F401
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
