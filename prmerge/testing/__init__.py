"""prmerge testing utilities.

Provides a mock GitHub client, fake limiters and fixtures for testing code
that runs merges.
"""

from prmerge.testing.fixtures import (
    create_merge_request,
    create_mock_pull_request,
    create_mock_review,
)
from prmerge.testing.mock import (
    BlockingLimiter,
    CountingLimiter,
    MockCall,
    MockGitHubClient,
    MockResponse,
)

__all__ = [
    # Mock client
    "MockGitHubClient",
    "MockCall",
    "MockResponse",
    # Limiters
    "CountingLimiter",
    "BlockingLimiter",
    # Helper functions
    "create_merge_request",
    "create_mock_pull_request",
    "create_mock_review",
]
