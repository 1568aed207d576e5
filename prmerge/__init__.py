"""prmerge - merge ready GitHub pull requests under shared rate limits."""

from prmerge.client import GitHubClient
from prmerge.config import GitHubConfig, endpoints_for
from prmerge.exceptions import (
    AuthenticationError,
    AuthorizationError,
    AwaitingReviewError,
    BranchCleanupError,
    BuildStatusError,
    ConfigurationError,
    ConflictError,
    GitHubError,
    MergeError,
    MergeRejectedError,
    NotFoundError,
    NotMergeableError,
    NotReadyError,
    RateLimitedError,
    ReviewNotApprovedError,
    ServerError,
    ValidationError,
)
from prmerge.logging import configure_logging, get_logger
from prmerge.merge import merge
from prmerge.throttle import IntervalRateLimiter, RateLimiter
from prmerge.types import MergeOutcome, MergeRequest, MergeStatus

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Merge step
    "merge",
    "MergeRequest",
    "MergeOutcome",
    "MergeStatus",
    # Throttling
    "RateLimiter",
    "IntervalRateLimiter",
    # Client
    "GitHubClient",
    "GitHubConfig",
    "endpoints_for",
    # Exceptions
    "GitHubError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "ConflictError",
    "RateLimitedError",
    "ValidationError",
    "ServerError",
    "ConfigurationError",
    "MergeError",
    "NotReadyError",
    "NotMergeableError",
    "BuildStatusError",
    "AwaitingReviewError",
    "ReviewNotApprovedError",
    "MergeRejectedError",
    "BranchCleanupError",
    # Logging
    "configure_logging",
    "get_logger",
]
