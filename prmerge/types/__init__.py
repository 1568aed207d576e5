"""prmerge type definitions.

This module exports all data model types used by the package.
"""

from prmerge.types.merge import MergeOutcome, MergeRequest, MergeStatus
from prmerge.types.pulls import (
    CombinedStatus,
    CommitStatus,
    MergeResult,
    PullRequest,
    Review,
)

__all__ = [
    # Merge step
    "MergeRequest",
    "MergeOutcome",
    "MergeStatus",
    # Hosting API views
    "PullRequest",
    "Review",
    "MergeResult",
    "CombinedStatus",
    "CommitStatus",
]
