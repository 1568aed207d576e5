"""Merge step input and outcome models."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class MergeStatus(str, Enum):
    """How a merge invocation ended."""

    MERGED = "merged"
    ALREADY_MERGED = "already_merged"
    NOT_READY = "not_ready"
    REJECTED = "rejected"
    CLEANUP_FAILED = "cleanup_failed"
    ERROR = "error"


@dataclass(frozen=True)
class MergeRequest:
    """
    Everything needed to merge one pull request.

    Produced by the upstream push step and never modified afterwards.
    """

    org: str
    repo: str
    pr_number: int
    commit_sha: str  # head commit, used to look up the combined status
    require_review_approval: bool = False
    require_build_success: bool = False

    @property
    def slug(self) -> str:
        """Short form used in log messages, e.g. "Clever/microplane#123"."""
        return f"{self.org}/{self.repo}#{self.pr_number}"


@dataclass(frozen=True)
class MergeOutcome:
    """Result of one merge invocation."""

    success: bool
    merge_commit_sha: str | None = None
    status: MergeStatus = MergeStatus.MERGED
    error: str | None = None

    @property
    def merged(self) -> bool:
        """True if the pull request is merged on GitHub."""
        return self.success or self.status == MergeStatus.CLEANUP_FAILED

    @classmethod
    def from_error(cls, error: Exception) -> "MergeOutcome":
        """
        Build the failed outcome a caller records for a raised error.

        Merge errors keep their status and any merge commit; every other
        exception is recorded as an infrastructure error.
        """
        status = getattr(error, "status", MergeStatus.ERROR)
        if not isinstance(status, MergeStatus):
            status = MergeStatus.ERROR
        return cls(
            success=False,
            merge_commit_sha=getattr(error, "merge_commit_sha", None),
            status=status,
            error=str(error),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serialisable dictionary."""
        return {
            "success": self.success,
            "mergeCommitSha": self.merge_commit_sha,
            "status": self.status.value,
            "error": self.error,
        }
