"""Pull request-related data models."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class PullRequest:
    """Point-in-time view of a pull request."""

    number: int
    state: str  # "open", "closed"
    merged: bool
    mergeable: bool | None  # None while GitHub is still computing it
    merge_commit_sha: str | None
    head_ref: str
    head_sha: str
    base_ref: str
    title: str = ""
    draft: bool = False
    html_url: str | None = None


@dataclass(frozen=True)
class Review:
    """Pull request review."""

    id: int
    state: str  # "APPROVED", "CHANGES_REQUESTED", "COMMENTED", "DISMISSED", "PENDING"
    user: str | None = None
    submitted_at: datetime | None = None


@dataclass(frozen=True)
class MergeResult:
    """Result of the merge call."""

    merged: bool
    sha: str | None
    message: str


@dataclass(frozen=True)
class CommitStatus:
    """A single status reported by one CI context."""

    context: str
    state: str
    description: str | None = None


@dataclass(frozen=True)
class CombinedStatus:
    """Aggregate status across every context reported for a commit."""

    state: str  # "success", "pending", "failure", "error"
    sha: str
    total_count: int = 0
    statuses: list[CommitStatus] = field(default_factory=list)
