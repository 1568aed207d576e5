"""prmerge exception classes."""

from prmerge.types.merge import MergeStatus


class GitHubError(Exception):
    """Base exception for all GitHub API and transport errors."""

    def __init__(
        self, code: str, message: str, status_code: int | None = None
    ) -> None:
        self.code = code
        self.message = message
        self.status_code = status_code
        super().__init__(f"[{code}] {message}")


class ConfigurationError(GitHubError):
    """Raised when client configuration is invalid or missing."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


class AuthenticationError(GitHubError):
    """Raised when the token is missing or rejected."""

    pass


class AuthorizationError(GitHubError):
    """Raised when access is denied."""

    pass


class NotFoundError(GitHubError):
    """Raised when a resource is not found."""

    pass


class ConflictError(GitHubError):
    """Raised on conflicts (head branch modified, merge conflicts, etc.)."""

    pass


class RateLimitedError(GitHubError):
    """Raised when GitHub's own rate limit has been exhausted."""

    def __init__(
        self,
        code: str,
        message: str,
        retry_after: int,
        status_code: int | None = None,
    ) -> None:
        super().__init__(code, message, status_code)
        self.retry_after = retry_after


class ValidationError(GitHubError):
    """Raised on validation errors (422 and other client errors)."""

    pass


class ServerError(GitHubError):
    """Raised on server errors (5xx) and connection failures."""

    pass


class MergeError(Exception):
    """
    Base exception for a merge attempt that did not end merged and cleaned.

    Attributes:
        merged: True if the pull request was merged despite the failure
        merge_commit_sha: The merge commit, when one exists
        status: The MergeStatus a caller should record
        retryable: True if running the same merge later may succeed
    """

    status = MergeStatus.ERROR
    retryable = False

    def __init__(
        self,
        message: str,
        merged: bool = False,
        merge_commit_sha: str | None = None,
    ) -> None:
        self.message = message
        self.merged = merged
        self.merge_commit_sha = merge_commit_sha
        super().__init__(message)


class NotReadyError(MergeError):
    """Raised when a readiness precondition is not met yet."""

    status = MergeStatus.NOT_READY
    retryable = True


class NotMergeableError(NotReadyError):
    """Raised when GitHub reports the pull request as not mergeable."""

    def __init__(self) -> None:
        super().__init__("PR is not mergeable")


class BuildStatusError(NotReadyError):
    """Raised when the combined commit status is not 'success'."""

    def __init__(self, state: str) -> None:
        self.state = state
        super().__init__(f"status was not 'success', instead was '{state}'")


class AwaitingReviewError(NotReadyError):
    """Raised when approval is required and nobody has reviewed yet."""

    def __init__(self) -> None:
        super().__init__("PR awaiting review")


class ReviewNotApprovedError(NotReadyError):
    """Raised when a review is in any state other than APPROVED."""

    def __init__(self, state: str, reviewer: str | None = None) -> None:
        self.state = state
        self.reviewer = reviewer
        super().__init__(f"PR is not approved. Review state is {state}")


class MergeRejectedError(MergeError):
    """Raised when GitHub accepted the merge call but did not merge."""

    status = MergeStatus.REJECTED

    def __init__(self, platform_message: str) -> None:
        self.platform_message = platform_message
        super().__init__(f"failed to merge: {platform_message}")


class BranchCleanupError(MergeError):
    """Raised when the head branch could not be deleted after merging."""

    status = MergeStatus.CLEANUP_FAILED

    def __init__(self, branch: str, merge_commit_sha: str, reason: str) -> None:
        self.branch = branch
        super().__init__(
            f"merged as {merge_commit_sha} but failed to delete branch "
            f"'{branch}': {reason}",
            merged=True,
            merge_commit_sha=merge_commit_sha,
        )
