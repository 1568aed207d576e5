"""
Readiness checks run before a pull request is merged.

Each check is an async function taking the shared MergeContext. A check
returns None to let evaluation continue, returns a MergeOutcome to finish
the invocation early with that outcome, or raises a NotReadyError. Checks
that talk to GitHub take one API-call permit right before the call.
"""

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from prmerge.exceptions import (
    AwaitingReviewError,
    BuildStatusError,
    NotMergeableError,
    ReviewNotApprovedError,
)
from prmerge.logging import get_logger
from prmerge.throttle import RateLimiter
from prmerge.types.merge import MergeOutcome, MergeRequest, MergeStatus
from prmerge.types.pulls import CombinedStatus, PullRequest, Review

if TYPE_CHECKING:
    from prmerge.client import GitHubClient

logger = get_logger("checks")

STATUS_SUCCESS = "success"
REVIEW_APPROVED = "APPROVED"


@dataclass
class MergeContext:
    """
    State private to one merge invocation.

    The GitHub views are filled in by the checks that fetch them and are
    read-only afterwards.
    """

    request: MergeRequest
    client: "GitHubClient"
    api_limiter: RateLimiter
    pull: PullRequest | None = None
    status: CombinedStatus | None = None
    reviews: list[Review] | None = None

    @property
    def pull_request(self) -> PullRequest:
        """The fetched pull request; fetch_pull_request must have run."""
        if self.pull is None:
            raise RuntimeError("pull request has not been fetched yet")
        return self.pull


Check = Callable[[MergeContext], Awaitable[MergeOutcome | None]]


async def fetch_pull_request(ctx: MergeContext) -> None:
    """Fetch the pull request snapshot. API errors propagate unchanged."""
    req = ctx.request
    await ctx.api_limiter.acquire()
    ctx.pull = await ctx.client.pulls.get(req.org, req.repo, req.pr_number)
    return None


async def check_already_merged(ctx: MergeContext) -> MergeOutcome | None:
    """Finish successfully if an earlier run already merged the pull request."""
    pull = ctx.pull_request
    if not pull.merged:
        return None

    logger.info(f"{ctx.request.slug} already merged as {pull.merge_commit_sha}")
    return MergeOutcome(
        success=True,
        merge_commit_sha=pull.merge_commit_sha,
        status=MergeStatus.ALREADY_MERGED,
    )


async def check_mergeable(ctx: MergeContext) -> None:
    """Fail unless GitHub reports the pull request as mergeable."""
    # mergeable is None while GitHub is still computing it
    if not ctx.pull_request.mergeable:
        raise NotMergeableError()
    return None


async def check_build_status(ctx: MergeContext) -> None:
    """
    Fetch the combined status of the head commit.

    The state must be "success" when the request requires a green build;
    otherwise the status is fetched and ignored.
    """
    req = ctx.request
    await ctx.api_limiter.acquire()
    ctx.status = await ctx.client.repos.get_combined_status(req.org, req.repo, req.commit_sha)

    if req.require_build_success and ctx.status.state != STATUS_SUCCESS:
        raise BuildStatusError(ctx.status.state)
    return None


async def check_review_approval(ctx: MergeContext) -> None:
    """
    Fetch the reviews of the pull request.

    When approval is required there must be at least one review and every
    review must be APPROVED; the first one that is not ends the check.
    """
    req = ctx.request
    await ctx.api_limiter.acquire()
    ctx.reviews = await ctx.client.pulls.list_reviews(req.org, req.repo, req.pr_number)

    if not req.require_review_approval:
        return None

    if not ctx.reviews:
        raise AwaitingReviewError()

    for review in ctx.reviews:
        if review.state != REVIEW_APPROVED:
            raise ReviewNotApprovedError(review.state, review.user)
    return None


DEFAULT_CHECKS: tuple[Check, ...] = (
    fetch_pull_request,
    check_already_merged,
    check_mergeable,
    check_build_status,
    check_review_approval,
)


async def evaluate(ctx: MergeContext, checks: Sequence[Check] = DEFAULT_CHECKS) -> MergeOutcome | None:
    """
    Run checks in order until one finishes the invocation.

    Args:
        ctx: Context of the current invocation
        checks: Checks to run, in order

    Returns:
        The outcome of the check that short-circuited, or None if the pull
        request is ready to merge

    Raises:
        NotReadyError: If a precondition is not met
        GitHubError: If a GitHub call fails
    """
    for check in checks:
        outcome = await check(ctx)
        if outcome is not None:
            return outcome
        logger.debug(f"{ctx.request.slug} passed {getattr(check, '__name__', check)}")
    return None
