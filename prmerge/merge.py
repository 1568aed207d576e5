"""
Merge one open pull request once it is ready.

``merge()`` fetches the pull request, runs the readiness checks, merges it
and deletes its head branch. Two caller-owned limiters throttle it:

- ``api_limiter`` bounds calls to GitHub; one permit is taken before every call.
- ``merge_limiter`` bounds how many merges are handed to CI per unit of time;
  one permit is taken before the merge call only.

Failures are raised, never retried:

- ``GitHubError`` for transport/API failures (unchanged from the client)
- ``NotReadyError`` subclasses when a precondition is not met yet
- ``MergeRejectedError`` when GitHub answered the merge call without merging
- ``BranchCleanupError`` when the merge happened but the branch deletion failed

Callers that record run state can turn any of them into a failed
``MergeOutcome`` with ``MergeOutcome.from_error()``.
"""

import asyncio
from collections.abc import Sequence
from typing import TYPE_CHECKING

from prmerge.checks import DEFAULT_CHECKS, Check, MergeContext, evaluate
from prmerge.exceptions import (
    BranchCleanupError,
    GitHubError,
    MergeRejectedError,
    NotFoundError,
    ValidationError,
)
from prmerge.logging import get_logger
from prmerge.throttle import RateLimiter
from prmerge.types.merge import MergeOutcome, MergeRequest, MergeStatus

if TYPE_CHECKING:
    from prmerge.client import GitHubClient

logger = get_logger()

# GitHub answers 422 with this message when the ref is already gone
_MISSING_REF_MESSAGE = "reference does not exist"


async def merge(
    request: MergeRequest,
    client: "GitHubClient",
    api_limiter: RateLimiter,
    merge_limiter: RateLimiter,
    *,
    timeout: float | None = None,
    checks: Sequence[Check] = DEFAULT_CHECKS,
) -> MergeOutcome:
    """
    Merge a pull request if it passes every readiness check.

    Args:
        request: Which pull request to merge and which checks to enforce
        client: GitHub client
        api_limiter: Limiter for GitHub calls, shared between invocations
        merge_limiter: Limiter for merge calls, shared between invocations
        timeout: Deadline in seconds for the whole invocation (optional)
        checks: Readiness checks to run, in order

    Returns:
        MergeOutcome with success=True and the merge commit SHA, either from
        this call or from an earlier merge of the same pull request

    Raises:
        GitHubError: If a GitHub call fails
        NotReadyError: If the pull request is not ready to merge
        MergeRejectedError: If GitHub did not merge the pull request
        BranchCleanupError: If the head branch could not be deleted after merging
        TimeoutError: If the deadline passed
        asyncio.CancelledError: If the calling task was cancelled
    """
    if timeout is None:
        return await _merge(request, client, api_limiter, merge_limiter, checks)

    async with asyncio.timeout(timeout):
        return await _merge(request, client, api_limiter, merge_limiter, checks)


async def _merge(
    request: MergeRequest,
    client: "GitHubClient",
    api_limiter: RateLimiter,
    merge_limiter: RateLimiter,
    checks: Sequence[Check],
) -> MergeOutcome:
    ctx = MergeContext(request=request, client=client, api_limiter=api_limiter)

    outcome = await evaluate(ctx, checks)
    if outcome is not None:
        return outcome

    return await execute_merge(ctx, merge_limiter)


async def execute_merge(ctx: MergeContext, merge_limiter: RateLimiter) -> MergeOutcome:
    """
    Merge the pull request and delete its head branch.

    Only called once every readiness check has passed.
    """
    req = ctx.request
    # captured before merging; the branch may change once the PR is closed
    head_ref = ctx.pull_request.head_ref

    await merge_limiter.acquire()
    await ctx.api_limiter.acquire()
    logger.info(f"merging {req.slug}")
    result = await ctx.client.pulls.merge(req.org, req.repo, req.pr_number)

    if not result.merged:
        raise MergeRejectedError(result.message)

    merge_sha = result.sha or ""
    logger.info(f"{req.slug} merged as {merge_sha}")

    await ctx.api_limiter.acquire()
    await delete_head_branch(ctx, head_ref, merge_sha)

    return MergeOutcome(success=True, merge_commit_sha=merge_sha, status=MergeStatus.MERGED)


async def delete_head_branch(ctx: MergeContext, head_ref: str, merge_sha: str) -> None:
    """
    Delete ``heads/<head_ref>``.

    A branch that no longer exists (404, or 422 "Reference does not exist")
    counts as deleted; repositories that delete head branches on merge
    remove it before we get here.

    Raises:
        BranchCleanupError: If the deletion failed for any other reason
    """
    req = ctx.request
    try:
        await ctx.client.git.delete_ref(req.org, req.repo, f"heads/{head_ref}")
    except NotFoundError:
        logger.info(f"{req.slug} branch '{head_ref}' was already deleted")
    except ValidationError as e:
        if _MISSING_REF_MESSAGE not in e.message.lower():
            raise BranchCleanupError(head_ref, merge_sha, str(e)) from e
        logger.info(f"{req.slug} branch '{head_ref}' was already deleted")
    except GitHubError as e:
        raise BranchCleanupError(head_ref, merge_sha, str(e)) from e
    else:
        logger.info(f"{req.slug} deleted branch '{head_ref}'")
