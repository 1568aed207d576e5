#!/usr/bin/env python3
"""
Merge a batch of pull requests under shared rate limits.

Reads a JSON list of merge requests, for example:

    [{"org": "Clever", "repo": "microplane", "pr_number": 123,
      "commit_sha": "0a1b2c3", "require_review_approval": true,
      "require_build_success": true}]

and merges them concurrently, one task per repository, while every task
borrows the same two limiters.

Run with: GITHUB_API_TOKEN=... python examples/merge_prs.py requests.json
"""

import asyncio
import json
import logging
import sys

from prmerge import (
    GitHubClient,
    IntervalRateLimiter,
    MergeOutcome,
    MergeRequest,
    configure_logging,
    merge,
)


async def merge_one(
    request: MergeRequest,
    client: GitHubClient,
    api_limiter: IntervalRateLimiter,
    merge_limiter: IntervalRateLimiter,
) -> MergeOutcome:
    """Merge one pull request and turn any failure into a recorded outcome."""
    try:
        return await merge(request, client, api_limiter, merge_limiter, timeout=600)
    except Exception as e:
        return MergeOutcome.from_error(e)


async def main(path: str) -> int:
    with open(path) as f:
        requests = [MergeRequest(**item) for item in json.load(f)]

    # 10 GitHub calls per second, 4 merges per minute handed to CI
    api_limiter = IntervalRateLimiter.from_rate(10, name="github")
    merge_limiter = IntervalRateLimiter.per_minute(4, name="merges")

    async with GitHubClient.from_env() as client:
        outcomes = await asyncio.gather(
            *(merge_one(r, client, api_limiter, merge_limiter) for r in requests)
        )

    for request, outcome in zip(requests, outcomes):
        print(f"{request.slug}: {json.dumps(outcome.to_dict())}")

    return 0 if all(o.success for o in outcomes) else 1


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(2)

    configure_logging(level=logging.INFO)
    sys.exit(asyncio.run(main(sys.argv[1])))
