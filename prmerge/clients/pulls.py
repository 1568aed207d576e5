"""Pull requests resource client."""

from datetime import datetime
from typing import TYPE_CHECKING, Any

from prmerge.exceptions import ServerError
from prmerge.types.pulls import MergeResult, PullRequest, Review

if TYPE_CHECKING:
    from prmerge.transport import AsyncHTTPTransport

REVIEWS_PER_PAGE = 100


class PullsClient:
    """Async client for pull request operations."""

    def __init__(self, transport: "AsyncHTTPTransport") -> None:
        """
        Initialize the pulls client.

        Args:
            transport: Async HTTP transport for making requests
        """
        self.transport = transport

    async def get(self, owner: str, repo: str, number: int) -> PullRequest:
        """
        Get pull request information.

        Args:
            owner: Organization or user owning the repository
            repo: Repository name
            number: Pull request number

        Returns:
            PullRequest snapshot

        Raises:
            NotFoundError: If pull request not found
            ServerError: If the response lacks the head branch
        """
        path = f"/repos/{owner}/{repo}/pulls/{number}"
        data = await self.transport.request(method="GET", path=path)
        try:
            return parse_pull_request(data)
        except (KeyError, TypeError) as e:
            raise ServerError(
                "INVALID_RESPONSE", f"Malformed pull request from {path}: {e!r}"
            ) from e

    async def list_reviews(self, owner: str, repo: str, number: int) -> list[Review]:
        """
        List reviews for a pull request, oldest first.

        Only the first page of up to 100 reviews is fetched.

        Args:
            owner: Organization or user owning the repository
            repo: Repository name
            number: Pull request number

        Returns:
            List of Review objects

        Raises:
            NotFoundError: If pull request not found
        """
        data = await self.transport.request(
            method="GET",
            path=f"/repos/{owner}/{repo}/pulls/{number}/reviews",
            params={"per_page": REVIEWS_PER_PAGE},
        )
        return [parse_review(review) for review in data or []]

    async def merge(self, owner: str, repo: str, number: int) -> MergeResult:
        """
        Merge a pull request.

        No commit title or message is sent, so GitHub's defaults apply.

        Args:
            owner: Organization or user owning the repository
            repo: Repository name
            number: Pull request number

        Returns:
            MergeResult with merged flag, merge commit sha and message

        Raises:
            ValidationError: If GitHub refuses the merge (405, 422)
            ConflictError: If the head branch was modified
            NotFoundError: If pull request not found
        """
        data = await self.transport.request(
            method="PUT",
            path=f"/repos/{owner}/{repo}/pulls/{number}/merge",
            body={},
        )
        return MergeResult(
            merged=bool(data.get("merged", False)),
            sha=data.get("sha"),
            message=data.get("message", ""),
        )


def parse_pull_request(data: dict[str, Any]) -> PullRequest:
    """Parse pull request data from API response."""
    head = data["head"]
    base = data.get("base") or {}
    return PullRequest(
        number=data["number"],
        state=data.get("state", "open"),
        merged=bool(data.get("merged", False)),
        mergeable=data.get("mergeable"),
        merge_commit_sha=data.get("merge_commit_sha"),
        head_ref=head["ref"],
        head_sha=head["sha"],
        base_ref=base.get("ref", ""),
        title=data.get("title", ""),
        draft=bool(data.get("draft", False)),
        html_url=data.get("html_url"),
    )


def parse_review(data: dict[str, Any]) -> Review:
    """Parse review data from API response."""
    submitted_at = None
    if data.get("submitted_at"):
        submitted_at = datetime.fromisoformat(data["submitted_at"].replace("Z", "+00:00"))

    return Review(
        id=data["id"],
        state=data["state"],
        user=(data.get("user") or {}).get("login"),
        submitted_at=submitted_at,
    )
