"""Repositories resource client."""

from typing import TYPE_CHECKING, Any

from prmerge.types.pulls import CombinedStatus, CommitStatus

if TYPE_CHECKING:
    from prmerge.transport import AsyncHTTPTransport


class ReposClient:
    """Async client for repository operations."""

    def __init__(self, transport: "AsyncHTTPTransport") -> None:
        self.transport = transport

    async def get_combined_status(self, owner: str, repo: str, ref: str) -> CombinedStatus:
        """
        Get the combined status for a commit.

        Args:
            owner: Organization or user owning the repository
            repo: Repository name
            ref: Commit SHA, branch or tag name

        Returns:
            CombinedStatus whose state is "success", "pending", "failure" or "error"
        """
        data = await self.transport.request(
            method="GET",
            path=f"/repos/{owner}/{repo}/commits/{ref}/status",
        )
        return parse_combined_status(data)


def parse_combined_status(data: dict[str, Any]) -> CombinedStatus:
    """Parse combined status data from API response."""
    return CombinedStatus(
        state=data.get("state", ""),
        sha=data.get("sha", ""),
        total_count=data.get("total_count", 0),
        statuses=[
            CommitStatus(
                context=status.get("context", ""),
                state=status.get("state", ""),
                description=status.get("description"),
            )
            for status in data.get("statuses", [])
        ],
    )
