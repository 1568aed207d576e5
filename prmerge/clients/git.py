"""Git database resource client."""

from typing import TYPE_CHECKING
from urllib.parse import quote

if TYPE_CHECKING:
    from prmerge.transport import AsyncHTTPTransport


class GitClient:
    """Async client for git reference operations."""

    def __init__(self, transport: "AsyncHTTPTransport") -> None:
        self.transport = transport

    async def delete_ref(self, owner: str, repo: str, ref: str) -> None:
        """
        Delete a git reference.

        Args:
            owner: Organization or user owning the repository
            repo: Repository name
            ref: Reference without the "refs/" prefix, e.g. "heads/my-branch"

        Raises:
            ValidationError: If the reference does not exist (422)
        """
        await self.transport.request(
            method="DELETE",
            path=f"/repos/{owner}/{repo}/git/refs/{quote(ref, safe='/')}",
        )
