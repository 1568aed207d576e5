"""GitHub resource clients."""

from prmerge.clients.git import GitClient
from prmerge.clients.pulls import PullsClient
from prmerge.clients.repos import ReposClient

__all__ = [
    "PullsClient",
    "ReposClient",
    "GitClient",
]
