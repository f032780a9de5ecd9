"""
GitHub adapter.
===============
Repository creation plus the git data API (refs, commits, blobs, trees)
that the commit composer builds one atomic commit from.
"""
import base64
import logging
from typing import Any, Dict, List, Union

from ..domain import RepositoryHandle
from ..interfaces import IRepositoryHost
from .http import ServiceClient

logger = logging.getLogger("services.github")


def encode_content(content: Union[str, bytes]) -> str:
    """Base64-encodes file content, text as UTF-8."""
    raw = content.encode("utf-8") if isinstance(content, str) else content
    return base64.b64encode(raw).decode("ascii")


class GitHubService(ServiceClient, IRepositoryHost):
    platform = "GitHub"
    base_url = "https://api.github.com"

    def __init__(self, token: str, **kwargs):
        kwargs.setdefault("extra_headers", {"Accept": "application/vnd.github+json"})
        super().__init__(token, **kwargs)

    async def get_user(self) -> Dict[str, Any]:
        return await self._request("GET", "/user")

    async def create_repository(self, name: str, description: str, private: bool = False) -> RepositoryHandle:
        """Creates a repository for the authenticated user, initialized with a first commit."""
        logger.info(f"Creating GitHub repository: {name} (private={private})")
        repo = await self._request(
            "POST",
            "/user/repos",
            json_data={
                "name": name,
                "description": description,
                "private": private,
                # auto_init gives the repository a branch to commit on top of
                "auto_init": True,
            },
        )
        return RepositoryHandle.from_dict(repo)

    # Git data API

    async def get_branch_sha(self, full_name: str, branch: str) -> str:
        ref = await self._request("GET", f"/repos/{full_name}/git/ref/heads/{branch}")
        return ref["object"]["sha"]

    async def get_commit_tree_sha(self, full_name: str, commit_sha: str) -> str:
        commit = await self._request("GET", f"/repos/{full_name}/git/commits/{commit_sha}")
        return commit["tree"]["sha"]

    async def create_blob(self, full_name: str, content: Union[str, bytes]) -> str:
        blob = await self._request(
            "POST",
            f"/repos/{full_name}/git/blobs",
            json_data={"content": encode_content(content), "encoding": "base64"},
        )
        return blob["sha"]

    async def create_tree(self, full_name: str, base_tree: str, entries: List[dict]) -> str:
        tree = await self._request(
            "POST",
            f"/repos/{full_name}/git/trees",
            json_data={"base_tree": base_tree, "tree": entries},
        )
        return tree["sha"]

    async def create_commit(self, full_name: str, message: str, tree_sha: str, parents: List[str]) -> str:
        commit = await self._request(
            "POST",
            f"/repos/{full_name}/git/commits",
            json_data={"message": message, "tree": tree_sha, "parents": parents},
        )
        return commit["sha"]

    async def update_ref(self, full_name: str, branch: str, sha: str) -> None:
        await self._request(
            "PATCH",
            f"/repos/{full_name}/git/refs/heads/{branch}",
            json_data={"sha": sha, "force": False},
        )
