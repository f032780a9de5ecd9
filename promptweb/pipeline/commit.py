"""
Atomic multi-file commits.
==========================
Builds one commit from blobs, a tree and a commit object, and only then
moves the branch ref. Objects created before a failure stay unreferenced.
"""
import asyncio
import logging
from typing import List, Optional

from ..domain import CommitPlan, CommitResult, GeneratedFile, RepositoryHandle
from ..exceptions import CommitFailed, InvalidInput
from ..interfaces import ICommitComposer, IRepositoryHost
from .config import Limits

logger = logging.getLogger("pipeline.commit")

REGULAR_FILE_MODE = "100644"


class CommitComposer(ICommitComposer):
    """Commits a set of files to a hosted repository as a single commit."""

    def __init__(self, host: IRepositoryHost, max_concurrency: int = Limits.MAX_BLOB_CONCURRENCY):
        self.host = host
        self.max_concurrency = max_concurrency

    async def commit_files(
        self,
        repo: RepositoryHandle,
        files: List[GeneratedFile],
        message: str,
        branch: Optional[str] = None,
    ) -> CommitResult:
        """
        Commits every file on top of the branch tip.

        Args:
            repo: Target repository
            files: Files in commit order; repeated paths are all sent and the tree keeps the last
            message: Commit message
            branch: Branch to advance (defaults to the repository's default branch)

        Returns:
            CommitResult describing the new commit

        Raises:
            CommitFailed: if any step fails; the branch ref is left as it was
        """
        plan = CommitPlan.from_files(files)
        if not len(plan):
            raise InvalidInput("Nothing to commit")

        branch = branch or repo.default_branch
        full_name = repo.full_name
        logger.info(f"Committing {len(plan)} files to {full_name}/{branch}")

        parent_sha = await self._run("resolve branch", self.host.get_branch_sha(full_name, branch))
        base_tree = await self._run("resolve tree", self.host.get_commit_tree_sha(full_name, parent_sha))
        blob_shas = await self._run("upload blobs", self._upload_blobs(full_name, plan))

        entries = [
            {"path": path, "mode": REGULAR_FILE_MODE, "type": "blob", "sha": sha}
            for (path, _), sha in zip(plan.entries, blob_shas)
        ]
        tree_sha = await self._run("create tree", self.host.create_tree(full_name, base_tree, entries))
        commit_sha = await self._run(
            "create commit", self.host.create_commit(full_name, message, tree_sha, [parent_sha])
        )
        # Moving the ref publishes the commit, so it has to come last.
        await self._run("update ref", self.host.update_ref(full_name, branch, commit_sha))

        logger.info(f"Committed {commit_sha[:Limits.SHORT_SHA_LENGTH]} to {full_name}/{branch}")
        return CommitResult(
            sha=commit_sha,
            tree_sha=tree_sha,
            parent_sha=parent_sha,
            branch=branch,
            file_count=len(plan),
        )

    async def _upload_blobs(self, full_name: str, plan: CommitPlan) -> List[str]:
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def upload(content):
            async with semaphore:
                return await self.host.create_blob(full_name, content)

        return await asyncio.gather(*(upload(content) for _, content in plan.entries))

    async def _run(self, stage: str, awaitable):
        try:
            return await awaitable
        except CommitFailed:
            raise
        except Exception as e:
            logger.error(f"Commit {stage} failed: {e}")
            raise CommitFailed(str(e), stage=stage) from e
