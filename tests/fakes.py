"""In-memory collaborators for pipeline tests."""
import hashlib
from typing import Dict, List, Optional

from promptweb.domain import (
    DatabaseProject,
    Deployment,
    DeploymentProject,
    GeneratedFile,
    PageStructure,
    ProjectAnalysis,
    RepositoryHandle,
)
from promptweb.exceptions import InvalidInput, ServiceError
from promptweb.interfaces import (
    ICodeGenerator,
    IDatabaseProvisioner,
    IDeploymentService,
    IProjectAnalyzer,
    IRepositoryHost,
)


def _sha(*parts) -> str:
    return hashlib.sha1("|".join(str(p) for p in parts).encode("utf-8")).hexdigest()


class FakeRepositoryHost(IRepositoryHost):
    """Keeps refs, commits, trees and blobs in dicts, like a tiny git server."""

    def __init__(self, fail_blob_number: Optional[int] = None, default_branch: str = "main", extra_branches=()):
        self.default_branch = default_branch
        self.extra_branches = tuple(extra_branches)
        self.refs: Dict[str, str] = {}
        self.commits: Dict[str, dict] = {}
        self.trees: Dict[str, dict] = {}
        self.blobs: Dict[str, object] = {}
        self.calls: List[str] = []
        self.repositories: List[RepositoryHandle] = []
        self.fail_blob_number = fail_blob_number
        self._blob_count = 0

    def seed(self, full_name: str, branch: str = "main") -> str:
        tree = _sha("tree", full_name)
        self.trees[tree] = {}
        commit = _sha("commit", full_name)
        self.commits[commit] = {"tree": tree, "parents": [], "message": "Initial commit"}
        self.refs[f"{full_name}:{branch}"] = commit
        return commit

    def tip(self, full_name: str, branch: str = "main") -> str:
        return self.refs[f"{full_name}:{branch}"]

    async def create_repository(self, name, description, private=False):
        self.calls.append("create_repository")
        repo = RepositoryHandle(
            name=name,
            full_name=f"octocat/{name}",
            clone_url=f"https://github.com/octocat/{name}.git",
            web_url=f"https://github.com/octocat/{name}",
            default_branch=self.default_branch,
        )
        self.repositories.append(repo)
        for branch in (self.default_branch,) + self.extra_branches:
            self.seed(repo.full_name, branch)
        return repo

    async def get_branch_sha(self, full_name, branch):
        self.calls.append("get_branch_sha")
        try:
            return self.refs[f"{full_name}:{branch}"]
        except KeyError:
            raise ServiceError("GitHub", "Not Found", status_code=404) from None

    async def get_commit_tree_sha(self, full_name, commit_sha):
        self.calls.append("get_commit_tree_sha")
        return self.commits[commit_sha]["tree"]

    async def create_blob(self, full_name, content):
        self._blob_count += 1
        self.calls.append("create_blob")
        if self._blob_count == self.fail_blob_number:
            raise ServiceError("GitHub", "Server Error", status_code=500)
        sha = _sha("blob", content)
        self.blobs[sha] = content
        return sha

    async def create_tree(self, full_name, base_tree, entries):
        self.calls.append("create_tree")
        tree = dict(self.trees[base_tree])
        tree.update({e["path"]: e["sha"] for e in entries})
        sha = _sha("tree", sorted(tree.items()))
        self.trees[sha] = tree
        return sha

    async def create_commit(self, full_name, message, tree_sha, parents):
        self.calls.append("create_commit")
        sha = _sha("commit", message, tree_sha, parents)
        self.commits[sha] = {"tree": tree_sha, "parents": list(parents), "message": message}
        return sha

    async def update_ref(self, full_name, branch, sha):
        self.calls.append("update_ref")
        self.refs[f"{full_name}:{branch}"] = sha

    def files_at(self, full_name: str, branch: str = "main") -> Dict[str, object]:
        tree = self.trees[self.commits[self.tip(full_name, branch)]["tree"]]
        return {path: self.blobs[sha] for path, sha in tree.items()}


class FakeAnalyzer(IProjectAnalyzer):
    def __init__(self, analysis: ProjectAnalysis):
        self.analysis = analysis
        self.prompts: List[str] = []

    async def analyze(self, prompt):
        self.prompts.append(prompt)
        return self.analysis


class FakeCodeGenerator(ICodeGenerator):
    def __init__(self):
        self.databases = []

    async def generate_structure(self, analysis, database=None):
        self.databases.append(database)
        return [
            GeneratedFile("package.json", '{"name": "%s"}' % analysis.project_name),
            GeneratedFile("src/app/layout.tsx", "export default function RootLayout() {}"),
        ]

    async def generate_page(self, page: PageStructure, analysis, database=None):
        route = page.path.strip("/")
        path = f"src/app/{route}/page.tsx" if route else "src/app/page.tsx"
        return [GeneratedFile(path, f"// {page.name}")]


class FakeDatabase(IDatabaseProvisioner):
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.created: List[str] = []
        self.auth_enabled: List[str] = []

    async def create_project(self, name):
        if self.fail:
            raise ServiceError("Supabase", "Organization limit reached", status_code=402)
        self.created.append(name)
        return DatabaseProject(
            id="abcdefghijklmnop",
            name=name,
            connection_url="https://abcdefghijklmnop.supabase.co",
            public_key="anon-key",
            private_key="service-key",
        )

    async def enable_auth(self, project_id):
        self.auth_enabled.append(project_id)


class FakeDeployment(IDeploymentService):
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.imported: List[str] = []
        self.refs: List[Optional[str]] = []

    async def import_repository(self, repo_web_url, name):
        if self.fail:
            raise InvalidInput("GitHub integration is not installed for this Vercel team")
        self.imported.append(repo_web_url)
        return DeploymentProject(id="prj_123", name=name, repo_id=42)

    async def trigger_deployment(self, project, ref=None):
        self.refs.append(ref)
        return Deployment(id="dpl_1", url=f"https://{project.name}.vercel.app")
