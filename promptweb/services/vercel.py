"""
Vercel adapter.
===============
Links a GitHub repository to a Vercel project and triggers a production build.
"""
import logging
import re
from typing import Optional, Tuple, Union

from ..domain import Deployment, DeploymentProject
from ..exceptions import InvalidInput
from ..interfaces import IDeploymentService
from ..pipeline.config import Defaults
from .http import ServiceClient

logger = logging.getLogger("services.vercel")

_GITHUB_REPO_RE = re.compile(r"github\.com[/:]([^/\s]+)/([^/\s?#]+)")


def parse_github_url(repo_url: str) -> Tuple[str, str]:
    """Returns (owner, repo) for a GitHub web or clone URL."""
    match = _GITHUB_REPO_RE.search(repo_url or "")
    if not match:
        raise InvalidInput(f"Invalid GitHub repository URL: {repo_url!r}")
    owner, repo = match.groups()
    if repo.endswith(".git"):
        repo = repo[: -len(".git")]
    if not repo:
        raise InvalidInput(f"Invalid GitHub repository URL: {repo_url!r}")
    return owner, repo


def normalize_url(url: str) -> str:
    if not url:
        return ""
    return url if url.startswith(("http://", "https://")) else f"https://{url}"


class VercelService(ServiceClient, IDeploymentService):
    platform = "Vercel"
    base_url = "https://api.vercel.com"

    # The generator emits Next.js projects
    FRAMEWORK = "nextjs"
    BUILD_SETTINGS = {
        "installCommand": "npm install",
        "buildCommand": "npm run build",
        "devCommand": "npm run dev",
    }

    async def import_repository(self, repo_web_url: str, name: str = "") -> DeploymentProject:
        """Creates a Vercel project connected to the given GitHub repository."""
        owner, repo = parse_github_url(repo_web_url)
        project_name = name or repo
        logger.info(f"Importing GitHub repository {owner}/{repo} into Vercel as {project_name}")

        payload = {
            "name": project_name,
            "framework": self.FRAMEWORK,
            "gitRepository": {"type": "github", "repo": f"{owner}/{repo}"},
        }
        payload.update(self.BUILD_SETTINGS)
        project = await self._request("POST", "/v10/projects", json_data=payload)

        link = project.get("link") or {}
        return DeploymentProject(
            id=project["id"],
            name=project.get("name", project_name),
            repo_id=link.get("repoId"),
        )

    async def trigger_deployment(self, project: Union[DeploymentProject, str], ref: Optional[str] = None) -> Deployment:
        """Starts a production deployment of the project's linked repository."""
        if isinstance(project, DeploymentProject):
            project_id, project_name, repo_id = project.id, project.name, project.repo_id
        else:
            project_id, project_name, repo_id = project, project, None
        logger.info(f"Triggering deployment for project: {project_id}")

        git_source = {"type": "github", "ref": ref or Defaults.BRANCH}
        if repo_id is not None:
            git_source["repoId"] = repo_id
        deployment = await self._request(
            "POST",
            "/v13/deployments",
            json_data={
                "name": project_name,
                "project": project_id,
                "target": "production",
                "gitSource": git_source,
            },
        )
        return Deployment(id=deployment.get("id", ""), url=normalize_url(deployment.get("url", "")))
