from abc import ABC, abstractmethod
from typing import Awaitable, Callable, List, Optional, Tuple, Union

from .domain import (
    CommitResult,
    DatabaseProject,
    Deployment,
    DeploymentProject,
    GeneratedFile,
    PageStructure,
    ProjectAnalysis,
    RepositoryHandle,
    Step,
)

# Receives an immutable snapshot of the whole plan after every status change.
ProgressCallback = Callable[[Tuple[Step, ...]], Union[None, Awaitable[None]]]


# =============================================================================
# AI services
# =============================================================================

class ILLMProvider(ABC):
    """Abstract interface for LLM interactions."""

    @abstractmethod
    async def prompt(self, prompt_text: str, system_prompt: str = "", temperature: Optional[float] = None) -> str:
        pass

    @abstractmethod
    async def prompt_json(self, prompt_text: str, system_prompt: str = "", temperature: Optional[float] = None) -> dict:
        pass


class IProjectAnalyzer(ABC):
    """Turns the user's description into a project plan."""

    @abstractmethod
    async def analyze(self, prompt: str) -> ProjectAnalysis:
        """
        Analyze a free-text website description.

        Args:
            prompt: What the user asked for

        Returns:
            ProjectAnalysis with name, pages, features and tech stack
        """
        pass


class ICodeGenerator(ABC):
    """Generates project files from an analysis."""

    @abstractmethod
    async def generate_structure(
        self, analysis: ProjectAnalysis, database: Optional[DatabaseProject] = None
    ) -> List[GeneratedFile]:
        """Generate configuration, layout and shared files."""
        pass

    @abstractmethod
    async def generate_page(
        self,
        page: PageStructure,
        analysis: ProjectAnalysis,
        database: Optional[DatabaseProject] = None,
    ) -> List[GeneratedFile]:
        """Generate the files of one page."""
        pass


# =============================================================================
# Platforms
# =============================================================================

class IRepositoryHost(ABC):
    """Repository hosting plus the content-addressed git object API."""

    @abstractmethod
    async def create_repository(self, name: str, description: str, private: bool = False) -> RepositoryHandle:
        pass

    @abstractmethod
    async def get_branch_sha(self, full_name: str, branch: str) -> str:
        pass

    @abstractmethod
    async def get_commit_tree_sha(self, full_name: str, commit_sha: str) -> str:
        pass

    @abstractmethod
    async def create_blob(self, full_name: str, content: Union[str, bytes]) -> str:
        pass

    @abstractmethod
    async def create_tree(self, full_name: str, base_tree: str, entries: List[dict]) -> str:
        pass

    @abstractmethod
    async def create_commit(self, full_name: str, message: str, tree_sha: str, parents: List[str]) -> str:
        pass

    @abstractmethod
    async def update_ref(self, full_name: str, branch: str, sha: str) -> None:
        pass


class IDatabaseProvisioner(ABC):
    @abstractmethod
    async def create_project(self, name: str) -> DatabaseProject:
        pass

    @abstractmethod
    async def enable_auth(self, project_id: str) -> None:
        pass


class IDeploymentService(ABC):
    @abstractmethod
    async def import_repository(self, repo_web_url: str, name: str) -> DeploymentProject:
        pass

    @abstractmethod
    async def trigger_deployment(self, project: Union[DeploymentProject, str], ref: Optional[str] = None) -> Deployment:
        """Deploys ref (the default branch when None) of the linked repository."""
        pass


class ICommitComposer(ABC):
    @abstractmethod
    async def commit_files(
        self,
        repo: RepositoryHandle,
        files: List[GeneratedFile],
        message: str,
        branch: Optional[str] = None,
    ) -> CommitResult:
        pass
