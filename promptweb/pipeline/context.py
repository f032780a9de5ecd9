"""
Pipeline context management.
============================
Carries what earlier steps produced to the steps that need it.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from ..domain import (
    CommitResult,
    DatabaseProject,
    Deployment,
    DeploymentProject,
    GeneratedFile,
    ProjectAnalysis,
    RepositoryHandle,
)
from ..exceptions import PromptWebError


@dataclass
class PipelineContext:
    """Holds all state during one pipeline run."""

    prompt: str
    backend_needed: bool = False

    analysis: Optional[ProjectAnalysis] = None
    repository: Optional[RepositoryHandle] = None
    database: Optional[DatabaseProject] = None
    commit: Optional[CommitResult] = None
    deployment_project: Optional[DeploymentProject] = None
    deployment: Optional[Deployment] = None

    # setup + structure + page outputs, in the order they were produced
    files: List[GeneratedFile] = field(default_factory=list)

    def require_analysis(self) -> ProjectAnalysis:
        if self.analysis is None:
            raise PromptWebError("Project analysis is not available yet")
        return self.analysis

    def require_repository(self) -> RepositoryHandle:
        if self.repository is None:
            raise PromptWebError("Repository has not been created yet")
        return self.repository

    def add_files(self, files: List[GeneratedFile]) -> int:
        self.files.extend(files)
        return len(files)

    @property
    def result_url(self) -> str:
        """Deployment URL when a deployment ran, otherwise the repository page."""
        if self.deployment is not None and self.deployment.url:
            return self.deployment.url
        return self.require_repository().web_url
