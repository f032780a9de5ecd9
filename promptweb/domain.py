import re
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union


def _unique(values) -> Tuple[str, ...]:
    """Drops duplicates and blanks while keeping first-seen order."""
    seen = []
    for value in values or []:
        text = str(value).strip()
        if text and text not in seen:
            seen.append(text)
    return tuple(seen)


def slugify_project_name(name: str) -> str:
    """Turns a free-form name into a kebab-case identifier usable as a repo name."""
    slug = re.sub(r"[^a-z0-9]+", "-", (name or "").lower()).strip("-")
    slug = re.sub(r"-{2,}", "-", slug)[:100].strip("-")
    return slug or f"generated-website-{int(time.time() * 1000)}"


class StepStatus(Enum):
    """Lifecycle of a pipeline step."""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (StepStatus.COMPLETED, StepStatus.FAILED)


@dataclass(frozen=True)
class Step:
    """One unit of pipeline work with an observable status."""
    id: str
    title: str
    description: str
    status: StepStatus = StepStatus.PENDING
    details: Optional[str] = None

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "details": self.details,
        }


class ComponentKind(Enum):
    COMPONENT = "component"
    LAYOUT = "layout"
    PAGE = "page"

    @staticmethod
    def parse(value) -> "ComponentKind":
        try:
            return ComponentKind(str(value).strip().lower())
        except ValueError:
            return ComponentKind.COMPONENT


@dataclass(frozen=True)
class ComponentStructure:
    """A UI component planned for a page."""
    name: str
    kind: ComponentKind
    description: str
    props: Optional[Tuple[str, ...]] = None

    @staticmethod
    def from_dict(d):
        props = d.get("props")
        return ComponentStructure(
            name=d.get("name", "Component"),
            kind=ComponentKind.parse(d.get("type", d.get("kind", "component"))),
            description=d.get("description", ""),
            props=tuple(str(p) for p in props) if isinstance(props, list) else None,
        )

    def to_dict(self):
        d = {"name": self.name, "type": self.kind.value, "description": self.description}
        if self.props is not None:
            d["props"] = list(self.props)
        return d


@dataclass(frozen=True)
class PageStructure:
    """A single route of the generated website."""
    name: str
    path: str
    description: str
    components: Tuple[ComponentStructure, ...] = ()
    features: Tuple[str, ...] = ()

    @staticmethod
    def from_dict(d):
        path = str(d.get("path") or "/").strip()
        if not path.startswith("/"):
            path = "/" + path
        return PageStructure(
            name=d.get("name", "Page"),
            path=path,
            description=d.get("description", ""),
            components=tuple(
                ComponentStructure.from_dict(c) for c in d.get("components", []) if isinstance(c, dict)
            ),
            features=_unique(d.get("features")),
        )

    def to_dict(self):
        return {
            "name": self.name,
            "path": self.path,
            "description": self.description,
            "components": [c.to_dict() for c in self.components],
            "features": list(self.features),
        }


@dataclass(frozen=True)
class ProjectAnalysis:
    """
    The output of the analysis step.
    Produced once per run and read by every later step.
    """
    project_name: str
    description: str
    pages: Tuple[PageStructure, ...] = ()
    features: Tuple[str, ...] = ()
    tech_stack: Tuple[str, ...] = ()

    @staticmethod
    def from_dict(d):
        return ProjectAnalysis(
            project_name=slugify_project_name(d.get("projectName", d.get("project_name", ""))),
            description=d.get("description", ""),
            pages=tuple(PageStructure.from_dict(p) for p in d.get("pages", []) if isinstance(p, dict)),
            features=_unique(d.get("features")),
            tech_stack=_unique(d.get("techStack", d.get("tech_stack"))),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "projectName": self.project_name,
            "description": self.description,
            "pages": [p.to_dict() for p in self.pages],
            "features": list(self.features),
            "techStack": list(self.tech_stack),
        }


@dataclass
class GeneratedFile:
    """A file produced by code generation, ready to be committed."""
    file_path: str
    content: Union[str, bytes]
    description: str = ""

    @staticmethod
    def from_dict(d):
        return GeneratedFile(
            file_path=str(d.get("filePath", d.get("file_path", ""))).lstrip("/"),
            content=d.get("content", ""),
            description=d.get("description", ""),
        )

    def to_dict(self):
        return {"filePath": self.file_path, "content": self.content, "description": self.description}


@dataclass(frozen=True)
class RepositoryHandle:
    name: str
    full_name: str
    clone_url: str
    web_url: str
    default_branch: str = "main"

    @staticmethod
    def from_dict(d):
        return RepositoryHandle(
            name=d["name"],
            full_name=d["full_name"],
            clone_url=d.get("clone_url", ""),
            web_url=d["html_url"],
            default_branch=d.get("default_branch") or "main",
        )


@dataclass(frozen=True)
class CommitResult:
    sha: str
    tree_sha: str
    parent_sha: str
    branch: str
    file_count: int


@dataclass(frozen=True)
class DatabaseProject:
    """A provisioned database project and the credentials the generated site needs."""
    id: str
    name: str
    connection_url: str
    public_key: str = ""
    private_key: str = ""


@dataclass(frozen=True)
class DeploymentProject:
    id: str
    name: str
    repo_id: Optional[Union[int, str]] = None


@dataclass(frozen=True)
class Deployment:
    id: str
    url: str


@dataclass
class CommitPlan:
    """The (path, content) pairs that go into one commit."""
    entries: List[Tuple[str, Union[str, bytes]]] = field(default_factory=list)

    @staticmethod
    def from_files(files: List[GeneratedFile]) -> "CommitPlan":
        """One entry per file, in input order. Repeated paths are kept; the tree resolves them."""
        return CommitPlan(entries=[(f.file_path, f.content) for f in files])

    def __len__(self):
        return len(self.entries)
