"""
Step plan and status tracking.
==============================
The plan decides *what* runs; the tracker owns status transitions for
one run and hands observers immutable snapshots.
"""
import inspect
import logging
from dataclasses import replace
from typing import Dict, List, Optional, Tuple

from ..domain import Step, StepStatus
from ..exceptions import InvalidTransition
from ..interfaces import ProgressCallback
from .config import StepIds

logger = logging.getLogger("pipeline.steps")

# id -> (title, description)
STEP_CATALOG: Dict[str, Tuple[str, str]] = {
    StepIds.ANALYZE: ("AI analysis", "Analyzing the prompt"),
    StepIds.REPO: ("Create GitHub repository", "Creating a new repository"),
    StepIds.SETUP: ("Project scaffold", "Adding UI component scaffold files"),
    StepIds.DATABASE: ("Database setup", "Provisioning a Supabase project with auth"),
    StepIds.STRUCTURE: ("Project structure", "Planning configuration, layout and shared files"),
    StepIds.GENERATE: ("Code generation", "Generating code for every page"),
    StepIds.COMMIT: ("Commit to GitHub", "Pushing all files in a single commit"),
    StepIds.DEPLOY: ("Deploy to Vercel", "Linking the repository to Vercel and deploying"),
}

_ALLOWED = {
    StepStatus.PENDING: {StepStatus.IN_PROGRESS},
    StepStatus.IN_PROGRESS: {StepStatus.COMPLETED, StepStatus.FAILED},
}


def _make_step(step_id: str) -> Step:
    title, description = STEP_CATALOG[step_id]
    return Step(id=step_id, title=title, description=description)


def build_step_plan(
    *,
    database_configured: bool,
    deployment_configured: bool,
    backend_needed: bool,
    include_scaffold: bool = False,
) -> Tuple[Step, ...]:
    """
    Builds the ordered step list for one run.

    Optional steps are left out entirely when their integration is not
    configured. The first step starts IN_PROGRESS, all others PENDING.
    """
    ids: List[str] = [StepIds.ANALYZE, StepIds.REPO]
    if include_scaffold:
        ids.append(StepIds.SETUP)
    if backend_needed and database_configured:
        ids.append(StepIds.DATABASE)
    ids.extend([StepIds.STRUCTURE, StepIds.GENERATE, StepIds.COMMIT])
    if deployment_configured:
        ids.append(StepIds.DEPLOY)

    steps = [_make_step(step_id) for step_id in ids]
    steps[0] = replace(steps[0], status=StepStatus.IN_PROGRESS)
    return tuple(steps)


class StepTracker:
    """Applies status transitions to a fixed plan and publishes snapshots."""

    def __init__(self, plan: Tuple[Step, ...], on_update: Optional[ProgressCallback] = None):
        ids = [s.id for s in plan]
        if len(set(ids)) != len(ids):
            raise InvalidTransition(f"Duplicate step ids in plan: {ids}")
        self._steps: List[Step] = list(plan)
        self._index = {step_id: i for i, step_id in enumerate(ids)}
        self._on_update = on_update

    def snapshot(self) -> Tuple[Step, ...]:
        return tuple(self._steps)

    def get(self, step_id: str) -> Step:
        return self._steps[self._position(step_id)]

    def current(self) -> Optional[Step]:
        """The step that is IN_PROGRESS, if any."""
        for step in self._steps:
            if step.status is StepStatus.IN_PROGRESS:
                return step
        return None

    async def publish(self):
        if self._on_update is None:
            return
        result = self._on_update(self.snapshot())
        if inspect.isawaitable(result):
            await result

    async def start(self, step_id: str):
        """Marks a step IN_PROGRESS. A step that already is emits nothing."""
        if self.get(step_id).status is StepStatus.IN_PROGRESS:
            return
        running = self.current()
        if running is not None:
            raise InvalidTransition(f"Cannot start '{step_id}' while '{running.id}' is in progress")
        self._transition(step_id, StepStatus.IN_PROGRESS, None)
        await self.publish()

    async def complete(self, step_id: str, details: Optional[str] = None, start_next: Optional[str] = None):
        """
        Marks a step COMPLETED. With start_next, the following step is
        started in the same snapshot so observers never see a gap.
        """
        self._transition(step_id, StepStatus.COMPLETED, details)
        if start_next is not None:
            self._transition(start_next, StepStatus.IN_PROGRESS, None)
        await self.publish()

    async def fail(self, step_id: str, details: Optional[str] = None):
        self._transition(step_id, StepStatus.FAILED, details)
        await self.publish()

    def _position(self, step_id: str) -> int:
        try:
            return self._index[step_id]
        except KeyError:
            raise InvalidTransition(f"Unknown step: {step_id}") from None

    def _transition(self, step_id: str, status: StepStatus, details: Optional[str]):
        position = self._position(step_id)
        step = self._steps[position]
        if step.status.is_terminal:
            raise InvalidTransition(f"Step '{step_id}' is already {step.status.value}")
        if status not in _ALLOWED[step.status]:
            raise InvalidTransition(
                f"Step '{step_id}' cannot go from {step.status.value} to {status.value}"
            )
        logger.debug(f"{step_id}: {step.status.value} -> {status.value}")
        self._steps[position] = replace(step, status=status, details=details)
