"""Pipeline module for prompt-to-website generation."""
from .config import PipelineConfig, Settings, FileNames, StepIds, Limits
from .logger import PipelineLogger
from .context import PipelineContext
from .artifacts import ArtifactManager
from .detector import needs_backend
from .steps import StepTracker, build_step_plan
from .commit import CommitComposer
from .orchestrator import ProjectPipeline, run_pipeline

__all__ = [
    'PipelineConfig',
    'Settings',
    'FileNames',
    'StepIds',
    'Limits',
    'PipelineLogger',
    'PipelineContext',
    'ArtifactManager',
    'needs_backend',
    'StepTracker',
    'build_step_plan',
    'CommitComposer',
    'ProjectPipeline',
    'run_pipeline',
]
