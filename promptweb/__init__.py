"""Turns a website description into a committed, optionally deployed Next.js repository."""
from .domain import Step, StepStatus
from .exceptions import CommitFailed, InvalidInput, InvalidTransition, PromptWebError, ServiceError
from .pipeline import PipelineConfig, ProjectPipeline, Settings, run_pipeline

__version__ = "0.1.0"

__all__ = [
    'Step',
    'StepStatus',
    'PromptWebError',
    'ServiceError',
    'InvalidInput',
    'CommitFailed',
    'InvalidTransition',
    'PipelineConfig',
    'ProjectPipeline',
    'Settings',
    'run_pipeline',
]
