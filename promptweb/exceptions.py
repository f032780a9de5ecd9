"""
Error taxonomy for the generation pipeline.
===========================================
Adapters raise these immediately; the orchestrator marks the running
step as failed and re-raises the same instance.
"""
from typing import Optional


class PromptWebError(Exception):
    """Base exception for all pipeline errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ServiceError(PromptWebError):
    """A third-party platform answered with a non-2xx response (or not at all)."""

    def __init__(self, platform: str, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.platform = platform
        self.status_code = status_code

    def __str__(self):
        return f"{self.platform} API error: {self.message}"


class InvalidInput(PromptWebError):
    """Input that cannot be acted on (bad URL, missing token, empty commit)."""


class CommitFailed(PromptWebError):
    """The multi-file commit could not be completed; the branch ref is untouched."""

    def __init__(self, message: str, stage: str = ""):
        super().__init__(message)
        self.stage = stage

    def __str__(self):
        if self.stage:
            return f"Commit failed during {self.stage}: {self.message}"
        return f"Commit failed: {self.message}"


class InvalidTransition(PromptWebError):
    """A step status change that would break the step lifecycle."""
