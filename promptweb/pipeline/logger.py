"""
Unified logging for the pipeline.
==================================
Emoji-prefixed messages for pipeline phases, plus a status board
rendering of step snapshots.
"""
import logging
from enum import Enum
from typing import Iterable

from ..domain import Step, StepStatus


class LogLevel(Enum):
    """Log level indicators with emoji prefixes."""
    PHASE = "🚀"
    STEP = "📋"
    SUCCESS = "✅"
    WARNING = "⚠️"
    ERROR = "❌"
    DEBUG = "🔍"
    INFO = "ℹ️"
    SAVE = "💾"


STATUS_MARKERS = {
    StepStatus.PENDING: "⏳",
    StepStatus.IN_PROGRESS: "🔄",
    StepStatus.COMPLETED: LogLevel.SUCCESS.value,
    StepStatus.FAILED: LogLevel.ERROR.value,
}


class PipelineLogger:
    """Step-aware logger shared by the orchestrator and the CLI."""

    def __init__(self, name: str = "pipeline", verbose: bool = True):
        self.logger = logging.getLogger(name)
        self.verbose = verbose
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter('%(message)s'))
            self.logger.addHandler(handler)
        self.logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    def _emit(self, level: int, marker: LogLevel, message: str):
        self.logger.log(level, f"{marker.value} {message}")

    @staticmethod
    def render_steps(steps: Iterable[Step]) -> str:
        """One line per step: status marker, title and details if any."""
        lines = []
        for step in steps:
            line = f"{STATUS_MARKERS[step.status]} {step.title}"
            if step.details:
                line += f" ({step.details})"
            lines.append(line)
        return "\n".join(lines)

    def progress(self, steps: Iterable[Step]):
        """Log a step snapshot as a status board."""
        self._emit(logging.INFO, LogLevel.INFO, "Progress:\n" + self.render_steps(steps))

    def phase(self, message: str):
        self.logger.info(f"\n{LogLevel.PHASE.value} [PHASE] {message}")

    def step(self, message: str):
        self._emit(logging.INFO, LogLevel.STEP, message)

    def success(self, message: str):
        self._emit(logging.INFO, LogLevel.SUCCESS, message)

    def warning(self, message: str):
        self._emit(logging.WARNING, LogLevel.WARNING, message)

    def error(self, message: str):
        self._emit(logging.ERROR, LogLevel.ERROR, message)

    def debug(self, message: str):
        if self.verbose:
            self._emit(logging.DEBUG, LogLevel.DEBUG, f"[DEBUG] {message}")

    def info(self, message: str):
        self._emit(logging.INFO, LogLevel.INFO, message)

    def save(self, target: str):
        self._emit(logging.INFO, LogLevel.SAVE, f"Saved: {target}")
