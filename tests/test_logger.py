import logging

from promptweb.domain import Step, StepStatus
from promptweb.pipeline import PipelineLogger

STEPS = (
    Step("analyze", "Analyze Requirements", "Understand the project", StepStatus.COMPLETED, "Project: demo-site"),
    Step("repo", "Create Repository", "Create the GitHub repository", StepStatus.IN_PROGRESS),
    Step("commit", "Commit Files", "Push everything in one commit", StepStatus.PENDING),
)


def test_render_steps_one_line_per_step():
    lines = PipelineLogger.render_steps(STEPS).splitlines()

    assert lines == [
        "✅ Analyze Requirements (Project: demo-site)",
        "🔄 Create Repository",
        "⏳ Commit Files",
    ]


def test_failed_step_shows_error_marker_and_details():
    failed = (Step("commit", "Commit Files", "", StepStatus.FAILED, "Commit failed during create tree: boom"),)
    assert PipelineLogger.render_steps(failed) == "❌ Commit Files (Commit failed during create tree: boom)"


def test_progress_logs_the_status_board(caplog):
    log = PipelineLogger("test.logger.progress", verbose=False)

    with caplog.at_level(logging.INFO, logger="test.logger.progress"):
        log.progress(STEPS)

    assert len(caplog.records) == 1
    message = caplog.records[0].getMessage()
    assert message.startswith("ℹ️ Progress:\n")
    assert "🔄 Create Repository" in message


def test_debug_only_when_verbose(caplog):
    quiet = PipelineLogger("test.logger.quiet", verbose=False)
    loud = PipelineLogger("test.logger.loud", verbose=True)

    with caplog.at_level(logging.DEBUG):
        quiet.debug("hidden")
        loud.debug("shown")
        loud.warning("careful")

    messages = [(r.levelno, r.getMessage()) for r in caplog.records]
    assert messages == [(logging.DEBUG, "🔍 [DEBUG] shown"), (logging.WARNING, "⚠️ careful")]
