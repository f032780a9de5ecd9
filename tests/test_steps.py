import unittest

import pytest

from promptweb.domain import StepStatus
from promptweb.exceptions import InvalidTransition
from promptweb.pipeline.steps import StepTracker, build_step_plan


def ids(plan):
    return [s.id for s in plan]


class TestBuildStepPlan(unittest.TestCase):
    def test_minimal_plan(self):
        plan = build_step_plan(database_configured=False, deployment_configured=False, backend_needed=False)
        self.assertEqual(ids(plan), ["analyze", "repo", "structure", "generate", "commit"])

    def test_first_step_in_progress_rest_pending(self):
        plan = build_step_plan(database_configured=True, deployment_configured=True, backend_needed=True)
        self.assertEqual(plan[0].status, StepStatus.IN_PROGRESS)
        self.assertTrue(all(s.status is StepStatus.PENDING for s in plan[1:]))

    def test_full_plan(self):
        plan = build_step_plan(
            database_configured=True, deployment_configured=True, backend_needed=True, include_scaffold=True
        )
        self.assertEqual(
            ids(plan),
            ["analyze", "repo", "setup", "database", "structure", "generate", "commit", "deploy"],
        )

    def test_database_needs_both_verdict_and_configuration(self):
        for configured, needed in [(True, False), (False, True), (False, False)]:
            plan = build_step_plan(
                database_configured=configured, deployment_configured=False, backend_needed=needed
            )
            self.assertNotIn("database", ids(plan))

    def test_analyze_first_and_commit_or_deploy_last(self):
        for db in (True, False):
            for deploy in (True, False):
                for backend in (True, False):
                    plan = ids(build_step_plan(
                        database_configured=db, deployment_configured=deploy, backend_needed=backend
                    ))
                    self.assertEqual(plan[0], "analyze")
                    self.assertEqual(plan[-1], "deploy" if deploy else "commit")
                    if deploy:
                        self.assertEqual(plan[-2], "commit")

    def test_plan_is_deterministic(self):
        kwargs = dict(database_configured=True, deployment_configured=False, backend_needed=True)
        self.assertEqual(build_step_plan(**kwargs), build_step_plan(**kwargs))


def make_tracker(on_update=None):
    plan = build_step_plan(database_configured=False, deployment_configured=False, backend_needed=False)
    return StepTracker(plan, on_update)


@pytest.mark.asyncio
async def test_transitions_emit_snapshots():
    snapshots = []
    tracker = make_tracker(snapshots.append)

    await tracker.start("analyze")  # already running, nothing emitted
    assert snapshots == []

    await tracker.complete("analyze", "Project: demo")
    await tracker.start("repo")
    assert len(snapshots) == 2
    assert snapshots[0][0].status is StepStatus.COMPLETED
    assert snapshots[0][0].details == "Project: demo"
    assert snapshots[1][1].status is StepStatus.IN_PROGRESS


@pytest.mark.asyncio
async def test_snapshots_are_immutable_tuples():
    snapshots = []
    tracker = make_tracker(snapshots.append)
    await tracker.complete("analyze", "done")
    first = snapshots[0]
    await tracker.start("repo")

    assert isinstance(first, tuple)
    assert first[1].status is StepStatus.PENDING
    with pytest.raises(AttributeError):
        first[0].status = StepStatus.FAILED


@pytest.mark.asyncio
async def test_async_callback_is_awaited():
    received = []

    async def on_update(steps):
        received.append(steps)

    tracker = make_tracker(on_update)
    await tracker.fail("analyze", "boom")
    assert received[0][0].status is StepStatus.FAILED
    assert received[0][0].details == "boom"


@pytest.mark.asyncio
async def test_illegal_transitions_are_rejected():
    tracker = make_tracker()

    with pytest.raises(InvalidTransition):
        await tracker.start("repo")  # analyze still running
    with pytest.raises(InvalidTransition):
        await tracker.complete("repo")  # never started
    with pytest.raises(InvalidTransition):
        await tracker.start("nope")

    await tracker.complete("analyze")
    with pytest.raises(InvalidTransition, match="already completed"):
        await tracker.fail("analyze")
    with pytest.raises(InvalidTransition, match="already completed"):
        await tracker.start("analyze")
    assert tracker.get("analyze").status is StepStatus.COMPLETED


def test_duplicate_ids_rejected():
    plan = build_step_plan(database_configured=False, deployment_configured=False, backend_needed=False)
    with pytest.raises(InvalidTransition):
        StepTracker(plan + plan[:1])


@pytest.mark.asyncio
async def test_complete_can_start_next_in_one_snapshot():
    snapshots = []
    tracker = make_tracker(snapshots.append)

    await tracker.complete("analyze", "done", start_next="repo")
    await tracker.start("repo")  # already running

    assert len(snapshots) == 1
    assert [s.status for s in snapshots[0][:2]] == [StepStatus.COMPLETED, StepStatus.IN_PROGRESS]
    assert tracker.current().id == "repo"
