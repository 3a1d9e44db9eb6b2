"""Tests for the wait / poll / fetch workflow."""

import pytest

from timedmeta.core.collector import ResultCollector
from timedmeta.core.models import DetectionKind
from timedmeta.core.paginator import ResultPaginator
from timedmeta.core.poller import JobPoller
from timedmeta.core.starter import JobStarter
from timedmeta.exceptions import ProviderException, WorkflowTimeoutException
from timedmeta.workflow.state_machine import AnalysisWorkflow, WorkflowState


@pytest.fixture
def build_workflow(pipeline_config, storage, queue, fake_analysis_provider, make_person_record):
    def _build(scheduler, job_id="job-1"):
        provider = fake_analysis_provider(
            [{
                "JobStatus": "SUCCEEDED",
                "Persons": [make_person_record(0)],
                "Video": {"S3Object": {"Bucket": "input-bucket", "Name": "clip.mp4"}},
                "VideoMetadata": {"DurationMillis": 4000},
            }],
            job_id=job_id,
        )
        workflow = AnalysisWorkflow(
            starter=JobStarter(provider, pipeline_config.analysis, "input-bucket"),
            poller=JobPoller(queue),
            collector=ResultCollector(ResultPaginator(provider), storage, "output-bucket", DetectionKind.PERSON),
            config=pipeline_config.workflow,
            scheduler=scheduler,
        )
        return workflow, provider

    return _build


async def test_waits_until_notification_then_collects(build_workflow, recording_scheduler, queue, make_notification) -> None:
    async def notify_on_second_wait(count):
        if count == 2:
            await queue.send_message(make_notification("job-1"))

    scheduler = recording_scheduler(on_wait=notify_on_second_wait)
    workflow, _ = build_workflow(scheduler)

    run = await workflow.run("clip.mp4")

    assert run.history == [
        WorkflowState.STARTED,
        WorkflowState.WAITING,
        WorkflowState.POLLING,
        WorkflowState.WAITING,
        WorkflowState.POLLING,
        WorkflowState.FETCHING,
        WorkflowState.DONE,
    ]
    assert run.attempts == 2
    assert scheduler.waits == [5, 5]
    assert run.result["output"]["s3Object"]["Name"] == "clip.mp4.persons.json"


async def test_mismatched_notifications_do_not_complete(build_workflow, recording_scheduler, queue, make_notification) -> None:
    await queue.send_message(make_notification("someone-else"))
    workflow, _ = build_workflow(recording_scheduler())

    with pytest.raises(WorkflowTimeoutException) as excinfo:
        await workflow.run("clip.mp4")

    assert excinfo.value.details == {"job_id": "job-1", "attempts": 3}


async def test_unlimited_attempts(build_workflow, recording_scheduler, pipeline_config, queue, make_notification) -> None:
    async def notify_late(count):
        if count == 10:
            await queue.send_message(make_notification("job-1"))

    pipeline_config.workflow.max_attempts = None
    workflow, _ = build_workflow(recording_scheduler(on_wait=notify_late))

    run = await workflow.run("clip.mp4")

    assert run.attempts == 10
    assert run.state is WorkflowState.DONE


async def test_missing_job_id(build_workflow, recording_scheduler) -> None:
    scheduler = recording_scheduler()
    workflow, _ = build_workflow(scheduler, job_id=None)

    with pytest.raises(ProviderException):
        await workflow.run("clip.mp4")

    assert scheduler.waits == []
