"""End-to-end tests for the subtitle pipeline and the step handlers."""

import json

import pytest
from loguru import logger

from timedmeta import handlers
from timedmeta.core.webvtt import parse_vtt
from timedmeta.exceptions import ProviderException
from timedmeta.handlers import Handlers
from timedmeta.pipeline import SubtitlePipeline


@pytest.fixture
def job_pages(make_person_record):
    return [
        {
            "JobStatus": "SUCCEEDED",
            "Persons": [make_person_record(5000, index=0), make_person_record(5000, index=1)],
            "NextToken": "page-1",
            "Video": {"S3Object": {"Bucket": "input-bucket", "Name": "clip.mp4"}},
            "VideoMetadata": {"DurationMillis": 10000},
        },
        {"JobStatus": "SUCCEEDED", "Persons": [make_person_record(9800, index=0)]},
    ]


async def test_pipeline_run(pipeline_config, storage, queue, fake_analysis_provider, recording_scheduler,
                            make_notification, job_pages) -> None:
    async def notify(count):
        await queue.send_message(make_notification("job-1"))

    provider = fake_analysis_provider(job_pages)
    pipeline = SubtitlePipeline(
        config=pipeline_config,
        storage_provider=storage,
        queue_provider=queue,
        analysis_provider=provider,
        scheduler=recording_scheduler(on_wait=notify),
    )

    async with pipeline:
        context = await pipeline.run("clip.mp4")

    assert context.job_id == "job-1"
    assert context.attempts == 1
    assert context.subtitles.model_dump() == {"video": "clip.mp4", "vtt": "clip.vtt", "html": "clip.html"}
    cues = parse_vtt((await storage.get_object("output-bucket", "clip.vtt")).decode("utf-8"))
    assert [(c.start_time, c.end_time, len(c.objects)) for c in cues] == [(5000, 5500, 2), (9800, 10000, 1)]
    assert provider.start_calls[0]["key"] == "clip.mp4"
    assert provider.closed


async def test_handlers_chain(pipeline_config, storage, queue, fake_analysis_provider, make_notification, job_pages) -> None:
    step = Handlers(pipeline_config, storage, queue, fake_analysis_provider(job_pages))

    started = await step.start({"s3Object": {"key": "clip.mp4"}})
    pending = await step.poll(started)
    await queue.send_message(make_notification(started["JobId"]))
    polled = await step.poll(started)
    collected = await step.collect(polled)
    rendered = await step.generate_subtitles({
        "input": {
            "videoS3Object": collected["input"]["s3Object"],
            "videoMetadata": collected["input"]["videoMetadata"],
        },
        "output": {"rekognitionS3Object": collected["output"]["s3Object"]},
    })

    assert pending["MessageCount"] == 0
    assert polled["MessageCount"] == 1
    raw = json.loads(await storage.get_object("output-bucket", "clip.mp4.persons.json"))
    assert len(raw) == 3
    assert rendered == {"video": "clip.mp4", "vtt": "clip.vtt", "html": "clip.html"}


async def test_poll_handler_logs_queue_failures(pipeline_config, storage, queue, fake_analysis_provider) -> None:
    async def broken_receive():
        raise ProviderException("queue unavailable", error_code="RECEIVE_FAILED")

    queue.receive_messages = broken_receive
    step = Handlers(pipeline_config, storage, queue, fake_analysis_provider([]))
    messages = []
    sink_id = logger.add(messages.append, level="ERROR")

    try:
        with pytest.raises(ProviderException, match="queue unavailable"):
            await step.poll({"JobId": "job-1"})
    finally:
        logger.remove(sink_id)

    assert any("poll handler failed" in str(message) for message in messages)


def test_module_level_handler_reads_environment(monkeypatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("QUEUE_PROVIDER", "memory")

    assert handlers.poll({"JobId": "job-1"}) == {"MessageCount": 0, "Messages": [], "JobId": "job-1"}
