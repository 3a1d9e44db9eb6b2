"""HTTP API tests."""

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.routers.subtitles import get_pipeline
from timedmeta.pipeline import SubtitlePipeline


@pytest.fixture
def pages(make_person_record):
    return [{
        "JobStatus": "SUCCEEDED",
        "Persons": [make_person_record(1000, index=3)],
        "Video": {"S3Object": {"Bucket": "input-bucket", "Name": "clip.mp4"}},
        "VideoMetadata": {"DurationMillis": 3000},
    }]


@pytest.fixture
def client(pipeline_config, storage, queue, fake_analysis_provider, recording_scheduler, make_notification, pages):
    async def notify(count):
        await queue.send_message(make_notification("job-1"))

    def _pipeline():
        return SubtitlePipeline(
            config=pipeline_config,
            storage_provider=storage,
            queue_provider=queue,
            analysis_provider=fake_analysis_provider(pages),
            scheduler=recording_scheduler(on_wait=notify),
        )

    app.dependency_overrides[get_pipeline] = _pipeline
    yield TestClient(app)
    app.dependency_overrides.clear()


def _render_event(results="clip.mp4.persons.json"):
    return {
        "input": {
            "videoS3Object": {"Name": "clip.mp4"},
            "videoMetadata": {"DurationMillis": 3000},
        },
        "output": {"rekognitionS3Object": {"Name": results}},
    }


def test_health(client) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_create_subtitles(client) -> None:
    response = client.post("/subtitles", json={"video_key": "clip.mp4"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["job_id"] == "job-1"
    assert payload["poll_attempts"] == 1
    assert payload["subtitles"] == {"video": "clip.mp4", "vtt": "clip.vtt", "html": "clip.html"}
    assert payload["results"]["output"]["s3Object"]["Name"] == "clip.mp4.persons.json"


def test_create_subtitles_rejects_non_mp4(client) -> None:
    response = client.post("/subtitles", json={"video_key": "clip.mov"})

    assert response.status_code == 422
    assert response.json()["error_code"] == "INVALID_VIDEO_KEY"


def test_render_missing_results_gives_empty_track(client) -> None:
    response = client.post("/subtitles/render", json=_render_event())

    assert response.status_code == 200
    assert response.json()["vtt"] == "clip.vtt"


def test_render_invalid_event(client) -> None:
    response = client.post("/subtitles/render", json={"input": {}})

    assert response.status_code == 422
    assert response.json()["error"] == "ValidationException"


def test_provider_failures_map_to_bad_gateway(client, pages) -> None:
    pages[0] = {"JobStatus": "FAILED", "StatusMessage": "Access denied to video"}

    response = client.post("/subtitles", json={"video_key": "clip.mp4"})

    assert response.status_code == 502
    assert response.json()["error_code"] == "JOB_FAILED"
