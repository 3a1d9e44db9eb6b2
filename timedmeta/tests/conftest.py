"""Shared fixtures: in-process providers and record builders."""

import json
from typing import Any, Dict, List, Optional

import pytest

from timedmeta.config.settings import (
    AnalysisConfig,
    PipelineConfig,
    QueueConfig,
    StorageConfig,
    WorkflowConfig,
)
from timedmeta.core.models import DetectionKind
from timedmeta.providers.base import VideoAnalysisProvider
from timedmeta.providers.custom_providers import InMemoryQueueProvider, LocalStorageProvider
from timedmeta.workflow.state_machine import Scheduler

BOX = {"Width": 0.25, "Height": 0.5, "Left": 0.1, "Top": 0.2}


class FakeAnalysisProvider(VideoAnalysisProvider):
    """Serves canned result pages keyed by NextToken and records every call."""

    def __init__(self, pages: Optional[List[Dict[str, Any]]] = None, job_id: str = "job-1"):
        self.pages = pages or []
        self.job_id = job_id
        self.start_calls: List[Dict[str, Any]] = []
        self.page_calls: List[Optional[str]] = []
        self.closed = False

    async def start_job(self, kind, bucket, key, client_request_token, topic_arn, role_arn):
        self.start_calls.append({
            "kind": kind,
            "bucket": bucket,
            "key": key,
            "client_request_token": client_request_token,
            "topic_arn": topic_arn,
            "role_arn": role_arn,
        })
        return {"JobId": self.job_id}

    async def get_results_page(self, kind, job_id, next_token=None):
        self.page_calls.append(next_token)
        index = 0 if next_token is None else int(next_token.split("-")[1])
        return self.pages[index]

    async def close(self):
        self.closed = True


class RecordingScheduler(Scheduler):
    def __init__(self, on_wait=None):
        self.waits: List[float] = []
        self.on_wait = on_wait

    async def wait(self, seconds: float):
        self.waits.append(seconds)
        if self.on_wait is not None:
            await self.on_wait(len(self.waits))


def person_record(timestamp: int, index: int = 0, box: Optional[Dict[str, float]] = None) -> Dict[str, Any]:
    return {
        "Timestamp": timestamp,
        "Person": {"Index": index, "Face": {"BoundingBox": dict(box or BOX), "Confidence": 99.1}},
    }


def label_record(timestamp: int, name: str = "Car", **extra) -> Dict[str, Any]:
    record = {
        "Timestamp": timestamp,
        "Label": {"Name": name, "Confidence": 97.0, "Instances": [{"BoundingBox": dict(BOX)}], "Parents": []},
    }
    record.update(extra)
    return record


def notification(job_id: str, status: str = "SUCCEEDED", video_name: str = "clip.mp4") -> Dict[str, Any]:
    message = {
        "JobId": job_id,
        "Status": status,
        "API": "StartPersonTracking",
        "Video": {"S3ObjectName": video_name, "S3Bucket": "input-bucket"},
    }
    return {"Type": "Notification", "Message": json.dumps(message)}


@pytest.fixture
def box() -> Dict[str, float]:
    return dict(BOX)


@pytest.fixture
def make_person_record():
    return person_record


@pytest.fixture
def make_label_record():
    return label_record


@pytest.fixture
def make_notification():
    return notification


@pytest.fixture
def fake_analysis_provider():
    return FakeAnalysisProvider


@pytest.fixture
def recording_scheduler():
    return RecordingScheduler


@pytest.fixture
def storage(tmp_path) -> LocalStorageProvider:
    return LocalStorageProvider({"base_path": str(tmp_path / "storage")})


@pytest.fixture
def queue() -> InMemoryQueueProvider:
    return InMemoryQueueProvider({"max_messages": 10})


@pytest.fixture
def pipeline_config(tmp_path) -> PipelineConfig:
    return PipelineConfig(
        storage=StorageConfig(
            provider="local",
            base_path=str(tmp_path / "storage"),
            input_bucket="input-bucket",
            output_bucket="output-bucket",
        ),
        queue=QueueConfig(provider="memory"),
        analysis=AnalysisConfig(
            kind=DetectionKind.PERSON,
            topic_arn="arn:aws:sns:us-east-1:123456789012:AmazonRekognition-jobs",
            role_arn="arn:aws:iam::123456789012:role/rekognition-sns",
        ),
        workflow=WorkflowConfig(wait_seconds=5, max_attempts=3),
    )
