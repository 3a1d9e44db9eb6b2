"""Tests for starting analysis jobs."""

import uuid

import pytest

from timedmeta.config.settings import AnalysisConfig
from timedmeta.core.models import DetectionKind
from timedmeta.core.starter import JobStarter
from timedmeta.exceptions import ConfigurationException, ValidationException


def _config(**overrides):
    values = {
        "topic_arn": "arn:aws:sns:us-east-1:123456789012:jobs",
        "role_arn": "arn:aws:iam::123456789012:role/sns",
        "kind": DetectionKind.LABEL,
    }
    values.update(overrides)
    return AnalysisConfig(**values)


async def test_start_uses_fresh_token_and_channel(fake_analysis_provider) -> None:
    provider = fake_analysis_provider(job_id="job-42")
    starter = JobStarter(provider, _config(), input_bucket="input-bucket")

    first = await starter.start({"s3Object": {"key": "clip.mp4"}})
    await starter.start({"s3Object": {"key": "clip.mp4", "bucket": "other-bucket"}}, kind=DetectionKind.PERSON)

    assert first == {"JobId": "job-42"}
    call, second_call = provider.start_calls
    assert call["kind"] is DetectionKind.LABEL
    assert call["bucket"] == "input-bucket"
    assert call["key"] == "clip.mp4"
    assert call["topic_arn"] == "arn:aws:sns:us-east-1:123456789012:jobs"
    assert uuid.UUID(call["client_request_token"])
    assert second_call["bucket"] == "other-bucket"
    assert second_call["kind"] is DetectionKind.PERSON
    assert second_call["client_request_token"] != call["client_request_token"]


@pytest.mark.parametrize("event", [{}, {"s3Object": {}}, {"s3Object": {"key": "clip.mov"}}, {"s3Object": {"key": 5}}])
async def test_rejects_non_mp4_keys(fake_analysis_provider, event) -> None:
    provider = fake_analysis_provider()

    with pytest.raises(ValidationException):
        await JobStarter(provider, _config(), input_bucket="input-bucket").start(event)

    assert provider.start_calls == []


async def test_requires_notification_channel(fake_analysis_provider) -> None:
    starter = JobStarter(fake_analysis_provider(), _config(topic_arn=None), input_bucket="input-bucket")

    with pytest.raises(ConfigurationException):
        await starter.start({"s3Object": {"key": "clip.mp4"}})
