"""Tests for matching completion notifications to a job."""

from timedmeta.core.poller import JobPoller


async def test_matching_notification(queue, make_notification) -> None:
    await queue.send_message(make_notification("other-job"))
    await queue.send_message(make_notification("job-1"))

    result = await JobPoller(queue).poll("job-1")

    assert result.message_count == 1
    assert result.job_id == "job-1"
    assert result.messages[0]["JobId"] == "job-1"
    assert result.messages[0]["Video"]["S3ObjectName"] == "clip.mp4"


async def test_only_mismatches(queue, make_notification) -> None:
    await queue.send_message(make_notification("other-job"))
    await queue.send_message(make_notification("job-1", status="FAILED"))

    result = await JobPoller(queue).poll("job-1")

    assert result.to_payload() == {"MessageCount": 0, "Messages": [], "JobId": "job-1"}


async def test_unparsable_bodies_are_skipped(queue, make_notification) -> None:
    await queue.send_message("not json")
    await queue.send_message({"Message": "{broken"})
    await queue.send_message({"NoMessage": True})
    await queue.send_message(make_notification("job-1"))

    result = await JobPoller(queue).poll("job-1")

    assert result.done


async def test_empty_queue_and_missing_job_id(queue) -> None:
    poller = JobPoller(queue)

    assert (await poller.poll("job-1")).message_count == 0
    assert (await poller.poll(None)).message_count == 0


async def test_match_behind_a_full_batch_is_eventually_seen(queue, make_notification) -> None:
    for i in range(12):
        await queue.send_message(make_notification(f"other-job-{i}"))
    await queue.send_message(make_notification("job-1"))
    poller = JobPoller(queue)

    counts = [(await poller.poll("job-1")).message_count for _ in range(3)]

    assert counts[0] == 0
    assert 1 in counts


async def test_redelivered_message_matches_again(queue, make_notification) -> None:
    await queue.send_message(make_notification("job-1"))
    poller = JobPoller(queue)

    first = await poller.poll("job-1")
    second = await poller.poll("job-1")

    assert first.done and second.done
