"""
Correlates completion notifications with a running analysis job.
"""

import json
from typing import Any, Dict, Optional
from loguru import logger

from ..providers.base import QueueProvider
from .schemas import PollResult

SUCCEEDED = "SUCCEEDED"


def _decode_notification(raw: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Unwrap the queue body and the topic ``Message`` it carries."""
    try:
        envelope = json.loads(raw.get("Body") or "")
        message = json.loads(envelope["Message"])
    except (json.JSONDecodeError, KeyError, TypeError) as e:
        logger.warning(f"Skipping undecodable notification {raw.get('MessageId')}: {e}")
        return None
    if not isinstance(message, dict):
        logger.warning(f"Skipping notification {raw.get('MessageId')}: Message is not an object")
        return None
    return message


class JobPoller:
    """
    One poll attempt per call.

    Messages are never deleted, so a redelivered notification simply matches
    again on the next attempt.
    """

    def __init__(self, queue_provider: QueueProvider):
        self.queue_provider = queue_provider

    async def poll(self, job_id: Optional[str]) -> PollResult:
        if not job_id:
            logger.error("Poll requested without a job id")
            return PollResult.pending(job_id)

        batch = await self.queue_provider.receive_messages()
        for raw in batch:
            message = _decode_notification(raw)
            if message is None:
                continue
            if message.get("JobId") == job_id and message.get("Status") == SUCCEEDED:
                logger.info(f"Job {job_id} reported {SUCCEEDED}")
                return PollResult.matched(job_id, message)

        logger.debug(f"No completion notification for job {job_id} in {len(batch)} message(s)")
        return PollResult.pending(job_id)
