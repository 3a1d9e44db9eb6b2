"""
Wait / poll / fetch workflow around an asynchronous analysis job.

    STARTED -> WAITING -> POLLING -> WAITING ... -> FETCHING -> DONE

The job is started, then the workflow alternates between waiting a fixed
interval and polling the notification queue until the job's completion
notice arrives, and finally collects the results.
"""

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional
from loguru import logger

from ..core.collector import ResultCollector
from ..core.models import DetectionKind
from ..core.poller import JobPoller
from ..core.schemas import PollResult
from ..core.starter import JobStarter
from ..exceptions import ProviderException, WorkflowTimeoutException

if TYPE_CHECKING:
    from ..config.settings import WorkflowConfig


class WorkflowState(str, Enum):
    STARTED = "started"
    WAITING = "waiting"
    POLLING = "polling"
    FETCHING = "fetching"
    DONE = "done"


class Scheduler(ABC):
    """Decides how the workflow waits between poll attempts."""

    @abstractmethod
    async def wait(self, seconds: float):
        pass


class AsyncioScheduler(Scheduler):
    async def wait(self, seconds: float):
        await asyncio.sleep(seconds)


@dataclass
class WorkflowRun:
    """Trace of one workflow execution."""
    video_key: str
    job_id: Optional[str] = None
    state: WorkflowState = WorkflowState.STARTED
    attempts: int = 0
    history: List[WorkflowState] = field(default_factory=list)
    poll_result: Optional[PollResult] = None
    result: Dict[str, Any] = field(default_factory=dict)

    def transition(self, state: WorkflowState):
        logger.debug(f"[{self.video_key}] {self.state.value} -> {state.value}")
        self.state = state
        self.history.append(state)


class AnalysisWorkflow:
    """Drives one video through start, wait/poll and collect."""

    def __init__(
        self,
        starter: JobStarter,
        poller: JobPoller,
        collector: ResultCollector,
        config: "WorkflowConfig",
        scheduler: Optional[Scheduler] = None,
    ):
        self.starter = starter
        self.poller = poller
        self.collector = collector
        self.config = config
        self.scheduler = scheduler or AsyncioScheduler()

    async def run(
        self,
        video_key: str,
        bucket: Optional[str] = None,
        kind: Optional[DetectionKind] = None,
    ) -> WorkflowRun:
        """
        Run the workflow to completion.

        Raises:
            WorkflowTimeoutException: if ``max_attempts`` polls find no completion notice
        """
        run = WorkflowRun(video_key=video_key)
        run.history.append(WorkflowState.STARTED)

        s3_object = {"key": video_key}
        if bucket:
            s3_object["bucket"] = bucket
        response = await self.starter.start({"s3Object": s3_object}, kind=kind)
        run.job_id = response.get("JobId")
        if not run.job_id:
            raise ProviderException(f"Analysis job for {video_key} returned no JobId", error_code="MISSING_JOB_ID")

        while True:
            run.transition(WorkflowState.WAITING)
            await self.scheduler.wait(self.config.wait_seconds)

            run.transition(WorkflowState.POLLING)
            run.attempts += 1
            run.poll_result = await self.poller.poll(run.job_id)
            if run.poll_result.done:
                break

            if self.config.max_attempts is not None and run.attempts >= self.config.max_attempts:
                raise WorkflowTimeoutException(
                    f"Job {run.job_id} did not complete after {run.attempts} poll attempt(s)",
                    error_code="WORKFLOW_TIMEOUT",
                    details={"job_id": run.job_id, "attempts": run.attempts},
                )

        run.transition(WorkflowState.FETCHING)
        run.result = await self.collector.collect(run.poll_result.to_payload())
        run.transition(WorkflowState.DONE)
        logger.info(f"Workflow for {video_key} finished after {run.attempts} poll attempt(s)")
        return run
