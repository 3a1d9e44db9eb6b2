"""
End-to-end subtitle pipeline: analysis job -> raw results -> WebVTT track and viewer.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union
from loguru import logger

from .config.settings import PipelineConfig
from .core.collector import ResultCollector
from .core.generator import SubtitleGenerator
from .core.models import DetectionKind
from .core.paginator import ResultPaginator
from .core.poller import JobPoller
from .core.schemas import SubtitleRequest, SubtitleResult
from .core.starter import JobStarter
from .exceptions import ConfigurationException
from .providers.base import QueueProvider, StorageProvider, VideoAnalysisProvider
from .providers.factory import ProviderFactory
from .workflow.state_machine import AnalysisWorkflow, Scheduler


@dataclass
class PipelineContext:
    """State carried through one pipeline run."""
    video_key: str
    kind: DetectionKind
    job_id: Optional[str] = None
    attempts: int = 0
    collect_result: Dict[str, Any] = field(default_factory=dict)
    subtitles: Optional[SubtitleResult] = None


class SubtitlePipeline:
    """
    Orchestrates the job starter, the wait/poll workflow, the result
    collector and the subtitle generator.

    Providers default to the ones named in the configuration; pass instances
    to override them (tests use the local storage and in-memory queue).
    """

    def __init__(
        self,
        config: Optional[PipelineConfig] = None,
        storage_provider: Optional[StorageProvider] = None,
        queue_provider: Optional[QueueProvider] = None,
        analysis_provider: Optional[VideoAnalysisProvider] = None,
        scheduler: Optional[Scheduler] = None,
        kind: Optional[Union[DetectionKind, str]] = None,
    ):
        self.config = config or PipelineConfig()
        self.kind = DetectionKind(kind or self.config.analysis.kind)
        self.storage_provider = storage_provider
        self.queue_provider = queue_provider
        self.analysis_provider = analysis_provider
        self.scheduler = scheduler

        # Components (initialized on demand)
        self.workflow: Optional[AnalysisWorkflow] = None
        self.generator: Optional[SubtitleGenerator] = None

    @property
    def output_bucket(self) -> str:
        bucket = self.config.storage.output_bucket
        if not bucket:
            raise ConfigurationException("STORAGE_OUTPUT_BUCKET is not configured", error_code="MISSING_OUTPUT_BUCKET")
        return bucket

    def _initialize_generator(self):
        if self.generator is None:
            if self.storage_provider is None:
                self.storage_provider = ProviderFactory.create_storage_provider(self.config)
            self.generator = SubtitleGenerator(self.storage_provider, self.output_bucket, self.kind)
            logger.info("Initialized subtitle generator")

    def _initialize_workflow(self):
        if self.workflow is not None:
            return
        self._initialize_generator()
        if self.queue_provider is None:
            self.queue_provider = ProviderFactory.create_queue_provider(self.config)
        if self.analysis_provider is None:
            self.analysis_provider = ProviderFactory.create_analysis_provider(self.config)

        paginator = ResultPaginator(self.analysis_provider, max_pages=self.config.analysis.max_pages)
        self.workflow = AnalysisWorkflow(
            starter=JobStarter(self.analysis_provider, self.config.analysis, self.config.storage.input_bucket),
            poller=JobPoller(self.queue_provider),
            collector=ResultCollector(paginator, self.storage_provider, self.output_bucket, self.kind),
            config=self.config.workflow,
            scheduler=self.scheduler,
        )
        logger.info("Initialized analysis workflow")

    async def render(self, event: Union[SubtitleRequest, Dict[str, Any]]) -> SubtitleResult:
        """Run only the subtitle generator for an already collected job."""
        self._initialize_generator()
        return await self.generator.generate(event)

    async def run(self, video_key: str, bucket: Optional[str] = None) -> PipelineContext:
        """
        Run the complete pipeline for one uploaded video.

        Returns:
            PipelineContext with the job id, collected results and subtitle names
        """
        context = PipelineContext(video_key=video_key, kind=self.kind)
        logger.info(f"Starting subtitle pipeline for {video_key} ({self.kind.value})")

        self._initialize_workflow()
        run = await self.workflow.run(video_key, bucket=bucket, kind=self.kind)
        context.job_id = run.job_id
        context.attempts = run.attempts
        context.collect_result = run.result

        if not context.collect_result:
            logger.warning(f"No results were collected for {video_key}; skipping subtitle generation")
            return context

        context.subtitles = await self.render(SubtitleRequest.from_collect_result(context.collect_result))
        logger.info(f"Subtitle pipeline completed for {video_key}: {context.subtitles.vtt}, {context.subtitles.html}")
        return context

    async def close(self):
        for provider in (self.storage_provider, self.queue_provider, self.analysis_provider):
            if provider is not None:
                await provider.close()

    async def __aenter__(self) -> "SubtitlePipeline":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()


async def run_subtitle_pipeline(
    video_key: str,
    kind: Optional[Union[DetectionKind, str]] = None,
    config: Optional[PipelineConfig] = None,
) -> PipelineContext:
    """
    Convenience function to run the subtitle pipeline with configured providers.

    Args:
        video_key: Object key of the uploaded ``.mp4`` in the input bucket
        kind: Detection kind (defaults to ANALYSIS_KIND)
        config: Pipeline configuration (defaults to the environment)
    """
    async with SubtitlePipeline(config=config, kind=kind) as pipeline:
        return await pipeline.run(video_key)
