"""
Function-style entry points, one per workflow step (event dict in, dict out).

Each step is re-invocable on its own, which is how an external workflow
engine drives them; ``AnalysisWorkflow`` chains the same steps in-process.
"""

import asyncio
from typing import Any, Dict, Optional
from loguru import logger

from .config.settings import PipelineConfig
from .core.collector import ResultCollector
from .core.generator import SubtitleGenerator
from .core.paginator import ResultPaginator
from .core.poller import JobPoller
from .core.starter import JobStarter
from .providers.base import QueueProvider, StorageProvider, VideoAnalysisProvider
from .providers.factory import ProviderFactory
from .utils.error_handler import log_exceptions
from .utils.logging_config import configure_logging


class Handlers:
    """Builds each step from one configuration, creating providers on first use."""

    def __init__(
        self,
        config: Optional[PipelineConfig] = None,
        storage_provider: Optional[StorageProvider] = None,
        queue_provider: Optional[QueueProvider] = None,
        analysis_provider: Optional[VideoAnalysisProvider] = None,
    ):
        self.config = config or PipelineConfig()
        self._storage_provider = storage_provider
        self._queue_provider = queue_provider
        self._analysis_provider = analysis_provider

    @property
    def storage_provider(self) -> StorageProvider:
        if self._storage_provider is None:
            self._storage_provider = ProviderFactory.create_storage_provider(self.config)
        return self._storage_provider

    @property
    def queue_provider(self) -> QueueProvider:
        if self._queue_provider is None:
            self._queue_provider = ProviderFactory.create_queue_provider(self.config)
        return self._queue_provider

    @property
    def analysis_provider(self) -> VideoAnalysisProvider:
        if self._analysis_provider is None:
            self._analysis_provider = ProviderFactory.create_analysis_provider(self.config)
        return self._analysis_provider

    @log_exceptions(log_level="ERROR", custom_message="start handler failed")
    async def start(self, event: Dict[str, Any]) -> Dict[str, Any]:
        starter = JobStarter(self.analysis_provider, self.config.analysis, self.config.storage.input_bucket)
        return await starter.start(event)

    @log_exceptions(log_level="ERROR", custom_message="poll handler failed")
    async def poll(self, event: Dict[str, Any]) -> Dict[str, Any]:
        result = await JobPoller(self.queue_provider).poll((event or {}).get("JobId"))
        return result.to_payload()

    @log_exceptions(log_level="ERROR", custom_message="collect handler failed")
    async def collect(self, event: Dict[str, Any]) -> Dict[str, Any]:
        paginator = ResultPaginator(self.analysis_provider, max_pages=self.config.analysis.max_pages)
        collector = ResultCollector(
            paginator,
            self.storage_provider,
            self.config.storage.output_bucket,
            self.config.analysis.kind,
        )
        return await collector.collect(event)

    @log_exceptions(log_level="ERROR", custom_message="subtitle handler failed")
    async def generate_subtitles(self, event: Dict[str, Any]) -> Dict[str, Any]:
        generator = SubtitleGenerator(
            self.storage_provider,
            self.config.storage.output_bucket,
            self.config.analysis.kind,
        )
        result = await generator.generate(event)
        return result.model_dump()

    async def close(self):
        for provider in (self._storage_provider, self._queue_provider, self._analysis_provider):
            if provider is not None:
                await provider.close()


def _invoke(step: str, event: Dict[str, Any]) -> Dict[str, Any]:
    config = PipelineConfig()
    configure_logging(config.logging)
    logger.debug(f"Invoking {step} handler")

    async def _run() -> Dict[str, Any]:
        handlers = Handlers(config)
        try:
            return await getattr(handlers, step)(event)
        finally:
            await handlers.close()

    return asyncio.run(_run())


def start(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    return _invoke("start", event)


def poll(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    return _invoke("poll", event)


def collect(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    return _invoke("collect", event)


def generate_subtitles(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    return _invoke("generate_subtitles", event)
