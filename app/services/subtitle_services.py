from typing import Any, Dict, Optional
from loguru import logger

from timedmeta.config.settings import PipelineConfig
from timedmeta.core.models import DetectionKind
from timedmeta.pipeline import SubtitlePipeline
from app.schemas.subtitles import SubtitleJobRequest, SubtitleJobResponse, SubtitleRenderResponse
from app.utilities import ExecutionTimer


def create_pipeline(config: Optional[PipelineConfig] = None, kind: Optional[DetectionKind] = None) -> SubtitlePipeline:
    return SubtitlePipeline(config=config, kind=kind)


async def run_subtitle_job(pipeline: SubtitlePipeline, body: SubtitleJobRequest) -> SubtitleJobResponse:
    with ExecutionTimer() as timer:
        context = await pipeline.run(body.video_key, bucket=body.bucket)
    logger.info(f"Subtitle job for {body.video_key} took {timer.get_execution_time():.2f}s")
    return SubtitleJobResponse(
        video_key=context.video_key,
        kind=context.kind,
        job_id=context.job_id,
        poll_attempts=context.attempts,
        results=context.collect_result,
        subtitles=context.subtitles,
        execution_time=timer.get_execution_time(),
    )


async def render_subtitles(pipeline: SubtitlePipeline, event: Dict[str, Any]) -> SubtitleRenderResponse:
    with ExecutionTimer() as timer:
        result = await pipeline.render(event)
    logger.info(f"Rendered subtitles for {result.video} in {timer.get_execution_time():.2f}s")
    return SubtitleRenderResponse(**result.model_dump(), execution_time=timer.get_execution_time())
