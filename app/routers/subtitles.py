from typing import Any, AsyncIterator, Dict
from fastapi import APIRouter, Body, Depends

from timedmeta.pipeline import SubtitlePipeline
from app.schemas.subtitles import SubtitleJobRequest, SubtitleJobResponse, SubtitleRenderResponse
from app.services.subtitle_services import create_pipeline, render_subtitles, run_subtitle_job

router = APIRouter(prefix="/subtitles", tags=["subtitles"])


async def get_pipeline() -> AsyncIterator[SubtitlePipeline]:
    pipeline = create_pipeline()
    try:
        yield pipeline
    finally:
        await pipeline.close()


@router.post("", response_model=SubtitleJobResponse)
async def create_subtitles(body: SubtitleJobRequest, pipeline: SubtitlePipeline = Depends(get_pipeline)):
    """Run the analysis job for a video and write its WebVTT track and viewer page."""
    if body.kind is not None:
        pipeline.kind = body.kind
    return await run_subtitle_job(pipeline, body)


@router.post("/render", response_model=SubtitleRenderResponse)
async def render(event: Dict[str, Any] = Body(...), pipeline: SubtitlePipeline = Depends(get_pipeline)):
    """Build the WebVTT track and viewer page for an already collected job."""
    return await render_subtitles(pipeline, event)
