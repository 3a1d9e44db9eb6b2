"""
Run the subtitle pipeline for one uploaded video.

    python run_pipeline.py clip.mp4 --kind person

Settings come from the environment / .env (see timedmeta/config/settings.py).
"""

import argparse
import asyncio
import sys
from dotenv import load_dotenv
from loguru import logger

from timedmeta import PipelineConfig, TimedMetaException, run_subtitle_pipeline
from timedmeta.core.models import DetectionKind
from timedmeta.utils.logging_config import configure_logging


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render a video's analysis results as a WebVTT metadata track")
    parser.add_argument("video_key", help="Object key of the .mp4 in the input bucket")
    parser.add_argument(
        "--kind",
        choices=[kind.value for kind in DetectionKind],
        default=None,
        help="Detection kind (defaults to ANALYSIS_KIND)",
    )
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> int:
    config = PipelineConfig()
    configure_logging(config.logging)

    logger.info("=" * 80)
    logger.info(f"Subtitle pipeline for {args.video_key}")
    logger.info("=" * 80)
    try:
        context = await run_subtitle_pipeline(args.video_key, kind=args.kind, config=config)
    except TimedMetaException as e:
        logger.error(f"Pipeline failed [{e.error_code}]: {e}")
        return 1

    logger.info(f"  Job ID: {context.job_id}")
    logger.info(f"  Poll attempts: {context.attempts}")
    if context.subtitles:
        logger.info(f"  WebVTT: {context.subtitles.vtt}")
        logger.info(f"  Viewer: {context.subtitles.html}")
    return 0


def main(argv=None) -> int:
    load_dotenv()
    return asyncio.run(run(parse_args(argv)))


if __name__ == "__main__":
    sys.exit(main())
