"""
Drains all result pages of a finished analysis job.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from loguru import logger

from ..exceptions import ProviderException
from ..providers.base import VideoAnalysisProvider
from .models import DetectionKind


@dataclass
class PaginatedResults:
    """Every record of a job plus the video description reported with it."""
    items: List[Dict[str, Any]] = field(default_factory=list)
    s3_object: Optional[Dict[str, Any]] = None
    video_metadata: Optional[Dict[str, Any]] = None


class ResultPaginator:
    """Sequential get-results calls following ``NextToken``."""

    def __init__(self, analysis_provider: VideoAnalysisProvider, max_pages: int = 1000):
        self.analysis_provider = analysis_provider
        self.max_pages = max_pages

    async def paginate(self, kind: DetectionKind, job_id: str) -> PaginatedResults:
        """
        Collect every page of ``job_id``.

        Pagination stops when a page has no ``NextToken`` or lacks the kind's
        result collection. ``Video.S3Object`` and ``VideoMetadata`` are taken
        from the first page that reports them.

        Raises:
            ProviderException: if the job failed or ``max_pages`` is exceeded
        """
        kind = DetectionKind(kind)
        results = PaginatedResults()
        next_token: Optional[str] = None
        pages = 0

        while True:
            if pages >= self.max_pages:
                raise ProviderException(
                    f"Job {job_id} returned more than {self.max_pages} result pages",
                    error_code="TOO_MANY_PAGES",
                    details={"job_id": job_id, "max_pages": self.max_pages},
                )
            page = await self.analysis_provider.get_results_page(kind, job_id, next_token)
            pages += 1

            if page.get("JobStatus") == "FAILED":
                raise ProviderException(
                    f"Job {job_id} failed: {page.get('StatusMessage', 'no status message')}",
                    error_code="JOB_FAILED",
                    details={"job_id": job_id},
                )

            records = page.get(kind.result_key)
            if records is None:
                break

            if results.s3_object is None:
                results.s3_object = (page.get("Video") or {}).get("S3Object") or None
            if results.video_metadata is None:
                results.video_metadata = page.get("VideoMetadata") or None
            results.items.extend(records)

            next_token = page.get("NextToken")
            if not next_token:
                break

        logger.info(f"Fetched {len(results.items)} {kind.value} record(s) for job {job_id} in {pages} page(s)")
        return results
