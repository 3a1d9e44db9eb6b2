from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from ...core.models import DetectionKind


class VideoAnalysisProvider(ABC):
    """Abstract base class for asynchronous video analysis services."""

    @abstractmethod
    async def start_job(
        self,
        kind: DetectionKind,
        bucket: str,
        key: str,
        client_request_token: str,
        topic_arn: str,
        role_arn: str,
    ) -> Dict[str, Any]:
        """Start an analysis job; the response carries ``JobId``."""
        pass

    @abstractmethod
    async def get_results_page(
        self,
        kind: DetectionKind,
        job_id: str,
        next_token: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Fetch one page of job results."""
        pass

    @abstractmethod
    async def close(self):
        """Close the underlying client and cleanup."""
        pass
