"""Configuration for the timed metadata pipeline."""

from .settings import (
    StorageConfig,
    QueueConfig,
    AnalysisConfig,
    WorkflowConfig,
    LoggingConfig,
    PipelineConfig,
)

__all__ = [
    "StorageConfig",
    "QueueConfig",
    "AnalysisConfig",
    "WorkflowConfig",
    "LoggingConfig",
    "PipelineConfig",
]
