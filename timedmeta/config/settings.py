from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, Field, model_validator
from typing import Any, Dict, Optional

from ..core.models import DetectionKind


class StorageConfig(BaseSettings):
    """Blob storage configuration."""

    provider: str = "s3"
    region: Optional[str] = None
    endpoint_url: Optional[str] = None
    input_bucket: Optional[str] = None
    output_bucket: Optional[str] = None
    # local provider
    base_path: str = "./local_storage"
    # azure provider
    account_url: Optional[str] = None
    use_managed_identity: bool = True

    model_config = SettingsConfigDict(
        env_prefix="STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        extra="ignore",
        case_sensitive=False
    )


class QueueConfig(BaseSettings):
    """Notification queue configuration."""

    provider: str = "sqs"
    region: Optional[str] = None
    endpoint_url: Optional[str] = None
    url: Optional[str] = None
    max_messages: int = Field(default=10, ge=1, le=10)
    wait_time_seconds: int = Field(default=0, ge=0, le=20)

    model_config = SettingsConfigDict(
        env_prefix="QUEUE_",
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        extra="ignore",
        case_sensitive=False
    )


class AnalysisConfig(BaseSettings):
    """Video analysis job configuration."""

    provider: str = "rekognition"
    region: Optional[str] = None
    endpoint_url: Optional[str] = None
    kind: DetectionKind = DetectionKind.PERSON
    # SNS topic the analysis job posts its completion status to
    topic_arn: Optional[str] = None
    # IAM role that lets the analysis job publish to the topic
    role_arn: Optional[str] = None
    max_results: int = Field(default=1000, ge=1, le=1000)
    max_pages: int = Field(default=1000, ge=1)

    model_config = SettingsConfigDict(
        env_prefix="ANALYSIS_",
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        extra="ignore",
        case_sensitive=False
    )


class WorkflowConfig(BaseSettings):
    """Wait / poll / fetch loop configuration."""

    wait_seconds: float = Field(default=5.0, ge=0)
    max_attempts: Optional[int] = Field(default=None, ge=1)

    model_config = SettingsConfigDict(
        env_prefix="WORKFLOW_",
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        extra="ignore",
        case_sensitive=False
    )


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    level: str = "INFO"
    log_file: Optional[str] = None
    enable_json: bool = False
    enable_file_logging: bool = False
    max_file_size: str = "10 MB"
    retention_days: int = 7

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        extra="ignore",
        case_sensitive=False
    )


class PipelineConfig(BaseSettings):
    """Main configuration class.

    Every component receives the sub-config it needs at construction time;
    nothing reads the environment after this object is built.
    """

    app_name: str = "timedmeta"
    environment: str = "development"
    region: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("region", "REGION", "AWS_REGION"),
    )

    storage: StorageConfig = Field(default_factory=StorageConfig)
    queue: QueueConfig = Field(default_factory=QueueConfig)
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    workflow: WorkflowConfig = Field(default_factory=WorkflowConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_prefix="PIPELINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False
    )

    @model_validator(mode="after")
    def _inherit_region(self):
        for section in (self.storage, self.queue, self.analysis):
            if section.region is None and self.region:
                section.region = self.region
        return self

    def provider_config(self, section: str) -> Dict[str, Any]:
        """Return a plain dict for the given section, the shape providers are built from."""
        return getattr(self, section).model_dump()
