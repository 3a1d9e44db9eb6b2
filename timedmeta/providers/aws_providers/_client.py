import boto3
from botocore.config import Config as BotoConfig
from typing import Any, Dict


def create_client(service_name: str, config: Dict[str, Any]) -> Any:
    """Build a boto3 client from a provider config dict (region / endpoint_url)."""
    kwargs: Dict[str, Any] = {
        "config": BotoConfig(retries={"max_attempts": 1, "mode": "standard"}),
    }
    if config.get("region"):
        kwargs["region_name"] = config["region"]
    if config.get("endpoint_url"):
        kwargs["endpoint_url"] = config["endpoint_url"]
    return boto3.client(service_name, **kwargs)
