"""
Configuration loader for the Infrastructure Manifest Scanner.
"""

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_AWS_REGION = "us-east-1"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class Config:
    """Configuration class for the scanner."""

    manifest_path: str
    aws_region: str = DEFAULT_AWS_REGION
    log_level: str = "INFO"
    concurrency: int = 10
    account: Optional[str] = None
    max_retries: int = 3
    timeout_seconds: int = 30


def _int_from_env(name: str, default: int, minimum: int) -> int:
    raw = os.environ.get(name, str(default))
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")
    if value < minimum:
        raise ValueError(f"{name} must be at least {minimum}, got {value}")
    return value


def load_config() -> Config:
    """
    Loads and validates configuration from environment variables.

    Returns:
        Config object with validated settings

    Raises:
        ValueError: If required configuration is missing or invalid
    """
    # Required configuration
    manifest_path = os.environ.get("INFRA_MANIFEST_PATH")
    if not manifest_path:
        raise ValueError("INFRA_MANIFEST_PATH environment variable is required")

    # Optional configuration with defaults
    aws_region = os.environ.get("AWS_REGION") or DEFAULT_AWS_REGION
    log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}")

    return Config(
        manifest_path=manifest_path,
        aws_region=aws_region,
        log_level=log_level,
        concurrency=_int_from_env("SCAN_CONCURRENCY", 10, minimum=1),
        account=os.environ.get("SCAN_ACCOUNT") or None,
        max_retries=_int_from_env("MAX_RETRIES", 3, minimum=0),
        timeout_seconds=_int_from_env("TIMEOUT_SECONDS", 30, minimum=1),
    )
