"""
Utility functions for the Infrastructure Manifest Scanner.
"""

import functools
import logging
from typing import TYPE_CHECKING, Any, Callable, Optional, TypeVar, cast
from urllib.parse import urlparse

import boto3

if TYPE_CHECKING:
    from .infra_scan.types import ResourceCheckResult, ResourceIdentifier

LOGGER_NAME = "infra_scan"


def setup_logging(log_level: Optional[str] = None) -> logging.Logger:
    """
    Sets up logging configuration for the scanner.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR). When omitted,
            a level chosen by an earlier call is kept (INFO on first use).

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(LOGGER_NAME)
    if log_level is not None:
        logger.setLevel(getattr(logging, log_level.upper()))
    elif logger.level == logging.NOTSET:
        logger.setLevel(logging.INFO)

    # Prevent duplicate handlers
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def error_message(error: BaseException) -> str:
    return str(error) or type(error).__name__


F = TypeVar("F", bound=Callable[..., Any])


def checker_error_handler(is_not_found: Callable[[BaseException], bool]) -> Callable[[F], F]:
    """
    Decorator for consistent error handling and logging in resource checkers.

    The wrapped function takes ``(client, identifier)`` and returns a result
    for a resource that answered. Exceptions are converted into results:
    those classified by `is_not_found` become a missing resource, anything
    else becomes an error result carrying the exception message.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(client: object, identifier: "ResourceIdentifier") -> "ResourceCheckResult":
            from .infra_scan.types import ResourceCheckResult

            logger = setup_logging()
            try:
                return func(client, identifier)
            except Exception as e:
                if is_not_found(e):
                    logger.debug(f"{identifier.raw} not found ({type(e).__name__})")
                    return ResourceCheckResult(
                        arn=identifier.raw,
                        exists=False,
                        service=identifier.service,
                        resource_type=identifier.resource_type,
                        resource_id=identifier.resource_id,
                    )
                logger.warning(f"Error in {func.__name__} for {identifier.raw}: {e}")
                return ResourceCheckResult(
                    arn=identifier.raw,
                    exists=False,
                    service=identifier.service,
                    resource_type=identifier.resource_type,
                    resource_id=identifier.resource_id,
                    error=error_message(e),
                )

        return cast(F, wrapper)

    return decorator


def download_s3_file(s3_path: str, logger: Optional[logging.Logger] = None) -> str:
    """
    Downloads a file from S3 and returns its content as a string.

    Args:
        s3_path: S3 path in format 's3://bucket/key'
        logger: Logger instance for error logging

    Returns:
        File content as string

    Raises:
        ValueError: If S3 path is invalid
        Exception: If S3 download fails
    """
    if logger is None:
        logger = setup_logging()

    parsed = urlparse(s3_path)
    bucket = parsed.netloc
    key = parsed.path.lstrip("/")

    if parsed.scheme != "s3" or not bucket or not key:
        raise ValueError(f"Invalid S3 path: {s3_path}")

    try:
        logger.info(f"Downloading S3 file: {s3_path}")
        s3_client = boto3.client("s3")
        response = s3_client.get_object(Bucket=bucket, Key=key)
        content_bytes = response["Body"].read()
        content = (
            content_bytes.decode("utf-8")
            if isinstance(content_bytes, bytes)
            else str(content_bytes)
        )
        logger.info(f"Successfully downloaded {len(content)} bytes from S3")
        return content

    except Exception as e:
        logger.error(f"Failed to download S3 file {s3_path}: {str(e)}")
        raise
