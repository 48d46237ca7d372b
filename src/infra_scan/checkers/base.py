"""
Base AWS Resource Checkers Module.

This module contains the shared pieces of every AWS checker: client settings,
the per-region boto3 client cache, the base checker class that runs blocking
SDK calls off the event loop, and the helpers that classify AWS errors as
"resource not found".
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import ClientError

from ...utils import setup_logging
from ..types import ParsedArn, ResourceCheckResult, ResourceIdentifier

logger = setup_logging()

GLOBAL_REGION = "us-east-1"

CheckFunction = Callable[[Any, Any], ResourceCheckResult]


@dataclass(frozen=True)
class ClientSettings:
    """SDK client settings shared by every checker of a registry."""

    global_region: str = GLOBAL_REGION
    max_retries: int = 3
    timeout_seconds: int = 30

    def botocore_config(self) -> BotoConfig:
        return BotoConfig(
            retries={"max_attempts": self.max_retries, "mode": "standard"},
            connect_timeout=self.timeout_seconds,
            read_timeout=self.timeout_seconds,
        )


class ClientCache:
    """
    boto3 clients for one service, memoised per region.

    An empty region (S3 and IAM ARNs carry none) maps to the configured
    global region. Clients are created on the event-loop thread only.
    """

    def __init__(self, service_name: str, settings: Optional[ClientSettings] = None) -> None:
        self.service_name = service_name
        self.settings = settings or ClientSettings()
        self._clients: Dict[str, Any] = {}

    def get(self, region: str = "") -> Any:
        region = region or self.settings.global_region
        client = self._clients.get(region)
        if client is None:
            logger.debug(f"Creating {self.service_name} client for {region}")
            client = boto3.client(
                self.service_name,
                region_name=region,
                config=self.settings.botocore_config(),
            )
            self._clients[region] = client
        return client

    def __len__(self) -> int:
        return len(self._clients)


def make_result(
    identifier: ResourceIdentifier, exists: bool, error: Optional[str] = None
) -> ResourceCheckResult:
    return ResourceCheckResult(
        arn=identifier.raw,
        exists=exists,
        service=identifier.service,
        resource_type=identifier.resource_type,
        resource_id=identifier.resource_id,
        error=error,
    )


def unsupported_type_result(identifier: ResourceIdentifier, label: str) -> ResourceCheckResult:
    return make_result(
        identifier,
        exists=False,
        error=f"Unsupported {label} resource type: {identifier.resource_type}",
    )


def aws_error_code(error: BaseException) -> str:
    if isinstance(error, ClientError):
        return str(error.response.get("Error", {}).get("Code", ""))
    return ""


def aws_http_status(error: BaseException) -> Optional[int]:
    if isinstance(error, ClientError):
        return error.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
    return None


def aws_not_found(*codes: str, statuses: tuple = ()) -> Callable[[BaseException], bool]:
    """
    Builds a predicate recognising a service's "not found" errors.

    Matches the ClientError code, the modeled exception class name, or the
    HTTP status of the response.
    """

    def is_not_found(error: BaseException) -> bool:
        if aws_error_code(error) in codes or type(error).__name__ in codes:
            return True
        status = aws_http_status(error)
        return status is not None and status in statuses

    return is_not_found


class AwsChecker:
    """
    Base class for AWS service checkers.

    Subclasses map resource types to check functions taking
    ``(client, arn)``. The client is picked from the cache on the event-loop
    thread; the blocking call then runs in a worker thread.
    """

    service = ""
    label = ""
    client_name = ""
    check_functions: Dict[str, CheckFunction] = {}

    def __init__(self, settings: Optional[ClientSettings] = None) -> None:
        self.settings = settings or ClientSettings()
        self.clients = ClientCache(self.client_name or self.service, self.settings)

    def client_region(self, arn: ParsedArn) -> str:
        return arn.region

    async def check(self, arn: ParsedArn) -> ResourceCheckResult:
        check_function = self.check_functions.get(arn.resource_type)
        if check_function is None:
            return unsupported_type_result(arn, self.label or self.service.upper())
        client = self.clients.get(self.client_region(arn))
        return await asyncio.to_thread(check_function, client, arn)
