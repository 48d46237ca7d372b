"""
Base GCP Resource Checkers Module.

GCP checkers hold a single client, created on first use, and classify
"not found" across the gRPC, REST and HTTP flavours the client libraries raise.
"""

import asyncio
from typing import Any, Dict, Optional

from google.api_core.exceptions import NotFound

from ....utils import setup_logging
from ...types import GcpClient, ParsedGcpResource, ResourceCheckResult
from ..base import CheckFunction, ClientSettings, unsupported_type_result

logger = setup_logging()

GRPC_NOT_FOUND = 5
HTTP_NOT_FOUND = 404


def is_gcp_not_found(error: BaseException) -> bool:
    """Returns True if a GCP client error means the resource does not exist."""
    if isinstance(error, NotFound):
        return True

    code = getattr(error, "code", None)
    if callable(code):
        # grpc.RpcError exposes code() returning a StatusCode enum
        code = code()
    code = getattr(code, "value", code)
    if isinstance(code, tuple):
        code = code[0]
    if code in (GRPC_NOT_FOUND, HTTP_NOT_FOUND):
        return True

    response = getattr(error, "response", None)
    if getattr(response, "status_code", None) == HTTP_NOT_FOUND:
        return True

    return "NOT_FOUND" in str(error)


class GcpChecker:
    """
    Base class for GCP service checkers.

    Subclasses implement `create_client` and map resource types to check
    functions taking ``(client, resource)``.
    """

    service = ""
    label = ""
    check_functions: Dict[str, CheckFunction] = {}

    def __init__(self, settings: Optional[ClientSettings] = None) -> None:
        self.settings = settings or ClientSettings()
        self._client: Optional[GcpClient] = None

    def create_client(self) -> GcpClient:
        """Builds the SDK client. Subclasses must override this."""
        raise NotImplementedError

    def get_client(self) -> GcpClient:
        if self._client is None:
            logger.debug(f"Creating GCP {self.service} client")
            self._client = self.create_client()
        return self._client

    async def check(self, resource: ParsedGcpResource) -> ResourceCheckResult:
        check_function = self.check_functions.get(resource.resource_type)
        if check_function is None:
            return unsupported_type_result(resource, self.label or self.service)
        client: Any = self.get_client()
        return await asyncio.to_thread(check_function, client, resource)
