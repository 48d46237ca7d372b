"""
Cloud Run Resource Checkers Module.
"""

from google.cloud import run_v2

from ....utils import checker_error_handler
from ...types import GcpClient, ParsedGcpResource, ResourceCheckResult
from ..base import make_result
from .base import GcpChecker, is_gcp_not_found


@checker_error_handler(is_gcp_not_found)
def _check_service(services_client: GcpClient, resource: ParsedGcpResource) -> ResourceCheckResult:
    name = (
        f"projects/{resource.project}/locations/{resource.location}"
        f"/services/{resource.resource_id}"
    )
    services_client.get_service(name=name)
    return make_result(resource, exists=True)


class CloudRunChecker(GcpChecker):
    service = "run"
    label = "Cloud Run"
    check_functions = {"services": _check_service}

    def create_client(self) -> GcpClient:
        return run_v2.ServicesClient()
