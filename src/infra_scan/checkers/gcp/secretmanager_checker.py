"""
Secret Manager Resource Checkers Module.
"""

from google.cloud import secretmanager

from ....utils import checker_error_handler
from ...types import GcpClient, ParsedGcpResource, ResourceCheckResult
from ..base import make_result
from .base import GcpChecker, is_gcp_not_found


@checker_error_handler(is_gcp_not_found)
def _check_secret(secrets_client: GcpClient, resource: ParsedGcpResource) -> ResourceCheckResult:
    secrets_client.get_secret(name=f"projects/{resource.project}/secrets/{resource.resource_id}")
    return make_result(resource, exists=True)


class SecretManagerChecker(GcpChecker):
    service = "secretmanager"
    label = "Secret Manager"
    check_functions = {"secrets": _check_secret}

    def create_client(self) -> GcpClient:
        return secretmanager.SecretManagerServiceClient()
