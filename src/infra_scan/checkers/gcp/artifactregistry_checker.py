"""
Artifact Registry Resource Checkers Module.
"""

from google.cloud import artifactregistry_v1

from ....utils import checker_error_handler
from ...types import GcpClient, ParsedGcpResource, ResourceCheckResult
from ..base import make_result
from .base import GcpChecker, is_gcp_not_found


@checker_error_handler(is_gcp_not_found)
def _check_repository(registry_client: GcpClient, resource: ParsedGcpResource) -> ResourceCheckResult:
    name = (
        f"projects/{resource.project}/locations/{resource.location}"
        f"/repositories/{resource.resource_id}"
    )
    registry_client.get_repository(name=name)
    return make_result(resource, exists=True)


class ArtifactRegistryChecker(GcpChecker):
    service = "artifactregistry"
    label = "Artifact Registry"
    check_functions = {"repositories": _check_repository}

    def create_client(self) -> GcpClient:
        return artifactregistry_v1.ArtifactRegistryClient()
