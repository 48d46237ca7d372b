"""
GCP IAM Resource Checkers Module.

Service accounts are looked up through the IAM REST API with an
authorised requests session.
"""

import google.auth
from google.auth.transport.requests import AuthorizedSession

from ....utils import checker_error_handler
from ...types import GcpClient, ParsedGcpResource, ResourceCheckResult
from ..base import make_result
from .base import HTTP_NOT_FOUND, GcpChecker, is_gcp_not_found

CLOUD_PLATFORM_SCOPE = "https://www.googleapis.com/auth/cloud-platform"
IAM_API_URL = "https://iam.googleapis.com/v1"


class IAMSession(AuthorizedSession):
    """AuthorizedSession applying a default request timeout."""

    def __init__(self, credentials: object, timeout_seconds: int) -> None:
        super().__init__(credentials)
        self.timeout_seconds = timeout_seconds

    def request(self, method, url, *args, **kwargs):  # type: ignore[override]
        kwargs.setdefault("timeout", self.timeout_seconds)
        return super().request(method, url, *args, **kwargs)


@checker_error_handler(is_gcp_not_found)
def _check_service_account(session: GcpClient, resource: ParsedGcpResource) -> ResourceCheckResult:
    url = f"{IAM_API_URL}/projects/{resource.project}/serviceAccounts/{resource.resource_id}"
    response = session.get(url)
    if response.status_code == HTTP_NOT_FOUND:
        return make_result(resource, exists=False)
    response.raise_for_status()
    return make_result(resource, exists=True)


class ServiceAccountChecker(GcpChecker):
    service = "iam"
    label = "IAM"
    check_functions = {"serviceAccounts": _check_service_account}

    def create_client(self) -> GcpClient:
        credentials, _ = google.auth.default(scopes=[CLOUD_PLATFORM_SCOPE])
        return IAMSession(credentials, self.settings.timeout_seconds)
