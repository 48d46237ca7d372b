"""
Unit tests for the GCP resource checkers.
All GCP interactions are mocked to avoid real API calls.
"""

import unittest
from unittest.mock import MagicMock, patch

from google.api_core.exceptions import NotFound, PermissionDenied

from src.infra_scan.checkers.gcp.artifactregistry_checker import ArtifactRegistryChecker
from src.infra_scan.checkers.gcp.base import GcpChecker, is_gcp_not_found
from src.infra_scan.checkers.gcp.cloudrun_checker import CloudRunChecker
from src.infra_scan.checkers.gcp.iam_checker import ServiceAccountChecker
from src.infra_scan.checkers.gcp.secretmanager_checker import SecretManagerChecker
from src.infra_scan.gcp import parse_gcp_resource


class TestIsGcpNotFound(unittest.TestCase):
    """Test not-found classification across error flavours."""

    def test_not_found_variants(self) -> None:
        self.assertTrue(is_gcp_not_found(NotFound("service missing")))
        self.assertTrue(is_gcp_not_found(RuntimeError("5 NOT_FOUND: Secret not found")))

        http_error = RuntimeError("client error")
        http_error.response = MagicMock(status_code=404)  # type: ignore[attr-defined]
        self.assertTrue(is_gcp_not_found(http_error))

    def test_other_errors(self) -> None:
        self.assertFalse(is_gcp_not_found(PermissionDenied("no access")))
        self.assertFalse(is_gcp_not_found(RuntimeError("deadline exceeded")))


class TestGcpCheckerBase(unittest.TestCase):
    """Test the shared GCP checker base."""

    def test_create_client_must_be_overridden(self) -> None:
        with self.assertRaises(NotImplementedError):
            GcpChecker().get_client()


class TestCloudRunChecker(unittest.IsolatedAsyncioTestCase):
    """Test Cloud Run service checks."""

    PATH = "projects/my-proj/locations/us-central1/services/api"

    async def test_service_exists(self) -> None:
        client = MagicMock()
        with patch.object(CloudRunChecker, "create_client", return_value=client) as create_client:
            checker = CloudRunChecker()
            result = await checker.check(parse_gcp_resource(self.PATH))
            await checker.check(parse_gcp_resource(self.PATH))

        client.get_service.assert_called_with(name=self.PATH)
        create_client.assert_called_once()
        self.assertTrue(result.exists)
        self.assertEqual(result.service, "run")

    async def test_service_not_found(self) -> None:
        client = MagicMock()
        client.get_service.side_effect = NotFound("Resource 'api' was not found")
        with patch.object(CloudRunChecker, "create_client", return_value=client):
            result = await CloudRunChecker().check(parse_gcp_resource(self.PATH))

        self.assertFalse(result.exists)
        self.assertIsNone(result.error)

    async def test_permission_denied_is_error(self) -> None:
        client = MagicMock()
        client.get_service.side_effect = PermissionDenied("caller lacks run.services.get")
        with patch.object(CloudRunChecker, "create_client", return_value=client):
            result = await CloudRunChecker().check(parse_gcp_resource(self.PATH))

        self.assertFalse(result.exists)
        self.assertIn("run.services.get", result.error)


class TestSecretManagerChecker(unittest.IsolatedAsyncioTestCase):
    """Test Secret Manager checks."""

    async def test_secret_version_checks_secret(self) -> None:
        client = MagicMock()
        with patch.object(SecretManagerChecker, "create_client", return_value=client):
            result = await SecretManagerChecker().check(
                parse_gcp_resource("projects/my-proj/secrets/db-password/versions/2")
            )

        client.get_secret.assert_called_once_with(name="projects/my-proj/secrets/db-password")
        self.assertTrue(result.exists)


class TestArtifactRegistryChecker(unittest.IsolatedAsyncioTestCase):
    """Test Artifact Registry checks."""

    async def test_repository_not_found(self) -> None:
        client = MagicMock()
        client.get_repository.side_effect = NotFound("no such repository")
        path = "projects/my-proj/locations/europe-west2/repositories/images"
        with patch.object(ArtifactRegistryChecker, "create_client", return_value=client):
            result = await ArtifactRegistryChecker().check(parse_gcp_resource(path))

        client.get_repository.assert_called_once_with(name=path)
        self.assertFalse(result.exists)
        self.assertIsNone(result.error)

    async def test_unsupported_type(self) -> None:
        result = await ArtifactRegistryChecker().check(
            parse_gcp_resource("projects/my-proj/locations/eu/packages/pkg")
        )
        self.assertEqual(result.error, "Unsupported Artifact Registry resource type: packages")


class TestServiceAccountChecker(unittest.IsolatedAsyncioTestCase):
    """Test IAM service account checks over REST."""

    PATH = "projects/my-proj/serviceAccounts/deployer@my-proj.iam.gserviceaccount.com"

    async def test_http_404_is_missing(self) -> None:
        session = MagicMock()
        session.get.return_value = MagicMock(status_code=404)
        with patch.object(ServiceAccountChecker, "create_client", return_value=session):
            result = await ServiceAccountChecker().check(parse_gcp_resource(self.PATH))

        session.get.assert_called_once_with(
            "https://iam.googleapis.com/v1/projects/my-proj/serviceAccounts/"
            "deployer@my-proj.iam.gserviceaccount.com"
        )
        self.assertFalse(result.exists)
        self.assertIsNone(result.error)

    async def test_http_200_exists(self) -> None:
        session = MagicMock()
        session.get.return_value = MagicMock(status_code=200)
        with patch.object(ServiceAccountChecker, "create_client", return_value=session):
            result = await ServiceAccountChecker().check(parse_gcp_resource(self.PATH))

        self.assertTrue(result.exists)

    async def test_http_403_is_error(self) -> None:
        session = MagicMock()
        response = MagicMock(status_code=403)
        response.raise_for_status.side_effect = RuntimeError("403 Client Error: Forbidden")
        session.get.return_value = response
        with patch.object(ServiceAccountChecker, "create_client", return_value=session):
            result = await ServiceAccountChecker().check(parse_gcp_resource(self.PATH))

        self.assertFalse(result.exists)
        self.assertEqual(result.error, "403 Client Error: Forbidden")

    @patch("src.infra_scan.checkers.gcp.iam_checker.google.auth.default")
    def test_client_uses_cloud_platform_scope(self, mock_default: MagicMock) -> None:
        mock_default.return_value = (MagicMock(), "my-proj")
        with patch("src.infra_scan.checkers.gcp.iam_checker.IAMSession") as mock_session:
            session = ServiceAccountChecker().get_client()

        self.assertIs(session, mock_session.return_value)
        mock_session.assert_called_once_with(mock_default.return_value[0], 30)

        mock_default.assert_called_once_with(
            scopes=["https://www.googleapis.com/auth/cloud-platform"]
        )


if __name__ == "__main__":
    unittest.main()
