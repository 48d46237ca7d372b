"""
Tests for the Lambda entry point.
"""

import json
import unittest
from unittest.mock import MagicMock, patch

from src.infra_scan.exceptions import ManifestError
from src.infra_scan.summary import summarize
from src.infra_scan.types import InfraScanResult, ResourceCheckResult
from src.main import lambda_handler

MISSING = ResourceCheckResult(
    arn="arn:aws:sqs:us-east-1:111111111111:jobs",
    exists=False,
    service="sqs",
    resource_type="queue",
    resource_id="jobs",
)


class TestLambdaHandler(unittest.TestCase):
    """Test status codes and response bodies."""

    @patch.dict("os.environ", {"INFRA_MANIFEST_PATH": "s3://manifests/infra.json"}, clear=True)
    @patch("src.main.run_scan")
    def test_clean_scan(self, mock_run_scan: MagicMock) -> None:
        mock_run_scan.return_value = InfraScanResult(
            manifest="s3://manifests/infra.json", results=[], summary=summarize([])
        )
        response = lambda_handler({}, None)

        self.assertEqual(response["statusCode"], 200)
        body = json.loads(response["body"])
        self.assertFalse(body["drift_detected"])
        self.assertNotIn("issue", body)
        self.assertEqual(mock_run_scan.call_args[0][0].manifest_path, "s3://manifests/infra.json")

    @patch.dict("os.environ", {"INFRA_MANIFEST_PATH": "s3://manifests/infra.json"}, clear=True)
    @patch("src.main.run_scan")
    def test_drift_includes_issue(self, mock_run_scan: MagicMock) -> None:
        mock_run_scan.return_value = InfraScanResult(
            manifest="s3://manifests/infra.json", results=[MISSING], summary=summarize([MISSING])
        )
        response = lambda_handler({"repository": "org/shop"}, None)

        body = json.loads(response["body"])
        self.assertEqual(response["statusCode"], 200)
        self.assertTrue(body["drift_detected"])
        self.assertEqual(body["issue"]["label"], "drift:infra")
        self.assertIn("Repository: `org/shop`", body["issue"]["body"])
        self.assertEqual(body["summary"]["missing"], 1)

    @patch.dict("os.environ", {}, clear=True)
    def test_missing_config_is_400(self) -> None:
        response = lambda_handler({}, None)
        self.assertEqual(response["statusCode"], 400)
        self.assertIn("INFRA_MANIFEST_PATH", json.loads(response["body"])["message"])

    @patch.dict("os.environ", {"INFRA_MANIFEST_PATH": "infra.json"}, clear=True)
    @patch("src.main.run_scan")
    def test_manifest_error_is_400(self, mock_run_scan: MagicMock) -> None:
        mock_run_scan.side_effect = ManifestError("Manifest file not found: infra.json")
        response = lambda_handler({}, None)
        self.assertEqual(response["statusCode"], 400)

    @patch.dict("os.environ", {"INFRA_MANIFEST_PATH": "infra.json"}, clear=True)
    @patch("src.main.run_scan")
    def test_unexpected_error_is_500(self, mock_run_scan: MagicMock) -> None:
        mock_run_scan.side_effect = RuntimeError("event loop closed")
        response = lambda_handler({}, None)
        self.assertEqual(response["statusCode"], 500)
        self.assertEqual(json.loads(response["body"])["error"], "Internal server error")


if __name__ == "__main__":
    unittest.main()
