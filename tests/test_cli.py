"""
Tests for the command-line interface.
"""

import io
import json
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest.mock import MagicMock, patch

import run_infra_scan
from src.infra_scan.exceptions import ManifestError
from src.infra_scan.summary import summarize
from src.infra_scan.types import InfraScanResult, ResourceCheckResult


def result_with(*results: ResourceCheckResult) -> InfraScanResult:
    return InfraScanResult(manifest="m.json", results=list(results), summary=summarize(results))


def resource(exists: bool, error=None) -> ResourceCheckResult:
    return ResourceCheckResult(
        arn="arn:aws:sqs:us-east-1:111111111111:jobs",
        exists=exists,
        service="sqs",
        resource_type="queue",
        resource_id="jobs",
        error=error,
    )


class TestExitCodes(unittest.TestCase):
    """Test mapping scan summaries to exit codes."""

    def test_mapping(self) -> None:
        self.assertEqual(run_infra_scan.exit_code_for(result_with(resource(True))), 0)
        self.assertEqual(run_infra_scan.exit_code_for(result_with(resource(False))), 1)
        self.assertEqual(
            run_infra_scan.exit_code_for(result_with(resource(False), resource(False, "boom"))), 3
        )


class TestMain(unittest.TestCase):
    """Test argument handling and process exit."""

    def _run(self, argv):
        stdout, stderr = io.StringIO(), io.StringIO()
        with redirect_stdout(stdout), redirect_stderr(stderr):
            with self.assertRaises(SystemExit) as context:
                run_infra_scan.main(argv)
        return context.exception.code, stdout.getvalue(), stderr.getvalue()

    @patch("run_infra_scan.run_scan")
    def test_json_output_and_config(self, mock_run_scan: MagicMock) -> None:
        mock_run_scan.return_value = result_with(resource(False))
        code, stdout, _ = self._run(
            ["--manifest", "m.json", "--account", "prod", "--concurrency", "3", "--output-format", "json"]
        )

        self.assertEqual(code, 1)
        self.assertEqual(json.loads(stdout)["summary"]["missing"], 1)
        config = mock_run_scan.call_args[0][0]
        self.assertEqual(config.account, "prod")
        self.assertEqual(config.concurrency, 3)
        self.assertEqual(config.aws_region, "us-east-1")

    @patch("run_infra_scan.run_scan")
    def test_manifest_error_exits_2(self, mock_run_scan: MagicMock) -> None:
        mock_run_scan.side_effect = ManifestError("Manifest file not found: m.json")
        code, _, stderr = self._run(["--manifest", "m.json"])
        self.assertEqual(code, 2)
        self.assertIn("Manifest file not found", stderr)

    @patch("run_infra_scan.run_scan")
    def test_unexpected_error_exits_3(self, mock_run_scan: MagicMock) -> None:
        mock_run_scan.side_effect = RuntimeError("no credentials")
        code, _, _ = self._run(["--manifest", "m.json"])
        self.assertEqual(code, 3)

    def test_invalid_concurrency_exits_2(self) -> None:
        code, _, _ = self._run(["--manifest", "m.json", "--concurrency", "0"])
        self.assertEqual(code, 2)

    def test_unknown_output_format_is_rejected(self) -> None:
        code, _, stderr = self._run(["--manifest", "m.json", "--output-format", "yaml"])
        self.assertEqual(code, 2)
        self.assertIn("invalid choice", stderr)

    @patch("run_infra_scan.run_scan")
    def test_clean_scan_exits_0(self, mock_run_scan: MagicMock) -> None:
        mock_run_scan.return_value = result_with(resource(True))
        code, stdout, _ = self._run(["--manifest", "m.json"])
        self.assertEqual(code, 0)
        self.assertIn("INFRASTRUCTURE SCAN REPORT", stdout)


if __name__ == "__main__":
    unittest.main()
