"""
Tests for report formatting.
"""

import json
import unittest

from src.infra_scan.output import (
    DRIFT_ISSUE_LABEL,
    DRIFT_ISSUE_TITLE,
    MAX_ISSUE_BODY_LENGTH,
    OUTPUT_FORMATS,
    format_drift_issue,
    format_scan,
)
from src.infra_scan.summary import summarize
from src.infra_scan.types import AccountScanResult, InfraScanResult, ResourceCheckResult

FOUND = ResourceCheckResult(
    arn="arn:aws:dynamodb:us-east-1:111111111111:table/users",
    exists=True,
    service="dynamodb",
    resource_type="table",
    resource_id="users",
)
MISSING = ResourceCheckResult(
    arn="arn:aws:sqs:us-east-1:111111111111:jobs",
    exists=False,
    service="sqs",
    resource_type="queue",
    resource_id="jobs",
)
ERRORED = ResourceCheckResult(
    arn="arn:aws:s3:::assets",
    exists=False,
    service="s3",
    resource_type="bucket",
    resource_id="assets",
    error="Access throttled",
)


def legacy_result(results):
    return InfraScanResult(manifest="manifest.json", project="shop", results=results, summary=summarize(results))


class TestFormatScan(unittest.TestCase):
    """Test text and JSON scan reports."""

    def test_text_legacy_sections(self) -> None:
        text = format_scan(legacy_result([FOUND, MISSING, ERRORED]), "text")
        self.assertIn("Manifest: manifest.json", text)
        self.assertIn("Project: shop", text)
        self.assertIn("=== Found (1) ===", text)
        self.assertIn("dynamodb/table/users", text)
        self.assertIn("=== Missing (1) ===", text)
        self.assertIn("s3/bucket/assets - Access throttled", text)
        self.assertIn("Errors:  1", text)

    def test_text_multi_account(self) -> None:
        results = [FOUND, MISSING]
        result = InfraScanResult(
            manifest="manifest.toml",
            account_results={
                "aws:111111111111": AccountScanResult(
                    alias="prod", results=results, summary=summarize(results)
                )
            },
            summary=summarize(results),
        )
        text = format_scan(result, "text")
        self.assertIn("Account: prod (aws:111111111111)", text)
        self.assertIn("Summary: 1 found, 1 missing", text)
        self.assertIn("Overall Summary:", text)
        self.assertNotIn("Errors:", text)

    def test_json_omits_unset_shape(self) -> None:
        data = json.loads(format_scan(legacy_result([FOUND, ERRORED]), "json"))
        self.assertNotIn("account_results", data)
        self.assertEqual(data["summary"], {"total": 2, "found": 1, "missing": 0, "errors": 1})
        self.assertNotIn("error", data["results"][0])
        self.assertEqual(data["results"][1]["error"], "Access throttled")

    def test_unknown_format(self) -> None:
        with self.assertRaises(ValueError):
            format_scan(legacy_result([]), "yaml")

    def test_every_declared_format_renders(self) -> None:
        for output_format in OUTPUT_FORMATS:
            with self.subTest(output_format=output_format):
                self.assertTrue(format_scan(legacy_result([]), output_format))


class TestFormatDriftIssue(unittest.TestCase):
    """Test the markdown drift issue body."""

    def test_body_sections(self) -> None:
        body = format_drift_issue(legacy_result([FOUND, MISSING, ERRORED]), "org/shop", "2026-01-01T00:00:00Z")
        self.assertTrue(body.startswith("## Infrastructure Drift Detected"))
        self.assertIn("Repository: `org/shop`", body)
        self.assertIn("| 3 | 1 | 1 | 1 |", body)
        self.assertIn("| `arn:aws:sqs:us-east-1:111111111111:jobs` | sqs | queue |", body)
        self.assertIn("| `arn:aws:s3:::assets` | Access throttled |", body)
        self.assertNotIn("table/users", body)
        self.assertTrue(body.endswith("_Created by drift-toolkit_"))

    def test_no_missing_section_when_only_errors(self) -> None:
        body = format_drift_issue(legacy_result([ERRORED]), "org/shop", "now")
        self.assertNotIn("### Missing Resources", body)
        self.assertIn("### Errors", body)

    def test_long_body_is_truncated(self) -> None:
        missing = [
            ResourceCheckResult(
                arn=f"arn:aws:sqs:us-east-1:111111111111:queue-{i:05d}-{'x' * 40}",
                exists=False,
                service="sqs",
                resource_type="queue",
                resource_id=f"queue-{i}",
            )
            for i in range(1000)
        ]
        body = format_drift_issue(legacy_result(missing), "org/shop", "now")
        self.assertLessEqual(len(body), MAX_ISSUE_BODY_LENGTH)
        self.assertIn("... (truncated)", body)

    def test_title_and_label(self) -> None:
        self.assertEqual(DRIFT_ISSUE_TITLE, "[drift:infra] Infrastructure drift detected")
        self.assertEqual(DRIFT_ISSUE_LABEL, "drift:infra")


if __name__ == "__main__":
    unittest.main()
