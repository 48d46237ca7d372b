"""
Tests for the checker registry.
"""

import unittest
from unittest.mock import MagicMock

from src.infra_scan.checkers import (
    SUPPORTED_GCP_SERVICES,
    SUPPORTED_SERVICES,
    CheckerRegistry,
    ClientSettings,
    is_supported_gcp_service,
    is_supported_service,
)
from src.infra_scan.checkers.dynamodb_checker import DynamoDBChecker
from src.infra_scan.manifest import parse_resource


class TestCheckerRegistry(unittest.TestCase):
    """Test lazy loading, memoisation and allow-lists."""

    def test_allow_lists(self) -> None:
        self.assertEqual(len(SUPPORTED_SERVICES), 13)
        self.assertEqual(SUPPORTED_GCP_SERVICES, ("run", "secretmanager", "artifactregistry", "iam"))
        self.assertTrue(is_supported_service("elasticloadbalancing"))
        self.assertFalse(is_supported_service("kinesis"))
        self.assertTrue(is_supported_gcp_service("run"))
        self.assertFalse(is_supported_gcp_service("storage"))

    def test_factory_called_once(self) -> None:
        factory = MagicMock(return_value=MagicMock())
        registry = CheckerRegistry(factories={"s3": factory})

        first = registry.get_checker("s3")
        self.assertIs(registry.get_checker("s3"), first)
        factory.assert_called_once_with(registry.settings)

    def test_unsupported_service_returns_none(self) -> None:
        factory = MagicMock()
        registry = CheckerRegistry(factories={"kinesis": factory})
        self.assertIsNone(registry.get_checker("kinesis"))
        self.assertIsNone(registry.get_gcp_checker("storage"))
        factory.assert_not_called()

    def test_supported_service_without_factory_returns_none(self) -> None:
        registry = CheckerRegistry(factories={}, gcp_factories={})
        self.assertIsNone(registry.get_checker("s3"))
        self.assertIsNone(registry.get_gcp_checker("run"))

    def test_dispatch_on_cloud(self) -> None:
        aws_iam = MagicMock()
        gcp_iam = MagicMock()
        registry = CheckerRegistry(
            factories={"iam": lambda settings: aws_iam},
            gcp_factories={"iam": lambda settings: gcp_iam},
        )
        self.assertIs(registry.get(parse_resource("arn:aws:iam::123456789012:role/r")), aws_iam)
        self.assertIs(
            registry.get(parse_resource("projects/p/serviceAccounts/sa@p.iam.gserviceaccount.com")),
            gcp_iam,
        )

    def test_clear_and_isolation(self) -> None:
        factory = MagicMock(side_effect=lambda settings: MagicMock())
        registry = CheckerRegistry(factories={"sqs": factory})
        other = CheckerRegistry(factories={"sqs": factory})

        first = registry.get_checker("sqs")
        self.assertIsNot(other.get_checker("sqs"), first)
        registry.clear()
        self.assertIsNot(registry.get_checker("sqs"), first)
        self.assertEqual(factory.call_count, 3)

    def test_default_factory_passes_settings(self) -> None:
        settings = ClientSettings(global_region="eu-west-2", max_retries=5, timeout_seconds=10)
        checker = CheckerRegistry(settings).get_checker("dynamodb")
        self.assertIsInstance(checker, DynamoDBChecker)
        self.assertIs(checker.settings, settings)


if __name__ == "__main__":
    unittest.main()
