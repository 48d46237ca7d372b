"""
Resource Checkers Package.

This package maps cloud services to the checkers that verify resource
existence. Checker modules are imported on first use, so a scan of an
AWS-only manifest never loads the GCP client libraries.
"""

from typing import Callable, Dict, Optional

from ...utils import setup_logging
from ..types import AWS, GCP, Checker, ResourceIdentifier
from .base import ClientSettings

logger = setup_logging()

SUPPORTED_SERVICES = (
    "s3",
    "lambda",
    "dynamodb",
    "sqs",
    "sns",
    "iam",
    "secretsmanager",
    "logs",
    "ecs",
    "rds",
    "ec2",
    "elasticache",
    "elasticloadbalancing",
)

SUPPORTED_GCP_SERVICES = ("run", "secretmanager", "artifactregistry", "iam")

CheckerFactory = Callable[[ClientSettings], Checker]


def is_supported_service(service: str) -> bool:
    return service in SUPPORTED_SERVICES


def is_supported_gcp_service(service: str) -> bool:
    return service in SUPPORTED_GCP_SERVICES


def _load_s3(settings: ClientSettings) -> Checker:
    from .s3_checker import S3Checker

    return S3Checker(settings)


def _load_lambda(settings: ClientSettings) -> Checker:
    from .lambda_checker import LambdaChecker

    return LambdaChecker(settings)


def _load_dynamodb(settings: ClientSettings) -> Checker:
    from .dynamodb_checker import DynamoDBChecker

    return DynamoDBChecker(settings)


def _load_sqs(settings: ClientSettings) -> Checker:
    from .sqs_checker import SQSChecker

    return SQSChecker(settings)


def _load_sns(settings: ClientSettings) -> Checker:
    from .sns_checker import SNSChecker

    return SNSChecker(settings)


def _load_iam(settings: ClientSettings) -> Checker:
    from .iam_checker import IAMChecker

    return IAMChecker(settings)


def _load_secretsmanager(settings: ClientSettings) -> Checker:
    from .secretsmanager_checker import SecretsManagerChecker

    return SecretsManagerChecker(settings)


def _load_logs(settings: ClientSettings) -> Checker:
    from .cloudwatch_checker import CloudWatchLogsChecker

    return CloudWatchLogsChecker(settings)


def _load_ecs(settings: ClientSettings) -> Checker:
    from .ecs_checker import ECSChecker

    return ECSChecker(settings)


def _load_rds(settings: ClientSettings) -> Checker:
    from .rds_checker import RDSChecker

    return RDSChecker(settings)


def _load_ec2(settings: ClientSettings) -> Checker:
    from .ec2_checker import EC2Checker

    return EC2Checker(settings)


def _load_elasticache(settings: ClientSettings) -> Checker:
    from .elasticache_checker import ElastiCacheChecker

    return ElastiCacheChecker(settings)


def _load_elb(settings: ClientSettings) -> Checker:
    from .elb_checker import ELBChecker

    return ELBChecker(settings)


def _load_cloud_run(settings: ClientSettings) -> Checker:
    from .gcp.cloudrun_checker import CloudRunChecker

    return CloudRunChecker(settings)


def _load_secret_manager(settings: ClientSettings) -> Checker:
    from .gcp.secretmanager_checker import SecretManagerChecker

    return SecretManagerChecker(settings)


def _load_artifact_registry(settings: ClientSettings) -> Checker:
    from .gcp.artifactregistry_checker import ArtifactRegistryChecker

    return ArtifactRegistryChecker(settings)


def _load_service_accounts(settings: ClientSettings) -> Checker:
    from .gcp.iam_checker import ServiceAccountChecker

    return ServiceAccountChecker(settings)


DEFAULT_CHECKER_FACTORIES: Dict[str, CheckerFactory] = {
    "s3": _load_s3,
    "lambda": _load_lambda,
    "dynamodb": _load_dynamodb,
    "sqs": _load_sqs,
    "sns": _load_sns,
    "iam": _load_iam,
    "secretsmanager": _load_secretsmanager,
    "logs": _load_logs,
    "ecs": _load_ecs,
    "rds": _load_rds,
    "ec2": _load_ec2,
    "elasticache": _load_elasticache,
    "elasticloadbalancing": _load_elb,
}

DEFAULT_GCP_CHECKER_FACTORIES: Dict[str, CheckerFactory] = {
    "run": _load_cloud_run,
    "secretmanager": _load_secret_manager,
    "artifactregistry": _load_artifact_registry,
    "iam": _load_service_accounts,
}


class CheckerRegistry:
    """
    Lazily constructed, memoised checkers keyed by (cloud, service).

    Each registry owns its caches; two registries never share checkers or
    SDK clients. Services outside the allow-lists resolve to None.
    """

    def __init__(
        self,
        settings: Optional[ClientSettings] = None,
        factories: Optional[Dict[str, CheckerFactory]] = None,
        gcp_factories: Optional[Dict[str, CheckerFactory]] = None,
    ) -> None:
        self.settings = settings or ClientSettings()
        self._factories = dict(DEFAULT_CHECKER_FACTORIES if factories is None else factories)
        self._gcp_factories = dict(
            DEFAULT_GCP_CHECKER_FACTORIES if gcp_factories is None else gcp_factories
        )
        self._checkers: Dict[str, Checker] = {}
        self._gcp_checkers: Dict[str, Checker] = {}

    def get_checker(self, service: str) -> Optional[Checker]:
        """Returns the AWS checker for `service`, or None if unsupported."""
        if not is_supported_service(service):
            return None
        return self._load(service, self._factories, self._checkers, AWS)

    def get_gcp_checker(self, service: str) -> Optional[Checker]:
        """Returns the GCP checker for `service`, or None if unsupported."""
        if not is_supported_gcp_service(service):
            return None
        return self._load(service, self._gcp_factories, self._gcp_checkers, GCP)

    def get(self, identifier: ResourceIdentifier) -> Optional[Checker]:
        if identifier.cloud == GCP:
            return self.get_gcp_checker(identifier.service)
        return self.get_checker(identifier.service)

    def clear(self) -> None:
        self._checkers.clear()
        self._gcp_checkers.clear()

    def _load(
        self,
        service: str,
        factories: Dict[str, CheckerFactory],
        cache: Dict[str, Checker],
        cloud: str,
    ) -> Optional[Checker]:
        checker = cache.get(service)
        if checker is None:
            factory = factories.get(service)
            if factory is None:
                return None
            logger.debug(f"Loading {cloud.upper()} checker for {service}")
            checker = factory(self.settings)
            cache[service] = checker
        return checker


__all__ = [
    "SUPPORTED_SERVICES",
    "SUPPORTED_GCP_SERVICES",
    "CheckerRegistry",
    "ClientSettings",
    "is_supported_service",
    "is_supported_gcp_service",
]
