"""
Type definitions for the Infrastructure Manifest Scanner.

This module contains the value objects passed between the parser, the
manifest normaliser, the checkers and the scan orchestrator. All of them
are frozen dataclasses: identifiers are created once at manifest-parse time
and check results once per identifier per scan.
"""

# AWS Client Types - Using Any for flexibility with boto3 clients
#
# boto3 does not provide static type stubs for service clients, and the methods
# available on each client are dynamically generated at runtime. Using 'Any' here
# allows us to annotate AWS client variables for clarity, while avoiding false
# positives from static type checkers.
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

S3Client = Any
LambdaClient = Any
DynamoDBClient = Any
SQSClient = Any
SNSClient = Any
IAMClient = Any
SecretsManagerClient = Any
CloudWatchLogsClient = Any
ECSClient = Any
RDSClient = Any
EC2Client = Any
ElastiCacheClient = Any
ELBv2Client = Any

# GCP clients are generated gRPC/REST wrappers; same reasoning as above.
GcpClient = Any

# Anything exposing `async check(identifier) -> ResourceCheckResult`
Checker = Any

AWS = "aws"
GCP = "gcp"


@dataclass(frozen=True)
class ParsedArn:
    """Components of an AWS ARN. `raw` is the original string and identity key."""

    partition: str
    service: str
    region: str
    account_id: str
    resource_type: str
    resource_id: str
    raw: str
    cloud: str = field(default=AWS, init=False)


@dataclass(frozen=True)
class ParsedGcpResource:
    """Components of a GCP resource path. `location` is empty when absent."""

    project: str
    location: str
    service: str
    resource_type: str
    resource_id: str
    raw: str
    cloud: str = field(default=GCP, init=False)


ResourceIdentifier = Union[ParsedArn, ParsedGcpResource]


@dataclass(frozen=True)
class AccountId:
    cloud: str
    id: str


@dataclass(frozen=True)
class ManifestAccount:
    """One account (AWS account or GCP project) of a canonical manifest."""

    account_key: str
    identifiers: Tuple[ResourceIdentifier, ...] = ()
    alias: Optional[str] = None

    @property
    def resources(self) -> List[str]:
        return [identifier.raw for identifier in self.identifiers]


@dataclass(frozen=True)
class Manifest:
    """
    Canonical manifest: an ordered sequence of accounts.

    `multi_account` records whether the input used the multi-account shape,
    which decides the shape of the scan output.
    """

    accounts: Tuple[ManifestAccount, ...] = ()
    project: Optional[str] = None
    multi_account: bool = True

    def to_dict(self) -> Dict[str, Any]:
        """Render the manifest in the multi-account file format."""
        accounts: Dict[str, Dict[str, Any]] = {}
        for account in self.accounts:
            entry: Dict[str, Any] = {}
            if account.alias is not None:
                entry["alias"] = account.alias
            entry["resources"] = account.resources
            accounts[account.account_key] = entry

        data: Dict[str, Any] = {"version": 2}
        if self.project is not None:
            data["project"] = self.project
        data["accounts"] = accounts
        return data


@dataclass(frozen=True)
class ResourceCheckResult:
    """Outcome of checking one identifier. An error always means `exists` is False."""

    arn: str
    exists: bool
    service: str
    resource_type: str
    resource_id: str
    error: Optional[str] = None

    def __post_init__(self) -> None:
        if self.error is not None and self.exists:
            raise ValueError(f"Result for {self.arn} cannot both exist and carry an error")

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "arn": self.arn,
            "exists": self.exists,
            "service": self.service,
            "resource_type": self.resource_type,
            "resource_id": self.resource_id,
        }
        if self.error is not None:
            data["error"] = self.error
        return data


@dataclass(frozen=True)
class InfraScanSummary:
    total: int = 0
    found: int = 0
    missing: int = 0
    errors: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "total": self.total,
            "found": self.found,
            "missing": self.missing,
            "errors": self.errors,
        }


@dataclass(frozen=True)
class AccountScanResult:
    results: List[ResourceCheckResult]
    summary: InfraScanSummary
    alias: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.alias is not None:
            data["alias"] = self.alias
        data["results"] = [result.to_dict() for result in self.results]
        data["summary"] = self.summary.to_dict()
        return data


@dataclass(frozen=True)
class InfraScanResult:
    """
    Result of scanning a manifest.

    Legacy manifests populate `results`; multi-account manifests populate
    `account_results` instead. `summary` always covers every result.
    """

    manifest: str
    summary: InfraScanSummary
    project: Optional[str] = None
    results: Optional[List[ResourceCheckResult]] = None
    account_results: Optional[Dict[str, AccountScanResult]] = None

    @property
    def all_results(self) -> List[ResourceCheckResult]:
        if self.account_results is not None:
            return [r for account in self.account_results.values() for r in account.results]
        return list(self.results or [])

    @property
    def is_clean(self) -> bool:
        return self.summary.missing + self.summary.errors == 0

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"manifest": self.manifest}
        if self.project is not None:
            data["project"] = self.project
        if self.results is not None:
            data["results"] = [result.to_dict() for result in self.results]
        if self.account_results is not None:
            data["account_results"] = {
                key: account.to_dict() for key, account in self.account_results.items()
            }
        data["summary"] = self.summary.to_dict()
        return data
