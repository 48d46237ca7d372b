"""
Infrastructure Manifest Scanner Package.

This package checks that the cloud resources declared in a manifest actually
exist. It supports AWS resources named by ARN (S3, Lambda, DynamoDB, SQS, SNS,
IAM, Secrets Manager, CloudWatch Logs, ECS, RDS, EC2, ElastiCache and Elastic
Load Balancing) and GCP resources named by resource path (Cloud Run, Secret
Manager, Artifact Registry and IAM service accounts).

The scan process:
1. Reads the manifest (JSON, TOML or one identifier per line) and parses
   every identifier up front
2. Normalises legacy and multi-account manifests into one canonical form
3. Checks each resource through a lazily loaded per-service checker, with a
   bounded number of checks in flight
4. Reports found, missing and errored resources per account and overall
"""

from .arn import is_valid_arn, parse_arn
from .checkers import SUPPORTED_GCP_SERVICES, SUPPORTED_SERVICES, CheckerRegistry, ClientSettings
from .exceptions import FormatError, ManifestError
from .gcp import is_valid_gcp_resource, parse_gcp_resource
from .manifest import (
    detect_account_from_resource,
    filter_accounts,
    format_account_key,
    get_all_resources,
    is_valid_account_key,
    normalize_manifest,
    parse_account_key,
    parse_resource,
    read_manifest,
)
from .output import format_drift_issue, format_scan
from .scan import run_scan, scan_infra
from .summary import summarize

__all__ = [
    "CheckerRegistry",
    "ClientSettings",
    "FormatError",
    "ManifestError",
    "SUPPORTED_GCP_SERVICES",
    "SUPPORTED_SERVICES",
    "detect_account_from_resource",
    "filter_accounts",
    "format_account_key",
    "format_drift_issue",
    "format_scan",
    "get_all_resources",
    "is_valid_account_key",
    "is_valid_arn",
    "is_valid_gcp_resource",
    "normalize_manifest",
    "parse_account_key",
    "parse_arn",
    "parse_gcp_resource",
    "parse_resource",
    "read_manifest",
    "run_scan",
    "scan_infra",
    "summarize",
]
