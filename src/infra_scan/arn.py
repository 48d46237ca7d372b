"""
AWS ARN parsing for the Infrastructure Manifest Scanner.

An ARN has the shape ``arn:partition:service:region:account-id:resource``.
The resource segment may itself contain colons and slashes, and how it splits
into a resource type and id depends on the service.
"""

from typing import Callable, Dict, Tuple

from .exceptions import FormatError
from .types import ParsedArn

ARN_PREFIX = "arn:"
MIN_ARN_SEGMENTS = 6

IAM_RESOURCE_TYPES = ("role", "user", "policy")


def _split_first(resource: str, separators: str = "/:") -> Tuple[str, str]:
    """Split on the first separator found, in the order given."""
    for separator in separators:
        if separator in resource:
            resource_type, _, resource_id = resource.partition(separator)
            return resource_type, resource_id
    return "", resource


def _parse_s3(resource: str) -> Tuple[str, str]:
    if "/" in resource:
        return "object", resource
    return "bucket", resource


def _parse_iam(resource: str) -> Tuple[str, str]:
    for resource_type in IAM_RESOURCE_TYPES:
        prefix = f"{resource_type}/"
        if resource.startswith(prefix):
            return resource_type, resource[len(prefix):]
    return _split_first(resource, ":")


def _parse_lambda(resource: str) -> Tuple[str, str]:
    # function:name[:qualifier] and layer:name[:version]
    parts = resource.split(":")
    if len(parts) >= 2 and parts[0] in ("function", "layer"):
        return parts[0], parts[1]
    return _split_first(resource, ":")


def _parse_dynamodb(resource: str) -> Tuple[str, str]:
    if resource.startswith("table/"):
        return "table", resource[len("table/"):]
    return _split_first(resource, "/")


def _parse_slash_prefixed(resource: str) -> Tuple[str, str]:
    return _split_first(resource, "/")


def _parse_colon_prefixed(resource: str) -> Tuple[str, str]:
    return _split_first(resource, ":")


def _parse_secretsmanager(resource: str) -> Tuple[str, str]:
    if resource.startswith("secret:"):
        return "secret", resource[len("secret:"):]
    return _split_first(resource, ":")


def _parse_logs(resource: str) -> Tuple[str, str]:
    if resource.startswith("log-group:"):
        name = resource[len("log-group:"):]
        if name.endswith(":*"):
            name = name[:-2]
        return "log-group", name
    return _split_first(resource, ":")


RESOURCE_PARSERS: Dict[str, Callable[[str], Tuple[str, str]]] = {
    "s3": _parse_s3,
    "iam": _parse_iam,
    "lambda": _parse_lambda,
    "dynamodb": _parse_dynamodb,
    "ecs": _parse_slash_prefixed,
    "elasticloadbalancing": _parse_slash_prefixed,
    "ec2": _parse_slash_prefixed,
    "rds": _parse_colon_prefixed,
    "elasticache": _parse_colon_prefixed,
    "secretsmanager": _parse_secretsmanager,
    "logs": _parse_logs,
    "sqs": lambda resource: ("queue", resource),
    "sns": lambda resource: ("topic", resource),
}


def parse_arn(arn: str) -> ParsedArn:
    """
    Parses an AWS ARN into its components.

    Args:
        arn: ARN string, e.g. 'arn:aws:dynamodb:us-east-1:123456789012:table/users'

    Returns:
        ParsedArn with the service-specific resource type and id

    Raises:
        FormatError: If the string is not a well-formed ARN
    """
    if not isinstance(arn, str) or not arn.startswith(ARN_PREFIX):
        raise FormatError(f"Invalid ARN format (must start with 'arn:'): {arn!r}")

    parts = arn.split(":")
    if len(parts) < MIN_ARN_SEGMENTS:
        raise FormatError(
            f"Invalid ARN format (expected at least {MIN_ARN_SEGMENTS} "
            f"colon-separated segments): {arn}"
        )

    partition, service, region, account_id = parts[1:5]
    resource = ":".join(parts[5:])
    parser = RESOURCE_PARSERS.get(service, _split_first)
    resource_type, resource_id = parser(resource)

    return ParsedArn(
        partition=partition,
        service=service,
        region=region,
        account_id=account_id,
        resource_type=resource_type,
        resource_id=resource_id,
        raw=arn,
    )


def is_valid_arn(arn: str) -> bool:
    """Returns True if `arn` parses as an AWS ARN. Never raises."""
    try:
        parse_arn(arn)
    except FormatError:
        return False
    return True
