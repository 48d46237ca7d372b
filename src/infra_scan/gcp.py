"""
GCP resource path parsing.

Supported shapes:
    projects/{project}/locations/{location}/{type}/{id...}
    projects/{project}/{type}/{id...}
"""

from typing import Dict

from .exceptions import FormatError
from .types import ParsedGcpResource

GCP_PREFIX = "projects/"

SERVICE_BY_RESOURCE_TYPE: Dict[str, str] = {
    "services": "run",
    "repositories": "artifactregistry",
    "secrets": "secretmanager",
    "serviceAccounts": "iam",
    "functions": "cloudfunctions",
    "buckets": "storage",
    "instances": "compute",
    "clusters": "container",
    "topics": "pubsub",
    "subscriptions": "pubsub",
}


def parse_gcp_resource(path: str) -> ParsedGcpResource:
    """
    Parses a GCP resource path.

    Raises:
        FormatError: If the path does not match either supported shape
    """
    if not isinstance(path, str) or not path.startswith(GCP_PREFIX):
        raise FormatError(f"Invalid GCP resource path (must start with 'projects/'): {path!r}")

    parts = path.split("/")
    project = parts[1]
    location = ""
    rest = parts[2:]

    if rest and rest[0] == "locations":
        if len(rest) < 2:
            raise FormatError(f"Invalid GCP resource path (missing location): {path}")
        location = rest[1]
        rest = rest[2:]

    if len(rest) < 2 or not project or not all(parts[: len(parts) - len(rest)]):
        raise FormatError(f"Invalid GCP resource path: {path}")

    resource_type = rest[0]
    if not resource_type or not rest[1]:
        raise FormatError(f"Invalid GCP resource path: {path}")

    # Secret versions and similar sub-resources resolve to their parent secret
    if resource_type == "secrets":
        resource_id = rest[1]
    else:
        resource_id = "/".join(rest[1:])

    return ParsedGcpResource(
        project=project,
        location=location,
        service=SERVICE_BY_RESOURCE_TYPE.get(resource_type, resource_type),
        resource_type=resource_type,
        resource_id=resource_id,
        raw=path,
    )


def is_valid_gcp_resource(path: str) -> bool:
    """Returns True if `path` parses as a GCP resource path. Never raises."""
    try:
        parse_gcp_resource(path)
    except FormatError:
        return False
    return True
