"""
Manifest loading and normalisation.

Two manifest shapes are accepted:

- legacy:        {"project": ..., "resources": ["arn:...", "projects/..."]}
- multi-account: {"version": 2, "accounts": {"aws:123": {"alias": ..., "resources": [...]}}}

Both are normalised into one canonical `Manifest` whose accounts keep their
declaration order. Every identifier is parsed up front so that a bad entry
fails the whole manifest before any cloud API is called.
"""

import json
import os
import re
import tomllib
from dataclasses import replace
from typing import Any, Dict, List, Optional, Tuple, Union

from botocore.exceptions import ClientError

from ..utils import download_s3_file, setup_logging
from .arn import ARN_PREFIX, parse_arn
from .exceptions import FormatError, ManifestError
from .gcp import GCP_PREFIX, parse_gcp_resource
from .types import AWS, GCP, AccountId, Manifest, ManifestAccount, ResourceIdentifier

logger = setup_logging()

ACCOUNT_KEY_PATTERN = re.compile(r"^(aws|gcp):(.+)$")
UNKNOWN_AWS_ACCOUNT = "unknown"

RawManifest = Union[Dict[str, Any], Manifest]


def parse_resource(raw: str) -> ResourceIdentifier:
    """
    Parses an AWS ARN or a GCP resource path, dispatching on its prefix.

    Raises:
        FormatError: If the string is neither
    """
    if isinstance(raw, str) and raw.startswith(ARN_PREFIX):
        return parse_arn(raw)
    if isinstance(raw, str) and raw.startswith(GCP_PREFIX):
        return parse_gcp_resource(raw)
    raise FormatError(f"Not an AWS ARN or GCP resource path: {raw!r}")


def parse_account_key(key: str) -> AccountId:
    """
    Parses an account key such as 'aws:123456789012' or 'gcp:my-project'.

    Raises:
        ManifestError: If the key is not '<cloud>:<id>' for a supported cloud
    """
    match = ACCOUNT_KEY_PATTERN.match(key) if isinstance(key, str) else None
    if match is None:
        raise ManifestError(
            f'Invalid account key: "{key}". '
            'Expected format: "aws:<account-id>" or "gcp:<project-id>"'
        )
    return AccountId(cloud=match.group(1), id=match.group(2))


def format_account_key(account: AccountId) -> str:
    return f"{account.cloud}:{account.id}"


def is_valid_account_key(key: str) -> bool:
    return isinstance(key, str) and ACCOUNT_KEY_PATTERN.match(key) is not None


def detect_account_from_resource(identifier: ResourceIdentifier) -> str:
    """Returns the account key an identifier belongs to."""
    if identifier.cloud == GCP:
        return format_account_key(AccountId(cloud=GCP, id=identifier.project))
    account_id = identifier.account_id or UNKNOWN_AWS_ACCOUNT
    return format_account_key(AccountId(cloud=AWS, id=account_id))


def _parse_entries(entries: Any, where: str, problems: List[str]) -> List[ResourceIdentifier]:
    if not isinstance(entries, list):
        problems.append(f"{where}: 'resources' must be a list")
        return []

    identifiers = []
    for entry in entries:
        if not isinstance(entry, str):
            problems.append(f"{where}: resource entries must be strings, got {entry!r}")
            continue
        try:
            identifiers.append(parse_resource(entry))
        except FormatError:
            problems.append(f'{where}: invalid resource identifier "{entry}"')
    return identifiers


def _raise_if_problems(source: str, problems: List[str]) -> None:
    if problems:
        raise ManifestError(
            f"Invalid manifest {source}: " + "; ".join(problems), problems
        )


def _normalize_legacy(raw: Dict[str, Any], source: str, project: Optional[str]) -> Manifest:
    problems: List[str] = []
    identifiers = _parse_entries(raw.get("resources"), "resources", problems)
    _raise_if_problems(source, problems)

    grouped: Dict[str, List[ResourceIdentifier]] = {}
    for identifier in identifiers:
        grouped.setdefault(detect_account_from_resource(identifier), []).append(identifier)

    accounts = tuple(
        ManifestAccount(account_key=key, identifiers=tuple(members))
        for key, members in grouped.items()
    )
    return Manifest(accounts=accounts, project=project, multi_account=False)


def _normalize_multi_account(raw: Dict[str, Any], source: str, project: Optional[str]) -> Manifest:
    raw_accounts = raw.get("accounts")
    if not isinstance(raw_accounts, dict):
        raise ManifestError(f"Invalid manifest {source}: 'accounts' must be an object")

    problems: List[str] = []
    accounts: List[ManifestAccount] = []
    for key, entry in raw_accounts.items():
        where = f"accounts[{key!r}]"
        if not is_valid_account_key(key):
            problems.append(
                f'invalid account key "{key}" (expected "aws:<account-id>" or "gcp:<project-id>")'
            )
        if not isinstance(entry, dict):
            problems.append(f"{where}: must be an object with a 'resources' list")
            continue

        alias = entry.get("alias")
        if alias is not None and not isinstance(alias, str):
            problems.append(f"{where}: 'alias' must be a string")
            alias = None

        identifiers = _parse_entries(entry.get("resources"), where, problems)
        accounts.append(
            ManifestAccount(account_key=key, identifiers=tuple(identifiers), alias=alias)
        )

    _raise_if_problems(source, problems)
    return Manifest(accounts=tuple(accounts), project=project, multi_account=True)


def normalize_manifest(raw: RawManifest, source: str = "manifest") -> Manifest:
    """
    Normalises a legacy or multi-account manifest into canonical form.

    Args:
        raw: Decoded manifest data, or an already-normalised Manifest
        source: Name used in error messages (usually the file path)

    Returns:
        Canonical Manifest; a Manifest input is returned unchanged

    Raises:
        ManifestError: Listing every invalid entry
    """
    if isinstance(raw, Manifest):
        return raw
    if not isinstance(raw, dict):
        raise ManifestError(
            f"Invalid manifest {source}: expected an object with 'resources' or 'accounts'"
        )

    project = raw.get("project")
    if project is not None and not isinstance(project, str):
        raise ManifestError(f"Invalid manifest {source}: 'project' must be a string")

    if "accounts" in raw:
        return _normalize_multi_account(raw, source, project)
    if "resources" in raw:
        return _normalize_legacy(raw, source, project)
    raise ManifestError(
        f"Invalid manifest {source}: expected a 'resources' list or an 'accounts' object"
    )


def get_all_resources(manifest: RawManifest) -> List[ResourceIdentifier]:
    """Flattens a manifest into identifiers in account-then-resource order."""
    manifest = normalize_manifest(manifest)
    return [identifier for account in manifest.accounts for identifier in account.identifiers]


def filter_accounts(manifest: Manifest, account: Optional[str]) -> Manifest:
    """
    Keeps only the account whose key or alias equals `account`.

    An empty `account` returns the manifest unchanged; no match returns a
    manifest without accounts.
    """
    if not account:
        return manifest

    selected: Tuple[ManifestAccount, ...] = tuple(
        entry for entry in manifest.accounts if entry.account_key == account
    )
    if not selected:
        selected = tuple(entry for entry in manifest.accounts if entry.alias == account)[:1]
    if not selected:
        logger.warning(f"No account matching '{account}' in manifest")
    return replace(manifest, accounts=selected)


def _parse_txt_manifest(content: str, source: str) -> Manifest:
    resources: List[str] = []
    problems: List[str] = []
    for line_number, line in enumerate(content.splitlines(), start=1):
        entry = line.strip()
        if not entry or entry.startswith("#"):
            continue
        try:
            parse_resource(entry)
        except FormatError:
            problems.append(f'line {line_number}: invalid resource identifier "{entry}"')
            continue
        resources.append(entry)

    _raise_if_problems(source, problems)
    return normalize_manifest({"resources": resources}, source)


def _read_content(manifest_path: str) -> str:
    if manifest_path.startswith("s3://"):
        try:
            return download_s3_file(manifest_path, logger)
        except (ClientError, ValueError) as e:
            raise ManifestError(f"Cannot read manifest {manifest_path}: {e}") from e

    if not os.path.isfile(manifest_path):
        raise ManifestError(f"Manifest file not found: {manifest_path}")
    try:
        with open(manifest_path, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestError(f"Cannot read manifest {manifest_path}: {e}") from e


def read_manifest(manifest_path: str) -> Manifest:
    """
    Reads and normalises a manifest from a local path or an s3:// URL.

    The format follows the extension: .json, .toml, or .txt (one identifier
    per line, '#' comments). Other extensions are tried as JSON, then TXT.

    Raises:
        ManifestError: If the file is missing, malformed or invalid
    """
    logger.info(f"Loading manifest: {manifest_path}")
    content = _read_content(manifest_path)
    extension = os.path.splitext(manifest_path)[1].lower()

    if extension == ".toml":
        try:
            data: Any = tomllib.loads(content)
        except tomllib.TOMLDecodeError as e:
            raise ManifestError(f"Invalid TOML in manifest {manifest_path}: {e}")
        manifest = normalize_manifest(data, manifest_path)
    elif extension == ".txt":
        manifest = _parse_txt_manifest(content, manifest_path)
    elif extension == ".json":
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ManifestError(f"Invalid JSON in manifest {manifest_path}: {e}")
        manifest = normalize_manifest(data, manifest_path)
    else:
        try:
            data = json.loads(content)
        except json.JSONDecodeError:
            manifest = _parse_txt_manifest(content, manifest_path)
        else:
            manifest = normalize_manifest(data, manifest_path)

    count = sum(len(account.identifiers) for account in manifest.accounts)
    logger.info(
        f"Loaded manifest with {len(manifest.accounts)} account(s) and {count} resource(s)"
    )
    return manifest
