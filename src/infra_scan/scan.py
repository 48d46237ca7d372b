"""
Scan orchestration.

Every identifier of the manifest is checked by one bounded pool of workers.
Workers pull the next index from a shared cursor and write their result into
that index's slot, so results come back in manifest order however the
checks interleave.
"""

import asyncio
from typing import Dict, List, Optional, cast

from ..config import Config
from ..utils import error_message, setup_logging
from .checkers import CheckerRegistry
from .checkers.base import ClientSettings, make_result
from .manifest import RawManifest, filter_accounts, get_all_resources, normalize_manifest, read_manifest
from .summary import summarize
from .types import AccountScanResult, InfraScanResult, ResourceCheckResult, ResourceIdentifier

logger = setup_logging()

DEFAULT_CONCURRENCY = 10


def _unsupported_message(identifier: ResourceIdentifier) -> str:
    kind = "/".join(part for part in (identifier.service, identifier.resource_type) if part)
    return f"Unsupported {identifier.cloud.upper()} resource type: {kind}"


async def check_resource(
    identifier: ResourceIdentifier, registry: CheckerRegistry
) -> ResourceCheckResult:
    """Checks one identifier. Never raises."""
    try:
        checker = registry.get(identifier)
        if checker is None:
            message = _unsupported_message(identifier)
            logger.warning(f"{message} ({identifier.raw})")
            return make_result(identifier, exists=False, error=message)
        return await checker.check(identifier)
    except Exception as e:
        logger.error(f"Checker for {identifier.service} failed on {identifier.raw}: {e}")
        return make_result(identifier, exists=False, error=error_message(e))


async def check_resources(
    identifiers: List[ResourceIdentifier],
    registry: CheckerRegistry,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> List[ResourceCheckResult]:
    """Checks identifiers with at most `concurrency` checks in flight."""
    if concurrency < 1:
        raise ValueError(f"concurrency must be at least 1, got {concurrency}")

    slots: List[Optional[ResourceCheckResult]] = [None] * len(identifiers)
    cursor = iter(range(len(identifiers)))

    async def worker() -> None:
        for index in cursor:
            slots[index] = await check_resource(identifiers[index], registry)

    worker_count = min(concurrency, len(identifiers))
    await asyncio.gather(*(worker() for _ in range(worker_count)))
    return cast(List[ResourceCheckResult], slots)


async def scan_infra(
    manifest: RawManifest,
    registry: Optional[CheckerRegistry] = None,
    concurrency: int = DEFAULT_CONCURRENCY,
    manifest_path: str = "",
    account: Optional[str] = None,
) -> InfraScanResult:
    """
    Checks every resource of a manifest.

    Args:
        manifest: Canonical Manifest or raw manifest data
        registry: Checker registry; a default one is created when omitted
        concurrency: Maximum number of checks in flight across the manifest
        manifest_path: Recorded in the result
        account: Optional account key or alias restricting the scan

    Returns:
        InfraScanResult shaped after the manifest: per-account results for
        multi-account manifests, a flat list for legacy ones

    Raises:
        ManifestError: If raw manifest data is invalid
        ValueError: If concurrency is below 1
    """
    if concurrency < 1:
        raise ValueError(f"concurrency must be at least 1, got {concurrency}")

    canonical = filter_accounts(normalize_manifest(manifest, manifest_path or "manifest"), account)
    registry = registry or CheckerRegistry()
    identifiers = get_all_resources(canonical)

    logger.info(
        f"Scanning {len(identifiers)} resource(s) across {len(canonical.accounts)} "
        f"account(s) with concurrency {concurrency}"
    )
    results = await check_resources(identifiers, registry, concurrency)
    summary = summarize(results)
    logger.info(
        f"Scan complete: {summary.found} found, {summary.missing} missing, "
        f"{summary.errors} error(s)"
    )

    if not canonical.multi_account:
        return InfraScanResult(
            manifest=manifest_path,
            project=canonical.project,
            results=results,
            summary=summary,
        )

    account_results: Dict[str, AccountScanResult] = {}
    offset = 0
    for entry in canonical.accounts:
        account_slice = results[offset: offset + len(entry.identifiers)]
        offset += len(entry.identifiers)
        account_results[entry.account_key] = AccountScanResult(
            alias=entry.alias,
            results=account_slice,
            summary=summarize(account_slice),
        )

    return InfraScanResult(
        manifest=manifest_path,
        project=canonical.project,
        account_results=account_results,
        summary=summary,
    )


def run_scan(config: Config) -> InfraScanResult:
    """
    Main entry point for a scan. Reads the manifest named by the configuration
    and checks it with a registry built from the configured client settings.
    """
    manifest = read_manifest(config.manifest_path)
    registry = CheckerRegistry(
        ClientSettings(
            global_region=config.aws_region,
            max_retries=config.max_retries,
            timeout_seconds=config.timeout_seconds,
        )
    )
    return asyncio.run(
        scan_infra(
            manifest,
            registry=registry,
            concurrency=config.concurrency,
            manifest_path=config.manifest_path,
            account=config.account,
        )
    )
