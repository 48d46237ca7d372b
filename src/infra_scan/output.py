"""
Report formatting for scan results.

Renders an InfraScanResult as a human-readable text report, as JSON, or as
the markdown body of a drift issue.
"""

import json
from typing import List

from .summary import partition_results
from .types import AccountScanResult, InfraScanResult, InfraScanSummary, ResourceCheckResult

OUTPUT_FORMATS = ("text", "json")

DRIFT_ISSUE_TITLE = "[drift:infra] Infrastructure drift detected"
DRIFT_ISSUE_LABEL = "drift:infra"
DRIFT_ISSUE_FOOTER = "---\n_Created by drift-toolkit_"
MAX_ISSUE_BODY_LENGTH = 60000

FOUND_ICON = "✅"
MISSING_ICON = "❌"
ERROR_ICON = "⚠️"


def _resource_label(result: ResourceCheckResult) -> str:
    return f"{result.service}/{result.resource_type}/{result.resource_id}"


def _format_header(lines: List[str], result: InfraScanResult) -> None:
    lines.append("=" * 60)
    lines.append("INFRASTRUCTURE SCAN REPORT")
    lines.append("=" * 60)
    lines.append(f"Manifest: {result.manifest}")
    if result.project:
        lines.append(f"Project: {result.project}")
    lines.append("")


def _format_sections(lines: List[str], results: List[ResourceCheckResult]) -> None:
    found, missing, errors = partition_results(results)

    if found:
        lines.append(f"=== Found ({len(found)}) ===")
        lines.extend(f"{FOUND_ICON} {_resource_label(r)}" for r in found)
        lines.append("")
    if missing:
        lines.append(f"=== Missing ({len(missing)}) ===")
        lines.extend(f"{MISSING_ICON} {_resource_label(r)}" for r in missing)
        lines.append("")
    if errors:
        lines.append(f"=== Errors ({len(errors)}) ===")
        lines.extend(f"{ERROR_ICON}  {_resource_label(r)} - {r.error}" for r in errors)
        lines.append("")


def _format_account(lines: List[str], account_key: str, account: AccountScanResult) -> None:
    label = f"{account.alias} ({account_key})" if account.alias else account_key
    lines.append(f"Account: {label}")
    lines.append("-" * 40)

    for r in account.results:
        if r.error is not None:
            lines.append(f"{ERROR_ICON}  {r.arn} - {r.error}")
        elif r.exists:
            lines.append(f"{FOUND_ICON} {r.arn}")
        else:
            lines.append(f"{MISSING_ICON} {r.arn}")

    summary = account.summary
    parts = []
    if summary.found:
        parts.append(f"{summary.found} found")
    if summary.missing:
        parts.append(f"{summary.missing} missing")
    if summary.errors:
        parts.append(f"{summary.errors} errors")
    lines.append(f"  Summary: {', '.join(parts) or 'no resources'}")
    lines.append("")


def _format_summary(lines: List[str], title: str, summary: InfraScanSummary) -> None:
    lines.append(f"{title}:")
    lines.append(f"  Total:   {summary.total}")
    lines.append(f"  Found:   {summary.found}")
    lines.append(f"  Missing: {summary.missing}")
    if summary.errors:
        lines.append(f"  Errors:  {summary.errors}")


def format_scan_text(result: InfraScanResult) -> str:
    lines: List[str] = []
    _format_header(lines, result)

    if result.account_results:
        for account_key, account in result.account_results.items():
            _format_account(lines, account_key, account)
        _format_summary(lines, "Overall Summary", result.summary)
    else:
        _format_sections(lines, result.all_results)
        _format_summary(lines, "Summary", result.summary)

    return "\n".join(lines)


def format_scan_json(result: InfraScanResult) -> str:
    return json.dumps(result.to_dict(), indent=2)


def format_scan(result: InfraScanResult, output_format: str = "text") -> str:
    """
    Formats a scan result.

    Raises:
        ValueError: If the format is not 'text' or 'json'
    """
    if output_format not in OUTPUT_FORMATS:
        raise ValueError(f"Unsupported output format: {output_format}")
    if output_format == "json":
        return format_scan_json(result)
    return format_scan_text(result)


def _truncate_issue_body(body: str) -> str:
    if len(body) <= MAX_ISSUE_BODY_LENGTH:
        return body
    return body[: MAX_ISSUE_BODY_LENGTH - 100] + f"\n\n... (truncated)\n\n{DRIFT_ISSUE_FOOTER}"


def format_drift_issue(result: InfraScanResult, repository: str, scan_time: str) -> str:
    """
    Builds the markdown body of an issue reporting infrastructure drift.

    Args:
        result: Scan result containing missing or errored resources
        repository: Repository the manifest belongs to
        scan_time: Timestamp of the scan, already formatted

    Returns:
        Markdown body, truncated to fit issue trackers' size limit
    """
    _, missing, errors = partition_results(result.all_results)
    summary = result.summary

    parts = [
        "## Infrastructure Drift Detected\n",
        f"Repository: `{repository}`",
        f"Scan time: {scan_time}\n",
        "### Summary\n",
        "| Total | Found | Missing | Errors |",
        "|-------|-------|---------|--------|",
        f"| {summary.total} | {summary.found} | {summary.missing} | {summary.errors} |",
        "",
    ]

    if missing:
        parts.extend(
            [
                "### Missing Resources\n",
                "| ARN | Service | Resource |",
                "|-----|---------|----------|",
            ]
        )
        parts.extend(f"| `{r.arn}` | {r.service} | {r.resource_type} |" for r in missing)
        parts.append("")

    if errors:
        parts.extend(["### Errors\n", "| ARN | Error |", "|-----|-------|"])
        parts.extend(f"| `{r.arn}` | {r.error} |" for r in errors)
        parts.append("")

    parts.extend(
        [
            "### How to Fix\n",
            "1. **Deploy missing resources** using your IaC tool (Pulumi, Terraform, etc.)",
            "2. **Or remove from manifest** if resources are no longer needed\n",
            "Close this issue once all drift is resolved.\n",
            DRIFT_ISSUE_FOOTER,
        ]
    )
    return _truncate_issue_body("\n".join(parts))
