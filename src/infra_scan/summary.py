"""
Result aggregation.
"""

from typing import Iterable, List, Tuple

from .types import InfraScanSummary, ResourceCheckResult


def partition_results(
    results: Iterable[ResourceCheckResult],
) -> Tuple[List[ResourceCheckResult], List[ResourceCheckResult], List[ResourceCheckResult]]:
    """Splits results into (found, missing, errors), each in input order."""
    found: List[ResourceCheckResult] = []
    missing: List[ResourceCheckResult] = []
    errors: List[ResourceCheckResult] = []
    for result in results:
        if result.error is not None:
            errors.append(result)
        elif result.exists:
            found.append(result)
        else:
            missing.append(result)
    return found, missing, errors


def summarize(results: Iterable[ResourceCheckResult]) -> InfraScanSummary:
    """Counts found, missing and errored results. An empty input gives all zeros."""
    found, missing, errors = partition_results(results)
    return InfraScanSummary(
        total=len(found) + len(missing) + len(errors),
        found=len(found),
        missing=len(missing),
        errors=len(errors),
    )
