"""
Exceptions raised by the Infrastructure Manifest Scanner.

Only these two ever propagate to callers. Failures while checking a single
resource are recorded in its ResourceCheckResult instead.
"""

from typing import List, Optional


class FormatError(ValueError):
    """A string is not a well-formed AWS ARN or GCP resource path."""


class ManifestError(ValueError):
    """
    The manifest cannot be scanned.

    Raised before any cloud API call is made. `problems` lists every
    offending entry found while validating.
    """

    def __init__(self, message: str, problems: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.problems = list(problems or [])
