"""
S3 Resource Checkers Module.

Buckets are checked with HeadBucket. Object ARNs are checked through their
bucket, so an object is reported present whenever its bucket is.
"""

from ...utils import checker_error_handler
from ..types import ParsedArn, ResourceCheckResult, S3Client
from .base import AwsChecker, aws_not_found, make_result

# HeadBucket answers 403 for buckets owned by another account as well as
# buckets we cannot see, so both count as missing.
S3_NOT_FOUND_CODES = ("NotFound", "NoSuchBucket", "404", "Forbidden", "AccessDenied", "403")


@checker_error_handler(aws_not_found(*S3_NOT_FOUND_CODES, statuses=(403, 404)))
def _check_bucket(s3_client: S3Client, arn: ParsedArn) -> ResourceCheckResult:
    bucket = arn.resource_id.split("/")[0]
    s3_client.head_bucket(Bucket=bucket)
    return make_result(arn, exists=True)


class S3Checker(AwsChecker):
    service = "s3"
    label = "S3"
    check_functions = {"bucket": _check_bucket, "object": _check_bucket}
