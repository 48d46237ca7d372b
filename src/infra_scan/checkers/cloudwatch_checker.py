"""
CloudWatch Logs Resource Checkers Module.
"""

from ...utils import checker_error_handler
from ..types import CloudWatchLogsClient, ParsedArn, ResourceCheckResult
from .base import AwsChecker, aws_not_found, make_result


@checker_error_handler(aws_not_found("ResourceNotFoundException"))
def _check_log_group(logs_client: CloudWatchLogsClient, arn: ParsedArn) -> ResourceCheckResult:
    """
    Looks the group up by prefix and requires an exact name match.

    Groups are returned in name order, so an exact match is always first.
    """
    response = logs_client.describe_log_groups(logGroupNamePrefix=arn.resource_id, limit=1)
    names = [group.get("logGroupName") for group in response.get("logGroups", [])]
    return make_result(arn, exists=arn.resource_id in names)


class CloudWatchLogsChecker(AwsChecker):
    service = "logs"
    label = "CloudWatch Logs"
    check_functions = {"log-group": _check_log_group}
