"""
SNS Resource Checkers Module.
"""

from ...utils import checker_error_handler
from ..types import ParsedArn, ResourceCheckResult, SNSClient
from .base import AwsChecker, aws_not_found, make_result


@checker_error_handler(aws_not_found("NotFound", "NotFoundException"))
def _check_topic(sns_client: SNSClient, arn: ParsedArn) -> ResourceCheckResult:
    sns_client.get_topic_attributes(TopicArn=arn.raw)
    return make_result(arn, exists=True)


class SNSChecker(AwsChecker):
    service = "sns"
    label = "SNS"
    check_functions = {"topic": _check_topic}
