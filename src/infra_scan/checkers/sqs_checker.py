"""
SQS Resource Checkers Module.
"""

from ...utils import checker_error_handler
from ..types import ParsedArn, ResourceCheckResult, SQSClient
from .base import AwsChecker, aws_not_found, make_result


@checker_error_handler(
    aws_not_found("AWS.SimpleQueueService.NonExistentQueue", "QueueDoesNotExist")
)
def _check_queue(sqs_client: SQSClient, arn: ParsedArn) -> ResourceCheckResult:
    params = {"QueueName": arn.resource_id}
    if arn.account_id:
        params["QueueOwnerAWSAccountId"] = arn.account_id
    queue_url = sqs_client.get_queue_url(**params)["QueueUrl"]
    sqs_client.get_queue_attributes(QueueUrl=queue_url, AttributeNames=["QueueArn"])
    return make_result(arn, exists=True)


class SQSChecker(AwsChecker):
    service = "sqs"
    label = "SQS"
    check_functions = {"queue": _check_queue}
