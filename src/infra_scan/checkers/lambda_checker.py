"""
Lambda Resource Checkers Module.
"""

from ...utils import checker_error_handler
from ..types import LambdaClient, ParsedArn, ResourceCheckResult
from .base import AwsChecker, aws_not_found, make_result


@checker_error_handler(aws_not_found("ResourceNotFoundException"))
def _check_function(lambda_client: LambdaClient, arn: ParsedArn) -> ResourceCheckResult:
    lambda_client.get_function(FunctionName=arn.resource_id)
    return make_result(arn, exists=True)


class LambdaChecker(AwsChecker):
    service = "lambda"
    label = "Lambda"
    check_functions = {"function": _check_function}
