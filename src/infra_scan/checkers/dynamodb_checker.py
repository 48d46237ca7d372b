"""
DynamoDB Resource Checkers Module.

Index and stream ARNs resolve to their parent table.
"""

from ...utils import checker_error_handler
from ..types import DynamoDBClient, ParsedArn, ResourceCheckResult
from .base import AwsChecker, aws_not_found, make_result


@checker_error_handler(aws_not_found("ResourceNotFoundException"))
def _check_table(dynamodb_client: DynamoDBClient, arn: ParsedArn) -> ResourceCheckResult:
    table_name = arn.resource_id.split("/")[0]
    dynamodb_client.describe_table(TableName=table_name)
    return make_result(arn, exists=True)


class DynamoDBChecker(AwsChecker):
    service = "dynamodb"
    label = "DynamoDB"
    check_functions = {"table": _check_table}
