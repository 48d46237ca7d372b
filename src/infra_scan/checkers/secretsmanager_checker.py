"""
Secrets Manager Resource Checkers Module.
"""

from ...utils import checker_error_handler
from ..types import ParsedArn, ResourceCheckResult, SecretsManagerClient
from .base import AwsChecker, aws_not_found, make_result


@checker_error_handler(aws_not_found("ResourceNotFoundException"))
def _check_secret(secrets_client: SecretsManagerClient, arn: ParsedArn) -> ResourceCheckResult:
    secrets_client.describe_secret(SecretId=arn.raw)
    return make_result(arn, exists=True)


class SecretsManagerChecker(AwsChecker):
    service = "secretsmanager"
    label = "Secrets Manager"
    check_functions = {"secret": _check_secret}
