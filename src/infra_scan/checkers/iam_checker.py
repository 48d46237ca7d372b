"""
IAM Resource Checkers Module.

IAM is a global service: every check goes through the client of the
configured global region.
"""

from ...utils import checker_error_handler
from ..types import IAMClient, ParsedArn, ResourceCheckResult
from .base import AwsChecker, aws_not_found, make_result

is_iam_not_found = aws_not_found("NoSuchEntity", "NoSuchEntityException")


@checker_error_handler(is_iam_not_found)
def _check_role(iam_client: IAMClient, arn: ParsedArn) -> ResourceCheckResult:
    # Role ARNs may carry a path; the API wants the bare name
    role_name = arn.resource_id.split("/")[-1]
    iam_client.get_role(RoleName=role_name)
    return make_result(arn, exists=True)


@checker_error_handler(is_iam_not_found)
def _check_policy(iam_client: IAMClient, arn: ParsedArn) -> ResourceCheckResult:
    iam_client.get_policy(PolicyArn=arn.raw)
    return make_result(arn, exists=True)


class IAMChecker(AwsChecker):
    service = "iam"
    label = "IAM"
    check_functions = {"role": _check_role, "policy": _check_policy}

    def client_region(self, arn: ParsedArn) -> str:
        return self.settings.global_region
