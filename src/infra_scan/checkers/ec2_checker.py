"""
EC2 Resource Checkers Module.
"""

from ...utils import checker_error_handler
from ..types import EC2Client, ParsedArn, ResourceCheckResult
from .base import AwsChecker, aws_not_found, make_result

TERMINATED = "terminated"

is_ec2_not_found = aws_not_found(
    "InvalidInstanceID.NotFound",
    "InvalidInstanceID.Malformed",
    "InvalidGroup.NotFound",
    "InvalidGroupId.Malformed",
    "InvalidKeyPair.NotFound",
)


@checker_error_handler(is_ec2_not_found)
def _check_instance(ec2_client: EC2Client, arn: ParsedArn) -> ResourceCheckResult:
    response = ec2_client.describe_instances(InstanceIds=[arn.resource_id])
    instances = [
        instance
        for reservation in response.get("Reservations", [])
        for instance in reservation.get("Instances", [])
    ]
    exists = bool(instances) and instances[0].get("State", {}).get("Name") != TERMINATED
    return make_result(arn, exists=exists)


@checker_error_handler(is_ec2_not_found)
def _check_security_group(ec2_client: EC2Client, arn: ParsedArn) -> ResourceCheckResult:
    response = ec2_client.describe_security_groups(GroupIds=[arn.resource_id])
    return make_result(arn, exists=bool(response.get("SecurityGroups")))


@checker_error_handler(is_ec2_not_found)
def _check_key_pair(ec2_client: EC2Client, arn: ParsedArn) -> ResourceCheckResult:
    response = ec2_client.describe_key_pairs(KeyNames=[arn.resource_id])
    return make_result(arn, exists=bool(response.get("KeyPairs")))


class EC2Checker(AwsChecker):
    service = "ec2"
    label = "EC2"
    check_functions = {
        "instance": _check_instance,
        "security-group": _check_security_group,
        "key-pair": _check_key_pair,
    }
