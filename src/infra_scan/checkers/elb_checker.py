"""
Elastic Load Balancing (v2) Resource Checkers Module.
"""

from ...utils import checker_error_handler
from ..types import ELBv2Client, ParsedArn, ResourceCheckResult
from .base import AwsChecker, aws_not_found, make_result

# Load balancers in these states no longer serve traffic
UNUSABLE_LOAD_BALANCER_STATES = ("failed", "active_impaired")

is_elb_not_found = aws_not_found(
    "LoadBalancerNotFound",
    "LoadBalancerNotFoundException",
    "TargetGroupNotFound",
    "TargetGroupNotFoundException",
    "ListenerNotFound",
    "ListenerNotFoundException",
)


@checker_error_handler(is_elb_not_found)
def _check_load_balancer(elb_client: ELBv2Client, arn: ParsedArn) -> ResourceCheckResult:
    response = elb_client.describe_load_balancers(LoadBalancerArns=[arn.raw])
    load_balancers = response.get("LoadBalancers", [])
    if not load_balancers:
        return make_result(arn, exists=False)
    state = load_balancers[0].get("State", {}).get("Code")
    return make_result(arn, exists=state not in UNUSABLE_LOAD_BALANCER_STATES)


@checker_error_handler(is_elb_not_found)
def _check_target_group(elb_client: ELBv2Client, arn: ParsedArn) -> ResourceCheckResult:
    response = elb_client.describe_target_groups(TargetGroupArns=[arn.raw])
    return make_result(arn, exists=bool(response.get("TargetGroups")))


@checker_error_handler(is_elb_not_found)
def _check_listener(elb_client: ELBv2Client, arn: ParsedArn) -> ResourceCheckResult:
    response = elb_client.describe_listeners(ListenerArns=[arn.raw])
    return make_result(arn, exists=bool(response.get("Listeners")))


class ELBChecker(AwsChecker):
    service = "elasticloadbalancing"
    label = "ELB"
    client_name = "elbv2"
    check_functions = {
        "loadbalancer": _check_load_balancer,
        "targetgroup": _check_target_group,
        "listener": _check_listener,
    }
