"""
ECS Resource Checkers Module.

ECS keeps inactive clusters, services and task definitions describable, so
anything not in the ACTIVE state counts as missing.
"""

from ...utils import checker_error_handler
from ..types import ECSClient, ParsedArn, ResourceCheckResult
from .base import AwsChecker, aws_not_found, make_result

ACTIVE = "ACTIVE"

is_ecs_not_found = aws_not_found("ClusterNotFoundException", "ServiceNotFoundException")


@checker_error_handler(is_ecs_not_found)
def _check_cluster(ecs_client: ECSClient, arn: ParsedArn) -> ResourceCheckResult:
    response = ecs_client.describe_clusters(clusters=[arn.raw])
    clusters = response.get("clusters", [])
    exists = bool(clusters) and clusters[0].get("status") == ACTIVE
    return make_result(arn, exists=exists)


@checker_error_handler(is_ecs_not_found)
def _check_service(ecs_client: ECSClient, arn: ParsedArn) -> ResourceCheckResult:
    parts = arn.resource_id.split("/")
    if len(parts) < 2:
        return make_result(arn, exists=False, error="Invalid service ARN format")

    cluster_name, service_name = parts[0], parts[-1]
    cluster_arn = f"arn:{arn.partition}:ecs:{arn.region}:{arn.account_id}:cluster/{cluster_name}"
    response = ecs_client.describe_services(cluster=cluster_arn, services=[service_name])
    services = response.get("services", [])
    exists = bool(services) and services[0].get("status") == ACTIVE
    return make_result(arn, exists=exists)


@checker_error_handler(is_ecs_not_found)
def _check_task_definition(ecs_client: ECSClient, arn: ParsedArn) -> ResourceCheckResult:
    response = ecs_client.describe_task_definition(taskDefinition=arn.raw)
    status = response.get("taskDefinition", {}).get("status")
    return make_result(arn, exists=status == ACTIVE)


class ECSChecker(AwsChecker):
    service = "ecs"
    label = "ECS"
    check_functions = {
        "cluster": _check_cluster,
        "service": _check_service,
        "task-definition": _check_task_definition,
    }
