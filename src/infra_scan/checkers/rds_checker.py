"""
RDS Resource Checkers Module.
"""

from ...utils import checker_error_handler
from ..types import ParsedArn, RDSClient, ResourceCheckResult
from .base import AwsChecker, aws_not_found, make_result

DELETING = "deleting"

is_rds_not_found = aws_not_found(
    "DBInstanceNotFound",
    "DBInstanceNotFoundFault",
    "DBClusterNotFoundFault",
    "DBSubnetGroupNotFoundFault",
)


@checker_error_handler(is_rds_not_found)
def _check_instance(rds_client: RDSClient, arn: ParsedArn) -> ResourceCheckResult:
    response = rds_client.describe_db_instances(DBInstanceIdentifier=arn.resource_id)
    instances = response.get("DBInstances", [])
    exists = bool(instances) and instances[0].get("DBInstanceStatus") != DELETING
    return make_result(arn, exists=exists)


@checker_error_handler(is_rds_not_found)
def _check_cluster(rds_client: RDSClient, arn: ParsedArn) -> ResourceCheckResult:
    response = rds_client.describe_db_clusters(DBClusterIdentifier=arn.resource_id)
    clusters = response.get("DBClusters", [])
    exists = bool(clusters) and clusters[0].get("Status") != DELETING
    return make_result(arn, exists=exists)


@checker_error_handler(is_rds_not_found)
def _check_subnet_group(rds_client: RDSClient, arn: ParsedArn) -> ResourceCheckResult:
    response = rds_client.describe_db_subnet_groups(DBSubnetGroupName=arn.resource_id)
    return make_result(arn, exists=bool(response.get("DBSubnetGroups")))


class RDSChecker(AwsChecker):
    service = "rds"
    label = "RDS"
    check_functions = {
        "db": _check_instance,
        "cluster": _check_cluster,
        "subgrp": _check_subnet_group,
    }
