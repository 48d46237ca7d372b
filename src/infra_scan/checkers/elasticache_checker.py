"""
ElastiCache Resource Checkers Module.
"""

from ...utils import checker_error_handler
from ..types import ElastiCacheClient, ParsedArn, ResourceCheckResult
from .base import AwsChecker, aws_not_found, make_result

DELETING = "deleting"

is_elasticache_not_found = aws_not_found(
    "CacheClusterNotFound",
    "CacheClusterNotFoundFault",
    "CacheSubnetGroupNotFoundFault",
    "ReplicationGroupNotFoundFault",
)


@checker_error_handler(is_elasticache_not_found)
def _check_cluster(elasticache_client: ElastiCacheClient, arn: ParsedArn) -> ResourceCheckResult:
    response = elasticache_client.describe_cache_clusters(CacheClusterId=arn.resource_id)
    clusters = response.get("CacheClusters", [])
    exists = bool(clusters) and clusters[0].get("CacheClusterStatus") != DELETING
    return make_result(arn, exists=exists)


@checker_error_handler(is_elasticache_not_found)
def _check_subnet_group(elasticache_client: ElastiCacheClient, arn: ParsedArn) -> ResourceCheckResult:
    response = elasticache_client.describe_cache_subnet_groups(CacheSubnetGroupName=arn.resource_id)
    return make_result(arn, exists=bool(response.get("CacheSubnetGroups")))


@checker_error_handler(is_elasticache_not_found)
def _check_replication_group(elasticache_client: ElastiCacheClient, arn: ParsedArn) -> ResourceCheckResult:
    response = elasticache_client.describe_replication_groups(ReplicationGroupId=arn.resource_id)
    groups = response.get("ReplicationGroups", [])
    exists = bool(groups) and groups[0].get("Status") != DELETING
    return make_result(arn, exists=exists)


class ElastiCacheChecker(AwsChecker):
    service = "elasticache"
    label = "ElastiCache"
    check_functions = {
        "cluster": _check_cluster,
        "subnetgroup": _check_subnet_group,
        "replicationgroup": _check_replication_group,
    }
