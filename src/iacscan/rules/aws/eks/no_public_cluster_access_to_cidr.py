"""EKS clusters must not expose the public API endpoint to 0.0.0.0/0."""

from __future__ import annotations

from ....block import Block
from ....cidr import is_open
from ....result import Finding, ResultSet
from ....severity import Severity
from ...base import Rule, RuleDocumentation


def check(result_set: ResultSet, resource_block: Block) -> None:
    if resource_block.missing_child("vpc_config"):
        return
    vpc_config = resource_block.get_block("vpc_config")
    if vpc_config is None:
        return

    public_access_enabled = vpc_config.get_attribute("endpoint_public_access")
    if public_access_enabled is not None and public_access_enabled.is_false():
        return

    public_access_cidrs = vpc_config.get_attribute("public_access_cidrs")
    if public_access_cidrs is None:
        result_set.add(
            Finding.new(RULE, resource_block).with_description(
                f"Resource '{resource_block.full_name()}' uses the default public access cidr of 0.0.0.0/0"
            )
        )
    elif is_open(public_access_cidrs):
        result_set.add(
            Finding.new(RULE, resource_block)
            .with_description(
                f"Resource '{resource_block.full_name()}' has public access cidr explicitly set to wide open"
            )
            .with_range(public_access_cidrs.range())
            .with_attribute_annotation(public_access_cidrs)
        )


RULE = Rule(
    legacy_id="AWS068",
    provider="aws",
    service="eks",
    short_code="no-public-cluster-access-to-cidr",
    documentation=RuleDocumentation(
        summary="EKS cluster should not have open CIDR range for public access",
        impact="EKS can be accessed from the internet",
        resolution="Don't enable public access to EKS Clusters",
        explanation=(
            "EKS Clusters have public access cidrs set to 0.0.0.0/0 by default which is wide open "
            "to the internet. This should be explicitly set to a more specific CIDR range."
        ),
        bad_example="""
resource "aws_eks_cluster" "bad_example" {
    name     = "bad_example_cluster"
    role_arn = var.cluster_arn
    vpc_config {
        endpoint_public_access = true
    }
}
""",
        good_example="""
resource "aws_eks_cluster" "good_example" {
    name     = "good_example_cluster"
    role_arn = var.cluster_arn
    vpc_config {
        endpoint_public_access = true
        public_access_cidrs    = ["10.2.0.0/8"]
    }
}
""",
        links=(
            "https://registry.terraform.io/providers/hashicorp/aws/latest/docs/resources/eks_cluster#vpc_config",
            "https://docs.aws.amazon.com/eks/latest/userguide/create-public-private-vpc.html",
        ),
    ),
    check=check,
    default_severity=Severity.CRITICAL,
    required_types=("resource",),
    required_labels=("aws_eks_cluster",),
)
