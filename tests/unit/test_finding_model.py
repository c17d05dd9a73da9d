"""Finding builders, payload shape, and the result set."""

import threading

from iacscan.block import Attribute, Range
from iacscan.result import Finding, ResultSet
from iacscan.rules.aws.eks.no_public_cluster_access_to_cidr import RULE
from iacscan.severity import Severity
from tests import EKS_RULE_ID, FINDING_REQUIRED_FIELDS
from tests.helpers.plan_helpers import RESOURCE_RANGE, eks_cluster


def test_new_finding_defaults_to_resource_and_rule_metadata():
    finding = Finding.new(RULE, eks_cluster())
    assert finding.rule_id == EKS_RULE_ID
    assert finding.legacy_id == "AWS068"
    assert finding.long_id == EKS_RULE_ID
    assert finding.severity is Severity.CRITICAL
    assert finding.range == RESOURCE_RANGE
    assert finding.resource == "aws_eks_cluster.example"


def test_builders_do_not_mutate_the_original():
    base = Finding.new(RULE, eks_cluster())
    attribute = Attribute("public_access_cidrs", ["0.0.0.0/0"], Range("main.tf", 7, 7))
    derived = base.with_description("wide open").with_range(attribute.range()).with_attribute_annotation(attribute)

    assert base.description == ""
    assert base.attribute_name is None
    assert derived.range == Range("main.tf", 7, 7)
    assert derived.attribute_name == "public_access_cidrs"
    assert derived.with_severity(Severity.LOW).severity is Severity.LOW
    assert derived.severity is Severity.CRITICAL


def test_finding_payload_shape():
    attribute = Attribute("public_access_cidrs", ["0.0.0.0/0"], Range("main.tf", 7, 7))
    payload = (
        Finding.new(RULE, eks_cluster())
        .with_description("wide open")
        .with_range(attribute.range())
        .with_attribute_annotation(attribute)
        .to_dict()
    )

    assert set(payload) == set(FINDING_REQUIRED_FIELDS)
    assert payload["long_id"] == EKS_RULE_ID
    assert payload["severity"] == "critical"
    assert payload["location"] == {"filename": "main.tf", "start_line": 7, "end_line": 7}
    assert payload["attributes"] == {"public_access_cidrs": ["0.0.0.0/0"]}
    assert payload["remediation_hint"] == RULE.documentation.resolution


def test_result_set_is_append_only_snapshot():
    result_set = ResultSet()
    finding = Finding.new(RULE, eks_cluster())
    result_set.add(finding)
    snapshot = result_set.all()
    snapshot.clear()

    assert len(result_set) == 1
    assert list(result_set) == [finding]


def test_result_set_supports_concurrent_appends():
    result_set = ResultSet()
    finding = Finding.new(RULE, eks_cluster())

    def _append():
        for _ in range(200):
            result_set.add(finding)

    threads = [threading.Thread(target=_append) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(result_set) == 1600
