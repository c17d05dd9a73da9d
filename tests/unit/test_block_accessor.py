"""Block and attribute lookups."""

import pytest

from iacscan.block import Attribute, Block, Range


def _cluster():
    return Block.build(
        "resource",
        ("aws_eks_cluster", "main"),
        attributes={"name": "main", "enabled_cluster_log_types": ["api", "audit"]},
        children=[
            Block.build("vpc_config", attributes={"endpoint_public_access": True}),
            Block.build("encryption_config"),
            Block.build("encryption_config"),
        ],
        source_range=Range("eks.tf", 3, 20),
    )


def test_missing_lookups_return_none():
    block = _cluster()
    assert block.get_attribute("public_access_cidrs") is None
    assert block.get_block("kubernetes_network_config") is None
    assert block.get_blocks("kubernetes_network_config") == ()


def test_child_presence_covers_blocks_and_attributes():
    block = _cluster()
    assert block.has_child("vpc_config")
    assert block.has_child("name")
    assert block.missing_child("outpost_config")


def test_get_block_returns_first_match_and_get_blocks_all():
    block = _cluster()
    assert block.get_block("vpc_config").get_attribute("endpoint_public_access").is_true()
    assert len(block.get_blocks("encryption_config")) == 2


def test_names_and_labels():
    block = _cluster()
    assert block.type_label() == "aws_eks_cluster"
    assert block.name_label() == "main"
    assert block.full_name() == "aws_eks_cluster.main"
    nested = Block.build("resource", ("aws_eks_cluster", "main"), module_address="module.platform")
    assert nested.full_name() == "module.platform.aws_eks_cluster.main"


def test_attributes_inherit_block_range():
    block = _cluster()
    assert block.get_attribute("name").range() == Range("eks.tf", 3, 20)
    assert str(block.range()) == "eks.tf:3-20"


def test_single_line_ranges_render_start_and_end():
    assert str(Range("a.tf", 7, 7)) == "a.tf:7-7"
    assert str(Range()) == ":0-0"


def test_list_values_are_frozen_as_tuples():
    attribute = _cluster().get_attribute("enabled_cluster_log_types")
    assert attribute.is_iterable()
    assert attribute.values() == ("api", "audit")


@pytest.mark.parametrize(
    "value, is_true, is_false",
    [
        (True, True, False),
        (False, False, True),
        ("true", True, False),
        ("FALSE", False, True),
        ("maybe", False, False),
        (0, False, False),
        (("0.0.0.0/0",), False, False),
    ],
)
def test_boolean_queries(value, is_true, is_false):
    attribute = Attribute(name="flag", value=value)
    assert attribute.is_true() is is_true
    assert attribute.is_false() is is_false


def test_blocks_are_immutable():
    block = _cluster()
    with pytest.raises(AttributeError):
        block.type = "data"


def test_attribute_mapping_is_read_only():
    block = _cluster()
    with pytest.raises(TypeError):
        block.attributes["name"] = Attribute("name", "other")
    assert block.get_attribute("name").value == "main"


def test_blocks_hash_by_identity():
    first, second = _cluster(), _cluster()
    assert first != second
    assert first == first
    assert len({first, second, first}) == 2
