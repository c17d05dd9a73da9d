import json

from iacscan.block import Block, Range

RESOURCE_RANGE = Range("main.tf", 1, 12)
VPC_CONFIG_RANGE = Range("main.tf", 5, 9)
_UNSET = object()


def write_plan(tmp_path, payload):
    path = tmp_path / "plan.json"
    path.write_text(json.dumps(payload))
    return path


def enable_strict_mode(monkeypatch):
    monkeypatch.setenv("IACSCAN_STRICT", "1")


def eks_cluster(public_access=_UNSET, cidrs=_UNSET, *, with_vpc_config=True, name="example"):
    """Build an ``aws_eks_cluster`` resource block; unset arguments stay absent."""

    children = []
    if with_vpc_config:
        vpc_attributes = {}
        if public_access is not _UNSET:
            vpc_attributes["endpoint_public_access"] = public_access
        if cidrs is not _UNSET:
            vpc_attributes["public_access_cidrs"] = cidrs
        children.append(Block.build("vpc_config", attributes=vpc_attributes, source_range=VPC_CONFIG_RANGE))
    return Block.build(
        "resource",
        ("aws_eks_cluster", name),
        attributes={"name": f"{name}_cluster", "role_arn": "arn:aws:iam::123456789012:role/eks"},
        children=children,
        source_range=RESOURCE_RANGE,
    )


def plan_resource(values, *, name="example", resource_type="aws_eks_cluster", **extra):
    resource = {
        "address": f"{resource_type}.{name}",
        "mode": "managed",
        "type": resource_type,
        "name": name,
        "values": values,
    }
    resource.update(extra)
    return resource


def plan_document(*resources, child_modules=None):
    root_module = {"resources": list(resources)}
    if child_modules is not None:
        root_module["child_modules"] = child_modules
    return {"format_version": "1.2", "planned_values": {"root_module": root_module}}
