from collections.abc import Iterable
from typing import Any

import pytest

from domain_models.manifest import AXNode, AXTree
from axnarrator.engines.renderer import RoleRenderer
from axnarrator.engines.tree_index import TreeIndex

# Shared Test Utility for Node Generation
# Nodes are built from raw CDP-shaped dicts so the alias handling is exercised too.


def prop(name: str, value: Any, value_type: str = "boolean") -> dict[str, Any]:
    """Build a raw CDP property entry."""
    return {"name": name, "value": {"type": value_type, "value": value}}


def make_node(
    node_id: str,
    role: str | None,
    name: str | None = None,
    children: Iterable[str] = (),
    ignored: bool = False,
    properties: Iterable[dict[str, Any]] = (),
) -> AXNode:
    """Factory for AXNodes with consistent defaults."""
    data: dict[str, Any] = {
        "nodeId": node_id,
        "ignored": ignored,
        "properties": list(properties),
        "childIds": list(children),
    }
    if role is not None:
        data["role"] = {"type": "role", "value": role}
    if name is not None:
        data["name"] = {"type": "computedString", "value": name}
    return AXNode.model_validate(data)


def make_tree(*nodes: AXNode) -> AXTree:
    return AXTree(nodes=list(nodes))


def make_renderer(*nodes: AXNode) -> RoleRenderer:
    return RoleRenderer(TreeIndex(make_tree(*nodes)))


@pytest.fixture
def hello_tree() -> AXTree:
    """WebArea "Page" with a single text child "Hello"."""
    return make_tree(
        make_node("1", "WebArea", "Page", children=["2"]),
        make_node("2", "text", "Hello"),
    )
