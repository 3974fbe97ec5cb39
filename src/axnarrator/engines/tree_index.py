import logging
from collections.abc import Mapping
from types import MappingProxyType

from domain_models.manifest import AXNode, AXTree
from domain_models.types import NodeID

logger = logging.getLogger(__name__)


class TreeIndex:
    """
    Id lookup over a flat accessibility tree.

    Built once per tree and read-only afterwards, so concurrent renders of the
    same tree can share one index.
    """

    def __init__(self, tree: AXTree) -> None:
        nodes: dict[NodeID, AXNode] = {}
        for node in tree.nodes:
            if node.node_id in nodes:
                logger.warning(f"Duplicate node id {node.node_id}; the later node wins.")
            nodes[node.node_id] = node
        self._nodes: Mapping[NodeID, AXNode] = MappingProxyType(nodes)
        # Positional convention of the dump format: the first node is the root.
        self._root_id = tree.nodes[0].node_id
        logger.debug(f"Indexed {len(nodes)} nodes, root {self._root_id}.")

    @classmethod
    def build(cls, tree: AXTree) -> "TreeIndex":
        return cls(tree)

    def lookup(self, node_id: NodeID) -> AXNode | None:
        """Return the node with the given id, or None when the tree has no such node."""
        return self._nodes.get(node_id)

    def root(self) -> NodeID:
        return self._root_id

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes
