from axnarrator.engines.renderer import RoleRenderer, render_tree
from axnarrator.engines.state import describe_state
from axnarrator.engines.strategies import ROLE_STRATEGIES, strategy_for
from axnarrator.engines.tree_index import TreeIndex

__all__ = [
    "ROLE_STRATEGIES",
    "RoleRenderer",
    "TreeIndex",
    "describe_state",
    "render_tree",
    "strategy_for",
]
