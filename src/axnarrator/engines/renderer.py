import logging

from domain_models.config import RenderConfig
from domain_models.constants import WORD_SEPARATOR
from domain_models.fragments import (
    ElementFragment,
    EmptyFragment,
    ErrorFragment,
    Fragment,
    LineBreakFragment,
    SequenceFragment,
    TextFragment,
)
from domain_models.manifest import (
    AXNode,
    AXTree,
    IntegerValue,
    NumberValue,
    StringValue,
)
from domain_models.types import ElementType, ErrorKind, NodeID, Placement, PropertyName
from axnarrator.engines.formatting import needs_separator, separator, wrap_block, wrap_span
from axnarrator.engines.state import describe_state
from axnarrator.engines.strategies import (
    ROLE_STRATEGIES,
    ElementStrategy,
    EmptyStrategy,
    HeadingStrategy,
    ImageStrategy,
    LineBreakStrategy,
    LinkStrategy,
    ListStrategy,
    NamedBlockStrategy,
    PassThroughStrategy,
    SeparatorStrategy,
    SpanContent,
    StateSpanStrategy,
    Strategy,
    TextStrategy,
)
from axnarrator.engines.tree_index import TreeIndex
from axnarrator.exceptions import RenderContextError

logger = logging.getLogger(__name__)


def _named_label(name: str, label: str) -> str:
    return f"{name}{WORD_SEPARATOR}{label}" if name else label


def _item_count(count: int) -> str:
    return f"{count} item" if count == 1 else f"{count} items"


def _heading_level(node: AXNode, default: int) -> int:
    prop = node.get_property(PropertyName.LEVEL)
    match prop.value if prop else None:
        case IntegerValue(value=level) if level:
            return level
        case NumberValue(value=level) if level:
            return int(level)
        case StringValue(value=text) if text.isdigit() and int(text):
            return int(text)
        case _:
            return default


class RoleRenderer:
    """
    Renders accessibility tree nodes into narration fragments.

    Rendering is a depth-first walk from a node id. Each node is resolved through the
    tree index and dispatched on its role token to a strategy. Problems with a single
    node (missing node, missing role, unknown role, cycles, excessive depth) become
    inline error fragments so the rest of the tree still renders.
    """

    def __init__(self, index: TreeIndex, config: RenderConfig | None = None) -> None:
        if not isinstance(index, TreeIndex):
            msg = "RoleRenderer needs a TreeIndex to render from."
            raise RenderContextError(msg)
        self.index = index
        self.config = config or RenderConfig.default()
        self.strategies = ROLE_STRATEGIES

    def render_root(self) -> Fragment:
        """Render the whole tree starting from its root node."""
        return self.render(self.index.root())

    def render(
        self, node_id: NodeID, in_link: bool = False, ancestors: tuple[NodeID, ...] = ()
    ) -> Fragment:
        """
        Render one node and its subtree.

        Args:
            node_id: Id of the node to render.
            in_link: True when the node sits inside a link.
            ancestors: Ids of the nodes above this one on the current path.

        Returns:
            The rendered fragment. Never raises for bad tree data.
        """
        node = self.index.lookup(node_id)
        if node is None:
            return self._error(ErrorKind.MISSING_NODE, node_id)

        role = node.role_token
        if role is None:
            return self._error(ErrorKind.MISSING_ROLE, node_id)

        # Hidden is checked after the role so a role-less hidden node still reports.
        if node.ignored or node.is_hidden:
            return EmptyFragment()

        if self.config.detect_cycles and node_id in ancestors:
            return self._error(ErrorKind.CYCLE, node_id)
        if len(ancestors) >= self.config.max_depth:
            return self._error(ErrorKind.MAX_DEPTH, node_id)

        strategy = self.strategies.get(role)
        if strategy is None:
            return self._error(ErrorKind.UNKNOWN_ROLE, role)

        return self._apply(strategy, node, in_link, (*ancestors, node_id))

    def render_children(
        self, node: AXNode, in_link: bool = False, ancestors: tuple[NodeID, ...] = ()
    ) -> list[Fragment]:
        """Render the children of a node in order, separating adjacent text leaves."""
        rendered: list[Fragment] = []
        previous: AXNode | None = None
        for position, child_id in enumerate(node.child_ids):
            current = self.index.lookup(child_id)
            if needs_separator(previous, current, position):
                rendered.append(separator())
            rendered.append(self.render(child_id, in_link, ancestors))
            previous = current
        return rendered

    def _apply(
        self, strategy: Strategy, node: AXNode, in_link: bool, path: tuple[NodeID, ...]
    ) -> Fragment:
        child_link = in_link or strategy.enters_link
        children = self.render_children(node, child_link, path) if strategy.recurses else []
        name = node.name_text

        match strategy:
            case NamedBlockStrategy(label=label):
                return wrap_block(_named_label(name, label), content=children)
            case EmptyStrategy():
                return EmptyFragment()
            case LineBreakStrategy():
                return LineBreakFragment()
            case PassThroughStrategy():
                return SequenceFragment(children=children)
            case ElementStrategy(element=element):
                return ElementFragment(element=element, children=children)
            case TextStrategy():
                return TextFragment(text=WORD_SEPARATOR + name)
            case HeadingStrategy(default_level=default_level):
                heading = ElementFragment(
                    element=ElementType.HEADING,
                    level=_heading_level(node, default_level),
                    children=children,
                )
                return ElementFragment(element=ElementType.GROUP, children=[heading])
            case LinkStrategy(label=label):
                return wrap_span(describe_state(node) + label, children, Placement.BEFORE)
            case StateSpanStrategy(label=label, placement=placement, content=content):
                inner = children if content is SpanContent.CHILDREN else [TextFragment(text=name)]
                return wrap_span(describe_state(node) + label, inner, placement)
            case ImageStrategy(label=label):
                placement = Placement.BEFORE if in_link else Placement.AFTER
                return wrap_span(label, [TextFragment(text=name)], placement)
            case ListStrategy(label=label):
                items = ElementFragment(element=ElementType.ORDERED_LIST, children=children)
                return wrap_block(label, extra=_item_count(len(node.child_ids)), content=[items])
            case SeparatorStrategy(label=label):
                return wrap_block(label)

        # Unreachable while every Strategy variant has a case above.
        return self._error(ErrorKind.UNKNOWN_ROLE, node.role_token or "")

    def _error(self, kind: ErrorKind, detail: str) -> ErrorFragment:
        fragment = ErrorFragment(error_kind=kind, detail=detail)
        logger.warning(fragment.message)
        return fragment


def render_tree(tree: AXTree, config: RenderConfig | None = None) -> Fragment:
    """
    Render a full accessibility tree snapshot.

    Args:
        tree: The tree to render. Its first node is the root.
        config: Optional render configuration.

    Returns:
        The fragment tree of the root node.
    """
    index = TreeIndex.build(tree)
    fragment = RoleRenderer(index, config).render_root()
    logger.debug(f"Rendered tree of {len(index)} nodes from root {index.root()}.")
    return fragment
