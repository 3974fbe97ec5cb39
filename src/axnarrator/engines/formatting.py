from collections.abc import Sequence

from domain_models.constants import WORD_SEPARATOR
from domain_models.fragments import (
    BlockFragment,
    Fragment,
    SequenceFragment,
    SpanFragment,
    TextFragment,
)
from domain_models.manifest import AXNode
from domain_models.types import Placement

TEXT_ROLE = "text"


def is_text_node(node: AXNode | None) -> bool:
    """True for a resolved, rendered node whose role token is `text`."""
    if node is None or node.ignored or node.is_hidden:
        return False
    return node.role_token == TEXT_ROLE


def needs_separator(previous: AXNode | None, current: AXNode | None, index: int) -> bool:
    """
    Decide whether a space goes between two consecutive rendered children.

    Only adjacent text leaves are separated; every other strategy handles its own
    spacing.
    """
    return index > 0 and is_text_node(previous) and is_text_node(current)


def separator() -> TextFragment:
    return TextFragment(text=WORD_SEPARATOR)


def _has_content(content: Sequence[Fragment] | None) -> bool:
    return bool(content) and not all(fragment.is_empty for fragment in content)


def wrap_block(
    label: str, extra: str | None = None, content: Sequence[Fragment] | None = None
) -> BlockFragment:
    """
    Wrap content in a titled block.

    A block without content only announces its title: no content region and no
    closing title.
    """
    children = list(content) if content is not None and _has_content(content) else None
    return BlockFragment(label=label, extra=extra, children=children)


def wrap_span(
    label: str, content: Sequence[Fragment], placement: Placement = Placement.BEFORE
) -> SequenceFragment:
    """Wrap inline content with a type label, preceded by one separating space."""
    return SequenceFragment(
        children=[separator(), SpanFragment(label=label, placement=placement, children=list(content))]
    )
