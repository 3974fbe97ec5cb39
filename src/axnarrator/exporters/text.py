from collections.abc import Iterator

from domain_models.constants import LABEL_SEPARATOR
from domain_models.fragments import (
    BlockFragment,
    ElementFragment,
    EmptyFragment,
    ErrorFragment,
    Fragment,
    LineBreakFragment,
    SequenceFragment,
    SpanFragment,
    TextFragment,
)
from domain_models.types import ElementType, Placement

# Containers that start and end on their own line.
_LINE_ELEMENTS = frozenset(
    {
        ElementType.GROUP,
        ElementType.PARAGRAPH,
        ElementType.HEADING,
        ElementType.ORDERED_LIST,
        ElementType.LIST_ITEM,
    }
)


class _LineWriter:
    """Accumulates inline text and cuts it into lines at block boundaries."""

    def __init__(self) -> None:
        self._buffer: list[str] = []
        self.lines: list[str] = []

    def write(self, text: str) -> None:
        self._buffer.append(text)

    def end_line(self) -> None:
        line = "".join(self._buffer)
        self._buffer.clear()
        if line:
            self.lines.append(line)

    def line(self, text: str) -> None:
        self.end_line()
        self.lines.append(text)


def _write(fragment: Fragment, out: _LineWriter) -> None:
    match fragment:
        case EmptyFragment():
            pass
        case TextFragment(text=text):
            out.write(text)
        case LineBreakFragment():
            out.end_line()
        case SequenceFragment(children=children):
            for child in children:
                _write(child, out)
        case ElementFragment(element=element, children=children):
            boundary = element in _LINE_ELEMENTS
            if boundary:
                out.end_line()
            for child in children:
                _write(child, out)
            if boundary:
                out.end_line()
        case SpanFragment(label=label, placement=placement, children=children):
            if placement is Placement.BEFORE:
                out.write(label + LABEL_SEPARATOR)
            for child in children:
                _write(child, out)
            if placement is Placement.AFTER:
                out.write(LABEL_SEPARATOR + label)
        case BlockFragment(children=children):
            out.line(fragment.title)
            if children is not None:
                for child in children:
                    _write(child, out)
                out.line(fragment.closing_title)
        case ErrorFragment():
            out.write(fragment.message)


def stream_text(fragment: Fragment) -> Iterator[str]:
    """
    Yield the plain-text narration of a fragment tree, one line at a time.

    Block titles and structural containers sit on their own lines; inline content
    (text runs, spans, emphasis, error markers) is concatenated as rendered, leading
    spaces included. Empty lines are dropped.
    """
    out = _LineWriter()
    _write(fragment, out)
    out.end_line()
    yield from out.lines


def export_to_text(fragment: Fragment) -> str:
    """
    Exports a rendered fragment tree to a plain-text narration.

    Args:
        fragment: The rendered fragment tree.

    Returns:
        The narration, lines joined by newlines.
    """
    return "\n".join(stream_text(fragment))
