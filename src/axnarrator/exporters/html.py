from html import escape

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

_ELEMENT_TAGS: dict[ElementType, str] = {
    ElementType.GROUP: "div",
    ElementType.PARAGRAPH: "p",
    ElementType.EMPHASIS: "strong",
    ElementType.ORDERED_LIST: "ol",
    ElementType.LIST_ITEM: "li",
}

STYLESHEET = """
.Tree { font-family: sans-serif; line-height: 1.5; }
.Block { margin: 0.25em 0; }
.Block-title { color: #808080; font-size: 0.9em; }
.Block-content { border-left: 2px solid #d0d0d0; padding-left: 1em; }
.Span { border-bottom: 1px dotted #a0a0a0; }
.Span-type { color: #808080; font-size: 0.9em; }
.Error { background: red; color: white; }
"""


def _heading_tag(level: int | None) -> str:
    return f"h{min(max(level or 6, 1), 6)}"


def _render_children(children: list[Fragment]) -> str:
    return "".join(_render(child) for child in children)


def _render(fragment: Fragment) -> str:
    match fragment:
        case EmptyFragment():
            return ""
        case TextFragment(text=text):
            return escape(text)
        case LineBreakFragment():
            return "<br>"
        case SequenceFragment(children=children):
            return _render_children(children)
        case ElementFragment(element=ElementType.HEADING, level=level, children=children):
            tag = _heading_tag(level)
            return f"<{tag}>{_render_children(children)}</{tag}>"
        case ElementFragment(element=element, children=children):
            tag = _ELEMENT_TAGS[element]
            return f"<{tag}>{_render_children(children)}</{tag}>"
        case SpanFragment(label=label, placement=placement, children=children):
            label_html = escape(label)
            before = (
                f'<span class="Span-type">{label_html}{LABEL_SEPARATOR}</span>'
                if placement is Placement.BEFORE
                else ""
            )
            after = (
                f'<span class="Span-type">{LABEL_SEPARATOR}{label_html}</span>'
                if placement is Placement.AFTER
                else ""
            )
            return f'<span class="Span">{before}{_render_children(children)}{after}</span>'
        case BlockFragment(children=children):
            parts = [f'<div class="Block-title">{escape(fragment.title)}</div>']
            if children is not None:
                parts.append(f'<div class="Block-content">{_render_children(children)}</div>')
                parts.append(f'<div class="Block-title">{escape(fragment.closing_title)}</div>')
            return f'<div class="Block">{"".join(parts)}</div>'
        case ErrorFragment():
            return f'<span class="Error">{escape(fragment.message)}</span>'
    return ""


def export_to_html(fragment: Fragment) -> str:
    """
    Exports a rendered fragment tree to an HTML fragment.

    Blocks become titled `div`s, spans carry their type annotation in a
    `Span-type` element, and error markers are highlighted. All text is escaped.
    """
    return f'<div class="Tree">{_render(fragment)}</div>'


def render_page(fragment: Fragment, title: str = "Accessibility tree narration") -> str:
    """Wrap the HTML export in a standalone document with its stylesheet."""
    return (
        "<!DOCTYPE html>\n"
        f'<html><head><meta charset="utf-8"><title>{escape(title)}</title>'
        f"<style>{STYLESHEET}</style></head>"
        f"<body><h1>{escape(title)}</h1>{export_to_html(fragment)}</body></html>\n"
    )
