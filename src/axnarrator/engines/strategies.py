"""
Role dispatch table.

Every role the renderer understands maps to one strategy variant. The variants are
plain data (labels, placement, container kind); the renderer interprets them.
"""

from collections.abc import Mapping
from enum import StrEnum
from types import MappingProxyType
from typing import ClassVar, Literal

from pydantic import BaseModel, ConfigDict

from domain_models.constants import (
    DEFAULT_HEADING_LEVEL,
    IMAGE_LABEL,
    LINK_LABEL,
    LIST_LABEL,
    SEPARATOR_LABEL,
    WEB_CONTENT_LABEL,
)
from domain_models.types import ElementType, Placement


class SpanContent(StrEnum):
    """What a span strategy wraps: the node's own name or its rendered children."""

    NAME = "name"
    CHILDREN = "children"


class _Strategy(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    # Whether the renderer visits the node's children for this strategy.
    recurses: ClassVar[bool] = True
    # Whether the children are rendered inside a link.
    enters_link: ClassVar[bool] = False


class NamedBlockStrategy(_Strategy):
    """Titled block "<name> <label>" around the children."""

    kind: Literal["named_block"] = "named_block"
    label: str


class EmptyStrategy(_Strategy):
    kind: Literal["empty"] = "empty"
    recurses: ClassVar[bool] = False


class LineBreakStrategy(_Strategy):
    kind: Literal["line_break"] = "line_break"
    recurses: ClassVar[bool] = False


class PassThroughStrategy(_Strategy):
    """Children only, no wrapper."""

    kind: Literal["pass_through"] = "pass_through"


class ElementStrategy(_Strategy):
    """Untitled container around the children."""

    kind: Literal["element"] = "element"
    element: ElementType


class TextStrategy(_Strategy):
    kind: Literal["text"] = "text"
    recurses: ClassVar[bool] = False


class HeadingStrategy(_Strategy):
    kind: Literal["heading"] = "heading"
    default_level: int = DEFAULT_HEADING_LEVEL


class LinkStrategy(_Strategy):
    kind: Literal["link"] = "link"
    label: str = LINK_LABEL
    enters_link: ClassVar[bool] = True


class StateSpanStrategy(_Strategy):
    """Span labelled with the node's state text followed by a role label."""

    kind: Literal["state_span"] = "state_span"
    label: str
    placement: Placement = Placement.AFTER
    content: SpanContent = SpanContent.NAME


class ImageStrategy(_Strategy):
    """Image span; the label goes first inside links and last elsewhere."""

    kind: Literal["image"] = "image"
    label: str = IMAGE_LABEL
    recurses: ClassVar[bool] = False


class ListStrategy(_Strategy):
    kind: Literal["list"] = "list"
    label: str = LIST_LABEL


class SeparatorStrategy(_Strategy):
    kind: Literal["separator"] = "separator"
    label: str = SEPARATOR_LABEL
    recurses: ClassVar[bool] = False


Strategy = (
    NamedBlockStrategy
    | EmptyStrategy
    | LineBreakStrategy
    | PassThroughStrategy
    | ElementStrategy
    | TextStrategy
    | HeadingStrategy
    | LinkStrategy
    | StateSpanStrategy
    | ImageStrategy
    | ListStrategy
    | SeparatorStrategy
)

PASS_THROUGH_ROLES = (
    "GenericContainer",
    "generic",
    "LayoutTable",
    "form",
    "Details",
    "Label",
    "dialog",
    "DescriptionListTerm",
    "DescriptionListDetail",
    "Anchor",
)

LANDMARK_LABELS: dict[str, str] = {
    "WebArea": WEB_CONTENT_LABEL,
    "banner": "banner",
    "main": "main",
    "group": "group",
    "article": "article",
    "contentinfo": "content information",
    "navigation": "navigation",
    "search": "search",
    # TODO: announce "table, M columns, N rows" once cell counts are derived.
    "table": "table",
    "DescriptionList": "definition list",
}

# Spans whose label is the state text followed by this role label.
STATE_SPAN_LABELS: dict[str, tuple[str, SpanContent]] = {
    "button": ("button", SpanContent.NAME),
    "checkbox": ("checkbox", SpanContent.NAME),
    "combobox": ("combobox", SpanContent.NAME),
    "DisclosureTriangle": ("disclosure triangle", SpanContent.CHILDREN),
    "textbox": ("edit text", SpanContent.NAME),
}


def _build_table() -> Mapping[str, Strategy]:
    table: dict[str, Strategy] = {
        "SVGRoot": EmptyStrategy(),
        "LineBreak": LineBreakStrategy(),
        "strong": ElementStrategy(element=ElementType.EMPHASIS),
        "figure": ElementStrategy(element=ElementType.GROUP),
        "Pre": ElementStrategy(element=ElementType.GROUP),
        "paragraph": ElementStrategy(element=ElementType.PARAGRAPH),
        "listitem": ElementStrategy(element=ElementType.LIST_ITEM),
        "text": TextStrategy(),
        "heading": HeadingStrategy(),
        "link": LinkStrategy(),
        "img": ImageStrategy(),
        "list": ListStrategy(),
        "separator": SeparatorStrategy(),
    }
    table.update({role: PassThroughStrategy() for role in PASS_THROUGH_ROLES})
    table.update({role: NamedBlockStrategy(label=label) for role, label in LANDMARK_LABELS.items()})
    table.update(
        {
            role: StateSpanStrategy(label=label, content=content)
            for role, (label, content) in STATE_SPAN_LABELS.items()
        }
    )
    return MappingProxyType(table)


ROLE_STRATEGIES: Mapping[str, Strategy] = _build_table()


def strategy_for(role: str) -> Strategy | None:
    """Look up the strategy for a role token; None for unknown roles."""
    return ROLE_STRATEGIES.get(role)
