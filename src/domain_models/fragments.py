"""
Rendered output of the narration engine.

A render produces a tree of fragments. Each fragment is a frozen Pydantic model
tagged by `kind`, so a whole render can be dumped to JSON and validated back.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field

from domain_models.constants import (
    BLOCK_CLOSING_PREFIX,
    ERROR_CYCLE,
    ERROR_MAX_DEPTH,
    ERROR_MISSING_NODE,
    ERROR_MISSING_ROLE,
    ERROR_UNKNOWN_ROLE,
    LABEL_SEPARATOR,
)
from domain_models.types import ElementType, ErrorKind, Placement

_ERROR_TEMPLATES: dict[ErrorKind, str] = {
    ErrorKind.MISSING_NODE: ERROR_MISSING_NODE,
    ErrorKind.MISSING_ROLE: ERROR_MISSING_ROLE,
    ErrorKind.UNKNOWN_ROLE: ERROR_UNKNOWN_ROLE,
    ErrorKind.CYCLE: ERROR_CYCLE,
    ErrorKind.MAX_DEPTH: ERROR_MAX_DEPTH,
}


class _FragmentBase(BaseModel):
    # Computed fields show up in dumps, so they are ignored on the way back in.
    model_config = ConfigDict(extra="ignore", frozen=True)

    @property
    def is_empty(self) -> bool:
        return False


class EmptyFragment(_FragmentBase):
    """Renders nothing."""

    kind: Literal["empty"] = "empty"

    @property
    def is_empty(self) -> bool:
        return True


class TextFragment(_FragmentBase):
    """A run of text, emitted verbatim."""

    kind: Literal["text"] = "text"
    text: str = Field(..., description="The text content.")


class LineBreakFragment(_FragmentBase):
    kind: Literal["line_break"] = "line_break"


class SequenceFragment(_FragmentBase):
    """Ordered fragments without a wrapper of their own."""

    kind: Literal["sequence"] = "sequence"
    children: list["Fragment"] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return all(child.is_empty for child in self.children)


class ElementFragment(_FragmentBase):
    """An untitled structural container (paragraph, list, heading, ...)."""

    kind: Literal["element"] = "element"
    element: ElementType = Field(..., description="The kind of container.")
    children: list["Fragment"] = Field(default_factory=list)
    level: int | None = Field(default=None, description="Heading level, headings only.")


class SpanFragment(_FragmentBase):
    """Inline content annotated with a type label before or after it."""

    kind: Literal["span"] = "span"
    label: str = Field(..., description="Type annotation, e.g. 'checked checkbox'.")
    placement: Placement = Field(default=Placement.BEFORE)
    children: list["Fragment"] = Field(default_factory=list)


class BlockFragment(_FragmentBase):
    """
    A titled region.

    The closing title is only shown when the block has content; `children` is None
    for a block that only announces itself.
    """

    kind: Literal["block"] = "block"
    label: str = Field(..., description="Block label, repeated in the closing title.")
    extra: str | None = Field(default=None, description="Extra descriptor for the title.")
    children: list["Fragment"] | None = Field(default=None)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def title(self) -> str:
        if self.extra:
            return f"{self.label}{LABEL_SEPARATOR}{self.extra}"
        return self.label

    @computed_field  # type: ignore[prop-decorator]
    @property
    def closing_title(self) -> str:
        return f"{BLOCK_CLOSING_PREFIX}{self.label}"


class ErrorFragment(_FragmentBase):
    """An inline marker standing in for a node that could not be rendered."""

    kind: Literal["error"] = "error"
    error_kind: ErrorKind = Field(..., description="What went wrong.")
    detail: str = Field(..., description="The offending node id or role token.")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def message(self) -> str:
        return _ERROR_TEMPLATES[self.error_kind].format(node_id=self.detail, role=self.detail)


Fragment = Annotated[
    EmptyFragment
    | TextFragment
    | LineBreakFragment
    | SequenceFragment
    | ElementFragment
    | SpanFragment
    | BlockFragment
    | ErrorFragment,
    Field(discriminator="kind"),
]

SequenceFragment.model_rebuild()
ElementFragment.model_rebuild()
SpanFragment.model_rebuild()
BlockFragment.model_rebuild()
