from enum import StrEnum
from typing import TypeAlias

# NodeID is the CDP AXNodeId, always a string in the protocol.
NodeID: TypeAlias = str


class ValueType(StrEnum):
    """
    Type tags of an accessibility value (CDP `AXValueType`).
    """

    BOOLEAN = "boolean"
    TRISTATE = "tristate"
    BOOLEAN_OR_UNDEFINED = "booleanOrUndefined"
    IDREF = "idref"
    IDREF_LIST = "idrefList"
    INTEGER = "integer"
    NODE = "node"
    NODE_LIST = "nodeList"
    NUMBER = "number"
    STRING = "string"
    COMPUTED_STRING = "computedString"
    TOKEN = "token"
    TOKEN_LIST = "tokenList"
    DOM_RELATION = "domRelation"
    ROLE = "role"
    INTERNAL_ROLE = "internalRole"
    VALUE_UNDEFINED = "valueUndefined"


class PropertyName(StrEnum):
    """Well-known accessibility property names (CDP `AXPropertyName`)."""

    BUSY = "busy"
    DISABLED = "disabled"
    EDITABLE = "editable"
    FOCUSABLE = "focusable"
    FOCUSED = "focused"
    HIDDEN = "hidden"
    HIDDEN_ROOT = "hiddenRoot"
    INVALID = "invalid"
    KEYSHORTCUTS = "keyshortcuts"
    SETTABLE = "settable"
    ROLEDESCRIPTION = "roledescription"
    LIVE = "live"
    ATOMIC = "atomic"
    RELEVANT = "relevant"
    ROOT = "root"
    AUTOCOMPLETE = "autocomplete"
    HAS_POPUP = "hasPopup"
    LEVEL = "level"
    MULTISELECTABLE = "multiselectable"
    ORIENTATION = "orientation"
    MULTILINE = "multiline"
    READONLY = "readonly"
    REQUIRED = "required"
    VALUEMIN = "valuemin"
    VALUEMAX = "valuemax"
    VALUETEXT = "valuetext"
    CHECKED = "checked"
    EXPANDED = "expanded"
    MODAL = "modal"
    PRESSED = "pressed"
    SELECTED = "selected"
    ACTIVEDESCENDANT = "activedescendant"
    CONTROLS = "controls"
    DESCRIBEDBY = "describedby"
    DETAILS = "details"
    ERRORMESSAGE = "errormessage"
    FLOWTO = "flowto"
    LABELLEDBY = "labelledby"
    OWNS = "owns"


class Placement(StrEnum):
    """Where a span's type label goes relative to its content."""

    BEFORE = "before"
    AFTER = "after"


class ElementType(StrEnum):
    """Structural containers that carry no title of their own."""

    GROUP = "group"
    PARAGRAPH = "paragraph"
    EMPHASIS = "emphasis"
    HEADING = "heading"
    ORDERED_LIST = "ordered_list"
    LIST_ITEM = "list_item"


class ErrorKind(StrEnum):
    """
    Per-node rendering failures. These are rendered inline, never raised.
    """

    MISSING_NODE = "missing_node"
    MISSING_ROLE = "missing_role"
    UNKNOWN_ROLE = "unknown_role"
    CYCLE = "cycle"
    MAX_DEPTH = "max_depth"


class OutputFormat(StrEnum):
    """Output formats supported by the exporters."""

    TEXT = "text"
    HTML = "html"
    JSON = "json"
