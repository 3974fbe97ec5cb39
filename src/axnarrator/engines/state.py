from domain_models.constants import (
    STATE_CHECKED,
    STATE_COLLAPSED,
    STATE_EXPANDED,
    STATE_POPUP_TEMPLATE,
    STATE_UNCHECKED,
)
from domain_models.manifest import (
    AXNode,
    BooleanOrUndefinedValue,
    BooleanValue,
    TristateValue,
    TypedValue,
    payload_text,
)
from domain_models.types import PropertyName


def _expanded_phrase(value: TypedValue | None) -> str:
    match value:
        case BooleanValue(value=True) | BooleanOrUndefinedValue(value=True):
            return STATE_EXPANDED
        case BooleanValue(value=False) | BooleanOrUndefinedValue(value=False):
            return STATE_COLLAPSED
        case _:
            return ""


def _checked_phrase(value: TypedValue | None) -> str:
    # "mixed" is deliberately silent.
    match value:
        case TristateValue(value="true"):
            return STATE_CHECKED
        case TristateValue(value="false"):
            return STATE_UNCHECKED
        case _:
            return ""


def _popup_phrase(value: TypedValue | None) -> str:
    if value is None or not value.value:
        return ""
    return STATE_POPUP_TEMPLATE.format(value=payload_text(value.value))


def describe_state(node: AXNode) -> str:
    """
    Build the state text announced before a node's role label.

    Phrases always come in the same order (expanded, checked, pop-up) and each
    carries its own trailing space, so the result can be prefixed directly to
    the role label. Absent signals contribute nothing.
    """

    def value_of(name: PropertyName) -> TypedValue | None:
        prop = node.get_property(name)
        return prop.value if prop else None

    return "".join(
        (
            _expanded_phrase(value_of(PropertyName.EXPANDED)),
            _checked_phrase(value_of(PropertyName.CHECKED)),
            _popup_phrase(value_of(PropertyName.HAS_POPUP)),
        )
    )
