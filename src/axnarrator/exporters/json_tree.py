import json
from typing import Any

from domain_models.fragments import (
    BlockFragment,
    ElementFragment,
    Fragment,
    SequenceFragment,
    SpanFragment,
)


def fragment_to_data(fragment: Fragment) -> dict[str, Any]:
    """
    Convert a fragment tree to plain JSON-compatible data.

    Each fragment is dumped on its own (computed titles and messages included) and
    its children are converted here, one level at a time. Dumping the root in one
    call would hit the serializer's nesting limit long before the renderer's depth
    guard does: a link or heading adds two fragment levels per tree level.
    """
    data = fragment.model_dump(mode="json", exclude={"children"})
    match fragment:
        case BlockFragment(children=None):
            data["children"] = None
        case (
            SequenceFragment(children=children)
            | ElementFragment(children=children)
            | SpanFragment(children=children)
            | BlockFragment(children=children)
        ):
            converted: list[dict[str, Any]] = []
            for child in children:
                converted.append(fragment_to_data(child))
            data["children"] = converted
    return data


def export_to_json(fragment: Fragment, indent: int | None = 2) -> str:
    """
    Exports a rendered fragment tree to JSON.

    The output validates back into the same fragment tree.
    """
    return json.dumps(fragment_to_data(fragment), indent=indent, ensure_ascii=False)
