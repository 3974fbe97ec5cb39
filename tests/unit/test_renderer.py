import logging

import pytest

from domain_models.config import RenderConfig
from domain_models.fragments import (
    BlockFragment,
    ElementFragment,
    EmptyFragment,
    ErrorFragment,
    LineBreakFragment,
    SequenceFragment,
    SpanFragment,
    TextFragment,
)
from domain_models.manifest import AXTree
from domain_models.types import ElementType, ErrorKind, Placement
from axnarrator.engines.renderer import RoleRenderer, render_tree
from axnarrator.engines.tree_index import TreeIndex
from axnarrator.exceptions import RenderContextError
from axnarrator.exporters.text import export_to_text
from tests.conftest import make_node, make_renderer, make_tree, prop


def test_web_area_end_to_end(hello_tree: AXTree) -> None:
    text = export_to_text(render_tree(hello_tree))
    assert text == "Page web content\n Hello\nend of Page web content"


def test_web_area_fragment_shape(hello_tree: AXTree) -> None:
    fragment = render_tree(hello_tree)
    assert fragment == BlockFragment(label="Page web content", children=[TextFragment(text=" Hello")])


def test_unnamed_landmark_uses_bare_label() -> None:
    renderer = make_renderer(
        make_node("1", "main", children=["2"]),
        make_node("2", "text", "x"),
    )
    fragment = renderer.render("1")
    assert isinstance(fragment, BlockFragment)
    assert fragment.title == "main"


def test_landmark_without_content_has_no_closing_title() -> None:
    renderer = make_renderer(make_node("1", "navigation", "Site"))
    assert export_to_text(renderer.render_root()) == "Site navigation"


def test_text_leaf_ignores_children() -> None:
    """Text leaves render their name and never visit their children."""
    renderer = make_renderer(make_node("1", "text", "Hello", children=["nope"]))
    assert renderer.render("1") == TextFragment(text=" Hello")


def test_text_leaf_without_name() -> None:
    renderer = make_renderer(make_node("1", "text"))
    assert renderer.render("1") == TextFragment(text=" ")


def test_adjacent_text_nodes_are_separated() -> None:
    renderer = make_renderer(
        make_node("1", "paragraph", children=["2", "3"]),
        make_node("2", "text", "a"),
        make_node("3", "text", "b"),
    )
    fragment = renderer.render("1")
    assert fragment == ElementFragment(
        element=ElementType.PARAGRAPH,
        children=[TextFragment(text=" a"), TextFragment(text=" "), TextFragment(text=" b")],
    )
    assert export_to_text(fragment) == " a  b"


def test_text_after_non_text_is_not_separated() -> None:
    renderer = make_renderer(
        make_node("1", "paragraph", children=["2", "3"]),
        make_node("2", "strong", children=["4"]),
        make_node("3", "text", "b"),
        make_node("4", "text", "a"),
    )
    children = renderer.render("1").children  # type: ignore[union-attr]
    assert len(children) == 2


def test_ignored_text_node_breaks_adjacency() -> None:
    renderer = make_renderer(
        make_node("1", "paragraph", children=["2", "3", "4"]),
        make_node("2", "text", "a"),
        make_node("3", "text", "skip", ignored=True),
        make_node("4", "text", "b"),
    )
    children = renderer.render("1").children  # type: ignore[union-attr]
    assert children == [TextFragment(text=" a"), EmptyFragment(), TextFragment(text=" b")]


def test_ignored_node_renders_empty() -> None:
    renderer = make_renderer(
        make_node("1", "main", children=["2"], ignored=True),
        make_node("2", "text", "hidden away"),
    )
    assert renderer.render("1") == EmptyFragment()


def test_svg_root_renders_empty() -> None:
    renderer = make_renderer(make_node("1", "SVGRoot", "icon"))
    assert renderer.render("1") == EmptyFragment()


def test_hidden_node_renders_empty() -> None:
    renderer = make_renderer(make_node("1", "button", "Go", properties=[prop("hidden", True)]))
    assert renderer.render("1") == EmptyFragment()


def test_hidden_recursing_role_renders_empty() -> None:
    renderer = make_renderer(
        make_node("1", "main", "Content", children=["2"], properties=[prop("hidden", True)]),
        make_node("2", "text", "never shown"),
    )
    assert renderer.render("1") == EmptyFragment()


def test_hidden_node_without_role_reports_missing_role() -> None:
    renderer = make_renderer(make_node("1", None, "ghost", properties=[prop("hidden", True)]))
    assert export_to_text(renderer.render("1")) == "Node 1 has no role"


def test_hidden_false_still_renders() -> None:
    renderer = make_renderer(make_node("1", "button", "Go", properties=[prop("hidden", False)]))
    assert export_to_text(renderer.render("1")) == " Go, button"


def test_line_break() -> None:
    renderer = make_renderer(make_node("1", "LineBreak", "\n"))
    assert renderer.render("1") == LineBreakFragment()


def test_pass_through_roles_add_no_wrapper() -> None:
    renderer = make_renderer(
        make_node("1", "generic", children=["2"]),
        make_node("2", "text", "inside"),
    )
    assert renderer.render("1") == SequenceFragment(children=[TextFragment(text=" inside")])


@pytest.mark.parametrize(
    ("checked", "expected"),
    [
        ("true", " Subscribe, checked checkbox"),
        ("false", " Subscribe, unchecked checkbox"),
        ("mixed", " Subscribe, checkbox"),
    ],
)
def test_checkbox_state(checked: str, expected: str) -> None:
    renderer = make_renderer(
        make_node("1", "checkbox", "Subscribe", properties=[prop("checked", checked, "tristate")])
    )
    assert export_to_text(renderer.render("1")) == expected


def test_checkbox_fragment_shape() -> None:
    renderer = make_renderer(
        make_node("1", "checkbox", "Subscribe", properties=[prop("checked", "true", "tristate")])
    )
    assert renderer.render("1") == SequenceFragment(
        children=[
            TextFragment(text=" "),
            SpanFragment(
                label="checked checkbox",
                placement=Placement.AFTER,
                children=[TextFragment(text="Subscribe")],
            ),
        ]
    )


def test_button_state_order() -> None:
    renderer = make_renderer(
        make_node(
            "1",
            "button",
            "Menu",
            properties=[
                prop("hasPopup", "menu", "token"),
                prop("expanded", False),
            ],
        )
    )
    assert export_to_text(renderer.render("1")) == " Menu, collapsed menu pop-up button"


def test_popup_false_is_silent() -> None:
    renderer = make_renderer(
        make_node("1", "combobox", "Pick", properties=[prop("hasPopup", False)])
    )
    assert export_to_text(renderer.render("1")) == " Pick, combobox"


def test_textbox_label() -> None:
    renderer = make_renderer(make_node("1", "textbox", "Email"))
    assert export_to_text(renderer.render("1")) == " Email, edit text"


def test_disclosure_triangle_wraps_children() -> None:
    renderer = make_renderer(
        make_node("1", "DisclosureTriangle", "ignored name", children=["2"], properties=[prop("expanded", True)]),
        make_node("2", "text", "More"),
    )
    assert export_to_text(renderer.render("1")) == "  More, expanded disclosure triangle"


def test_heading_defaults_to_level_six() -> None:
    renderer = make_renderer(
        make_node("1", "heading", children=["2"]),
        make_node("2", "text", "Title"),
    )
    assert renderer.render("1") == ElementFragment(
        element=ElementType.GROUP,
        children=[
            ElementFragment(
                element=ElementType.HEADING, level=6, children=[TextFragment(text=" Title")]
            )
        ],
    )


@pytest.mark.parametrize(
    ("value", "value_type", "expected"),
    [(2, "integer", 2), (3.0, "number", 3), ("4", "string", 4), (0, "integer", 6)],
)
def test_heading_level_from_property(value: object, value_type: str, expected: int) -> None:
    renderer = make_renderer(make_node("1", "heading", properties=[prop("level", value, value_type)]))
    heading = renderer.render("1").children[0]  # type: ignore[union-attr]
    assert heading.level == expected


@pytest.mark.parametrize(("count", "extra"), [(1, "1 item"), (3, "3 items")])
def test_list_counts_items(count: int, extra: str) -> None:
    item_ids = [f"i{n}" for n in range(count)]
    renderer = make_renderer(
        make_node("1", "list", children=item_ids),
        *(make_node(item_id, "listitem", children=[f"t{item_id}"]) for item_id in item_ids),
        *(make_node(f"t{item_id}", "text", item_id) for item_id in item_ids),
    )
    fragment = renderer.render("1")
    assert isinstance(fragment, BlockFragment)
    assert fragment.title == f"list, {extra}"
    assert fragment.closing_title == "end of list"
    assert fragment.children is not None
    items = fragment.children[0]
    assert isinstance(items, ElementFragment)
    assert items.element is ElementType.ORDERED_LIST
    assert len(items.children) == count


def test_empty_list_counts_zero_items() -> None:
    renderer = make_renderer(make_node("1", "list"))
    fragment = renderer.render("1")
    assert isinstance(fragment, BlockFragment)
    assert fragment.title == "list, 0 items"
    assert export_to_text(fragment) == "list, 0 items\nend of list"


def test_separator_announces_itself() -> None:
    renderer = make_renderer(make_node("1", "separator"))
    assert export_to_text(renderer.render("1")) == "horizontal splitter"


def test_image_label_after_outside_link() -> None:
    renderer = make_renderer(make_node("1", "img", "Logo"))
    assert export_to_text(renderer.render("1")) == " Logo, image"


def test_image_label_before_inside_link() -> None:
    renderer = make_renderer(
        make_node("1", "link", "Home", children=["2"]),
        make_node("2", "img", "Logo"),
    )
    assert export_to_text(renderer.render("1")) == " link,  image, Logo"


def test_link_context_reaches_nested_images() -> None:
    renderer = make_renderer(
        make_node("1", "link", children=["2"]),
        make_node("2", "generic", children=["3"]),
        make_node("3", "img", "Logo"),
    )
    span = renderer.render("1").children[1]  # type: ignore[union-attr]
    image_span = span.children[0].children[0].children[1]
    assert image_span.placement is Placement.BEFORE


def test_unknown_role() -> None:
    renderer = make_renderer(make_node("1", "bogus"))
    fragment = renderer.render("1")
    assert fragment == ErrorFragment(error_kind=ErrorKind.UNKNOWN_ROLE, detail="bogus")
    assert export_to_text(fragment) == "Unknown role bogus"


def test_missing_role() -> None:
    renderer = make_renderer(make_node("1", None))
    assert export_to_text(renderer.render("1")) == "Node 1 has no role"


def test_missing_child_keeps_siblings(caplog: pytest.LogCaptureFixture) -> None:
    renderer = make_renderer(
        make_node("1", "WebArea", "Page", children=["2", "x", "3"]),
        make_node("2", "text", "a"),
        make_node("3", "text", "b"),
    )
    with caplog.at_level(logging.WARNING):
        fragment = renderer.render_root()
    assert isinstance(fragment, BlockFragment)
    assert fragment.children == [
        TextFragment(text=" a"),
        ErrorFragment(error_kind=ErrorKind.MISSING_NODE, detail="x"),
        TextFragment(text=" b"),
    ]
    assert "Cannot find node x" in caplog.text
    assert export_to_text(fragment) == "Page web content\n aCannot find node x b\nend of Page web content"


def test_missing_root_id() -> None:
    renderer = make_renderer(make_node("1", "main"))
    assert export_to_text(renderer.render("404")) == "Cannot find node 404"


def test_cycle_is_reported() -> None:
    renderer = make_renderer(
        make_node("1", "main", children=["2"]),
        make_node("2", "group", children=["1"]),
    )
    fragment = renderer.render_root()
    group = fragment.children[0]  # type: ignore[index,union-attr]
    assert group.children == [ErrorFragment(error_kind=ErrorKind.CYCLE, detail="1")]
    assert "Cycle detected at node 1" in export_to_text(fragment)


def test_self_reference_is_a_cycle() -> None:
    renderer = make_renderer(make_node("1", "generic", children=["1"]))
    assert renderer.render("1") == SequenceFragment(
        children=[ErrorFragment(error_kind=ErrorKind.CYCLE, detail="1")]
    )


def test_shared_child_is_not_a_cycle() -> None:
    """A node reached twice through different parents renders both times."""
    renderer = make_renderer(
        make_node("1", "generic", children=["2", "3"]),
        make_node("2", "generic", children=["4"]),
        make_node("3", "generic", children=["4"]),
        make_node("4", "text", "twice"),
    )
    assert export_to_text(renderer.render("1")) == " twice twice"


def test_depth_limit() -> None:
    nodes = [make_node(str(n), "generic", children=[str(n + 1)]) for n in range(5)]
    nodes.append(make_node("5", "text", "deep"))
    renderer = RoleRenderer(TreeIndex(make_tree(*nodes)), RenderConfig(max_depth=3))
    assert export_to_text(renderer.render_root()) == "Maximum depth exceeded at node 3"


def test_renderer_requires_tree_index() -> None:
    with pytest.raises(RenderContextError):
        RoleRenderer(None)  # type: ignore[arg-type]


def test_rendering_is_repeatable(hello_tree: AXTree) -> None:
    renderer = RoleRenderer(TreeIndex(hello_tree))
    assert renderer.render_root() == renderer.render_root()
