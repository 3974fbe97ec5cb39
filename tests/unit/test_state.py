import pytest

from axnarrator.engines.state import describe_state
from tests.conftest import make_node, prop


def test_no_state() -> None:
    assert describe_state(make_node("1", "button", "OK")) == ""


@pytest.mark.parametrize(
    ("properties", "expected"),
    [
        ([prop("expanded", True)], "expanded "),
        ([prop("expanded", False)], "collapsed "),
        ([prop("expanded", True, "booleanOrUndefined")], "expanded "),
        ([prop("expanded", None, "booleanOrUndefined")], ""),
        ([prop("checked", "true", "tristate")], "checked "),
        ([prop("checked", "false", "tristate")], "unchecked "),
        ([prop("checked", "mixed", "tristate")], ""),
        ([prop("hasPopup", "menu", "token")], "menu pop-up "),
        ([prop("hasPopup", True)], "true pop-up "),
        ([prop("hasPopup", False)], ""),
        ([prop("hasPopup", "", "token")], ""),
    ],
)
def test_single_signal(properties: list[dict[str, object]], expected: str) -> None:
    assert describe_state(make_node("1", "button", properties=properties)) == expected


def test_signals_always_in_fixed_order() -> None:
    node = make_node(
        "1",
        "combobox",
        properties=[
            prop("hasPopup", "listbox", "token"),
            prop("checked", "true", "tristate"),
            prop("expanded", True),
        ],
    )
    assert describe_state(node) == "expanded checked listbox pop-up "


def test_unrelated_properties_are_ignored() -> None:
    node = make_node("1", "button", properties=[prop("focusable", True), prop("level", 2, "integer")])
    assert describe_state(node) == ""
