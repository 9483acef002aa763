import pytest

from componentscan.utils.naming import file_base_name, is_identifier, name_from_path, to_pascal_case


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("user-profile", "UserProfile"),
        ("data_grid", "DataGrid"),
        ("Button", "Button"),
        ("Button.test", "ButtonTest"),
        ("404-page", "_404Page"),
        ("my component", "MyComponent"),
        ("---", "Component"),
    ],
)
def test_to_pascal_case(raw, expected):
    assert to_pascal_case(raw) == expected


def test_name_from_path():
    assert name_from_path("/repo/src/components/side-nav.tsx") == "SideNav"
    assert name_from_path("/repo/index.js") == "Index"


def test_file_base_name():
    assert file_base_name("/a/b/Card.stories.jsx") == "Card.stories"


@pytest.mark.parametrize("name, ok", [("Foo", True), ("$el", True), ("_x1", True), ("1x", False), ("a-b", False), ("", False)])
def test_is_identifier(name, ok):
    assert is_identifier(name) is ok
