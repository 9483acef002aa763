import pytest

from componentscan.extractors.node_kinds import FUNCTION_LIKE
from componentscan.extractors.params import parameter_names
from componentscan.extractors.parser_adapter import iter_nodes, parse_source


def params_of(code, file_path="/src/Sample.jsx"):
    parsed = parse_source(code, file_path)
    fn = next(n for n in iter_nodes(parsed.root) if n.type in FUNCTION_LIKE)
    return parameter_names(fn, parsed)


@pytest.mark.parametrize(
    "code, expected",
    [
        ("function f(a, b) {}", ["a", "b"]),
        ("function f() {}", []),
        ("const f = x => x;", ["x"]),
        ("const f = async (a, b = 2) => a;", ["a", "b"]),
        ("function f({ a, b, ...rest }) {}", ["a", "b", "rest"]),
        ("function f({ a = 1, b: renamed }, c) {}", ["a", "b", "c"]),
        ("function f({ a } = {}) {}", ["a"]),
        ("function f(first, ...others) {}", ["first", "others"]),
        ("function f([x, y], z) {}", ["z"]),
        ("function f({ a: { deep } }) {}", ["a"]),
        ("function f(a, { a }) {}", ["a"]),
    ],
)
def test_javascript_parameters(code, expected):
    assert params_of(code) == expected


@pytest.mark.parametrize(
    "code, expected",
    [
        ("function f(this: Window, a: number, b?: string) {}", ["a", "b"]),
        ("const f = ({ title, onClose }: Props) => null;", ["title", "onClose"]),
        ("function f(count: number = 0, ...items: string[]) {}", ["count", "items"]),
    ],
)
def test_typescript_parameters(code, expected):
    assert params_of(code, "/src/Sample.ts") == expected
