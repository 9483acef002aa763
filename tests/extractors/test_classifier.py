from componentscan.extractors.classifier import classify
from componentscan.extractors.export_tracker import track_exports
from componentscan.extractors.parser_adapter import parse_source
from componentscan.models import DEFAULT, NAMED


def run(code, file_path="/src/Sample.jsx"):
    parsed = parse_source(code, file_path)
    return classify(parsed, track_exports(parsed))


def names(records):
    return [r.name for r in records]


def test_private_helpers_are_not_emitted():
    records = run(
        "function helper() { return <i/>; }\n"
        "export function Visible() { return helper(); }\n"
    )
    assert names(records) == ["Visible"]
    assert records[0].is_function


def test_export_before_declaration():
    records = run("export { Late };\nconst Late = () => <div/>;\n")
    assert names(records) == ["Late"]
    assert records[0].is_component
    assert records[0].line_number == 2


def test_classes_are_components():
    records = run(
        "export class Store extends Base {}\n"
        "export const Panel = class extends Component { render() { return null; } };\n"
    )
    assert names(records) == ["Store", "Panel"]
    assert all(r.is_component and r.parameter_names == [] for r in records)


def test_static_default_props():
    records = run(
        "export default class Box extends Component {\n"
        "  static defaultProps = { size: 1 };\n"
        "  render() { return <div/>; }\n"
        "}\n"
    )
    assert records[0].has_default_props
    assert records[0].export_type == DEFAULT


def test_static_default_props_typescript():
    records = run(
        "export class Box extends Component<P> {\n"
        "  public static defaultProps: Partial<P> = {};\n"
        "  render() { return <div/>; }\n"
        "}\n",
        "/src/Box.tsx",
    )
    assert records[0].has_default_props


def test_wrapped_identifier_takes_inner_params_and_default_props():
    records = run(
        "function Inner({ x, y }) { return <b>{x}{y}</b>; }\n"
        "Inner.defaultProps = { x: 1 };\n"
        "export const Outer = memo(Inner);\n"
    )
    assert names(records) == ["Outer"]
    outer = records[0]
    assert outer.is_component
    assert outer.parameter_names == ["x", "y"]
    assert outer.has_default_props


def test_wrapped_inline_named_function():
    records = run("export default React.memo(function Item({ id }) { return <li>{id}</li>; });\n")
    assert names(records) == ["Item"]
    assert records[0].export_type == DEFAULT
    assert records[0].parameter_names == ["id"]


def test_nested_scope_declaration():
    records = run("export { Inner };\nif (flag) {\n  var Inner = function () { return <p/>; };\n}\n")
    assert names(records) == ["Inner"]
    assert records[0].is_component


def test_aliased_export_uses_public_name():
    records = run("function a(n) { return n; }\nexport { a as alpha };\n")
    assert names(records) == ["alpha"]
    assert records[0].export_type == NAMED
    assert records[0].parameter_names == ["n"]


def test_unmatched_exports_yield_nothing():
    assert run("export { missing };\n") == []
    assert run("export default 42;\n") == []


def test_records_follow_source_order():
    records = run(
        "export const b = () => 1;\n"
        "export function a() { return <i/>; }\n"
        "export default function c() { return 2; }\n"
    )
    assert names(records) == ["b", "a", "c"]


def test_two_defaults_last_one_wins():
    records = run(
        "function Foo() { return <i/>; }\n"
        "function Bar() { return <b/>; }\n"
        "export default Foo;\n"
        "export default Bar;\n"
    )
    types = {r.name: r.export_type for r in records}
    assert types == {"Foo": NAMED, "Bar": DEFAULT}


def test_typed_arrow_component():
    records = run("export const Title: React.FC<Props> = ({ text }) => <h1>{text}</h1>;\n", "/src/Title.tsx")
    assert records[0].is_component
    assert records[0].parameter_names == ["text"]


def test_module_scope_declaration_beats_earlier_nested_local():
    records = run(
        "export default function Page() { return <main/>; }\n"
        "function helper() { function Row() { return 1; } return Row; }\n"
        "export function Row({ cells }) { return <tr>{cells}</tr>; }\n"
    )
    row = {r.name: r for r in records}["Row"]
    assert row.is_component
    assert row.parameter_names == ["cells"]
    assert row.line_number == 3
    assert names(records) == ["Page", "Row"]


def test_exported_arrow_not_confused_with_inner_helper():
    records = run(
        "function Panel() { const format = () => 'x'; return <div/>; }\n"
        "export const format = (value, unit) => value + unit;\n"
    )
    assert names(records) == ["format"]
    assert records[0].is_function
    assert records[0].parameter_names == ["value", "unit"]
    assert records[0].line_number == 2


def test_string_alias_reports_local_name():
    records = run('function foo(a) { return a; }\nexport { foo as "my-foo" };\n')
    assert names(records) == ["foo"]
    assert records[0].parameter_names == ["a"]
