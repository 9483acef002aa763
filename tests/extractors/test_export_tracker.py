from componentscan.extractors.export_tracker import track_exports
from componentscan.extractors.parser_adapter import parse_source
from componentscan.models import DEFAULT, NAMED


def track(code, file_path="/src/Sample.jsx"):
    return track_exports(parse_source(code, file_path))


def test_declaration_exports():
    table = track(
        "export function a() {}\n"
        "export class B {}\n"
        "export const c = 1, d = () => 2;\n"
        "export default function E() {}\n"
    )
    assert table.exported_names == {"a", "B", "c", "d", "E"}
    assert table.default_names == {"E"}
    assert table.default_name == "E"
    assert table.export_type_of("c") == NAMED


def test_default_identifier():
    table = track("const Foo = 1;\nexport default Foo;\n")
    assert table.default_name == "Foo"
    assert table.export_type_of("Foo") == DEFAULT


def test_anonymous_default_named_after_file():
    table = track("export default function () { return <div/>; }\n", "/src/user-card.jsx")
    assert table.default_name == "UserCard"
    assert "UserCard" in table.anonymous_defaults

    table = track("export default () => <div/>;\n", "/src/data_grid.jsx")
    assert table.default_name == "DataGrid"

    table = track("export default class extends Component {}\n", "/src/legacy-view.jsx")
    assert table.default_name == "LegacyView"


def test_wrapped_default_records_inner_name():
    table = track("export default withRouter(connect(mapState)(Profile));\n")
    assert table.default_name == "Profile"
    assert "withRouter" not in table.exported_names
    assert "connect" not in table.exported_names


def test_wrapped_named_function_expression():
    table = track("export default memo(function Item() { return <li/>; });\n")
    assert table.default_name == "Item"
    assert "Item" in table.anonymous_defaults


def test_unrecognized_default_call_is_ignored():
    table = track("export default styled(Button);\n")
    assert table.exported_names == set()


def test_export_clause_with_aliases():
    table = track("const a = 1;\nconst b = 2;\nexport { a as alpha, b as default };\n")
    assert table.default_name == "b"
    assert table.aliases == {"a": "alpha"}
    assert table.public_name_of("a") == "alpha"
    assert table.public_name_of("b") == "b"


def test_reexports_are_named():
    table = track("export { default as Button, helper } from './Button';\nexport * from './all';\n")
    assert table.exported_names == {"Button", "helper"}
    assert table.default_name is None
    assert all(b.reexport for b in table.bindings)


def test_last_default_wins():
    table = track("export default Foo;\nexport default Bar;\n")
    assert table.default_names == {"Foo", "Bar"}
    assert table.default_name == "Bar"
    assert table.export_type_of("Foo") == NAMED
    assert table.export_type_of("Bar") == DEFAULT


def test_destructuring_export_has_no_single_name():
    table = track("export const { a, b } = obj;\n")
    assert table.exported_names == set()


def test_typescript_only_exports_are_ignored():
    table = track("export interface P { a: string }\nexport type Q = P;\nexport enum E { A }\n", "/src/t.ts")
    assert table.exported_names == set()


def test_string_alias_is_not_used_as_name():
    table = track('function foo(a) { return a; }\nexport { foo as "my-foo" };\n')
    assert table.exported_names == {"foo"}
    assert table.aliases == {}
    assert table.public_name_of("foo") == "foo"
