from componentscan.extractors.parser_adapter import iter_nodes, parse_source
from componentscan.extractors.wrappers import is_wrapper_call, unwrap_wrapper, wrapper_name


def default_value(code, file_path="/src/Sample.jsx"):
    parsed = parse_source(code, file_path)
    export = next(n for n in iter_nodes(parsed.root) if n.type == "export_statement")
    return parsed, export.child_by_field_name("value")


def test_wrapper_name_variants():
    parsed, value = default_value("export default React.memo(Card);")
    assert wrapper_name(value, parsed) == "memo"
    parsed, value = default_value("export default connect(a, b)(Card);")
    assert wrapper_name(value, parsed) == "connect"


def test_unwrap_curried_connector():
    parsed, value = default_value("export default connect(mapState, mapDispatch)(Card);")
    inner = unwrap_wrapper(value, parsed)
    assert parsed.text_of(inner) == "Card"


def test_unwrap_nested_wrappers():
    parsed, value = default_value("export default withRouter(connect(mapState)(Card));")
    assert parsed.text_of(unwrap_wrapper(value, parsed)) == "Card"


def test_unwrap_inline_function():
    parsed, value = default_value("export default forwardRef((props, ref) => <input ref={ref}/>);")
    inner = unwrap_wrapper(value, parsed)
    assert inner.type == "arrow_function"


def test_unknown_call_is_not_a_wrapper():
    parsed, value = default_value("export default styled(Button);")
    assert not is_wrapper_call(value, parsed)
    assert unwrap_wrapper(value, parsed) is None


def test_lazy_loader():
    parsed, value = default_value("export default lazy(() => import('./Page'));")
    assert is_wrapper_call(value, parsed)
    assert unwrap_wrapper(value, parsed).type == "arrow_function"


def test_wrapper_without_argument():
    parsed, value = default_value("export default memo();")
    assert unwrap_wrapper(value, parsed) is None
