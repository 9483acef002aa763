import inspect
import logging
import typing

from componentscan.mcp.helper import annotate_parameters, parsed_data, safe_error


def test_tool_descriptions_loaded():
    assert "instructions" in parsed_data["tool_description"]
    for tool in ("analyze_component_file", "scan_components"):
        assert parsed_data[tool]["description"]


def test_safe_error_reports_failure(caplog):
    def boom(path: str):
        raise FileNotFoundError(path)

    guarded = safe_error("analyze_component_file")(boom)
    with caplog.at_level(logging.ERROR, logger="componentscan.mcp.helper"):
        payload = guarded("x.jsx")
    assert payload == {"status": "failure", "tool": "analyze_component_file", "message": "x.jsx"}
    assert any("analyze_component_file" in r.getMessage() and r.exc_info for r in caplog.records)


def test_safe_error_passes_results_through():
    guarded = safe_error("scan_components")(lambda: {"status": "success"})
    assert guarded() == {"status": "success"}


def test_annotate_parameters_reaches_wrapped_function():
    def tool(root_dir: str, output_path: str = "./out"):
        return root_dir

    guarded = safe_error("scan_components")(tool)
    annotate_parameters(guarded, "scan_components")

    signature = inspect.signature(guarded)
    for param in ("root_dir", "output_path"):
        base, field_info = typing.get_args(signature.parameters[param].annotation)
        assert base is str
        assert field_info.description == parsed_data["scan_components"][param]
    assert signature.parameters["output_path"].default == "./out"
