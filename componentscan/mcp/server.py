from fastmcp import FastMCP

from componentscan.extractors.react_extractor import analyze_file
from componentscan.main import create_component_data
from componentscan.mcp.helper import auto_mcp_tool, parsed_data

mcp = FastMCP(
    "Componentscan MCP", instructions=parsed_data["tool_description"]["instructions"]
)


@auto_mcp_tool(mcp, "analyze_component_file")
def mcp_analyze_component_file(file_path: str):
    result = analyze_file(file_path)
    return {"status": "success", **result.to_dict()}


@auto_mcp_tool(mcp, "scan_components")
def mcp_scan_components(root_dir: str, output_path: str = "./output/components"):
    total = create_component_data(root_dir, output_base=output_path, clear_existing=True)
    return {
        "status": "success",
        "records": total,
        "output_path": output_path,
    }


if __name__ == "__main__":
    mcp.run(transport="sse")
