import logging
import os
import tomllib
from functools import wraps
from inspect import unwrap
from typing import Annotated

from fastmcp import FastMCP
from pydantic import Field

logger = logging.getLogger(__name__)

TOOL_DESCRIPTIONS_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "tool_descriptions.toml")

with open(TOOL_DESCRIPTIONS_PATH, "rb") as f:
    parsed_data = tomllib.load(f)


def annotate_parameters(func, tool_key: str):
    """
    Attach the TOML parameter descriptions of `tool_key` as pydantic Fields.
    They go on the innermost function, since signature inspection reads
    through `functools.wraps` layers.
    """
    target = unwrap(func)
    annotations = dict(target.__annotations__)
    for param, description in parsed_data[tool_key].items():
        if param == "description":
            continue
        annotations[param] = Annotated[annotations.get(param, str), Field(description=description)]
    target.__annotations__ = annotations
    return func


def safe_error(tool_key: str):
    """Turn exceptions raised by tool `tool_key` into a failure payload."""

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                logger.exception("MCP tool %s failed", tool_key)
                return {"status": "failure", "tool": tool_key, "message": str(e)}

        return wrapper

    return decorator


def auto_mcp_tool(mcp: FastMCP, tool_key: str):
    def decorator(func):
        annotate_parameters(func, tool_key)
        guarded = safe_error(tool_key)(func)
        return mcp.tool(name=tool_key, description=parsed_data[tool_key]["description"])(guarded)

    return decorator
