import logging
import os
from typing import Optional

logger = logging.getLogger(__name__)

# `jsx_fragment` only exists in older JavaScript grammars; newer ones emit a
# jsx_element with an empty opening tag for `<>...</>`
MARKUP_NODE_TYPES = frozenset({"jsx_element", "jsx_self_closing_element", "jsx_fragment"})

DEFAULT_NODE_BUDGET = 250_000


def node_budget() -> int:
    raw = os.environ.get("COMPONENTSCAN_MAX_MARKUP_NODES", "")
    try:
        value = int(raw)
    except ValueError:
        return DEFAULT_NODE_BUDGET
    return value if value > 0 else DEFAULT_NODE_BUDGET


def contains_markup(node, max_nodes: Optional[int] = None) -> bool:
    """
    Depth-first search of an arbitrary subtree for a markup element or
    fragment. Stops at the first hit, and gives up (returning False) once
    `max_nodes` nodes have been visited.
    """
    if node is None:
        return False
    budget = max_nodes if max_nodes is not None else node_budget()
    stack = [node]
    visited = 0
    while stack:
        current = stack.pop()
        if current.type in MARKUP_NODE_TYPES:
            return True
        visited += 1
        if visited >= budget:
            logger.warning(
                "markup scan stopped after %d nodes at line %d", visited, current.start_point[0] + 1
            )
            return False
        stack.extend(reversed(current.children))
    return False
