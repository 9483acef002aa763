from typing import Optional

from componentscan.extractors.parser_adapter import unwrap_expression

CONNECTOR = "connect"

# state-container connector, router awareness, memoization, deferred loading, ref forwarding
WRAPPER_NAMES = frozenset({CONNECTOR, "withRouter", "memo", "lazy", "forwardRef"})

MAX_WRAPPER_NESTING = 16


def wrapper_name(call_node, parsed) -> Optional[str]:
    """
    Name of the function being called, looking through curried calls:
      memo(X)            -> "memo"
      React.forwardRef() -> "forwardRef"
      connect(a, b)(X)   -> "connect"
    """
    fn = unwrap_expression(call_node.child_by_field_name("function"))
    for _ in range(MAX_WRAPPER_NESTING):
        if fn is None:
            return None
        if fn.type == "identifier":
            return parsed.text_of(fn)
        if fn.type == "member_expression":
            prop = fn.child_by_field_name("property")
            return parsed.text_of(prop) if prop is not None else None
        if fn.type == "call_expression":
            fn = unwrap_expression(fn.child_by_field_name("function"))
            continue
        return None
    return None


def first_argument(call_node):
    args = call_node.child_by_field_name("arguments")
    if args is None:
        return None
    for ch in args.named_children:
        if ch.type != "comment":
            return ch
    return None


def is_wrapper_call(node, parsed) -> bool:
    node = unwrap_expression(node)
    return node is not None and node.type == "call_expression" and wrapper_name(node, parsed) in WRAPPER_NAMES


def unwrap_wrapper(node, parsed):
    """
    Resolve `wrapper(args...)(Inner)` / `wrapper(Inner)` chains, nested ones
    like `withRouter(connect(m)(Inner))` included, to the `Inner` node.
    Returns None when `node` is not a recognized wrapper call or wraps nothing.
    """
    node = unwrap_expression(node)
    for _ in range(MAX_WRAPPER_NESTING):
        if node is None or node.type != "call_expression":
            return None
        if wrapper_name(node, parsed) not in WRAPPER_NAMES:
            return None
        inner = unwrap_expression(first_argument(node))
        if inner is None:
            return None
        if inner.type != "call_expression":
            return inner
        node = inner
    return None
