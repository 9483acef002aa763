from typing import List

from componentscan.utils.naming import is_identifier


def parameter_names(func_node, parsed) -> List[str]:
    """
    Positional parameter names of a function-like node. A destructured
    parameter contributes its keys, a rest element its own name, a
    defaulted parameter its left-hand side. One level deep only.
    """
    single = func_node.child_by_field_name("parameter")
    if single is not None:
        return _names_of(single, parsed)
    params = func_node.child_by_field_name("parameters")
    if params is None:
        return []
    names: List[str] = []
    for p in params.named_children:
        for n in _names_of(p, parsed):
            if n not in names:
                names.append(n)
    return names


def _names_of(node, parsed) -> List[str]:
    if node is None:
        return []
    t = node.type
    if t in ("required_parameter", "optional_parameter"):
        return _names_of(node.child_by_field_name("pattern"), parsed)
    if t == "identifier":
        return [parsed.text_of(node)]
    if t == "assignment_pattern":
        left = node.child_by_field_name("left")
        if left is not None and left.type in ("identifier", "object_pattern"):
            return _names_of(left, parsed)
        return []
    if t == "object_pattern":
        return _object_pattern_keys(node, parsed)
    if t == "rest_pattern":
        return _rest_name(node, parsed)
    # array patterns, `this` annotations and comments contribute nothing
    return []


def _object_pattern_keys(pattern, parsed) -> List[str]:
    keys: List[str] = []
    for member in pattern.named_children:
        t = member.type
        key = None
        if t == "shorthand_property_identifier_pattern":
            key = parsed.text_of(member)
        elif t == "pair_pattern":
            key_node = member.child_by_field_name("key")
            key = parsed.text_of(key_node) if key_node is not None else None
        elif t == "object_assignment_pattern":
            left = member.child_by_field_name("left")
            if left is not None and left.type == "shorthand_property_identifier_pattern":
                key = parsed.text_of(left)
        elif t == "rest_pattern":
            rest = _rest_name(member, parsed)
            key = rest[0] if rest else None
        if key and is_identifier(key):
            keys.append(key)
    return keys


def _rest_name(node, parsed) -> List[str]:
    for ch in node.named_children:
        if ch.type == "identifier":
            return [parsed.text_of(ch)]
    return []
