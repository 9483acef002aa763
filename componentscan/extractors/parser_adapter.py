import logging
import os
from functools import lru_cache
from typing import Iterator, Optional, Tuple, Union

import tree_sitter_typescript
from tree_sitter import Language, Parser
from tree_sitter_language_pack import get_language

from componentscan.models import ParsedSource, ParseFailure

logger = logging.getLogger(__name__)

JS_EXTS = (".js", ".mjs", ".cjs", ".jsx")
TS_EXTS = (".ts", ".mts", ".cts")
TSX_EXTS = (".tsx",)

# grammars are tried in order; the first one that parses without error wins
GRAMMARS_BY_EXT = {
    **{ext: ("javascript",) for ext in JS_EXTS},
    **{ext: ("typescript", "tsx") for ext in TS_EXTS},
    **{ext: ("tsx",) for ext in TSX_EXTS},
}


@lru_cache(maxsize=None)
def load_language(grammar: str) -> Language:
    # only grammars are cached, each parse gets its own Parser
    if grammar == "typescript":
        return Language(tree_sitter_typescript.language_typescript())
    if grammar == "tsx":
        return Language(tree_sitter_typescript.language_tsx())
    return get_language(grammar)


def grammars_for(file_path: str) -> Tuple[str, ...]:
    ext = os.path.splitext(file_path)[1].lower()
    return GRAMMARS_BY_EXT.get(ext, ("javascript",))


def parse_source(text: str, file_path: str) -> Union[ParsedSource, ParseFailure]:
    """
    Parse `text` with the grammar(s) selected by the extension of `file_path`.

    Tree-sitter recovers from syntax errors on its own, so a tree is only
    accepted when it has no error nodes. Anything else, including exceptions
    raised while loading a grammar, comes back as a ParseFailure.
    """
    try:
        source = text.encode("utf-8")
    except UnicodeEncodeError as e:
        return ParseFailure(file_path, f"cannot encode source: {e}")

    reasons = []
    for grammar in grammars_for(file_path):
        try:
            tree = Parser(load_language(grammar)).parse(source)
        except Exception as e:
            reasons.append(f"{grammar}: {e}")
            continue
        if tree.root_node.has_error:
            reasons.append(f"{grammar}: syntax error near line {first_error_line(tree.root_node)}")
            continue
        return ParsedSource(file_path=file_path, text=text, source=source, tree=tree, grammar=grammar)

    return ParseFailure(file_path, "; ".join(reasons) or "no grammar available")


def parse_fragment(text: str, file_path: str):
    """Best-effort root node for a piece of source, errors included. None if parsing is impossible."""
    grammar = grammars_for(file_path)[-1]
    try:
        return Parser(load_language(grammar)).parse(text.encode("utf-8")).root_node
    except Exception as e:
        logger.debug("fragment parse failed for %s: %s", file_path, e)
        return None


def iter_nodes(root) -> Iterator:
    """Pre-order walk in source order, without recursion."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def first_error_line(root) -> Optional[int]:
    for node in iter_nodes(root):
        if node.type == "ERROR" or node.is_missing:
            return node.start_point[0] + 1
    return None


def unwrap_expression(node):
    """Strip parentheses and type-only wrappers (`x as T`, `x satisfies T`, `x!`)."""
    while node is not None and node.type in (
        "parenthesized_expression", "as_expression", "satisfies_expression", "non_null_expression",
    ):
        inner = node.named_children[0] if node.named_children else None
        if inner is None:
            break
        node = inner
    return node
