import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Set

from componentscan.extractors.markup import contains_markup
from componentscan.extractors.node_kinds import (
    CLASS_DECLARATIONS,
    CLASS_EXPRESSIONS,
    CLASS_FIELDS,
    CLASS_LIKE,
    FUNCTION_DECLARATIONS,
    FUNCTION_EXPRESSIONS,
    FUNCTION_LIKE,
)
from componentscan.extractors.params import parameter_names
from componentscan.extractors.parser_adapter import iter_nodes, unwrap_expression
from componentscan.extractors.wrappers import is_wrapper_call, unwrap_wrapper
from componentscan.models import ComponentInfo, ExportTable, ParsedSource

logger = logging.getLogger(__name__)

FUNCTION = "function"
CLASS = "class"
WRAPPED = "wrapped"

# nodes a module-scope declaration may sit in on its way up to `program`
MODULE_SCOPE_PARENTS = frozenset({"export_statement", "lexical_declaration", "variable_declaration"})


@dataclass(frozen=True)
class _Declaration:
    name: str
    kind: str
    node: Any
    line: int
    top_level: bool = False


class DeclarationClassifier:
    """
    Second pass: find the declarations behind exported names and decide
    whether each one renders markup (component) or not (function).
    """

    def __init__(self, parsed: ParsedSource, exports: ExportTable):
        self.parsed = parsed
        self.exports = exports
        self.declarations: Dict[str, _Declaration] = {}
        self.ordered: List[_Declaration] = []
        self.default_props: Set[str] = set()
        self._handlers = {
            **{t: self._function_declaration for t in FUNCTION_DECLARATIONS},
            **{t: self._class_declaration for t in CLASS_DECLARATIONS},
            "variable_declarator": self._variable_declarator,
            "assignment_expression": self._assignment,
        }

    def classify(self) -> List[ComponentInfo]:
        for node in iter_nodes(self.parsed.root):
            handler = self._handlers.get(node.type)
            if handler:
                handler(node)
        for name, node in self.exports.anonymous_defaults.items():
            kind = CLASS if node.type in CLASS_LIKE else FUNCTION
            self._remember(_Declaration(name, kind, node, node.start_point[0] + 1, top_level=True))

        seen: Set[str] = set()
        records: List[ComponentInfo] = []
        for decl in sorted(self.ordered, key=lambda d: d.node.start_byte):
            if decl.name not in self.exports.exported_names or decl.name in seen:
                continue
            seen.add(decl.name)
            record = self._record(decl)
            records.append(record)
            logger.debug(
                "  %s: %s (%s) - props: [%s]",
                "component" if record.is_component else "function",
                record.name,
                record.export_type,
                ", ".join(record.parameter_names) or "none",
            )
        return records

    # ------------- declaration collection -------------

    def _remember(self, decl: _Declaration):
        existing = self.declarations.get(decl.name)
        if existing is not None:
            if existing.top_level or not decl.top_level:
                logger.debug("ignoring redeclaration of '%s' at line %d", decl.name, decl.line)
                return
            # an exported name refers to the module-scope binding, not a nested local
            logger.debug("module-scope '%s' at line %d shadows nested line %d", decl.name, decl.line, existing.line)
            self.ordered.remove(existing)
        self.declarations[decl.name] = decl
        self.ordered.append(decl)

    def _function_declaration(self, node):
        name_node = node.child_by_field_name("name")
        if name_node is not None:
            name = self.parsed.text_of(name_node)
            self._remember(_Declaration(name, FUNCTION, node, node.start_point[0] + 1, _at_module_scope(node)))

    def _class_declaration(self, node):
        name_node = node.child_by_field_name("name")
        if name_node is None:
            return
        name = self.parsed.text_of(name_node)
        if self._has_static_default_props(node):
            self.default_props.add(name)
        self._remember(_Declaration(name, CLASS, node, node.start_point[0] + 1, _at_module_scope(node)))

    def _variable_declarator(self, node):
        name_node = node.child_by_field_name("name")
        value = unwrap_expression(node.child_by_field_name("value"))
        if name_node is None or name_node.type != "identifier" or value is None:
            return
        name = self.parsed.text_of(name_node)
        line = node.start_point[0] + 1
        top_level = _at_module_scope(node)
        if value.type in FUNCTION_EXPRESSIONS:
            self._remember(_Declaration(name, FUNCTION, value, line, top_level))
        elif value.type in CLASS_EXPRESSIONS:
            if self._has_static_default_props(value):
                self.default_props.add(name)
            self._remember(_Declaration(name, CLASS, value, line, top_level))
        elif is_wrapper_call(value, self.parsed):
            self._remember(_Declaration(name, WRAPPED, value, line, top_level))

    def _assignment(self, node):
        # Foo.defaultProps = { ... }
        left = node.child_by_field_name("left")
        if left is None or left.type != "member_expression":
            return
        obj = left.child_by_field_name("object")
        prop = left.child_by_field_name("property")
        if obj is not None and prop is not None and obj.type == "identifier" and self.parsed.text_of(prop) == "defaultProps":
            self.default_props.add(self.parsed.text_of(obj))

    def _has_static_default_props(self, class_node) -> bool:
        body = class_node.child_by_field_name("body")
        if body is None:
            return False
        for member in body.named_children:
            if member.type not in CLASS_FIELDS:
                continue
            name_node = member.child_by_field_name("property") or member.child_by_field_name("name")
            if name_node is None or self.parsed.text_of(name_node) != "defaultProps":
                continue
            if any(ch.type == "static" for ch in member.children):
                return True
        return False

    # ------------- classification -------------

    def _record(self, decl: _Declaration) -> ComponentInfo:
        common = dict(
            name=self.exports.public_name_of(decl.name),
            export_type=self.exports.export_type_of(decl.name),
            file_path=self.parsed.file_path,
            has_default_props=decl.name in self.default_props,
            line_number=decl.line,
        )
        if decl.kind == CLASS:
            return ComponentInfo.component(**common)
        if decl.kind == WRAPPED:
            return self._wrapped_record(decl, common)
        params = parameter_names(decl.node, self.parsed)
        if contains_markup(decl.node.child_by_field_name("body")):
            return ComponentInfo.component(parameter_names=params, **common)
        return ComponentInfo.function(parameter_names=params, **common)

    def _wrapped_record(self, decl: _Declaration, common: Dict[str, Any]) -> ComponentInfo:
        # whatever a recognized wrapper returns is rendered as a component
        inner = unwrap_wrapper(decl.node, self.parsed)
        params: List[str] = []
        if inner is not None and inner.type in FUNCTION_LIKE:
            params = parameter_names(inner, self.parsed)
        elif inner is not None and inner.type == "identifier":
            inner_name = self.parsed.text_of(inner)
            target = self.declarations.get(inner_name)
            if target is not None and target.kind == FUNCTION:
                params = parameter_names(target.node, self.parsed)
            if inner_name in self.default_props:
                common["has_default_props"] = True
        return ComponentInfo.component(parameter_names=params, **common)


def _at_module_scope(node) -> bool:
    parent = node.parent
    while parent is not None and parent.type in MODULE_SCOPE_PARENTS:
        parent = parent.parent
    return parent is not None and parent.type == "program"


def classify(parsed: ParsedSource, exports: ExportTable) -> List[ComponentInfo]:
    return DeclarationClassifier(parsed, exports).classify()
