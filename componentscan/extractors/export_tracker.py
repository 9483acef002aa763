import logging

from componentscan.extractors.node_kinds import (
    CLASS_DECLARATIONS,
    CLASS_EXPRESSIONS,
    FUNCTION_DECLARATIONS,
    FUNCTION_EXPRESSIONS,
    VARIABLE_DECLARATIONS,
)
from componentscan.extractors.parser_adapter import iter_nodes, unwrap_expression
from componentscan.extractors.wrappers import unwrap_wrapper
from componentscan.models import DEFAULT, NAMED, ExportBinding, ExportTable, ParsedSource
from componentscan.utils.naming import is_identifier, name_from_path

logger = logging.getLogger(__name__)


class ExportTracker:
    """
    First pass: record which names a module exports and how. Nothing is
    classified here, so whether a declaration comes before or after its
    export statement does not matter.
    """

    def __init__(self, parsed: ParsedSource):
        self.parsed = parsed
        self.table = ExportTable()
        self.file_name = name_from_path(parsed.file_path)
        self._declaration_handlers = {
            **{t: self._named_declaration for t in FUNCTION_DECLARATIONS | CLASS_DECLARATIONS},
            **{t: self._variable_declaration for t in VARIABLE_DECLARATIONS},
        }
        self._default_value_handlers = {
            "identifier": self._default_identifier,
            "call_expression": self._default_call,
            **{t: self._default_anonymous for t in FUNCTION_EXPRESSIONS | CLASS_EXPRESSIONS},
        }

    def track(self) -> ExportTable:
        for node in iter_nodes(self.parsed.root):
            if node.type == "export_statement":
                self._export_statement(node)
        return self.table

    # ------------- export statement shapes -------------

    def _export_statement(self, node):
        is_default = any(ch.type == "default" for ch in node.children)
        visibility = DEFAULT if is_default else NAMED

        declaration = node.child_by_field_name("declaration")
        if declaration is not None:
            handler = self._declaration_handlers.get(declaration.type)
            if handler:
                handler(declaration, visibility)
            return

        value = node.child_by_field_name("value")
        if is_default and value is not None:
            value = unwrap_expression(value)
            handler = self._default_value_handlers.get(value.type)
            if handler:
                handler(value)
            else:
                logger.debug("unsupported default export shape '%s' at line %d", value.type, value.start_point[0] + 1)
            return

        reexport = node.child_by_field_name("source") is not None
        for ch in node.named_children:
            if ch.type == "export_clause":
                self._export_clause(ch, reexport)

    def _named_declaration(self, declaration, visibility):
        name_node = declaration.child_by_field_name("name")
        if name_node is None:
            self._default_anonymous(declaration)
            return
        self._add(self.parsed.text_of(name_node), visibility)

    def _variable_declaration(self, declaration, visibility):
        for declarator in declaration.named_children:
            if declarator.type != "variable_declarator":
                continue
            name_node = declarator.child_by_field_name("name")
            # destructuring exports (`export const { a } = x`) have no single name
            if name_node is not None and name_node.type == "identifier":
                self._add(self.parsed.text_of(name_node), NAMED)

    def _export_clause(self, clause, reexport: bool):
        for spec in clause.named_children:
            if spec.type != "export_specifier":
                continue
            name_node = spec.child_by_field_name("name")
            alias_node = spec.child_by_field_name("alias")
            if name_node is None:
                continue
            name = self.parsed.text_of(name_node)
            alias = self.parsed.text_of(alias_node) if alias_node is not None else None
            if name == DEFAULT:
                # `export { default as Foo } from './Foo'`
                name, alias = alias or "", None
            if alias is not None and alias != DEFAULT and not is_identifier(alias):
                # string-literal alias, `export { a as "a-b" }`
                alias = None
            if alias == DEFAULT and not reexport:
                self._add(name, DEFAULT)
            else:
                self._add(name, NAMED, exported_as=alias, reexport=reexport)

    # ------------- default export values -------------

    def _default_identifier(self, value):
        self._add(self.parsed.text_of(value), DEFAULT)

    def _default_call(self, value):
        inner = unwrap_wrapper(value, self.parsed)
        if inner is None:
            logger.debug("default export call at line %d is not a recognized wrapper", value.start_point[0] + 1)
            return
        if inner.type == "identifier":
            self._add(self.parsed.text_of(inner), DEFAULT)
        elif inner.type in FUNCTION_EXPRESSIONS | CLASS_EXPRESSIONS:
            self._default_anonymous(inner)

    def _default_anonymous(self, value):
        name_node = value.child_by_field_name("name")
        name = self.parsed.text_of(name_node) if name_node is not None else self.file_name
        self.table.anonymous_defaults.setdefault(name, value)
        self._add(name, DEFAULT)

    def _add(self, name: str, visibility: str, exported_as=None, reexport: bool = False):
        if not is_identifier(name) or name == DEFAULT:
            return
        self.table.add(ExportBinding(name, visibility, exported_as=exported_as, reexport=reexport))


def track_exports(parsed: ParsedSource) -> ExportTable:
    return ExportTracker(parsed).track()
