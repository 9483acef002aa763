from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

DEFAULT = "default"
NAMED = "named"


@dataclass
class ComponentInfo:
    """One exported declaration, classified as a component or a plain function."""

    name: str
    export_type: str
    file_path: str
    is_component: bool
    is_function: bool
    parameter_names: List[str] = field(default_factory=list)
    has_default_props: bool = False
    line_number: Optional[int] = None

    @classmethod
    def component(cls, name: str, export_type: str, file_path: str, **kwargs) -> "ComponentInfo":
        return cls(name, export_type, file_path, is_component=True, is_function=False, **kwargs)

    @classmethod
    def function(cls, name: str, export_type: str, file_path: str, **kwargs) -> "ComponentInfo":
        return cls(name, export_type, file_path, is_component=False, is_function=True, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        out = {
            "name": self.name,
            "exportType": self.export_type,
            "filePath": self.file_path,
            "isComponent": self.is_component,
            "isReactComponent": self.is_component,
            "isFunction": self.is_function,
            "parameterNames": list(self.parameter_names),
            "props": list(self.parameter_names),
            "hasDefaultProps": self.has_default_props,
        }
        if self.line_number is not None:
            out["lineNumber"] = self.line_number
        return out


@dataclass
class AnalysisResult:
    components: List[ComponentInfo] = field(default_factory=list)
    functions: List[ComponentInfo] = field(default_factory=list)
    main_export: Optional[ComponentInfo] = None

    def all_records(self) -> List[ComponentInfo]:
        return self.components + self.functions

    def is_empty(self) -> bool:
        return not self.components and not self.functions

    def to_dict(self) -> Dict[str, Any]:
        return {
            "components": [c.to_dict() for c in self.components],
            "functions": [f.to_dict() for f in self.functions],
            "mainExport": self.main_export.to_dict() if self.main_export else None,
        }


@dataclass(frozen=True)
class ExportBinding:
    # `name` is the local binding; `exported_as` differs only for `export { a as b }`
    name: str
    visibility: str
    exported_as: Optional[str] = None
    reexport: bool = False


@dataclass
class ExportTable:
    """
    Everything the export pass learned about a module's public surface.

    `default_name` holds the last default export seen; `anonymous_defaults`
    maps a synthesized name to the unnamed node exported as default.
    """

    bindings: List[ExportBinding] = field(default_factory=list)
    exported_names: Set[str] = field(default_factory=set)
    default_names: Set[str] = field(default_factory=set)
    default_name: Optional[str] = None
    aliases: Dict[str, str] = field(default_factory=dict)
    anonymous_defaults: Dict[str, Any] = field(default_factory=dict)

    def add(self, binding: ExportBinding) -> None:
        self.bindings.append(binding)
        self.exported_names.add(binding.name)
        if binding.visibility == DEFAULT:
            self.default_names.add(binding.name)
            self.default_name = binding.name
        elif binding.exported_as and binding.exported_as != binding.name:
            self.aliases.setdefault(binding.name, binding.exported_as)

    def export_type_of(self, name: str) -> str:
        return DEFAULT if name == self.default_name else NAMED

    def public_name_of(self, name: str) -> str:
        if name == self.default_name:
            return name
        return self.aliases.get(name, name)


@dataclass(frozen=True)
class ParsedSource:
    file_path: str
    text: str
    source: bytes
    tree: Any
    grammar: str

    @property
    def root(self):
        return self.tree.root_node

    def text_of(self, node) -> str:
        return self.source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


@dataclass(frozen=True)
class ParseFailure:
    file_path: str
    reason: str
