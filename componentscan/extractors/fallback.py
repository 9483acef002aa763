"""
Text-pattern approximation of the structural analysis.

Used when the source cannot be parsed cleanly, or parses but no exported
declaration could be matched. Export discovery runs an ordered list of
strategies; the first one that produces a default export name decides it.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from componentscan.extractors.aggregator import aggregate
from componentscan.extractors.markup import contains_markup
from componentscan.extractors.parser_adapter import parse_fragment
from componentscan.models import DEFAULT, NAMED, AnalysisResult, ComponentInfo
from componentscan.utils.naming import is_identifier, name_from_path
from componentscan.utils.text import balanced_span, blank_comments, line_of, split_top_level

logger = logging.getLogger(__name__)

IDENT = r"[A-Za-z_$][\w$]*"
# call arguments, up to two levels of nested parentheses
ARGS = r"\((?:[^()]|\((?:[^()]|\([^()]*\))*\))*\)"
OUTER_WRAPPERS = r"(?:(?:React\.)?(?:withRouter|memo)\s*\(\s*)*"
KEYWORDS = r"(?:function|class|async|await|new|abstract|typeof|void)\b"


@dataclass(frozen=True)
class FoundExport:
    name: str
    visibility: str
    offset: int
    exported_as: Optional[str] = None
    anonymous: bool = False


class ExportStrategy:
    label = ""

    def scan(self, text: str, file_name: str) -> List[FoundExport]:
        raise NotImplementedError


class ConnectorExport(ExportStrategy):
    label = "connector"
    DIRECT = re.compile(rf"export\s+default\s+{OUTER_WRAPPERS}connect\s*{ARGS}\s*\(\s*({IDENT})\s*\)")
    BOUND = re.compile(rf"\b(?:const|let|var)\s+({IDENT})\s*=\s*{OUTER_WRAPPERS}connect\s*{ARGS}\s*\(\s*({IDENT})\s*\)")

    def scan(self, text, file_name):
        found = [FoundExport(m.group(1), DEFAULT, m.start()) for m in self.DIRECT.finditer(text)]
        for m in self.BOUND.finditer(text):
            bound, wrapped = m.group(1), m.group(2)
            if re.search(rf"export\s+default\s+{re.escape(bound)}\b", text):
                found.append(FoundExport(wrapped, DEFAULT, m.start()))
        return sorted(found, key=lambda f: f.offset)


class WrapperExport(ExportStrategy):
    label = "wrapper"
    PATTERN = re.compile(
        rf"export\s+default\s+{OUTER_WRAPPERS}(?:React\.)?(?:withRouter|memo|forwardRef|lazy)\s*\(\s*({IDENT})\s*[,)]"
    )

    def scan(self, text, file_name):
        return [FoundExport(m.group(1), DEFAULT, m.start()) for m in self.PATTERN.finditer(text)]


class PlainDefaultExport(ExportStrategy):
    label = "default"
    DECLARED = re.compile(rf"export\s+default\s+(?:async\s+)?(?:function\s*\*?\s*|(?:abstract\s+)?class\s+)({IDENT})")
    IDENTIFIER = re.compile(rf"export\s+default\s+(?!{KEYWORDS})({IDENT})\s*(?:;|$)", re.M)
    ANONYMOUS = re.compile(
        rf"export\s+default\s+(?:async\s+)?(?:function\s*\*?\s*\(|class\s*(?:extends\b|\{{)|\(|{IDENT}\s*=>)"
    )

    def scan(self, text, file_name):
        found = [FoundExport(m.group(1), DEFAULT, m.start()) for m in self.DECLARED.finditer(text)]
        found += [FoundExport(m.group(1), DEFAULT, m.start()) for m in self.IDENTIFIER.finditer(text)]
        found += [FoundExport(file_name, DEFAULT, m.start(), anonymous=True) for m in self.ANONYMOUS.finditer(text)]
        return sorted(found, key=lambda f: f.offset)


class NamedDeclarationExport(ExportStrategy):
    label = "named declaration"
    PATTERN = re.compile(
        rf"export\s+(?:declare\s+)?(?:const|let|var|(?:async\s+)?function\s*\*?|(?:abstract\s+)?class)\s+({IDENT})"
    )

    def scan(self, text, file_name):
        return [FoundExport(m.group(1), NAMED, m.start()) for m in self.PATTERN.finditer(text)]


class ExportListExport(ExportStrategy):
    label = "export list"
    PATTERN = re.compile(r"export\s*\{([^}]*)\}(\s*from\b)?")

    def scan(self, text, file_name):
        found = []
        for m in self.PATTERN.finditer(text):
            if m.group(2):
                continue
            for item in split_top_level(m.group(1)):
                parts = item.split()
                local = parts[0]
                alias = parts[2] if len(parts) == 3 and parts[1] == "as" else None
                if alias is not None and alias != DEFAULT and not is_identifier(alias):
                    alias = None
                if not is_identifier(local):
                    continue
                if alias == DEFAULT:
                    found.append(FoundExport(local, DEFAULT, m.start()))
                else:
                    found.append(FoundExport(local, NAMED, m.start(), exported_as=alias))
        return found


# precedence order matters: see module docstring
EXPORT_STRATEGIES: Tuple[ExportStrategy, ...] = (
    ConnectorExport(),
    WrapperExport(),
    PlainDefaultExport(),
    NamedDeclarationExport(),
    ExportListExport(),
)


@dataclass
class FallbackExports:
    default: Optional[FoundExport] = None
    named: List[FoundExport] = field(default_factory=list)

    def ordered(self) -> List[FoundExport]:
        out = [self.default] if self.default else []
        return out + [n for n in self.named if not self.default or n.name != self.default.name]


def discover_exports(text: str, file_name: str, strategies=EXPORT_STRATEGIES) -> FallbackExports:
    exports = FallbackExports()
    seen = set()
    for strategy in strategies:
        for found in strategy.scan(text, file_name):
            if found.visibility == DEFAULT:
                if exports.default is None:
                    logger.debug("default export '%s' found by %s pattern", found.name, strategy.label)
                    exports.default = found
            elif found.name not in seen:
                seen.add(found.name)
                exports.named.append(found)
    return exports


# ------------- definition regions -------------

DECLARATION_START = re.compile(r"\n(?=(?:export\s+)?(?:default\s+)?(?:async\s+)?(?:function|const|let|var|class)\b)")

RETURN_MARKUP = re.compile(r"\breturn\s*\(?\s*<(?:[A-Za-z]|>)")
ARROW_MARKUP = re.compile(r"=>\s*\(?\s*<(?:[A-Za-z]|>)")
MARKUP_FACTORY = re.compile(r"\b(?:React\.)?createElement\s*\(|\bjsxs?\s*\(")
WRAPPER_INIT = re.compile(r"^\s*(?:React\.)?(?:memo|forwardRef|lazy|withRouter|connect)\b")
FUNCTION_INIT = re.compile(rf"^\s*(?:async\s+)?(?:function\b|\(|{IDENT}\s*=>|<)")
LOOSE_MARKUP = re.compile(r"<(?:[A-Za-z][\w.:-]*(?:\s|/?>)|>|/[A-Za-z])")

FUNCTION = "function"
VARIABLE = "variable"
CLASS = "class"
ANONYMOUS = "anonymous"


@dataclass(frozen=True)
class Region:
    kind: str
    start: int
    body_start: int
    text: str

    @property
    def body(self) -> str:
        return self.text[self.body_start - self.start:]

    def is_class(self) -> bool:
        return self.kind == CLASS or (self.kind == ANONYMOUS and bool(re.match(r"\s*class\b", self.body)))


def _anchor_pattern(name: str):
    n = re.escape(name)
    return re.compile(
        rf"(?P<function>\bfunction\s*\*?\s*{n}\s*(?:<[^>(]*>)?\s*\()"
        rf"|(?P<variable>\b(?:const|let|var)\s+{n}\s*(?::[^=;]+)?=(?!=))"
        rf"|(?P<class>\bclass\s+{n}\b)"
    )


def _region_end(text: str, start: int) -> int:
    m = DECLARATION_START.search(text, start + 1)
    return m.start() if m else len(text)


def definition_region(text: str, found: FoundExport) -> Optional[Region]:
    if found.anonymous:
        start = found.offset
        end = _region_end(text, start)
        return Region(ANONYMOUS, start, text.index("default", start) + len("default"), text[start:end])
    m = _anchor_pattern(found.name).search(text)
    if not m:
        return None
    end = _region_end(text, m.start())
    return Region(m.lastgroup, m.start(), m.end(), text[m.start():end])


# ------------- analysis -------------


class FallbackAnalyzer:
    def __init__(self, text: str, file_path: str):
        self.text = blank_comments(text)
        self.file_path = file_path
        self.file_name = name_from_path(file_path)

    def analyze(self) -> AnalysisResult:
        exports = discover_exports(self.text, self.file_name)
        default_name = exports.default.name if exports.default else None

        candidates = []
        for found in exports.ordered():
            region = definition_region(self.text, found)
            if region is not None:
                candidates.append((found, region, self._strict(found, region, default_name)))

        if candidates and not any(record and record.is_component for _, _, record in candidates):
            logger.info("no component shape found in %s, retrying with loose markup matching", self.file_path)
            candidates = [
                (found, region, self._permissive(found, region, default_name) or record)
                for found, region, record in candidates
            ]

        records = [record for _, _, record in candidates if record is not None]
        if not records:
            name = default_name or self.file_name
            logger.info("fallback found no declarations in %s, using '%s'", self.file_path, name)
            records = [ComponentInfo.component(name, DEFAULT, self.file_path)]
        return aggregate(records, self.file_path)

    def _build(self, found: FoundExport, region: Region, default_name, is_component: bool) -> ComponentInfo:
        export_type = DEFAULT if found.name == default_name else NAMED
        name = found.exported_as if found.exported_as and export_type == NAMED else found.name
        params = [] if region.is_class() else fallback_params(region)
        has_default_props = bool(re.search(rf"\b{re.escape(found.name)}\.defaultProps\s*=", self.text))
        factory = ComponentInfo.component if is_component else ComponentInfo.function
        return factory(name, export_type, self.file_path, parameter_names=params,
                       has_default_props=has_default_props, line_number=line_of(self.text, region.start))

    def _strict(self, found, region, default_name) -> Optional[ComponentInfo]:
        if region.is_class():
            return self._build(found, region, default_name, True)
        if region.kind == VARIABLE and WRAPPER_INIT.match(region.body):
            return self._build(found, region, default_name, True)
        if region.kind == VARIABLE and not FUNCTION_INIT.match(region.body):
            return None
        shaped = RETURN_MARKUP.search(region.text) or ARROW_MARKUP.search(region.text) or MARKUP_FACTORY.search(region.text)
        return self._build(found, region, default_name, bool(shaped))

    def _permissive(self, found, region, default_name) -> Optional[ComponentInfo]:
        if region.kind == VARIABLE and not FUNCTION_INIT.match(region.body):
            return None
        brace = region.text.find("{", region.body_start - region.start)
        if brace < 0:
            return None
        if LOOSE_MARKUP.search(region.text, brace) or contains_markup(parse_fragment(region.text, self.file_path)):
            return self._build(found, region, default_name, True)
        return None


def fallback_params(region: Region) -> List[str]:
    """
    Parameter names read off the text after the declaration's opening
    parenthesis: destructured keys when the first parameter is an object
    pattern, plain positional names otherwise.
    """
    body = region.body
    if region.kind == FUNCTION:
        body = "(" + body

    single = re.match(rf"\s*(?:async\s+)?({IDENT})\s*=>", body)
    if single:
        return [single.group(1)]

    inner = _first_paren_contents(body)
    for _ in range(3):
        if inner is None:
            return []
        stripped = inner.lstrip()
        # wrapper(({ a }) => ...) / wrapper(function (a) {...})
        if stripped.startswith("(") or re.match(r"(?:async\s+)?function\b", stripped):
            inner = _first_paren_contents(stripped)
            continue
        single = re.match(rf"(?:async\s+)?({IDENT})\s*=>", stripped)
        if single:
            return [single.group(1)]
        break
    if inner is None:
        return []

    stripped = inner.strip()
    if stripped.startswith("{"):
        span = balanced_span(stripped, 0)
        if span is None:
            return []
        return _clean_names(split_top_level(stripped[span[0]:span[1]]))
    return _clean_names(p for p in split_top_level(stripped) if not p.startswith(("{", "[")))


def _first_paren_contents(text: str) -> Optional[str]:
    idx = text.find("(")
    if idx < 0:
        return None
    span = balanced_span(text, idx)
    if span is None:
        # unterminated: take everything up to the next closing paren
        close = text.find(")", idx)
        return text[idx + 1:close] if close > idx else None
    return text[span[0]:span[1]]


def _clean_names(items) -> List[str]:
    names = []
    for item in items:
        item = item.strip()
        if item.startswith("..."):
            item = item[3:]
        item = re.split(r"[:=?]", item, maxsplit=1)[0].strip()
        if is_identifier(item) and item not in names:
            names.append(item)
    return names


def analyze_fallback(text: str, file_path: str) -> AnalysisResult:
    return FallbackAnalyzer(text, file_path).analyze()
