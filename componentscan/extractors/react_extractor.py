import json
import logging
import os
from typing import Any, Dict, List, Optional

from componentscan.base.component_extractor import ComponentExtractor
from componentscan.extractors.aggregator import aggregate
from componentscan.extractors.classifier import classify
from componentscan.extractors.export_tracker import track_exports
from componentscan.extractors.fallback import analyze_fallback
from componentscan.extractors.parser_adapter import parse_source
from componentscan.models import AnalysisResult, ParseFailure
from componentscan.utils.text import read_source

logger = logging.getLogger(__name__)


def analyze_source(text: str, file_path: str) -> AnalysisResult:
    """
    Inventory the exported components and functions of one source text.

    Structural analysis first; the text-pattern fallback takes over when the
    text does not parse or no exported declaration could be matched.
    """
    parsed = parse_source(text, file_path)
    if isinstance(parsed, ParseFailure):
        logger.warning("Failed to parse %s (%s), using pattern fallback", file_path, parsed.reason)
        return analyze_fallback(text, file_path)

    exports = track_exports(parsed)
    records = classify(parsed, exports)
    if not records:
        logger.info(
            "no exported declaration matched in %s (exports: %s), using pattern fallback",
            file_path,
            sorted(exports.exported_names) or "none",
        )
        return analyze_fallback(text, file_path)
    return aggregate(records, file_path)


def analyze_file(file_path: str) -> AnalysisResult:
    """Read and analyze a file. Never raises: failures degrade to a record named after the file."""
    file_path = os.path.abspath(file_path)
    try:
        text = read_source(file_path)
    except OSError as e:
        logger.error("Unable to read %s: %s", file_path, e)
        return aggregate([], file_path)

    logger.info("Analyzing file: %s", file_path)
    try:
        result = analyze_source(text, file_path)
    except Exception:
        logger.exception("Error analyzing component file %s", file_path)
        return aggregate([], file_path)

    logger.info(
        "Analysis result for %s: %d components, %d functions",
        file_path,
        len(result.components),
        len(result.functions),
    )
    return result


class ReactComponentExtractor(ComponentExtractor):
    """Per-file extractor producing the component/function inventory of JS and TS sources."""

    def __init__(self):
        self.result: Optional[AnalysisResult] = None

    def process_file(self, file_path: str):
        self.result = analyze_file(file_path)

    def extract_all_components(self) -> List[Dict[str, Any]]:
        if self.result is None:
            return []
        return [record.to_dict() for record in self.result.all_records()]

    def write_to_file(self, output_path: str):
        out_dir = os.path.dirname(output_path)
        if out_dir:
            os.makedirs(out_dir, exist_ok=True)
        payload = self.result.to_dict() if self.result else AnalysisResult().to_dict()
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)
