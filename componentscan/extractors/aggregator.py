import logging
from typing import Iterable

from componentscan.models import DEFAULT, AnalysisResult, ComponentInfo
from componentscan.utils.naming import name_from_path

logger = logging.getLogger(__name__)


def filename_component(file_path: str) -> ComponentInfo:
    return ComponentInfo.component(name_from_path(file_path), DEFAULT, file_path)


def aggregate(records: Iterable[ComponentInfo], file_path: str) -> AnalysisResult:
    """
    Split records into components and functions and pick the main export.
    An empty input becomes a single component named after the file, so the
    caller always gets something to work with.
    """
    result = AnalysisResult()
    for record in records:
        if record.is_component:
            result.components.append(record)
        else:
            result.functions.append(record)
        if record.export_type == DEFAULT:
            result.main_export = record

    if result.is_empty():
        fallback = filename_component(file_path)
        logger.info("nothing usable found in %s, using '%s'", file_path, fallback.name)
        result.components.append(fallback)
        result.main_export = fallback
    return result
