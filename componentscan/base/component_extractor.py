from abc import ABC, abstractmethod
from typing import Any, Dict, List


class ComponentExtractor(ABC):
    """
    One extractor instance handles one source file at a time:
    `process_file` analyzes it, `extract_all_components` returns the
    records as plain dicts, `write_to_file` dumps the full result as JSON.
    """

    @abstractmethod
    def process_file(self, file_path: str) -> None:
        pass

    @abstractmethod
    def write_to_file(self, output_path: str) -> None:
        pass

    @abstractmethod
    def extract_all_components(self) -> List[Dict[str, Any]]:
        pass
