from componentscan.extractors.react_extractor import ReactComponentExtractor

SUPPORTED_LANGUAGES = ("javascript", "typescript")


def get_extractor(language: str):
    lang = language.lower()
    if lang in SUPPORTED_LANGUAGES:
        return ReactComponentExtractor()
    raise ValueError(f"No extractor for language: {language}")
