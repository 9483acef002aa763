import os
import re

IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

# snake/kebab separators plus anything that cannot appear in an identifier
_WORD_SPLIT_RE = re.compile(r"[^A-Za-z0-9$]+|_")


def file_base_name(file_path: str) -> str:
    return os.path.splitext(os.path.basename(file_path))[0]


def to_pascal_case(raw: str) -> str:
    """
    Convert kebab-case or snake_case to PascalCase and make sure the result
    is a usable identifier:
      "user-profile" -> "UserProfile"
      "data_grid"    -> "DataGrid"
      "Button.test"  -> "ButtonTest"
      "404-page"     -> "_404Page"
    """
    parts = [p for p in _WORD_SPLIT_RE.split(raw) if p]
    name = "".join(p[0].upper() + p[1:] for p in parts)
    if not name:
        return "Component"
    if name[0].isdigit():
        name = "_" + name
    return name


def name_from_path(file_path: str) -> str:
    return to_pascal_case(file_base_name(file_path))


def is_identifier(name: str) -> bool:
    return bool(name) and bool(IDENTIFIER_RE.match(name))
