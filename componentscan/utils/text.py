import re
from typing import List, Optional, Tuple

import chardet

_OPEN_TO_CLOSE = {"(": ")", "{": "}", "[": "]"}
_CLOSERS = set(_OPEN_TO_CLOSE.values())

# strings first so that comment markers inside them are left alone
_COMMENT_OR_STRING_RE = re.compile(
    r"(\"(?:\\.|[^\"\\\n])*\"|'(?:\\.|[^'\\\n])*'|`(?:\\.|[^`\\])*`)"
    r"|(/\*[\s\S]*?\*/|//[^\n]*)"
)


def read_source(file_path: str) -> str:
    with open(file_path, "rb") as f:
        raw = f.read()
    if not raw:
        return ""
    guess = chardet.detect(raw)
    encoding = guess.get("encoding") or "utf-8"
    try:
        return raw.decode(encoding, errors="replace")
    except LookupError:
        return raw.decode("utf-8", errors="replace")


def blank_comments(text: str) -> str:
    """Replace comments with spaces, keeping newlines so offsets and line numbers survive."""

    def repl(m):
        if m.group(2) is None:
            return m.group(0)
        return re.sub(r"[^\n]", " ", m.group(2))

    return _COMMENT_OR_STRING_RE.sub(repl, text)


def line_of(text: str, index: int) -> int:
    return text.count("\n", 0, index) + 1


def balanced_span(text: str, open_index: int) -> Optional[Tuple[int, int]]:
    """
    Given the index of an opening bracket, return (start, end) of its
    contents, `end` being the index of the matching closer. None when the
    bracket is never closed.
    """
    if open_index >= len(text) or text[open_index] not in _OPEN_TO_CLOSE:
        return None
    stack = [_OPEN_TO_CLOSE[text[open_index]]]
    i = open_index + 1
    quote = None
    while i < len(text):
        ch = text[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in ("'", '"', "`"):
            quote = ch
        elif ch in _OPEN_TO_CLOSE:
            stack.append(_OPEN_TO_CLOSE[ch])
        elif ch in _CLOSERS:
            if ch != stack[-1]:
                return None
            stack.pop()
            if not stack:
                return open_index + 1, i
        i += 1
    return None


def split_top_level(text: str, sep: str = ",") -> List[str]:
    parts: List[str] = []
    depth = 0
    angle = 0
    current = []
    quote = None
    for ch in text:
        if quote:
            current.append(ch)
            if ch == quote:
                quote = None
            continue
        if ch in ("'", '"', "`"):
            quote = ch
        elif ch in _OPEN_TO_CLOSE:
            depth += 1
        elif ch in _CLOSERS:
            depth -= 1
        elif ch == "<":
            angle += 1
        elif ch == ">" and angle:
            angle -= 1
        if ch == sep and depth == 0 and angle == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(ch)
    if current:
        parts.append("".join(current))
    return [p.strip() for p in parts if p.strip()]
