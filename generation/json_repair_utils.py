"""
Helpers for pulling a JSON array out of LLM output.

Models wrap their JSON in markdown fences or prose, and sometimes cut it off
or leave trailing commas. These functions are kept separate from the parser
so each step can be tested on its own.
"""

import json
import re

import json_repair

from models.errors import ResponseParseError

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)


def strip_code_fences(text: str) -> str:
    """Remove ``` and ```json markers anywhere in the text"""
    return _FENCE_RE.sub("", text).strip()


def extract_json_array(text: str) -> str:
    """
    Return the first [...] span of text.

    Brackets inside JSON strings are ignored. If the opening bracket is never
    closed, everything from it to the end is returned so the repair step can
    close it. Text without any '[' is returned unchanged.
    """
    start = text.find("[")
    if start == -1:
        return text

    depth = 0
    in_string = False
    escaped = False
    for idx in range(start, len(text)):
        char = text[idx]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
            if depth == 0:
                return text[start:idx + 1]

    return text[start:]


def repair_json(text: str) -> str:
    """
    Best-effort fix of near-valid JSON: unbalanced brackets, unterminated
    strings, trailing commas, stray quotes. Returns "" when nothing usable
    is left.
    """
    repaired = json_repair.repair_json(text)
    if not isinstance(repaired, str):
        repaired = json.dumps(repaired, ensure_ascii=False)
    if repaired.strip() in ("", '""'):
        return ""
    return repaired


def loads_with_repair(text: str):
    """
    json.loads, and on failure repair_json then json.loads again.

    Raises:
        ResponseParseError: both attempts failed
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    repaired = repair_json(text)
    if not repaired:
        raise ResponseParseError()
    try:
        return json.loads(repaired)
    except json.JSONDecodeError as e:
        raise ResponseParseError() from e
