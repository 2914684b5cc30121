"""Low-level helpers for pulling JSON objects out of noisy model output."""

import json
import re
from typing import Any, Iterator, List, Optional

_FENCE_RE = re.compile(r"^\s*```[\w-]*[ \t]*\n?(.*?)\n?\s*```\s*$", re.DOTALL)
_CLOSERS = {"[": "]", "{": "}"}


def strip_code_fences(text: str) -> str:
    """Remove a surrounding markdown code block (```json ... ```) if present."""
    raw = (text or "").strip()
    match = _FENCE_RE.match(raw)
    if match:
        return match.group(1).strip()
    if raw.startswith("```"):
        # Opening fence without a closing one (truncated output)
        raw = re.sub(r"^```[\w-]*\s*", "", raw)
    return raw


def loads_or_none(text: str) -> Optional[Any]:
    """json.loads that returns None instead of raising. Raw control chars in strings are tolerated."""
    try:
        return json.loads(text, strict=False)
    except (ValueError, RecursionError):
        return None


def _match_brace(text: str, start: int) -> Optional[int]:
    """Index of the '}' closing the '{' at `start`, skipping braces inside strings."""
    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
    return None


def iter_object_spans(text: str) -> Iterator[str]:
    """
    Yield top-level object-like substrings in order of appearance.
    Balanced spans come first; an unbalanced trailing '{' yields the rest of the text.
    """
    text = text or ""
    pos = 0
    while True:
        start = text.find("{", pos)
        if start == -1:
            return
        end = _match_brace(text, start)
        if end is None:
            yield text[start:]
            return
        yield text[start:end + 1]
        pos = end + 1


def extract_embedded_object(text: str) -> Optional[str]:
    """First balanced {...} substring of `text`, or None."""
    for span in iter_object_spans(text):
        if span.endswith("}") and _match_brace(span, 0) == len(span) - 1:
            return span
    return None


def _last_significant(out: List[str], end: Optional[int] = None) -> Optional[int]:
    i = (len(out) if end is None else end) - 1
    while i >= 0:
        if not out[i].isspace():
            return i
        i -= 1
    return None


def _ends_value(out: List[str]) -> bool:
    idx = _last_significant(out)
    if idx is None:
        return False
    return out[idx] in '"]}' or out[idx].isalnum()


def _drop_trailing_comma(out: List[str]) -> None:
    idx = _last_significant(out)
    if idx is not None and out[idx] == ",":
        del out[idx]


def _close_array_before_key(out: List[str], string_start: int) -> int:
    """
    A ':' arrived while an array is open, so the last string is really the next
    object key. Insert the missing ']' before that key. Returns the number of
    characters inserted (0 when the layout is not recognised).
    """
    last = _last_significant(out)
    if string_start < 0 or last is None or out[last] != '"' or last <= string_start:
        return 0
    before = _last_significant(out, string_start)
    if before is None:
        return 0
    if out[before] == ",":
        out.insert(before, "]")
        return 1
    if out[before] == "[":
        out[before + 1:before + 1] = ["]", ","]
        return 2
    return 0


def _strip_dangling(out: List[str], stack: List[str], string_start: int) -> None:
    """Remove a trailing separator or a key left without a value."""
    while True:
        idx = _last_significant(out)
        if idx is None:
            return
        ch = out[idx]
        if ch == ",":
            del out[idx:]
            continue
        if ch == ":":
            if 0 <= string_start < idx:
                del out[string_start:]
                string_start = -1
            else:
                del out[idx:]
            continue
        if ch == '"' and stack and stack[-1] == "{" and 0 <= string_start < idx:
            before = _last_significant(out, string_start)
            if before is not None and out[before] in ",{":
                del out[string_start:]
                string_start = -1
                continue
        return


def repair_json_syntax(text: str) -> str:
    """
    Best-effort fix of common syntax damage in model-emitted JSON:
    missing commas between values, trailing commas, an array left open before the
    next key, unterminated strings, and missing or mismatched closing brackets.
    The result is not guaranteed to parse.
    """
    out: List[str] = []
    stack: List[str] = []
    in_string = False
    escaped = False
    string_start = -1

    for ch in text or "":
        if in_string:
            out.append(ch)
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue

        if ch.isspace():
            out.append(ch)
            continue

        if ch in '"[{':
            if _ends_value(out):
                out.append(",")
            if ch == '"':
                string_start = len(out)
                in_string = True
            else:
                stack.append(ch)
            out.append(ch)
            continue

        if ch in "]}":
            opener = "[" if ch == "]" else "{"
            if opener not in stack:
                continue
            _drop_trailing_comma(out)
            while stack[-1] != opener:
                out.append(_CLOSERS[stack.pop()])
            stack.pop()
            out.append(ch)
            continue

        if ch == ",":
            idx = _last_significant(out)
            if idx is None or out[idx] in ",[{:":
                continue

        if ch == ":" and stack and stack[-1] == "[":
            inserted = _close_array_before_key(out, string_start)
            if inserted:
                string_start += inserted
                stack.pop()

        out.append(ch)

    if in_string:
        if escaped:
            out.pop()
        out.append('"')

    _strip_dangling(out, stack, string_start)
    while stack:
        out.append(_CLOSERS[stack.pop()])
    return "".join(out)
