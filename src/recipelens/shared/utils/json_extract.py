from __future__ import annotations

import json
import re
from typing import Optional

from recipelens.shared.errors import MalformedResponse

_RE_FENCED = re.compile(r"```(?:json)?\s*(.+?)```", re.DOTALL)


def _reject_constant(name: str):
    raise ValueError(f"non-standard JSON constant: {name}")


def is_valid_json(s: str) -> bool:
    try:
        json.loads(s, parse_constant=_reject_constant)
    except ValueError:
        return False
    return True


def _span(text: str, open_ch: str, close_ch: str) -> Optional[str]:
    start = text.find(open_ch)
    end = text.rfind(close_ch)
    if start == -1 or end <= start:
        return None
    return text[start:end + 1]


def extract_json(s: str) -> str:
    """
    Return the JSON document embedded in a model completion.

    Tries, in order: the whole trimmed text, the first fenced code block,
    the first-'{'-to-last-'}' slice and the first-'['-to-last-']' slice.
    Raises MalformedResponse when none of them parses.
    """
    text = (s or "").strip()
    if is_valid_json(text):
        return text

    m = _RE_FENCED.search(s or "")
    if m:
        fenced = m.group(1).strip()
        if is_valid_json(fenced):
            return fenced

    for open_ch, close_ch in (("{", "}"), ("[", "]")):
        candidate = _span(text, open_ch, close_ch)
        if candidate is not None and is_valid_json(candidate):
            return candidate

    raise MalformedResponse("malformed JSON in response")
