"""
Fault-tolerant extraction of JSON objects from model output.

Models wrap objects in prose, stop generating mid-object and forget to quote
<placeholder> values. The parser walks the text with a delimiter stack so it
can recover from all three.

Invariants:
- Never raises; None (or an empty list) is the only failure signal
- An empty object {} is never returned
- Mismatched closing delimiters always fail, they are never guessed at
"""

import json
import logging
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

_CLOSERS = {"{": "}", "[": "]"}


def parse_json(text: str) -> Optional[Dict[str, Any]]:
    """
    Parse the first JSON object found in text.

    Scanning starts at the first "{" and stops once its matching "}" is
    seen. Inside strings characters are copied verbatim (escapes included).
    Outside strings, unquoted "<" and ">" are wrapped in quotes and any
    delimiters still open at the end of the text are closed.

    Args:
        text: Raw model output

    Returns:
        The parsed object, or None if nothing usable was found
    """
    start = text.find("{")
    if start < 0:
        return None

    obj_text = text[start:]
    nesting = ["}"]
    cleaned = ["{"]
    in_string = False
    i = 1
    while i < len(obj_text) and nesting:
        ch = obj_text[i]
        if in_string:
            cleaned.append(ch)
            if ch == "\\":
                # Copy escaped char along with the backslash
                i += 1
                if i >= len(obj_text):
                    return None
                cleaned.append(obj_text[i])
            elif ch == '"':
                in_string = False
        else:
            if ch == '"':
                in_string = True
            elif ch in _CLOSERS:
                nesting.append(_CLOSERS[ch])
            elif ch in ("}", "]"):
                if nesting.pop() != ch:
                    return None
            elif ch == "<":
                # Models often leave <template params> unquoted
                ch = '"<'
            elif ch == ">":
                ch = '>"'
            cleaned.append(ch)
        i += 1

    # Truncated output: close whatever is still open, innermost first
    if nesting:
        cleaned.extend(reversed(nesting))

    try:
        obj = json.loads("".join(cleaned))
    except (json.JSONDecodeError, ValueError):
        return None

    if not isinstance(obj, dict) or not obj:
        return None
    return obj


def parse_all_objects(text: str) -> List[Dict[str, Any]]:
    """
    Parse every JSON object found in text.

    Multi-line text is first parsed line by line (one object per line,
    in order). If that finds nothing the whole text is parsed as one unit.

    Args:
        text: Raw model output

    Returns:
        List of parsed objects, empty if none were found
    """
    objects: List[Dict[str, Any]] = []
    lines = text.split("\n")
    if len(lines) > 1:
        for line in lines:
            obj = parse_json(line)
            if obj is not None:
                objects.append(obj)

    if not objects:
        obj = parse_json(text)
        if obj is not None:
            objects.append(obj)

    logger.debug(f"Extracted {len(objects)} object(s) from {len(lines)} line(s)")
    return objects
