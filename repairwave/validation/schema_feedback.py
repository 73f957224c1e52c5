"""
Turns JSON schema violations into repair instructions.

Each jsonschema ValidationError becomes one or more imperative lines the
model can act on ("convert ... to a string", "add the ... property"), instead
of the library's descriptive messages.
"""

import json
import re
from typing import Any, Iterable, List

from jsonschema.exceptions import ValidationError

FEEDBACK_HEADER = "The JSON returned had errors. Apply these fixes:"


def format_property(path: Iterable[Any]) -> str:
    """Render an error path as instance.a.b[0]."""
    parts = ["instance"]
    for element in path:
        if isinstance(element, int):
            parts.append(f"[{element}]")
        else:
            parts.append(f".{element}")
    return "".join(parts)


def _join_types(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value)


def _allowed_types(subschemas: Any) -> str:
    allowed: List[str] = []
    for subschema in subschemas or []:
        if isinstance(subschema, dict) and "type" in subschema:
            allowed.append(_join_types(subschema["type"]))
        else:
            allowed.append(json.dumps(subschema))
    return ",".join(allowed)


def _additional_properties(error: ValidationError) -> List[str]:
    instance = error.instance
    if not isinstance(instance, dict):
        return []
    schema = error.schema if isinstance(error.schema, dict) else {}
    properties = schema.get("properties", {})
    patterns = schema.get("patternProperties", {})
    return [
        key for key in instance
        if key not in properties and not any(re.search(pattern, key) for pattern in patterns)
    ]


def get_error_fixes(error: ValidationError) -> List[str]:
    """
    Translate one schema violation into instruction lines.

    Args:
        error: A jsonschema ValidationError

    Returns:
        One line for most violations; one per offending property for
        additionalProperties and required
    """
    prop = format_property(error.absolute_path)
    keyword = error.validator
    arg = error.validator_value

    if keyword == "type":
        return [f'convert "{prop}" to a {_join_types(arg)}']
    if keyword in ("anyOf", "oneOf"):
        return [f'convert "{prop}" to one of the allowed types: {_allowed_types(arg)}']
    if keyword == "additionalProperties":
        extras = _additional_properties(error)
        if extras:
            return [f'remove the "{extra}" property from "{prop}"' for extra in extras]
    elif keyword == "required":
        instance = error.instance if isinstance(error.instance, dict) else {}
        missing = [name for name in arg or [] if name not in instance]
        if missing:
            return [f'add the "{name}" property to "{prop}"' for name in missing]
    elif keyword == "format":
        return [f'change the "{prop}" property to be a {arg}']
    elif keyword == "uniqueItems":
        return [f'remove all duplicate items from "{prop}"']
    elif keyword == "enum":
        values = ",".join(json.dumps(v) for v in arg or [])
        return [f'change the "{prop}" property to be one of these values: {values}']
    elif keyword == "const":
        return [f'change the "{prop}" property to be {json.dumps(arg)}']

    return [f'"{prop}" {error.message}. Fix that']


def build_feedback(errors: Iterable[ValidationError]) -> str:
    """Join the fixes for every error into one feedback block (duplicates dropped)."""
    lines: List[str] = []
    for error in errors:
        for line in get_error_fixes(error):
            if line not in lines:
                lines.append(line)
    return FEEDBACK_HEADER + "\n" + "\n".join(lines)
