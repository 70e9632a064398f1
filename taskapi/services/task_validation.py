"""Payload validation for task create and update requests"""

import re
from typing import Any, List, Optional

# Optional sign, no leading zeros; surrounding whitespace is trimmed first
INTEGER_STRING = re.compile(r"[+-]?(0|[1-9][0-9]*)")
INTEGER_WHITESPACE = " \t\n\r\v\x00"

# Range of the priority column (32-bit signed INTEGER)
PRIORITY_MIN = -2**31
PRIORITY_MAX = 2**31 - 1


def parse_integer(value: Any) -> Optional[int]:
    """Return the integer a value denotes, or None when it is not integer-like.

    Booleans are not integers here. Strings may carry a sign and surrounding
    whitespace but no leading zeros.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip(INTEGER_WHITESPACE)
        if INTEGER_STRING.fullmatch(text):
            return int(text)
    return None


def is_integer_like(value: Any) -> bool:
    """True for ints and integer strings that fit the priority column."""
    number = parse_integer(value)
    return number is not None and PRIORITY_MIN <= number <= PRIORITY_MAX


def get_validation_errors(data: Any, is_new: bool = True) -> List[str]:
    """Collect every problem with a task payload.

    Args:
        data: Decoded JSON request body
        is_new: True for create, where ``name`` is required; False for update

    Returns:
        List[str]: Error messages, empty when the payload is acceptable
    """
    if not isinstance(data, dict):
        return ["Request body must be a JSON object"]

    errors = []

    name = data.get("name")
    if is_new and (name is None or name == ""):
        errors.append("Name is required")
    elif name is not None and not isinstance(name, str):
        errors.append("Name must be a string")

    priority = data.get("priority")
    if priority is not None and not is_integer_like(priority):
        errors.append("Priority must be an integer")

    if "is_completed" in data and not isinstance(data["is_completed"], bool):
        errors.append("Is completed must be a boolean")

    return errors
