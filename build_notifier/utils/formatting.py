"""Display-string conversion for build properties used in subject templates."""

from datetime import date, datetime
from enum import Enum
from typing import Any

LIST_DELIMITER = ","


def property_to_string(value: Any, delimiter: str = LIST_DELIMITER) -> str:
    """Convert a build property value to the text substituted into a template.

    Conversion rules:
    - None becomes an empty string
    - strings are returned unchanged
    - enums use their value
    - dates and datetimes use ISO-8601
    - lists and tuples are joined with the delimiter; with more than one
      item the joined text is wrapped in double quotes
    - anything else goes through str()

    Args:
        value: Property value from the build result
        delimiter: Separator used for sequence values

    Returns:
        Display string for the value

    Example:
        >>> property_to_string(["alice", "bob"])
        '"alice,bob"'
        >>> property_to_string(42)
        '42'
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        items = [property_to_string(item, delimiter) for item in value]
        joined = delimiter.join(items)
        if len(items) > 1:
            return f'"{joined}"'
        return joined
    return str(value)
