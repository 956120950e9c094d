"""
Date-like property helpers for calendar and timeline consumers.

Values that do not parse are treated as absent, never as errors.
"""

from datetime import date, datetime, timedelta

from .models import Node

DATE_PROPERTIES = ("dueDate", "startDate", "endDate", "createdAt", "completedAt")
START_PROPERTIES = ("startDate", "createdAt")
END_PROPERTIES = ("endDate", "dueDate", "completedAt")
DEFAULT_SPAN = timedelta(days=7)


def parse_date(value: object) -> datetime | None:
    """Parse an ISO-8601 date or datetime string.

    Args:
        value: Raw property value

    Returns:
        Parsed datetime, or None when the value is not date-like
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def _first_date(node: Node, keys: tuple[str, ...]) -> datetime | None:
    for key in keys:
        parsed = parse_date(node.properties.get(key))
        if parsed is not None:
            return parsed
    return None


def node_date(node: Node) -> datetime | None:
    """Return the first parseable date-like property of a node."""
    return _first_date(node, DATE_PROPERTIES)


def node_date_range(node: Node) -> tuple[datetime, datetime] | None:
    """Return the (start, end) span of a node.

    The start comes from ``startDate`` or ``createdAt``; the end from
    ``endDate``, ``dueDate`` or ``completedAt``, defaulting to one week after
    the start.

    Args:
        node: Graph node

    Returns:
        Tuple of start and end, or None when no start date is available
    """
    start = _first_date(node, START_PROPERTIES)
    if start is None:
        return None
    end = _first_date(node, END_PROPERTIES)
    if end is None:
        end = start + DEFAULT_SPAN
    return start, end
