"""
Tests for date-like property helpers.
"""

from datetime import datetime, timedelta, timezone

from ldgraph_toolkit.shared.dates import node_date, node_date_range, parse_date
from ldgraph_toolkit.shared.models import Node


class TestParseDate:
    """Tests for parse_date."""

    def test_iso_date(self) -> None:
        """Test plain ISO dates."""
        assert parse_date("2024-03-01") == datetime(2024, 3, 1)

    def test_utc_suffix(self) -> None:
        """Test trailing Z is read as UTC."""
        parsed = parse_date("2024-03-01T10:00:00Z")
        assert parsed == datetime(2024, 3, 1, 10, tzinfo=timezone.utc)

    def test_malformed_values_are_absent(self) -> None:
        """Test malformed values return None instead of raising."""
        assert parse_date("next tuesday") is None
        assert parse_date("") is None
        assert parse_date(42) is None
        assert parse_date(None) is None


class TestNodeDates:
    """Tests for node date helpers."""

    def test_first_parseable_property(self) -> None:
        """Test the first parseable date-like property wins."""
        node = Node(id="t", properties={"dueDate": "soon", "startDate": "2024-01-02"})
        assert node_date(node) == datetime(2024, 1, 2)

    def test_no_dates(self) -> None:
        """Test nodes without dates."""
        assert node_date(Node(id="t")) is None
        assert node_date_range(Node(id="t")) is None

    def test_range_with_end(self) -> None:
        """Test explicit end dates."""
        node = Node(id="t", properties={"startDate": "2024-01-01", "endDate": "2024-01-03"})
        assert node_date_range(node) == (datetime(2024, 1, 1), datetime(2024, 1, 3))

    def test_range_defaults_to_one_week(self) -> None:
        """Test missing or malformed end dates default to a one week span."""
        node = Node(id="t", properties={"createdAt": "2024-01-01", "endDate": "garbage"})
        start, end = node_date_range(node)
        assert end - start == timedelta(days=7)
