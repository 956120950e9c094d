"""
Tests for custom exception hierarchy.
"""

import json

import pytest

from ldgraph_toolkit.shared.exceptions import (
    DocumentError,
    DocumentParseError,
    DocumentStructureError,
    FilterError,
    GraphError,
    LayoutError,
    LDGraphError,
    NodeNotFoundError,
    SimulationError,
    UnknownLayoutError,
    create_error_context,
    wrap_external_error,
)


class TestLDGraphError:
    """Tests for base exception class."""

    def test_basic_creation(self) -> None:
        """Test creating exception with just a message."""
        error = LDGraphError("Test error message")
        assert error.message == "Test error message"
        assert error.context == {}
        assert str(error) == "Test error message"

    def test_creation_with_context(self) -> None:
        """Test creating exception with context."""
        error = LDGraphError("Test error", context={"file": "doc.jsonld", "line": 42})
        assert "file=doc.jsonld" in str(error)
        assert "line=42" in str(error)
        assert "(Context:" in str(error)


class TestDocumentExceptions:
    """Tests for document-related exceptions."""

    def test_parse_error_is_document_error(self) -> None:
        """Test DocumentParseError inherits from DocumentError."""
        error = DocumentParseError("bad text")
        assert isinstance(error, DocumentError)
        assert isinstance(error, LDGraphError)

    def test_structure_error_is_document_error(self) -> None:
        """Test DocumentStructureError inherits from DocumentError."""
        assert isinstance(DocumentStructureError("not an object"), DocumentError)


class TestWrapExternalError:
    """Tests for wrap_external_error function."""

    def test_wrap_json_decode_error(self) -> None:
        """Test JSON decode errors become parse errors with position context."""
        with pytest.raises(json.JSONDecodeError) as exc_info:
            json.loads('{"a": ')
        wrapped = wrap_external_error(exc_info.value)
        assert isinstance(wrapped, DocumentParseError)
        assert wrapped.message.startswith("Invalid document:")
        assert wrapped.context["line"] == 1
        assert "column" in wrapped.context

    def test_wrap_file_not_found_error(self) -> None:
        """Test wrapping FileNotFoundError."""
        wrapped = wrap_external_error(FileNotFoundError("missing.jsonld"))
        assert isinstance(wrapped, DocumentError)
        assert "File not found" in wrapped.message

    def test_wrap_recursion_error(self) -> None:
        """Test deeply nested documents become structure errors."""
        wrapped = wrap_external_error(RecursionError("maximum recursion depth exceeded"))
        assert isinstance(wrapped, DocumentStructureError)

    def test_wrap_value_error(self) -> None:
        """Test wrapping ValueError."""
        wrapped = wrap_external_error(ValueError("Invalid value"))
        assert type(wrapped) is LDGraphError
        assert "Data validation error" in wrapped.message

    def test_wrap_unknown_error(self) -> None:
        """Test wrapping unknown exception type."""
        wrapped = wrap_external_error(RuntimeError("Something went wrong"))
        assert "Unexpected error" in wrapped.message
        assert wrapped.context["original_error"] == "RuntimeError"

    def test_wrap_with_context(self) -> None:
        """Test wrapping preserves supplied context."""
        wrapped = wrap_external_error(ValueError("bad"), {"stage": "parse"})
        assert wrapped.context["stage"] == "parse"
        assert wrapped.context["original_error"] == "ValueError"


class TestCreateErrorContext:
    """Tests for create_error_context function."""

    def test_empty_context(self) -> None:
        """Test creating empty context."""
        assert create_error_context() == {}

    def test_filters_none_values(self) -> None:
        """Test None values are filtered out."""
        context = create_error_context(node_id="ex:a", layout=None)
        assert context == {"node_id": "ex:a"}


class TestExceptionHierarchy:
    """Tests for overall exception hierarchy."""

    def test_all_inherit_from_base(self) -> None:
        """Test all custom exceptions inherit from LDGraphError."""
        exceptions = [
            DocumentError,
            DocumentParseError,
            DocumentStructureError,
            GraphError,
            NodeNotFoundError,
            FilterError,
            LayoutError,
            UnknownLayoutError,
            SimulationError,
        ]
        for exc_class in exceptions:
            assert issubclass(exc_class, LDGraphError)

    def test_layout_errors_share_base(self) -> None:
        """Test layout failures can be caught together."""
        with pytest.raises(LayoutError):
            raise UnknownLayoutError("no such layout")
        with pytest.raises(LayoutError):
            raise SimulationError("already running")
