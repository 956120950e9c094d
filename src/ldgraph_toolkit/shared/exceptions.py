"""
Custom exception hierarchy for the linked-data graph toolkit.
"""

import json
from typing import Any


class LDGraphError(Exception):
    """Base exception for all toolkit errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        """Initialize with message and optional context.

        Args:
            message: Error message
            context: Additional context information
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """String representation with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (Context: {context_str})"
        return self.message


# Document-related exceptions
class DocumentError(LDGraphError):
    """Base exception for document ingestion."""

    pass


class DocumentParseError(DocumentError):
    """Document text could not be structurally parsed."""

    pass


class DocumentStructureError(DocumentError):
    """Parsed document is not an object or an array of objects."""

    pass


# Graph model exceptions
class GraphError(LDGraphError):
    """Base exception for graph model operations."""

    pass


class NodeNotFoundError(GraphError):
    """Referenced node id is not part of the graph."""

    pass


# Filtering exceptions
class FilterError(LDGraphError):
    """Invalid filter configuration."""

    pass


# Layout exceptions
class LayoutError(LDGraphError):
    """Base exception for layout computation."""

    pass


class UnknownLayoutError(LayoutError):
    """Requested layout is not registered."""

    pass


class SimulationError(LayoutError):
    """Force simulation or scheduler misuse."""

    pass


# Utility functions for error handling
def wrap_external_error(error: Exception, context: dict[str, Any] | None = None) -> LDGraphError:
    """Wrap external exceptions in our custom exception hierarchy.

    Args:
        error: External exception to wrap
        context: Additional context information

    Returns:
        Appropriate LDGraphError subclass
    """
    error_message = str(error)
    error_context = context or {}
    error_context["original_error"] = type(error).__name__

    if isinstance(error, json.JSONDecodeError):
        error_context.setdefault("line", error.lineno)
        error_context.setdefault("column", error.colno)
        return DocumentParseError(f"Invalid document: {error.msg}", error_context)

    elif isinstance(error, FileNotFoundError):
        return DocumentError(f"File not found: {error_message}", error_context)

    elif isinstance(error, PermissionError):
        return LDGraphError(f"Permission denied: {error_message}", error_context)

    elif isinstance(error, RecursionError):
        return DocumentStructureError(f"Document nesting too deep: {error_message}", error_context)

    elif isinstance(error, ValueError | TypeError):
        return LDGraphError(f"Data validation error: {error_message}", error_context)

    else:
        return LDGraphError(f"Unexpected error: {error_message}", error_context)


def create_error_context(**kwargs) -> dict[str, Any]:
    """Create error context dictionary with standardized keys.

    Args:
        **kwargs: Context key-value pairs

    Returns:
        Context dictionary
    """
    context = {}

    for key, value in kwargs.items():
        if value is not None:
            context[key] = value

    return context
