"""
Exception hierarchy for SQL generation.

Every failure raised while rendering a statement derives from
GenerationError and carries the offending node so callers can report
exactly which part of a query descriptor was rejected.
"""

from typing import Any, Dict, Optional


class GenerationError(Exception):
    """
    Base exception for all query generation errors.

    Args:
        message: Error description
        node: The descriptor node that could not be rendered (optional)
        clause: Name of the clause being rendered when the error occurred (optional)
    """

    def __init__(
        self,
        message: str,
        node: Any = None,
        clause: Optional[str] = None,
    ):
        self.message = message
        self.node = node
        self.clause = clause

        # Build contextual error message
        context_parts = []
        if clause:
            context_parts.append(f"clause='{clause}'")
        if node is not None:
            context_parts.append(f"node={node!r}")

        if context_parts:
            full_message = f"{message} ({', '.join(context_parts)})"
        else:
            full_message = message

        super().__init__(full_message)

    def to_dict(self) -> Dict[str, Optional[str]]:
        """Convert to structured dict for logging."""
        return {
            "error_type": type(self).__name__,
            "message": self.message,
            "clause": self.clause,
            "node_type": type(self.node).__name__ if self.node is not None else None,
        }


class UnsupportedLiteralKind(GenerationError):
    """Raised when a value outside the supported literal kinds reaches the escaper."""

    pass


class UnknownOperator(GenerationError):
    """Raised when a predicate uses an operator or comparator that has no renderer."""

    pass


class InvalidColumnReference(GenerationError):
    """Raised when a column, table or attribute reference cannot be rendered."""

    pass


class MalformedPredicate(GenerationError):
    """Raised when a predicate tree has a shape the where renderer does not accept."""

    pass


class InvalidOrderDirection(GenerationError):
    """Raised when an ORDER BY direction token is not a recognised keyword."""

    pass


class UnknownDialectError(GenerationError):
    """Raised when a dialect name is not registered."""

    pass


__all__ = [
    "GenerationError",
    "UnsupportedLiteralKind",
    "UnknownOperator",
    "InvalidColumnReference",
    "MalformedPredicate",
    "InvalidOrderDirection",
    "UnknownDialectError",
]
