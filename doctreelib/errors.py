"""Error types and lookup results for DocTreeLib.

Walkers and printers never retry or swallow errors: anything raised by the
NodeStore propagates to the caller and aborts the current traversal. The
service layer reports "not found" through ``NodeLookup`` where callers want
to branch on it instead of catching.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .core.node import ContentNode


class DocTreeError(Exception):
    """Base class for all DocTreeLib errors."""
    pass


class NodeNotFoundError(DocTreeError):
    """Raised when a path, URL segment or identifier does not resolve to a node."""
    pass


class PropertyAccessError(DocTreeError):
    """Raised when a required property is absent or has an unexpected shape."""
    pass


class MalformedInputError(DocTreeError, ValueError):
    """Raised for invalid arguments such as a negative limit or depth."""
    pass


class NodeExistsError(DocTreeError):
    """Raised when a node name is already taken among its siblings."""
    pass


class NodeTypeError(DocTreeError):
    """Raised for unknown node types or a node of the wrong type."""
    pass


class WorkspaceError(DocTreeError):
    """Raised when a workspace does not exist or cannot be published."""
    pass


def require_non_negative(value: int, name: str) -> int:
    """Validate a limit/depth style argument.

    Args:
        value: Value to check
        name: Argument name used in the error message

    Returns:
        The value unchanged

    Raises:
        MalformedInputError: If value is negative or not an integer
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedInputError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise MalformedInputError(f"{name} must be >= 0, got {value}")
    return value


class LookupStatus(Enum):
    """Outcome of a node lookup."""
    FOUND = "found"
    NOT_FOUND = "not_found"
    ERROR = "error"


@dataclass
class NodeLookup:
    """Result of resolving a path, URL or identifier to a node.

    Exactly one of ``node`` (FOUND) or ``error`` (NOT_FOUND / ERROR) is set.
    """

    status: LookupStatus
    node: Optional["ContentNode"] = None
    error: Optional[Exception] = None

    @classmethod
    def found_node(cls, node: "ContentNode") -> "NodeLookup":
        return cls(LookupStatus.FOUND, node=node)

    @classmethod
    def not_found(cls, message: str) -> "NodeLookup":
        return cls(LookupStatus.NOT_FOUND, error=NodeNotFoundError(message))

    @classmethod
    def failed(cls, error: Exception) -> "NodeLookup":
        return cls(LookupStatus.ERROR, error=error)

    @property
    def found(self) -> bool:
        return self.status is LookupStatus.FOUND

    def unwrap(self) -> "ContentNode":
        """Return the node or raise the recorded error.

        Raises:
            NodeNotFoundError: For NOT_FOUND results
            Exception: The original error for ERROR results
        """
        if self.status is LookupStatus.FOUND:
            return self.node
        raise self.error
