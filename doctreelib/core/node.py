"""ContentNode abstraction for DocTreeLib.

The ContentNode is intentionally kept simple - it's a read view over a node
owned by some content repository. Navigation logic (children, parents, type
checks) is delegated to the NodeStore.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class ContentNode(ABC):
    """Abstract base class for nodes of a content repository.

    This class defines the minimal interface that all content nodes must
    implement. Walkers and printers only ever read through it; creating,
    moving and deleting nodes is the job of the NodeStore.
    """

    @abstractmethod
    def identifier(self) -> str:
        """Return the opaque, stable identifier of this node.

        The identifier must survive renames and moves, which is why it is
        used for equality and hashing rather than the path.

        Returns:
            str: Unique, stable identifier for this node
        """
        pass

    @abstractmethod
    def path(self) -> str:
        """Return the slash-delimited absolute path of this node.

        A child's path always extends its parent's path, e.g.
        ``/sites/demo`` -> ``/sites/demo/news``.

        Returns:
            str: Absolute node path
        """
        pass

    @abstractmethod
    def name(self) -> str:
        """Return the node name (the last path segment)."""
        pass

    @abstractmethod
    def node_type_name(self) -> str:
        """Return the name of the node type, e.g. ``Neos.NodeTypes:Page``."""
        pass

    @abstractmethod
    def properties(self) -> Dict[str, Any]:
        """Return a mapping of property name to value.

        Implementations should return a copy; callers must not be able to
        change node state through the returned dict.
        """
        pass

    def get_property(self, name: str) -> Optional[Any]:
        """Return a single property, ``None`` when it is absent."""
        return self.properties().get(name)

    def is_hidden(self) -> bool:
        """Check if the node is hidden from the public site."""
        return False

    def __str__(self) -> str:
        """String representation mirrors the repository's node label."""
        return f"{self.path()}[{self.node_type_name()}]"

    def __repr__(self) -> str:
        """Detailed representation for debugging."""
        return f"{self.__class__.__name__}(path={self.path()!r}, id={self.identifier()!r})"

    def __eq__(self, other: object) -> bool:
        """Nodes are equal if they have the same identifier."""
        if not isinstance(other, ContentNode):
            return NotImplemented
        return self.identifier() == other.identifier()

    def __hash__(self) -> int:
        """Hash based on identifier for use in sets and dicts."""
        return hash(self.identifier())
