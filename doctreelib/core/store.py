"""NodeStore abstraction for DocTreeLib.

The NodeStore is the single capability interface through which DocTreeLib
talks to a content repository. It collapses the different node APIs a CMS
exposes across its versions into one set of operations, so the walker,
printer and service work unchanged against any backing store.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional
from .node import ContentNode
from .naming import generate_unique_node_name


@dataclass(frozen=True)
class SiteInfo:
    """The site a store serves content for."""
    name: str
    node_name: str

    @property
    def path(self) -> str:
        """Absolute path of the site root node."""
        return f"/sites/{self.node_name}"


class NodeStore(ABC):
    """Abstract store for navigating and modifying a content tree.

    Read operations are all a traversal needs. The mutating operations are
    only used by commands and may raise NotImplementedError in read-only
    stores (see ``supports_modification``).
    """

    # Navigation

    @abstractmethod
    def get_children(self, node: ContentNode) -> Iterator[ContentNode]:
        """Iterate over the children of a node in their stored order.

        Args:
            node: The parent node

        Returns:
            Iterator yielding child ContentNode instances
        """
        pass

    @abstractmethod
    def get_parent(self, node: ContentNode) -> Optional[ContentNode]:
        """Get the parent node, None for the root of a workspace."""
        pass

    @abstractmethod
    def get_node(self, path: str) -> Optional[ContentNode]:
        """Resolve an absolute node path, None if nothing lives there."""
        pass

    @abstractmethod
    def get_node_by_identifier(self, identifier: str) -> Optional[ContentNode]:
        """Resolve a node identifier, None if unknown."""
        pass

    # Node types

    @abstractmethod
    def has_node_type(self, type_name: str) -> bool:
        """Check if the node type is registered."""
        pass

    @abstractmethod
    def is_of_type(self, type_name: str, base_type: str) -> bool:
        """Check if ``type_name`` is ``base_type`` or inherits from it."""
        pass

    # Site and workspaces

    @abstractmethod
    def site(self) -> SiteInfo:
        """Return the first online site."""
        pass

    @abstractmethod
    def has_workspace(self, name: str) -> bool:
        """Check if a workspace with this name exists."""
        pass

    @abstractmethod
    def use_workspace(self, name: str) -> None:
        """Bind all subsequent reads and writes to the named workspace."""
        pass

    def publish(self, workspace: str, target: str) -> None:
        """Publish all pending changes of ``workspace`` into ``target``."""
        raise NotImplementedError(f"{self.__class__.__name__} does not support publishing")

    # Derived read helpers

    def children_of_type(self, node: ContentNode,
                         type_name: Optional[str] = None) -> List[ContentNode]:
        """Return the children whose type is ``type_name`` or a subtype of it.

        Args:
            node: The parent node
            type_name: Base type to filter on, None for all children

        Returns:
            Ordered list of matching children
        """
        children = self.get_children(node)
        if type_name is None:
            return list(children)
        return [child for child in children
                if self.is_of_type(child.node_type_name(), type_name)]

    def find_named_child(self, node: ContentNode, name: str) -> Optional[ContentNode]:
        """Return the direct child called ``name``, None if there is none."""
        for child in self.get_children(node):
            if child.name() == name:
                return child
        return None

    def get_property(self, node: ContentNode, name: str) -> Optional[Any]:
        """Return the named property of a node, None when absent."""
        return node.get_property(name)

    def path(self, node: ContentNode) -> str:
        """Return the full hierarchical path of a node."""
        return node.path()

    def generate_unique_name(self, parent: ContentNode,
                             desired_name: Optional[str] = None) -> str:
        """Return a name that is free among ``parent``'s children.

        Default implementation checks the current child names; stores with
        cheaper lookups can override.
        """
        existing = [child.name() for child in self.get_children(parent)]
        return generate_unique_node_name(existing, desired_name)

    # Modification - only required if supports_modification() returns True

    def supports_modification(self) -> bool:
        """Check if the store supports modifying the tree structure."""
        return False

    def create_node(self, parent: ContentNode, name: str,
                    type_name: Optional[str] = None) -> ContentNode:
        """Create a child node below ``parent`` and return it.

        Raises:
            NotImplementedError: If modification not supported
        """
        raise NotImplementedError(f"{self.__class__.__name__} does not support modification")

    def remove_node(self, node: ContentNode) -> None:
        """Remove a node together with its subtree.

        Raises:
            NotImplementedError: If modification not supported
        """
        raise NotImplementedError(f"{self.__class__.__name__} does not support modification")

    def set_property(self, node: ContentNode, name: str, value: Any) -> None:
        """Set a single property value.

        Raises:
            NotImplementedError: If modification not supported
        """
        raise NotImplementedError(f"{self.__class__.__name__} does not support modification")

    def set_name(self, node: ContentNode, name: str) -> None:
        """Rename a node.

        Raises:
            NotImplementedError: If modification not supported
        """
        raise NotImplementedError(f"{self.__class__.__name__} does not support modification")

    def set_hidden(self, node: ContentNode, hidden: bool) -> None:
        """Change the hidden state of a node.

        Raises:
            NotImplementedError: If modification not supported
        """
        raise NotImplementedError(f"{self.__class__.__name__} does not support modification")
