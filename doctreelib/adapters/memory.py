"""In-memory content repository adapter for DocTreeLib.

This adapter keeps one node tree per workspace in memory and can persist the
whole repository as a JSON document. It is the reference NodeStore used by
the command line tools and the test suite.

File format::

    {
      "site": {"name": "Demo Site", "nodeName": "demo"},
      "nodeTypes": {"Neos.NodeTypes:Page": ["Neos.Neos:Document"], ...},
      "workspaces": {"live": {<node>}, "user-admin": {<node>}}
    }

where a node is ``{"name", "identifier", "type", "hidden", "properties",
"children": [<node>, ...]}``.
"""

import json
import logging
import uuid
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Set, Union

from ..core.node import ContentNode
from ..core.store import NodeStore, SiteInfo
from ..errors import (
    DocTreeError,
    MalformedInputError,
    NodeExistsError,
    NodeTypeError,
    WorkspaceError,
)

logger = logging.getLogger(__name__)

UNSTRUCTURED = "unstructured"

DEFAULT_NODE_TYPES: Dict[str, List[str]] = {
    UNSTRUCTURED: [],
    "Neos.Neos:Node": [],
    "Neos.Neos:Document": ["Neos.Neos:Node"],
    "Neos.Neos:Content": ["Neos.Neos:Node"],
    "Neos.Neos:ContentCollection": ["Neos.Neos:Node"],
    "Neos.Neos:Shortcut": ["Neos.Neos:Document"],
    "Neos.NodeTypes:Page": ["Neos.Neos:Document"],
    "Neos.Neos.NodeTypes:Text": ["Neos.Neos:Content"],
    "Neos.NodeTypes:Text": ["Neos.Neos:Content"],
    "Neos.NodeTypes:Headline": ["Neos.Neos:Content"],
    "Neos.NodeTypes:Image": ["Neos.Neos:Content"],
}


class NodeTypeRegistry:
    """Node type names and their declared supertypes."""

    def __init__(self, supertypes: Optional[Mapping[str, Iterable[str]]] = None):
        """Initialize registry.

        Args:
            supertypes: Mapping of type name to direct supertypes,
                        defaults to the stock Neos hierarchy
        """
        source = DEFAULT_NODE_TYPES if supertypes is None else supertypes
        self._supertypes: Dict[str, List[str]] = {
            name: list(parents) for name, parents in source.items()
        }

    def register(self, type_name: str, supertypes: Iterable[str] = ()) -> None:
        """Add or replace a node type."""
        self._supertypes[type_name] = list(supertypes)

    def has(self, type_name: str) -> bool:
        return type_name in self._supertypes

    def is_of_type(self, type_name: str, base_type: str) -> bool:
        """Check inheritance transitively; unknown types only match themselves."""
        seen: Set[str] = set()
        pending = [type_name]
        while pending:
            current = pending.pop()
            if current == base_type:
                return True
            if current in seen:
                continue
            seen.add(current)
            pending.extend(self._supertypes.get(current, ()))
        return False

    def to_dict(self) -> Dict[str, List[str]]:
        return {name: list(parents) for name, parents in self._supertypes.items()}


class MemoryNode(ContentNode):
    """Node held in memory, linked to its parent and children."""

    def __init__(self,
                 name: str,
                 node_type: str = UNSTRUCTURED,
                 properties: Optional[Dict[str, Any]] = None,
                 identifier: Optional[str] = None,
                 hidden: bool = False,
                 parent: Optional["MemoryNode"] = None):
        self._name = name
        self._node_type = node_type
        self._properties: Dict[str, Any] = dict(properties or {})
        self._identifier = identifier or str(uuid.uuid4())
        self._hidden = hidden
        self._parent = parent
        self._children: List["MemoryNode"] = []

    def identifier(self) -> str:
        return self._identifier

    def path(self) -> str:
        if self._parent is None:
            return "/"
        parent_path = self._parent.path()
        if parent_path == "/":
            return "/" + self._name
        return f"{parent_path}/{self._name}"

    def name(self) -> str:
        return self._name

    def node_type_name(self) -> str:
        return self._node_type

    def properties(self) -> Dict[str, Any]:
        return dict(self._properties)

    def get_property(self, name: str) -> Optional[Any]:
        return self._properties.get(name)

    def is_hidden(self) -> bool:
        return self._hidden

    def add_child(self, child: "MemoryNode") -> "MemoryNode":
        """Attach a child and return it (used for building trees)."""
        child._parent = self
        self._children.append(child)
        return child

    def iter_subtree(self) -> Iterator["MemoryNode"]:
        """Yield this node and all descendants, parent first."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node._children))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self._name,
            "identifier": self._identifier,
            "type": self._node_type,
            "hidden": self._hidden,
            "properties": dict(self._properties),
            "children": [child.to_dict() for child in self._children],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MemoryNode":
        """Build a node tree from its dict form.

        Raises:
            MalformedInputError: If a node entry is not an object or has no name
        """
        if not isinstance(data, Mapping):
            raise MalformedInputError(f"Node entry must be an object, got {data!r}")
        if "name" not in data:
            raise MalformedInputError(f"Node entry without a name: {dict(data)!r}")
        node = cls(
            name=data["name"],
            node_type=data.get("type", UNSTRUCTURED),
            properties=data.get("properties"),
            identifier=data.get("identifier"),
            hidden=bool(data.get("hidden", False)),
        )
        for child_data in data.get("children", ()):
            node.add_child(cls.from_dict(child_data))
        return node

    def __repr__(self) -> str:
        return f"MemoryNode(path={self.path()!r}, type={self._node_type!r})"


class MemoryNodeStore(NodeStore):
    """NodeStore over in-memory trees, one per workspace.

    All reads and writes go to the workspace selected with
    ``use_workspace``; the live workspace is selected initially.
    """

    def __init__(self,
                 site: SiteInfo,
                 registry: Optional[NodeTypeRegistry] = None,
                 workspaces: Optional[Dict[str, MemoryNode]] = None,
                 workspace: str = "live"):
        """Initialize store.

        Args:
            site: The site served by this repository
            registry: Node type registry, stock Neos types if None
            workspaces: Root node per workspace name; a fresh live
                        workspace with an empty site page if None
            workspace: Workspace to start in
        """
        self._site = site
        self.registry = registry or NodeTypeRegistry()
        self._workspaces = workspaces if workspaces is not None else {
            "live": self.create_site_tree(site)
        }
        self._workspace = None
        self.use_workspace(workspace)

    @staticmethod
    def create_site_tree(site: SiteInfo) -> MemoryNode:
        """Return a workspace root holding ``/sites/<node name>`` as a home page."""
        root = MemoryNode("")
        sites = root.add_child(MemoryNode("sites"))
        sites.add_child(MemoryNode(
            site.node_name,
            node_type="Neos.NodeTypes:Page",
            properties={"title": site.name, "uriPathSegment": "home"},
        ))
        return root

    @property
    def workspace(self) -> str:
        return self._workspace

    @property
    def root(self) -> MemoryNode:
        """Root node of the current workspace."""
        return self._workspaces[self._workspace]

    # Navigation

    def get_children(self, node: ContentNode) -> Iterator[ContentNode]:
        return iter(list(self._own(node)._children))

    def get_parent(self, node: ContentNode) -> Optional[ContentNode]:
        return self._own(node)._parent

    def get_node(self, path: str) -> Optional[ContentNode]:
        current = self.root
        for segment in path.split("/"):
            if not segment:
                continue
            current = self.find_named_child(current, segment)
            if current is None:
                return None
        return current

    def get_node_by_identifier(self, identifier: str) -> Optional[ContentNode]:
        for node in self.root.iter_subtree():
            if node.identifier() == identifier:
                return node
        return None

    # Node types

    def has_node_type(self, type_name: str) -> bool:
        return self.registry.has(type_name)

    def is_of_type(self, type_name: str, base_type: str) -> bool:
        return self.registry.is_of_type(type_name, base_type)

    # Site and workspaces

    def site(self) -> SiteInfo:
        return self._site

    def has_workspace(self, name: str) -> bool:
        return name in self._workspaces

    def workspace_names(self) -> List[str]:
        return sorted(self._workspaces)

    def use_workspace(self, name: str) -> None:
        if name not in self._workspaces:
            raise WorkspaceError(f'Workspace "{name}" is invalid')
        self._workspace = name
        logger.debug("Using workspace %s", name)

    def publish(self, workspace: str, target: str) -> None:
        """Replace the target workspace with a copy of ``workspace``."""
        for name in (workspace, target):
            if name not in self._workspaces:
                raise WorkspaceError(f'Workspace "{name}" is invalid')
        if workspace == target:
            logger.debug("Nothing to publish, %s is the target workspace", workspace)
            return
        self._workspaces[target] = MemoryNode.from_dict(self._workspaces[workspace].to_dict())
        logger.info("Published workspace %s to %s", workspace, target)

    # Modification

    def supports_modification(self) -> bool:
        return True

    def create_node(self, parent: ContentNode, name: str,
                    type_name: Optional[str] = None) -> ContentNode:
        type_name = type_name or UNSTRUCTURED
        if not self.has_node_type(type_name):
            raise NodeTypeError(f'Node type "{type_name}" is not valid')
        owner = self._own(parent)
        if self.find_named_child(owner, name) is not None:
            raise NodeExistsError(f'Node "{name}" already exists below "{owner.path()}"')
        node = owner.add_child(MemoryNode(name, node_type=type_name))
        logger.debug("Created %s", node)
        return node

    def remove_node(self, node: ContentNode) -> None:
        own = self._own(node)
        if own._parent is None:
            raise DocTreeError("The workspace root node cannot be removed")
        own._parent._children.remove(own)
        own._parent = None
        logger.debug("Removed %s", node.identifier())

    def set_property(self, node: ContentNode, name: str, value: Any) -> None:
        self._own(node)._properties[name] = value

    def set_name(self, node: ContentNode, name: str) -> None:
        own = self._own(node)
        if own._name == name:
            return
        if own._parent is not None and self.find_named_child(own._parent, name) is not None:
            raise NodeExistsError(f'Node "{name}" already exists below "{own._parent.path()}"')
        own._name = name

    def set_hidden(self, node: ContentNode, hidden: bool) -> None:
        self._own(node)._hidden = hidden

    def _own(self, node: ContentNode) -> MemoryNode:
        if not isinstance(node, MemoryNode):
            raise TypeError(f"{self.__class__.__name__} cannot handle {node!r}")
        return node

    # Persistence

    def to_dict(self) -> Dict[str, Any]:
        return {
            "site": {"name": self._site.name, "nodeName": self._site.node_name},
            "nodeTypes": self.registry.to_dict(),
            "workspaces": {name: root.to_dict() for name, root in self._workspaces.items()},
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], workspace: str = "live") -> "MemoryNodeStore":
        """Build a store from its dict form.

        Raises:
            MalformedInputError: If the site entry is missing or a section
                has the wrong shape
        """
        if not isinstance(data, Mapping):
            raise MalformedInputError(
                f"Repository data must be an object, got {type(data).__name__}")
        site_data = data.get("site")
        if not isinstance(site_data, Mapping) or "nodeName" not in site_data:
            raise MalformedInputError("Repository data has no site with a nodeName")
        site = SiteInfo(name=site_data.get("name", site_data["nodeName"]),
                        node_name=site_data["nodeName"])

        node_types = data.get("nodeTypes")
        if node_types is not None and not isinstance(node_types, Mapping):
            raise MalformedInputError('Repository "nodeTypes" must be an object')
        registry = NodeTypeRegistry(node_types) if node_types is not None else None

        workspace_data = data.get("workspaces", {})
        if not isinstance(workspace_data, Mapping):
            raise MalformedInputError('Repository "workspaces" must be an object')
        workspaces = {
            name: MemoryNode.from_dict(tree)
            for name, tree in workspace_data.items()
        } or None
        return cls(site, registry=registry, workspaces=workspaces, workspace=workspace)

    @classmethod
    def load(cls, path: Union[str, Path], workspace: str = "live") -> "MemoryNodeStore":
        """Read a repository JSON file.

        Raises:
            MalformedInputError: If the file is not valid JSON
        """
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise MalformedInputError(f"{path} is not a valid repository file: {e}") from e
        logger.debug("Loaded repository from %s", path)
        return cls.from_dict(data, workspace=workspace)

    def save(self, path: Union[str, Path]) -> None:
        """Write the repository to a JSON file."""
        path = Path(path)
        path.write_text(json.dumps(self.to_dict(), indent=2, default=str) + "\n", encoding="utf-8")
        logger.debug("Saved repository to %s", path)
