"""Content repository service for DocTreeLib.

ContentRepositoryService bundles the lookups every command needs: binding a
workspace, resolving URLs, paths and identifiers to nodes, validating node
types, applying JSON properties and publishing. It receives its NodeStore and
configuration explicitly; nothing is looked up from global state.
"""

import json
import logging
from typing import Any, List, Optional

from .config import RepositoryConfig
from .core.node import ContentNode
from .core.printer import URI_PATH_SEGMENT, DocumentTreePrinter
from .core.store import NodeStore, SiteInfo
from .core.walker import DocumentWalker
from .errors import (
    DocTreeError,
    LookupStatus,
    NodeLookup,
    NodeNotFoundError,
    NodeTypeError,
    PropertyAccessError,
    WorkspaceError,
)

logger = logging.getLogger(__name__)


class ContentRepositoryService:
    """Workspace bound access to a content repository.

    Call ``setup`` before anything else; it selects the workspace and
    resolves the site root node that relative paths and URLs start from.

    Example:
        >>> service = ContentRepositoryService(MemoryNodeStore.load("repo.json"))
        >>> service.setup("user-admin")
        >>> service.get_node_for_url("/news").path()
        '/sites/demo/news'
    """

    def __init__(self, store: NodeStore, config: Optional[RepositoryConfig] = None):
        self.store = store
        self.config = config or RepositoryConfig()
        self.current_site: SiteInfo = store.site()
        self.site_path = self.current_site.path
        self.workspace_name: Optional[str] = None
        self.root_node: Optional[ContentNode] = None

    def setup(self, workspace: Optional[str] = None) -> None:
        """Select the workspace to work in, the live workspace by default.

        Raises:
            WorkspaceError: If the workspace does not exist
            NodeNotFoundError: If the workspace has no site root node
        """
        workspace = workspace or self.config.live_workspace
        if not self.store.has_workspace(workspace):
            raise WorkspaceError(f'Workspace "{workspace}" is invalid')

        self.store.use_workspace(workspace)
        self.workspace_name = workspace
        self.root_node = self.store.get_node(self.site_path)
        if self.root_node is None:
            raise NodeNotFoundError(
                f'Workspace "{workspace}" has no site node at "{self.site_path}"')
        logger.debug("Set up workspace %s, site root %s", workspace, self.site_path)

    # Lookups

    def get_node_path_for_url(self, document: ContentNode, url: str) -> str:
        """Resolve a URL below ``document`` and return the node path.

        Each non-empty URL segment selects the document child with a matching
        ``uriPathSegment``; if several children match, the last one wins.

        Raises:
            NodeNotFoundError: If a segment has no matching child document
        """
        for segment in url.split("/"):
            if not segment:
                continue
            document = self._child_document_by_segment(document, segment)
        return self.store.path(document)

    def _child_document_by_segment(self, document: ContentNode, segment: str) -> ContentNode:
        found = [
            child for child in self.store.children_of_type(document, self.config.node_types.document)
            if self.store.get_property(child, URI_PATH_SEGMENT) == segment
        ]
        if not found:
            raise NodeNotFoundError(
                f'Could not find any child document for URL path segment: "{segment}" '
                f'on "{self.store.path(document)}"')
        return found[-1]

    def get_node_for_url(self, url: str) -> ContentNode:
        """Fetch a document by URL, e.g. ``/news/my-news``.

        Raises:
            NodeNotFoundError: If the URL does not resolve
        """
        return self.find_node_for_url(url).unwrap()

    def get_node_for_path(self, path: str) -> ContentNode:
        """Fetch a node by path relative to the site root.

        Raises:
            NodeNotFoundError: If no node lives at the path
        """
        return self.find_node_for_path(path).unwrap()

    def get_node_for_identifier(self, identifier: str) -> ContentNode:
        """Fetch a node by identifier.

        Raises:
            NodeNotFoundError: If the identifier is unknown
        """
        return self.find_node_for_identifier(identifier).unwrap()

    def find_node_for_url(self, url: str) -> NodeLookup:
        self._require_setup()
        try:
            path = self.get_node_path_for_url(self.root_node, url)
        except NodeNotFoundError as e:
            return NodeLookup(LookupStatus.NOT_FOUND, error=e)
        except DocTreeError as e:
            return NodeLookup.failed(e)
        return self._lookup_path(path, f'Could not find any node for URL "{url}"')

    def find_node_for_path(self, path: str) -> NodeLookup:
        self._require_setup()
        return self._lookup_path(self.site_path + path,
                                 f'Could not find any node on path "{path}"')

    def find_node_for_identifier(self, identifier: str) -> NodeLookup:
        self._require_setup()
        node = self.store.get_node_by_identifier(identifier)
        if node is None:
            return NodeLookup.not_found(f'Could not find any node with identifier "{identifier}"')
        return NodeLookup.found_node(node)

    def _lookup_path(self, path: str, message: str) -> NodeLookup:
        node = self.store.get_node(path)
        if node is None:
            return NodeLookup.not_found(message)
        return NodeLookup.found_node(node)

    def _require_setup(self) -> None:
        if self.root_node is None:
            raise WorkspaceError("No workspace set up, call setup() first")

    # Node types and properties

    def get_node_type(self, type_name: str) -> str:
        """Validate a node type name and return it.

        Raises:
            NodeTypeError: If the type is not registered
        """
        if not self.store.has_node_type(type_name):
            raise NodeTypeError(f'Specified node type "{type_name}" is not valid')
        return type_name

    def is_document(self, node: ContentNode) -> bool:
        return self.store.is_of_type(node.node_type_name(), self.config.node_types.document)

    def is_content(self, node: ContentNode) -> bool:
        return self.store.is_of_type(node.node_type_name(), self.config.node_types.content)

    def set_node_properties(self, node: ContentNode, properties_json: str) -> List[str]:
        """Apply a JSON object of properties to a node.

        The value ``"NULL"`` clears a property. Values are stored as decoded.

        Returns:
            Names of the properties that were set

        Raises:
            PropertyAccessError: If the JSON cannot be decoded or is not an object
        """
        try:
            data = json.loads(properties_json)
        except json.JSONDecodeError as e:
            raise PropertyAccessError(f"Could not decode JSON data: {e}") from e
        if not isinstance(data, dict):
            raise PropertyAccessError("Properties must be a JSON object")

        for name, value in data.items():
            self.store.set_property(node, name, self._map_value(value))
        logger.debug("Set properties %s on %s", sorted(data), node.path())
        return list(data)

    def _map_value(self, value: Any) -> Any:
        if value == self.config.null_literal:
            return None
        return value

    # Names, traversal, publishing

    def generate_unique_node_name(self, parent: ContentNode,
                                  ideal_name: Optional[str] = None) -> str:
        return self.store.generate_unique_name(parent, ideal_name)

    def walk_documents(self, root: ContentNode, limit: int = 0) -> List[ContentNode]:
        """Return the documents below and including root, leaves first."""
        walker = DocumentWalker(self.store, self.config.node_types.document)
        return walker.get_nodes(root, limit)

    def document_tree_printer(self, root: ContentNode, depth: int = 0) -> DocumentTreePrinter:
        return DocumentTreePrinter(
            self.store,
            root,
            max_depth=depth,
            document_type=self.config.node_types.document,
            home_segment=self.config.home_segment,
        )

    def publish(self) -> None:
        """Publish the current workspace to the live workspace.

        Raises:
            WorkspaceError: If the live workspace cannot be found
        """
        self._require_setup()
        live = self.config.live_workspace
        if not self.store.has_workspace(live):
            raise WorkspaceError("Could not find the live workspace.")
        self.store.publish(self.workspace_name, live)
        # The bound workspace's nodes may have been replaced
        self.setup(self.workspace_name)
