"""Leaves-first document walker for DocTreeLib.

The walker collects the document descendants of a node in post-order, so
that removing the returned nodes one after another never removes a parent
before its children.
"""

import logging
from typing import List

from .node import ContentNode
from .store import NodeStore
from ..config import NodeTypeNames
from ..errors import require_non_negative

logger = logging.getLogger(__name__)


class DocumentWalker:
    """Depth-first, post-order walk over document nodes.

    Only children whose type is a document type are descended into; content
    nodes and their subtrees are neither visited nor returned. The walk is
    read-only and keeps no state between calls.
    """

    def __init__(self, store: NodeStore, document_type: str = NodeTypeNames.document):
        """Initialize walker with a store.

        Args:
            store: NodeStore for navigating the tree
            document_type: Base node type of the nodes to collect
        """
        self.store = store
        self.document_type = document_type

    def get_nodes(self, root: ContentNode, limit: int = 0) -> List[ContentNode]:
        """Walk all documents below and including root, leaves first.

        With a limit, the count is checked before descending into each child
        and again before appending a node. Once the limit is reached nothing
        else is appended for the rest of the walk; skipped subtrees are not
        backfilled.

        Args:
            root: Node to start from, included last
            limit: Maximum number of nodes to return, 0 for unlimited

        Returns:
            Nodes in post-order

        Raises:
            MalformedInputError: If limit is negative
        """
        require_non_negative(limit, "limit")
        nodes: List[ContentNode] = []
        self._walk(root, limit, nodes)
        logger.debug("Walked %d document(s) below %s (limit=%d)", len(nodes), root.path(), limit)
        return nodes

    def _walk(self, node: ContentNode, limit: int, nodes: List[ContentNode]) -> None:
        for child in self.store.children_of_type(node, self.document_type):
            if limit and len(nodes) >= limit:
                return
            self._walk(child, limit, nodes)

        if limit and len(nodes) >= limit:
            return

        nodes.append(node)
