"""High-level API for DocTreeLib.

This module provides simple, functional interfaces for the common document
tree operations. These functions wrap the walker and printer classes for
ease of use in simple cases.
"""

from typing import List, Optional, Union

from .config import NodeTypeNames, OutputMode, RepositoryConfig
from .core.node import ContentNode
from .core.output import ConsoleOutput, OutputSink
from .core.printer import DocumentRow, DocumentTreePrinter
from .core.store import NodeStore
from .core.walker import DocumentWalker


def walk_documents(root: ContentNode,
                   store: NodeStore,
                   limit: int = 0,
                   document_type: str = NodeTypeNames.document) -> List[ContentNode]:
    """Collect the documents below and including root, leaves first.

    Args:
        root: Node to start from
        store: NodeStore for the tree
        limit: Maximum number of nodes, 0 for unlimited
        document_type: Base node type of documents

    Returns:
        Nodes in post-order

    Example:
        >>> for node in walk_documents(news, store, limit=10):
        ...     store.remove_node(node)
    """
    return DocumentWalker(store, document_type).get_nodes(root, limit)


def document_rows(root: ContentNode,
                  store: NodeStore,
                  max_depth: int = 0,
                  config: Optional[RepositoryConfig] = None) -> List[DocumentRow]:
    """Return the printed rows of a document tree without printing them."""
    config = config or RepositoryConfig()
    printer = DocumentTreePrinter(store, root, max_depth,
                                  document_type=config.node_types.document,
                                  home_segment=config.home_segment)
    return printer.build_rows()


def print_document_tree(root: ContentNode,
                        store: NodeStore,
                        max_depth: int = 0,
                        mode: Union[OutputMode, str] = OutputMode.TABLE,
                        output: Optional[OutputSink] = None,
                        config: Optional[RepositoryConfig] = None) -> None:
    """Print a document tree as a table or as text lines.

    Args:
        root: Node to print from
        store: NodeStore for the tree
        max_depth: Inclusive depth bound, 0 = only the root
        mode: OutputMode or its value ("table", "text")
        output: Sink to print to, the terminal if None
        config: Repository conventions, defaults if None
    """
    config = config or RepositoryConfig()
    printer = DocumentTreePrinter(store, root, max_depth,
                                  document_type=config.node_types.document,
                                  home_segment=config.home_segment)
    printer.render(output or ConsoleOutput(), OutputMode(mode))


def count_documents(root: ContentNode,
                    store: NodeStore,
                    document_type: str = NodeTypeNames.document) -> int:
    """Count root and all of its document descendants."""
    return len(walk_documents(root, store, 0, document_type))
