"""DocTreeLib - document tree tools for content repositories.

DocTreeLib walks and prints the document hierarchy of a content repository
and backs a small command line tool set for creating, listing, updating and
removing pages and content elements.

Walk leaves first (safe for removal):
    from doctreelib import DocumentWalker
    nodes = DocumentWalker(store).get_nodes(root, limit=10)

Print a tree:
    from doctreelib import DocumentTreePrinter, ConsoleOutput
    DocumentTreePrinter(store, root, max_depth=2).print_tree(ConsoleOutput())
"""

__version__ = "0.1.0"

from .config import NodeTypeNames, OutputMode, RepositoryConfig
from .core import (
    ConsoleOutput,
    ContentNode,
    DocumentRow,
    DocumentTreePrinter,
    DocumentWalker,
    NodeStore,
    OutputSink,
    SiteInfo,
    TABLE_HEADERS,
)
from .adapters import MemoryNode, MemoryNodeStore, NodeTypeRegistry
from .errors import (
    DocTreeError,
    LookupStatus,
    MalformedInputError,
    NodeExistsError,
    NodeLookup,
    NodeNotFoundError,
    NodeTypeError,
    PropertyAccessError,
    WorkspaceError,
)
from .service import ContentRepositoryService
from .api import count_documents, document_rows, print_document_tree, walk_documents

__all__ = [
    "__version__",
    # Config
    "NodeTypeNames",
    "OutputMode",
    "RepositoryConfig",
    # Core
    "ConsoleOutput",
    "ContentNode",
    "DocumentRow",
    "DocumentTreePrinter",
    "DocumentWalker",
    "NodeStore",
    "OutputSink",
    "SiteInfo",
    "TABLE_HEADERS",
    # Adapters
    "MemoryNode",
    "MemoryNodeStore",
    "NodeTypeRegistry",
    # Errors
    "DocTreeError",
    "LookupStatus",
    "MalformedInputError",
    "NodeExistsError",
    "NodeLookup",
    "NodeNotFoundError",
    "NodeTypeError",
    "PropertyAccessError",
    "WorkspaceError",
    # Service and API
    "ContentRepositoryService",
    "count_documents",
    "document_rows",
    "print_document_tree",
    "walk_documents",
]
