"""Core abstractions for DocTreeLib.

This module contains the node and store interfaces together with the two
traversals built on them: the leaves-first walker and the tree printer.
"""

from .node import ContentNode
from .store import NodeStore, SiteInfo
from .walker import DocumentWalker
from .printer import DocumentRow, DocumentTreePrinter, TABLE_HEADERS
from .output import OutputSink, ConsoleOutput

__all__ = [
    "ContentNode",
    "NodeStore",
    "SiteInfo",
    "DocumentWalker",
    "DocumentRow",
    "DocumentTreePrinter",
    "TABLE_HEADERS",
    "OutputSink",
    "ConsoleOutput",
]
