"""Document tree printer for DocTreeLib.

Renders a depth bounded, parent-before-children view of the document tree,
either as one table or as a stream of text lines. For every visited node it
derives the public URL from the chain of ``uriPathSegment`` properties and a
path label relative to the printed root.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterator, List, Optional, Sequence, Tuple

from .node import ContentNode
from .output import OutputSink
from .store import NodeStore
from ..config import NodeTypeNames, OutputMode
from ..errors import PropertyAccessError, require_non_negative

logger = logging.getLogger(__name__)

TABLE_HEADERS = ("URL path", "Page Title", "Node Type", "Neos Node Path")
LINE_FORMAT = '%s "%s" {%s} [%s]'

URI_PATH_SEGMENT = "uriPathSegment"
TITLE = "title"


@dataclass(frozen=True)
class DocumentRow:
    """One printed document."""
    url: str
    title: str
    node_type: str
    path: str
    depth: int = 0

    def as_tuple(self) -> Tuple[str, str, str, str]:
        """Row cells in TABLE_HEADERS order."""
        return (self.url, self.title, self.node_type, self.path)


class DocumentTreePrinter:
    """Pre-order, depth bounded printer for document trees.

    A node at depth ``d`` is always printed; its document children are only
    visited while ``d < max_depth``. A max_depth of 0 prints the root alone.

    Example:
        >>> printer = DocumentTreePrinter(store, site_root, max_depth=2)
        >>> printer.print_tree(ConsoleOutput())
    """

    def __init__(self,
                 store: NodeStore,
                 root: ContentNode,
                 max_depth: int = 0,
                 document_type: str = NodeTypeNames.document,
                 home_segment: str = "home"):
        """Initialize printer.

        Args:
            store: NodeStore for navigating the tree
            root: Node to print from, its path prefix is trimmed from labels
            max_depth: Inclusive depth bound, 0 = only the root
            document_type: Base node type of the nodes to print
            home_segment: Text erased from every printed URL

        Raises:
            MalformedInputError: If max_depth is negative
        """
        self.store = store
        self.root = root
        self.max_depth = require_non_negative(max_depth, "max_depth")
        self.document_type = document_type
        self.home_segment = home_segment

    def print_tree(self, output: OutputSink, as_table: bool = True) -> None:
        """Print the tree to an output sink.

        In table mode all rows are built first and emitted as a single table,
        so a failing node means no output at all. In text mode each node is
        written as soon as it is visited; lines written before a failure stay
        written.

        Args:
            output: Sink receiving the table or lines
            as_table: Table mode if True, text mode otherwise
        """
        if as_table:
            rows = self.build_rows()
            output.output_table([row.as_tuple() for row in rows], list(TABLE_HEADERS))
        else:
            self._visit(self.root, 0, [],
                        lambda row: output.output_formatted(LINE_FORMAT, row.as_tuple()))

    def render(self, output: OutputSink, mode: OutputMode = OutputMode.TABLE) -> None:
        """Print the tree using an OutputMode instead of a flag."""
        self.print_tree(output, as_table=mode is OutputMode.TABLE)

    def build_rows(self) -> List[DocumentRow]:
        """Traverse the tree and return one row per visited node, pre-order."""
        rows: List[DocumentRow] = []
        self._visit(self.root, 0, [], rows.append)
        logger.debug("Built %d row(s) below %s (max_depth=%d)",
                     len(rows), self.root.path(), self.max_depth)
        return rows

    def iter_rows(self) -> Iterator[DocumentRow]:
        """Lazily yield rows; traversal advances as the iterator is consumed."""
        yield from self._iter(self.root, 0, [])

    def _visit(self, document: ContentNode, depth: int, url_prefix: Sequence[str],
               emit: Callable[[DocumentRow], Any]) -> None:
        for row in self._iter(document, depth, url_prefix):
            emit(row)

    def _iter(self, document: ContentNode, depth: int,
              url_prefix: Sequence[str]) -> Iterator[DocumentRow]:
        segments = [*url_prefix, self._segment(document)]
        yield DocumentRow(
            url=self._url(segments),
            title=self._title(document),
            node_type=document.node_type_name(),
            path=self._trim_path(self.store.path(document)),
            depth=depth,
        )

        # Bail out once the configured depth is reached
        if depth < self.max_depth:
            for child in self.store.children_of_type(document, self.document_type):
                yield from self._iter(child, depth + 1, segments)

    def _segment(self, document: ContentNode) -> str:
        segment = self.store.get_property(document, URI_PATH_SEGMENT)
        if segment is None:
            raise PropertyAccessError(
                f'Document "{self.store.path(document)}" has no {URI_PATH_SEGMENT} property')
        if not isinstance(segment, str):
            raise PropertyAccessError(
                f'{URI_PATH_SEGMENT} of "{self.store.path(document)}" is not a string: {segment!r}')
        return segment

    def _title(self, document: ContentNode) -> str:
        title: Optional[Any] = self.store.get_property(document, TITLE)
        return "" if title is None else str(title)

    def _url(self, segments: Sequence[str]) -> str:
        url = "/".join(segments)
        if self.home_segment:
            url = url.replace(self.home_segment, "")
        return url

    def _trim_path(self, path: str) -> str:
        return path.replace(self.store.path(self.root), "")
