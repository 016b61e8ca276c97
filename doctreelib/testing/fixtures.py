"""Test fixtures for DocTreeLib consumers.

These helpers build small, predictable content repositories and capture
output, so test suites do not need a real CMS or a terminal.
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..adapters.memory import MemoryNode, MemoryNodeStore
from ..core.output import OutputSink, format_message
from ..core.store import SiteInfo

PAGE = "Neos.NodeTypes:Page"
TEXT = "Neos.Neos.NodeTypes:Text"
COLLECTION = "Neos.Neos:ContentCollection"
COLLECTION_NAME = "main"


class BufferedOutput(OutputSink):
    """OutputSink that records everything instead of printing it.

    Example:
        output = BufferedOutput()
        printer.print_tree(output, as_table=False)
        assert len(output.lines) == 1
    """

    def __init__(self):
        self.lines: List[str] = []
        self.tables: List[Tuple[List[Tuple[Any, ...]], List[str]]] = []

    def output_line(self, fmt: str = "", args: Sequence[Any] = ()) -> None:
        self.lines.append(format_message(fmt, args))

    def output_table(self, rows, headers) -> None:
        self.tables.append(([tuple(row) for row in rows], list(headers)))

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


def page(name: str, title: Optional[str] = None, segment: Optional[str] = None,
         children: Sequence[MemoryNode] = (), node_type: str = PAGE,
         identifier: Optional[str] = None, **properties) -> MemoryNode:
    """Build a document node; segment and title default to the name."""
    props: Dict[str, Any] = {
        "title": title if title is not None else name.capitalize(),
        "uriPathSegment": segment if segment is not None else name,
    }
    props.update(properties)
    node = MemoryNode(name, node_type=node_type, properties=props, identifier=identifier)
    for child in children:
        node.add_child(child)
    return node


def content(name: str, node_type: str = TEXT, identifier: Optional[str] = None,
            children: Sequence[MemoryNode] = (), **properties) -> MemoryNode:
    """Build a content (non-document) node."""
    node = MemoryNode(name, node_type=node_type, properties=properties, identifier=identifier)
    for child in children:
        node.add_child(child)
    return node


def build_store(site_page: MemoryNode, site_name: str = "Demo Site",
                workspaces: Sequence[str] = ("live",)) -> MemoryNodeStore:
    """Mount ``site_page`` at ``/sites/<its name>`` in every listed workspace."""
    site = SiteInfo(name=site_name, node_name=site_page.name())
    roots = {}
    for workspace in workspaces:
        root = MemoryNode("")
        sites = root.add_child(MemoryNode("sites"))
        sites.add_child(MemoryNode.from_dict(site_page.to_dict()))
        roots[workspace] = root
    return MemoryNodeStore(site, workspaces=roots, workspace=workspaces[0])


def build_sample_site(workspaces: Sequence[str] = ("live", "user-admin")) -> MemoryNodeStore:
    """Create the sample site used throughout the test suite.

    Structure::

        /sites/demo                  home      (Page)
        ├── news                     news      (Page)
        │   ├── main                           (ContentCollection)
        │   │   └── text-1                     (Text)
        │   ├── item1                item1     (Page)
        │   └── item2                item2     (Page)
        ├── about                    about     (Page)
        │   └── team                 team      (Page)
        └── homepage-archive         homearch  (Page)
    """
    site = page("demo", title="Demo Site", segment="home", identifier="site-demo", children=[
        page("news", identifier="page-news", children=[
            content(COLLECTION_NAME, node_type=COLLECTION, identifier="collection-news", children=[
                content("text-1", identifier="text-1", text="Hello"),
            ]),
            page("item1", title="First item", identifier="page-item1"),
            page("item2", title="Second item", identifier="page-item2"),
        ]),
        page("about", identifier="page-about", children=[
            page("team", identifier="page-team"),
        ]),
        page("homepage-archive", title="Archive", segment="homearch", identifier="page-archive"),
    ])
    return build_store(site, workspaces=workspaces)

