"""Configuration system for DocTreeLib.

This module defines the node type names and repository conventions that the
walker, printer and service rely on. Defaults match a stock Neos site; every
value can be overridden per call or from the environment.
"""

import os
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Mapping, Optional


class OutputMode(Enum):
    """How a document tree is rendered."""
    TABLE = "table"     # One buffered table, emitted after the full traversal
    TEXT = "text"       # One line per node, emitted while traversing


@dataclass(frozen=True)
class NodeTypeNames:
    """Node type names the tools need to know about."""

    document: str = "Neos.Neos:Document"                     # URL addressable pages
    content: str = "Neos.Neos:Content"                       # Inline content elements
    content_collection: str = "Neos.Neos:ContentCollection"  # Containers of content
    default_page: str = "Neos.NodeTypes:Page"
    default_content: str = "Neos.Neos.NodeTypes:Text"


@dataclass(frozen=True)
class RepositoryConfig:
    """Conventions of the content repository being worked on.

    Example:
        >>> config = RepositoryConfig(home_segment="start")
        >>> config.node_types.document
        'Neos.Neos:Document'
    """

    node_types: NodeTypeNames = field(default_factory=NodeTypeNames)
    live_workspace: str = "live"
    home_segment: str = "home"          # Erased from URLs, the site root's segment
    default_collection: str = "main"
    null_literal: str = "NULL"          # Property value that clears a property

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "RepositoryConfig":
        """Build a config, overriding defaults from environment variables.

        Recognised variables:
            DOCTREE_LIVE_WORKSPACE: name of the live workspace
            DOCTREE_HOME_SEGMENT: URL segment erased from printed URLs, empty
                to keep URLs untouched
            DOCTREE_DOCUMENT_TYPE: base node type of documents

        Args:
            environ: Mapping to read from, defaults to os.environ

        Returns:
            RepositoryConfig instance
        """
        env = os.environ if environ is None else environ
        config = cls()

        if env.get("DOCTREE_LIVE_WORKSPACE"):
            config = replace(config, live_workspace=env["DOCTREE_LIVE_WORKSPACE"])
        # An empty value is meaningful here: it disables the erasure
        if "DOCTREE_HOME_SEGMENT" in env:
            config = replace(config, home_segment=env["DOCTREE_HOME_SEGMENT"])
        if env.get("DOCTREE_DOCUMENT_TYPE"):
            config = replace(
                config,
                node_types=replace(config.node_types, document=env["DOCTREE_DOCUMENT_TYPE"]),
            )
        return config
