"""Page commands: list, create, remove and publish documents.

These commands work through the high level node API rather than touching
the stored data directly, and they default to the live workspace. Use a
user workspace to review changes before publishing them.
"""

from __future__ import annotations

import logging
from typing import Optional

import click

from doctreelib.core.naming import render_valid_node_name
from doctreelib.core.printer import URI_PATH_SEGMENT
from doctreelib.errors import MalformedInputError

from ._context import CommandContext, pass_command_context, report_errors, workspace_option

logger = logging.getLogger(__name__)


@click.group(name="page")
def page_group() -> None:
    """Manage document nodes (pages)."""


@page_group.command(name="info")
@workspace_option
@pass_command_context
@report_errors
def info_command(obj: CommandContext, workspace: Optional[str]) -> None:
    """Show the current configuration of the working environment."""
    service = obj.open(workspace)
    obj.output.output_table(
        [
            ["Current Site Name", service.current_site.name],
            ["Workspace Name", service.workspace_name],
            ["Site node name", service.current_site.node_name],
        ],
        ["Key", "Value"],
    )


@page_group.command(name="list")
@click.option("--depth", type=int, default=1, show_default=True, help="Maximum depth to list")
@click.option("--path", default="", help="Start path, e.g. /news (without the /sites/<site> prefix)")
@click.option("--text", "as_text", is_flag=True, help="Print one line per document instead of a table")
@workspace_option
@pass_command_context
@report_errors
def list_command(obj: CommandContext, depth: int, path: str, as_text: bool,
                 workspace: Optional[str]) -> None:
    """List all documents, optionally below a path."""
    service = obj.open(workspace)
    root = service.get_node_for_path(path)
    printer = service.document_tree_printer(root, depth)
    printer.print_tree(obj.output, as_table=not as_text)


@page_group.command(name="remove")
@click.option("--path", default="", help="Start path, e.g. /news (without the /sites/<site> prefix)")
@click.option("--url", default="", help="Use the URL instead of a path, e.g. /news")
@click.option("--limit", type=int, default=0, show_default=True,
              help="Maximum number of documents to remove, 0 for all")
@workspace_option
@pass_command_context
@report_errors
def remove_command(obj: CommandContext, path: str, url: str, limit: int,
                   workspace: Optional[str]) -> None:
    """Remove documents, leaves first.

    Exits with 0 only if at least one document was removed, else 1. Useful
    for shell while loops.
    """
    service = obj.open(workspace, modify=True)
    root = service.get_node_for_url(url) if url else service.get_node_for_path(path)

    nodes_to_delete = service.walk_documents(root, limit)
    labels = [str(node) for node in nodes_to_delete]
    for node in nodes_to_delete:
        service.store.remove_node(node)
    obj.save()
    logger.info("Removed %d document(s) below %s", len(nodes_to_delete), root.path())

    obj.output.output_table([[label] for label in labels], ["Deleted Pages"])
    click.get_current_context().exit(0 if nodes_to_delete else 1)


@page_group.command(name="publish")
@workspace_option
@pass_command_context
@report_errors
def publish_command(obj: CommandContext, workspace: Optional[str]) -> None:
    """Publish all pending changes in the workspace."""
    service = obj.open(workspace, modify=True)
    service.publish()
    obj.save()


@page_group.command(name="resolve-url")
@click.argument("url")
@workspace_option
@pass_command_context
@report_errors
def resolve_url_command(obj: CommandContext, url: str, workspace: Optional[str]) -> None:
    """Resolve a URL to the node path of its document."""
    service = obj.open(workspace)
    document = service.get_node_for_path("")
    obj.output.output_line("%s", [service.get_node_path_for_url(document, url)])


@page_group.command(name="create")
@click.argument("parent_url")
@click.argument("name")
@click.option("--type", "type_name", default=None,
              help="Node type, defaults to Neos.NodeTypes:Page")
@click.option("--properties", default=None,
              help='Node properties as JSON, e.g. \'{"title":"My Fancy Title"}\'')
@click.option("--overwrite-existing", is_flag=True,
              help="Update an existing node with that name instead of creating a new one")
@workspace_option
@pass_command_context
@report_errors
def create_command(obj: CommandContext, parent_url: str, name: str, type_name: Optional[str],
                   properties: Optional[str], overwrite_existing: bool,
                   workspace: Optional[str]) -> None:
    """Create a new page below PARENT_URL; NAME is also used as URL segment."""
    service = obj.open(workspace, modify=True)
    if not name:
        raise MalformedInputError("A page name is required")
    node_type = service.get_node_type(type_name or obj.config.node_types.default_page)
    parent = service.get_node_for_url(parent_url)
    store = service.store

    # Nodes are stored under the normalized name
    existing = store.find_named_child(parent, render_valid_node_name(name))
    if overwrite_existing and existing is not None:
        node = existing
        obj.output.output_line("%s already exists, updating properties... .", [node])
    else:
        node = store.create_node(parent, service.generate_unique_node_name(parent, name), node_type)
        obj.output.output_line("%s created.", [node])

    if properties:
        service.set_node_properties(node, properties)
    if store.get_property(node, URI_PATH_SEGMENT) is None:
        store.set_property(node, URI_PATH_SEGMENT, node.name())
    obj.save()
