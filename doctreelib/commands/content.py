"""Content commands: list, create and update content elements."""

from __future__ import annotations

from typing import Optional

import click

from doctreelib.core.naming import render_valid_node_name
from doctreelib.errors import NodeNotFoundError, NodeTypeError

from ._context import CommandContext, pass_command_context, report_errors, workspace_option


@click.group(name="content")
def content_group() -> None:
    """Manage content nodes inside pages."""


@content_group.command(name="list")
@click.argument("url")
@click.option("--collection", default=None, help="Collection node name, defaults to 'main'")
@workspace_option
@pass_command_context
@report_errors
def list_command(obj: CommandContext, url: str, collection: Optional[str],
                 workspace: Optional[str]) -> None:
    """List the content of the page at URL."""
    service = obj.open(workspace)
    collection = collection or obj.config.default_collection
    page = service.get_node_for_url(url)
    collection_node = service.store.find_named_child(page, collection)
    if collection_node is None:
        raise NodeNotFoundError(f'Page has no collection node named "{collection}"')

    for child in service.store.get_children(collection_node):
        obj.output.output_line("%s", [child])


@content_group.command(name="create")
@click.argument("url")
@click.option("--properties", default=None,
              help='Node properties as JSON, e.g. \'{"myAttribute":"My Fancy Value"}\'')
@click.option("--type", "type_name", default=None,
              help="Node type, defaults to Neos.Neos.NodeTypes:Text")
@click.option("--collection", default=None, help="Collection name, defaults to 'main'")
@click.option("--name", default=None, help="Node name, a random name if empty")
@click.option("--component-path", default=None,
              help="Path of nested components inside the collection, e.g. 'grid/column0'")
@click.option("--overwrite-existing", is_flag=True,
              help="Update an existing node with that name instead of creating a new one")
@workspace_option
@pass_command_context
@report_errors
def create_command(obj: CommandContext, url: str, properties: Optional[str],
                   type_name: Optional[str], collection: Optional[str], name: Optional[str],
                   component_path: Optional[str], overwrite_existing: bool,
                   workspace: Optional[str]) -> None:
    """Create a new content element on the page at URL."""
    service = obj.open(workspace, modify=True)
    store = service.store
    node_types = obj.config.node_types
    collection = collection or obj.config.default_collection

    node_type = service.get_node_type(type_name or node_types.default_content)
    page = service.get_node_for_url(url)

    collection_node = store.find_named_child(page, collection)
    if collection_node is None:
        obj.output.output_line("Could not find collection '%s', creating... .", [collection])
        collection_node = store.create_node(
            page, collection, service.get_node_type(node_types.content_collection))

    # Follow the nested component path, creating missing component nodes
    segment_node = collection_node
    if component_path:
        for segment in component_path.strip("/").split("/"):
            next_node = store.find_named_child(segment_node, segment)
            if next_node is None:
                next_node = store.create_node(segment_node, segment)
            segment_node = next_node

    valid_name = render_valid_node_name(name) if name else ""
    existing = store.find_named_child(segment_node, valid_name) if valid_name else None
    if overwrite_existing and existing is not None:
        content_node = existing
        obj.output.output_line("%s already exists, updating properties... .", [content_node])
    else:
        content_node = store.create_node(
            segment_node, service.generate_unique_node_name(segment_node, name), node_type)
        obj.output.output_line("%s created.", [content_node])

    if properties:
        service.set_node_properties(content_node, properties)
    obj.save()


@content_group.command(name="update")
@click.argument("identifier")
@click.option("--properties", default=None,
              help='Node properties as JSON, e.g. \'{"title":"My Fancy Title"}\'')
@click.option("--name", default=None, help="New node name")
@click.option("--hide/--show", "hide", default=None, help="Change the hidden state")
@workspace_option
@pass_command_context
@report_errors
def update_command(obj: CommandContext, identifier: str, properties: Optional[str],
                   name: Optional[str], hide: Optional[bool], workspace: Optional[str]) -> None:
    """Update properties, name and hidden state of a content node."""
    service = obj.open(workspace, modify=True)
    store = service.store

    lookup = service.find_node_for_identifier(identifier)
    if not lookup.found:
        raise NodeNotFoundError("Unable to find node.")
    node = lookup.node

    if not service.is_content(node):
        raise NodeTypeError("The found node is not a content element.")

    if properties is not None:
        service.set_node_properties(node, properties)
        obj.output.output_line("Updated properties.")

    if name:
        parent = store.get_parent(node)
        node_name = service.generate_unique_node_name(parent, name)
        store.set_name(node, node_name)
        obj.output.output_line('Updated node name: "%s"', [node_name])

    if hide is not None:
        store.set_hidden(node, hide)
        obj.output.output_line("Hidden state set to %s.", ["true" if hide else "false"])
    obj.save()
