"""Node commands: low level inspection of single nodes."""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

import click

from doctreelib.core.node import ContentNode
from doctreelib.errors import MalformedInputError

from ._context import CommandContext, pass_command_context, report_errors, workspace_option


def debug_data(node: ContentNode) -> Dict[str, Any]:
    return {
        "identifier": node.identifier(),
        "name": node.name(),
        "type": node.node_type_name(),
        "isHidden": node.is_hidden(),
        "properties": node.properties(),
    }


@click.group(name="node")
def node_group() -> None:
    """Inspect single nodes."""


@node_group.command(name="dump")
@click.option("--url", default=None, help="URL of the node, e.g. '/news'")
@click.option("--path", default=None, help="Path relative to the site node, e.g. '/news/main'")
@click.option("--identifier", default=None, help="Node identifier")
@workspace_option
@pass_command_context
@report_errors
def dump_command(obj: CommandContext, url: Optional[str], path: Optional[str],
                 identifier: Optional[str], workspace: Optional[str]) -> None:
    """Dump a node as one line of JSON."""
    service = obj.open(workspace)

    if url is not None:
        lookup = service.find_node_for_url(url)
    elif path is not None:
        lookup = service.find_node_for_path(path)
    elif identifier is not None:
        lookup = service.find_node_for_identifier(identifier)
    else:
        raise MalformedInputError("At least --url, --path or --identifier must be supplied")

    node = lookup.unwrap()
    obj.output.output_line(json.dumps(debug_data(node), default=str))
