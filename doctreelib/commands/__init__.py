"""Command line interface for DocTreeLib.

Usage:
    doctree init --site-name "Demo Site" --site-node-name demo
    doctree page list --depth 2
    doctree page create /news my-news --properties '{"title": "My News"}'
    doctree content create /news/my-news --properties '{"text": "Hello"}'
    doctree node dump --url /news/my-news
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple

import click

from doctreelib import __version__
from doctreelib.adapters.memory import MemoryNode, MemoryNodeStore
from doctreelib.config import RepositoryConfig
from doctreelib.core.store import SiteInfo
from doctreelib.errors import MalformedInputError

from ._context import (
    DEFAULT_REPOSITORY,
    CommandContext,
    configure_logging,
    pass_command_context,
    report_errors,
)
from .content import content_group
from .node import node_group
from .page import page_group

__all__ = ["main", "CommandContext"]


@click.group(name="doctree")
@click.option("--repository", "-r", type=click.Path(dir_okay=False, path_type=Path),
              default=DEFAULT_REPOSITORY, show_default=True, envvar="DOCTREE_REPOSITORY",
              help="Repository JSON file")
@click.option("--workspace", default=None, envvar="DOCTREE_WORKSPACE",
              help="Default workspace, e.g. 'user-admin' (defaults to 'live')")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.version_option(__version__, prog_name="doctree")
@click.pass_context
def main(ctx: click.Context, repository: Path, workspace: Optional[str], verbose: bool) -> None:
    """Scripted creation, listing, update and removal of content nodes."""
    configure_logging(verbose)
    ctx.obj = CommandContext(repository=repository, workspace=workspace,
                             config=RepositoryConfig.from_env())


@main.command(name="init")
@click.option("--site-name", required=True, help="Human readable site name")
@click.option("--site-node-name", required=True, help="Node name of the site, e.g. 'demo'")
@click.option("--with-workspace", "extra_workspaces", multiple=True,
              help="Additional workspace to create, e.g. 'user-admin' (repeatable)")
@click.option("--force", is_flag=True, help="Overwrite an existing repository file")
@pass_command_context
@report_errors
def init_command(obj: CommandContext, site_name: str, site_node_name: str,
                 extra_workspaces: Tuple[str, ...], force: bool) -> None:
    """Create a new repository file holding an empty site."""
    if obj.repository.exists() and not force:
        raise MalformedInputError(f'"{obj.repository}" already exists, use --force to replace it')

    site = SiteInfo(name=site_name, node_name=site_node_name)
    live_tree = MemoryNodeStore.create_site_tree(site)
    workspaces = {obj.config.live_workspace: live_tree}
    for name in extra_workspaces:
        workspaces[name] = MemoryNode.from_dict(live_tree.to_dict())

    store = MemoryNodeStore(site, workspaces=workspaces, workspace=obj.config.live_workspace)
    store.save(obj.repository)
    obj.output.output_line("Created %s with workspaces: %s",
                           [obj.repository, ", ".join(store.workspace_names())])


main.add_command(page_group)
main.add_command(content_group)
main.add_command(node_group)
