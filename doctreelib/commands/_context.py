"""Shared state and helpers for the doctree commands."""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from doctreelib.adapters.memory import MemoryNodeStore
from doctreelib.config import RepositoryConfig
from doctreelib.core.output import ConsoleOutput, OutputSink
from doctreelib.errors import DocTreeError, MalformedInputError
from doctreelib.service import ContentRepositoryService

logger = logging.getLogger(__name__)

DEFAULT_REPOSITORY = "content-repository.json"


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr through rich.

    Args:
        verbose: Show DEBUG records if True, only warnings otherwise
    """
    package_logger = logging.getLogger("doctreelib")
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(handler, RichHandler) for handler in package_logger.handlers):
        package_logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))


@dataclass
class CommandContext:
    """Everything a command needs, built once per invocation."""

    repository: Path
    workspace: Optional[str] = None
    config: RepositoryConfig = field(default_factory=RepositoryConfig)
    output: OutputSink = field(default_factory=ConsoleOutput)
    store: Optional[MemoryNodeStore] = None
    service: Optional[ContentRepositoryService] = None

    def open(self, workspace: Optional[str] = None,
             modify: bool = False) -> ContentRepositoryService:
        """Load the repository and set up the requested workspace.

        Args:
            workspace: Workspace name, the group option or live if None
            modify: The command changes nodes, so the store must support it

        Raises:
            MalformedInputError: If the repository file does not exist
            WorkspaceError: If the workspace does not exist
            DocTreeError: If modify is set and the store is read only
        """
        if not self.repository.exists():
            raise MalformedInputError(
                f'Repository file "{self.repository}" not found, run "doctree init" first')
        self.store = MemoryNodeStore.load(self.repository)
        if modify and not self.store.supports_modification():
            raise DocTreeError(f"{type(self.store).__name__} does not support modification")
        self.service = ContentRepositoryService(self.store, self.config)
        self.service.setup(workspace or self.workspace)
        return self.service

    def save(self) -> None:
        """Persist the repository after a successful change."""
        if self.store is None:
            return
        self.store.save(self.repository)
        logger.debug("Saved %s", self.repository)


pass_command_context = click.make_pass_decorator(CommandContext)


def report_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """Turn DocTreeError into an ``ERROR: ...`` line and exit code 1."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except DocTreeError as e:
            logger.debug("Command failed", exc_info=True)
            click.echo(f"ERROR: {e}")
            click.get_current_context().exit(1)
            return None

    return wrapper


def workspace_option(func: Callable[..., Any]) -> Callable[..., Any]:
    """Per command ``--workspace`` overriding the group level option."""
    return click.option(
        "--workspace",
        default=None,
        help="Workspace to use, e.g. 'user-admin' (defaults to the group option or 'live')",
    )(func)
