"""Output sinks for DocTreeLib.

Printers and commands never write to stdout directly. They hand formatted
lines and tables to an OutputSink, which makes the rendering swappable
(rich console, plain buffer in tests).
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table


def format_message(fmt: str, args: Sequence[Any] = ()) -> str:
    """Apply printf style ``%s`` arguments, leaving fmt alone without args."""
    if not args:
        return fmt
    return fmt % tuple(args)


class OutputSink(ABC):
    """Destination for command and printer output."""

    @abstractmethod
    def output_line(self, fmt: str = "", args: Sequence[Any] = ()) -> None:
        """Write one line, formatted with printf style arguments."""
        pass

    @abstractmethod
    def output_table(self, rows: List[Sequence[Any]], headers: Sequence[str]) -> None:
        """Write a table with the given column headers."""
        pass

    def output_formatted(self, fmt: str, args: Sequence[Any] = (), indent: int = 0) -> None:
        """Write one line indented by ``indent`` spaces."""
        self.output_line(" " * indent + format_message(fmt, args))


class ConsoleOutput(OutputSink):
    """OutputSink rendering to a terminal through rich."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize with a rich console.

        Args:
            console: Console to write to, a default stdout console if None
        """
        self.console = console or Console(highlight=False, emoji=False)

    def output_line(self, fmt: str = "", args: Sequence[Any] = ()) -> None:
        # Node titles may contain [brackets]; never interpret them as markup
        self.console.print(format_message(fmt, args), markup=False, soft_wrap=True)

    def output_table(self, rows: List[Sequence[Any]], headers: Sequence[str]) -> None:
        table = Table(show_lines=False)
        for header in headers:
            table.add_column(header)
        for row in rows:
            table.add_row(*[escape(_cell(value)) for value in row])
        self.console.print(table)


def _cell(value: Any) -> str:
    if value is None:
        return ""
    return str(value)
