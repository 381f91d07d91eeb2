"""
Output formatter for CLI commands.

This module provides consistent formatting for CLI output,
including tables, JSON, and text formatting.
"""

from typing import Any, Dict, List, Optional, Union
import json

import click
from tabulate import tabulate
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.text import Text


class OutputFormatter:
    """
    Formatter for CLI command output.

    Rich renderables are returned when ``use_rich`` is set; plain
    strings otherwise, so the output can be piped or captured.
    """

    def __init__(self, use_rich: bool = True):
        """
        Initialize the formatter.

        Args:
            use_rich: Whether to use rich formatting
        """
        self.use_rich = use_rich
        self.console = Console() if use_rich else None

    def format_table(
        self,
        data: List[Dict[str, Any]],
        headers: Optional[List[str]] = None,
        title: Optional[str] = None
    ) -> Union[str, Table]:
        """
        Format data as a table.

        Args:
            data: List of dictionaries containing row data
            headers: Optional list of header names
            title: Optional table title

        Returns:
            Union[str, Table]: Formatted table
        """
        if not data:
            return "No data to display"

        columns = headers or list(data[0].keys())

        if self.use_rich:
            table = Table(title=title) if title else Table()
            for column in columns:
                table.add_column(column)
            for row in data:
                table.add_row(*[str(row.get(key, "")) for key in columns])
            return table

        rendered = tabulate(
            [[row.get(key, "") for key in columns] for row in data],
            headers=columns,
            tablefmt="grid"
        )
        return f"{title}\n{rendered}" if title else rendered

    def format_json(self, data: Union[Dict[str, Any], List[Any]]) -> str:
        """
        Format data as indented JSON.

        Args:
            data: Data to format

        Returns:
            str: Formatted JSON
        """
        return json.dumps(data, indent=2, default=str)

    def format_error_record(self, record: Dict[str, Any]) -> str:
        """
        Format a kernel error record for display.

        Grouped shutdown records list each failed provider first so the
        failures are readable before the full JSON.

        Args:
            record: Output of ``KernelError.to_dict()``

        Returns:
            str: Formatted record
        """
        lines = [f"[{record.get('code')}] {record.get('type')}"]
        for failure in record.get("failures") or []:
            provider = (failure.get("context") or {}).get("provider", "?")
            lines.append(f"  - {provider}: {failure.get('message')}")
        lines.append(self.format_json(record))
        return "\n".join(lines)

    def format_error(
        self,
        message: str,
        details: Optional[str] = None
    ) -> Union[str, Panel]:
        """Format error message."""
        return self._format_message("Error", message, details, "red")

    def format_success(
        self,
        message: str,
        details: Optional[str] = None
    ) -> Union[str, Panel]:
        """Format success message."""
        return self._format_message("Success", message, details, "green")

    def _format_message(
        self,
        title: str,
        message: str,
        details: Optional[str],
        color: str
    ) -> Union[str, Panel]:
        if not self.use_rich:
            return f"{title}: {message}\n{details}" if details else f"{title}: {message}"

        text = Text(message, style=f"bold {color}")
        if details:
            text.append("\n" + details, style=color)
        return Panel(text, title=title, border_style=color)

    def print(self, content: Any) -> None:
        """
        Print a string or rich renderable.

        Args:
            content: Content to print
        """
        if self.use_rich:
            self.console.print(content)
        else:
            click.echo(content)
