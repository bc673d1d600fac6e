"""Output formatting utilities for chestnav CLI commands."""

import json
import sys
from typing import Any, Dict, List, Sequence

from core.types import RenderStyle
from services.outline_service import Sidebar, SidebarElementKind
from services.search_service import SearchRow

PATH_SEPARATOR = " ≫ "


class OutputFormatter:
    """Handles consistent output formatting across CLI commands."""

    def __init__(self, verbose: bool = False):
        """Initialize output formatter.

        Args:
            verbose: Whether to enable verbose output
        """
        self.verbose = verbose

    def info(self, message: str) -> None:
        print(f"ℹ️  {message}")

    def success(self, message: str) -> None:
        print(f"✅ {message}")

    def warning(self, message: str) -> None:
        print(f"⚠️  {message}")

    def error(self, message: str) -> None:
        print(f"❌ {message}", file=sys.stderr)

    def verbose_info(self, message: str) -> None:
        """Print a verbose info message if verbose mode is enabled."""
        if self.verbose:
            print(f"🔍 {message}")

    def json_output(self, data: Any) -> None:
        """Print data as formatted JSON.

        Args:
            data: Data to output as JSON
        """
        print(json.dumps(data, indent=2, default=str))


def format_search_rows(rows: Sequence[SearchRow]) -> List[str]:
    """Render search rows as text lines.

    Header rows show the location and name, declaration rows are indented
    under their group, and a blank line separates groups.

    Args:
        rows: Aggregated search rows

    Returns:
        Lines to print
    """
    lines: List[str] = []
    for row in rows:
        if row.render_style == RenderStyle.ADDITIONAL_DECLARATION:
            lines.append(f"      {row.item.declaration}")
        else:
            location = PATH_SEPARATOR.join(row.location)
            lines.append(f"{location}{PATH_SEPARATOR}{row.display_name}")
            if row.render_style == RenderStyle.NAME_AND_DECLARATION:
                lines.append(f"      {row.item.declaration}")
        if row.last_item:
            lines.append("")
    return lines


def format_sidebar(sidebar: Sidebar) -> List[str]:
    """Render a sidebar as indented text lines.

    Args:
        sidebar: Sidebar to render

    Returns:
        Lines to print
    """
    if sidebar.is_empty:
        return ["This page does not have any indexed content."]

    lines: List[str] = []
    for element in sidebar.elements:
        if element.kind == SidebarElementKind.HEADER:
            lines.append(f"## {element.title}")
        elif element.kind == SidebarElementKind.SECTION_END:
            lines.append("")
        else:
            indent = "  " * (element.depth + 1)
            lines.append(f"{indent}{element.title}")
    return lines


def format_config(config: Dict[str, Any]) -> str:
    """Format a configuration dictionary for display."""
    return json.dumps(config, indent=2, default=str)
