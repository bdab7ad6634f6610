"""
Rendering functions for satisfy output.

This module handles all pretty-printing and table formatting.
Services return data, this module makes it human-readable.
"""

from rich.table import Table
from rich.console import Console
from rich import box
from typing import List, Dict, Any, Optional

console = Console()


def render_versions_table(rows: List[Dict[str, Any]], title: Optional[str] = None) -> None:
    """
    Render the versions of one remote as a table.

    Args:
        rows: Rows from BuildService.describe()
        title: Optional table title (usually the remote URL)
    """
    if not rows:
        console.print("[yellow]No versions found.[/yellow]")
        return

    table = Table(
        title=title,
        box=box.ROUNDED,
        show_header=True,
        header_style="bold magenta"
    )

    table.add_column("Version", style="cyan")
    table.add_column("Reference")
    table.add_column("Included", justify="center")
    table.add_column("Archive", style="dim")

    for row in rows:
        table.add_row(
            row['version'],
            row['reference'],
            "[green]✓[/green]" if row['included'] else "[red]✗[/red]",
            row.get('dist') or "-"
        )

    console.print(table)

    included = sum(1 for row in rows if row['included'])
    console.print(f"\n[bold]{included}[/bold] of {len(rows)} versions would be published")
