# searchscope/cli/console_output.py
"""
Prints a summary of the resolved search scope to the console (stderr).
"""
from typing import Optional, Sequence

from rich.console import Console
from rich.table import Table
import structlog

from searchscope.core.resolution import ResolvedSearchScope

log = structlog.get_logger(__name__)

def print_scope_summary(scope: ResolvedSearchScope, root_paths: Sequence[str], console: Optional[Console] = None):
    console = console or Console(stderr=True)
    log.debug("console_summary_output_requested")

    if not scope.narrowed:
        console.print(f"[cyan]No include pattern resolved; searching {len(root_paths)} workspace root(s).[/cyan]")
    else:
        table = Table(title="Include patterns resolved to search paths", title_style="cyan")
        table.add_column("Pattern", style="bold")
        table.add_column("Paths")
        for pattern, paths in scope.resolved.items():
            table.add_row(pattern, "\n".join(paths))
        console.print(table)

    if scope.remaining_includes:
        console.print(
            "[yellow]Passed to the search engine as globs:[/yellow] " + ", ".join(scope.remaining_includes)
        )
