"""Rich terminal reporter — chunk table and summary."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from carapace.intake.models import IntakeResult


def render(result: IntakeResult, *, show_summary: bool = True) -> None:
    """Print the chunk plan to the terminal using Rich."""
    console = Console(stderr=True)

    if not result.plans:
        console.print()
        console.print("[dim]Nothing to review — the diff touches no files.[/dim]")
        if show_summary:
            _print_summary(console, result)
        return

    console.print()
    table = Table(
        title="Review Chunks",
        show_lines=True,
        title_style="bold",
        border_style="dim",
    )
    table.add_column("#", justify="right", style="green")
    table.add_column("Files", style="magenta")
    table.add_column("Hunks", justify="right")
    table.add_column("Tokens", justify="right")
    table.add_column("Languages", style="cyan")
    table.add_column("Rules", justify="right")

    for plan in result.plans:
        tokens = str(plan.chunk.estimated_tokens)
        if plan.chunk.estimated_tokens > result.max_chunk_tokens:
            tokens = f"[bold red]{tokens}[/bold red]"
        table.add_row(
            str(plan.index + 1),
            "\n".join(plan.chunk.paths),
            str(plan.chunk.hunk_count),
            tokens,
            ", ".join(plan.languages),
            str(len(plan.rule_ids)),
        )

    console.print(table)

    if show_summary:
        _print_summary(console, result)

    if result.oversized_chunks:
        console.print()
        console.print(
            f"[bold yellow]⚠️  {len(result.oversized_chunks)} chunk(s) exceed the budget: "
            "each holds one hunk or file that cannot be split.[/bold yellow]"
        )


def _print_summary(console: Console, result: IntakeResult) -> None:
    console.print()
    console.print(f"[dim]Files:[/dim]     {result.total_files}")
    console.print(f"[dim]Ignored:[/dim]   {len(result.ignored_files)}")
    console.print(f"[dim]Chunks:[/dim]    {result.total_chunks}")
    console.print(f"[dim]Tokens:[/dim]    {result.total_tokens} (budget {result.max_chunk_tokens}/chunk)")
    console.print(f"[dim]Duration:[/dim]  {result.duration_ms:.0f}ms")
