"""Carapace CLI — Typer application with chunk, classify, rules, and init commands."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from carapace import __version__

app = typer.Typer(
    name="carapace",
    help="Split diffs into token-bounded chunks for code review.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _resolve_repo_root() -> Path:
    """Find the git repo root, exit 2 on failure."""
    from carapace.git.adapter import GitError, get_repo_root

    try:
        return get_repo_root()
    except GitError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


def _config_root() -> Path:
    """Repo root when inside a repository, else the working directory."""
    from carapace.git.adapter import GitError, get_repo_root

    try:
        return get_repo_root()
    except GitError:
        return Path.cwd()


def _load_config(config: Optional[str]):
    from carapace.config.loader import ConfigError, load_config

    try:
        return load_config(_config_root(), config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc


def _build_registry(cfg):
    from carapace.config.loader import ConfigError
    from carapace.rules.registry import build_registry

    try:
        return build_registry(cfg, _config_root())
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc


def _read_diff(diff: Optional[str], from_ref: Optional[str], to_ref: Optional[str]) -> str:
    """Diff text from a file, stdin ('-'), or git."""
    from carapace.git.adapter import GitError, get_range_diff, get_staged_diff

    if diff == "-":
        return sys.stdin.read()
    if diff is not None:
        path = Path(diff)
        if not path.is_file():
            console.print(f"[bold red]Error:[/bold red] diff file not found: {diff}")
            raise typer.Exit(code=2)
        return path.read_text(encoding="utf-8", errors="replace")

    repo_root = _resolve_repo_root()
    try:
        if from_ref:
            return get_range_diff(repo_root, from_ref, to_ref or "HEAD")
        return get_staged_diff(repo_root)
    except GitError as exc:
        console.print(f"[bold red]Git error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


# ── chunk ─────────────────────────────────────────────────────────────────────


@app.command()
def chunk(
    diff: Optional[str] = typer.Argument(
        None, help="Diff file to read, '-' for stdin. Defaults to staged changes."
    ),
    max_tokens: Optional[int] = typer.Option(None, "--max-tokens", "-m", help="Token budget per chunk"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .carapace.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write JSON report to file"),
    include_diff: bool = typer.Option(False, "--include-diff", help="Embed each chunk's diff text in JSON"),
    from_ref: Optional[str] = typer.Option(None, "--from", help="Base commit"),
    to_ref: Optional[str] = typer.Option(None, "--to", help="Head commit (default HEAD)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug logging"),
    dry_run: bool = typer.Option(False, "--dry-run", help="List parsed files without chunking"),
) -> None:
    """Parse a diff and split it into review chunks."""
    from carapace.chunking import InvalidBudget
    from carapace.git.diff_parser import MalformedDiff
    from carapace.intake import prepare
    from carapace.log import configure_logging
    from carapace.output import json_report, terminal

    cfg = _load_config(config)
    level = "debug" if debug else "info" if verbose else cfg.logging.level
    configure_logging(level, json=cfg.logging.json)

    # --- CLI overrides ---
    if format:
        if format not in ("terminal", "json"):
            console.print(f"[bold red]Invalid format:[/bold red] {format}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]

    diff_text = _read_diff(diff, from_ref, to_ref)

    if dry_run:
        from carapace.classify import classify_file
        from carapace.git.diff_parser import parse_diff

        try:
            files = parse_diff(diff_text)
        except MalformedDiff as exc:
            console.print(f"[bold red]Malformed diff:[/bold red] {exc}")
            raise typer.Exit(code=2) from exc
        console.print(f"[bold]Dry run — {len(files)} files would be chunked:[/bold]")
        for f in files:
            c = classify_file(f.path)
            console.print(f"  {f.path}  [dim]{f.status.value}, {c.language.value}[/dim]")
        raise typer.Exit(code=0)

    registry = _build_registry(cfg)

    try:
        result = prepare(diff_text, cfg, registry, max_chunk_tokens=max_tokens)
    except MalformedDiff as exc:
        console.print(f"[bold red]Malformed diff:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc
    except InvalidBudget as exc:
        console.print(f"[bold red]Invalid budget:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    # --- Output ---
    report_text: Optional[str] = None

    if cfg.output.format == "terminal":
        terminal.render(result, show_summary=cfg.output.show_summary)
    else:
        report_text = json_report.render(result, include_diff=include_diff)
        print(report_text)

    if output:
        if report_text is None:
            report_text = json_report.render(result, include_diff=include_diff)
        Path(output).write_text(report_text, encoding="utf-8")
        if verbose:
            console.print(f"[dim]Report written to {output}[/dim]")


# ── classify ──────────────────────────────────────────────────────────────────


@app.command()
def classify(
    paths: List[str] = typer.Argument(..., help="File paths to classify"),
    json_output: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
) -> None:
    """Show language and chain classification for file paths."""
    import json

    from carapace.classify import classify_files

    results = classify_files(paths)

    if json_output:
        print(json.dumps({p: c.to_dict() for p, c in results.items()}, indent=2))
        return

    table = Table(border_style="dim")
    table.add_column("Path", style="magenta")
    table.add_column("Language", style="cyan")
    table.add_column("Chain")
    table.add_column("Smart contract", justify="center")
    for path, c in results.items():
        table.add_row(
            path,
            c.language.value,
            c.chain or "-",
            "yes" if c.is_smart_contract else "no",
        )
    console.print(table)


# ── rules ─────────────────────────────────────────────────────────────────────


@app.command()
def rules(
    chain: Optional[str] = typer.Option(None, "--chain", help="Include rules for this chain"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .carapace.toml"),
) -> None:
    """List the rules selected by the current configuration."""
    cfg = _load_config(config)
    registry = _build_registry(cfg)
    selected = registry.rules_for_chains([chain])

    table = Table(title=f"Rules ({', '.join(registry.rulesets)})", border_style="dim")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Ruleset")
    table.add_column("Severity")
    table.add_column("Chain")
    for rule in selected:
        table.add_row(rule.id, rule.name, rule.ruleset, rule.severity, rule.chain or "-")
    console.print(table)
    console.print(f"[dim]{len(selected)} rule(s)[/dim]")


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .carapace.toml in the repo root."""
    from carapace.config.defaults import DEFAULT_TOML
    from carapace.config.loader import CONFIG_FILENAME

    repo_root = _resolve_repo_root()
    config_path = repo_root / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"carapace {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """Carapace — prepare diffs for bounded-context code review."""
