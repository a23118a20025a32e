"""patchmode CLI — Typer application with resolve and init commands."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from patchmode import __version__

app = typer.Typer(
    name="patchmode",
    help="Resolve the post-patch git file mode of every path in a patch.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _resolve_repo_root(cwd: Path) -> Path:
    """Find the git repo root, exit 2 on failure."""
    from patchmode.git.adapter import GitError, get_repo_root

    try:
        return get_repo_root(cwd)
    except GitError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


def _enable_debug_logging() -> None:
    """Route library debug logs to stderr through Rich."""
    from rich.logging import RichHandler

    logger = logging.getLogger("patchmode")
    logger.setLevel(logging.DEBUG)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=console, show_path=False))


def _read_patch_file(patch_file: str) -> str:
    if patch_file == "-":
        return sys.stdin.read()
    try:
        return Path(patch_file).read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        console.print(f"[bold red]Cannot read patch:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


# ── resolve ───────────────────────────────────────────────────────────────────


@app.command()
def resolve(
    patch_file: Optional[str] = typer.Argument(None, help="Patch file to read, or '-' for stdin"),
    staged: bool = typer.Option(False, "--staged", help="Use the staged changes of the repo"),
    commit: Optional[str] = typer.Option(None, "--commit", help="Use the patch of a single commit"),
    from_ref: Optional[str] = typer.Option(None, "--from", help="Base commit of a range"),
    to_ref: Optional[str] = typer.Option(None, "--to", help="Head commit of a range (default HEAD)"),
    cwd: Optional[Path] = typer.Option(None, "--cwd", help="Working directory for the filesystem fallback"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .patchmode.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json | yaml"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write report to file"),
    no_fallback: bool = typer.Option(False, "--no-fallback", help="Do not stat the working tree"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug logging"),
) -> None:
    """Print the mode each path in a patch will have once it is applied."""
    from patchmode.config.loader import ConfigError, load_config
    from patchmode.config.schema import OUTPUT_FORMATS
    from patchmode.git.adapter import GitError, get_commit_patch, get_range_diff, get_staged_diff
    from patchmode.git.mode_parser import PatchModeResolver
    from patchmode.output import json_report, terminal, yaml_report

    if debug:
        _enable_debug_logging()

    sources = [patch_file is not None, staged, commit is not None, from_ref is not None]
    if sum(sources) != 1:
        console.print(
            "[bold red]Error:[/bold red] give exactly one patch source: "
            "PATCH_FILE, --staged, --commit or --from"
        )
        raise typer.Exit(code=2)
    if to_ref and not from_ref:
        console.print("[bold red]Error:[/bold red] --to requires --from")
        raise typer.Exit(code=2)
    if any(ref is not None and not ref.strip() for ref in (commit, from_ref, to_ref)):
        console.print("[bold red]Error:[/bold red] git refs must not be empty")
        raise typer.Exit(code=2)

    work_dir = (cwd or Path.cwd()).resolve()

    # --- Load config ---
    try:
        cfg = load_config(work_dir, config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    # --- CLI overrides ---
    if format:
        if format not in OUTPUT_FORMATS:
            console.print(f"[bold red]Invalid format:[/bold red] {format}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]
    if no_fallback:
        cfg.resolve.filesystem_fallback = False

    # --- Get patch text ---
    if patch_file is not None:
        patch_text = _read_patch_file(patch_file)
    else:
        # git paths are relative to the repository root
        work_dir = _resolve_repo_root(work_dir)
        try:
            if staged:
                patch_text = get_staged_diff(work_dir)
            elif commit is not None:
                patch_text = get_commit_patch(work_dir, commit)
            else:
                patch_text = get_range_diff(work_dir, from_ref, to_ref or "HEAD")
        except GitError as exc:
            console.print(f"[bold red]Git error:[/bold red] {exc}")
            raise typer.Exit(code=2) from exc

    if verbose or debug:
        console.print(f"[dim]Working dir: {work_dir}[/dim]")
        console.print(f"[dim]Filesystem fallback: {cfg.resolve.filesystem_fallback}[/dim]")

    # --- Resolve ---
    resolver = PatchModeResolver(work_dir, filesystem_fallback=cfg.resolve.filesystem_fallback)
    entries = resolver.resolve_entries(patch_text)

    # --- Output ---
    report_text: Optional[str] = None

    if cfg.output.format == "terminal":
        terminal.render(entries, work_dir, show_summary=cfg.output.show_summary, console=console)
    elif cfg.output.format == "json":
        report_text = json_report.render(entries, work_dir)
        print(report_text)
    elif cfg.output.format == "yaml":
        report_text = yaml_report.render(entries, work_dir)
        print(report_text, end="")

    # --- Write to file ---
    if output:
        if report_text is None:
            # Terminal format still writes a machine-readable report
            report_text = json_report.render(entries, work_dir)
        Path(output).write_text(report_text, encoding="utf-8")
        if verbose:
            console.print(f"[dim]Report written to {output}[/dim]")


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init(
    cwd: Optional[Path] = typer.Option(None, "--cwd", help="Directory to write the config into"),
) -> None:
    """Generate a starter .patchmode.toml."""
    from patchmode.config.defaults import DEFAULT_TOML
    from patchmode.config.loader import CONFIG_FILENAME

    config_path = (cwd or Path.cwd()) / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"patchmode {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """patchmode — post-patch git file modes from unified diffs."""
