"""Command-line interface for the Svelte gettext extraction pipeline."""

import json
import click
from dataclasses import replace
from pathlib import Path
from typing import List, Optional
from rich.console import Console
from rich.table import Table
from rich.panel import Panel

from . import __version__
from .catalog.translations import build_translations
from .config import Config, config
from .logging_config import setup_logging
from .models.extraction import ExtractionUnit
from .models.fix_result import FixSummary
from .pipeline import build_catalog, fix_references
from .validation.placeholder_validator import PlaceholderValidator

console = Console()


def _load_config(**overrides) -> Config:
    """Apply command-line overrides and validate."""
    cfg = replace(config, **{k: v for k, v in overrides.items() if v is not None})
    errors = cfg.validate()
    if errors:
        console.print("[red]Configuration errors:[/red]")
        for error in errors:
            console.print(f"  - {error}")
        raise click.Abort()
    return cfg


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging verbosity (defaults to LOG_LEVEL or INFO)"
)
def cli(log_level: Optional[str]):
    """Extract gettext strings from Svelte templates."""
    setup_logging(log_level or config.log_level)


@cli.command()
@click.option(
    "--svelte-path", "-s",
    default=None,
    help="Directory containing Svelte templates"
)
@click.option(
    "--gettext-path", "-g",
    default=None,
    help="Gettext directory the POT file is written to"
)
@click.option(
    "--write-pot",
    is_flag=True,
    help="Write the extracted strings to the POT template"
)
@click.option(
    "--json", "as_json",
    is_flag=True,
    help="Print extractions as JSON instead of a table"
)
def extract(
    svelte_path: Optional[str],
    gettext_path: Optional[str],
    write_pot: bool,
    as_json: bool,
):
    """Scan Svelte templates and list the translatable strings."""
    cfg = _load_config(svelte_path=svelte_path, gettext_path=gettext_path)
    result = build_catalog(cfg, extracting=write_pot)

    if as_json:
        click.echo(json.dumps([u.to_dict() for u in result.units], indent=2, ensure_ascii=False))
        return

    console.print(f"[green]Scanned:[/green] {len(result.files)} files in {cfg.svelte_path}")
    console.print(
        f"[green]Found:[/green] {len(result.units)} strings "
        f"({result.plural_count} plural, {result.reference_count} references)"
    )

    if result.units:
        _print_units(result.units)

    if result.pot_path:
        console.print(f"[blue]Wrote:[/blue] {result.pot_path}")


@cli.command("fix-references")
@click.option(
    "--svelte-path", "-s",
    default=None,
    help="Directory containing Svelte templates"
)
@click.option(
    "--gettext-path", "-g",
    default=None,
    help="Directory containing .pot and .po files"
)
@click.option(
    "--dry-run", "-n",
    is_flag=True,
    help="Show what would be changed without making changes"
)
@click.pass_context
def fix_references_command(
    ctx: click.Context,
    svelte_path: Optional[str],
    gettext_path: Optional[str],
    dry_run: bool,
):
    """Point PO/POT references back at the original Svelte files.

    Run after the host gettext extraction, which attributes every Svelte
    string to the generated module.
    """
    cfg = _load_config(svelte_path=svelte_path, gettext_path=gettext_path)

    if dry_run:
        console.print("[yellow]Running in dry-run mode - no files will be modified[/yellow]")

    summary = fix_references(cfg, dry_run=dry_run)

    if not summary.results:
        console.print(f"[red]No .pot or .po files found in {cfg.gettext_path}[/red]")
        ctx.exit(1)

    _print_fix_summary(summary)

    if summary.failed:
        ctx.exit(1)


@cli.command()
@click.option(
    "--svelte-path", "-s",
    default=None,
    help="Directory containing Svelte templates"
)
@click.option(
    "--po", "po_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Locale .po file to read translations from"
)
@click.option(
    "--output", "-o",
    "output_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write JSON to this file instead of stdout"
)
def translations(svelte_path: Optional[str], po_path: Optional[str], output_path: Optional[str]):
    """Build the JSON translation table for the browser runtime."""
    cfg = _load_config(svelte_path=svelte_path)
    result = build_catalog(cfg)

    try:
        table = build_translations(result.units, po_path=po_path)
    except (OSError, ValueError) as e:
        console.print(f"[red]Cannot read {po_path}:[/red] {e}")
        raise click.Abort()

    payload = json.dumps(table, indent=2, ensure_ascii=False, sort_keys=True)

    if output_path:
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(payload + "\n", encoding="utf-8")
        console.print(f"[green]Wrote {len(table)} translations to {path}[/green]")
    else:
        click.echo(payload)


@cli.command()
@click.option(
    "--svelte-path", "-s",
    default=None,
    help="Directory containing Svelte templates"
)
@click.pass_context
def check(ctx: click.Context, svelte_path: Optional[str]):
    """Check that plural forms keep the singular's placeholders."""
    cfg = _load_config(svelte_path=svelte_path)
    result = build_catalog(cfg)
    validator = PlaceholderValidator()

    table = Table(show_header=True, title="Placeholder issues")
    table.add_column("String", max_width=40)
    table.add_column("Issue", max_width=50)
    table.add_column("Locations", style="dim", max_width=40)

    critical = 0
    for unit in result.units:
        if not unit.is_plural:
            continue
        is_valid, issues = validator.validate_plural(unit.msgid, unit.plural)
        if not is_valid:
            critical += 1
        for issue in issues:
            color = "red" if issue.severity == "critical" else "yellow"
            table.add_row(
                unit.msgid[:40],
                f"[{color}]{issue.message}[/{color}]",
                " ".join(str(loc) for loc in unit.locations[:3]),
            )

    if table.row_count:
        console.print(table)
    else:
        console.print("[green]All plural forms look good![/green]")

    if critical:
        ctx.exit(1)


def _print_units(units: List[ExtractionUnit]):
    """Print a table of extracted strings."""
    table = Table(show_header=True)
    table.add_column("Msgid", max_width=40)
    table.add_column("Type", style="cyan")
    table.add_column("Plural", max_width=30)
    table.add_column("References", justify="right")

    for unit in units:
        table.add_row(
            unit.msgid[:40],
            unit.kind.value,
            (unit.plural or "")[:30],
            str(len(unit.locations)),
        )

    console.print(table)


def _print_fix_summary(summary: FixSummary):
    """Print per-file results and totals."""
    action = "Would update" if summary.dry_run else "Updated"
    for result in summary.results:
        if not result.success:
            console.print(f"  [red]Failed[/red] {result.path}: {result.error}")
        elif result.replacements:
            console.print(f"  {action} {result.path} ({result.replacements} references)")

    verb = "would have fixed" if summary.dry_run else "fixed"
    panel_content = (
        f"[bold]Files processed:[/bold] {len(summary.results)}\n"
        f"[green]Succeeded:[/green] {len(summary.succeeded)}\n"
        f"[red]Failed:[/red] {len(summary.failed)}\n"
        f"\n"
        f"[dim]{verb.capitalize()} {summary.total_replacements} references "
        f"in {summary.files_modified} files[/dim]"
    )

    console.print(Panel(panel_content, title="Reference Fixing"))


if __name__ == "__main__":
    cli()
