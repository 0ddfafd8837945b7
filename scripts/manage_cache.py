#!/usr/bin/env python3
"""
Command-line interface for managing the template cache.

The template cache (TEMPLATE_CACHE_PATH, default .template-cache/) holds one
JSON file per resolved template.

Commands:
    list  - List cached templates
    sweep - Evict templates older than the retention window and reset the catalog
    clear - Evict every cached template
"""

import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from paperforge.contexts.templating import (
    PaperSourceExtractor,
    SimulatedPaperRepository,
    SimulatedTemplateCatalog,
    TemplateCache,
    TemplateResolver,
)
from paperforge.contexts.templating.logger import setup_templating_logger
from paperforge.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

app = typer.Typer(
    add_completion=False,
    help="Manage the template cache",
    invoke_without_command=True,
)

CacheDirOption = Annotated[
    Optional[Path],
    typer.Option("--cache-dir", "-c", help="Cache directory (default: TEMPLATE_CACHE_PATH)"),
]


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _resolver(cache_dir: Optional[Path]) -> TemplateResolver:
    return TemplateResolver(
        catalog=SimulatedTemplateCatalog(),
        extractor=PaperSourceExtractor(SimulatedPaperRepository()),
        cache=TemplateCache(cache_dir),
    )


@app.command("list")
def list_command(cache_dir: CacheDirOption = None):
    """List cached templates, most recently updated first."""
    templates = sorted(
        _resolver(cache_dir).list_cached(), key=lambda t: t.last_updated, reverse=True
    )
    if not templates:
        typer.echo("Template cache is empty")
        return

    typer.secho(f"\n{len(templates)} cached templates\n", bold=True)
    for template in templates:
        typer.echo(
            f"  {template.id:<28} {template.source.value:<16} "
            f"{template.last_updated:%Y-%m-%d}  {template.name}"
        )
    typer.echo("")


@app.command("sweep")
def sweep_command(cache_dir: CacheDirOption = None):
    """Evict templates whose last update is older than the retention window."""
    resolver = _resolver(cache_dir)
    log_file = setup_templating_logger(LOGS_PATH / f"cache_{now()}", resolver.cache.cache_dir)

    evicted = resolver.refresh_cache()
    typer.secho(f"✓ Evicted {len(evicted)} expired templates", fg=typer.colors.GREEN)
    for template_id in evicted:
        typer.echo(f"  - {template_id}")
    typer.echo(f"  Log: {log_file}")


@app.command("clear")
def clear_command(
    cache_dir: CacheDirOption = None,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
):
    """Evict every cached template."""
    cache = TemplateCache(cache_dir)
    if not yes and not typer.confirm(f"Remove all {len(cache)} templates from {cache.cache_dir}?"):
        raise typer.Exit(code=1)

    cleared = cache.clear()
    typer.secho(f"✓ Removed {len(cleared)} templates", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
