#!/usr/bin/env python3
"""
Journal Submission CLI

Finds templates, sets up projects, and validates and packages them for submission.

Commands:
    init      - Create a project from a template
    template  - Fetch one template or search the catalog
    extract   - Turn an arXiv paper's source into a template
    validate  - Run the validation checks on a project
    prepare   - Validate, then package if the project compiles
    package   - Package a project without validating it
    checklist - Show the submission checklist
    clean     - Delete LaTeX build artifacts

Examples:\n

    submission_cli.py init my-paper --journal Nature --title "My Paper"

    submission_cli.py template --journal IEEE

    submission_cli.py extract 2301.00001

    submission_cli.py prepare my-paper --journal Nature
"""

import os
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from paperforge.contexts.submission import SubmissionRequest, create_preparator
from paperforge.contexts.submission.logger import setup_submission_logger
from paperforge.contexts.templating import AuthorInfo, ProjectMetadata
from paperforge.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))


app = typer.Typer(
    help="Prepare LaTeX manuscripts for journal submission",
    add_completion=False,
    invoke_without_command=True,
)

JournalOption = Annotated[
    Optional[str], typer.Option("--journal", "-j", help="Target journal name")
]
OutputDirOption = Annotated[
    Optional[Path], typer.Option("--output-dir", "-o", help="Parent directory for the output")
]
ProjectArgument = Annotated[Path, typer.Argument(help="Project directory")]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Echo debug logging")]


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _run(request: SubmissionRequest, verbose: bool = False) -> None:
    log_file = setup_submission_logger(
        LOGS_PATH / f"submit_{now()}", console_level="DEBUG" if verbose else "WARNING"
    )

    result = create_preparator().execute(request)

    typer.echo("")
    if result.success:
        typer.secho(f"✓ {result.message}", fg=typer.colors.GREEN, bold=True)
    else:
        typer.secho(f"✗ {result.message}", fg=typer.colors.RED, bold=True)
        for error in result.errors[:10]:
            typer.secho(f"  - {error}", fg=typer.colors.RED)
        if len(result.errors) > 10:
            typer.echo(f"  ... and {len(result.errors) - 10} more")

    for warning in result.warnings[:10]:
        typer.secho(f"  ! {warning}", fg=typer.colors.YELLOW)

    for template in result.data.get("templates", []):
        typer.echo(f"  {template['id']:<24} {template['name']}  (rating {template['rating']})")

    for item in result.data.get("checklist", []):
        mark = "✓" if item["completed"] else " "
        required = "" if item["required"] else " (optional)"
        typer.echo(f"  [{mark}] {item['title']}: {item['description']}{required}")

    for name in result.data.get("removed", []):
        typer.echo(f"  - {name}")

    typer.echo(f"  Log: {log_file}")
    typer.echo("")
    raise typer.Exit(code=0 if result.success else 1)


@app.command("init")
def init_command(
    project_name: Annotated[str, typer.Argument(help="Project (and directory) name")],
    template_id: Annotated[
        Optional[str],
        typer.Option("--template", "-t", help="Template id (overleaf:..., arxiv:..., or cached id)"),
    ] = None,
    source: Annotated[
        Optional[str],
        typer.Option("--source", "-s", help="Template source: overleaf, arxiv or local"),
    ] = None,
    journal: JournalOption = None,
    output_dir: OutputDirOption = None,
    title: Annotated[Optional[str], typer.Option(help="Paper title")] = None,
    abstract: Annotated[Optional[str], typer.Option(help="Paper abstract")] = None,
    keyword: Annotated[
        Optional[List[str]], typer.Option("--keyword", "-k", help="Keyword (repeatable)")
    ] = None,
    author: Annotated[Optional[str], typer.Option(help="Author name")] = None,
    email: Annotated[Optional[str], typer.Option(help="Author email")] = None,
    affiliation: Annotated[Optional[str], typer.Option(help="Author affiliation")] = None,
    verbose: VerboseOption = False,
):
    """
    Create a project from a template.

    Without --template, the best-rated template for --journal is used.

    Examples:\n

        $ submission_cli.py init my-paper --journal Nature

        $ submission_cli.py init my-paper -t overleaf:ieee-template --title "My Paper"
    """
    author_info = AuthorInfo(name=author, email=email, affiliation=affiliation) if author else None
    project_metadata = None
    if title or abstract or keyword:
        project_metadata = ProjectMetadata(title=title, abstract=abstract, keywords=keyword or [])

    _run(
        SubmissionRequest(
            operation="init",
            project_name=project_name,
            template_id=template_id,
            template_source=source,
            journal_name=journal,
            output_dir=output_dir,
            author_info=author_info,
            project_metadata=project_metadata,
        ),
        verbose,
    )


@app.command("template")
def template_command(
    template_id: Annotated[
        Optional[str], typer.Argument(help="Template id to fetch; omit to search")
    ] = None,
    source: Annotated[
        Optional[str],
        typer.Option("--source", "-s", help="Template source: overleaf, arxiv or local"),
    ] = None,
    journal: JournalOption = None,
    verbose: VerboseOption = False,
):
    """Fetch one template, or list templates matching --journal."""
    _run(
        SubmissionRequest(
            operation="template", template_id=template_id, template_source=source, journal_name=journal
        ),
        verbose,
    )


@app.command("extract")
def extract_command(
    arxiv_id: Annotated[str, typer.Argument(help="arXiv identifier, e.g. 2301.00001")],
    verbose: VerboseOption = False,
):
    """Extract a sanitized template from an arXiv paper and cache it."""
    _run(SubmissionRequest(operation="extract", arxiv_id=arxiv_id), verbose)


@app.command("validate")
def validate_command(
    project: ProjectArgument, journal: JournalOption = None, verbose: VerboseOption = False
):
    """Compile the project and check its structure and journal compliance."""
    _run(SubmissionRequest(operation="validate", project_path=project, journal_name=journal), verbose)


@app.command("prepare")
def prepare_command(
    project: ProjectArgument,
    journal: JournalOption = None,
    output_dir: OutputDirOption = None,
    verbose: VerboseOption = False,
):
    """Validate the project, then package it if it compiles."""
    _run(
        SubmissionRequest(
            operation="prepare", project_path=project, journal_name=journal, output_dir=output_dir
        ),
        verbose,
    )


@app.command("package")
def package_command(
    project: ProjectArgument, output_dir: OutputDirOption = None, verbose: VerboseOption = False
):
    """Copy the submittable files into a timestamped package directory."""
    _run(SubmissionRequest(operation="package", project_path=project, output_dir=output_dir), verbose)


@app.command("checklist")
def checklist_command(
    project: ProjectArgument, journal: JournalOption = None, verbose: VerboseOption = False
):
    """Show the submission checklist (journal defaults to the project's target)."""
    _run(SubmissionRequest(operation="checklist", project_path=project, journal_name=journal), verbose)


@app.command("clean")
def clean_command(project: ProjectArgument, verbose: VerboseOption = False):
    """Delete LaTeX build artifacts (.aux, .log, .bbl, ...) from the project root."""
    _run(SubmissionRequest(operation="clean", project_path=project), verbose)


if __name__ == "__main__":
    app()
