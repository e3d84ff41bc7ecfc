"""
generatebp CLI.

Command-line interface for generating Android.bp modules from a Gradle
resolution report.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .core.config import Config, get_config
from .core.exceptions import GenerateBpError
from .core.logging import setup_logging

app = typer.Typer(
    name="generatebp",
    help="Generate Android.bp modules for Gradle-resolved Android dependencies",
    add_completion=False,
)

console = Console()

REPORT_ARGUMENT = typer.Argument(
    ...,
    help="Resolution report (JSON) exported by the Gradle build",
    exists=True,
    file_okay=True,
    dir_okay=False,
    resolve_path=True,
)
CATALOG_OPTION = typer.Option(
    None,
    "--catalog",
    "-c",
    help="Platform catalog (JSON) of modules already available in AOSP",
    exists=True,
    dir_okay=False,
    resolve_path=True,
)
NAME_OPTION = typer.Option(
    None,
    "--name",
    "-n",
    help="Module name prefix (defaults to the report's project name)",
)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        from . import __version__
        console.print(f"generatebp v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """generatebp: Gradle dependencies to Soong modules."""
    pass


def _configure(**overrides: Any) -> Config:
    """Environment configuration with explicitly passed CLI options applied."""
    updates = {key: value for key, value in overrides.items() if value is not None}
    return get_config().model_copy(update=updates)


@app.command()
def generate(
    report_path: Path = REPORT_ARGUMENT,
    project_dir: Optional[Path] = typer.Option(
        None,
        "--project-dir",
        "-p",
        help="Module directory holding Android.bp (libs/ is regenerated inside it)",
        file_okay=False,
        resolve_path=True,
    ),
    catalog: Optional[Path] = CATALOG_OPTION,
    name: Optional[str] = NAME_OPTION,
    target_sdk: Optional[int] = typer.Option(
        None, "--target-sdk", help="Target SDK for modules whose manifest has none"
    ),
    min_sdk: Optional[int] = typer.Option(
        None, "--min-sdk", help="Minimum SDK for modules whose manifest has none"
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Log skipped artifacts and dropped dependency edges",
    ),
) -> None:
    """Stage vendored artifacts into libs/ and regenerate the Android.bp modules."""
    from .orchestration import run_pipeline

    config = _configure(
        project_dir=project_dir,
        platform_catalog=catalog,
        project_name=name,
        default_target_sdk=target_sdk,
        default_min_sdk=min_sdk,
        debug=debug or None,
    )
    setup_logging(config)

    try:
        result = run_pipeline(report_path, config)
        result.raise_for_failure()
    except GenerateBpError as e:
        console.print("\n[bold red]✗ Generation failed![/bold red]")
        console.print(f"Error: {e}")
        raise typer.Exit(1)

    table = Table(title="Generation Results")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Run ID", result.run_id)
    table.add_row("Declared Modules", str(len(result.vendored_modules)))
    table.add_row("Platform Artifacts", str(len(result.platform_artifacts)))
    table.add_row("Duplicate Versions", str(len(result.duplicate_artifacts)))
    table.add_row("Top-level Dependencies", str(len(result.top_level_dependencies)))
    table.add_row("Dropped Edges", str(result.dropped_edges))
    table.add_row("Libs Directory", result.libs_directory)

    console.print(table)

    for warning in result.warnings:
        console.print(f"[yellow]Warning: {warning}[/yellow]")


@app.command()
def classify(
    report_path: Path = REPORT_ARGUMENT,
    catalog: Optional[Path] = CATALOG_OPTION,
    name: Optional[str] = NAME_OPTION,
) -> None:
    """Show how each resolved artifact would be declared, without writing files."""
    from .models.artifact import ResolutionReport
    from .orchestration import build_classifier
    from .services.naming import NamingStrategy
    from .services.staging import ArtifactStager
    from .storage import LocalStagingBackend

    config = _configure(platform_catalog=catalog, project_name=name)
    setup_logging(config)

    try:
        report = ResolutionReport.load(report_path)
        classifier = build_classifier(config.platform_catalog)
        naming = NamingStrategy(config.project_name or report.project_name or report_path.stem)
        stager = ArtifactStager(
            storage=LocalStagingBackend(config.project_dir),
            classifier=classifier,
            naming=naming,
            default_target_sdk=config.default_target_sdk,
        )
        plan = stager.plan(report.artifacts)
    except GenerateBpError as e:
        console.print(f"[bold red]✗ {e}[/bold red]")
        raise typer.Exit(1)

    table = Table(title="Artifact Classification")
    table.add_column("Artifact", style="cyan")
    table.add_column("Classification")
    table.add_column("Module")

    rows = [(a, "[green]vendored[/green]", naming.module_name(a.identity)) for a in plan.vendored]
    rows += [
        (a, "[blue]platform[/blue]", naming.platform_name(a.group, a.name)) for a in plan.platform
    ]
    rows += [(a, "[dim]duplicate[/dim]", "") for a in plan.duplicates]
    for artifact, classification, module in sorted(rows, key=lambda row: row[0].identity.sort_key):
        table.add_row(str(artifact), classification, module)

    console.print(table)


@app.command(name="config")
def show_config() -> None:
    """Show the configuration resolved from the environment."""
    cfg = get_config()

    table = Table(title="Current Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("Project Name", cfg.project_name or "(from report)")
    table.add_row("Project Directory", str(cfg.project_dir))
    table.add_row("Default Target SDK", str(cfg.default_target_sdk))
    table.add_row("Default Min SDK", str(cfg.default_min_sdk))
    table.add_row("Platform Catalog", str(cfg.platform_catalog or "(none)"))
    table.add_row("Log Level", cfg.effective_log_level)

    console.print(Panel.fit(table, title="generatebp", border_style="blue"))

    console.print("\n[dim]Configure via environment variables:[/dim]")
    console.print("  GENERATEBP_PROJECT_NAME, GENERATEBP_PROJECT_DIR, GENERATEBP_PLATFORM_CATALOG")
    console.print("  GENERATEBP_TARGET_SDK, GENERATEBP_MIN_SDK, GENERATEBP_DEBUG")


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
