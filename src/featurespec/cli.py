"""Click CLI entry point for featurespec."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from featurespec import __version__
from featurespec.config import (
    ConfigError,
    is_initialized,
    resolve_config,
    save_config,
)
from featurespec.models import GenerationResult, ProjectConfig
from featurespec.translator import DIALECTS


@click.group()
@click.version_option(version=__version__, prog_name="featurespec")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Generate browser tests from Given/When/Then feature files."""
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.option(
    "--dialect",
    type=click.Choice(sorted(DIALECTS)),
    default="pytest",
    help="Target test framework",
)
def init(dialect: str) -> None:
    """Initialize a project for featurespec."""
    project_root = Path.cwd()
    already = is_initialized(project_root)
    if already:
        click.echo("Warning: Project is already initialized. Updating configuration.")

    config = ProjectConfig(dialect=dialect)
    path = save_config(config, project_root)
    (project_root / config.features_dir).mkdir(exist_ok=True)

    click.echo(f"  Config:   {path}")
    click.echo(f"  Features: {project_root / config.features_dir}/")
    click.echo(f"  Output:   {project_root / config.output_dir}/")


@cli.command()
@click.pass_context
def generate(ctx: click.Context) -> None:
    """Clean the output directory and regenerate every test module."""
    if _generate(ctx) is None:
        ctx.exit(1)


@cli.command()
@click.pass_context
def clean(ctx: click.Context) -> None:
    """Remove previously generated test modules."""
    from featurespec.emitter import get_emitter
    from featurespec.pipeline import clean_generated
    from featurespec.store import LocalFileStore

    project_root = Path.cwd()
    config = _load(ctx, project_root)
    if config is None:
        return

    output_dir = project_root / config.output_dir
    try:
        removed = clean_generated(output_dir, LocalFileStore(), get_emitter(config.dialect))
    except OSError as e:
        click.echo(f"Error: {e}")
        ctx.exit(1)
        return
    for name in removed:
        click.echo(f"  Removed {name}")
    click.echo(f"Removed {len(removed)} generated file(s).")


@cli.command("parse")
@click.option("--inspect", is_flag=True, default=False, help="Show every scenario and step")
@click.pass_context
def parse_cmd(ctx: click.Context, inspect: bool) -> None:
    """Parse feature files and summarize what was found."""
    from featurespec.parser import parse_feature_file

    project_root = Path.cwd()
    config = _load(ctx, project_root)
    if config is None:
        return

    features_dir = project_root / config.features_dir
    if not features_dir.is_dir():
        click.echo(f"Error: Features directory not found: {features_dir}")
        ctx.exit(1)
        return

    feature_files = sorted(features_dir.glob("*.feature"))
    for path in feature_files:
        try:
            feature = parse_feature_file(path)
        except UnicodeDecodeError as e:
            click.echo(f"Error: {path} is not valid UTF-8: {e}")
            ctx.exit(1)
            return
        click.echo(
            f"{path.name}: {feature.title or '(untitled)'} "
            f"({len(feature.scenarios)} scenarios, {feature.step_count} steps)"
        )
        if inspect:
            if feature.background:
                click.echo("  Background: yes")
            for scenario in feature.scenarios:
                click.echo(f"  Scenario: {scenario.name}")
                for step in scenario.steps:
                    click.echo(f"    {step}")

    click.echo(f"Parsed {len(feature_files)} feature file(s).")


@cli.command()
@click.argument("step")
@click.option("--dialect", type=click.Choice(sorted(DIALECTS)), default=None)
@click.pass_context
def translate(ctx: click.Context, step: str, dialect: str | None) -> None:
    """Translate a single step line and print the statement."""
    from featurespec.translator import translate as translate_step

    if dialect is None:
        config = _load(ctx, Path.cwd())
        if config is None:
            return
        dialect = config.dialect
    click.echo(translate_step(step, dialect))


@cli.command()
@click.option("--headed", is_flag=True, default=False, help="Show the browser while testing")
@click.pass_context
def run(ctx: click.Context, headed: bool) -> None:
    """Regenerate tests, then hand off to the test runner."""
    from featurespec.runner import launch_playwright_ui, run_generated_tests

    project_root = Path.cwd()
    if _generate(ctx) is None:
        ctx.exit(1)
        return
    config = resolve_config(project_root)

    if config.dialect == "playwright-ts":
        click.echo("Starting Playwright UI...")
        ctx.exit(launch_playwright_ui(config, project_root))
        return

    result = run_generated_tests(config, project_root, headed=headed)
    click.echo(result.output)
    if result.failing_tests:
        click.echo("\nFailing tests:")
        for t in result.failing_tests:
            click.echo(f"  {t}")
    if not result.success:
        ctx.exit(1)


def _load(ctx: click.Context, project_root: Path) -> ProjectConfig | None:
    try:
        return resolve_config(project_root)
    except ConfigError as e:
        click.echo(f"Error: {e}")
        ctx.exit(1)
        return None


def _generate(ctx: click.Context) -> GenerationResult | None:
    from featurespec.pipeline import GenerationError, generate_specs

    project_root = Path.cwd()
    config = _load(ctx, project_root)
    if config is None:
        return None

    try:
        result = generate_specs(config, project_root=project_root)
    except (GenerationError, OSError) as e:
        click.echo(f"Error: {e}")
        return None

    for name in result.removed:
        click.echo(f"  Removed {name}")
    for name, count in result.generated.items():
        click.echo(f"  Generated {name} ({count} scenarios)")
    for name in result.skipped:
        click.echo(f"  Skipped {name} (no scenarios)")
    click.echo(
        f"Generated {len(result.generated)} test file(s) in "
        f"{project_root / config.output_dir}/"
    )
    return result
