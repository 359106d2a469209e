#!/usr/bin/env python3
"""
Command-line interface for inspecting and rendering CV templates.

Templates are loaded from CV_TEMPLATES_PATH (or the bundled template store).
This script lists what the registry accepted and renders templates from a
profile file and an AI-generated markdown file.

Commands:
    list             - List registered templates (free first)
    show             - Show a template's config and declared placeholders
    render           - Render a template from profile + AI markdown
    preview          - Render a template with built-in sample data
    detect-language  - Detect the language of a job posting
"""

import json
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from omegaconf import OmegaConf

from cvtailor.contexts.intake import detect_language
from cvtailor.contexts.templating import (
    PlanTier,
    TemplateBinder,
    TemplateNotFound,
    TemplateRegistry,
    UserProfile,
)
from cvtailor.contexts.templating.logger import setup_templating_logger

load_dotenv()

app = typer.Typer(
    add_completion=False,
    help="Inspect and render CV templates",
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _load_registry(templates_path: Optional[Path]) -> TemplateRegistry:
    registry = TemplateRegistry.load(templates_path)
    if not len(registry):
        typer.secho("No templates registered", fg=typer.colors.YELLOW, err=True)
    return registry


def _load_profile(profile_path: Path) -> UserProfile:
    """Load a profile from a YAML or JSON file."""
    data = OmegaConf.to_container(OmegaConf.load(profile_path), resolve=True)
    return UserProfile.from_dict(data)


def _write_output(html: str, output: Optional[Path]) -> None:
    if output is None:
        typer.echo(html)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(html, encoding="utf-8")
    typer.secho(f"✓ Wrote {output}", fg=typer.colors.GREEN)


TEMPLATES_OPTION = typer.Option(
    None, "--templates", "-t", help="Template store directory (defaults to CV_TEMPLATES_PATH)"
)


@app.command("list")
def list_command(
    plan: str = typer.Option(PlanTier.FREE, "--plan", "-p", help="Plan tier used for lock marks"),
    templates_path: Optional[Path] = TEMPLATES_OPTION,
):
    """
    List registered templates, free templates first.

    Examples:\n

        $ manage_templates.py list

        $ manage_templates.py list --plan PREMIUM
    """
    registry = _load_registry(templates_path)

    typer.secho(f"\n{len(registry)} template(s)", fg=typer.colors.BLUE, bold=True)
    for preview in registry.previews_for_plan(plan):
        lock = "🔒" if preview.is_premium else "  "
        typer.echo(f"{lock} {preview.id:<16} {preview.name:<20} {preview.category}")


@app.command("show")
def show_command(
    template_id: str = typer.Argument(..., help="Template id"),
    templates_path: Optional[Path] = TEMPLATES_OPTION,
):
    """Show the raw config of a template."""
    registry = _load_registry(templates_path)
    config = registry.get_config(template_id)

    if config is None:
        typer.secho(f"Template '{template_id}' not found", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.echo(json.dumps(config, indent=2, ensure_ascii=False))


@app.command("render")
def render_command(
    template_id: str = typer.Argument(..., help="Template id"),
    profile_path: Path = typer.Option(..., "--profile", help="Profile YAML/JSON file"),
    content_path: Path = typer.Option(..., "--content", help="AI-generated CV markdown file"),
    summary_path: Optional[Path] = typer.Option(
        None, "--summary", help="File holding the dedicated summary text"
    ),
    job_path: Optional[Path] = typer.Option(
        None, "--job", help="Job description file, used to pick fallback language"
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write HTML here"),
    log_dir: Optional[Path] = typer.Option(None, "--log-dir", help="Write a debug log here"),
    templates_path: Optional[Path] = TEMPLATES_OPTION,
):
    """
    Render a template from a profile and generated CV markdown.

    Examples:\n

        $ manage_templates.py render modern --profile me.yaml --content cv.md -o cv.html

        $ manage_templates.py render modern --profile me.yaml --content cv.md --job job.txt
    """
    if log_dir is not None:
        setup_templating_logger(log_dir, phase="render")

    registry = _load_registry(templates_path)
    binder = TemplateBinder(registry)

    profile = _load_profile(profile_path)
    ai_text = content_path.read_text(encoding="utf-8")
    guaranteed_summary = summary_path.read_text(encoding="utf-8") if summary_path else None
    language = detect_language(job_path.read_text(encoding="utf-8")) if job_path else None

    try:
        html = binder.render(template_id, profile, ai_text, guaranteed_summary, language)
    except TemplateNotFound as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    _write_output(html, output)


@app.command("preview")
def preview_command(
    template_id: str = typer.Argument(..., help="Template id"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write HTML here"),
    templates_path: Optional[Path] = TEMPLATES_OPTION,
):
    """Render a template with built-in sample data."""
    binder = TemplateBinder(_load_registry(templates_path))

    try:
        html = binder.render_preview(template_id)
    except TemplateNotFound as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    _write_output(html, output)


@app.command("detect-language")
def detect_language_command(
    job_path: Path = typer.Argument(..., help="Job description file"),
    title: str = typer.Option("", "--title", help="Job title"),
):
    """Print the detected language of a job posting."""
    typer.echo(detect_language(job_path.read_text(encoding="utf-8"), title))


if __name__ == "__main__":
    app()
