"""CLI entry point for deploynote."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Annotated

import typer
import yaml
from pydantic import ValidationError
from rich import print as rprint
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.text import Text

from deploynote.config import DeployNoteConfig, TriggerConfig, load_config
from deploynote.config.loader import DEFAULT_CONFIG_TEMPLATE
from deploynote.errors import ConfigurationError, DeployNoteError
from deploynote.llm import create_llm_provider
from deploynote.output.validator import check_structure, null_note
from deploynote.pipeline import DeployNotePipeline, PipelineResult
from deploynote.vcs import create_provider

logger = logging.getLogger("deploynote")

app = typer.Typer(
    name="deploynote",
    help="Generate a deploy note for a pull request, commit it and comment it.",
)

config_app = typer.Typer(help="Manage deploynote configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: DeployNoteConfig | None = None

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


class _JsonFormatter(logging.Formatter):
    """One JSON object per log line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def _configure_logging(cfg: DeployNoteConfig) -> None:
    handler = logging.StreamHandler()
    if cfg.log_format == "json":
        handler.setFormatter(_JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
    logging.basicConfig(level=_LOG_LEVELS[cfg.log_level], handlers=[handler], force=True)


def _get_config() -> DeployNoteConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to deploynote.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ConfigurationError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    _configure_logging(_config)


def _with_trigger(cfg: DeployNoteConfig, pr: int | None, repository: str | None) -> DeployNoteConfig:
    """Return cfg with CLI trigger overrides applied (and validated)."""
    trigger = cfg.trigger.model_dump()
    if pr is not None:
        trigger["pr_number"] = pr
    if repository is not None:
        trigger["repository"] = repository
    try:
        return cfg.model_copy(update={"trigger": TriggerConfig(**trigger)})
    except ValidationError as e:
        raise ConfigurationError(f"Invalid trigger: {e}") from e


def _display_result(result: PipelineResult, dry_run: bool) -> None:
    ctx = result.context
    note_kind = "null note (fallback)" if result.note.fallback else "generated"
    panel_text = (
        f"[bold]{escape(ctx.title)}[/bold]\n"
        f"{ctx.url}\n\n"
        f"[dim]Branch:[/dim]   {ctx.branch}\n"
        f"[dim]Note:[/dim]     {note_kind}\n"
        f"[dim]Path:[/dim]     {result.store.path}\n"
        f"[dim]Storage:[/dim]  {result.store.outcome.value}\n"
        f"[dim]Comment:[/dim]  {result.comment_url or '-'}"
    )
    if result.note.reasons:
        panel_text += "\n[dim]Rejected:[/dim] " + escape("; ".join(result.note.reasons))
    title = "Deploy Note (dry run)" if dry_run else "Deploy Note"
    rprint(Panel(panel_text, title=title, border_style="yellow" if dry_run else "green"))
    if dry_run:
        rprint(Syntax(result.note.text, "markdown", word_wrap=True))


@app.command()
def run(
    pr: Annotated[
        int | None, typer.Option("--pr", help="Pull request number (default: $PR_NUMBER)")
    ] = None,
    repository: Annotated[
        str | None,
        typer.Option("--repository", "-r", help="owner/name (default: $REPOSITORY)"),
    ] = None,
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Generate and validate only; no commit, no comment"
    ),
) -> None:
    """Generate, commit and comment the deploy note for one pull request."""
    try:
        cfg = _with_trigger(_get_config(), pr, repository)
        vcs = create_provider(cfg.vcs)
        llm = create_llm_provider(cfg.llm)
        pipeline = DeployNotePipeline(cfg, vcs, llm)
        result = asyncio.run(pipeline.run(dry_run=dry_run))
    except DeployNoteError as e:
        logger.error("Error generating deploy note: %s", e, exc_info=e.__cause__ is not None)
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except Exception as e:
        logger.exception("Unexpected error generating deploy note")
        rprint(f"[red]Unexpected error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    _display_result(result, dry_run)


@app.command()
def validate(
    file: Path = typer.Argument(..., help="Deploy note markdown file to check"),
    title: str = typer.Option("PR Title", "--title", help="Title used for the fallback preview"),
    url: str = typer.Option("PR URL", "--url", help="URL used for the fallback preview"),
) -> None:
    """Check a deploy note file against the structural rules."""
    if not file.is_file():
        rprint(f"[red]Error:[/red] File not found: {file}")
        raise typer.Exit(1)

    problems = check_structure(file.read_text(encoding="utf-8"))
    if not problems:
        rprint(f"[green]✓[/green] {file} is a valid deploy note")
        return

    for problem in problems:
        rprint(f"[red]✗[/red] {escape(problem)}")
    rprint(Panel(Text(null_note(title, url)), title="Would be replaced with", border_style="red"))
    raise typer.Exit(1)


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create a deploynote.yaml config file."""
    dest = Path("deploynote.yaml")
    if dest.exists() and not force:
        rprint(f"[yellow]{dest} already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    dest.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {dest}")


@config_app.command("show")
def config_show() -> None:
    """Print the effective configuration."""
    cfg = _get_config()
    rendered = yaml.safe_dump(cfg.model_dump(mode="json"), default_flow_style=False, sort_keys=False)
    rprint(Syntax(rendered, "yaml"))
