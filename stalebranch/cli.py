"""CLI entry point for stalebranch."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
import yaml
from pydantic import ValidationError
from rich import print as rprint
from rich.panel import Panel
from rich.syntax import Syntax

from stalebranch.config import StalebranchConfig, load_config
from stalebranch.config.loader import DEFAULT_CONFIG_TEMPLATE
from stalebranch.logs import configure_logging
from stalebranch.policy import StalenessDecision, StalenessPolicy, create_policy
from stalebranch.scm import HeadReference, Revision, SourceDescriptor, TimestampLookupError

app = typer.Typer(
    name="stalebranch",
    help="Decide whether a branch is fresh enough to build automatically.",
)

config_app = typer.Typer(help="Manage stalebranch configuration.")
app.add_typer(config_app, name="config")

# Exit code when the build is suppressed
EXIT_SUPPRESSED = 2

# Global state
_config: StalebranchConfig | None = None


def _get_config() -> StalebranchConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to stalebranch.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    configure_logging(_config.log_level, _config.log_format)


def _format_age(millis: int | None) -> str:
    if millis is None:
        return "-"
    hours = millis / 3_600_000
    if hours < 48:
        return f"{hours:.1f} h"
    return f"{hours / 24:.1f} d"


def _display_decision(
    decision: StalenessDecision, policy: StalenessPolicy, head: HeadReference, remote: str
) -> None:
    verdict = (
        "[green]build automatically[/green]"
        if decision.automatic
        else "[yellow]skip automatic build[/yellow]"
    )
    panel_text = (
        f"[bold]{head.kind} {head.name}[/bold] on {remote}\n\n"
        f"[dim]Decision:[/dim]   {verdict}\n"
        f"[dim]Reason:[/dim]     {decision.reason}\n"
        f"[dim]Max age:[/dim]    {policy.at_most_days or 'disabled'} day(s)\n"
        f"[dim]Commit age:[/dim] {_format_age(decision.commit_age_millis)}\n"
        f"[dim]Credential:[/dim] {decision.matched_credential or '-'}"
    )
    border = "green" if decision.automatic else "yellow"
    rprint(Panel(panel_text, title=StalenessPolicy.DISPLAY_NAME, border_style=border))


@app.command()
def check(
    remote: str = typer.Argument(..., help="Remote repository URL"),
    head: str = typer.Option(..., "--head", "-H", help="Branch, tag or change request name"),
    kind: str = typer.Option("branch", "--kind", help="branch, tag or change-request"),
    revision: str = typer.Option("HEAD", "--revision", "-r", help="Observed revision"),
    credentials_id: str | None = typer.Option(
        None, "--credentials-id", help="Credential configured for the source"
    ),
    max_age_days: str | None = typer.Option(
        None, "--max-age-days", help="Override staleness.max_age_days"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the decision as JSON"),
) -> None:
    """Check whether a head would be built automatically."""
    cfg = _get_config()

    try:
        head_ref = HeadReference(name=head, kind=kind)
        source = SourceDescriptor(remote=remote, credentials_id=credentials_id)
        policy = create_policy(cfg, max_age_days)
    except (ValueError, ValidationError) as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    current = Revision(head=head_ref, hash=revision)
    try:
        decision = policy.evaluate(source, head_ref, current)
    except TimestampLookupError as e:
        rprint(f"[red]Lookup failed:[/red] {e}")
        raise typer.Exit(1)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if as_json:
        typer.echo(decision.model_dump_json())
    else:
        _display_decision(decision, policy, head_ref, remote)

    if not decision.automatic:
        raise typer.Exit(EXIT_SUPPRESSED)


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default stalebranch.yaml in current directory."""
    target = Path("stalebranch.yaml")
    if target.exists() and not force:
        rprint("[yellow]stalebranch.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")
