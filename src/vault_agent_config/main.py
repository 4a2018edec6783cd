import json
import typer
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.markup import escape

from vault_agent_config.logging_config import logger, setup_logging, reset_logging
from vault_agent_config.config import get_defaults
from vault_agent_config.exceptions import VaultAgentConfigError
from vault_agent_config.intent import load_intent
from vault_agent_config.synthesis import ConfigAssembler, parse

app = typer.Typer(help="Vault Agent sidecar configuration synthesis.")
console = Console(stderr=True)


def _fail(error: VaultAgentConfigError) -> None:
    console.print(f"[red]Error: {escape(str(error))}[/red]")
    raise typer.Exit(code=1)


@app.callback()
def global_options(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log synthesis decisions to stderr (DEBUG level)."
    ),
):
    """
    Render Vault Agent configuration from an agent intent file.
    """
    if verbose:
        reset_logging()
        setup_logging(level="DEBUG", suppress_console=False)


@app.command()
def render(
    intent_file: Path = typer.Argument(
        ...,
        help="Agent intent JSON file.",
        dir_okay=False,
    ),
    init: bool = typer.Option(
        False,
        "--init",
        help="Render the init container config (exit after auth, no ephemeral cache)."
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the config to this file instead of stdout.",
        dir_okay=False,
    ),
):
    """
    Synthesizes the agent config for an intent.
    """
    try:
        intent = load_intent(intent_file)
        data = ConfigAssembler(defaults=get_defaults()).assemble(intent, init=init)
    except VaultAgentConfigError as e:
        _fail(e)

    if output is None:
        typer.echo(data.decode("utf-8"))
        return

    try:
        output.write_bytes(data)
    except OSError as e:
        console.print(f"[red]Error: cannot write {output}: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)
    logger.info(f"Wrote agent config to {output} ({len(data)} bytes)")


@app.command()
def inspect(
    config_file: Path = typer.Argument(
        ...,
        help="Rendered agent config file.",
        dir_okay=False,
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Output the summary as JSON."
    ),
):
    """
    Summarizes the stanzas of a rendered agent config.
    """
    try:
        raw = config_file.read_bytes()
    except OSError as e:
        console.print(f"[red]Error: cannot read {config_file}: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    try:
        document = parse(raw)
    except VaultAgentConfigError as e:
        _fail(e)

    sinks = document.auto_auth.sinks if document.auto_auth else []
    summary = {
        "vault_address": document.vault.address if document.vault else "",
        "auth_type": document.auto_auth.method.type if document.auto_auth and document.auto_auth.method else "",
        "exit_after_auth": document.exit_after_auth,
        "sinks": [sink.config.get("path", "") for sink in sinks],
        "templates": [template.destination for template in document.templates],
        "listeners": [listener.address for listener in document.listeners],
        "quit_enabled": any(listener.agent_api and listener.agent_api.enable_quit for listener in document.listeners),
        "cache_persist": document.cache.persist.type if document.cache and document.cache.persist else None,
    }

    if json_output:
        typer.echo(json.dumps(summary, indent=2))
        return

    table = Table(title=f"Agent config '{config_file}'")
    table.add_column("Stanza", style="cyan", no_wrap=True)
    table.add_column("Value", style="magenta")
    for key, value in summary.items():
        if isinstance(value, list):
            value = "\n".join(value) or "-"
        table.add_row(key, str(value))
    Console().print(table)


@app.command()
def defaults(
    json_output: bool = typer.Option(
        False, "--json", help="Output defaults as JSON."
    ),
):
    """
    Shows the effective well-known paths, port and templates.
    """
    try:
        values = get_defaults().to_dict()
    except VaultAgentConfigError as e:
        _fail(e)

    if json_output:
        typer.echo(json.dumps(values, indent=2))
        return

    table = Table(title="Agent defaults")
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", style="magenta")
    for key, value in values.items():
        table.add_row(key, repr(value) if key.endswith("_template") else value)
    Console().print(table)


def run():
    app()


if __name__ == "__main__":
    run()
