"""Main CLI entry point for Nestflow"""

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from nestflow.__version__ import __version__
from nestflow.cli.chat_runner import ChatConfig, ChatRunner, import_handlers
from nestflow.config.compiler import compile_config, validate_config
from nestflow.config.loader import ConfigLoader
from nestflow.core.errors import NestflowError

app = typer.Typer(
    name="nestflow",
    help="Nestflow - hierarchical flow interpreter for scripted conversations",
    add_completion=False,
)

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit"""
    if value:
        typer.echo(f"Nestflow version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Nestflow - hierarchical flow interpreter for scripted conversations"""
    pass


def _report(error: Exception, debug: bool) -> None:
    if debug:
        console.print_exception()
    console.print(Panel(f"[red]{error}[/]", title="[bold red]Error[/]", border_style="red"))


def _run(config: ChatConfig) -> None:
    try:
        ChatRunner(config, console=console).start()
    except (NestflowError, FileNotFoundError, ValueError) as e:
        _report(e, config.debug)
        raise typer.Exit(code=1) from e


@app.command()
def demo(
    log_level: str = typer.Option(None, "--log-level", "-l", help="DEBUG, INFO, WARNING, ERROR"),
    show_state: bool = typer.Option(False, "--show-state", help="Print state after each turn"),
    debug: bool = typer.Option(False, "--debug", help="Show tracebacks"),
) -> None:
    """Chat with the bundled language quiz"""
    _run(ChatConfig(log_level=log_level, show_state=show_state, debug=debug))


@app.command()
def run(
    config_path: Path = typer.Argument(..., help="Flow YAML file or directory"),
    module: str = typer.Option(None, "--module", "-m", help="Module registering handlers"),
    log_level: str = typer.Option(None, "--log-level", "-l", help="DEBUG, INFO, WARNING, ERROR"),
    log_file: str = typer.Option(None, "--log-file", help="Rotating JSON log file"),
    show_state: bool = typer.Option(False, "--show-state", help="Print state after each turn"),
    debug: bool = typer.Option(False, "--debug", help="Show tracebacks"),
) -> None:
    """Chat with a flow defined in YAML"""
    _run(
        ChatConfig(
            config_path=config_path,
            module=module,
            log_level=log_level,
            log_file=log_file,
            show_state=show_state,
            debug=debug,
        )
    )


@app.command()
def validate(
    config_path: Path = typer.Argument(..., help="Flow YAML file or directory"),
    module: str = typer.Option(None, "--module", "-m", help="Module registering handlers"),
) -> None:
    """Check a YAML flow definition without running it"""
    try:
        if module:
            import_handlers(module)
        config = ConfigLoader.load(config_path)
    except (FileNotFoundError, ValueError) as e:
        _report(e, debug=False)
        raise typer.Exit(code=1) from e

    errors = validate_config(config)
    if errors:
        for error in errors:
            console.print(f"[red]✗[/] {error}")
        raise typer.Exit(code=1)

    try:
        builder = compile_config(config)
    except NestflowError as e:
        _report(e, debug=False)
        raise typer.Exit(code=1) from e

    table = Table(title="Flows")
    table.add_column("Flow")
    table.add_column("Children")
    table.add_column("Description")
    for definition in builder.managers():
        table.add_row(definition.name, ", ".join(definition.nodes), definition.description)
    console.print(table)
    console.print(
        f"[green]✓[/] {len(config.flows)} flows, {len(config.nodes)} nodes, root '{config.root}'"
    )


def cli() -> None:
    """Entry point for CLI"""
    app()


if __name__ == "__main__":
    cli()
