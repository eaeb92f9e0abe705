"""Main CLI application using Typer."""
import asyncio
import os
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..llm import SUPPORTED_PROVIDERS
from ..notebook import CellType, NotebookController, parse_script
from .providers import api_key_variable, provider_name, require_inference_client

# Load environment variables
load_dotenv()

app = typer.Typer(
    name="aether",
    help="Research notebook with simulated execution, experiment tracking and an AI assistant",
    no_args_is_help=True,
    add_completion=True,
)

console = Console()

LOG_STYLES = {"debug": "dim", "info": "cyan", "warning": "yellow", "error": "red"}


def _console_debug_callback(level: str, component: str, message: str) -> None:
    """Print component debug messages to the console."""
    style = LOG_STYLES.get(level, "white")
    console.print(f"[{style}]{level.upper():<7}[/] [bold]\\[{component}][/] {message}")


@app.command(name="tui")
def tui_command(
    empty: bool = typer.Option(
        False,
        "--empty",
        "-e",
        help="Start with an empty notebook instead of the welcome cells"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
):
    """Launch the interactive notebook TUI."""
    async def _tui():
        from ..ui import run_textual_tui

        client = require_inference_client(console)
        if empty:
            controller = NotebookController(client)
        else:
            controller = NotebookController.with_samples(client)

        try:
            await run_textual_tui(controller, log_level=log_level)
        finally:
            try:
                await controller.close()
            except BaseException:
                pass
            console.print("\n[dim]Goodbye![/dim]")

    try:
        asyncio.run(_tui())
    except KeyboardInterrupt:
        pass


@app.command()
def run(
    script: Path = typer.Argument(
        ...,
        exists=True,
        file_okay=True,
        dir_okay=False,
        help="Percent-format script ('# %%' separates cells)"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Print component log messages"
    ),
):
    """Execute every cell of a script and show outputs and derived experiments."""
    cells = parse_script(script.read_text(encoding="utf-8"))
    if not cells:
        console.print(f"[yellow]No cells found in {script}[/yellow]")
        raise typer.Exit(code=1)

    async def _run():
        client = require_inference_client(console)
        controller = NotebookController(client, cells=cells)
        if verbose:
            controller.set_debug_callback(_console_debug_callback)

        try:
            with console.status(f"[dim]Executing {len(cells)} cells...[/dim]"):
                await controller.execute_all()
            return controller.snapshot()
        finally:
            await controller.close()

    snapshot = asyncio.run(_run())

    for index, cell in enumerate(snapshot.cells, 1):
        if cell.type is CellType.MARKDOWN:
            console.print(Panel(cell.content, title=f"[{index}] markdown", border_style="dim"))
            continue
        console.print(Panel(cell.content, title=f"[{index}] code", border_style="blue"))
        console.print(Panel(cell.output or "", title="output", border_style="green"))

    if snapshot.experiments:
        table = Table(title="Experiments")
        table.add_column("ID", style="dim")
        table.add_column("Name", style="cyan")
        table.add_column("Status")
        table.add_column("Accuracy", justify="right")
        table.add_column("Loss", justify="right")
        table.add_column("Epoch", justify="right")

        for experiment in snapshot.experiments:
            table.add_row(
                experiment.id,
                experiment.name,
                experiment.status.value,
                f"{experiment.metrics.accuracy:.2f}",
                f"{experiment.metrics.loss:.2f}",
                str(experiment.metrics.epoch),
            )
        console.print(table)


@app.command()
def ask(
    query: str = typer.Argument(..., help="Question for the assistant"),
):
    """Ask the assistant a single question."""
    if not query.strip():
        console.print("[yellow]Nothing to ask[/yellow]")
        raise typer.Exit(code=1)

    async def _ask():
        client = require_inference_client(console)
        controller = NotebookController(client)
        try:
            task = controller.ask(query)
            with console.status("[dim]Thinking...[/dim]"):
                return await task
        finally:
            await controller.close()

    answer = asyncio.run(_ask())
    console.print(f"[bold green]Aether:[/bold green] {answer}")


@app.command()
def health():
    """Show which inference provider is configured."""
    table = Table(title="Aether Studio Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    provider = provider_name()
    supported = provider in SUPPORTED_PROVIDERS
    table.add_row("LLM_PROVIDER", provider if supported else f"[red]{provider} (unsupported)[/red]")

    for name in SUPPORTED_PROVIDERS:
        key_var = api_key_variable(name)
        is_set = bool(os.getenv(key_var)) or (name == "gemini" and bool(os.getenv("API_KEY")))
        table.add_row(key_var, "[green]set[/green]" if is_set else "[dim]not set[/dim]")

    console.print(table)
    if not supported:
        raise typer.Exit(code=1)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
