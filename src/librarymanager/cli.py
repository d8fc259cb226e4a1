"""Command-line interface for librarymanager.

Built with Typer for commands and Rich for status output. Interpreter
replies are echoed verbatim so scripts produce byte-exact transcripts.
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from .config import get_config
from .interpreter import CommandInterpreter

# Create the main app
app = typer.Typer(
    name="librarymanager",
    help="Run library catalog commands from a script or an interactive shell.",
    no_args_is_help=True,
)

# Rich consoles for pretty output
console = Console()
err_console = Console(stderr=True)

EXIT_COMMANDS = ("exit", "quit")


# ============================================================================
# Helper Functions
# ============================================================================


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[bold red]Error:[/bold red] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[dim]{message}[/dim]")


def setup_logging(level: str) -> None:
    """Send diagnostic logging to stderr through Rich."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.callback()
def _global_options(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every command to stderr"),
) -> None:
    """Global options."""
    try:
        config = get_config()
    except ValueError as e:
        print_error(f"Invalid configuration: {e}")
        raise typer.Exit(1)

    errors = config.validate()
    if errors:
        for error in errors:
            print_error(error)
        raise typer.Exit(1)
    setup_logging("DEBUG" if verbose else config.log_level)


# ============================================================================
# Commands
# ============================================================================


@app.command()
def run(
    script: Optional[Path] = typer.Argument(None, help="Command script (default: LIBRARY_SCRIPT_PATH)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the transcript to a file"),
) -> None:
    """Execute a command script and print every reply."""
    config = get_config()
    path = script or Path(config.script_path)

    if not path.is_file():
        print_error(f"Script not found: {path}")
        raise typer.Exit(1)

    interpreter = CommandInterpreter(config=config)
    try:
        transcript = interpreter.execute_script(path)
    except (OSError, UnicodeDecodeError) as e:
        print_error(f"Could not read {path}: {e}")
        raise typer.Exit(1)

    if output:
        output.write_text(transcript, encoding="utf-8")
        print_info(f"Transcript written to {output}")
    else:
        typer.echo(transcript, nl=False)


@app.command()
def shell() -> None:
    """Read commands interactively until 'exit', 'quit' or end of input."""
    interpreter = CommandInterpreter(config=get_config(), output=typer.echo)
    print_info("Library manager shell. Type 'exit' to leave.")

    while True:
        try:
            line = console.input("[bold cyan]library>[/bold cyan] ")
        except (EOFError, KeyboardInterrupt):
            break
        if line.strip() in EXIT_COMMANDS:
            break
        interpreter.process_line(line)


@app.command()
def version() -> None:
    """Show version information."""
    from . import __version__

    console.print(f"librarymanager version {__version__}")


# ============================================================================
# Main Entry Point
# ============================================================================


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
