"""Command line interface for dts2re.

This module provides a command-line interface for translating TypeScript
declaration files into Reason/BuckleScript bindings, either once or
continuously while the declaration file is edited.
"""

import os
import sys
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar, cast

import arrow
import typer
import watchdog.events
import watchdog.observers
from loguru import logger
from watchdog.events import FileSystemEventHandler

from dts2re.translator import translate_file
from dts2re.translator.constants import DECLARATION_SUFFIXES
from dts2re.translator.errors import TranslatorError

# Define type variables for TypedCallable
F = TypeVar("F", bound=Callable[..., Any])


# TypedCommand decorator helper
def typed_command(app_command: Any) -> Callable[[F], F]:
    """Wrap typer command with proper typing for mypy."""

    def decorator(func: F) -> F:
        return cast(F, app_command(func))

    return decorator


app = typer.Typer(
    name="dts2re",
    help=(
        "Generate Reason/BuckleScript bindings from TypeScript declaration files. "
        "Commands: show, export, watch."
    ),
    add_completion=False,
)


@app.callback()
def configure(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log every translated declaration"
    ),
) -> None:
    """Configure logging for all commands."""
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "INFO")


def _default_output(input_file: str) -> Path:
    """Replace the declaration suffix of ``input_file`` with ``.re``."""
    for suffix in DECLARATION_SUFFIXES:
        if input_file.endswith(suffix):
            return Path(input_file[: -len(suffix)] + ".re")
    return Path(input_file + ".re")


def _get_bindings(input_file: str, name: str | None) -> str:
    """Translate a declaration file, exiting on failure.

    Args:
        input_file: Path to the declaration file
        name: Root module name override

    Returns:
        Binding declarations as text
    """
    try:
        return translate_file(input_file, name or None)
    except TranslatorError as e:
        logger.error(f"Translation error: {e}")
        raise typer.Exit(1) from e


def _add_header_comments(code: str, source_file: str) -> str:
    """Add a header comment describing how the bindings were generated.

    Args:
        code: Binding text
        source_file: Declaration file the bindings come from

    Returns:
        Code with header comments
    """
    timestamp = arrow.utcnow().format("YYYY-MM-DD HH:mm:ss UTC")
    header = f"/* Generated by dts2re v{__import__('dts2re').__version__} */\n"
    header += f"/* Generation time: {timestamp} */\n"
    header += f"/* Source file: {os.path.basename(source_file)} */\n"
    header += "\n"
    return header + code


def _format_bindings(code: str, format_type: str, source_file: str) -> str:
    """Format bindings for export.

    Args:
        code: Raw binding text
        format_type: Format type (plain, commented)
        source_file: Source declaration file

    Returns:
        Formatted binding text
    """
    if format_type == "commented":
        return _add_header_comments(code, source_file)
    if format_type != "plain":
        logger.warning(f"Unknown format: {format_type}. Using plain.")
    return code


def _write_bindings(code: str, output: Path) -> None:
    try:
        output.write_text(code, encoding="utf-8")
    except OSError as e:
        logger.error(f"Cannot write bindings to {output}: {e}")
        raise typer.Exit(1) from e


@typed_command(app.command("show"))
def show_bindings(
    input_file: str = typer.Argument(..., help="TypeScript declaration file"),
    name: str = typer.Option(
        "", "--name", "-n", help="Library module name (default: file name)"
    ),
) -> None:
    """Print generated bindings to standard output.

    Example: dts2re show electron.d.ts
    """
    typer.echo(_get_bindings(input_file, name), nl=False)


# Define reusable argument
OUTPUT_ARG = typer.Argument(None, help="Output file (default: input with .re)")


@typed_command(app.command("export"))
def export_bindings(
    input_file: str = typer.Argument(..., help="TypeScript declaration file"),
    output: Path | None = OUTPUT_ARG,
    name: str = typer.Option(
        "", "--name", "-n", help="Library module name (default: file name)"
    ),
    format: str = typer.Option(
        "plain", "--format", "-f", help="Output format (plain, commented)"
    ),
) -> None:
    """Export generated bindings to a file.

    Example: dts2re export electron.d.ts electron.re --format commented
    """
    output = output or _default_output(input_file)
    code = _format_bindings(_get_bindings(input_file, name), format, input_file)

    logger.info(f"Exporting bindings to {output}...")
    _write_bindings(code, output)
    logger.info(f"Bindings exported to {output}")


class DeclarationChangeHandler(FileSystemEventHandler):  # type: ignore
    """Event handler regenerating bindings when the declaration file changes."""

    def __init__(self, input_file: str, output: Path, name: str):
        """Initialize declaration change handler.

        Args:
            input_file: Path to declaration file
            output: Path of the generated bindings
            name: Library module name override
        """
        self.input_file = os.path.abspath(input_file)
        self.output = output
        self.name = name
        self.generations = 0

    def on_modified(self, event: watchdog.events.FileSystemEvent) -> None:
        """Handle file modified event.

        Args:
            event: File system event
        """
        if os.path.abspath(event.src_path) == self.input_file:
            logger.info(f"Detected changes in {self.input_file}")
            self.regenerate()

    def regenerate(self) -> None:
        """Translate the declaration file again, keeping old output on failure."""
        try:
            code = translate_file(self.input_file, self.name or None)
            self.output.write_text(code, encoding="utf-8")
        except (TranslatorError, OSError) as e:
            logger.error(f"Error regenerating bindings: {e}")
            return
        self.generations += 1
        logger.info(f"Bindings written to {self.output}")


@typed_command(app.command("watch"))
def watch_bindings(
    input_file: str = typer.Argument(..., help="TypeScript declaration file"),
    output: Path | None = OUTPUT_ARG,
    name: str = typer.Option(
        "", "--name", "-n", help="Library module name (default: file name)"
    ),
) -> None:
    """Watch a declaration file and regenerate bindings on changes.

    Example: dts2re watch electron.d.ts
    """
    handler = DeclarationChangeHandler(
        input_file, output or _default_output(input_file), name
    )
    handler.regenerate()

    # Watch the file's directory, not the file itself
    observer = watchdog.observers.Observer()
    observer.schedule(
        handler, path=os.path.dirname(handler.input_file), recursive=False
    )
    observer.start()
    logger.info(f"Watching {handler.input_file} (press Ctrl+C to stop)...")

    try:
        while True:
            time.sleep(0.5)
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received, stopping...")
    finally:
        observer.stop()
        observer.join()


if __name__ == "__main__":
    app()
