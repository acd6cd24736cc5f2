"""
Translation of TypeScript declarations into Reason/BuckleScript bindings.

This module provides the top-level interface: build the structural model from
a declaration syntax tree, then render it as binding declarations.
"""

from pathlib import Path

from loguru import logger

from dts2re.syntax.nodes import SourceFile
from dts2re.translator.errors import TranslatorError
from dts2re.translator.frontend import parse_declarations
from dts2re.translator.model_builder import build_module
from dts2re.translator.printer import render


def translate(source_file: SourceFile, name: str | None = None) -> str:
    """Translate a declaration syntax tree into binding text.

    Args:
        source_file: Declaration file syntax tree
        name: Root module name, defaults to the file's base name

    Returns:
        Binding declarations as text

    Examples:
        tree = parse_declarations("declare function foo(): void;", "lib.d.ts")
        bindings = translate(tree)
    """
    module = build_module(source_file, name)
    return render(module)


def translate_source(
    text: str, file_name: str = "index.d.ts", name: str | None = None
) -> str:
    """Parse declaration source text and translate it.

    Args:
        text: Declaration file contents
        file_name: Path used to derive the root module name
        name: Root module name override

    Returns:
        Binding declarations as text
    """
    return translate(parse_declarations(text, file_name), name)


def translate_file(path: str | Path, name: str | None = None) -> str:
    """Read a declaration file and translate it.

    Args:
        path: Path of the ``.d.ts`` file
        name: Root module name override

    Returns:
        Binding declarations as text

    Raises:
        TranslatorError: If the file cannot be read
    """
    path = Path(path)
    logger.debug(f"Reading declarations from {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise TranslatorError(
            f"Cannot read declarations: {e}", file_path=str(path)
        ) from e
    return translate_source(text, str(path), name)


__all__ = [
    "TranslatorError",
    "parse_declarations",
    "translate",
    "translate_file",
    "translate_source",
]
