"""Indentation-aware line buffer."""

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator

from dts2re.translator.constants import INDENTATION


@dataclass
class CodeBlock:
    """Collects output lines at the current nesting depth."""

    indent_level: int = 0
    lines: list[str] = field(default_factory=list)

    @contextmanager
    def indented(self) -> Iterator[None]:
        """Context manager for one nesting level."""
        self.indent_level += 1
        try:
            yield
        finally:
            self.indent_level -= 1

    @contextmanager
    def block(self, header: str, blank_after_header: bool = False) -> Iterator[None]:
        """Context manager for a ``header {`` ... ``};`` block."""
        self.add_line(f"{header} = {{")
        if blank_after_header:
            self.add_line()
        with self.indented():
            yield
        self.add_line("};")

    def add_line(self, line: str = "") -> None:
        """Add line with proper indentation, or a blank line."""
        if not line:
            self.lines.append("")
            return
        self.lines.append(f"{INDENTATION * self.indent_level}{line}")

    def get_code(self) -> str:
        """Get generated code, one newline-terminated line per entry."""
        return "".join(f"{line}\n" for line in self.lines)
