"""
Exceptions for the binding translator.

The translator degrades on unsupported input instead of failing, so this
exception is only raised by the wrapper layer: unreadable files and
unusable parser output.
"""

import os
from typing import Any, Optional


class TranslatorError(Exception):
    """Exception raised when a declaration file cannot be translated.

    The message is extended with the source file and line number when they are
    known, either from the node passed in or from explicit keyword arguments.

    Examples:
        >>> raise TranslatorError("Cannot read input", file_path="electron.d.ts")
        TranslatorError: Cannot read input in electron.d.ts
    """

    def __init__(
        self,
        message: str,
        node: Optional[Any] = None,
        file_path: Optional[str] = None,
        lineno: Optional[int] = None,
    ):
        """Initialize the exception with a message and optional location.

        Args:
            message: The error message
            node: Optional syntax node where the error occurred
            file_path: Optional path of the declaration file
            lineno: Optional line number, overrides the node's line
        """
        self.message = message
        self.node = node
        self.file_path = file_path
        self.lineno = lineno
        if self.lineno is None and node is not None:
            self.lineno = getattr(node, "line", None)

        location_info = ""
        if self.file_path:
            location_info = f" in {os.path.basename(self.file_path)}"
        if self.lineno:
            location_info += f" at line {self.lineno}"

        super().__init__(f"{message}{location_info}")
