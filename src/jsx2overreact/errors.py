from typing import Optional


class ConversionError(Exception):
    """Base class for everything `convert` can raise."""


class ParseError(ConversionError, ValueError):
    """
    The source is not valid JavaScript/JSX.

    ``line`` and ``column`` are 1-based and point at the first syntax error
    reported by the parser.
    """

    def __init__(
        self, message: str, line: Optional[int] = None, column: Optional[int] = None
    ) -> None:
        self.message = message
        self.line = line
        self.column = column
        location = f" (line {line}, column {column})" if line is not None else ""
        super().__init__(f"{message}{location}")


class UnsupportedConstruct(ConversionError):
    """A syntactically valid construct that has no rendering rule."""

    def __init__(self, node_type: str, line: Optional[int] = None) -> None:
        self.node_type = node_type
        self.line = line
        location = f" at line {line}" if line is not None else ""
        super().__init__(f"No rendering rule for {node_type!r}{location}")
