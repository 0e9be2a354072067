from typing import Iterable, Optional
from rich.console import Console
from rich.table import Table
from rich.text import Text
from ..parsing.diagnostics import Diagnostic
from ..parsing.tokens import TokenRecord

C_ERROR = "bold #ff5f5f"
C_ACCENT = "#45d3ee"
C_MUTED = "#9FBFC5"


def _console(console: Optional[Console]) -> Console:
    return console if console else Console(highlight=False)


def format_diagnostic(diagnostic: Diagnostic) -> str:
    """message line column, in that order."""
    return f"{diagnostic.message} {diagnostic.line} {diagnostic.column}"


def print_diagnostic(diagnostic: Diagnostic, console: Optional[Console] = None):
    _console(console).print(Text(format_diagnostic(diagnostic)), soft_wrap=True)


def print_error(message: str, console: Optional[Console] = None):
    text = Text("error: ", style=C_ERROR)
    text.append(message)
    _console(console).print(text, soft_wrap=True)


def print_declarations(tokens: Iterable[TokenRecord], console: Optional[Console] = None):
    table = Table(title="Declarations", header_style=C_ACCENT)
    table.add_column("Line", justify="right")
    table.add_column("Column", justify="right")
    table.add_column("Kind")
    table.add_column("Modifiers", style=C_MUTED)

    for token in tokens:
        start = token.location.start
        kind = token.kind.editor_name if token.kind else str(token.token_type or "?")
        modifiers = ", ".join(m.editor_name for m in token.modifiers)
        table.add_row(str(start.line), str(start.column), kind, modifiers)

    _console(console).print(table)
