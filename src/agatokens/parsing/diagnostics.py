import re
from dataclasses import dataclass
from typing import Optional

# Bold red "error" followed by a reset, exactly as agalang-core prints it.
ERROR_PREFIX = "\x1b[1m\x1b[91merror\x1b[39m:\x1b[0m"

RE_ANSI = re.compile(r"\x1b\[[0-9;]*m")


class MalformedDiagnostic(ValueError):
    """Raised when a recognized error header is not followed by a usable location line."""


@dataclass
class Diagnostic:
    message: str
    line: int
    column: int
    raw_text: str = ""


def strip_ansi(text: str) -> str:
    return RE_ANSI.sub("", text)


def is_error_header(line: str) -> bool:
    return line.startswith(ERROR_PREFIX)


def extract_diagnostic(raw_text: str) -> Optional[Diagnostic]:
    """
    Extracts the error message and position from agalang-core stderr.
    Returns None when the first line is not an error header.

    Example:
        \\x1b[1m\\x1b[91merror\\x1b[39m:\\x1b[0m disallowed token
        5:12
    The location line is column first: column 5, line 12.
    """
    lines = raw_text.split("\n")
    if not is_error_header(lines[0]):
        return None

    message = lines[0][len(ERROR_PREFIX):].strip()

    if len(lines) < 2:
        raise MalformedDiagnostic(f"Missing location line after error: {message!r}")

    fields = lines[1].split(":")
    if len(fields) < 2:
        raise MalformedDiagnostic(f"Expected '<column>:<line>', got {lines[1]!r}")

    column_text, line_text = fields[-2], fields[-1]
    try:
        column = int(column_text)
        line = int(line_text)
    except ValueError as e:
        raise MalformedDiagnostic(f"Non-numeric location {lines[1]!r}") from e

    return Diagnostic(message=message, line=line, column=column, raw_text=raw_text)
