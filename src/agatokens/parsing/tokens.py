"""
Token records reported by `agalang-core tokens` and the declaration filter.
"""
import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple


class SyntaxTokenType(str, Enum):
    CLASS = "Class"
    FUNCTION = "Function"
    VARIABLE = "Variable"
    PARAMETER = "Parameter"
    MODULE = "Module"
    KEYWORD_CONTROL = "KeywordControl"

    @property
    def editor_name(self) -> str:
        return _TYPE_EDITOR_NAMES[self]


class SyntaxTokenModifier(str, Enum):
    CONSTANT = "Constant"
    ITERABLE = "Iterable"

    @property
    def editor_name(self) -> str:
        return _MODIFIER_EDITOR_NAMES[self]


# Semantic-token names used by editors
_TYPE_EDITOR_NAMES = {
    SyntaxTokenType.CLASS: "class",
    SyntaxTokenType.FUNCTION: "function",
    SyntaxTokenType.VARIABLE: "variable",
    SyntaxTokenType.PARAMETER: "parameter",
    SyntaxTokenType.MODULE: "module",
    SyntaxTokenType.KEYWORD_CONTROL: "keyword",
}

_MODIFIER_EDITOR_NAMES = {
    SyntaxTokenModifier.CONSTANT: "readonly",
    SyntaxTokenModifier.ITERABLE: "iterable",
}


class MalformedTokenRecord(ValueError):
    def __init__(self, reason: str, index: Optional[int] = None, record: Any = None):
        self.reason = reason
        self.index = index
        self.record = record
        where = f"token #{index}" if index is not None else "token"
        super().__init__(f"Malformed {where}: {reason}")


@dataclass(frozen=True)
class Position:
    line: int
    column: int


@dataclass(frozen=True)
class Span:
    start: Position
    end: Position
    length: int = 0
    file_name: str = ""


@dataclass(frozen=True)
class TokenRecord:
    definition: Optional[Position]
    location: Optional[Span]
    token_type: Optional[str] = None
    token_modifier: Tuple[str, ...] = ()
    data_type: Any = field(default=None, compare=False)
    is_original_decl: bool = False
    extra: Dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def kind(self) -> Optional[SyntaxTokenType]:
        """The token type as a known enum member, or None for names we don't know."""
        try:
            return SyntaxTokenType(self.token_type)
        except ValueError:
            return None

    @property
    def modifiers(self) -> List[SyntaxTokenModifier]:
        known = []
        for name in self.token_modifier:
            try:
                known.append(SyntaxTokenModifier(name))
            except ValueError:
                continue
        return known


_KNOWN_KEYS = {"definition", "location", "token_type", "token_modifier", "data_type", "is_original_decl"}


def _position(raw: Any, what: str, index: int, record: Any) -> Position:
    if not isinstance(raw, dict):
        raise MalformedTokenRecord(f"'{what}' is missing or not an object", index, record)
    line, column = raw.get("line"), raw.get("column")
    # bool is an int subclass but never a valid coordinate
    for name, value in (("line", line), ("column", column)):
        if not isinstance(value, int) or isinstance(value, bool):
            raise MalformedTokenRecord(f"'{what}.{name}' is not an integer", index, record)
    return Position(line=line, column=column)


def token_from_dict(raw: Any, index: int = 0) -> TokenRecord:
    if not isinstance(raw, dict):
        raise MalformedTokenRecord("record is not an object", index, raw)

    definition = _position(raw.get("definition"), "definition", index, raw)

    location = raw.get("location")
    if not isinstance(location, dict):
        raise MalformedTokenRecord("'location' is missing or not an object", index, raw)
    span = Span(
        start=_position(location.get("start"), "location.start", index, raw),
        end=_position(location.get("end"), "location.end", index, raw),
        length=location.get("length", 0),
        file_name=location.get("file_name", ""),
    )

    modifiers = raw.get("token_modifier") or []
    return TokenRecord(
        definition=definition,
        location=span,
        token_type=raw.get("token_type"),
        token_modifier=tuple(modifiers),
        data_type=raw.get("data_type"),
        is_original_decl=bool(raw.get("is_original_decl", False)),
        extra={k: v for k, v in raw.items() if k not in _KNOWN_KEYS},
    )


def parse_tokens(json_text: str) -> List[TokenRecord]:
    """
    Decodes the JSON array printed by a successful tokens dump.
    Raises MalformedTokenRecord on invalid JSON or on the first bad record.
    """
    try:
        data = json.loads(json_text)
    except json.JSONDecodeError as e:
        raise MalformedTokenRecord(f"invalid JSON ({e.msg} at line {e.lineno})") from e

    if not isinstance(data, list):
        raise MalformedTokenRecord(f"expected a JSON array, got {type(data).__name__}")

    return [token_from_dict(raw, i) for i, raw in enumerate(data)]


def is_declaration(token: TokenRecord) -> bool:
    """True when the token sits on the declaration it refers to."""
    if token.definition is None or token.location is None:
        raise MalformedTokenRecord("missing 'definition' or 'location'", record=token)
    start = token.location.start
    return token.definition.line == start.line and token.definition.column == start.column


def filter_declarations(tokens: Iterable[TokenRecord]) -> Iterator[TokenRecord]:
    for index, token in enumerate(tokens):
        try:
            keep = is_declaration(token)
        except MalformedTokenRecord as e:
            raise MalformedTokenRecord(e.reason, index, token) from None
        if keep:
            yield token
