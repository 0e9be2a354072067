from .tokens import (
    TokenRecord,
    Position,
    Span,
    SyntaxTokenType,
    SyntaxTokenModifier,
    MalformedTokenRecord,
    parse_tokens,
    filter_declarations,
    is_declaration,
)
from .diagnostics import (
    Diagnostic,
    MalformedDiagnostic,
    ERROR_PREFIX,
    extract_diagnostic,
    strip_ansi,
)
from typing import List, Tuple


def process_tokens(json_text: str) -> Tuple[List[TokenRecord], List[TokenRecord]]:
    """
    Pipeline: Raw JSON -> Token records -> Declaration sites
    Returns: (all tokens, declarations)
    """
    tokens = parse_tokens(json_text)
    return tokens, list(filter_declarations(tokens))
