from .parsing import process_tokens, parse_tokens, filter_declarations, extract_diagnostic
from .engine import TokensEngine

__version__ = "0.1.0"
