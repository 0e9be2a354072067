from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional
from ..parsing.tokens import TokenRecord
from ..parsing.diagnostics import Diagnostic


class RunOutcome(str, Enum):
    PENDING = "pending"
    TOKENS = "tokens"
    DIAGNOSTIC = "diagnostic"
    UNRECOGNIZED = "unrecognized"
    MALFORMED = "malformed"
    INTERNAL_ERROR = "internal_error"


@dataclass
class TokensState:
    """
    The single source of truth for the latest tokens run.
    """
    source_path: str = ""

    # Success path
    tokens: List[TokenRecord] = field(default_factory=list)
    declarations: List[TokenRecord] = field(default_factory=list)

    # Failure path
    diagnostic: Optional[Diagnostic] = None
    compiler_output: str = ""
    error: str = ""

    outcome: RunOutcome = RunOutcome.PENDING
    last_update: float = 0.0

    @property
    def has_errors(self) -> bool:
        return self.outcome not in (RunOutcome.PENDING, RunOutcome.TOKENS)

    def reset(self):
        self.tokens = []
        self.declarations = []
        self.diagnostic = None
        self.compiler_output = ""
        self.error = ""
        self.outcome = RunOutcome.PENDING

    def update_tokens(self, tokens: List[TokenRecord], declarations: List[TokenRecord]):
        self.tokens = tokens
        self.declarations = declarations
        self.outcome = RunOutcome.TOKENS

    def update_diagnostic(self, diagnostic: Diagnostic):
        self.diagnostic = diagnostic
        self.outcome = RunOutcome.DIAGNOSTIC
