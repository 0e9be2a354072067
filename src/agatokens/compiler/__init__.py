from .driver import TokensDriver, DumpSuccess, DumpFailure, DumpResult, ToolNotFoundError, ToolTimeoutError
