import sys
import os
import time
import argparse
from .engine import TokensEngine
from .utils.config import ConfigManager
from .utils.lang import is_supported
from .utils.report import print_diagnostic, print_declarations, print_error
from .utils.state import TokensState, RunOutcome

EXIT_OK = 0
EXIT_COMPILE_ERROR = 1
EXIT_MALFORMED = 2


def _build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser."""
    parser = argparse.ArgumentParser(description="agatokens: token dump and diagnostics for Agal sources")
    parser.add_argument("file", help="Agal source file (.aga)")
    parser.add_argument("--tool", help="Path or name of the agalang-core executable")
    parser.add_argument("--declarations", action="store_true", help="Print the declaration sites found in the file")
    parser.add_argument("--watch", action="store_true", help="Re-run on every save until interrupted")
    return parser


def report(state: TokensState, show_declarations: bool = False) -> int:
    """Print the outcome of one run and return its exit code."""
    if state.outcome == RunOutcome.TOKENS:
        if show_declarations:
            print_declarations(state.declarations)
        return EXIT_OK

    if state.outcome == RunOutcome.DIAGNOSTIC:
        print_diagnostic(state.diagnostic)
        return EXIT_COMPILE_ERROR

    if state.outcome == RunOutcome.UNRECOGNIZED:
        # Nothing to show; the raw output is in the engine log
        return EXIT_COMPILE_ERROR

    print_error(state.error or "unknown failure")
    return EXIT_MALFORMED


def run():
    parser = _build_parser()
    args = parser.parse_args()

    # Resolve to absolute path immediately
    abs_path = os.path.abspath(args.file)

    if not os.path.exists(abs_path):
        print(f"Error: File not found: {abs_path}")
        sys.exit(1)

    if not is_supported(abs_path):
        print("Error: Unsupported file type. Use .aga")
        sys.exit(1)

    config = ConfigManager()
    engine = TokensEngine(abs_path, config)
    if args.tool:
        engine.driver.set_tool(args.tool)

    if not args.watch:
        state = engine.refresh()
        sys.exit(report(state, args.declarations))

    engine.on_update_callback = lambda state: report(state, args.declarations)
    try:
        engine.start()
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        pass
    finally:
        engine.stop()
    sys.exit(EXIT_OK)


if __name__ == "__main__":
    run()
