from typing import Callable, Optional
from .compiler.driver import TokensDriver, DumpFailure, ToolNotFoundError, ToolTimeoutError
from .parsing import process_tokens, extract_diagnostic, strip_ansi, MalformedDiagnostic, MalformedTokenRecord
from .utils.config import ConfigManager, DEFAULT_CONFIG
from .utils.state import TokensState, RunOutcome
from .utils.watcher import FileWatcher
import time


class TokensEngine:
    def __init__(self, source_file: str, config_manager: Optional[ConfigManager] = None):
        self.config = config_manager if config_manager else ConfigManager()
        self.state = TokensState(source_path=source_file)
        self.driver = TokensDriver(self.config)
        self.watcher = FileWatcher()
        self.on_update_callback: Optional[Callable[[TokensState], None]] = None
        self.log_file = self.config.get("log_file") or DEFAULT_CONFIG["log_file"]

    def _log(self, msg: str):
        with open(self.log_file, "a", encoding="utf-8") as f:
            f.write(f"[{time.time()}] {msg}\n")

    def start(self):
        self.refresh()
        self.watcher.start_watching(self.state.source_path, self._on_file_saved)

    def stop(self):
        self.watcher.stop_watching()

    def _on_file_saved(self, path: str):
        self.refresh()

    def refresh(self) -> TokensState:
        """
        Dumps tokens for the source file and records the outcome on the state.
        Every failure of the run is caught here.
        """
        self._log(f"Refreshing {self.state.source_path}")
        self.state.reset()
        try:
            result = self.driver.dump_tokens(self.state.source_path)

            if isinstance(result, DumpFailure):
                self._handle_failure(result)
            else:
                self.state.compiler_output = result.stderr
                tokens, declarations = process_tokens(result.stdout)
                self.state.update_tokens(tokens, declarations)
                self._log(f"Parsed {len(tokens)} tokens, {len(declarations)} declarations")

        except MalformedTokenRecord as e:
            self._log(f"Malformed tokens output: {e}")
            self.state.outcome = RunOutcome.MALFORMED
            self.state.error = str(e)
        except (ToolNotFoundError, ToolTimeoutError) as e:
            self._log(f"Tool Error: {e}")
            self.state.outcome = RunOutcome.INTERNAL_ERROR
            self.state.error = str(e)
        except Exception as e:
            self._log(f"Refresh Error: {e}")
            self.state.outcome = RunOutcome.INTERNAL_ERROR
            self.state.error = f"Internal Engine Error: {e}"

        self.state.last_update = time.time()
        if self.on_update_callback:
            self.on_update_callback(self.state)
        return self.state

    def _handle_failure(self, result: DumpFailure):
        self.state.compiler_output = result.stderr
        self._log(f"Tool exited with {result.returncode}")
        try:
            diagnostic = extract_diagnostic(result.stderr)
        except MalformedDiagnostic as e:
            self._log(f"Malformed diagnostic: {e}")
            self.state.outcome = RunOutcome.MALFORMED
            self.state.error = str(e)
            return

        if diagnostic is None:
            first_line = strip_ansi(result.stderr.split("\n")[0])
            self._log(f"Unrecognized tool output: {first_line!r}")
            self.state.outcome = RunOutcome.UNRECOGNIZED
            return

        self._log(f"Diagnostic: {diagnostic.message} at {diagnostic.line}:{diagnostic.column}")
        self.state.update_diagnostic(diagnostic)
