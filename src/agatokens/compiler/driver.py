"""
Subprocess boundary around `agalang-core tokens <file>`.
A compile error reported by the tool is a normal DumpFailure result;
only a missing or hung tool is raised.
"""
import subprocess
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union
from ..utils.config import ConfigManager


@dataclass(frozen=True)
class DumpSuccess:
    stdout: str
    stderr: str = ""


@dataclass(frozen=True)
class DumpFailure:
    stderr: str
    returncode: int


DumpResult = Union[DumpSuccess, DumpFailure]


class ToolNotFoundError(FileNotFoundError):
    pass


class ToolTimeoutError(TimeoutError):
    pass


class TokensDriver:
    def __init__(self, config_manager: Optional[ConfigManager] = None):
        self.config = config_manager if config_manager else ConfigManager()
        self.set_tool(self.config.get("tool") or "agalang-core")

    def set_tool(self, tool: str):
        """
        Updates the tool used by the driver. An unresolved tool is kept so the
        error surfaces on the next dump rather than at startup.
        """
        self.tool = tool
        self.tool_path = self._resolve(tool)

    @staticmethod
    def _resolve(tool: str) -> Optional[str]:
        path = shutil.which(tool)
        if path:
            return path

        name = Path(tool).name
        # Common cargo install / build locations
        candidates = [
            Path.home() / ".cargo" / "bin" / name,
            Path.cwd() / "target" / "release" / name,
            Path.cwd() / "target" / "debug" / name,
        ]
        for c in candidates:
            if c.exists():
                return str(c)
        return None

    @staticmethod
    def discover_tools() -> List[str]:
        """Returns the agalang-core executables found on PATH."""
        candidates = ["agalang-core", "agal"]
        return [c for c in candidates if shutil.which(c)]

    def build_command(self, source_file: str) -> List[str]:
        if not self.tool_path:
            raise ToolNotFoundError(f"Tool '{self.tool}' not configured or not found.")
        return [self.tool_path, "tokens", str(Path(source_file).resolve())]

    def dump_tokens(self, source_file: str) -> DumpResult:
        """
        Runs the tokens dump synchronously.
        Returns DumpSuccess with the JSON on stdout, or DumpFailure with stderr.
        Raises ToolTimeoutError when the configured timeout expires.
        """
        command = self.build_command(source_file)
        timeout = self.config.get("timeout")

        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                encoding="utf-8",
                check=False,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise ToolTimeoutError(f"Tool '{self.tool}' timed out after {timeout}s") from e

        if result.returncode != 0:
            return DumpFailure(stderr=result.stderr or "", returncode=result.returncode)

        return DumpSuccess(stdout=result.stdout, stderr=result.stderr or "")
