"""
Source-file checks for Agal programs.
"""
from pathlib import Path

SUPPORTED_EXTENSIONS = {".aga"}


def is_supported(file_path: str) -> bool:
    """Return True if the file extension is supported."""
    return Path(file_path).suffix.lower() in SUPPORTED_EXTENSIONS
