import json
import tempfile
from pathlib import Path
from typing import Any, Dict

DEFAULT_CONFIG: Dict[str, Any] = {
    "tool": "agalang-core",
    "timeout": None,  # seconds; None waits for the tool to exit
    "log_file": str(Path(tempfile.gettempdir()) / "agatokens_engine.log"),
}


class ConfigManager:
    """
    Loads and persists user settings from ~/.agatokens/config.json.
    Missing keys fall back to DEFAULT_CONFIG.
    """
    def __init__(self):
        self.config_dir = Path.home() / ".agatokens"
        self.config_file = self.config_dir / "config.json"
        self.config = self.load_config()

    def load_config(self) -> Dict[str, Any]:
        self.config_dir.mkdir(parents=True, exist_ok=True)
        config = DEFAULT_CONFIG.copy()

        if not self.config_file.exists():
            return config

        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                user_config = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            print(f"Warning: Ignoring unreadable config {self.config_file}: {e}")
            return config

        if isinstance(user_config, dict):
            config.update(user_config)
        return config

    def save_config(self):
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, "w", encoding="utf-8") as f:
            json.dump(self.config, f, indent=2)

    def get(self, key: str, default: Any = None) -> Any:
        return self.config.get(key, default)

    def set(self, key: str, value: Any):
        self.config[key] = value
        self.save_config()
