from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

CONFIG_DIR = Path.home() / ".config" / "epictrack"
CONFIG_FILE = CONFIG_DIR / "config.toml"

DEFAULT_DATA_FILE = Path.home() / ".local" / "share" / "epictrack" / "db.json"

DEFAULT_CONFIG = """\
[storage]
# JSON file holding every epic and story.
data_file = "~/.local/share/epictrack/db.json"

[display]
# Clear the terminal before drawing each page.
clear_screen = true
"""


@dataclass
class Config:
    data_file: Path
    clear_screen: bool  # clear the terminal between pages

    @classmethod
    def load(cls) -> Config:
        if CONFIG_FILE.exists():
            with open(CONFIG_FILE, "rb") as f:
                data = tomllib.load(f)
        else:
            data = {}

        storage = data.get("storage", {})
        data_file = Path(storage.get("data_file", str(DEFAULT_DATA_FILE))).expanduser()

        display = data.get("display", {})
        clear_screen = display.get("clear_screen", True)
        if not isinstance(clear_screen, bool):
            raise ValueError("display.clear_screen must be true or false.")

        return cls(data_file=data_file, clear_screen=clear_screen)


def get_config() -> Config:
    return Config.load()


def ensure_config() -> Path:
    """Create default config file if it doesn't exist. Returns config path."""
    if not CONFIG_FILE.exists():
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        CONFIG_FILE.write_text(DEFAULT_CONFIG)
    return CONFIG_FILE
