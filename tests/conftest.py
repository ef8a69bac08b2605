from __future__ import annotations

from unittest.mock import patch

import pytest

from epictrack.db import MemoryDatabase, Store


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path):
    """Keep tests away from the real ~/.config/epictrack/config.toml."""
    config_dir = tmp_path / "config"
    with patch("epictrack.config.CONFIG_DIR", config_dir), \
         patch("epictrack.config.CONFIG_FILE", config_dir / "config.toml"), \
         patch("epictrack.config.DEFAULT_DATA_FILE", tmp_path / "data" / "db.json"):
        yield


@pytest.fixture
def store() -> Store:
    return Store(MemoryDatabase())
