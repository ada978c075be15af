"""Configuration loading from environment variables and daybook.toml."""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

_CONFIG_FILENAME = "daybook.toml"


@dataclass
class DaybookConfig:
    """Top-level configuration. Created once per process."""

    data_dir: Path
    log_level: str = "INFO"


def load_config(config_path: Path | None = None) -> DaybookConfig:
    """Load configuration from environment variables and optional daybook.toml.

    Priority: environment variables > daybook.toml > defaults.
    """
    file_data: dict = {}
    if config_path and config_path.exists():
        file_data = tomllib.loads(config_path.read_text())
    else:
        for candidate in [Path.cwd() / _CONFIG_FILENAME, Path.home() / ".daybook" / _CONFIG_FILENAME]:
            if candidate.exists():
                file_data = tomllib.loads(candidate.read_text())
                break

    storage_data = file_data.get("storage", {})
    data_dir = os.getenv("DAYBOOK_DATA_DIR") or storage_data.get("data_dir") or Path.cwd() / "data"

    return DaybookConfig(
        data_dir=Path(data_dir).expanduser(),
        log_level=os.getenv("DAYBOOK_LOG_LEVEL", file_data.get("log_level", "INFO")),
    )


def setup_logging(level: str) -> None:
    # Logs go to stderr; stdout carries the MCP stdio stream.
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
