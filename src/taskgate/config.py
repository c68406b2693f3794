"""Configuration management for taskgate."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

TASKGATE_HOME = Path(os.environ.get("TASKGATE_HOME", Path.home() / "taskgate"))
CONFIG_FILE = TASKGATE_HOME / "config" / "taskgate.conf"
DATA_DIR = TASKGATE_HOME / "data"

OUTPUT_FORMATS = ("text", "json", "delimited")


@dataclass
class Config:
    """taskgate configuration."""

    snapshot_file: str = ""
    timezone: str = "America/Toronto"
    output_format: str = "text"
    max_results: int = 0

    @property
    def snapshot_path(self) -> Path:
        """Configured snapshot file, or the default under DATA_DIR."""
        if self.snapshot_file:
            return Path(self.snapshot_file).expanduser()
        return DATA_DIR / "snapshot.json"


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment from an unquoted value."""
    # Handle quoted values with inline comments: "value" # comment
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        if end_quote != -1:
            return value[1:end_quote]
        return value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        return value.split("#")[0].strip()
    return value


def load_config(config_file: Path | None = None) -> Config:
    """Load configuration from taskgate.conf file."""
    config = Config()
    config_file = config_file or CONFIG_FILE

    if not config_file.exists():
        return config

    for line in config_file.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "snapshot_file":
                config.snapshot_file = value
            case "timezone":
                config.timezone = value
            case "output_format":
                if value.lower() in OUTPUT_FORMATS:
                    config.output_format = value.lower()
                else:
                    logger.warning(f"Unknown OUTPUT_FORMAT {value!r}; using {config.output_format}")
            case "max_results":
                try:
                    config.max_results = max(0, int(value))
                except ValueError:
                    logger.warning(f"Failed to parse MAX_RESULTS: {value!r}")

    return config
