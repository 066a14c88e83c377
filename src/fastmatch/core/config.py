"""core.config
Configuration core: load/save helpers for config.ini.

This module provides a tiny ConfigManager used by the CLI and the screen
controller to read and persist matching settings. It purposely keeps a small
API: ConfigManager.load(), get(key, fallback), save() and search_params().
"""

import os
from configparser import ConfigParser
from pathlib import Path
from typing import Optional

from ..config.matching import (
    DEFAULT_STRICT_THRESHOLD,
    DEFAULT_WEAK_THRESHOLD,
    MAX_LEVEL_AUTO,
)


def _parse_bool(value) -> bool:
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


class ConfigManager:
    """Simple configuration manager backed by an INI file.

    Behaviour:
    - Uses a single DEFAULT section for lookups.
    - Creates the file with sensible defaults if it does not exist.
    - Defaults to a per-user config path (%APPDATA% on Windows,
      XDG_CONFIG_HOME or ~/.config on other systems) unless an explicit
      path is provided.
    """

    def __init__(self, config_path: Optional[str] = None) -> None:
        if config_path:
            self.config_path = Path(config_path)
        else:
            if os.name == "nt":
                base = Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming"))
            else:
                base = Path(os.getenv("XDG_CONFIG_HOME", Path.home() / ".config"))
            self.config_path = base.joinpath("fastmatch", "config.ini")

        self.config = ConfigParser()
        self.load()

    def load(self) -> None:
        """Load configuration from disk, filling in defaults for missing keys."""
        if self.config_path.exists():
            self.config.read(self.config_path)

        defaults = {
            "log_level": "INFO",
            "match_method": "ccoeff_normed",
            "weak_threshold": str(DEFAULT_WEAK_THRESHOLD),
            "strict_threshold": str(DEFAULT_STRICT_THRESHOLD),
            "max_level": "auto",
            "allow_level_zero_search": "False",
            "monitor": "1",
        }

        missing = [key for key in defaults if key not in self.config["DEFAULT"]]
        for key in missing:
            self.config["DEFAULT"][key] = defaults[key]

        # Save if we added any defaults to existing config
        if self.config_path.exists() and missing:
            self.save()

    def get(self, key: str, fallback=None):
        """Get a configuration value.

        Precedence is env (FM_<KEY>) > config.ini > fallback.
        """
        val = os.environ.get(f"FM_{str(key).upper()}")
        if val is not None and str(val) != "":
            return val
        return self.config["DEFAULT"].get(key, fallback)

    def save(self) -> None:
        """Persist current configuration to disk (creates parent directories)."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with self.config_path.open("w", encoding="utf-8") as fh:
            self.config.write(fh)

    def search_params(self):
        """Build SearchParams from the stored values.

        Raises ValueError for values that cannot be parsed.
        """
        from ..vision.search import SearchParams

        raw_level = str(self.get("max_level", "auto")).strip().lower()
        max_level = MAX_LEVEL_AUTO if raw_level in {"auto", "", "-1"} else int(raw_level)
        return SearchParams(
            method=self.get("match_method", "ccoeff_normed"),
            weak_threshold=float(self.get("weak_threshold", DEFAULT_WEAK_THRESHOLD)),
            strict_threshold=float(self.get("strict_threshold", DEFAULT_STRICT_THRESHOLD)),
            max_level=max_level,
            allow_level_zero_search=_parse_bool(self.get("allow_level_zero_search", "False")),
        )
