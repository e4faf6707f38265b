"""Configuration management for the placement experiment suite.

This module provides a thin, explicit wrapper around a JSON configuration file
to centralize experiment settings, timeouts and the search grid.

File format (high-level)
------------------------
- experiment_settings: N values, run counts, and output directory.
- timeout_settings: per-search time limit and global experiment timeout.
- search_settings: pieces (rooks/queens) and pruning checkers (masks/board).

All methods return Python native types; the class does not validate semantics
beyond presence of keys to keep responsibilities minimal.
"""
import json
from pathlib import Path


class ConfigManager:
    """Load, query, and persist configuration.

    Parameters
    ----------
    config_path : str | os.PathLike, default "config.json"
        Path to the configuration file.
    """

    def __init__(self, config_path="config.json"):
        self.config_path = Path(config_path)
        self.config = self.load_config()

    def load_config(self):
        """Load and parse the JSON configuration file.

        Returns
        -------
        dict
            Root configuration object.
        """
        if not self.config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {self.config_path}\n"
                f"Create it or use the default config.json template"
            )

        with open(self.config_path, 'r') as f:
            return json.load(f)

    def save_config(self):
        """Persist the current in-memory configuration to disk."""
        with open(self.config_path, 'w') as f:
            json.dump(self.config, f, indent=2)

    def get_experiment_settings(self):
        """Return high-level experiment settings (sizes, runs, output dir)."""
        return self.config.get("experiment_settings", {})

    def get_timeout_settings(self):
        """Return search and experiment timeout settings."""
        return self.config.get("timeout_settings", {})

    def get_search_settings(self):
        """Return the pieces and checkers to benchmark."""
        return self.config.get("search_settings", {})

    def get_pieces(self):
        return self.get_search_settings().get("pieces", ["rooks", "queens"])

    def get_checkers(self):
        return self.get_search_settings().get("checkers", ["masks", "board"])

    def update_setting(self, section, key, value):
        """Update a specific setting and persist the change immediately."""
        if section not in self.config:
            self.config[section] = {}
        self.config[section][key] = value
        self.save_config()
        print(f"Setting {section}.{key} saved to {self.config_path}")
