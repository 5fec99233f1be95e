"""
Configuration utilities for the Weekly Planner.

Reads and writes config.yaml. Values missing from the file fall back to
DEFAULT_CONFIG, section by section.
"""

import copy
import os

import yaml

from planner.export_utils import DEFAULT_SYSTEM_NAME

DEFAULT_CONFIG_PATH = "config.yaml"

DEFAULT_CONFIG = {
    "export": {
        "system_name": DEFAULT_SYSTEM_NAME,
        "output_dir": ".",
    },
    "layout": {},
    "logging": {
        "level": "INFO",
    },
}


def _merge(base: dict, override: dict) -> dict:
    merged = copy.deepcopy(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path=None) -> dict:
    """Load config.yaml merged over the defaults.

    Args:
        config_path: Path to the config file. Defaults to the
            PLANNER_CONFIG environment variable, then config.yaml.

    Returns:
        The merged config dict. A missing file yields the defaults.
    """
    if config_path is None:
        config_path = os.environ.get("PLANNER_CONFIG", DEFAULT_CONFIG_PATH)
    if not os.path.exists(config_path):
        return copy.deepcopy(DEFAULT_CONFIG)
    with open(config_path, "r") as f:
        loaded = yaml.safe_load(f) or {}
    if not isinstance(loaded, dict):
        raise ValueError(f"{config_path} must contain a mapping at the top level.")
    return _merge(DEFAULT_CONFIG, loaded)


def save_config(config, config_path=DEFAULT_CONFIG_PATH):
    """
    Write the config dict back to config.yaml.

    Args:
        config: Application config dict to persist
        config_path: Path to config file (default: config.yaml)
    """
    with open(config_path, "w") as f:
        yaml.safe_dump(config, f, default_flow_style=False, sort_keys=False)
