# -*- coding: utf-8 -*-
"""
Optional JSON configuration for the command line tool.

The file is taken from --config, or from the first directory above the
working directory that holds a config.json or a .git folder. Command line
options override the values read from the file.
"""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULTS = {
    "model": "liu",
    "mode": "driver_nodes",
    "input_format": "auto",
    "output_format": "graphml",
    "undirected": False,
    "edge_measure": False,
    "targets": None,
    "trials": 100,
    "seed": None,
}


def find_repo_root(start: Path) -> Path:
    """Walk up to find a directory containing config.json or .git; fallback to start."""
    cur = start.resolve()
    for _ in range(8):
        if (cur / "config.json").exists() or (cur / ".git").exists():
            return cur
        if cur.parent == cur:
            break
        cur = cur.parent
    return start.resolve()


def load_config(path=None, start=None) -> dict:
    """
    Returns DEFAULTS updated with the values of the configuration file.

    An explicitly given path must exist; the auto-discovered config.json is
    optional.
    """
    config = dict(DEFAULTS)

    if path is not None:
        cfg_path = Path(path)
        if not cfg_path.exists():
            raise FileNotFoundError(f"config file not found: {cfg_path}")
    else:
        repo = find_repo_root(Path(start) if start else Path.cwd())
        cfg_path = repo / "config.json"
        if not cfg_path.exists():
            return config

    with open(cfg_path, "r", encoding="utf-8") as f:
        values = json.load(f)
    if not isinstance(values, dict):
        raise ValueError(f"{cfg_path}: expected a JSON object")

    for key, value in values.items():
        if key not in DEFAULTS:
            logger.warning("ignoring unknown config key '%s' in %s", key, cfg_path)
            continue
        config[key] = value

    logger.debug("loaded configuration from %s", cfg_path)
    return config
