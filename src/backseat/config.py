#!/usr/bin/env python3
"""
BACKSEAT CONFIGURATION
----------------------
Loads the YAML settings file. Connection settings (channel, nick, password)
belong to the chat transport and are carried through untouched; the engine
only reads the display and parsing options.

Example:

    channel: "#backseat"
    nick: streamer
    glyph: "▶"
    author_style: bold magenta
    log_level: INFO

Author: Backseat Team
Date: 2026-10-19
"""

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ruamel.yaml import YAML, YAMLError

from backseat.core.errors import ConfigError

logger = logging.getLogger("backseat.config")

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@dataclass
class BackseatConfig:
    """Settings consumed by the bridge and the CLI."""
    channel: str = ""               # Transport: chat channel to join
    nick: str = ""                  # Transport: identity used in the channel
    password: str = ""              # Transport: credential, never inspected
    glyph: str = "▶"                # Gutter glyph for annotated lines
    author_style: str = "bold magenta"  # rich style applied to author names
    separator: str = "; "           # Between comments in a reveal
    suffix_length: int = 9          # Width of the trailing chat timestamp
    log_level: str = "INFO"


def load_config(path: Optional[Union[str, Path]] = None) -> BackseatConfig:
    """
    Reads a YAML config file. No path means defaults.
    """
    if path is None:
        return BackseatConfig()

    config_path = Path(path)
    if not config_path.is_file():
        raise ConfigError(f"Config file not found: {config_path}")

    yaml = YAML(typ='safe')
    try:
        data = yaml.load(config_path.read_text(encoding='utf-8'))
    except YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}")

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{config_path}: top level must be a mapping")

    config = _from_mapping(data)
    logger.debug(f"Loaded configuration from {config_path}")
    return config


def _from_mapping(data: Dict[str, Any]) -> BackseatConfig:
    known = {f.name: f for f in fields(BackseatConfig)}

    for key, value in data.items():
        if key not in known:
            raise ConfigError(f"Unknown config key '{key}'")
        expected = int if key == "suffix_length" else str
        # bool is an int subclass; reject it explicitly
        if not isinstance(value, expected) or isinstance(value, bool):
            raise ConfigError(f"Config key '{key}' must be of type {expected.__name__}")

    config = BackseatConfig(**data)

    if config.suffix_length < 0:
        raise ConfigError("suffix_length must not be negative")
    config.log_level = config.log_level.upper()
    if config.log_level not in LOG_LEVELS:
        raise ConfigError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
    if not config.glyph:
        raise ConfigError("glyph must not be empty")

    return config
