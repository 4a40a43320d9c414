"""
Configuration loader for the ICHI decoder.

Handles loading decoder and dictionary settings from YAML files.
"""

import copy
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
import logging

logger = logging.getLogger(__name__)


DEFAULT_SETTINGS: Dict[str, Any] = {
    "decoder": {
        "not_found_placeholder": "(no dictionary entry)",
        "combined_separator": "&",
        "full_code_joiner": " & ",
        "stem_marker": ".",
        "stem_slots": 3,
        "extension_slots": 5,
    },
    "dictionary": {
        "parser": "lenient",
        "delimiter": ",",
        "encoding": "utf-8",
        "files": [],
    },
}


def _merge(defaults: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(defaults)
    for key, value in (overrides or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from YAML file, filling gaps with defaults.

    Args:
        config_path: Path to YAML config file, or None for defaults only

    Returns:
        Configuration dictionary
    """
    if config_path is None:
        return copy.deepcopy(DEFAULT_SETTINGS)

    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        config = yaml.safe_load(f) or {}

    logger.info(f"Loaded configuration from {config_path}")
    return _merge(DEFAULT_SETTINGS, config)


def get_decoder_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """Decoder section of a loaded configuration."""
    return config.get("decoder", DEFAULT_SETTINGS["decoder"])


def get_dictionary_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """Dictionary section of a loaded configuration."""
    return config.get("dictionary", DEFAULT_SETTINGS["dictionary"])


# Default configuration template
DEFAULT_CONFIG = """
# ICHI Decoder Configuration

decoder:
  # Shown in place of a description when a code is not in the dictionary
  not_found_placeholder: "(no dictionary entry)"
  combined_separator: "&"
  full_code_joiner: " & "
  # Tokens containing this marker are stem codes in combined input
  stem_marker: "."
  stem_slots: 3
  extension_slots: 5

dictionary:
  # lenient: plain comma split, quoted: CSV quoting rules
  parser: "lenient"
  delimiter: ","
  encoding: "utf-8"
  # Extra tables merged after the built-in seed
  files: []
"""


def create_default_config(output_path: str):
    """
    Create a default configuration file.

    Args:
        output_path: Path where to save the config file
    """
    output_path = Path(output_path)

    if output_path.exists():
        logger.warning(f"Config file already exists: {output_path}")
        return

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', encoding='utf-8') as f:
        f.write(DEFAULT_CONFIG)

    logger.info(f"Created default config at {output_path}")
