"""
Configuration utility functions
"""

from pathlib import Path
from typing import Any

import yaml


def load_yaml(filepath: str) -> dict[str, Any]:
    """
    Load YAML file and return as dictionary

    Args:
        filepath: Path to YAML file (relative or absolute)

    Returns:
        Dictionary with YAML data (empty dict for an empty file)

    Raises:
        FileNotFoundError: If file doesn't exist
        yaml.YAMLError: If YAML is invalid

    Example:
        >>> config = load_yaml("config/providers/streaming.yaml")
        >>> print(config['kafka']['consumer']['session_timeout_ms'])
        30000
    """
    path = Path(filepath)

    if not path.exists():
        raise FileNotFoundError(f"YAML file not found: {filepath}")

    with open(path) as f:
        return yaml.safe_load(f) or {}


def load_yaml_safe(filepath: str) -> dict[str, Any]:
    """
    Load YAML file with fallback to empty dict if file is missing or broken

    The service must start with built-in defaults when no tuning file is shipped.
    """
    try:
        return load_yaml(filepath)
    except (FileNotFoundError, yaml.YAMLError):
        return {}


def get_nested(config: dict[str, Any], *keys: str, default: Any = None) -> Any:
    """
    Walk nested dict keys, returning default as soon as a level is missing

    Example:
        >>> get_nested({"kafka": {"producer": {"acks": 1}}}, "kafka", "producer", "acks")
        1
        >>> get_nested({}, "kafka", "producer", "acks", default="all")
        'all'
    """
    node: Any = config
    for key in keys:
        if not isinstance(node, dict) or key not in node:
            return default
        node = node[key]
    return node
