import os
import sys
import argparse
import logging
from dataclasses import asdict, dataclass, field, fields
from typing import List, Optional, Sequence

import yaml

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "pluginpack.yaml"


class ConfigError(Exception):
    """Raised when the packaging configuration cannot be used."""


@dataclass
class PackConfig:
    plugin_id: str = "w-obsidian-webpage-export"
    files: List[str] = field(default_factory=lambda: ["main.js", "manifest.json"])
    optional_files: List[str] = field(default_factory=lambda: ["styles.css"])
    output_dir: str = "./releases"


def _check_type(key: str, value) -> None:
    if key in ("plugin_id", "output_dir"):
        if not isinstance(value, str) or not value:
            raise ConfigError(f"'{key}' must be a non-empty string")
    elif not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{key}' must be a list of file names")


def load_config(project_dir: str, config_path: Optional[str] = None) -> PackConfig:
    """
    Load packaging settings from a YAML file on top of the defaults.

    Without an explicit path, ``pluginpack.yaml`` in the project directory
    is used if it exists. An explicit path must exist.
    """
    config = PackConfig()

    if config_path is None:
        config_path = os.path.join(project_dir, DEFAULT_CONFIG_NAME)
        if not os.path.exists(config_path):
            logger.debug(f"No {DEFAULT_CONFIG_NAME} in {project_dir}, using defaults")
            return config
    elif not os.path.exists(config_path):
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Could not read {config_path}: {e}") from e

    if data is None:
        return config
    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain a mapping at the top level")

    known = {f.name for f in fields(PackConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown keys in {config_path}: {', '.join(map(str, unknown))}")

    for key, value in data.items():
        _check_type(key, value)
        setattr(config, key, value)

    logger.info(f"Loaded config: {config_path}")
    return config


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Show the effective packaging configuration.")
    parser.add_argument("project_dir", nargs="?", default=".", help="Plugin project directory")
    parser.add_argument("--config", "-c", help="Path to a YAML config file")
    args = parser.parse_args(argv)

    try:
        config = load_config(args.project_dir, args.config)
    except ConfigError as e:
        logger.error(f"Error: {e}")
        return 1

    print(yaml.safe_dump(asdict(config), sort_keys=False), end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())
