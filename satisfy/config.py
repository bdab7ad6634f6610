#!/usr/bin/env python3

import os
import json
import tomllib
from pathlib import Path

import logging
import sys

import yaml

# Configure logging
_handler = logging.StreamHandler(sys.stderr)  # stdout is reserved for the manifest
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(message)s",
    handlers=[_handler]
)
logger = logging.getLogger("satisfy")

CONFIG_FILENAMES = ['config.json', 'config.toml', 'config.yaml', 'config.yml']
ENV_PREFIX = "SATISFY_"


def get_config_path():
    """Get the path to the settings file.

    Checks in order:
    1. SATISFY_CONFIG environment variable
    2. ~/.satisfy/ directory
    """
    if 'SATISFY_CONFIG' in os.environ:
        path = Path(os.environ['SATISFY_CONFIG'])
        if path.exists():
            return path

    satisfy_dir = Path.home() / '.satisfy'
    for filename in CONFIG_FILENAMES:
        path = satisfy_dir / filename
        if path.exists():
            return path

    return satisfy_dir / 'config.json'


def get_default_config():
    """Get default configuration."""
    return {
        "git": {
            "binary": "git",
            "timeout_seconds": 60
        },
        "resolution": {
            "strict": False,           # No qualifying versions is fatal
            "sort_versions": False,    # Keep ls-remote order
            "include_branches": True,  # Publish branches as dev- versions
            "max_workers": 1           # Concurrent ref listings
        },
        "logging": {
            "level": "INFO",
            "format": "%(levelname)s: %(message)s"
        }
    }


def load_config():
    """Load settings: defaults, then the settings file, then the environment."""
    config_path = get_config_path()

    config = get_default_config()

    if config_path.exists():
        try:
            if config_path.suffix.lower() == '.toml':
                with open(config_path, 'rb') as f:
                    file_config = tomllib.load(f)
            elif config_path.suffix.lower() in ['.yaml', '.yml']:
                with open(config_path, 'r') as f:
                    file_config = yaml.safe_load(f)
            else:
                with open(config_path, 'r') as f:
                    file_config = json.load(f)

            if isinstance(file_config, dict):
                config = merge_configs(config, file_config)
            else:
                logger.warning(f"Ignoring {config_path}: expected a mapping")
        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.error(f"Error loading config from {config_path}: {e}")

    config = apply_env_overrides(config)

    return config


def merge_configs(base_config, override_config):
    """
    Recursively merge two configuration dictionaries.

    Args:
        base_config (dict): Base configuration
        override_config (dict): Configuration to merge/override with

    Returns:
        dict: Merged configuration
    """
    merged = base_config.copy()

    for key, value in override_config.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = value

    return merged


def _typed(value):
    """Convert an environment string to bool/int where it looks like one."""
    if value.lower() in ('true', '1', 'yes', 'on'):
        return True
    if value.lower() in ('false', '0', 'no', 'off'):
        return False
    if value.isdigit():
        return int(value)
    return value


def apply_env_overrides(config):
    """
    Apply environment variable overrides to configuration.
    Environment variables follow the pattern: SATISFY_SECTION_KEY
    For example: SATISFY_GIT_TIMEOUT_SECONDS=30, SATISFY_RESOLUTION_STRICT=true

    Keys may contain underscores; the longest matching key wins at each level.
    """
    for env_key, value in os.environ.items():
        if not env_key.startswith(ENV_PREFIX) or env_key == 'SATISFY_CONFIG':
            continue

        parts = env_key[len(ENV_PREFIX):].lower().split('_')
        level = config
        i = 0
        while i < len(parts):
            matched = None
            for key in level:
                key_parts = key.split('_')
                if parts[i:i + len(key_parts)] == key_parts:
                    if matched is None or len(key_parts) > len(matched.split('_')):
                        matched = key
            if matched is None:
                break

            i += len(matched.split('_'))
            if i == len(parts):
                level[matched] = _typed(value)
                break
            if not isinstance(level[matched], dict):
                break
            level = level[matched]

    return config


def configure_logging(config=None, verbose=False, quiet=False):
    """
    Set the satisfy log level from settings and CLI flags.

    --verbose wins over --quiet, which wins over the configured level.
    """
    config = config or get_default_config()
    log_config = config.get('logging', {})

    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = getattr(logging, str(log_config.get('level', 'INFO')).upper(), logging.INFO)

    logger.setLevel(level)

    fmt = log_config.get('format')
    if fmt:
        _handler.setFormatter(logging.Formatter(fmt))
