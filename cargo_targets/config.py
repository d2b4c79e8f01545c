"""Configuration loading for the target dispatcher"""

import os
from dataclasses import dataclass
from pathlib import Path

import yaml

from .errors import ConfigError


DEFAULT_TOOL = 'cargo'
DEFAULT_BUILD_DIR = 'target'
DEFAULT_CONFIG_NAME = 'cargo-targets.yaml'

CONFIG_ENV = 'CARGO_TARGETS_CONFIG'
TOOL_ENV = 'CARGO_TARGETS_TOOL'
# Where cargo itself writes build output when set
BUILD_DIR_ENV = 'CARGO_TARGET_DIR'

KNOWN_KEYS = ('tool', 'build_dir')


@dataclass
class Config:
    tool: str = DEFAULT_TOOL
    build_dir: Path = Path(DEFAULT_BUILD_DIR)


def default_config(environ=None, cwd=None):
    """Built-in defaults, honoring the tool's own build directory variable"""
    environ = os.environ if environ is None else environ
    cwd = Path.cwd() if cwd is None else Path(cwd)
    build_dir = environ.get(BUILD_DIR_ENV) or DEFAULT_BUILD_DIR
    return Config(DEFAULT_TOOL, cwd / build_dir)


def read_config_file(path):
    """Read and validate a YAML config file

    Args:
        path: Path to the YAML file

    Returns:
        dict: Validated settings (subset of KNOWN_KEYS)

    Raises:
        ConfigError: If the file can't be read or has an invalid shape
    """
    try:
        with open(path) as f:
            content = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e.strerror}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {path}:\n{e}") from e

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigError(f"Config file {path} must contain a mapping at the top level")

    unknown = sorted(str(key) for key in content if key not in KNOWN_KEYS)
    if unknown:
        raise ConfigError(
            f"Unknown key(s) in config file {path}: {', '.join(unknown)}\n"
            f"Allowed keys: {', '.join(KNOWN_KEYS)}"
        )

    for key, value in content.items():
        if not isinstance(value, str) or not value:
            raise ConfigError(f"Config key '{key}' in {path} must be a non-empty string")

    return content


def load_config(environ=None, cwd=None):
    """Resolve the effective configuration

    Precedence, lowest first: defaults, YAML config file, environment.
    """
    environ = os.environ if environ is None else environ
    cwd = Path.cwd() if cwd is None else Path(cwd)

    config = default_config(environ, cwd)

    explicit = environ.get(CONFIG_ENV)
    if explicit:
        settings = read_config_file(cwd / explicit)
    elif (cwd / DEFAULT_CONFIG_NAME).exists():
        settings = read_config_file(cwd / DEFAULT_CONFIG_NAME)
    else:
        settings = {}

    if 'tool' in settings:
        config.tool = settings['tool']
    if 'build_dir' in settings:
        config.build_dir = cwd / settings['build_dir']

    if environ.get(TOOL_ENV):
        config.tool = environ[TOOL_ENV]

    return config
