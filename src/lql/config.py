"""Configuration loading from lql.yml."""

import logging
import os
from dataclasses import dataclass, field

import yaml  # type: ignore[import-untyped]

from .constants import DEFAULT_REFERENCE_URL
from .function_list import load_registry
from .registry import CategoryRegistry

logger = logging.getLogger(__name__)


@dataclass
class LqlConfig:
    """Configuration for lql.

    Attributes:
        functions_file: Function list that replaces the built-in one.
        extra_functions: Function names added on top of the function list.
        reference_url: Function reference page used by `functions refresh`.
        styles: Rich style overrides keyed by category (e.g. "function").
    """

    functions_file: str | None = None
    extra_functions: list[str] = field(default_factory=list)
    reference_url: str = DEFAULT_REFERENCE_URL
    styles: dict[str, str] = field(default_factory=dict)


def _get_config_path() -> str:
    """Get the path to the lql config file."""
    return os.path.expanduser("~/.config/lql/lql.yml")


def _load_config_data() -> LqlConfig:
    """Load and validate the config file.

    Returns:
        LqlConfig with values from the file (defaults for missing keys).

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config file is malformed.
    """
    config_path = _get_config_path()

    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config: {e}") from e

    # An empty file is a valid, empty config
    if data is None:
        return LqlConfig()
    if not isinstance(data, dict):
        raise ValueError("Config must be a dictionary")

    config = LqlConfig()

    functions_file = data.get("functions_file")
    if functions_file is not None:
        if not isinstance(functions_file, str):
            raise ValueError("'functions_file' must be a string")
        config.functions_file = os.path.expanduser(functions_file)

    extra_functions = data.get("extra_functions", [])
    if not isinstance(extra_functions, list) or not all(
        isinstance(name, str) for name in extra_functions
    ):
        raise ValueError("'extra_functions' must be a list of strings")
    config.extra_functions = extra_functions

    reference_url = data.get("reference_url", DEFAULT_REFERENCE_URL)
    if not isinstance(reference_url, str):
        raise ValueError("'reference_url' must be a string")
    config.reference_url = reference_url

    styles = data.get("styles", {})
    if not isinstance(styles, dict):
        raise ValueError("'styles' must be a dictionary mapping categories to styles")
    for category, style in styles.items():
        if not isinstance(category, str) or not isinstance(style, str):
            raise ValueError(
                f"Style for '{category}' must be a string, got: {type(style)}"
            )
    config.styles = styles

    return config


def load_lql_config() -> LqlConfig:
    """Load lql config, falling back to defaults.

    Returns:
        LqlConfig with values from config or defaults.
    """
    try:
        return _load_config_data()
    except FileNotFoundError:
        return LqlConfig()
    except ValueError as e:
        logger.warning(f"Ignoring malformed config {_get_config_path()}: {e}")
        return LqlConfig()


def build_registry(config: LqlConfig) -> CategoryRegistry:
    """Build the registry described by config.

    Args:
        config: The loaded configuration.

    Returns:
        The built-in registry, or one loaded from config.functions_file,
        extended with config.extra_functions.
    """
    if config.functions_file:
        registry = load_registry(config.functions_file)
    else:
        registry = CategoryRegistry.default()

    if config.extra_functions:
        registry = registry.with_functions(
            registry.functions | frozenset(config.extra_functions)
        )
    return registry
