# installer/config_loader.py
# -*- coding: utf-8 -*-
"""
Configuration loader for the installer.

Handles loading settings from Pydantic model defaults, a YAML file,
environment variables and command-line arguments, applying this order of
precedence:
1. Pydantic Model Defaults
2. Environment Variables (PAPERLESS_INSTALL_ prefix, '__' between nested keys)
3. YAML Configuration File
4. Command-Line Arguments
"""

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from installer.config_models import AppSettings

module_logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "config.yaml"


def _deep_update(
    source: Dict[str, Any], overrides: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Recursively updates a dictionary `source` with values from another dictionary
    `overrides`. If a key exists in both dictionaries and its corresponding value
    is a dictionary, the function updates the nested dictionary recursively.
    Otherwise, it replaces or adds the value for the key in the `source` with the
    value from `overrides`. None never overwrites an existing value.

    Returns:
        Dict[str, Any]:
            The updated dictionary after applying all `overrides` to the input `source`.
    """
    for key, value in overrides.items():
        if (
            isinstance(value, dict)
            and key in source
            and isinstance(source[key], dict)
        ):
            source[key] = _deep_update(source[key], value)
        elif value is not None:
            source[key] = value
        elif key not in source:
            source[key] = value
    return source


def read_yaml_config(
    config_file_path: Path,
    current_logger: Optional[logging.Logger] = None,
) -> Dict[str, Any]:
    """
    Read a YAML mapping from config_file_path.

    A missing file, an unparsable file or a document that is not a mapping
    yields an empty dictionary and a log message.
    """
    logger_to_use = current_logger if current_logger else module_logger

    if not config_file_path.is_file():
        logger_to_use.info(
            f"Configuration file '{config_file_path}' not found. Using defaults, environment variables, and CLI args."
        )
        return {}

    try:
        with open(config_file_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger_to_use.warning(
            f"Could not parse YAML config file '{config_file_path}': {e}. Using defaults and environment variables."
        )
        return {}
    except IOError as e:
        logger_to_use.warning(
            f"Could not read config file '{config_file_path}': {e}. Using defaults and environment variables."
        )
        return {}

    if yaml_data is None:
        return {}
    if not isinstance(yaml_data, dict):
        logger_to_use.warning(
            f"Config file '{config_file_path}' does not contain a valid YAML dictionary. Ignoring."
        )
        return {}

    logger_to_use.info(f"Loaded main configuration from {config_file_path}")
    return yaml_data


def _cli_overrides(cli_args: argparse.Namespace) -> Dict[str, Any]:
    """Map parsed CLI arguments onto the nested settings layout."""
    cli_arg_dict = vars(cli_args)
    overrides: Dict[str, Any] = {}

    for cli_key, cli_value in cli_arg_dict.items():
        if cli_value is None:
            continue

        if cli_key == "non_interactive":
            # store_true flags only ever switch the setting on
            if cli_value:
                overrides["non_interactive"] = True
        elif cli_key == "log_prefix":
            overrides["log_prefix"] = cli_value
        elif cli_key == "credentials_file":
            overrides["credentials_file"] = str(cli_value)
        elif cli_key == "install_dir":
            overrides.setdefault("paperless", {})["install_dir"] = str(cli_value)
        elif cli_key == "paperless_version":
            overrides.setdefault("paperless", {})["version"] = cli_value

    return overrides


def load_app_settings(
    cli_args: Optional[argparse.Namespace] = None,
    config_file_path: str = DEFAULT_CONFIG_FILE,
    current_logger: Optional[logging.Logger] = None,
) -> AppSettings:
    """
    Loads application settings with the following precedence:
    1. Pydantic Model Defaults.
    2. Environment Variables (Pydantic BaseSettings loads these).
    3. Values from the YAML configuration file.
    4. Command-Line Arguments (highest precedence, overrides all else).

    Args:
        cli_args: Parsed command-line arguments (from argparse).
        config_file_path: Path to the YAML configuration file.
        current_logger: Optional logger to use instead of the module logger.

    Returns:
        An instance of AppSettings with the fully resolved configuration.

    Raises:
        SystemExit: If the merged configuration fails validation.
    """
    logger_to_use = current_logger if current_logger else module_logger

    try:
        # Model defaults < environment variables
        settings_after_env_and_defaults = AppSettings()
    except ValidationError as e:
        logger_to_use.error(f"Configuration validation failed: {e}")
        raise SystemExit(f"Configuration error: {e}") from e

    current_values_dict = settings_after_env_and_defaults.model_dump(
        exclude_defaults=False
    )

    yaml_data = read_yaml_config(Path(config_file_path), logger_to_use)
    current_values_dict = _deep_update(current_values_dict, yaml_data)

    if cli_args:
        current_values_dict = _deep_update(
            current_values_dict, _cli_overrides(cli_args)
        )

    try:
        final_settings = AppSettings(**current_values_dict)
    except ValidationError as e:
        logger_to_use.error(f"Configuration validation failed: {e}")
        raise SystemExit(f"Configuration error: {e}") from e

    logger_to_use.info(
        "Successfully loaded and validated application settings"
    )

    return final_settings
