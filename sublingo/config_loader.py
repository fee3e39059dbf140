"""Handles loading configuration from YAML files."""

import yaml
import os
import logging
from .exceptions import ConfigurationError
from .formats import SUPPORTED_FORMATS

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    'output_format': None, # None: same family as the input files
    'segment': True,
    'max_chars_per_segment': 50,
    'split_lookback_chars': 20,
    'translation_snap_radius': 5,
    'align_tolerance_ms': 200,
    'merge_auxiliary': False,
    'source_lang_priority': ['ja', 'en'],
    'target_lang_prefixes': ['zh'],
    'subtitle_dir': None,
    'output_dir': None,
    'log_dir': 'logs',
    'log_file': 'sublingo.log',
}

_POSITIVE_INT_KEYS = ('max_chars_per_segment',)
_NON_NEGATIVE_INT_KEYS = ('split_lookback_chars', 'translation_snap_radius', 'align_tolerance_ms')
_BOOL_KEYS = ('segment', 'merge_auxiliary')
_LIST_KEYS = ('source_lang_priority', 'target_lang_prefixes')

class ConfigLoader:
    """Loads configuration settings from a YAML file."""

    def load_config(self, config_path: str) -> dict:
        """
        Loads configuration from the specified YAML file path.

        Args:
            config_path: The path to the YAML configuration file.

        Returns:
            A dictionary containing the loaded configuration settings.

        Raises:
            FileNotFoundError: If the configuration file does not exist.
            ConfigurationError: If the file cannot be parsed as YAML or
                              if there are other reading errors.
        """
        logger.info(f"Attempting to load configuration from: {config_path}")
        if not os.path.exists(config_path):
            logger.error(f"Configuration file not found at path: {config_path}")
            raise FileNotFoundError(f"Configuration file not found: {config_path}")
        if not os.path.isfile(config_path):
            logger.error(f"Configuration path is not a file: {config_path}")
            raise ConfigurationError(f"Configuration path is not a file: {config_path}")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"Error parsing YAML configuration file {config_path}: {e}", exc_info=True)
            raise ConfigurationError(f"Invalid YAML format in {config_path}: {e}") from e
        except IOError as e:
            logger.error(f"Error reading configuration file {config_path}: {e}", exc_info=True)
            raise ConfigurationError(f"Could not read configuration file {config_path}: {e}") from e

        if not isinstance(config, dict):
            # Handle cases where YAML loads something other than a dictionary (e.g., just a string)
            logger.error(f"Configuration file {config_path} did not load as a dictionary (root object).")
            raise ConfigurationError(f"Invalid YAML structure in {config_path}. Root must be a mapping (dictionary).")
        logger.info(f"Configuration loaded successfully from {config_path}")
        return config

    def with_defaults(self, config: dict = None) -> dict:
        """
        Overlays `config` on DEFAULT_CONFIG and validates the result.

        Raises:
            ConfigurationError: If a setting has the wrong type or range.
        """
        merged = dict(DEFAULT_CONFIG)
        merged.update(config or {})

        fmt = merged['output_format']
        if fmt is not None and str(fmt).lower() not in SUPPORTED_FORMATS:
            raise ConfigurationError(f"Unsupported output_format '{fmt}'")
        for key in _POSITIVE_INT_KEYS:
            if not _is_int(merged[key]) or merged[key] < 1:
                raise ConfigurationError(f"'{key}' must be a positive integer, got {merged[key]!r}")
        for key in _NON_NEGATIVE_INT_KEYS:
            if not _is_int(merged[key]) or merged[key] < 0:
                raise ConfigurationError(f"'{key}' must be a non-negative integer, got {merged[key]!r}")
        for key in _BOOL_KEYS:
            if not isinstance(merged[key], bool):
                raise ConfigurationError(f"'{key}' must be true or false, got {merged[key]!r}")
        for key in _LIST_KEYS:
            if not isinstance(merged[key], list) or not all(isinstance(item, str) for item in merged[key]):
                raise ConfigurationError(f"'{key}' must be a list of language tags")
        return merged

def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
