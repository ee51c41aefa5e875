import logging
import os
import re

import tomllib

from mongofix.exceptions import ConfigurationError
from mongofix.utils import deep_merge

logger = logging.getLogger(__name__)

CONFIG_FILES = [".mongofix.toml", "mongofix.toml", "pyproject.toml"]


def _default_config():
    """Return the default configuration for mongofix.

    This is placed in a separate function so that every caller works on a
    fresh copy of the defaults, and tests can manipulate config freely.
    """
    return {
        "env": None,
        "gateway": {"provider": "memory"},
        "fixtures_dir": ".",
        "ignored_fields": ["_id"],
        "log_level": None,
        "custom": {},
    }


class Config(dict):
    ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")

    @classmethod
    def load_from_dict(cls, config: dict = None):
        """Load configuration from a dictionary."""
        config = cls._normalize_config(config or {})
        return cls(**cls._load_env_vars(config))

    @classmethod
    def load_from_path(cls, path: str):
        """Load configuration from the first config file found near `path`.

        `path` may be a file or a directory. The directory and up to two of
        its parents are searched for `.mongofix.toml`, `mongofix.toml` and
        `pyproject.toml`, in that order.
        """
        config_file_name = cls.find_config_file(path)
        if not config_file_name:
            raise ConfigurationError(f"No configuration file found in {path}")

        return cls._load_file(config_file_name)

    @classmethod
    def load(cls, path: str):
        """Load configuration near `path`, falling back on defaults"""
        config_file_name = cls.find_config_file(path)
        if config_file_name:
            return cls._load_file(config_file_name)
        return cls.load_from_dict()

    @classmethod
    def _load_file(cls, config_file_name: str):
        with open(config_file_name, "rb") as f:
            config = tomllib.load(f)

        # If pyproject.toml, extract mongofix configuration
        #   from the 'tool.mongofix' section
        if config_file_name.endswith("pyproject.toml"):
            config = config.get("tool", {}).get("mongofix", {})

        logger.debug(f"Configuration loaded from {config_file_name}")
        return cls.load_from_dict(config)

    @classmethod
    def find_config_file(cls, path: str):
        path = os.path.abspath(path)
        current_dir = path if os.path.isdir(path) else os.path.dirname(path)

        for _ in range(3):  # Check the current directory and up to 2 parent directories
            for config_file in CONFIG_FILES:
                config_file_path = os.path.join(current_dir, config_file)
                if os.path.exists(config_file_path) and cls._holds_config(
                    config_file_path
                ):
                    return config_file_path

            current_dir = os.path.dirname(current_dir)  # Move to the parent directory

        return None

    @classmethod
    def _holds_config(cls, config_file_path):
        # A pyproject.toml without a [tool.mongofix] table belongs to someone else
        if not config_file_path.endswith("pyproject.toml"):
            return True

        with open(config_file_path, "rb") as f:
            return "mongofix" in tomllib.load(f).get("tool", {})

    @classmethod
    def _normalize_config(cls, config):
        """Normalize configuration values.

        This method accepts a dictionary and combines the values from the
        configured environment to create a finalized configuration dictionary.
        """
        # Extract the value of MONGOFIX_ENV environment variable
        environment = os.environ.get("MONGOFIX_ENV") or None

        # Gather values of known variables
        keys = _default_config().keys()
        finalized_config = {key: value for key, value in config.items() if key in keys}

        # Merge with defaults
        finalized_config = deep_merge(_default_config(), finalized_config)

        # Look for section linked to the specified environment
        if environment and environment in config:
            environment_config = config[environment]
            # Merge the environment section with the base configuration
            finalized_config = deep_merge(finalized_config, environment_config)
            finalized_config["env"] = environment

        return finalized_config

    @classmethod
    def _load_env_vars(cls, config):
        if isinstance(config, dict):
            for key, value in config.items():
                if isinstance(value, str):
                    config[key] = cls._replace_env_var(value)
                elif isinstance(value, dict):
                    config[key] = cls._load_env_vars(value)
                elif isinstance(value, list):
                    config[key] = [
                        cls._replace_env_var(item) if isinstance(item, str) else item
                        for item in value
                    ]
        return config

    @classmethod
    def _replace_env_var(cls, value):
        """Replace environment variables in a string.

        Cases:
        1. String does not have an environment variable. E.g. "attr-value" - Use as is
        2. String has an environment variable. E.g. "${ENV_VAR}" - Replace with value
        3. String has an environment variable with a default value. E.g. "${ENV_VAR|default-value}"
            - Replace with value or default value
        4. String has a mix of environment variables and static values. E.g. "mongodb://${HOST|localhost}:27017"
            - Replace all environment variables
        """

        match = cls.ENV_VAR_PATTERN.search(value)
        while match:
            matched_string = match.group(1)

            if "|" in matched_string:
                # Default value provided
                env_var, default_value = matched_string.split("|", 1)
                env_value = os.getenv(env_var, default_value)
            else:
                # No default value provided
                env_value = os.getenv(matched_string)

            if env_value is None:
                raise ConfigurationError(
                    f"Environment variable {matched_string} is not set"
                )

            value = value.replace(f"${{{matched_string}}}", env_value)
            match = cls.ENV_VAR_PATTERN.search(value)

        return value
