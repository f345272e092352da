"""Configuration loader for talentmatch."""

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .models import AppConfig
from .validators import check_for_warnings, emit_warnings

DEFAULT_CONFIG_LOCATIONS = [
    Path("config.yaml"),
    Path("config") / "config.yaml",
]


def load_config(config_path: Optional[Path] = None) -> tuple[AppConfig, EnvironmentConfig]:
    """
    Load and validate configuration from a YAML file and environment variables.

    Lookup order for the config file:
    1. config_path, if given (must exist)
    2. config.yaml in the current directory
    3. config/config.yaml
    4. Built-in defaults (every setting has one)

    Args:
        config_path: Optional path to configuration file

    Returns:
        Tuple of (AppConfig, EnvironmentConfig)

    Raises:
        ConfigurationError: If the file is unreadable or fails validation
    """
    config_file = _find_config_file(config_path)

    if config_file is None:
        config_dict: Dict[str, Any] = {}
    else:
        config_dict = _read_yaml(config_file)

    warnings = check_for_warnings(config_dict)
    if warnings:
        emit_warnings(warnings)

    try:
        app_config = AppConfig.model_validate(config_dict)
    except ValidationError as e:
        raise ConfigurationError(
            "Configuration validation failed",
            errors=format_validation_errors(e),
            suggestions=[
                "Review config.example.yaml for the expected format",
                "Scoring weights must be integers between 0 and 100",
                "Remove keys you do not need; every setting has a default",
            ],
        )

    try:
        env_config = load_environment_config()
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(
            f"Failed to load environment configuration: {e}",
            suggestions=["Check the variables defined in your .env file"],
        )

    return app_config, env_config


def format_validation_errors(error: ValidationError) -> List[str]:
    """Turn a pydantic ValidationError into one readable line per problem."""
    errors = []
    for item in error.errors():
        field_path = " -> ".join(str(loc) for loc in item["loc"]) or "config"
        error_type = item["type"]

        if error_type == "missing":
            errors.append(f"Missing required field: {field_path}")
        elif error_type.endswith("_type") or error_type.endswith("_parsing"):
            errors.append(
                f"Invalid type for '{field_path}': {item['msg']} (got {item.get('input')!r})"
            )
        elif "enum" in error_type:
            errors.append(f"Invalid value for '{field_path}': {item['msg']}")
        else:
            errors.append(f"{field_path}: {item['msg']}")
    return errors


def _read_yaml(config_file: Path) -> Dict[str, Any]:
    try:
        with open(config_file, "r") as f:
            config_dict = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse YAML configuration: {e}",
            suggestions=[
                "Check YAML syntax in your config file",
                "Ensure proper indentation (use spaces, not tabs)",
            ],
        )
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read configuration file: {e}",
            suggestions=[f"Ensure {config_file} is readable", "Check file permissions"],
        )

    if config_dict is None:
        return {}

    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            f"Configuration file {config_file} must contain a mapping at the top level",
            suggestions=["Start the file with 'scoring:' or 'logging:' sections"],
        )

    return config_dict


def _find_config_file(config_path: Optional[Path] = None) -> Optional[Path]:
    """
    Resolve which configuration file to read.

    Returns:
        Path to the configuration file, or None when no default file exists

    Raises:
        ConfigurationError: If an explicit path does not exist
    """
    if config_path:
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigurationError(
                f"Specified configuration file not found: {config_path}",
                suggestions=[
                    f"Ensure {config_path} exists",
                    "Omit --config to run with built-in defaults",
                ],
            )
        return config_path

    for candidate in DEFAULT_CONFIG_LOCATIONS:
        if candidate.exists():
            return candidate

    return None


def validate_config_file(config_path: Path) -> bool:
    """
    Validate a configuration file without reading environment variables.

    Args:
        config_path: Path to configuration file

    Returns:
        True if valid, False otherwise (errors printed to stdout)
    """
    try:
        config_dict = _read_yaml(Path(config_path))
        AppConfig.model_validate(config_dict)
    except ConfigurationError as e:
        print(f"✗ Configuration validation failed:\n{e}")
        return False
    except ValidationError as e:
        details = "\n".join(f"  - {line}" for line in format_validation_errors(e))
        print(f"✗ Configuration validation failed:\n{details}")
        return False

    print(f"✓ Configuration file {config_path} is valid")
    return True
