"""
Engine Configuration Module
"""

import os
import yaml
from dataclasses import dataclass, asdict
from typing import Optional, Dict, Any, Union
from pathlib import Path

from pawsignal.config import DEFAULT_CONFIG_PATH, EnvKey


@dataclass
class EngineConfig:
    """
    Configuration for the signal interpretation engine.

    Holds the signal database location and every constant the synthesizer
    uses to turn a dominant bucket into a confidence and a message.
    """

    # Data
    signals_path: Optional[str] = None  # None -> env var or bundled database

    # Confidence model: min(max, base + per_signal * n + per_score * top_score)
    confidence_base: int = 50
    confidence_per_signal: int = 10
    confidence_per_score: int = 5
    confidence_max: int = 95
    no_match_confidence: int = 30
    fallback_confidence: int = 20
    play_bow_confidence: int = 95

    # Translation
    runner_up_count: int = 2

    # Recommendation thresholds
    recommendation_low: int = 60
    recommendation_high: int = 80

    # Logging
    log_level: str = "INFO"

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)


def _check_int(config_dict: Dict[str, Any], key: str, errors: list, lo: int = None, hi: int = None) -> None:
    if key not in config_dict or config_dict[key] is None:
        return
    value = config_dict[key]
    # bool is an int subclass; quoted YAML numbers arrive as str
    if isinstance(value, bool) or not isinstance(value, int):
        errors.append(f"{key} must be an integer, got {value!r}")
        return
    if lo is not None and value < lo:
        errors.append(f"{key} must be >= {lo}, got {value}")
    if hi is not None and value > hi:
        errors.append(f"{key} must be <= {hi}, got {value}")


def validate_config(config: Union[EngineConfig, Dict[str, Any]]) -> None:
    """
    Validate engine configuration values.

    Args:
        config: EngineConfig instance or dictionary to validate

    Raises:
        ValueError: If configuration is invalid, with every problem listed
    """
    if isinstance(config, dict):
        config_dict = config
    else:
        config_dict = config.to_dict()

    errors = []

    unknown = set(config_dict) - set(EngineConfig.__dataclass_fields__)
    for key in sorted(unknown):
        errors.append(f"Unknown field: {key}")

    for key in ("confidence_base", "confidence_max", "no_match_confidence",
                "fallback_confidence", "play_bow_confidence",
                "recommendation_low", "recommendation_high"):
        _check_int(config_dict, key, errors, lo=0, hi=100)

    for key in ("confidence_per_signal", "confidence_per_score", "runner_up_count"):
        _check_int(config_dict, key, errors, lo=0)

    if not errors:
        low = config_dict.get("recommendation_low")
        high = config_dict.get("recommendation_high")
        if low is not None and high is not None and int(low) > int(high):
            errors.append(f"recommendation_low ({low}) must not exceed recommendation_high ({high})")

    if "log_level" in config_dict and config_dict["log_level"] is not None:
        level = str(config_dict["log_level"]).upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            errors.append(f"log_level must be a standard logging level, got {config_dict['log_level']}")

    if config_dict.get("signals_path"):
        signals_path = Path(config_dict["signals_path"])
        if not signals_path.exists():
            errors.append(f"Signal database file not found: {signals_path}")

    # Raise error if any validation failures
    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {error}" for error in errors)
        raise ValueError(error_msg)


def load_config(config_path: Union[str, Path]) -> EngineConfig:
    """
    Load and validate engine configuration from YAML file.

    The file may hold the fields at top level or under an ``engine`` key.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated EngineConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML parsing fails
        ValueError: If configuration validation fails
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config_dict = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise yaml.YAMLError(f"Failed to parse YAML configuration: {e}")

    if not isinstance(config_dict, dict):
        raise ValueError(f"Configuration must be a mapping, got {type(config_dict).__name__}")

    if "engine" in config_dict:
        config_dict = config_dict["engine"] or {}

    # Relative database paths are resolved against the config file location
    signals_path = config_dict.get("signals_path")
    if signals_path and not Path(signals_path).is_absolute():
        config_dict["signals_path"] = str(Path(config_path.parent, signals_path))

    validate_config(config_dict)

    try:
        config = EngineConfig(**config_dict)
    except TypeError as e:
        raise ValueError(f"Failed to create EngineConfig: {e}")

    return config


def create_default_config() -> EngineConfig:
    """
    Resolve the configuration the engine uses when none is given.

    ``PAWSIGNAL_CONFIG_PATH`` wins, then ``config/engine.yaml``, then built-in
    defaults.

    Returns:
        EngineConfig instance
    """
    env_path = os.getenv(EnvKey.CONFIG_PATH)
    if env_path:
        return load_config(env_path)
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return EngineConfig()


def save_config(config: EngineConfig, config_path: Union[str, Path]) -> None:
    """
    Save engine configuration to YAML file.

    Args:
        config: EngineConfig instance to save
        config_path: Path where to save the configuration
    """
    config_path = Path(config_path)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, 'w', encoding='utf-8') as f:
        yaml.safe_dump({"engine": config.to_dict()}, f, default_flow_style=False, sort_keys=False)
