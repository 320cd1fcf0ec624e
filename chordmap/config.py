"""
Settings for the chord map and its AI advisor.

Read from ./configs/config.yaml when present:

    gemini_api_key: "..."
    model: gemini-2.5-flash
    temperature: 0.7
    request_timeout: 30
    default_key: C
    default_language: en

GEMINI_API_KEY in the environment takes precedence over the file.
"""
import os

import yaml

from .constants import DEFAULT_LANGUAGE

DEFAULT_CONFIG_PATH = "./configs/config.yaml"

DEFAULTS = {
    "gemini_api_key": None,
    "model": "gemini-2.5-flash",
    "temperature": 0.7,
    "request_timeout": 30.0,
    "default_key": "C",
    "default_language": DEFAULT_LANGUAGE,
}


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> dict:
    """Defaults, overlaid with the YAML file (if any), overlaid with the environment."""
    config = dict(DEFAULTS)
    if os.path.exists(config_path):
        with open(config_path, "r") as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"{config_path} must contain a mapping, got {type(loaded).__name__}")
        config.update({k: v for k, v in loaded.items() if v is not None})

    env_key = os.environ.get("GEMINI_API_KEY")
    if env_key:
        config["gemini_api_key"] = env_key
    return config


def require_api_key(config: dict) -> str:
    api_key = config.get("gemini_api_key")
    if not api_key:
        raise ValueError(f"Gemini API key not found in {DEFAULT_CONFIG_PATH} or GEMINI_API_KEY")
    return api_key
