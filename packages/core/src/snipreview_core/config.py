import os
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_CONFIG: dict = {
    "model": "anthropic",
    "language": "python",
    "store": "sqlite",  # "sqlite" | "memory"
    "store_path": ".snipreview.db",
}

_API_KEY_ENV = {
    "anthropic": "ANTHROPIC_API_KEY",
    "openai": "OPENAI_API_KEY",
}

# Values shipped in sample .env / config files that must never reach the API.
_PLACEHOLDER_KEYS = {"your_api_key_here", "your_anthropic_api_key_here", "your_openai_api_key_here"}


def load_config(config_path: str = ".snipreview.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .snipreview.yml in the current directory
      3. CLI argument overrides
    """
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    # Resolve credentials from environment variables
    config["anthropic_api_key"] = os.environ.get("ANTHROPIC_API_KEY")
    config["openai_api_key"] = os.environ.get("OPENAI_API_KEY")

    return config


def api_key_env_var(model: str) -> str:
    try:
        return _API_KEY_ENV[model]
    except KeyError:
        raise ValueError(f"Unknown model provider: {model!r}. Choose 'anthropic' or 'openai'.")


def api_key_for(config: dict) -> Optional[str]:
    """Return the API key for the configured provider, or None."""
    return config.get(f"{config['model']}_api_key")


def is_valid_api_key(key: Optional[str]) -> bool:
    return isinstance(key, str) and bool(key.strip()) and key.strip() not in _PLACEHOLDER_KEYS
