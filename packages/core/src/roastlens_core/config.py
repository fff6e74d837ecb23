"""Configuration loading for roastlens.

Secrets never live in the YAML file: API keys and the GitHub token are
always read from the environment, after the file and CLI overrides are
applied.
"""

import copy
import os
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_CONFIG: dict = {
    "provider": "openai",
    "model": "gpt-4o",
    "max_diff_chars": 50000,
    "enable_mock": True,  # register the offline "mock" provider
    "store": "noop",  # "noop" | "sqlite"
    "store_path": ".roastlens.db",
    "rate_limit": None,  # e.g. {"requests": 10, "window_seconds": 60}; None = unlimited
}

CREDENTIAL_ENV_VARS = {
    "github_token": "GITHUB_TOKEN",
    "openai_api_key": "OPENAI_API_KEY",
    "anthropic_api_key": "ANTHROPIC_API_KEY",
}


def load_config(config_path: str = ".roastlens.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .roastlens.yml in the current directory
      3. CLI argument overrides
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    for key, value in (cli_overrides or {}).items():
        if value is not None:
            config[key] = value

    for key, env_var in CREDENTIAL_ENV_VARS.items():
        config[key] = os.environ.get(env_var)

    return config
