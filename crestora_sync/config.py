"""
Configuration for the Crestora public data sync.

All tunable parameters externalized for deployment.
Loads from config.json if present (merge with defaults), then applies
environment overrides.
"""

import json
import os
from typing import Any, Dict

# Default configuration - all tunable parameters
DEFAULT_CONFIG: Dict[str, Any] = {
    # Remote API
    "api_base_url": "http://13.233.80.196:8000/api/public",
    "request_timeout_sec": 30,         # Per-request timeout
    "collection_page_limit": 1000,     # limit for teams/rounds/rolling-events
    "leaderboard_limit": 100,

    # Team score fetch pool
    "team_score_concurrency": 10,

    # Local snapshot location (consumed by the website)
    "data_dir": "src/data",

    # Run log
    "log_dir": "logs",
}

# Environment variable -> (config key, type)
ENV_OVERRIDES = {
    "CRESTORA_API_BASE_URL": ("api_base_url", str),
    "CRESTORA_DATA_DIR": ("data_dir", str),
    "CRESTORA_CONCURRENCY": ("team_score_concurrency", int),
    "CRESTORA_TIMEOUT_SEC": ("request_timeout_sec", float),
}


def apply_env_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    """Override config values from CRESTORA_* environment variables."""
    for env_name, (key, cast) in ENV_OVERRIDES.items():
        raw = os.getenv(env_name)
        if raw is None or raw == "":
            continue
        try:
            config[key] = cast(raw)
        except ValueError:
            print(f"Warning: Ignoring {env_name}={raw!r}: expected {cast.__name__}.")
    return config


def load_config(config_path: str = "config.json") -> Dict[str, Any]:
    """
    Load configuration, merging config.json with defaults.
    
    Missing keys use defaults, provided keys override. Environment
    variables win over both.
    """
    config = DEFAULT_CONFIG.copy()
    
    if os.path.exists(config_path):
        try:
            with open(config_path, "r") as f:
                user_config = json.load(f)
            # Merge: user config overrides defaults
            config.update(user_config)
        except (json.JSONDecodeError, IOError) as e:
            print(f"Warning: Could not load {config_path}: {e}. Using defaults.")
    
    return apply_env_overrides(config)


# Global CONFIG instance
CONFIG = load_config()


def get_config_hash() -> str:
    """Return first 8 chars of SHA256 hash of config for logging."""
    import hashlib
    config_str = json.dumps(CONFIG, sort_keys=True)
    return hashlib.sha256(config_str.encode()).hexdigest()[:8]
