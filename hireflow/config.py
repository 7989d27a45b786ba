"""
Configuration loading.

Settings come from three layers, later layers winning: the built-in
defaults below, an optional YAML file, and environment variables (a
``.env`` file in the working directory is loaded first).  API keys and
``GEMINI_MODEL``/``OPENAI_MODEL`` are not copied into the config; the
providers read them directly when ``llm.model`` is left empty.
"""

from __future__ import annotations

import copy
import logging
import os
from typing import Dict, Optional

import yaml  # type: ignore
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Dict[str, object]] = {
    "llm": {
        "provider": "auto",
        "model": None,
    },
    "screening": {
        "top_n": 3,
        "use_llm_parsing": True,
    },
    "sessions": {
        "base_dir": "./data/sessions",
        "retention_days": 30,
    },
    "web": {
        "secret_key": None,
        "max_upload_mb": 16,
        "allowed_extensions": ["pdf", "docx", "txt", "md"],
    },
}

# Environment variable -> (section, key)
ENV_OVERRIDES = {
    "LLM_PROVIDER": ("llm", "provider"),
    "HIREFLOW_SESSIONS_DIR": ("sessions", "base_dir"),
    "HIREFLOW_SECRET_KEY": ("web", "secret_key"),
}


def _merge(base: Dict[str, object], override: Dict[str, object]) -> Dict[str, object]:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


def load_config(path: Optional[str] = None) -> Dict[str, Dict[str, object]]:
    """Return the effective configuration as a plain dict.

    Args:
        path: Optional YAML file.  A missing file is an error; an empty
            one is treated as no overrides.

    Returns:
        Nested dict with the ``llm``, ``screening``, ``sessions`` and
        ``web`` sections.
    """
    load_dotenv()
    config = copy.deepcopy(DEFAULT_CONFIG)
    if path:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Configuration file {path} must contain a mapping")
        _merge(config, data)
        logger.debug("Loaded configuration from %s", path)
    for variable, (section, key) in ENV_OVERRIDES.items():
        value = os.getenv(variable)
        if value:
            config[section][key] = value
    return config
