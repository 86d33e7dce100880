"""
Configuration for the Data Viewer app.

Values are read from environment variables, optionally seeded from a .env
file, and fall back to defaults.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .flattening import DEFAULT_MAX_DEPTH
from .view_state import DEFAULT_ITEMS_PER_PAGE, ITEMS_PER_PAGE_CHOICES

logger = logging.getLogger(__name__)

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


@dataclass(frozen=True)
class ViewerConfig:
    items_per_page: int = DEFAULT_ITEMS_PER_PAGE
    max_flatten_depth: int = DEFAULT_MAX_DEPTH
    server_name: str = "127.0.0.1"
    server_port: int = 7860
    log_level: str = "INFO"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def load_config(env_file: Optional[str] = None) -> ViewerConfig:
    """
    Load viewer configuration.

    Environment variables:
    - DATA_VIEWER_ITEMS_PER_PAGE: initial rows per page, one of 10/25/50/100 (default: 25)
    - DATA_VIEWER_MAX_FLATTEN_DEPTH: nesting depth flattened before objects are kept whole (default: 100)
    - DATA_VIEWER_SERVER_NAME: host the Gradio server binds to (default: 127.0.0.1)
    - DATA_VIEWER_SERVER_PORT: Gradio server port (default: 7860)
    - DATA_VIEWER_LOG_LEVEL: logging level (default: INFO)

    Args:
        env_file: Path to a .env file (default: .env in the working directory, if present)
    """
    env_path = Path(env_file) if env_file else Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(env_path)
        logger.info(f"Loaded configuration from {env_path}")

    items_per_page = _int_env("DATA_VIEWER_ITEMS_PER_PAGE", DEFAULT_ITEMS_PER_PAGE)
    if items_per_page not in ITEMS_PER_PAGE_CHOICES:
        raise ValueError(f"DATA_VIEWER_ITEMS_PER_PAGE must be one of {ITEMS_PER_PAGE_CHOICES}, got {items_per_page}")

    max_depth = _int_env("DATA_VIEWER_MAX_FLATTEN_DEPTH", DEFAULT_MAX_DEPTH)
    if max_depth < 1:
        raise ValueError(f"DATA_VIEWER_MAX_FLATTEN_DEPTH must be at least 1, got {max_depth}")

    log_level = os.getenv("DATA_VIEWER_LOG_LEVEL", "INFO").strip().upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(f"DATA_VIEWER_LOG_LEVEL must be one of {LOG_LEVELS}, got {log_level!r}")

    config = ViewerConfig(
        items_per_page=items_per_page,
        max_flatten_depth=max_depth,
        server_name=os.getenv("DATA_VIEWER_SERVER_NAME", "127.0.0.1"),
        server_port=_int_env("DATA_VIEWER_SERVER_PORT", 7860),
        log_level=log_level,
    )
    logger.info(
        f"Loaded ViewerConfig: items_per_page={config.items_per_page}, "
        f"max_flatten_depth={config.max_flatten_depth}, server={config.server_name}:{config.server_port}"
    )
    return config
