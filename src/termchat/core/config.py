"""Configuration loading (YAML file, env vars, .env)."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from termchat.errors import ConfigError
from termchat.types.config import ChatConfig, ReflowConfig
from termchat.types.render import BlankLinePolicy

# Load .env from current directory (and parents), won't override existing env vars
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "config.yaml"
API_KEY_ENV_VARS = ("API_KEY", "OPENAI_API_KEY")


def load_yaml_config(path: str | Path = DEFAULT_CONFIG_FILE) -> dict[str, Any]:
    """Read the YAML config file at *path*.

    A missing file yields an empty dict. A file that cannot be read or
    parsed raises :class:`ConfigError`.
    """
    config_path = Path(path)
    if not config_path.exists():
        logger.debug("No config file at %s, using defaults", config_path)
        return {}
    try:
        data = yaml.safe_load(config_path.read_text())
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Cannot load config {config_path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config {config_path} must be a mapping, got {type(data).__name__}")
    return data


def resolve_api_key(file_config: dict[str, Any], explicit_key: str | None = None) -> str | None:
    """Resolve the API key from an explicit value, environment, or config file."""
    if explicit_key:
        return explicit_key
    for env_var in API_KEY_ENV_VARS:
        if val := os.environ.get(env_var):
            return val
    chat = file_config.get("chat") or {}
    key = chat.get("api_key") if isinstance(chat, dict) else None
    return key or None


def _parse_reflow(section: dict[str, Any]) -> ReflowConfig:
    blank_lines = section.get("blank_lines", BlankLinePolicy.PRESERVE_IN_CODE.value)
    try:
        policy = BlankLinePolicy(blank_lines)
    except ValueError as exc:
        choices = ", ".join(p.value for p in BlankLinePolicy)
        raise ConfigError(f"reflow.blank_lines must be one of: {choices}") from exc
    interval = float(section.get("indicator_interval", 0.5))
    if interval <= 0:
        raise ConfigError("reflow.indicator_interval must be positive")
    return ReflowConfig(blank_lines=policy, indicator_interval=interval)


def load_config(
    path: str | Path = DEFAULT_CONFIG_FILE,
    *,
    model: str | None = None,
    api_key: str | None = None,
) -> ChatConfig:
    """Build the resolved :class:`ChatConfig` for this process.

    Explicit arguments win over the config file. Raises :class:`ConfigError`
    when no API key can be found.
    """
    data = load_yaml_config(path)
    chat = data.get("chat") or {}
    if not isinstance(chat, dict):
        raise ConfigError("'chat' section must be a mapping")

    key = resolve_api_key(data, api_key)
    if not key:
        raise ConfigError(
            "Missing API key: set API_KEY (or OPENAI_API_KEY) or chat.api_key in "
            f"{path}",
        )

    return ChatConfig(
        api_key=key,
        model=model or chat.get("model") or "gpt-4o",
        base_url=chat.get("base_url"),
        user_info=chat.get("user_info") or "",
        max_tokens=int(chat.get("max_tokens", 4096)),
        conversations_dir=str(data.get("conversations_dir", "./conversations")),
        reflow=_parse_reflow(data.get("reflow") or {}),
    )
