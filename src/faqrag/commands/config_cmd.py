# src/faqrag/commands/config_cmd.py
"""Config command - display the effective configuration."""

from __future__ import annotations

from pathlib import Path

from faqrag.commands.base import ConfigResult, SettingInfo
from faqrag.config import (
    ConfigError,
    find_config_file,
    get_faqrag_config,
    get_settings_from_env,
    get_settings_from_yaml,
    load_config,
)

# Behavioral settings shown by the config command, in display order
DISPLAYED_SETTINGS = [
    "top_k",
    "min_score",
    "cosine_weight",
    "lexical_weight",
    "lexical_cap",
    "chunk_size",
    "chunk_overlap",
    "embedding_batch_size",
    "fallback_dimension",
    "extractive_chunks",
    "summary_char_budget",
    "temperature",
    "fallback_model",
]


def _get_setting_source(
    key: str,
    yaml_settings: dict,
    env_settings: dict,
) -> str:
    """Determine the source of a setting value."""
    if key in env_settings:
        return "env var"
    if key in yaml_settings:
        return "yaml"
    return "default"


def config(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> ConfigResult:
    """Get the effective configuration and where each setting came from.

    Args:
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        ConfigResult with models, modes and settings
    """
    faqrag_config = get_faqrag_config(data_dir, config_path)
    if isinstance(faqrag_config, ConfigError):
        return ConfigResult(success=False, error=faqrag_config.message)

    yaml_config = load_config(config_path)
    yaml_settings = get_settings_from_yaml(yaml_config)
    env_settings = get_settings_from_env()

    found_config_path = Path(config_path) if config_path is not None else find_config_file()

    result = ConfigResult(
        success=True,
        llm_model=faqrag_config.llm_model,
        embedding_model=faqrag_config.embedding_model,
        answer_mode=faqrag_config.answer_mode,
        embedding_mode=faqrag_config.embedding_mode,
        data_dir=faqrag_config.data_dir,
        config_path=str(found_config_path) if found_config_path else None,
    )

    values = faqrag_config.settings.model_dump()
    for key in DISPLAYED_SETTINGS:
        value = values[key]
        result.settings.append(
            SettingInfo(
                name=key,
                value="unset" if value is None else str(value),
                source=_get_setting_source(key, yaml_settings, env_settings),
            )
        )

    return result
