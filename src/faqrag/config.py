# src/faqrag/config.py
"""Configuration loading utilities for faqrag.

This module provides configuration loading that can be used by:
- CLI commands
- External applications using faqrag as a library

It handles:
- Finding and loading faqrag.yaml config files
- Loading .env files for API keys
- Building Settings objects from multiple sources
- Resolving models and API keys
- Creating RagService instances from configuration
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypedDict

import yaml
from pydantic import ValidationError

from faqrag.providers.litellm.models import ChatModels, EmbeddingModels

if TYPE_CHECKING:
    from faqrag.service import RagService
    from faqrag.settings import Settings
    from faqrag.stores import SQLiteChunkStore, SQLiteIngestionLog, SQLiteSettingsStore

logger = logging.getLogger(__name__)

# Default paths
DEFAULT_DATA_DIR = "./faqrag_data"
CONFIG_FILES = ["faqrag.yaml", "faqrag.yml", ".faqragrc"]
ENV_FILE = ".env"

# Shared key used when no dedicated key is set
OPENAI_API_KEY_ENV = "OPENAI_API_KEY"


class StoreBundle(TypedDict):
    """Bundle of store instances for operations that need no provider."""

    chunk_store: SQLiteChunkStore
    ingestion_log: SQLiteIngestionLog
    settings_store: SQLiteSettingsStore


@dataclass
class ConfigError:
    """Error during configuration loading."""

    message: str
    suggestion: str | None = None


def load_env_file(env_path: str | Path = ENV_FILE) -> None:
    """Load environment variables from .env file if it exists.

    Existing environment variables are never overridden.

    Args:
        env_path: Path to .env file (default: .env in current directory)
    """
    path = Path(env_path)
    if not path.exists():
        return

    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip().strip("'\"")
                if key not in os.environ:
                    os.environ[key] = value


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find configuration file in current directory or parent directories.

    Args:
        start_dir: Directory to start searching from (default: cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    current = start_dir or Path.cwd()
    for _ in range(10):  # Limit search depth
        for config_name in CONFIG_FILES:
            config_path = current / config_name
            if config_path.exists():
                return config_path
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


# Valid configuration keys for validation
VALID_ROOT_KEYS = {
    "provider",
    "llm_model",
    "embedding_model",
    "data_dir",
    "settings",
}

VALID_SETTINGS_KEYS = {
    "chunk_size",
    "chunk_overlap",
    "fallback_dimension",
    "embedding_batch_size",
    "top_k",
    "min_score",
    "cosine_weight",
    "lexical_weight",
    "lexical_cap",
    "extractive_chunks",
    "summary_char_budget",
    "temperature",
    "fallback_model",
    "relevance_profile",
}

# Settings that can be overridden by FAQRAG_<NAME> environment variables
_INT_SETTINGS = (
    "chunk_size",
    "chunk_overlap",
    "fallback_dimension",
    "embedding_batch_size",
    "top_k",
    "lexical_cap",
    "extractive_chunks",
    "summary_char_budget",
)
_FLOAT_SETTINGS = ("min_score", "cosine_weight", "lexical_weight", "temperature")


def validate_config(config: dict[str, Any], config_path: Path | None = None) -> list[str]:
    """Validate config and return warnings about unknown keys.

    Args:
        config: The loaded configuration dictionary
        config_path: Path to config file (for error messages)

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []

    unknown_root = set(config.keys()) - VALID_ROOT_KEYS
    if unknown_root:
        path_str = str(config_path) if config_path else "config"
        warnings.append(f"Unknown config keys in {path_str}: {', '.join(sorted(unknown_root))}")

    settings = config.get("settings", {})
    if isinstance(settings, dict):
        unknown_settings = set(settings.keys()) - VALID_SETTINGS_KEYS
        if unknown_settings:
            warnings.append(f"Unknown settings keys: {', '.join(sorted(unknown_settings))}")

    return warnings


def load_config(config_path: Path | str | None = None) -> dict[str, Any]:
    """Load configuration from YAML file.

    Args:
        config_path: Explicit path to config file, or None to search

    Returns:
        Configuration dictionary (empty if no config found)
    """
    config_path = Path(config_path) if config_path is not None else find_config_file()

    if config_path is None:
        return {}

    with open(config_path, encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    for warning in validate_config(config, config_path):
        logger.warning(warning)

    return config


def _safe_int(value: str | None) -> int | None:
    """Parse int from string, returning None on invalid value."""
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _safe_float(value: str | None) -> float | None:
    """Parse float from string, returning None on invalid value."""
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def get_settings_from_env() -> dict[str, Any]:
    """Read behavioral settings from FAQRAG_* environment variables.

    Returns values that were explicitly set (not defaults), to allow proper
    precedence: YAML settings are used unless overridden by env vars.

    Returns:
        Dictionary of setting name -> value for explicitly set env vars
    """
    result: dict[str, Any] = {}

    for name in _INT_SETTINGS:
        if (int_val := _safe_int(os.environ.get(f"FAQRAG_{name.upper()}"))) is not None:
            result[name] = int_val
    for name in _FLOAT_SETTINGS:
        if (float_val := _safe_float(os.environ.get(f"FAQRAG_{name.upper()}"))) is not None:
            result[name] = float_val

    if "FAQRAG_FALLBACK_MODEL" in os.environ:
        result["fallback_model"] = os.environ["FAQRAG_FALLBACK_MODEL"].strip() or None
    if os.environ.get("FAQRAG_RELEVANCE_PROFILE"):
        result["relevance_profile"] = os.environ["FAQRAG_RELEVANCE_PROFILE"]

    return result


def get_settings_from_yaml(config: dict[str, Any]) -> dict[str, Any]:
    """Extract settings from the 'settings:' section of a YAML config.

    Args:
        config: The loaded YAML configuration

    Returns:
        Dictionary of setting name -> value
    """
    yaml_settings = config.get("settings", {}) or {}
    return {key: value for key, value in yaml_settings.items() if key in VALID_SETTINGS_KEYS}


def build_settings(
    config: dict[str, Any] | None = None,
    env_settings: dict[str, Any] | None = None,
) -> Settings:
    """Build Settings object from YAML config and env vars.

    Precedence (highest to lowest):
    1. Environment variables (for CI/CD override)
    2. YAML settings: section
    3. Relevance profile, when one is named
    4. Settings class defaults

    Args:
        config: YAML configuration dictionary
        env_settings: Environment variable overrides (if None, reads from env)

    Returns:
        Configured Settings instance
    """
    from faqrag.settings import Settings

    config = config or {}
    yaml_settings = get_settings_from_yaml(config)
    env_settings = env_settings if env_settings is not None else get_settings_from_env()

    # Merge: env vars override YAML, which overrides defaults
    merged = {**yaml_settings, **env_settings}

    relevance_profile = merged.pop("relevance_profile", None)
    if relevance_profile:
        return Settings.with_profile(relevance_profile, **merged)
    return Settings(**merged)


def resolve_data_dir(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
    config: dict[str, Any] | None = None,
) -> str:
    """Effective data directory: argument, then FAQRAG_DATA_DIR, then YAML, then default."""
    if data_dir:
        return data_dir
    if os.environ.get("FAQRAG_DATA_DIR"):
        return os.environ["FAQRAG_DATA_DIR"]
    if config is None:
        config = load_config(config_path)
    return config.get("data_dir") or DEFAULT_DATA_DIR


def get_stores(data_dir: str | Path) -> StoreBundle:
    """Get store instances for operations that need no provider (status, clear, log).

    Args:
        data_dir: Path to data directory

    Returns:
        Bundle of store instances
    """
    from faqrag.stores import SQLiteChunkStore, SQLiteIngestionLog, SQLiteSettingsStore

    data_dir = str(data_dir)
    return {
        "chunk_store": SQLiteChunkStore(os.path.join(data_dir, "chunks.db")),
        "ingestion_log": SQLiteIngestionLog(os.path.join(data_dir, "ingestions.db")),
        "settings_store": SQLiteSettingsStore(os.path.join(data_dir, "settings.db")),
    }


def is_local_model(model: str) -> bool:
    """Check if a model is a local model (doesn't need API key).

    Args:
        model: Model name (e.g., "ollama/llama3", "gpt-4o-mini")

    Returns:
        True if the model runs locally
    """
    model_lower = model.lower()
    return any(
        pattern in model_lower
        for pattern in [
            "ollama",
            "local",
            "llama.cpp",
            "llamacpp",
            "gguf",
            "ggml",
        ]
    )


def resolve_api_key(dedicated_env: str) -> str | None:
    """Return the dedicated key if set, else the shared OPENAI_API_KEY."""
    return os.environ.get(dedicated_env) or os.environ.get(OPENAI_API_KEY_ENV) or None


@dataclass
class FaqragConfig:
    """Configuration for creating a RagService.

    ``llm_model`` / ``embedding_model`` are None when no key is available for
    them; the service then answers extractively / embeds by hashing.
    """

    llm_model: str | None
    embedding_model: str | None
    data_dir: str
    settings: Settings
    llm_api_key: str | None = None
    embedding_api_key: str | None = None

    @property
    def answer_mode(self) -> str:
        return "model" if self.llm_model else "extractive"

    @property
    def embedding_mode(self) -> str:
        return "model" if self.embedding_model else "hash"


def get_faqrag_config(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> FaqragConfig | ConfigError:
    """Get configuration for creating a RagService.

    This extracts configuration without creating the instance, allowing
    the caller to handle errors and missing values appropriately.

    Args:
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        FaqragConfig with all settings, or ConfigError if invalid
    """
    config = load_config(config_path)
    effective_data_dir = resolve_data_dir(data_dir, config=config)

    provider = config.get("provider", "litellm")
    if provider != "litellm":
        return ConfigError(
            message=f"Unknown provider '{provider}'",
            suggestion="Supported providers: litellm",
        )

    try:
        settings = build_settings(config, get_settings_from_env())
    except (ValidationError, ValueError) as e:
        return ConfigError(
            message=f"Invalid settings: {e}",
            suggestion="Check the settings: section of faqrag.yaml and FAQRAG_* variables",
        )

    llm_model = (
        os.environ.get("FAQRAG_LLM_MODEL") or config.get("llm_model") or ChatModels.GPT_4O_MINI
    )
    embedding_model = (
        os.environ.get("FAQRAG_EMBEDDING_MODEL")
        or config.get("embedding_model")
        or EmbeddingModels.TEXT_3_SMALL
    )
    llm_api_key = resolve_api_key("FAQRAG_LLM_API_KEY")
    embedding_api_key = resolve_api_key("FAQRAG_EMBEDDING_API_KEY")

    return FaqragConfig(
        llm_model=llm_model if llm_api_key or is_local_model(llm_model) else None,
        embedding_model=(
            embedding_model if embedding_api_key or is_local_model(embedding_model) else None
        ),
        data_dir=effective_data_dir,
        settings=settings,
        llm_api_key=llm_api_key,
        embedding_api_key=embedding_api_key,
    )


def create_service(config: FaqragConfig) -> RagService:
    """Create a RagService from configuration.

    Args:
        config: Configuration for the service

    Returns:
        Configured RagService instance
    """
    from faqrag.configuration import LiteLLMProvider, LocalStorage
    from faqrag.service import RagService

    return RagService(
        provider=LiteLLMProvider(
            llm=config.llm_model,
            embedding=config.embedding_model,
            llm_api_key=config.llm_api_key,
            embedding_api_key=config.embedding_api_key,
        ),
        storage=LocalStorage(config.data_dir),
        settings=config.settings,
    )


def get_service(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> RagService | ConfigError:
    """Create a RagService based on configuration.

    This is a convenience function that combines get_faqrag_config and
    create_service. For more control, use those functions separately.

    Args:
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        Configured RagService instance, or ConfigError if configuration is invalid
    """
    config = get_faqrag_config(data_dir, config_path)
    if isinstance(config, ConfigError):
        return config
    return create_service(config)
