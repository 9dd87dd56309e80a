# src/refrag/config.py
"""Configuration loading utilities for refrag.

This module provides configuration loading for the CLI and for external
applications using refrag as a library.

It handles:
- Finding and loading refrag.yaml config files
- Loading .env files for API keys
- Reading secrets from the environment (never logged)
- Building Settings objects from multiple sources
- Creating RefRAG instances from configuration
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from dotenv import load_dotenv
from loguru import logger
from pydantic import SecretStr, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from refrag.exceptions import ConfigError
from refrag.providers.litellm.models import ChatModels, EmbeddingModels

if TYPE_CHECKING:
    from refrag.refrag import RefRAG
    from refrag.settings import Settings

# Default paths
DEFAULT_DATA_DIR = "./refrag_data"
CONFIG_FILES = ["refrag.yaml", "refrag.yml", ".refragrc"]
ENV_FILE = ".env"

DEFAULT_LLM_MODEL = ChatModels.GEMINI_25_FLASH
DEFAULT_EMBEDDING_MODEL = EmbeddingModels.HF_BGE_LARGE_EN_V15


class Secrets(BaseSettings):
    """Process-wide secrets read from REFRAG_* environment variables or .env."""

    model_config = SettingsConfigDict(
        env_prefix="REFRAG_",
        env_file=ENV_FILE,
        extra="ignore",
    )

    vector_store_url: str | None = None
    vector_store_api_key: SecretStr | None = None
    embedding_api_key: SecretStr | None = None
    llm_api_key: SecretStr | None = None


def load_env_file(env_path: str | Path = ENV_FILE) -> None:
    """Load environment variables from a .env file if it exists.

    Existing environment variables are not overridden.
    """
    path = Path(env_path)
    if path.exists():
        load_dotenv(path, override=False)


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find a configuration file in the current directory or its parents.

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


VALID_ROOT_KEYS = {
    "pdf_path",
    "llm_model",
    "embedding_model",
    "data_dir",
    "settings",
}

VALID_SETTINGS_KEYS = {
    "collection_name",
    "batch_size",
    "chunk_size",
    "chunk_overlap",
    "default_k",
    "reference_lookup",
    "fallback_to_similarity",
    "strict_citations",
    "synthesis_prompt",
    "synthesis_temperature",
    "num_retries",
}

ENV_SETTINGS = {
    "REFRAG_COLLECTION_NAME": "collection_name",
    "REFRAG_BATCH_SIZE": "batch_size",
    "REFRAG_CHUNK_SIZE": "chunk_size",
    "REFRAG_CHUNK_OVERLAP": "chunk_overlap",
    "REFRAG_DEFAULT_K": "default_k",
    "REFRAG_REFERENCE_LOOKUP": "reference_lookup",
    "REFRAG_FALLBACK_TO_SIMILARITY": "fallback_to_similarity",
    "REFRAG_STRICT_CITATIONS": "strict_citations",
    "REFRAG_SYNTHESIS_PROMPT": "synthesis_prompt",
    "REFRAG_SYNTHESIS_TEMPERATURE": "synthesis_temperature",
    "REFRAG_NUM_RETRIES": "num_retries",
}


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
    """Load configuration from a YAML file.

    Args:
        config_path: Explicit path to config file, or None to search

    Returns:
        Configuration dictionary (empty if no config found)

    Raises:
        ConfigError: If an explicit path does not exist or the YAML is invalid
    """
    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")
    else:
        config_path = find_config_file()

    if config_path is None:
        return {}

    try:
        with open(config_path, encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")

    for warning in validate_config(config, config_path):
        logger.warning(warning)

    return config


def get_settings_from_env() -> dict[str, Any]:
    """Read behavioral settings from REFRAG_* environment variables.

    Returns only values that are explicitly set (and non-empty), so that
    YAML settings apply unless overridden.
    """
    return {
        settings_key: os.environ[env_key]
        for env_key, settings_key in ENV_SETTINGS.items()
        if os.environ.get(env_key)
    }


def get_settings_from_yaml(config: dict[str, Any]) -> dict[str, Any]:
    """Extract the 'settings:' section of a YAML config."""
    yaml_settings = config.get("settings", {}) or {}
    return {key: value for key, value in yaml_settings.items() if key in VALID_SETTINGS_KEYS}


def build_settings(
    config: dict[str, Any] | None = None,
    env_settings: dict[str, Any] | None = None,
    **overrides: Any,
) -> Settings:
    """Build Settings from YAML config, env vars, and explicit overrides.

    Precedence (highest to lowest):
    1. Explicit overrides (e.g. CLI options); None values are ignored
    2. Environment variables
    3. YAML settings: section
    4. Settings class defaults

    Raises:
        ConfigError: If a value fails validation
    """
    from refrag.settings import Settings

    config = config or {}
    yaml_settings = get_settings_from_yaml(config)
    env_settings = env_settings if env_settings is not None else get_settings_from_env()
    explicit = {key: value for key, value in overrides.items() if value is not None}

    merged = {**yaml_settings, **env_settings, **explicit}
    try:
        return Settings(**merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings: {e}") from e


def is_local_model(model: str) -> bool:
    """Check if a model runs locally (doesn't need an API key)."""
    model_lower = model.lower()
    return any(
        pattern in model_lower
        for pattern in ["ollama", "local", "llama.cpp", "llamacpp", "gguf", "ggml"]
    )


def check_api_key(model: str, api_key: str | None, env_var: str) -> None:
    """Fail fast when a hosted model has no usable API key.

    A key is usable if passed explicitly or present in the provider's
    standard environment variable (e.g. GEMINI_API_KEY).

    Raises:
        ConfigError: If no key is available for a hosted model
    """
    if api_key or is_local_model(model):
        return

    import litellm

    environment = litellm.validate_environment(model=model)
    if environment.get("keys_in_environment"):
        return

    missing = ", ".join(environment.get("missing_keys") or []) or "an API key"
    raise ConfigError(
        message=f"No API key for model '{model}'.",
        suggestion=f"Set {env_var} (or {missing}) in the environment or .env file",
    )


def _secret(value: SecretStr | None) -> str | None:
    return value.get_secret_value() if value is not None else None


@dataclass
class RefragConfig:
    """Configuration for creating a RefRAG instance."""

    llm_model: str
    embedding_model: str
    data_dir: str
    settings: Settings
    pdf_path: str | None = None
    vector_store_url: str | None = None
    vector_store_api_key: str | None = field(default=None, repr=False)
    llm_api_key: str | None = field(default=None, repr=False)
    embedding_api_key: str | None = field(default=None, repr=False)


def get_refrag_config(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
    pdf_path: str | None = None,
    require_api_keys: bool = True,
    **setting_overrides: Any,
) -> RefragConfig:
    """Collect configuration for creating a RefRAG instance.

    Args:
        data_dir: Override data directory
        config_path: Override config file path
        pdf_path: Override the PDF path
        require_api_keys: Check LLM and embedding keys (off for store-only commands)
        **setting_overrides: Explicit Settings overrides (None values ignored)

    Returns:
        RefragConfig with all settings and secrets

    Raises:
        ConfigError: If configuration is invalid or a required secret is missing
    """
    config = load_config(config_path)
    settings = build_settings(config, **setting_overrides)

    llm_model = config.get("llm_model") or os.environ.get("REFRAG_LLM_MODEL") or DEFAULT_LLM_MODEL
    embedding_model = (
        config.get("embedding_model")
        or os.environ.get("REFRAG_EMBEDDING_MODEL")
        or DEFAULT_EMBEDDING_MODEL
    )

    try:
        secrets = Secrets()
    except ValidationError as e:
        raise ConfigError(f"Invalid secrets in environment: {e}") from e

    vector_store_api_key = _secret(secrets.vector_store_api_key)
    if vector_store_api_key and not secrets.vector_store_url:
        raise ConfigError(
            message="REFRAG_VECTOR_STORE_API_KEY is set but REFRAG_VECTOR_STORE_URL is not.",
            suggestion="Set REFRAG_VECTOR_STORE_URL or unset the API key to use local storage",
        )

    llm_api_key = _secret(secrets.llm_api_key)
    embedding_api_key = _secret(secrets.embedding_api_key)
    if require_api_keys:
        check_api_key(llm_model, llm_api_key, "REFRAG_LLM_API_KEY")
        check_api_key(embedding_model, embedding_api_key, "REFRAG_EMBEDDING_API_KEY")

    return RefragConfig(
        llm_model=llm_model,
        embedding_model=embedding_model,
        data_dir=data_dir or config.get("data_dir") or DEFAULT_DATA_DIR,
        settings=settings,
        pdf_path=pdf_path or config.get("pdf_path") or os.environ.get("REFRAG_PDF_PATH"),
        vector_store_url=secrets.vector_store_url,
        vector_store_api_key=vector_store_api_key,
        llm_api_key=llm_api_key,
        embedding_api_key=embedding_api_key,
    )


def create_refrag(config: RefragConfig) -> RefRAG:
    """Create a RefRAG instance from configuration."""
    from refrag.configuration import LiteLLMProvider, LocalStorage, RemoteStorage
    from refrag.refrag import RefRAG

    storage: LocalStorage | RemoteStorage
    if config.vector_store_url:
        storage = RemoteStorage(url=config.vector_store_url, api_key=config.vector_store_api_key)
    else:
        storage = LocalStorage(config.data_dir)

    return RefRAG(
        provider=LiteLLMProvider(
            llm=config.llm_model,
            embedding=config.embedding_model,
            llm_api_key=config.llm_api_key,
            embedding_api_key=config.embedding_api_key,
        ),
        storage=storage,
        settings=config.settings,
    )
