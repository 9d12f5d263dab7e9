"""
Configuration for Synapse.

Supports loading from:
1. Environment variables (highest priority)
2. YAML config file
3. Default values (fallback)
"""

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field


class EmbedderConfig(BaseModel):
    """Embedder configuration."""

    provider: str = "openai"  # openai, ollama
    model: str = "text-embedding-3-small"
    base_url: str | None = None
    api_key: str | None = None
    timeout: float = 30.0
    # Every stored embedding must have this length
    dimension: int = 1536


class OCRConfig(BaseModel):
    """Text extractor (Tesseract) configuration."""

    language: str = "eng"
    tesseract_cmd: str | None = None
    tesseract_config: str = "--oem 3 --psm 6"


class StorageConfig(BaseModel):
    """Note store configuration."""

    db_path: str = "data/synapse.db"


class SearchConfig(BaseModel):
    """Retrieval limits."""

    semantic_limit: int = Field(default=5, ge=1)
    top_tags_limit: int = Field(default=3, ge=1)


class ServerConfig(BaseModel):
    """HTTP server configuration."""

    host: str = "0.0.0.0"
    port: int = 5000
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    log_to_file: bool = True
    log_dir: str = "logs"
    file_rotation: str = "10 MB"
    file_retention: str = "7 days"
    compression: str = "zip"
    serialize: bool = True


class Config(BaseModel):
    """Main configuration."""

    embedder: EmbedderConfig = Field(default_factory=EmbedderConfig)
    ocr: OCRConfig = Field(default_factory=OCRConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> "Config":
        """
        Load configuration from environment variables.

        Priority: .env file -> system environment variables -> defaults

        Args:
            env_file: Optional path to .env file (default: .env in project root)

        Returns:
            Config instance

        Environment variables:
            SYNAPSE_EMBEDDER_PROVIDER: Embedder provider (openai, ollama)
            SYNAPSE_EMBEDDER_MODEL: Embedder model name
            SYNAPSE_EMBEDDER_BASE_URL: Embedder base URL
            SYNAPSE_EMBEDDER_API_KEY: Embedder API key (falls back to OPENAI_API_KEY)
            SYNAPSE_EMBEDDER_DIMENSION: Embedding dimension
            SYNAPSE_OCR_LANGUAGE: Tesseract language code
            SYNAPSE_OCR_TESSERACT_CMD: Path to the tesseract binary
            SYNAPSE_DB_PATH: SQLite database path
            SYNAPSE_SEMANTIC_LIMIT: Number of semantic search results
            SYNAPSE_HOST / SYNAPSE_PORT: Server bind address
            SYNAPSE_LOG_LEVEL: Log level
        """
        if env_file:
            load_dotenv(env_file)
        elif Path(".env").exists():
            load_dotenv()

        def get_env(key: str, default: Any = None) -> Any:
            """Get environment variable with type conversion."""
            value = os.getenv(key)
            if value is None:
                return default
            if value == "":
                return default
            # bool before int: bool is a subclass of int
            if isinstance(default, bool):
                return str(value).lower() in ("true", "1", "yes")
            if isinstance(default, int):
                return int(value)
            if isinstance(default, float):
                return float(value)
            return value

        return cls(
            embedder=EmbedderConfig(
                provider=get_env("SYNAPSE_EMBEDDER_PROVIDER", "openai"),
                model=get_env("SYNAPSE_EMBEDDER_MODEL", "text-embedding-3-small"),
                base_url=get_env("SYNAPSE_EMBEDDER_BASE_URL"),
                api_key=get_env("SYNAPSE_EMBEDDER_API_KEY", get_env("OPENAI_API_KEY")),
                timeout=get_env("SYNAPSE_EMBEDDER_TIMEOUT", 30.0),
                dimension=get_env("SYNAPSE_EMBEDDER_DIMENSION", 1536),
            ),
            ocr=OCRConfig(
                language=get_env("SYNAPSE_OCR_LANGUAGE", "eng"),
                tesseract_cmd=get_env("SYNAPSE_OCR_TESSERACT_CMD"),
                tesseract_config=get_env("SYNAPSE_OCR_TESSERACT_CONFIG", "--oem 3 --psm 6"),
            ),
            storage=StorageConfig(
                db_path=get_env("SYNAPSE_DB_PATH", "data/synapse.db"),
            ),
            search=SearchConfig(
                semantic_limit=get_env("SYNAPSE_SEMANTIC_LIMIT", 5),
                top_tags_limit=get_env("SYNAPSE_TOP_TAGS_LIMIT", 3),
            ),
            server=ServerConfig(
                host=get_env("SYNAPSE_HOST", "0.0.0.0"),
                port=get_env("SYNAPSE_PORT", 5000),
            ),
            logging=LoggingConfig(
                level=get_env("SYNAPSE_LOG_LEVEL", "INFO"),
                log_to_file=get_env("SYNAPSE_LOG_TO_FILE", True),
                log_dir=get_env("SYNAPSE_LOG_DIR", "logs"),
                file_rotation=get_env("SYNAPSE_LOG_FILE_ROTATION", "10 MB"),
                file_retention=get_env("SYNAPSE_LOG_FILE_RETENTION", "7 days"),
                compression=get_env("SYNAPSE_LOG_COMPRESSION", "zip"),
                serialize=get_env("SYNAPSE_LOG_SERIALIZE", True),
            ),
        )

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> "Config":
        """
        Load configuration from YAML file.

        Args:
            yaml_path: Path to YAML configuration file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If YAML file doesn't exist
            yaml.YAMLError: If YAML is invalid
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        with open(yaml_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)

    @classmethod
    def from_env_or_yaml(
        cls, yaml_path: str | Path | None = None, env_file: str | Path | None = None
    ) -> "Config":
        """
        Load configuration with priority: env vars > YAML > defaults.

        Args:
            yaml_path: Optional path to YAML config
            env_file: Optional path to .env file

        Returns:
            Config instance
        """
        if yaml_path and Path(yaml_path).exists():
            with open(yaml_path) as f:
                config_dict = yaml.safe_load(f) or {}
        else:
            config_dict = {}

        env_config = cls.from_env(env_file=env_file)

        # Env sections that differ from defaults override YAML
        final_dict = {**config_dict}
        default = cls()
        for section in ("embedder", "ocr", "storage", "search", "server", "logging"):
            env_section = getattr(env_config, section)
            if env_section != getattr(default, section):
                final_dict[section] = env_section.model_dump()

        return cls(**final_dict) if final_dict else env_config


def load_config() -> Config:
    """
    Load the server configuration.

    SYNAPSE_CONFIG_FILE names an optional YAML file; environment variables
    override it.
    """
    return Config.from_env_or_yaml(yaml_path=os.getenv("SYNAPSE_CONFIG_FILE"))

