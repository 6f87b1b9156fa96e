"""
Configuration Management
Loads settings from YAML files and environment variables
"""
import yaml
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from cdr_gateway.domain.models.ingestion_config import IngestionConfig


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    environment: str = "development"
    log_level: str = "INFO"

    # API Settings
    api_prefix: str = "/api"
    cors_origins: list[str] = ["http://localhost:3000"]

    # Backend stores
    cdr_api_url: str = "http://localhost:3000/cdr"
    campaign_api_url: str = "http://localhost:3000/campaigns"
    numbers_api_url: str = "http://localhost:3000/phone-numbers"

    # Line classifier (IPQualityScore phone validation)
    line_classifier_api_url: str = "https://www.ipqualityscore.com/api/json/phone"
    line_classifier_api_key: Optional[str] = None

    # Routing policy
    fraud_score_threshold: int = Field(default=75, ge=0, le=100)
    max_retries: int = Field(default=3, ge=1)
    retry_delay_ms: int = Field(default=1000, ge=0)

    # Timeouts
    http_timeout_seconds: float = Field(default=10.0, gt=0)
    request_timeout_seconds: float = Field(default=30.0, gt=0)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def ingestion_config(self) -> IngestionConfig:
        """Routing policy values handed to the decision engine."""
        return IngestionConfig(
            fraud_score_threshold=self.fraud_score_threshold,
            max_retries=self.max_retries,
            retry_delay_ms=self.retry_delay_ms,
            request_timeout_seconds=self.request_timeout_seconds,
        )


class ConfigManager:
    """Manages loading and merging configuration from multiple sources"""

    def __init__(self, env: str = "development", config_dir: Optional[Path] = None):
        self.env = env
        self.config_dir = config_dir or Path(__file__).parent.parent.parent / "config"
        self._config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration files in order of precedence"""
        # Load default config if exists
        default_path = self.config_dir / "default.yaml"
        if default_path.exists():
            self._config = self._load_yaml(default_path)

        # Load environment-specific config
        env_path = self.config_dir / f"{self.env}.yaml"
        if env_path.exists():
            env_config = self._load_yaml(env_path)
            self._deep_merge(self._config, env_config)

        # Substitute environment variables
        self._substitute_env_vars(self._config)

    def _load_yaml(self, path: Path) -> Dict:
        """Load YAML file"""
        with open(path, 'r') as f:
            return yaml.safe_load(f) or {}

    def _substitute_env_vars(self, config: Dict) -> None:
        """Replace ${VAR_NAME} with environment variable values"""
        for key, value in config.items():
            if isinstance(value, dict):
                self._substitute_env_vars(value)
            elif isinstance(value, str) and value.startswith("${") and value.endswith("}"):
                env_var = value[2:-1]
                config[key] = os.getenv(env_var, value)

    def _deep_merge(self, base: Dict, override: Dict) -> None:
        """Recursively merge override into base"""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation
        Example: config.get("ingestion.fraud_score_threshold") -> 75
        """
        keys = key_path.split('.')
        value = self._config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def settings_defaults(self) -> Dict[str, Any]:
        """
        Flatten the ``backends``, ``classifier`` and ``ingestion`` sections
        into Settings field names.

        Unresolved ``${VAR}`` placeholders are dropped so the Settings
        default applies instead.
        """
        defaults: Dict[str, Any] = {}
        for section in ("backends", "classifier", "ingestion", "logging"):
            values = self.get(section, {}) or {}
            for key, value in values.items():
                if isinstance(value, str) and value.startswith("${"):
                    continue
                defaults[key] = value
        return defaults


def load_settings(env: Optional[str] = None, config_dir: Optional[Path] = None) -> Settings:
    """
    Build Settings with YAML values as defaults.

    Environment variables and .env always win over YAML: a YAML value only
    fills a field that neither source set.
    """
    base = Settings() if env is None else Settings(environment=env)
    manager = ConfigManager(env=base.environment, config_dir=config_dir)

    overrides = {
        key: value
        for key, value in manager.settings_defaults().items()
        if key in Settings.model_fields and key not in base.model_fields_set
    }
    if not overrides:
        return base
    return Settings(environment=base.environment, **overrides)


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings (cached)."""
    return load_settings()
