"""
Configuration Management Module
Loads and manages application configuration from config.yaml,
with environment overrides (VOUCHER_API_URL, VOUCHER_CONFIG_FILE).
"""

from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, PrivateAttr
from pydantic_settings import BaseSettings, SettingsConfigDict


class BackendConfig(BaseModel):
    """Accounting backend (Laravel API) connection"""
    base_url: Optional[str] = None
    timeout: float = 30.0


class ApiConfig(BaseModel):
    """Gateway HTTP server configuration"""
    host: str = "0.0.0.0"
    port: int = 8080
    cors_origins: List[str] = ["http://localhost:3000"]
    # PUT /api/config/backend is refused unless enabled
    allow_config_updates: bool = False


class LoggingConfig(BaseModel):
    """Logging configuration"""
    level: str = "INFO"
    file: Optional[str] = "./logs/gateway.log"
    max_size: int = 10
    backup_count: int = 5
    console: bool = True
    colorize: bool = True


class SignatureConfig(BaseModel):
    """Signature image resolution"""
    prefix: str = "/signatures/"
    placeholder: str = "/placeholder.svg"


class PaginationConfig(BaseModel):
    """List screen defaults"""
    per_page: int = 10
    activity_per_page: int = 15
    page_window: int = 5


class AppConfig(BaseModel):
    """Main application configuration"""
    backend: BackendConfig = BackendConfig()
    api: ApiConfig = ApiConfig()
    logging: LoggingConfig = LoggingConfig()
    signatures: SignatureConfig = SignatureConfig()
    pagination: PaginationConfig = PaginationConfig()

    # File this configuration was loaded from; save_config writes back there
    _source: Optional[Path] = PrivateAttr(default=None)


class EnvSettings(BaseSettings):
    """Environment overrides"""
    model_config = SettingsConfigDict(env_prefix="VOUCHER_", env_file=".env", extra="ignore")

    api_url: Optional[str] = None
    config_file: str = "config.yaml"


def resolve_config_path(config_path: Optional[str] = None) -> Path:
    """Explicit path, else VOUCHER_CONFIG_FILE, else ./config.yaml"""
    return Path(config_path or EnvSettings().config_file)


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """Load configuration from YAML file, then apply environment overrides"""
    env = EnvSettings()
    config_file = resolve_config_path(config_path)
    
    app_config = AppConfig()
    if config_file.exists():
        with open(config_file, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f) or {}
            app_config = AppConfig(**config_data)
    app_config._source = config_file
    
    if env.api_url:
        app_config.backend.base_url = env.api_url
    
    return app_config


def save_config(config: AppConfig, config_path: Optional[str] = None) -> Path:
    """Save configuration to YAML file; defaults to the file it was loaded from"""
    if config_path:
        config_file = Path(config_path)
    else:
        config_file = config._source or resolve_config_path()
    
    with open(config_file, "w", encoding="utf-8") as f:
        yaml.dump(config.model_dump(), f, default_flow_style=False, allow_unicode=True)
    return config_file


# Global configuration instance
config = load_config()
