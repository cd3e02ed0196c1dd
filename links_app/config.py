from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    
    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    
    Settings are read once at process start; there is no runtime reconfiguration.
    """
    
    # Environment
    environment: str = "development"
    debug: bool = False
    
    # Application
    app_name: str = "Link Shortener"
    app_version: str = "1.0"
    
    # Server
    host: str = "127.0.0.1"
    port: int = 5000
    cors_origins: List[str] = ["*"]
    
    # Database
    database_url: str = "sqlite:///./links.db"
    # None means "decide from environment": TLS toward the store only in production
    database_ssl: Optional[bool] = None
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: int = 10  # seconds to wait for a pooled connection
    db_pool_recycle: int = 1800
    db_connect_timeout: int = 5
    db_statement_timeout_ms: int = 5000
    
    # Short code allocation
    code_length: int = 6
    max_code_attempts: int = 10
    
    # Logging
    log_level: str = "INFO"
    log_json: bool = False
    log_file: Optional[str] = None
    access_log: bool = True
    
    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def use_database_ssl(self) -> bool:
        """Whether connections to the store must use secure transport."""
        if self.database_ssl is None:
            return self.is_production
        return self.database_ssl


# Create settings instance
settings = Settings()
