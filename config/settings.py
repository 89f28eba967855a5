"""
Application settings loaded from environment variables.

Uses pydantic-settings for validation and type safety.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, Field
from functools import lru_cache
from typing import Optional


DEFAULT_REQUIREMENTS_URL = (
    "https://raw.githubusercontent.com/Possomato/requisitos-ui-extensions/"
    "refs/heads/main/src/app/requirements/requisitos.json"
)


class Settings(BaseSettings):
    """
    Application settings.
    
    All values loaded from .env file or environment variables.
    Validation happens automatically on startup.
    """
    
    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),  # Check current dir, then parent
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars
        populate_by_name=True
    )
    
    # ===================
    # HUBSPOT
    # ===================
    hubspot_access_token: Optional[str] = Field(
        None,
        validation_alias=AliasChoices(
            "hubspot_access_token",
            "private_app_access_token"
        ),
        description="HubSpot private app access token"
    )
    hubspot_api_base: str = Field(
        default="https://api.hubapi.com",
        description="HubSpot REST API base URL"
    )
    hubspot_timeout_seconds: float = Field(
        default=10,
        gt=0,
        le=120,
        description="Timeout for a single HubSpot request"
    )
    line_item_sku_property: str = Field(
        default="hs_product_id",
        min_length=1,
        description="Line item property holding the SKU code"
    )
    
    # ===================
    # REQUIREMENTS CATALOG
    # ===================
    requirements_url: str = Field(
        default=DEFAULT_REQUIREMENTS_URL,
        description="Remote JSON file with the requirement catalog (array of arrays)"
    )
    requirements_timeout_seconds: float = Field(
        default=10,
        gt=0,
        le=120,
        description="Timeout for the catalog download"
    )
    
    # ===================
    # MATCHING & ASSEMBLY
    # ===================
    sku_substring_fallback: bool = Field(
        default=False,
        description="Enable the lowest-priority substring SKU strategy"
    )
    product_name_placeholder: str = Field(
        default="Produto sem nome",
        description="Product name used when a line item has no name"
    )
    metadata_max_workers: int = Field(
        default=8,
        ge=1,
        le=64,
        description="Concurrent property metadata lookups"
    )
    metadata_timeout_seconds: float = Field(
        default=15,
        gt=0,
        le=120,
        description="Shared wait budget for all property metadata lookups of one request"
    )
    
    # ===================
    # APP SETTINGS
    # ===================
    environment: str = Field(
        default="development",
        pattern="^(development|staging|production)$",
        description="Application environment"
    )
    debug: bool = Field(
        default=True,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API host"
    )
    api_port: int = Field(
        default=8000,
        ge=1000,
        le=65535,
        description="API port"
    )
    
    # ===================
    # COMPUTED PROPERTIES
    # ===================
    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"
    
    @property
    def hubspot_configured(self) -> bool:
        """Check if a HubSpot token is available."""
        return bool(self.hubspot_access_token)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    
    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload.
    
    Returns:
        Settings: Application settings
        
    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()


# For convenient imports: from config.settings import settings
settings = get_settings()
