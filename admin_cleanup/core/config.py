"""
Core configuration and settings for the admin cleanup tool
"""

from typing import Optional
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from admin_cleanup.core.errors import ConfigurationError
from admin_cleanup.models.cleanup import CleanupPolicy


class Config(BaseSettings):
    """Tool configuration with environment variable support"""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",  # Allow extra fields to be ignored
    )

    # Tool information
    service_name: str = Field(default="admin-cleanup")
    environment: str = Field(default="development")

    # Database configuration
    mongodb_uri: Optional[str] = Field(default=None)
    mongodb_host: str = Field(default="localhost")
    mongodb_port: int = Field(default=27017)
    mongodb_username: Optional[str] = Field(default=None)
    mongodb_password: Optional[str] = Field(default=None)
    mongodb_auth_source: str = Field(default="admin")
    mongodb_database: str = Field(default="admin_dashboard")

    # Collection names (mongoose pluralized model names)
    customer_collection: str = Field(default="customers")
    vendor_collection: str = Field(default="vendorregisters")
    user_collection: str = Field(default="users")

    # Roles
    admin_role: str = Field(default="admin")
    vendor_role: str = Field(default="vendor")

    # Cleanup behaviour
    cleanup_policy: CleanupPolicy = Field(default=CleanupPolicy.CASCADE_BY_VENDOR_REFERENCE)
    cleanup_assume_yes: bool = Field(default=False)

    @property
    def mongodb_url(self) -> str:
        """Construct MongoDB connection URL"""
        if self.mongodb_uri:
            return self.mongodb_uri
        if self.mongodb_username and self.mongodb_password:
            return (
                f"mongodb://{self.mongodb_username}:{self.mongodb_password}"
                f"@{self.mongodb_host}:{self.mongodb_port}/{self.mongodb_database}"
                f"?authSource={self.mongodb_auth_source}"
            )
        return f"mongodb://{self.mongodb_host}:{self.mongodb_port}/{self.mongodb_database}"


def load_config(**overrides) -> Config:
    """Build a Config, turning validation problems into a ConfigurationError"""
    try:
        return Config(**overrides)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration: {e.error_count()} error(s)",
            details={"errors": [err["msg"] for err in e.errors()]},
        ) from e
