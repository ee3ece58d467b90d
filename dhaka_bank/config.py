"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class BankConfig(BaseSettings):
    """Dhaka Bank console configuration"""

    model_config = SettingsConfigDict(
        env_prefix="DHAKA_BANK_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Storage configuration
    data_file: str = "accounts.json"
    atomic_writes: bool = True  # Write to a temp file, then rename over the target

    # Security configuration
    password_scheme: Literal["scrypt", "sha256"] = "scrypt"

    # Display configuration
    currency_code: str = "USD"

    # Logging configuration
    log_level: str = "WARNING"
    log_format: Literal["json", "text"] = "json"
    log_file: Optional[str] = None  # If None, logs to stderr


# Global configuration instance
config = BankConfig()


def get_config() -> BankConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> BankConfig:
    """Reload configuration from environment"""
    global config
    config = BankConfig()
    return config
