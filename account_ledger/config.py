"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from typing import Dict, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Account provisioning table used when LEDGER_ACCOUNTS is not set (id -> limit)
DEFAULT_ACCOUNTS: Dict[int, int] = {
    1: 100_000,
    2: 80_000,
    3: 1_000_000,
    4: 10_000_000,
    5: 500_000,
}


class LedgerConfig(BaseSettings):
    """Account ledger service configuration"""
    
    model_config = SettingsConfigDict(
        env_prefix="LEDGER_",
        env_file=".env",
        case_sensitive=False,
    )
    
    # API configuration
    api_host: str = "0.0.0.0"
    api_port: int = 3000
    
    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text
    log_file: Optional[str] = None  # If None, logs to stdout
    
    # Account provisioning (JSON object in LEDGER_ACCOUNTS, e.g. {"1": 100000})
    accounts: Dict[int, int] = dict(DEFAULT_ACCOUNTS)
    
    # Business rules configuration
    history_capacity: int = 10
    max_description_length: int = 10
    
    @field_validator("accounts")
    @classmethod
    def _limits_not_negative(cls, value: Dict[int, int]) -> Dict[int, int]:
        for account_id, limit in value.items():
            if limit < 0:
                raise ValueError(f"Account {account_id} has a negative limit: {limit}")
        return value
    
    @field_validator("history_capacity", "max_description_length")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("must be at least 1")
        return value
    
    @field_validator("log_format")
    @classmethod
    def _known_format(cls, value: str) -> str:
        if value.lower() not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return value.lower()


# Global configuration instance
config = LedgerConfig()


def get_config() -> LedgerConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> LedgerConfig:
    """Reload configuration from environment"""
    global config
    config = LedgerConfig()
    return config
