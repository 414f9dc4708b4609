"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Ledger
    node_url: str = "https://fullnode.testnet.aptoslabs.com/v1"
    module_address: str = "0x03f4fe0fa07e8733ca0eb08be6d46e8ae929afdc33222164d79f5cdc89137970"
    module_name: str = "AutoLending"
    coin_type: str = "0x1::aptos_coin::AptosCoin"

    # Signing agent (wallet bridge). Unset means no agent in this runtime.
    signing_agent_url: str | None = None

    # Service
    service_name: str = "auto-lending"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 5.0
    finality_timeout_seconds: float = 20.0
    finality_poll_interval_seconds: float = 0.5


settings = Settings()
