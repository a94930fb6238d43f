from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    CHAIN_ID: int = 1
    # Overrides the registry values for CHAIN_ID when set.
    RPC_URL: str | None = None
    MULTICALL_ADDRESS: str | None = None

    CHUNK_SIZE: int = 500
    HUMAN_READABLE: bool = True
    LOG_LEVEL: str = "INFO"


settings = Settings()
