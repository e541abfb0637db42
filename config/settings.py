from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # 1inch API. No default: every proxy route answers 500 until it is set
    ONEINCH_API_KEY: str | None = None
    ONEINCH_API_BASE_URL: str = "https://api.1inch.dev"

    # Chains (137 = Polygon mainnet)
    ORDERBOOK_CHAIN_ID: int = 137
    PRICE_CHAIN_ID: int = 137

    # Default price pair: native asset placeholder / USDC
    DEFAULT_BASE_TOKEN: str = "0xEeeeeEeeeEeEeeEeEeEeeEEEeeeeEeeeeeeeEEeE"
    DEFAULT_QUOTE_TOKEN: str = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"

    # Upper bound for any single upstream call
    UPSTREAM_TIMEOUT_SECONDS: float = 15.0

    # Client SDK
    PROXY_BASE_URL: str = "http://localhost:8000"
    TARGET_CHAIN_ID: int = 137
    RPC_URL: str = "https://polygon-rpc.com"
    PRICE_CACHE_PATH: str = ".price_cache.json"
    PRICE_CACHE_TTL_SECONDS: int = 86400
    PRICE_REFRESH_INTERVAL_SECONDS: float = 30.0
    APPROVAL_TIMEOUT_SECONDS: float = 120.0

    # App
    APP_NAME: str = "Limit Order Desk"
    DEBUG: bool = False  # Safe default for production; set DEBUG=True in .env for local dev


settings = Settings()
