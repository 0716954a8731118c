from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Solana RPC (falls back to Helius when only the API key is set)
    solana_rpc_url: str = ""
    helius_api_key: str = ""
    rpc_timeout_sec: float = 15.0

    # Price oracle: "alchemy" (per-mint parallel) or "jupiter" (batched)
    price_provider: str = "alchemy"
    price_timeout_sec: float = 10.0
    alchemy_api_key: str = ""
    alchemy_network: str = "solana-mainnet"
    jupiter_api_key: str = ""
    jupiter_price_url: str = "https://api.jup.ag/price/v2"

    # mint -> symbol overrides merged on top of the built-in table (JSON in env)
    extra_token_symbols: dict[str, str] = {}

    # Transaction history
    history_limit: int = 10
    history_max_limit: int = 50
    negligible_delta_sol: Decimal = Decimal("0.000001")  # fee-only / no-op filter

    # Tracked wallets
    redis_url: str = "redis://localhost:6379/0"
    tracked_wallets_key: str = "solana_wallets"

    # Logging
    log_level: str = "INFO"
    log_json: bool = False  # serialize console + file records (for log shippers)
    log_dir: str = "logs"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8080
    api_debug: bool = False

    @property
    def rpc_url(self) -> str:
        """Effective RPC endpoint."""
        if self.solana_rpc_url:
            return self.solana_rpc_url
        if self.helius_api_key:
            return f"https://mainnet.helius-rpc.com/?api-key={self.helius_api_key}"
        return "https://api.mainnet-beta.solana.com"


settings = Settings()
