from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Target(BaseModel):
    # Spore agent id and a display name used in logs
    model_config = ConfigDict(frozen=True)

    id: int
    name: str


DEFAULT_TARGETS = [
    Target(id=6, name="Abel"),
    Target(id=7, name="Trinity"),
]


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=(".env",), extra="allow")

    # Solana
    rpc_url: str = "https://api.mainnet-beta.solana.com"
    private_key: str | None = None  # base58 secret key
    send_max_retries: int = 2
    skip_preflight: bool = True
    explorer_tx_url: str = "https://solscan.io/tx/{signature}"

    # Spore feed
    feed_url: str = "https://www.spore.fun/api/trpc/status,listAgent?batch=1"
    feed_timeout_sec: float = 10.0
    poll_interval_ms: int = 100
    targets: list[Target] = DEFAULT_TARGETS

    # Jupiter
    jupiter_quote_url: str = "https://quote-api.jup.ag/v6/quote"
    jupiter_swap_url: str = "https://quote-api.jup.ag/v6/swap"
    jupiter_timeout_sec: float = 15.0
    input_mint: str = "So11111111111111111111111111111111111111112"  # wrapped SOL
    amount_lamports: int = 1_000_000_000  # 1 SOL
    slippage_bps: int = 5000  # 50%

    # Logging
    log_level: str = "INFO"

    # --- Validators to coerce empty strings in optional envs to None ---
    @field_validator("private_key", mode="before")
    @classmethod
    def _empty_str_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def poll_interval_sec(self) -> float:
        return max(0, self.poll_interval_ms) / 1000.0
