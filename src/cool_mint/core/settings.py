"""Application settings and configuration.

This module defines all configuration options for the Cool Mint service.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ZERO_IDENTITY_HEX = "00" * 32


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    This class defines all configuration options for the Cool Mint service.
    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Cool Mint", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database configuration
    database_url: str = Field(default="sqlite:///./cool_mint.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Voucher signing domain; fixed inputs to every voucher digest
    collection_name: str = Field(default="CoolNFT", alias="COLLECTION_NAME")
    collection_version: str = Field(default="1.0", alias="COLLECTION_VERSION")
    chain_id: int = Field(default=31337, ge=0, alias="CHAIN_ID")
    deployment_address: str = Field(default="11" * 32, alias="DEPLOYMENT_ADDRESS")

    # Hex-encoded Ed25519 public key of the single authorized voucher signer
    mint_voucher_signer: str = Field(default=ZERO_IDENTITY_HEX, alias="MINT_VOUCHER_SIGNER")

    # Supply and pricing (prices in the smallest currency unit)
    max_supply: int = Field(default=1000, gt=0, alias="MAX_SUPPLY")
    batch_size: int = Field(default=6, gt=0, alias="BATCH_SIZE")
    mint_price: int = Field(default=10**16, ge=0, alias="MINT_PRICE")
    mint_batch_price: int = Field(default=5 * 10**16, ge=0, alias="MINT_BATCH_PRICE")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def database_url_sync(self) -> str:
        """Return a sync-compatible database URL for tooling.

        Converts asyncpg URLs to psycopg for synchronous database operations
        like Alembic migrations.
        """
        url = self.effective_database_url
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql+psycopg", 1)
        return url

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides."""
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url


settings = Settings()
