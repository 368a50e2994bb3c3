from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application configuration loaded from environment variables / .env file."""

    app_name: str = "Vendor KYC API"
    app_env: str = "development"
    app_port: int = 8000
    frontend_url: str = "http://localhost:3000"
    max_upload_size_mb: int = 5

    # Database (SQLite via aiosqlite for local dev)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./vendor_kyc_dev.db",
        alias="DATABASE_URL",
    )

    # Document storage (local disk, served statically)
    upload_dir: str = Field(default="./uploads", alias="UPLOAD_DIR")
    upload_url_prefix: str = Field(default="/uploads", alias="UPLOAD_URL_PREFIX")

    # Bearer tokens are issued by the identity provider; we only verify them
    jwt_secret: str = Field(default="dev-secret-change-me", alias="JWT_SECRET")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")

    # Vendor identifiers: VEN-00001, VEN-00002, ...
    vendor_id_prefix: str = Field(default="VEN", alias="VENDOR_ID_PREFIX")
    vendor_id_width: int = Field(default=5, alias="VENDOR_ID_WIDTH")

    # Optimistic-concurrency retry budget per unit of work
    write_retry_limit: int = Field(default=3, ge=1, alias="WRITE_RETRY_LIMIT")

    default_country: str = Field(default="India", alias="DEFAULT_COUNTRY")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
    }

    @property
    def max_upload_size_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024

settings = Settings()
