from decimal import Decimal

from pydantic import Field, AliasChoices
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Read env from container + optionally from files
    model_config = SettingsConfigDict(
        env_file=(".env", ".env.docker"),
        extra="ignore",
        case_sensitive=False,
    )

    # App
    ENVIRONMENT: str = Field(default="dev", validation_alias=AliasChoices("ENVIRONMENT", "environment"))
    APP_NAME: str = Field(default="assessment_tax", validation_alias=AliasChoices("APP_NAME", "app_name"))
    LOG_LEVEL: str = Field(default="INFO", validation_alias=AliasChoices("LOG_LEVEL", "log_level"))
    DEBUG: bool = Field(default=False, validation_alias=AliasChoices("DEBUG", "debug"))

    # Server
    HOST: str = Field(default="0.0.0.0", validation_alias=AliasChoices("HOST", "host"))
    PORT: int = Field(default=8080, validation_alias=AliasChoices("PORT", "port"))

    # Admin (HTTP Basic)
    ADMIN_USERNAME: str = Field(default="adminTax", validation_alias=AliasChoices("ADMIN_USERNAME", "admin_username"))
    ADMIN_PASSWORD: str = Field(default="admin!", validation_alias=AliasChoices("ADMIN_PASSWORD", "admin_password"))

    # Allowance caps at startup (personal / k-receipt are adjustable at runtime)
    DEFAULT_DONATION_CAP: Decimal = Field(
        default=Decimal("100000"),
        validation_alias=AliasChoices("DEFAULT_DONATION_CAP", "default_donation_cap"),
    )
    DEFAULT_K_RECEIPT_CAP: Decimal = Field(
        default=Decimal("50000"),
        validation_alias=AliasChoices("DEFAULT_K_RECEIPT_CAP", "default_k_receipt_cap"),
    )
    DEFAULT_PERSONAL_CAP: Decimal = Field(
        default=Decimal("60000"),
        validation_alias=AliasChoices("DEFAULT_PERSONAL_CAP", "default_personal_cap"),
    )


settings = Settings()
