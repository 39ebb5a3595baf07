from decimal import Decimal

from pydantic import Field
from pydantic_settings import BaseSettings

from college_erp.core.enums import LateFeePolicyKind


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    jwt_secret_key: str = Field("change-me-in-production", alias="JWT_SECRET_KEY")
    jwt_algorithm: str = Field("HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(60, alias="ACCESS_TOKEN_EXPIRE_MINUTES")
    bcrypt_rounds: int = Field(12, alias="BCRYPT_ROUNDS", ge=4, le=31)

    max_fee_amount: Decimal = Field(Decimal("1000000"), alias="MAX_FEE_AMOUNT", gt=0)
    late_fee_policy: LateFeePolicyKind = Field(LateFeePolicyKind.FLAT, alias="LATE_FEE_POLICY")
    late_fee_flat_amount: Decimal = Field(Decimal("500"), alias="LATE_FEE_FLAT_AMOUNT", ge=0)
    late_fee_percentage: Decimal = Field(Decimal("5"), alias="LATE_FEE_PERCENTAGE", ge=0, le=100)
    receipt_prefix: str = Field("RCP", alias="RECEIPT_PREFIX")
    security_deposit: Decimal = Field(Decimal("5000"), alias="SECURITY_DEPOSIT", ge=0)

    log_level: str = Field("INFO", alias="LOG_LEVEL")
    seed_demo_data: bool = Field(True, alias="SEED_DEMO_DATA")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"
        populate_by_name = True


settings = Settings()
