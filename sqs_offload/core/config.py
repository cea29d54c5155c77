# core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Optional


class Settings(BaseSettings):
    """
    Centralized configuration for the extended client.
    Values are read from the environment or a local .env file.
    """

    # ------------------------------------------------------------
    # Runtime / Logging
    # ------------------------------------------------------------
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # ------------------------------------------------------------
    # AWS Core
    # ------------------------------------------------------------
    AWS_REGION: str = "us-east-1"
    AWS_ACCESS_KEY_ID: Optional[str] = None
    AWS_SECRET_ACCESS_KEY: Optional[str] = None
    AWS_SESSION_TOKEN: Optional[str] = None

    # Custom endpoints (LocalStack, VPC endpoints)
    S3_ENDPOINT_URL: Optional[str] = None
    SQS_ENDPOINT_URL: Optional[str] = None

    # ------------------------------------------------------------
    # Messaging (SQS)
    # ------------------------------------------------------------
    SQS_REGION: str = "us-east-1"
    USER_AGENT_SUFFIX: str = "SQSExtendedClient"

    # ------------------------------------------------------------
    # Payload offloading (S3)
    # ------------------------------------------------------------
    PAYLOAD_BUCKET: Optional[str] = Field(
        None,
        description="Bucket receiving offloaded bodies. Offloading is disabled when unset.",
    )
    PAYLOAD_SIZE_THRESHOLD: int = 262144
    ALWAYS_THROUGH_S3: bool = False
    USE_LEGACY_RESERVED_ATTRIBUTE_NAME: bool = False
    CLEANUP_S3_PAYLOAD: bool = True
    MAX_ALLOWED_ATTRIBUTES: int = 9
    S3_SSE_KMS_KEY_ID: Optional[str] = None

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
