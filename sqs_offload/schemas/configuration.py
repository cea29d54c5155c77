# schemas/configuration.py
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sqs_offload.core.config import Settings

# 256 KiB, the SQS message size limit
DEFAULT_MESSAGE_SIZE_THRESHOLD = 262144

# 10 for SQS and 1 reserved attribute
MAX_ALLOWED_ATTRIBUTES = 10 - 1


class ExtendedClientConfiguration(BaseModel):
    """
    Per-client offloading options.

    Frozen: a client copies the instance it is given and never changes it.
    Offloading is enabled only when s3_bucket_name is set.
    """

    model_config = ConfigDict(frozen=True)

    s3_bucket_name: Optional[str] = None
    payload_size_threshold: int = Field(DEFAULT_MESSAGE_SIZE_THRESHOLD, ge=0)
    always_through_s3: bool = False
    use_legacy_reserved_attribute_name: bool = False
    cleanup_s3_payload: bool = True
    max_allowed_attributes: int = Field(MAX_ALLOWED_ATTRIBUTES, ge=0)
    sse_kms_key_id: Optional[str] = None

    @field_validator("s3_bucket_name")
    @classmethod
    def _bucket_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            raise ValueError("S3 bucket name cannot be blank")
        return value

    @property
    def payload_support_enabled(self) -> bool:
        return self.s3_bucket_name is not None

    @classmethod
    def from_settings(cls, source: Settings) -> "ExtendedClientConfiguration":
        return cls(
            s3_bucket_name=source.PAYLOAD_BUCKET or None,
            payload_size_threshold=source.PAYLOAD_SIZE_THRESHOLD,
            always_through_s3=source.ALWAYS_THROUGH_S3,
            use_legacy_reserved_attribute_name=source.USE_LEGACY_RESERVED_ATTRIBUTE_NAME,
            cleanup_s3_payload=source.CLEANUP_S3_PAYLOAD,
            max_allowed_attributes=source.MAX_ALLOWED_ATTRIBUTES,
            sse_kms_key_id=source.S3_SSE_KMS_KEY_ID or None,
        )
