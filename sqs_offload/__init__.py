"""
sqs_offload - SQS client with transparent S3 offloading of large payloads
"""

__version__ = "0.1.0"

from sqs_offload.core.aws_client import get_extended_sqs_client
from sqs_offload.core.exceptions import (
    AttributeSizeExceeded,
    ContractViolation,
    DeleteFailed,
    EncodingError,
    ExtendedClientError,
    InputError,
    ObjectNotFound,
    PointerMalformed,
    ReservedAttributeUsed,
    StoreError,
    StoreUnavailable,
    TooManyAttributes,
    ValidationError,
)
from sqs_offload.integrations.s3_payload_store import S3PayloadStore
from sqs_offload.integrations.sqs_client import ExtendedSQSClient
from sqs_offload.schemas.configuration import ExtendedClientConfiguration
from sqs_offload.schemas.pointer import PayloadPointer
from sqs_offload.services.reserved_attributes import ReservedAttributeName

__all__ = [
    "AttributeSizeExceeded",
    "ContractViolation",
    "DeleteFailed",
    "EncodingError",
    "ExtendedClientConfiguration",
    "ExtendedClientError",
    "ExtendedSQSClient",
    "InputError",
    "ObjectNotFound",
    "PayloadPointer",
    "PointerMalformed",
    "ReservedAttributeName",
    "ReservedAttributeUsed",
    "S3PayloadStore",
    "StoreError",
    "StoreUnavailable",
    "TooManyAttributes",
    "ValidationError",
    "get_extended_sqs_client",
]
