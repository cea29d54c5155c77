# services/receipt_handle.py
"""
Receipt handle encoding for offloaded messages.

delete_message and change_message_visibility only get a receipt handle, so
the S3 location of an offloaded body travels inside it:

    M1 + bucket + M1 + M2 + key + M2 + original handle

with M1 = "-..s3BucketName..-" and M2 = "-..s3Key..-". Handles already in
circulation use this exact layout, so it must not change.

Known limitation: detection only checks that both markers occur somewhere.
A raw SQS handle that happened to contain both tokens would be taken for an
encoded one.
"""
from typing import Tuple

from sqs_offload.core.exceptions import ContractViolation
from sqs_offload.core.logger import logger
from sqs_offload.schemas.pointer import PayloadPointer

S3_BUCKET_NAME_MARKER = "-..s3BucketName..-"
S3_KEY_MARKER = "-..s3Key..-"

_MARKERS = (S3_BUCKET_NAME_MARKER, S3_KEY_MARKER)


def _marker_span(handle: str, marker: str) -> Tuple[int, int]:
    """
    Index of the first and second occurrence of `marker`.

    The second occurrence is searched from one character past the start of
    the first, not from the end of it.
    """
    first = handle.find(marker)
    second = handle.find(marker, first + 1) if first != -1 else -1
    if second == -1:
        raise ContractViolation(f"Receipt handle does not contain two '{marker}' markers.")
    return first, second


def _between(handle: str, marker: str) -> str:
    first, second = _marker_span(handle, marker)
    return handle[first + len(marker):second]


def encode(original_handle: str, pointer: PayloadPointer) -> str:
    for field, value in (("bucket", pointer.bucket_name), ("key", pointer.key)):
        if not value:
            raise ContractViolation(f"Cannot embed an S3 pointer with an empty {field}.")
        if any(marker in value for marker in _MARKERS):
            raise ContractViolation(f"S3 {field} '{value}' contains a receipt handle marker.")

    return (
        S3_BUCKET_NAME_MARKER + pointer.bucket_name + S3_BUCKET_NAME_MARKER
        + S3_KEY_MARKER + pointer.key + S3_KEY_MARKER
        + original_handle
    )


def is_encoded(handle: str) -> bool:
    return S3_BUCKET_NAME_MARKER in handle and S3_KEY_MARKER in handle


def decode_pointer(handle: str) -> PayloadPointer:
    bucket_name = _between(handle, S3_BUCKET_NAME_MARKER)
    key = _between(handle, S3_KEY_MARKER)
    if not bucket_name or not key:
        logger.error("Encoded receipt handle carries an empty S3 bucket or key")
        raise ContractViolation("Encoded receipt handle carries an empty S3 bucket or key.")
    return PayloadPointer(bucket_name=bucket_name, key=key)


def decode_original_handle(handle: str) -> str:
    """Everything after the second S3 key marker."""
    _, second = _marker_span(handle, S3_KEY_MARKER)
    return handle[second + len(S3_KEY_MARKER):]
