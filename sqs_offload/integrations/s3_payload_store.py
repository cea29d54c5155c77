# integrations/s3_payload_store.py
"""
S3-backed storage for offloaded message bodies.

Every stored body gets a fresh uuid4 key in the configured bucket. Failures
are not retried here; boto3's own retry configuration applies.

Deleting a key that is already gone is not an error: S3 answers 204 for
missing keys and that answer is surfaced as is.
"""
from typing import Any, Optional
from uuid import uuid4

from botocore.exceptions import ClientError

from sqs_offload.core.exceptions import DeleteFailed, ObjectNotFound, StoreUnavailable
from sqs_offload.core.logger import logger
from sqs_offload.schemas.pointer import PayloadPointer
from sqs_offload.services.size_estimator import ENCODING

_NOT_FOUND_CODES = {"NoSuchKey", "NoSuchBucket", "404"}


def _error_code(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Code", "Unknown")


class S3PayloadStore:
    """Store, fetch and delete message bodies in a single S3 bucket."""

    def __init__(self, s3_client: Any, bucket_name: str, sse_kms_key_id: Optional[str] = None):
        self.s3 = s3_client
        self.bucket_name = bucket_name
        self.sse_kms_key_id = sse_kms_key_id

    def store(self, body: str, original_size: int) -> PayloadPointer:
        pointer = PayloadPointer(bucket_name=self.bucket_name, key=str(uuid4()))

        params = {
            "Bucket": pointer.bucket_name,
            "Key": pointer.key,
            "Body": body.encode(ENCODING),
        }
        if self.sse_kms_key_id:
            params["ServerSideEncryption"] = "aws:kms"
            params["SSEKMSKeyId"] = self.sse_kms_key_id

        try:
            self.s3.put_object(**params)
        except ClientError as e:
            code = _error_code(e)
            logger.error(f"Failed to store message payload in S3: {e}")
            raise StoreUnavailable(
                f"Failed to store message content in S3 bucket {pointer.bucket_name}: {e}",
                error_code=code,
            ) from e

        logger.info(
            "S3 object created",
            extra={"bucket": pointer.bucket_name, "key": pointer.key, "size": original_size},
        )
        return pointer

    def fetch(self, pointer: PayloadPointer) -> str:
        try:
            response = self.s3.get_object(Bucket=pointer.bucket_name, Key=pointer.key)
        except ClientError as e:
            code = _error_code(e)
            logger.error(f"Failed to get message payload from S3: {e}")
            if code in _NOT_FOUND_CODES:
                raise ObjectNotFound(
                    f"S3 object {pointer.key} not found in bucket {pointer.bucket_name}",
                    error_code=code,
                ) from e
            raise StoreUnavailable(
                f"Failed to get S3 object {pointer.key} from bucket {pointer.bucket_name}: {e}",
                error_code=code,
            ) from e

        # StreamingBody
        body = response["Body"].read().decode(ENCODING)
        logger.debug(
            "S3 object read",
            extra={"bucket": pointer.bucket_name, "key": pointer.key},
        )
        return body

    def delete(self, pointer: PayloadPointer) -> None:
        try:
            response = self.s3.delete_object(Bucket=pointer.bucket_name, Key=pointer.key)
        except ClientError as e:
            logger.error(f"Failed to delete message payload from S3: {e}")
            raise DeleteFailed(
                f"Failed to delete S3 object {pointer.key} from bucket {pointer.bucket_name}: {e}",
                error_code=_error_code(e),
            ) from e

        status_code = response.get("ResponseMetadata", {}).get("HTTPStatusCode")
        if status_code != 204:
            logger.error(f"Unexpected status {status_code} deleting S3 object {pointer.key}")
            raise DeleteFailed(
                f"Failed to delete S3 object {pointer.key} from bucket {pointer.bucket_name}, "
                f"status code {status_code}",
                error_code=str(status_code),
            )

        logger.info(
            "S3 object deleted",
            extra={"bucket": pointer.bucket_name, "key": pointer.key},
        )
