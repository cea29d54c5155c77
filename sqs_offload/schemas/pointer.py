# schemas/pointer.py
import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from sqs_offload.core.exceptions import PointerMalformed

MESSAGE_POINTER_CLASS = "software.amazon.payloadoffloading.PayloadS3Pointer"
LEGACY_MESSAGE_POINTER_CLASS = "com.amazon.sqs.javamessaging.MessageS3Pointer"

POINTER_CLASSES = (MESSAGE_POINTER_CLASS, LEGACY_MESSAGE_POINTER_CLASS)


class PayloadPointer(BaseModel):
    """
    Location of an offloaded message body.

    Serialized into the SQS message body as a compact two-element JSON array:
    ["<pointer class>", {"s3BucketName": "...", "s3Key": "..."}]
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    bucket_name: str = Field(..., alias="s3BucketName", min_length=1)
    key: str = Field(..., alias="s3Key", min_length=1)

    def to_json(self, legacy: bool = False) -> str:
        pointer_class = LEGACY_MESSAGE_POINTER_CLASS if legacy else MESSAGE_POINTER_CLASS
        return json.dumps(
            [pointer_class, self.model_dump(by_alias=True)],
            separators=(",", ":"),
            ensure_ascii=False,
        )

    @classmethod
    def from_json(cls, text: Any) -> "PayloadPointer":
        try:
            data = json.loads(text)
        except (TypeError, ValueError) as e:
            raise PointerMalformed(f"Message body is not a valid S3 pointer: {e}") from e

        if not (
            isinstance(data, list)
            and len(data) == 2
            and data[0] in POINTER_CLASSES
            and isinstance(data[1], dict)
        ):
            raise PointerMalformed(
                "Invalid payload format for a message stored in S3. "
                "Expected [pointer class, {s3BucketName, s3Key}]."
            )

        try:
            return cls.model_validate(data[1])
        except PydanticValidationError as e:
            raise PointerMalformed(f"S3 pointer is missing its bucket or key: {e}") from e
