# integrations/sqs_client.py
"""
SQS client wrapper that moves large message bodies to S3.

Send, receive, delete and change-visibility (single and batch) are
intercepted; every other call goes straight to the wrapped boto3 client.
Requests and responses are never modified in place, each step builds a
new dict.
"""
from typing import Any, Dict, Iterable, List, Optional, Tuple

from sqs_offload.core.exceptions import InputError
from sqs_offload.core.logger import logger
from sqs_offload.integrations.s3_payload_store import S3PayloadStore
from sqs_offload.schemas.configuration import ExtendedClientConfiguration
from sqs_offload.schemas.pointer import PayloadPointer
from sqs_offload.services import receipt_handle
from sqs_offload.services.offload_policy import must_offload, validate_outbound
from sqs_offload.services.reserved_attributes import (
    RESERVED_ATTRIBUTE_NAMES,
    detect_marker,
    mark_offloaded,
    strip_marker,
)
from sqs_offload.services.size_estimator import estimate_attributes_size, estimate_body_size


def _require(kwargs: Dict[str, Any], required: Iterable[str], operation: str) -> None:
    missing = [name for name in required if kwargs.get(name) is None]
    if missing:
        message = f"{operation} requires {', '.join(missing)}."
        logger.error(message)
        raise InputError(message)


class ExtendedSQSClient:
    """
    Drop-in replacement for a boto3 SQS client with S3 payload offloading.

    Usage:
        client = ExtendedSQSClient(boto3.client("sqs"), boto3.client("s3"),
                                   ExtendedClientConfiguration(s3_bucket_name="my-bucket"))
        client.send_message(QueueUrl=url, MessageBody=big_body)
    """

    def __init__(
        self,
        sqs_client: Any,
        s3_client: Any = None,
        config: Optional[ExtendedClientConfiguration] = None,
        payload_store: Optional[S3PayloadStore] = None,
    ):
        if sqs_client is None:
            raise InputError("sqs_client cannot be None.")

        config = config or ExtendedClientConfiguration()
        self._config = config.model_copy(deep=True)
        self._sqs = sqs_client

        if payload_store is None and self._config.payload_support_enabled:
            if s3_client is None:
                raise InputError("An S3 client is required when payload support is enabled.")
            payload_store = S3PayloadStore(
                s3_client,
                self._config.s3_bucket_name,
                sse_kms_key_id=self._config.sse_kms_key_id,
            )
        self._payload_store = payload_store

        logger.info(
            "ExtendedSQSClient initialized",
            extra={
                "payload_support": self._config.payload_support_enabled,
                "threshold": self._config.payload_size_threshold,
                "always_through_s3": self._config.always_through_s3,
            },
        )

    @property
    def config(self) -> ExtendedClientConfiguration:
        return self._config

    def __getattr__(self, name: str) -> Any:
        # Everything not intercepted below is plain SQS.
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._sqs, name)

    # ========================================================================
    # SEND
    # ========================================================================

    def send_message(self, **kwargs) -> Dict[str, Any]:
        _require(kwargs, ("QueueUrl", "MessageBody"), "send_message")

        if not self._config.payload_support_enabled:
            return self._sqs.send_message(**kwargs)

        self._check_outbound(kwargs)
        return self._sqs.send_message(**self._store_if_large(kwargs))

    def send_message_batch(self, **kwargs) -> Dict[str, Any]:
        """
        Every entry is validated before anything is written to S3, so one
        bad entry fails the whole call without leaving orphan objects for
        its siblings.
        """
        _require(kwargs, ("QueueUrl", "Entries"), "send_message_batch")

        if not self._config.payload_support_enabled:
            return self._sqs.send_message_batch(**kwargs)

        entries = kwargs["Entries"]
        for entry in entries:
            self._check_outbound(entry)

        request = dict(kwargs)
        request["Entries"] = [self._store_if_large(entry) for entry in entries]
        return self._sqs.send_message_batch(**request)

    def _check_outbound(self, entry: Dict[str, Any]) -> None:
        if not entry.get("MessageBody"):
            logger.error("messageBody cannot be null or empty.")
            raise InputError("messageBody cannot be null or empty.")
        validate_outbound(entry.get("MessageAttributes"), self._config)

    def _store_if_large(self, entry: Dict[str, Any]) -> Dict[str, Any]:
        body = entry["MessageBody"]
        attributes = entry.get("MessageAttributes") or {}

        body_size = estimate_body_size(body)
        if not must_offload(body_size, estimate_attributes_size(attributes), self._config):
            return entry

        pointer = self._payload_store.store(body, body_size)

        offloaded = dict(entry)
        offloaded["MessageAttributes"] = mark_offloaded(attributes, body_size, self._config)
        offloaded["MessageBody"] = pointer.to_json(
            legacy=self._config.use_legacy_reserved_attribute_name
        )
        return offloaded

    # ========================================================================
    # RECEIVE
    # ========================================================================

    def receive_message(self, **kwargs) -> Dict[str, Any]:
        _require(kwargs, ("QueueUrl",), "receive_message")

        if not self._config.payload_support_enabled:
            return self._sqs.receive_message(**kwargs)

        # Remove before adding to avoid duplicates
        names = [
            name for name in kwargs.get("MessageAttributeNames") or []
            if name not in RESERVED_ATTRIBUTE_NAMES
        ]
        request = dict(kwargs)
        request["MessageAttributeNames"] = names + list(RESERVED_ATTRIBUTE_NAMES)

        response = self._sqs.receive_message(**request)
        if "Messages" not in response:
            return response

        restored = dict(response)
        restored["Messages"] = [self._restore(message) for message in response["Messages"]]
        return restored

    def _restore(self, message: Dict[str, Any]) -> Dict[str, Any]:
        attributes = message.get("MessageAttributes")
        if detect_marker(attributes) is None:
            return message

        pointer = PayloadPointer.from_json(message.get("Body"))

        restored = dict(message)
        restored["Body"] = self._payload_store.fetch(pointer)
        restored["MessageAttributes"] = strip_marker(attributes)
        restored["ReceiptHandle"] = receipt_handle.encode(message["ReceiptHandle"], pointer)
        return restored

    # ========================================================================
    # DELETE / VISIBILITY
    # ========================================================================

    def delete_message(self, **kwargs) -> Dict[str, Any]:
        _require(kwargs, ("QueueUrl", "ReceiptHandle"), "delete_message")

        request = dict(kwargs)
        request["ReceiptHandle"] = self._release(kwargs["ReceiptHandle"], cleanup=True)
        return self._sqs.delete_message(**request)

    def delete_message_batch(self, **kwargs) -> Dict[str, Any]:
        _require(kwargs, ("QueueUrl", "Entries"), "delete_message_batch")

        request = dict(kwargs)
        request["Entries"] = self._release_entries(kwargs["Entries"], cleanup=True)
        return self._sqs.delete_message_batch(**request)

    def change_message_visibility(self, **kwargs) -> Dict[str, Any]:
        _require(
            kwargs,
            ("QueueUrl", "ReceiptHandle", "VisibilityTimeout"),
            "change_message_visibility",
        )

        request = dict(kwargs)
        request["ReceiptHandle"] = self._release(kwargs["ReceiptHandle"], cleanup=False)
        return self._sqs.change_message_visibility(**request)

    def change_message_visibility_batch(self, **kwargs) -> Dict[str, Any]:
        _require(kwargs, ("QueueUrl", "Entries"), "change_message_visibility_batch")

        request = dict(kwargs)
        request["Entries"] = self._release_entries(kwargs["Entries"], cleanup=False)
        return self._sqs.change_message_visibility_batch(**request)

    def _release_entries(self, entries: List[Dict[str, Any]], cleanup: bool) -> List[Dict[str, Any]]:
        """
        Every entry is checked and decoded before any S3 payload is deleted,
        so one bad entry fails the whole call with all payloads still in place.
        """
        decoded = []
        for entry in entries:
            _require(entry, ("ReceiptHandle",), "batch entry")
            decoded.append(self._decode(entry["ReceiptHandle"]))

        released = []
        for entry, (handle, pointer) in zip(entries, decoded):
            if cleanup:
                self._cleanup(pointer)
            updated = dict(entry)
            updated["ReceiptHandle"] = handle
            released.append(updated)
        return released

    def _release(self, handle: str, cleanup: bool) -> str:
        """
        Map a handle returned by receive_message back to the SQS one,
        deleting the S3 payload first when cleanup applies.
        """
        original, pointer = self._decode(handle)
        if cleanup:
            self._cleanup(pointer)
        return original

    def _decode(self, handle: str) -> Tuple[str, Optional[PayloadPointer]]:
        if not receipt_handle.is_encoded(handle):
            return handle, None
        return receipt_handle.decode_original_handle(handle), receipt_handle.decode_pointer(handle)

    def _cleanup(self, pointer: Optional[PayloadPointer]) -> None:
        if pointer is None:
            return
        if self._config.payload_support_enabled and self._config.cleanup_s3_payload:
            self._payload_store.delete(pointer)

    # ========================================================================
    # PURGE
    # ========================================================================

    def purge_queue(self, **kwargs) -> Dict[str, Any]:
        _require(kwargs, ("QueueUrl",), "purge_queue")
        logger.warning("Calling purge_queue deletes SQS messages without deleting their payload from S3.")
        return self._sqs.purge_queue(**kwargs)
