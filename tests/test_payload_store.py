"""Tests for sqs_offload.integrations.s3_payload_store."""

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError, ReadTimeoutError

from sqs_offload.core.exceptions import DeleteFailed, ObjectNotFound, StoreUnavailable
from sqs_offload.integrations.s3_payload_store import S3PayloadStore
from sqs_offload.schemas.pointer import PayloadPointer

BUCKET = "test-bucket"


def _client_error(code, operation):
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


# ---------------------------------------------------------------------------
# Against moto S3
# ---------------------------------------------------------------------------


def test_store_then_fetch(s3):
    store = S3PayloadStore(s3, BUCKET)
    body = "payload ✓ " * 100

    pointer = store.store(body, len(body.encode("utf-8")))

    assert pointer.bucket_name == BUCKET
    assert pointer.key
    assert store.fetch(pointer) == body
    stored = s3.get_object(Bucket=BUCKET, Key=pointer.key)["Body"].read()
    assert stored == body.encode("utf-8")


def test_each_store_uses_a_new_key(s3):
    store = S3PayloadStore(s3, BUCKET)
    assert store.store("a", 1).key != store.store("a", 1).key


def test_delete_removes_object(s3):
    store = S3PayloadStore(s3, BUCKET)
    pointer = store.store("body", 4)

    store.delete(pointer)

    with pytest.raises(ObjectNotFound) as exc:
        store.fetch(pointer)
    assert exc.value.error_code == "NoSuchKey"


def test_delete_of_missing_object_surfaces_s3_behaviour(s3):
    # S3 answers 204 for keys that do not exist
    store = S3PayloadStore(s3, BUCKET)
    store.delete(PayloadPointer(bucket_name=BUCKET, key="never-written"))


def test_store_into_missing_bucket_is_unavailable(s3):
    store = S3PayloadStore(s3, "no-such-bucket")
    with pytest.raises(StoreUnavailable) as exc:
        store.store("body", 4)
    assert isinstance(exc.value.__cause__, ClientError)


# ---------------------------------------------------------------------------
# Against a stub client
# ---------------------------------------------------------------------------


def test_store_passes_kms_parameters():
    s3 = MagicMock()
    store = S3PayloadStore(s3, "bkt", sse_kms_key_id="alias/payloads")

    store.store("body", 4)

    params = s3.put_object.call_args.kwargs
    assert params["ServerSideEncryption"] == "aws:kms"
    assert params["SSEKMSKeyId"] == "alias/payloads"
    assert params["Body"] == b"body"


def test_fetch_other_errors_are_unavailable():
    s3 = MagicMock()
    s3.get_object.side_effect = _client_error("AccessDenied", "GetObject")
    store = S3PayloadStore(s3, "bkt")

    with pytest.raises(StoreUnavailable) as exc:
        store.fetch(PayloadPointer(bucket_name="bkt", key="k"))
    assert exc.value.error_code == "AccessDenied"


def test_delete_client_error_is_delete_failed():
    s3 = MagicMock()
    s3.delete_object.side_effect = _client_error("AccessDenied", "DeleteObject")
    store = S3PayloadStore(s3, "bkt")

    with pytest.raises(DeleteFailed):
        store.delete(PayloadPointer(bucket_name="bkt", key="k"))


def test_delete_unexpected_status_is_delete_failed():
    s3 = MagicMock()
    s3.delete_object.return_value = {"ResponseMetadata": {"HTTPStatusCode": 500}}
    store = S3PayloadStore(s3, "bkt")

    with pytest.raises(DeleteFailed) as exc:
        store.delete(PayloadPointer(bucket_name="bkt", key="k"))
    assert exc.value.error_code == "500"


def test_transport_errors_propagate_verbatim():
    s3 = MagicMock()
    timeout = ReadTimeoutError(endpoint_url="https://s3.amazonaws.com")
    s3.get_object.side_effect = timeout
    store = S3PayloadStore(s3, "bkt")

    with pytest.raises(ReadTimeoutError) as exc:
        store.fetch(PayloadPointer(bucket_name="bkt", key="k"))
    assert exc.value is timeout
