"""Tests for sqs_offload.core.aws_client."""

from sqs_offload.core import aws_client
from sqs_offload.integrations.s3_payload_store import S3PayloadStore
from sqs_offload.integrations.sqs_client import ExtendedSQSClient
from sqs_offload.schemas.configuration import ExtendedClientConfiguration

# pylint: disable=protected-access


def test_clients_carry_user_agent_suffix(aws):
    assert aws_client.get_sqs_client().meta.config.user_agent_extra == "SQSExtendedClient"
    assert aws_client.get_s3_client().meta.config.user_agent_extra == "SQSExtendedClient"


def test_extended_client_with_payload_support(aws):
    config = ExtendedClientConfiguration(s3_bucket_name="test-bucket", sse_kms_key_id="alias/k")

    client = aws_client.get_extended_sqs_client(config)

    assert isinstance(client, ExtendedSQSClient)
    assert isinstance(client._payload_store, S3PayloadStore)
    assert client._payload_store.bucket_name == "test-bucket"
    assert client._payload_store.sse_kms_key_id == "alias/k"


def test_extended_client_without_payload_support(aws):
    client = aws_client.get_extended_sqs_client(ExtendedClientConfiguration())
    assert client._payload_store is None
    assert client.config.payload_support_enabled is False


def test_validate_aws_credentials(monkeypatch):
    assert aws_client.validate_aws_credentials() is True

    monkeypatch.delenv("AWS_ACCESS_KEY_ID")
    monkeypatch.setattr(aws_client.settings, "AWS_ACCESS_KEY_ID", None)
    assert aws_client.validate_aws_credentials() is False
