"""Shared fixtures: in-memory SQS and S3 through moto."""

import os

import boto3
import pytest
from moto import mock_aws

from sqs_offload.integrations.sqs_client import ExtendedSQSClient
from sqs_offload.schemas.configuration import ExtendedClientConfiguration

REGION = "us-east-1"
BUCKET = "test-bucket"
QUEUE = "test-queue"


@pytest.fixture(autouse=True)
def _aws_credentials(monkeypatch):
    """Fake credentials so nothing ever reaches real AWS."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", REGION)


@pytest.fixture
def aws():
    with mock_aws():
        yield


@pytest.fixture
def s3(aws):
    client = boto3.client("s3", region_name=REGION)
    client.create_bucket(Bucket=BUCKET)
    return client


@pytest.fixture
def sqs(aws):
    return boto3.client("sqs", region_name=REGION)


@pytest.fixture
def queue_url(sqs):
    return sqs.create_queue(QueueName=QUEUE)["QueueUrl"]


@pytest.fixture
def make_client(sqs, s3):
    """Build an ExtendedSQSClient against the mocked services."""

    def _make(**overrides):
        options = {"s3_bucket_name": BUCKET}
        options.update(overrides)
        return ExtendedSQSClient(sqs, s3, ExtendedClientConfiguration(**options))

    return _make


@pytest.fixture
def object_count(s3):
    """Number of objects currently in the payload bucket."""

    def _count() -> int:
        return s3.list_objects_v2(Bucket=BUCKET).get("KeyCount", 0)

    return _count
