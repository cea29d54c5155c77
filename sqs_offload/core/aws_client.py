# core/aws_client.py
"""
AWS client factory with explicit credential configuration.
Builds the S3 and SQS clients, and the extended SQS client on top of them.
"""
import os

import boto3
from botocore.config import Config

from sqs_offload.core.config import settings
from sqs_offload.core.logger import logger
from sqs_offload.integrations.sqs_client import ExtendedSQSClient
from sqs_offload.schemas.configuration import ExtendedClientConfiguration


def _credentials() -> dict:
    # Settings (loaded from .env) first, then the environment
    return {
        "aws_access_key_id": getattr(settings, 'AWS_ACCESS_KEY_ID', None) or os.getenv('AWS_ACCESS_KEY_ID'),
        "aws_secret_access_key": getattr(settings, 'AWS_SECRET_ACCESS_KEY', None) or os.getenv('AWS_SECRET_ACCESS_KEY'),
        "aws_session_token": getattr(settings, 'AWS_SESSION_TOKEN', None) or os.getenv('AWS_SESSION_TOKEN'),
    }


def _client_config() -> Config:
    return Config(user_agent_extra=settings.USER_AGENT_SUFFIX)


def get_s3_client():
    """Get S3 client with proper credentials."""
    try:
        client = boto3.client(
            "s3",
            region_name=settings.AWS_REGION,
            endpoint_url=settings.S3_ENDPOINT_URL,
            config=_client_config(),
            **_credentials(),
        )
        logger.info("S3 client initialized with credentials")
        return client
    except Exception as e:
        logger.error(f"Failed to initialize S3 client: {str(e)}")
        raise


def get_sqs_client():
    """Get SQS client with proper credentials."""
    try:
        client = boto3.client(
            "sqs",
            region_name=settings.SQS_REGION,
            endpoint_url=settings.SQS_ENDPOINT_URL,
            config=_client_config(),
            **_credentials(),
        )
        logger.info("SQS client initialized with credentials")
        return client
    except Exception as e:
        logger.error(f"Failed to initialize SQS client: {str(e)}")
        raise


def get_extended_sqs_client(config=None):
    """
    Get an ExtendedSQSClient.

    Args:
        config: ExtendedClientConfiguration; defaults to one built from settings

    The S3 client is only created when payload support is enabled.
    """
    config = config or ExtendedClientConfiguration.from_settings(settings)
    s3_client = get_s3_client() if config.payload_support_enabled else None
    return ExtendedSQSClient(get_sqs_client(), s3_client, config)


def validate_aws_credentials() -> bool:
    """Validate that AWS credentials are properly configured."""
    credentials = _credentials()

    if not credentials["aws_access_key_id"] or not credentials["aws_secret_access_key"]:
        logger.warning("Missing AWS credentials in both settings and environment variables")
        logger.info("AWS credentials not found. Set AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY in the .env file, "
                    "or rely on the default boto3 credential chain")
        return False

    logger.info("AWS credentials found and validated")
    return True
