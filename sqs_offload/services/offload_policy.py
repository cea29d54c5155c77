# services/offload_policy.py
from typing import Any, Dict, Optional

from sqs_offload.core.exceptions import (
    AttributeSizeExceeded,
    ReservedAttributeUsed,
    TooManyAttributes,
)
from sqs_offload.core.logger import logger
from sqs_offload.schemas.configuration import ExtendedClientConfiguration
from sqs_offload.services.reserved_attributes import detect_marker
from sqs_offload.services.size_estimator import estimate_attributes_size


def must_offload(body_size: int, attributes_size: int, config: ExtendedClientConfiguration) -> bool:
    """True when the body has to go to S3 instead of inline in the message."""
    if config.always_through_s3:
        return True
    return body_size + attributes_size > config.payload_size_threshold


def validate_outbound(
    attributes: Optional[Dict[str, Dict[str, Any]]],
    config: ExtendedClientConfiguration,
) -> None:
    """
    Check the constraints on the attributes of a message that may be offloaded.

    Only the body is ever moved to S3, so the attributes alone must fit under
    the threshold, leave room for the reserved attribute and not already
    use one of the reserved names.

    Raises:
        AttributeSizeExceeded, TooManyAttributes, ReservedAttributeUsed
    """
    attributes = attributes or {}

    attributes_size = estimate_attributes_size(attributes)
    if attributes_size > config.payload_size_threshold:
        error = AttributeSizeExceeded(attributes_size, config.payload_size_threshold)
        logger.error(str(error))
        raise error

    if len(attributes) > config.max_allowed_attributes:
        error = TooManyAttributes(len(attributes), config.max_allowed_attributes)
        logger.error(str(error))
        raise error

    reserved = detect_marker(attributes)
    if reserved is not None:
        error = ReservedAttributeUsed(reserved.value)
        logger.error(str(error))
        raise error
