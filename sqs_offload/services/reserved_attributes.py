# services/reserved_attributes.py
"""
The marker attribute flagging a message whose body lives in S3.

Two names are recognized: the current one and the legacy one written by
older clients. Exactly one is written on offload, both are accepted on
receive and both are reserved on send.
"""
from enum import Enum
from typing import Any, Dict, Optional

from sqs_offload.schemas.configuration import ExtendedClientConfiguration

RESERVED_ATTRIBUTE_DATA_TYPE = "Number"


class ReservedAttributeName(str, Enum):
    # Declaration order is lookup priority in detect_marker
    CURRENT = "ExtendedPayloadSize"
    LEGACY = "SQSLargePayloadSize"

    @classmethod
    def for_config(cls, config: ExtendedClientConfiguration) -> "ReservedAttributeName":
        return cls.LEGACY if config.use_legacy_reserved_attribute_name else cls.CURRENT


RESERVED_ATTRIBUTE_NAMES = tuple(name.value for name in ReservedAttributeName)


def mark_offloaded(
    attributes: Optional[Dict[str, Dict[str, Any]]],
    original_size: int,
    config: ExtendedClientConfiguration,
) -> Dict[str, Dict[str, Any]]:
    """Return a copy of `attributes` carrying the marker with the original body size."""
    marked = dict(attributes or {})
    marked[ReservedAttributeName.for_config(config).value] = {
        "DataType": RESERVED_ATTRIBUTE_DATA_TYPE,
        "StringValue": str(original_size),
    }
    return marked


def detect_marker(attributes: Optional[Dict[str, Any]]) -> Optional[ReservedAttributeName]:
    if not attributes:
        return None
    for name in ReservedAttributeName:
        if name.value in attributes:
            return name
    return None


def strip_marker(attributes: Optional[Dict[str, Dict[str, Any]]]) -> Dict[str, Dict[str, Any]]:
    """Return a copy of `attributes` without either reserved name."""
    return {
        name: value
        for name, value in (attributes or {}).items()
        if name not in RESERVED_ATTRIBUTE_NAMES
    }
