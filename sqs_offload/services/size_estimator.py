# services/size_estimator.py
"""
Byte-size accounting for SQS message bodies and attributes.

Sizes are measured on the UTF-8 encoding, the same way SQS counts them
against its message size limit.
"""
from typing import Any, Dict, Optional

from sqs_offload.core.exceptions import InputError

ENCODING = "utf-8"


def estimate_body_size(text: Optional[str]) -> int:
    """Return the number of bytes `text` occupies once encoded."""
    if text is None:
        raise InputError("Cannot estimate the size of a null message body.")
    return len(text.encode(ENCODING))


def estimate_attributes_size(attributes: Optional[Dict[str, Dict[str, Any]]]) -> int:
    """
    Sum the sizes of every attribute name, DataType, StringValue and the
    raw length of BinaryValue.

    Args:
        attributes: boto3-style MessageAttributes mapping

    Returns:
        int: total size in bytes
    """
    if attributes is None:
        raise InputError("Cannot estimate the size of null message attributes.")

    total = 0
    for name, value in attributes.items():
        total += estimate_body_size(name)

        data_type = value.get("DataType")
        if data_type is not None:
            total += estimate_body_size(data_type)

        string_value = value.get("StringValue")
        if string_value is not None:
            total += estimate_body_size(string_value)

        binary_value = value.get("BinaryValue")
        if binary_value is not None:
            if isinstance(binary_value, str):
                binary_value = binary_value.encode(ENCODING)
            total += len(binary_value)

    return total
