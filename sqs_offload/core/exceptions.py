# core/exceptions.py
"""
Error kinds raised by the offloading layer.

Only the offload path raises these. Errors coming from the underlying SQS
client are never wrapped and reach the caller unchanged.
"""
from typing import Optional


class ExtendedClientError(Exception):
    """Base class for every error raised by the extended client."""


class InputError(ExtendedClientError):
    """A required argument is missing, null or empty."""


# ------------------------------------------------------------
# Outbound validation
# ------------------------------------------------------------
class ValidationError(ExtendedClientError):
    """An outbound message breaks an offloading constraint."""


class AttributeSizeExceeded(ValidationError):
    def __init__(self, size: int, threshold: int):
        self.size = size
        self.threshold = threshold
        super().__init__(
            f"Total size of message attributes is {size} bytes which is larger than "
            f"the threshold of {threshold} bytes. Consider including the payload in "
            f"the message body instead of message attributes."
        )


class TooManyAttributes(ValidationError):
    def __init__(self, count: int, maximum: int):
        self.count = count
        self.maximum = maximum
        super().__init__(
            f"Number of message attributes [{count}] exceeds the maximum allowed "
            f"for large-payload messages [{maximum}]."
        )


class ReservedAttributeUsed(ValidationError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Message attribute name {name} is reserved for use by the SQS extended client.")


# ------------------------------------------------------------
# Pointer / receipt handle encoding
# ------------------------------------------------------------
class EncodingError(ExtendedClientError):
    """A pointer or receipt handle could not be encoded or decoded."""


class PointerMalformed(EncodingError):
    """The message body does not hold a valid S3 pointer."""


class ContractViolation(EncodingError):
    """A pointer or handle does not satisfy the encoding contract."""


# ------------------------------------------------------------
# Payload store (S3)
# ------------------------------------------------------------
class StoreError(ExtendedClientError):
    """
    The payload store failed. The originating botocore error is chained
    as __cause__ and its code is kept on `error_code`.
    """

    def __init__(self, message: str, error_code: Optional[str] = None):
        self.error_code = error_code
        super().__init__(message)


class StoreUnavailable(StoreError):
    pass


class ObjectNotFound(StoreError):
    pass


class DeleteFailed(StoreError):
    pass
