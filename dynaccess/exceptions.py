"""Exceptions for our Dynamo usage.

Callers should only ever need to catch these, never botocore's, and
never the TypeErrors or decimal signals of an unstorable value.
"""
import typing as ty

from .types import Record


class DynaccessError(Exception):
    """Wrapping error responses and incomplete results from DynamoDB"""

    def __init__(
        self,
        msg: str,
        *,
        cause: ty.Optional[BaseException] = None,
        table_name: str = "",
        **kwargs,
    ):
        self.__dict__.update(kwargs)
        self.message = msg
        self.cause = cause
        self.table_name = table_name
        super().__init__(msg)

    @property
    def kind(self) -> str:
        return type(self).__name__


class StoreOperationFailed(DynaccessError):
    """A transport, throttling, or validation error from a single DynamoDB call.

    `index` is the chunk (for batch operations) or page (for scans and
    queries) that failed, or None for single-item operations.
    """

    def __init__(
        self,
        msg: str,
        *,
        operation: str,
        index: ty.Optional[int] = None,
        error_code: ty.Optional[str] = None,
        **kwargs,
    ):
        self.operation = operation
        self.index = index
        self.error_code = error_code
        super().__init__(msg, **kwargs)


class PartialBatchFailure(DynaccessError):
    """A batch operation finished but DynamoDB did not process all of it.

    Nothing was lost: `unprocessed` holds the keys (BatchGetItem,
    deletes) or records (puts) that were not processed, so you can
    decide whether to resubmit them. For BatchGetItem, `items` holds
    everything that was retrieved.
    """

    def __init__(
        self,
        msg: str,
        *,
        operation: str,
        unprocessed: ty.Sequence[Record],
        items: ty.Sequence[Record] = (),
        processed_count: int = 0,
        **kwargs,
    ):
        self.operation = operation
        self.unprocessed = list(unprocessed)
        self.items = list(items)
        self.processed_count = processed_count
        super().__init__(msg, **kwargs)


class InvalidCursor(DynaccessError, ValueError):
    """A serialized pagination cursor could not be understood"""


class UnencodableValue(DynaccessError, ValueError):
    """An attribute value has no DynamoDB representation (NaN, infinity,
    numbers outside DynamoDB's range or precision, unsupported types).

    Raised before anything is sent, so nothing was written.
    """

    def __init__(self, msg: str, *, attribute: str, **kwargs):
        self.attribute = attribute
        super().__init__(msg, **kwargs)
