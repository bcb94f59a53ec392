"""Utilities for living with boto3 errors"""
import typing as ty
from contextlib import contextmanager
from logging import getLogger

from botocore.exceptions import BotoCoreError, ClientError

from .exceptions import StoreOperationFailed

logger = getLogger(__name__)


def client_error_name(client_error: ClientError) -> ty.Optional[str]:
    """Take a botocore ClientError and return its string name"""
    return client_error.response.get("Error", {}).get("Code")


def _describe(operation: str, table_name: str, index: ty.Optional[int]) -> str:
    where = f" on chunk/page {index}" if index is not None else ""
    return f"{operation} on table {table_name}{where} failed"


@contextmanager
def store_operation(operation: str, table_name: str, index: ty.Optional[int] = None):
    """Turns whatever botocore raises inside the block into a StoreOperationFailed.

    ```
    with store_operation("Scan", "Orders", index=page_num):
        client.scan(TableName="Orders")
    ```

    Anything that is not a botocore error (including our own
    exceptions) is passed through untouched.
    """
    try:
        yield
    except ClientError as ce:
        code = client_error_name(ce)
        msg = _describe(operation, table_name, index)
        logger.exception(msg, extra=dict(json=dict(error_code=code, index=index)))
        raise StoreOperationFailed(
            f"{msg}: {code}",
            operation=operation,
            index=index,
            error_code=code,
            cause=ce,
            table_name=table_name,
        ) from ce
    except BotoCoreError as bce:
        msg = _describe(operation, table_name, index)
        logger.exception(msg, extra=dict(json=dict(index=index)))
        raise StoreOperationFailed(
            f"{msg}: {bce}", operation=operation, index=index, cause=bce, table_name=table_name,
        ) from bce
