"""Single-item get, put and update.

These need no orchestration; they exist so that callers get the same
codec handling and error normalization as the batch operations.
"""
import typing as ty
from logging import getLogger

from . import codec
from .errors import store_operation
from .expressions import build_update
from .types import AttrDict, DynamoDbClient, InputRecord, ItemKey, Record

logger = getLogger(__name__)


def get_item(
    client: DynamoDbClient, table_name: str, key: ItemKey, **get_item_kwargs
) -> ty.Optional[Record]:
    """The item, or None if there is no item with that key.

    A missing item is not an error.
    """
    logger.debug(f"GetItem {key} from table {table_name}")
    with store_operation("GetItem", table_name):
        response = client.get_item(
            TableName=table_name, Key=codec.encode_key(key), **get_item_kwargs
        )
    if "Item" not in response:
        return None
    return codec.decode(response["Item"])


def put_item(
    client: DynamoDbClient, table_name: str, record: InputRecord, **put_item_kwargs
) -> InputRecord:
    """Writes the record, replacing any existing item with the same key. Returns the record."""
    logger.debug(f"PutItem into table {table_name}", extra=dict(json=dict(item=record)))
    with store_operation("PutItem", table_name):
        client.put_item(TableName=table_name, Item=codec.encode(record), **put_item_kwargs)
    return record


def update_item(
    client: DynamoDbClient,
    table_name: str,
    key: ItemKey,
    *,
    set_attrs: ty.Optional[AttrDict] = None,
    remove_attrs: ty.Collection[str] = (),
    update_expression: ty.Optional[str] = None,
    condition_exists: bool = True,
    **update_item_kwargs,
) -> Record:
    """Partially updates an item; see expressions.build_update for the arguments.

    By default this requires the item to already exist, and returns it
    as it looks after the update. If you ask for ReturnValues="NONE",
    you get back just the key.
    """
    update_args = build_update(
        key,
        set_attrs=set_attrs,
        remove_attrs=remove_attrs,
        update_expression=update_expression,
        condition_exists=condition_exists,
        **update_item_kwargs,
    )
    try:
        with store_operation("UpdateItem", table_name):
            response = client.update_item(TableName=table_name, **update_args)
    except Exception:
        # verbose logging if an error occurs
        logger.info("UpdateItem arguments", extra=dict(json=dict(update_args)))
        raise
    return {**key, **codec.decode(response.get("Attributes", dict()))}
