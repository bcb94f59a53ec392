"""Utilities for BatchGets from DynamoDB"""
import os
import timeit
import typing as ty
from decimal import Decimal
from functools import partial
from logging import getLogger

from . import codec
from .constants import MAX_BATCH_GET
from .errors import store_operation
from .exceptions import PartialBatchFailure
from .types import DynamoDbClient, ItemKey, KeysAndAttributes, Record, WireItem
from .utils.iter import chunked, unique_by
from .utils.retry import resubmit_while_incomplete

logger = getLogger(__name__)

_UNPROCESSED_RETRY_BASE_SECONDS = float(
    os.environ.get("DYNACCESS_UNPROCESSED_RETRY_BASE_SECONDS", 0.05)
)


class ChunkResult(ty.NamedTuple):
    items: ty.List[WireItem]
    unprocessed_keys: ty.List[WireItem]


def batch_get_items(
    client: DynamoDbClient,
    table_name: str,
    keys: ty.Iterable[ItemKey],
    *,
    unprocessed_retries: int = 0,
    thread_pool=None,
    **table_request_kwargs,
) -> ty.List[Record]:
    """Gets any number of items from one table, MAX_BATCH_GET keys per request.

    Items come back in the order DynamoDB returns them, which is not
    necessarily the order of your keys. Keys that don't exist simply
    have no item in the result. A key repeated within the same chunk is
    only requested once.

    Extra keyword arguments (e.g. ProjectionExpression) are included in
    every per-table request.

    If DynamoDB reports unprocessed keys (usually throttling), they are
    resubmitted up to `unprocessed_retries` times. If any remain after
    that, PartialBatchFailure is raised once every chunk has been
    attempted; it carries both the items retrieved and the keys that
    were not.

    Any error from DynamoDB aborts the whole operation with
    StoreOperationFailed, naming the chunk that failed; no partial
    result is returned.

    By default chunks are requested one after another. If you provide a
    thread_pool (anything with an ordered `imap`, e.g.
    multiprocessing.dummy.Pool), chunks are requested in parallel; results
    and errors are still reported in chunk order.
    """
    if not isinstance(table_name, str):
        # because we can't trust boto to give reasonable errors
        raise ValueError(
            f"Your proposed table name {table_name} is not a string "
            "and boto3 will probably die in some mysterious way"
        )

    # DynamoDB rejects a BatchGetItem that repeats a key
    key_chunks = [
        unique_by(_key_identity, chunk)
        for chunk in chunked(MAX_BATCH_GET, [codec.encode_key(key) for key in keys])
    ]
    if not key_chunks:
        logger.debug("Performed 0 gets")
        return list()

    get_chunk = partial(
        _get_single_chunk,
        client,
        table_name,
        unprocessed_retries=unprocessed_retries,
        **table_request_kwargs,
    )

    start_time = timeit.default_timer()
    if thread_pool:
        logger.debug("Sending %d chunks to thread pool", len(key_chunks))
        chunk_results: ty.Iterable[ChunkResult] = thread_pool.imap(
            _star(get_chunk), enumerate(key_chunks)
        )
    else:
        chunk_results = (get_chunk(i, chunk) for i, chunk in enumerate(key_chunks))

    items: ty.List[Record] = list()
    unprocessed: ty.List[Record] = list()
    for chunk_result in chunk_results:
        items.extend(codec.decode_all(chunk_result.items))
        unprocessed.extend(codec.decode_all(chunk_result.unprocessed_keys))

    ms_elapsed = (timeit.default_timer() - start_time) * 1000
    logger.info(
        "Performed %d gets in %d chunks from %s in %d ms",
        len(items),
        len(key_chunks),
        table_name,
        ms_elapsed,
    )

    if unprocessed:
        logger.warning(
            "%d keys were left unprocessed by BatchGetItem on %s",
            len(unprocessed),
            table_name,
            extra=dict(json=dict(unprocessed=unprocessed)),
        )
        raise PartialBatchFailure(
            f"{len(unprocessed)} keys were not processed by BatchGetItem on {table_name}",
            operation="BatchGetItem",
            items=items,
            unprocessed=unprocessed,
            processed_count=len(items),
            table_name=table_name,
        )
    return items


def _key_identity(wire_key: WireItem) -> ty.Tuple[ty.Tuple[str, ty.Any], ...]:
    identity = list()
    for name, attribute_value in wire_key.items():
        ((type_code, value),) = attribute_value.items()
        # 1 and 1.0 are the same number key
        identity.append((name, Decimal(value) if type_code == "N" else value))
    return tuple(sorted(identity))


def _star(func):
    def call_with_pair(pair):
        return func(*pair)

    return call_with_pair


def _get_single_chunk(
    client: DynamoDbClient,
    table_name: str,
    chunk_index: int,
    wire_keys: ty.List[WireItem],  # up to MAX_BATCH_GET
    *,
    unprocessed_retries: int = 0,
    **table_request_kwargs,
) -> ChunkResult:
    """Does a BatchGetItem of a single chunk.

    Suitable for use in threaded applications, since it is non-lazy.
    """
    logger.debug(
        "Starting chunk %d: batch get of %d on %s", chunk_index, len(wire_keys), table_name
    )

    def send(table_request: KeysAndAttributes) -> ty.Tuple[ty.List[WireItem], KeysAndAttributes]:
        start = timeit.default_timer()  # solely for logging performance stats
        result = client.batch_get_item(RequestItems={table_name: table_request})
        responses = result.get("Responses", {}).get(table_name, [])
        ms_elapsed = (timeit.default_timer() - start) * 1000
        logger.debug(
            "chunk %d on %s returned %d/%d items after %d ms",
            chunk_index,
            table_name,
            len(responses),
            len(table_request["Keys"]),
            ms_elapsed,
        )
        # UnprocessedKeys contains the original table request options as well as the leftover keys
        leftover = result.get("UnprocessedKeys", {}).get(table_name) or dict()
        return responses, ty.cast(KeysAndAttributes, leftover if leftover.get("Keys") else None)

    table_request = ty.cast(KeysAndAttributes, dict(table_request_kwargs, Keys=wire_keys))
    with store_operation("BatchGetItem", table_name, index=chunk_index):
        items, leftover = resubmit_while_incomplete(
            send, table_request, unprocessed_retries, _UNPROCESSED_RETRY_BASE_SECONDS
        )
    return ChunkResult(items, list(leftover["Keys"]) if leftover else list())
