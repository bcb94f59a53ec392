import os
import timeit
import typing as ty
from logging import getLogger

from . import codec
from .constants import MAX_BATCH_WRITE
from .errors import store_operation
from .exceptions import PartialBatchFailure
from .types import DynamoDbClient, InputRecord, ItemKey, Record, WriteRequest
from .utils.iter import chunked
from .utils.retry import resubmit_while_incomplete

logger = getLogger(__name__)

_UNPROCESSED_RETRY_BASE_SECONDS = float(
    os.environ.get("DYNACCESS_UNPROCESSED_RETRY_BASE_SECONDS", 0.05)
)


def put_request(record: InputRecord) -> WriteRequest:
    return {"PutRequest": {"Item": codec.encode(record)}}


def delete_request(key: ItemKey) -> WriteRequest:
    return {"DeleteRequest": {"Key": codec.encode_key(key)}}


def _decode_write_request(write_request: WriteRequest) -> Record:
    """The record of a put, or the key of a delete"""
    if "PutRequest" in write_request:
        return codec.decode(write_request["PutRequest"]["Item"])  # type: ignore
    return codec.decode(write_request["DeleteRequest"]["Key"])  # type: ignore


def bulk_write(
    client: DynamoDbClient,
    table_name: str,
    records: ty.Iterable[InputRecord],
    *,
    unprocessed_retries: int = 0,
) -> int:
    """Puts any number of records, MAX_BATCH_WRITE per request, one request at a time.

    Returns the number of records DynamoDB accepted.

    There is no atomicity across chunks: if a chunk fails, the chunks
    before it stay written, and the ones after it are never sent. The
    failure is raised as StoreOperationFailed naming the chunk.

    Records DynamoDB leaves unprocessed are resubmitted up to
    `unprocessed_retries` times; any still unprocessed after all chunks
    have been sent are reported via PartialBatchFailure.
    """
    return write_requests(
        client,
        table_name,
        [put_request(record) for record in records],
        unprocessed_retries=unprocessed_retries,
    )


def bulk_delete(
    client: DynamoDbClient,
    table_name: str,
    keys: ty.Iterable[ItemKey],
    *,
    unprocessed_retries: int = 0,
) -> int:
    """Same as bulk_write, but deletes the items with the given keys."""
    return write_requests(
        client,
        table_name,
        [delete_request(key) for key in keys],
        unprocessed_retries=unprocessed_retries,
    )


def write_requests(
    client: DynamoDbClient,
    table_name: str,
    requests: ty.Sequence[WriteRequest],
    *,
    unprocessed_retries: int = 0,
) -> int:
    """Sends already-built write requests; see bulk_write."""
    start = timeit.default_timer()
    num_written = 0
    unprocessed: ty.List[WriteRequest] = list()

    def send(
        chunk: ty.List[WriteRequest],
    ) -> ty.Tuple[ty.List[WriteRequest], ty.Optional[ty.List[WriteRequest]]]:
        resp = client.batch_write_item(RequestItems={table_name: chunk})
        leftover = resp.get("UnprocessedItems", {}).get(table_name) or list()
        # the response doesn't tell us what succeeded, so we work it out by elimination
        written = [req for req in chunk if req not in leftover]
        return written, leftover or None

    for chunk_index, chunk in enumerate(chunked(MAX_BATCH_WRITE, requests)):
        with store_operation("BatchWriteItem", table_name, index=chunk_index):
            written, leftover = resubmit_while_incomplete(
                send, chunk, unprocessed_retries, _UNPROCESSED_RETRY_BASE_SECONDS
            )
        num_written += len(written)
        if leftover:
            unprocessed.extend(leftover)
        logger.debug(
            "BatchWrite chunk %d to %s wrote %d/%d",
            chunk_index,
            table_name,
            len(written),
            len(chunk),
        )
        if num_written // 1000 > (num_written - len(written)) // 1000:
            logger.info(
                f"Large partial write report; have written {num_written} "
                f"items to {table_name} in this batch"
            )

    if num_written:
        ms_elapsed = (timeit.default_timer() - start) * 1000
        logger.debug(
            f"BatchWrite to {table_name} wrote {num_written} items in "
            f"{int(ms_elapsed)} ms; {num_written/ms_elapsed*1000:.02f}/s"
        )

    if unprocessed:
        logger.warning(
            f"{len(unprocessed)} write requests were left unprocessed "
            f"by BatchWriteItem on {table_name}"
        )
        raise PartialBatchFailure(
            f"{len(unprocessed)} write requests were not processed "
            f"by BatchWriteItem on {table_name}",
            operation="BatchWriteItem",
            unprocessed=[_decode_write_request(req) for req in unprocessed],
            processed_count=num_written,
            table_name=table_name,
        )
    return num_written
