"""Scans and queries that run to completion, or one page at a time.

Requests are ordinary boto3 low-level client requests
(`dict(TableName="Orders", KeyConditionExpression=..., ...)`); their
ExpressionAttributeValues must already be in wire form, see
`codec.encode`.
"""
import timeit
import typing as ty
from functools import partial
from logging import getLogger

from . import codec
from .errors import store_operation
from .paginate import DYNAMODB_SCAN, normalize_cursor, yield_pages_from_operation
from .types import CursorInput, DynamoDbClient, Page, PageResponse, Record

logger = getLogger(__name__)


dynamodb_page_yielder = partial(yield_pages_from_operation, *DYNAMODB_SCAN)


def _yield_numbered_pages(
    operation_name: str,
    operation: ty.Callable[..., PageResponse],
    request: dict,
    start: CursorInput,
) -> ty.Iterator[ty.Tuple[int, PageResponse]]:
    table_name = request.get("TableName", "")
    pages = dynamodb_page_yielder(operation, request, normalize_cursor(start))
    page_num = 0
    while True:
        with store_operation(operation_name, table_name, index=page_num):
            page = next(pages, None)
        if page is None:
            return
        yield page_num, page  # type: ignore
        page_num += 1


def yield_items(
    operation_name: str,
    operation: ty.Callable[..., PageResponse],
    request: dict,
    start: CursorInput = None,
) -> ty.Iterator[Record]:
    """Lazily yields every decoded item of a scan or query, page by page.

    If you stop consuming partway through, no further pages are requested.
    """
    for page_num, page in _yield_numbered_pages(operation_name, operation, request, start):
        items = page.get("Items", [])
        logger.debug("Retrieved page %d of %d items from DynamoDB", page_num, len(items))
        for wire_item in items:
            yield codec.decode(wire_item)


def _collect_all(
    operation_name: str,
    operation: ty.Callable[..., PageResponse],
    request: dict,
    start: CursorInput,
) -> ty.List[Record]:
    start_time = timeit.default_timer()
    # if any page fails, the exception escapes before we return anything
    records = list(yield_items(operation_name, operation, request, start))
    ms_elapsed = (timeit.default_timer() - start_time) * 1000
    logger.info(
        "%s of %s returned %d items in %d ms",
        operation_name,
        request.get("TableName", ""),
        len(records),
        ms_elapsed,
    )
    return records


def scan_all(
    client: DynamoDbClient, request: dict, *, start: CursorInput = None
) -> ty.List[Record]:
    """Every item the scan matches, in the order pages arrived.

    Raises StoreOperationFailed (with the page index) if any page fails,
    in which case none of the items already retrieved are returned.
    """
    return _collect_all("Scan", client.scan, request, start)


def query_all(
    client: DynamoDbClient, request: dict, *, start: CursorInput = None
) -> ty.List[Record]:
    """Same as scan_all, but for a query."""
    return _collect_all("Query", client.query, request, start)


def _single_page(
    operation_name: str,
    operation: ty.Callable[..., PageResponse],
    request: dict,
    cursor: CursorInput,
) -> Page:
    request = dict(request)
    exclusive_start = normalize_cursor(cursor)
    if exclusive_start:
        request["ExclusiveStartKey"] = exclusive_start
    with store_operation(operation_name, request.get("TableName", "")):
        response = operation(**request)
    return Page(codec.decode_all(response.get("Items", [])), response.get("LastEvaluatedKey"))


def scan_page(client: DynamoDbClient, request: dict, cursor: CursorInput = None) -> Page:
    """A single page of a scan, resuming from the cursor of a previous page if provided.

    The cursor may be the structured LastEvaluatedKey or the string
    from `paginate.serialize_cursor`, which is what you want if it has
    made a round trip through a client of your own service.
    """
    return _single_page("Scan", client.scan, request, cursor)


def query_page(client: DynamoDbClient, request: dict, cursor: CursorInput = None) -> Page:
    return _single_page("Query", client.query, request, cursor)
