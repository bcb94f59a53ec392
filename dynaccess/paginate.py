import json
import typing as ty
from copy import deepcopy
from functools import partial

from .exceptions import InvalidCursor
from .types import Cursor, CursorInput

# AWS's pagination utilities are bare-bones...
# here's a bit of general purpose logic that works for any operation
# that hands back a bookmark for the next page.

KeyPath = ty.Tuple[str, ...]


def get_at_path(path: KeyPath, d: ty.Mapping):
    for path_elem in path:
        d = d.get(path_elem, None)
        if d is None:
            return d
    return d


def set_at_path(path: KeyPath, d: dict, val):
    for path_elem in path[:-1]:
        d = d.setdefault(path_elem, dict())
    d[path[-1]] = val


def yield_pages_from_operation(
    exclusive_start_path: KeyPath,
    last_evaluated_path: KeyPath,
    operation: ty.Callable[..., ty.Mapping],
    # the thing that turns a request into the next page of a response
    request: ty.Mapping,
    # your basic request
    start: ty.Any = None,
    # resume from here instead of wherever the request says
) -> ty.Iterator[ty.Mapping]:
    """Drives a paginated operation until it stops handing back bookmarks.

    You perform an operation with a request that does not supply the
    'exclusive start' value. The operation gives you back a page of
    results, and also a bookmark saying where you left off. You pass
    your original request back plus that bookmark as the exclusive
    start, and so on, until a page comes back with an empty bookmark.

    The entire, unchanged response is yielded for each page, in the
    order they arrive. There is deliberately no cap on the number of
    pages; the underlying service is trusted to eventually stop.

    Pages are requested lazily, one at a time, so an exception from
    the operation surfaces from the `next` call for that page.

    You _probably_ want to partially apply the first 2 arguments (which
    define the behavior for a specific operation) so that you can then
    invoke the same paginator repeatedly with different requests.
    """
    request = deepcopy(dict(request))
    # we make a copy of your request because we're going to modify it
    # as we paginate but you shouldn't have to deal with that.

    get_le = partial(get_at_path, last_evaluated_path)
    set_es = partial(set_at_path, exclusive_start_path)

    exclusive_start = start if start else get_at_path(exclusive_start_path, request)
    while True:
        if exclusive_start:
            set_es(request, exclusive_start)
        page_response = operation(**request)
        yield page_response
        exclusive_start = get_le(page_response)
        if not exclusive_start:
            return


DYNAMODB_SCAN = (("ExclusiveStartKey",), ("LastEvaluatedKey",))
DYNAMODB_QUERY = DYNAMODB_SCAN  # these are the same
# e.g. partial(yield_pages_from_operation, *DYNAMODB_QUERY)(client.query, your_query_request)


def normalize_cursor(cursor: CursorInput) -> ty.Optional[Cursor]:
    """Accepts a LastEvaluatedKey either as-is or in the string form
    produced by serialize_cursor (e.g. after a round trip through a
    REST client), and gives back the structured form DynamoDB expects.
    """
    if cursor is None or cursor == "":
        return None
    if isinstance(cursor, str):
        try:
            parsed = json.loads(cursor)
        except ValueError as ve:
            raise InvalidCursor(f"Cursor {cursor!r} is not valid JSON", cause=ve) from ve
        if not isinstance(parsed, dict):
            raise InvalidCursor(f"Cursor {cursor!r} does not describe a key")
        return parsed or None
    if isinstance(cursor, ty.Mapping):
        return dict(cursor) or None
    raise InvalidCursor(f"Unsupported cursor type {type(cursor).__name__}")


def serialize_cursor(cursor: ty.Optional[Cursor]) -> str:
    """The string form of a cursor, suitable for handing to a client. Empty string if absent."""
    if not cursor:
        return ""
    try:
        return json.dumps(cursor, sort_keys=True)
    except TypeError as te:
        # binary key attributes have no JSON form
        raise InvalidCursor(f"Cursor {cursor} cannot be serialized", cause=te) from te
