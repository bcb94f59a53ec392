import pytest

from dynaccess import codec
from dynaccess.exceptions import InvalidCursor, StoreOperationFailed
from dynaccess.paginate import serialize_cursor
from dynaccess.scan import query_all, query_page, scan_all, scan_page, yield_items

from .fakes import FakeDynamoDbClient, make_named_ce

T1 = {"id": {"S": "t1"}}
T2 = {"id": {"S": "t2"}}


def _page(ids, last_evaluated_key=None) -> dict:
    page = dict(Items=[codec.encode(dict(id=i)) for i in ids], Count=len(ids))
    if last_evaluated_key:
        page["LastEvaluatedKey"] = last_evaluated_key
    return page


THREE_PAGES = [_page(["a", "b"], T1), _page(["c"], T2), _page(["d", "e"])]


def test_scan_all_walks_every_page_in_order():
    client = FakeDynamoDbClient(scan=THREE_PAGES)

    items = scan_all(client, dict(TableName="Orders"))

    assert [i["id"] for i in items] == ["a", "b", "c", "d", "e"]
    assert client.scan.calls == 3
    assert "ExclusiveStartKey" not in client.scan.requests[0]
    assert client.scan.requests[1]["ExclusiveStartKey"] == T1
    assert client.scan.requests[2]["ExclusiveStartKey"] == T2


def test_scan_all_does_not_modify_the_request():
    client = FakeDynamoDbClient(scan=THREE_PAGES)
    request = dict(TableName="Orders", FilterExpression="attribute_exists(total)")

    scan_all(client, request)

    assert request == dict(TableName="Orders", FilterExpression="attribute_exists(total)")


def test_empty_pages_still_follow_the_cursor():
    client = FakeDynamoDbClient(scan=[_page([], T1), _page([], T2), _page(["z"])])

    assert scan_all(client, dict(TableName="Orders")) == [dict(id="z")]
    assert client.scan.calls == 3


def test_error_on_a_middle_page_returns_nothing():
    client = FakeDynamoDbClient(
        scan=[THREE_PAGES[0], make_named_ce("ProvisionedThroughputExceededException"), THREE_PAGES[2]]
    )

    with pytest.raises(StoreOperationFailed) as sof_info:
        scan_all(client, dict(TableName="Orders"))

    assert sof_info.value.operation == "Scan"
    assert sof_info.value.index == 1
    assert sof_info.value.table_name == "Orders"
    assert client.scan.calls == 2


def test_structured_and_string_cursors_resume_identically():
    structured = FakeDynamoDbClient(scan=[_page(["c"])])
    stringy = FakeDynamoDbClient(scan=[_page(["c"])])

    scan_all(structured, dict(TableName="Orders"), start=T1)
    scan_all(stringy, dict(TableName="Orders"), start=serialize_cursor(T1))

    assert structured.scan.requests == stringy.scan.requests
    assert structured.scan.requests[0]["ExclusiveStartKey"] == T1


def test_query_all_uses_query():
    client = FakeDynamoDbClient(query=THREE_PAGES)

    items = query_all(client, dict(TableName="Orders", KeyConditionExpression="#p = :p"))

    assert len(items) == 5
    assert client.query.calls == 3
    assert client.scan.calls == 0


def test_single_pages_hand_back_the_cursor():
    client = FakeDynamoDbClient(scan=THREE_PAGES)

    first = scan_page(client, dict(TableName="Orders"))
    assert first.items == [dict(id="a"), dict(id="b")]
    assert first.cursor == T1

    second = scan_page(client, dict(TableName="Orders"), serialize_cursor(first.cursor))
    assert client.scan.requests[1]["ExclusiveStartKey"] == T1
    assert second.cursor == T2


def test_last_page_has_no_cursor():
    client = FakeDynamoDbClient(query=[_page(["x"])])
    assert query_page(client, dict(TableName="Orders")) == ([dict(id="x")], None)


def test_single_page_errors_are_normalized():
    client = FakeDynamoDbClient(scan=[make_named_ce("ResourceNotFoundException")])
    with pytest.raises(StoreOperationFailed) as sof_info:
        scan_page(client, dict(TableName="Nope"))
    assert sof_info.value.index is None
    assert sof_info.value.error_code == "ResourceNotFoundException"


def test_garbage_cursor_is_rejected_before_any_request():
    client = FakeDynamoDbClient(scan=THREE_PAGES)
    with pytest.raises(InvalidCursor):
        scan_page(client, dict(TableName="Orders"), "not json")
    assert client.scan.calls == 0


def test_yield_items_is_lazy():
    client = FakeDynamoDbClient(scan=THREE_PAGES)

    items = yield_items("Scan", client.scan, dict(TableName="Orders"))
    assert next(items) == dict(id="a")
    assert next(items) == dict(id="b")
    assert client.scan.calls == 1
