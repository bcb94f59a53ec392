import pytest

from dynaccess import codec
from dynaccess.accessor import Accessor
from dynaccess.client import StoreConfig
from dynaccess.exceptions import PartialBatchFailure, StoreOperationFailed

from .fakes import FakeDynamoDbClient, echo_batch_get, make_named_ce


def test_every_operation_targets_the_accessors_table():
    client = FakeDynamoDbClient(
        batch_get_item=[echo_batch_get],
        get_item=[dict()],
        scan=[dict(Items=[codec.encode(dict(id="s1"))])],
        query=[dict(Items=[])],
        update_item=[dict(Attributes=codec.encode(dict(id="o1", a=1)))],
    )
    orders = Accessor("Orders", client)

    assert orders.get(dict(id="o1")) is None
    assert orders.put(dict(id="o1")) == dict(id="o1")
    assert orders.update(dict(id="o1"), set_attrs=dict(a=1)) == dict(id="o1", a=1)
    assert orders.batch_get([dict(id="o1")]) == [dict(id="o1")]
    assert orders.bulk_write([dict(id="o1")]) == 1
    assert orders.bulk_delete([dict(id="o1")]) == 1
    assert orders.scan_all() == [dict(id="s1")]
    assert orders.query_all(dict(KeyConditionExpression="#p = :p")) == []

    assert client.get_item.requests[0]["TableName"] == "Orders"
    assert client.put_item.requests[0]["TableName"] == "Orders"
    assert client.update_item.requests[0]["TableName"] == "Orders"
    assert list(client.batch_get_item.requests[0]["RequestItems"]) == ["Orders"]
    assert all(list(r["RequestItems"]) == ["Orders"] for r in client.batch_write_item.requests)
    assert client.scan.requests[0] == dict(TableName="Orders")
    assert client.query.requests[0]["TableName"] == "Orders"


def test_scan_page_cursor_round_trip():
    client = FakeDynamoDbClient(
        scan=[
            dict(Items=[codec.encode(dict(id="a"))], LastEvaluatedKey={"id": {"S": "a"}}),
            dict(Items=[codec.encode(dict(id="b"))]),
        ]
    )
    orders = Accessor("Orders", client)

    page = orders.scan_page()
    last = orders.scan_page(cursor=page.cursor)

    assert last.items == [dict(id="b")]
    assert last.cursor is None
    assert client.scan.requests[1]["ExclusiveStartKey"] == {"id": {"S": "a"}}


def test_iter_scan():
    client = FakeDynamoDbClient(scan=[dict(Items=[codec.encode(dict(id="a"))])])
    assert list(Accessor("Orders", client).iter_scan()) == [dict(id="a")]


def test_unprocessed_retries_default_comes_from_the_accessor(monkeypatch):
    monkeypatch.setattr("time.sleep", lambda s: None)

    def unprocessed(RequestItems):
        return dict(UnprocessedKeys=dict(Orders=RequestItems["Orders"]))

    client = FakeDynamoDbClient(batch_get_item=[unprocessed])
    with pytest.raises(PartialBatchFailure):
        Accessor("Orders", client, unprocessed_retries=3).batch_get([dict(id="a")])
    assert client.batch_get_item.calls == 4


def test_errors_are_normalized():
    client = FakeDynamoDbClient(scan=[make_named_ce("AccessDeniedException")])
    with pytest.raises(StoreOperationFailed):
        Accessor("Orders", client).scan_all()


def test_from_config_builds_its_own_client():
    orders = Accessor.from_config(
        "Orders",
        StoreConfig(region="us-east-1", access_key_id="AKIA", secret_access_key="shh"),
    )
    assert orders.client.meta.region_name == "us-east-1"
    assert repr(orders) == "Accessor('Orders')"
