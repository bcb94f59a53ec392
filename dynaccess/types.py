"""Basic types for DynamoDB data and the operations we orchestrate"""
import typing as ty
from decimal import Decimal

from typing_extensions import TypedDict

KeyAttributeType = ty.Union[int, str, float, Decimal, bytes]
ItemKey = ty.Mapping[str, KeyAttributeType]

AttrInput = ty.Mapping[str, ty.Any]
InputRecord = AttrInput

AttrDict = ty.Dict[str, ty.Any]
Record = AttrDict

AttributeValue = ty.Dict[str, ty.Any]
# e.g. {"S": "foo"} or {"M": {"bar": {"N": "3"}}}
WireItem = ty.Dict[str, AttributeValue]

Cursor = ty.Mapping[str, AttributeValue]
# a LastEvaluatedKey in wire form
CursorInput = ty.Union[Cursor, str, None]
# what we accept from callers wanting to resume pagination


class PutRequest(TypedDict):
    Item: WireItem


class DeleteRequest(TypedDict):
    Key: WireItem


WriteRequest = ty.Dict[str, ty.Union[PutRequest, DeleteRequest]]
# {"PutRequest": ...} or {"DeleteRequest": ...}


class KeysAndAttributes(TypedDict, total=False):
    Keys: ty.List[WireItem]
    ConsistentRead: bool
    ProjectionExpression: str
    ExpressionAttributeNames: ty.Dict[str, str]


class BatchGetResponse(TypedDict, total=False):
    Responses: ty.Dict[str, ty.List[WireItem]]
    UnprocessedKeys: ty.Dict[str, KeysAndAttributes]


class BatchWriteResponse(TypedDict, total=False):
    UnprocessedItems: ty.Dict[str, ty.List[WriteRequest]]


class PageResponse(TypedDict, total=False):
    Items: ty.List[WireItem]
    Count: int
    ScannedCount: int
    LastEvaluatedKey: Cursor


class Page(ty.NamedTuple):
    items: ty.List[Record]
    cursor: ty.Optional[Cursor]  # None on the final page


# pylint: disable=unused-argument,no-self-use


class DynamoDbClient:
    """A stub for a boto3 low-level DynamoDB client.

    This can be updated as we use more methods from the type."""

    def get_item(self, TableName: str, Key: WireItem, **kwargs) -> dict:
        ...

    def put_item(self, TableName: str, Item: WireItem, **kwargs) -> dict:
        ...

    def update_item(self, TableName: str, Key: WireItem, **kwargs) -> dict:
        ...

    def batch_get_item(self, RequestItems: ty.Mapping[str, KeysAndAttributes]) -> BatchGetResponse:
        ...

    def batch_write_item(
        self, RequestItems: ty.Mapping[str, ty.List[WriteRequest]]
    ) -> BatchWriteResponse:
        ...

    def query(self, **kwargs) -> PageResponse:
        ...

    def scan(self, **kwargs) -> PageResponse:
        ...
