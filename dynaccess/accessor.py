"""One object to hand around instead of a client plus a table name."""
import typing as ty
from logging import getLogger

from . import batch_get, batch_write, item, scan
from .client import DEFAULT_CLIENT, StoreConfig, make_client
from .types import AttrDict, CursorInput, DynamoDbClient, InputRecord, ItemKey, Page, Record

logger = getLogger(__name__)


class Accessor:
    """Unbounded reads and writes against a single DynamoDB table.

    The client is built once (or provided by you) and shared by every
    call; nothing else about an Accessor changes after construction, so
    one instance can safely serve many threads.

    ```
    orders = Accessor("Orders")
    found = orders.batch_get([dict(id=oid) for oid in order_ids])
    ```

    All store failures are raised as StoreOperationFailed, and
    incomplete batches as PartialBatchFailure.
    """

    def __init__(
        self,
        table_name: str,
        client: ty.Optional[DynamoDbClient] = None,
        *,
        unprocessed_retries: int = 0,
    ):
        self.table_name = table_name
        self.client = client if client is not None else DEFAULT_CLIENT()
        self.unprocessed_retries = unprocessed_retries

    @classmethod
    def from_config(cls, table_name: str, config: StoreConfig, **kwargs) -> "Accessor":
        return cls(table_name, make_client(config), **kwargs)

    def __repr__(self) -> str:
        return f"Accessor({self.table_name!r})"

    def get(self, key: ItemKey, **kwargs) -> ty.Optional[Record]:
        return item.get_item(self.client, self.table_name, key, **kwargs)

    def put(self, record: InputRecord, **kwargs) -> InputRecord:
        return item.put_item(self.client, self.table_name, record, **kwargs)

    def update(
        self,
        key: ItemKey,
        *,
        set_attrs: ty.Optional[AttrDict] = None,
        remove_attrs: ty.Collection[str] = (),
        update_expression: ty.Optional[str] = None,
        **kwargs,
    ) -> Record:
        return item.update_item(
            self.client,
            self.table_name,
            key,
            set_attrs=set_attrs,
            remove_attrs=remove_attrs,
            update_expression=update_expression,
            **kwargs,
        )

    def batch_get(self, keys: ty.Iterable[ItemKey], **kwargs) -> ty.List[Record]:
        kwargs.setdefault("unprocessed_retries", self.unprocessed_retries)
        return batch_get.batch_get_items(self.client, self.table_name, keys, **kwargs)

    def bulk_write(self, records: ty.Iterable[InputRecord]) -> int:
        return batch_write.bulk_write(
            self.client, self.table_name, records, unprocessed_retries=self.unprocessed_retries
        )

    def bulk_delete(self, keys: ty.Iterable[ItemKey]) -> int:
        return batch_write.bulk_delete(
            self.client, self.table_name, keys, unprocessed_retries=self.unprocessed_retries
        )

    def _request(self, request: ty.Optional[dict]) -> dict:
        return dict(request or dict(), TableName=self.table_name)

    def scan_all(
        self, request: ty.Optional[dict] = None, *, start: CursorInput = None
    ) -> ty.List[Record]:
        """Every item in the table (or matching your FilterExpression)."""
        return scan.scan_all(self.client, self._request(request), start=start)

    def query_all(self, request: dict, *, start: CursorInput = None) -> ty.List[Record]:
        return scan.query_all(self.client, self._request(request), start=start)

    def scan_page(self, request: ty.Optional[dict] = None, cursor: CursorInput = None) -> Page:
        return scan.scan_page(self.client, self._request(request), cursor)

    def query_page(self, request: dict, cursor: CursorInput = None) -> Page:
        return scan.query_page(self.client, self._request(request), cursor)

    def iter_scan(self, request: ty.Optional[dict] = None) -> ty.Iterator[Record]:
        """Like scan_all, but lazy; pages are fetched as you consume them."""
        return scan.yield_items("Scan", self.client.scan, self._request(request))
