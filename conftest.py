import os
from logging import getLogger
from typing import Callable, Iterator

import pytest

from dynaccess.accessor import Accessor
from dynaccess.client import config_from_env, make_client
from dynaccess.types import ItemKey

logger = getLogger(__name__)


AddKeyToCleaner = Callable[[ItemKey], None]


DYNACCESS_INTEGRATION_TEST_TABLE_NAME = os.environ.get("DYNACCESS_INTEGRATION_TEST_TABLE_NAME")
# a table whose only key attribute is a string named 'id'


def get_integration_test_accessor() -> Accessor:
    if not DYNACCESS_INTEGRATION_TEST_TABLE_NAME:
        pytest.skip("No integration test table was defined")
    return Accessor(DYNACCESS_INTEGRATION_TEST_TABLE_NAME, make_client(config_from_env()))


integration_test_accessor = pytest.fixture(scope="module", name="integration_test_accessor")(
    get_integration_test_accessor
)


@pytest.fixture
def integration_test_cleaner(integration_test_accessor) -> Iterator[AddKeyToCleaner]:
    """Deletes every key you hand it once your test is done."""
    keys_to_delete = list()
    yield keys_to_delete.append

    if keys_to_delete:
        try:
            integration_test_accessor.bulk_delete(keys_to_delete)
        except Exception:
            logger.exception(f"Failed to delete {keys_to_delete}")
