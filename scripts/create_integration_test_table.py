#!/usr/bin/env python
"""Creates a pay-per-request table with a single string hash key named 'id',
which is all the integration tests need."""
import argparse
import getpass
import logging
from time import sleep

from dynaccess.client import config_from_env, make_client

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

ddb = make_client(config_from_env())

PK_NAME = "id"


def _table_exists(table_name: str) -> bool:
    try:
        ddb.describe_table(TableName=table_name)
    except ddb.exceptions.ResourceNotFoundException:
        return False

    return True


def _await_status(table_name: str, wanted: str):
    while True:
        try:
            status = ddb.describe_table(TableName=table_name)["Table"]["TableStatus"]
        except ddb.exceptions.ResourceNotFoundException:
            status = "DELETED"
        if status == wanted:
            return
        logger.info("Awaiting table status '%s'. Current status: '%s'", wanted, status)
        sleep(3)


def main(table_name: str, recreate=False):
    if _table_exists(table_name):
        logger.info("Table %s already exists", table_name)
        if not recreate:
            logger.warning("--recreate not passed. Keeping existing table, nothing left to do.")
            return
        logger.info("Parameter --recreate passed, deleting table and re-creating...")
        ddb.delete_table(TableName=table_name)
        _await_status(table_name, "DELETED")

    logger.info("Creating table %s", table_name)
    ddb.create_table(
        TableName=table_name,
        AttributeDefinitions=[{"AttributeName": PK_NAME, "AttributeType": "S"}],
        KeySchema=[{"AttributeName": PK_NAME, "KeyType": "HASH"}],
        BillingMode="PAY_PER_REQUEST",
    )
    _await_status(table_name, "ACTIVE")

    logger.info("Success!\n\n")
    print("Paste the following line into your terminal or add to your shell .rc file:\n")
    print(f"export DYNACCESS_INTEGRATION_TEST_TABLE_NAME='{table_name}'")


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--table-suffix", default=getpass.getuser())
    parser.add_argument("--recreate", action="store_const", const=True)

    args = parser.parse_args()

    _table_name = f"dynaccess-integration-{args.table_suffix}"
    main(_table_name, args.recreate)
