#!/usr/bin/env python
"""This little example script only supports BatchGet on tables with
simple (non-composite) keys (i.e., the base index is HASH only, not
HASH+RANGE) for the sake of keeping the CLI manageable.

batch_get itself supports HASH+RANGE keys just fine, where a key
would look something like `dict(customer='c-17', order_id='o-1234')`.

Any number of ids may be given; they are requested 100 at a time.
"""
import argparse
from pprint import pprint

from dynaccess.accessor import Accessor
from dynaccess.exceptions import PartialBatchFailure


def main():
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("table_name")
    parser.add_argument("ids", nargs="+")
    parser.add_argument("--key-name", default="id", help="the name of your hash key attribute")
    parser.add_argument("--retries", type=int, default=3, help="resubmissions of unprocessed keys")
    args = parser.parse_args()

    table = Accessor(args.table_name, unprocessed_retries=args.retries)

    try:
        items = table.batch_get({args.key_name: id} for id in args.ids)
    except PartialBatchFailure as pbf:
        print(f"Could not get {len(pbf.unprocessed)} of your keys: {pbf.unprocessed}")
        items = pbf.items

    for item in items:
        pprint(item)


if __name__ == "__main__":
    main()
