"""Unbounded batch, bulk-write and paginated reads on top of boto3's DynamoDB client."""
from .__about__ import __version__  # noqa
