"""Configuration and construction of the one DynamoDB client handle we share.

boto3 clients are safe to share across threads once built; sessions
are not, so each handle gets its own session and nothing else
touches it afterwards.

https://boto3.amazonaws.com/v1/documentation/api/latest/guide/clients.html#multithreading-or-multiprocessing-with-clients
"""
import os
import typing as ty
from logging import getLogger

import boto3.session
from dotenv import dotenv_values, find_dotenv

from .types import DynamoDbClient
from .utils.lazy import Lazy

logger = getLogger(__name__)


class StoreConfig(ty.NamedTuple):
    region: ty.Optional[str] = None
    access_key_id: ty.Optional[str] = None
    secret_access_key: ty.Optional[str] = None
    session_token: ty.Optional[str] = None
    endpoint_url: ty.Optional[str] = None
    # e.g. http://localhost:8000 for DynamoDB Local

    @property
    def has_static_credentials(self) -> bool:
        return bool(self.access_key_id and self.secret_access_key)


def _read_env(
    environ: ty.Optional[ty.Mapping[str, str]], dotenv_path: ty.Optional[str]
) -> ty.Dict[str, ty.Optional[str]]:
    path = dotenv_path if dotenv_path is not None else find_dotenv(usecwd=True)
    from_file = dotenv_values(path) if path else dict()
    # the real environment always wins over the .env file
    return {**from_file, **(os.environ if environ is None else environ)}


def config_from_env(
    environ: ty.Optional[ty.Mapping[str, str]] = None, *, dotenv_path: ty.Optional[str] = None,
) -> StoreConfig:
    """Resolves configuration from the environment, layered over a .env file if one exists.

    The .env file is only read; os.environ is never modified.
    """
    env = _read_env(environ, dotenv_path)
    return StoreConfig(
        region=env.get("AWS_REGION") or env.get("AWS_DEFAULT_REGION") or None,
        access_key_id=env.get("AWS_ACCESS_KEY_ID") or None,
        secret_access_key=env.get("AWS_SECRET_ACCESS_KEY") or None,
        session_token=env.get("AWS_SESSION_TOKEN") or None,
        endpoint_url=env.get("DYNACCESS_ENDPOINT_URL") or None,
    )


def make_client(config: StoreConfig) -> DynamoDbClient:
    """Static credentials if both key and secret are configured, otherwise
    whatever boto3's default credential chain finds."""
    if config.has_static_credentials:
        logger.debug("Building DynamoDB client with static credentials")
        session = boto3.session.Session(
            aws_access_key_id=config.access_key_id,
            aws_secret_access_key=config.secret_access_key,
            aws_session_token=config.session_token,
            region_name=config.region,
        )
    else:
        logger.debug("Building DynamoDB client with ambient credentials")
        session = boto3.session.Session(region_name=config.region)
    return session.client("dynamodb", endpoint_url=config.endpoint_url)


DEFAULT_CLIENT: Lazy[DynamoDbClient] = Lazy(lambda: make_client(config_from_env()))
# built on first use, then shared by everything that doesn't bring its own client
