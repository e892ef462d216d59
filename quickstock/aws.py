# quickstock/aws.py
from functools import lru_cache

import boto3

from .config import Settings


@lru_cache(maxsize=None)
def _client(service: str, region: str, key_id: str, secret: str):
    # Own session per client: the default boto3 session is not thread-safe.
    session = boto3.session.Session(
        region_name=region,
        aws_access_key_id=key_id or None,
        aws_secret_access_key=secret or None,
    )
    return session.client(service)


def aws_client(service: str, settings: Settings):
    return _client(
        service,
        settings.aws_region,
        settings.aws_access_key_id or "",
        settings.aws_secret_access_key or "",
    )
