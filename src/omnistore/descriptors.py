# SPDX-License-Identifier: MIT
"""Connection descriptors and the backend selector.

A connection is described by one of two variants:

- :class:`BlobDescriptor` for Azure Blob Storage (opaque connection string)
- :class:`ObjectStoreDescriptor` for S3 (configuration mapping)

:func:`parse_connection_string` builds one from a single string using a
best-effort substring heuristic. Callers that already know their backend can
construct the descriptor directly instead.

Usage::

    from omnistore.descriptors import parse_connection_string

    descriptor = parse_connection_string("accessKeyId=AKIA;secretAccessKey=SECRET;region=us-east-1")
    descriptor.config  # {"accessKeyId": "AKIA", "secretAccessKey": "SECRET", "region": "us-east-1"}
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from botocore.config import Config
from pydantic import BaseModel, Field

from .config import logger


class Backend(str, Enum):
    """Which backing store an operation targets."""

    AZURE = "azure"
    S3 = "s3"

    @classmethod
    def from_selector(cls, value: str | Backend) -> Backend:
        """Map a selector string to a backend.

        Only ``"azure"`` selects Azure. Every other value, including unknown
        strings, selects S3; this default arm is intentional and matches the
        historical ``azureOrS3`` contract.
        """
        if value == cls.AZURE.value:
            return cls.AZURE
        return cls.S3


# Substrings that must all be present for a string to be treated as S3 config
OBJECT_STORE_MARKERS: tuple[str, ...] = ("accessKeyId", "secretAccessKey", "region")


class BlobDescriptor(BaseModel, frozen=True):
    """Azure Blob Storage connection: the connection string plus pipeline options.

    ``pipeline_options`` are keyword arguments forwarded verbatim to
    ``BlobServiceClient.from_connection_string``.
    """

    connection_string: str
    pipeline_options: dict[str, Any] = Field(default_factory=dict)


# JS SDK style configuration keys -> boto3.client() keyword arguments
_CLIENT_KWARG_ALIASES: dict[str, str] = {
    "accessKeyId": "aws_access_key_id",
    "secretAccessKey": "aws_secret_access_key",
    "sessionToken": "aws_session_token",
    "region": "region_name",
    "endpoint": "endpoint_url",
    "sslEnabled": "use_ssl",
}

_CLIENT_KWARGS: frozenset[str] = frozenset(
    {
        "aws_access_key_id",
        "aws_secret_access_key",
        "aws_session_token",
        "region_name",
        "endpoint_url",
        "use_ssl",
        "verify",
        "api_version",
    }
)


def _truthy(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return bool(value)


class ObjectStoreDescriptor(BaseModel, frozen=True):
    """S3 connection: a flat configuration mapping.

    Keys may use the ``accessKeyId`` / ``region`` / ``maxRetries`` naming of
    connection strings or boto3's own keyword names. Values parsed from a
    malformed connection string may be ``None``.
    """

    config: dict[str, Any] = Field(default_factory=dict)

    def client_kwargs(self) -> dict[str, Any]:
        """Translate :attr:`config` into ``boto3.client("s3", ...)`` keyword arguments.

        ``None`` values are skipped. Unknown keys and a non-integer
        ``maxRetries`` are logged and dropped.
        """
        kwargs: dict[str, Any] = {}
        botocore_config: dict[str, Any] = {}

        for key, value in self.config.items():
            if value is None:
                logger.debug("Skipping S3 config key %r with no value", key)
                continue
            if key in _CLIENT_KWARG_ALIASES:
                name = _CLIENT_KWARG_ALIASES[key]
                kwargs[name] = _truthy(value) if name == "use_ssl" else value
            elif key in _CLIENT_KWARGS:
                kwargs[key] = value
            elif key == "maxRetries":
                try:
                    botocore_config["retries"] = {"max_attempts": int(value)}
                except (TypeError, ValueError):
                    logger.warning("Ignoring non-integer S3 maxRetries: %r", value)
            elif key == "s3ForcePathStyle":
                if _truthy(value):
                    botocore_config["s3"] = {"addressing_style": "path"}
            elif key == "config" and isinstance(value, Config):
                kwargs["config"] = value
            else:
                logger.warning("Ignoring unsupported S3 config key: %r", key)

        if botocore_config:
            extra = Config(**botocore_config)
            kwargs["config"] = kwargs["config"].merge(extra) if "config" in kwargs else extra
        return kwargs


class ConnectionOptions(BaseModel, frozen=True):
    """Base options for :func:`omnistore.connector.connect_storage`.

    Only the options for the backend that the connection string selects are
    used.
    """

    storage_pipeline_options: dict[str, Any] | None = None
    client_configuration: dict[str, Any] | None = None


def is_object_store_connection_string(connection_string: str) -> bool:
    """Return True if *connection_string* looks like S3 ``key=value`` configuration."""
    return all(marker in connection_string for marker in OBJECT_STORE_MARKERS)


def parse_key_value_pairs(connection_string: str) -> dict[str, str | None]:
    """Parse ``k1=v1;k2=v2`` into a dict.

    This is deliberately permissive: a segment without ``=`` maps to
    ``None``, a trailing ``;`` yields the key ``""``, and anything after a
    second ``=`` in a segment is dropped.
    """
    pairs: dict[str, str | None] = {}
    for segment in connection_string.strip().split(";"):
        parts = segment.strip().split("=")
        pairs[parts[0]] = parts[1] if len(parts) > 1 else None
    return pairs


def parse_connection_string(
    connection_string: str,
    options: ConnectionOptions | None = None,
) -> BlobDescriptor | ObjectStoreDescriptor:
    """Decide which backend *connection_string* describes and build its descriptor.

    A string containing ``accessKeyId``, ``secretAccessKey`` and ``region``
    (anywhere, in any order) is parsed as S3 configuration and merged over
    ``options.client_configuration``. Anything else is handed to Azure as-is.

    This is a heuristic, not a grammar. Malformed S3 strings produce
    partially populated or ``None``-valued configuration instead of raising.
    """
    options = options or ConnectionOptions()

    if is_object_store_connection_string(connection_string):
        config: dict[str, Any] = dict(options.client_configuration or {})
        config.update(parse_key_value_pairs(connection_string))
        return ObjectStoreDescriptor(config=config)

    return BlobDescriptor(
        connection_string=connection_string,
        pipeline_options=dict(options.storage_pipeline_options or {}),
    )
