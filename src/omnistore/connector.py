# SPDX-License-Identifier: MIT
"""Backend connector: turn a connection string into a connected client."""

from __future__ import annotations

from dataclasses import dataclass

from azure.storage.blob.aio import BlobServiceClient
from botocore.client import BaseClient

from .config import get_connection_string, logger
from .descriptors import BlobDescriptor, ConnectionOptions, parse_connection_string
from .registry import ClientRegistry, resolve_registry


@dataclass(frozen=True)
class ConnectedClients:
    """Result of :func:`connect_storage`. Exactly one field is set."""

    blob_service_client: BlobServiceClient | None = None
    s3: BaseClient | None = None


def connect_storage(
    connection_string: str,
    options: ConnectionOptions | None = None,
    *,
    registry: ClientRegistry | None = None,
) -> ConnectedClients:
    """Connect whichever backend *connection_string* describes.

    See :func:`omnistore.descriptors.parse_connection_string` for how the
    backend is chosen.

    Args:
        connection_string: Azure connection string, or ``key=value;...`` S3 config
        options: Base options for both backends; only the selected one is used
        registry: Registry to connect (default: process-wide registry)

    Returns:
        ConnectedClients with the connected client set and the other ``None``
    """
    registry = resolve_registry(registry)
    descriptor = parse_connection_string(connection_string, options)

    if isinstance(descriptor, BlobDescriptor):
        logger.debug("Connection string selects Azure Blob Storage")
        return ConnectedClients(
            blob_service_client=registry.connect_blob_backend(
                descriptor.connection_string, descriptor.pipeline_options
            )
        )

    logger.debug("Connection string selects S3")
    return ConnectedClients(s3=registry.connect_object_store_backend(descriptor.config))


def connect_from_env(
    options: ConnectionOptions | None = None,
    *,
    registry: ClientRegistry | None = None,
) -> ConnectedClients:
    """Connect using ``OMNISTORE_CONNECTION_STRING`` or ``AZURE_STORAGE_CONNECTION_STRING``.

    Raises:
        RuntimeError: If neither environment variable is set
    """
    return connect_storage(get_connection_string(), options, registry=registry)
