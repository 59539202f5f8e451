# SPDX-License-Identifier: MIT
"""Client registry holding at most one client per backend.

A :class:`ClientRegistry` is an explicit context: construct one, connect the
backends you need, and pass it to the operations via ``registry=``. Code that
does not pass a registry shares the process-wide default from
:func:`get_registry`.

Usage::

    from omnistore.registry import ClientRegistry

    async with ClientRegistry() as registry:
        registry.connect_blob_backend(conn_str)
        await upload_blob(..., registry=registry)
"""

from __future__ import annotations

import threading
from functools import lru_cache
from typing import Any

import boto3
from azure.storage.blob.aio import BlobServiceClient
from botocore.client import BaseClient

from .config import logger
from .descriptors import BlobDescriptor, ObjectStoreDescriptor
from .errors import BackendNotInitializedError

AZURE_BACKEND_NAME = "Azure Blob Storage"
S3_BACKEND_NAME = "S3"


class ClientRegistry:
    """Holds the Azure and S3 clients for one application context.

    Each client is created on the first successful connect call for its
    backend and is never replaced afterwards. Later connect calls return the
    existing client and ignore their arguments.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._blob_service_client: BlobServiceClient | None = None
        self._s3: BaseClient | None = None

    # ------------------------------------------------------------------
    # Connect
    # ------------------------------------------------------------------

    def connect_blob_backend(
        self,
        connection_string: str,
        options: dict[str, Any] | None = None,
    ) -> BlobServiceClient:
        """Create the Azure client once; afterwards return the existing one.

        *options* are forwarded to ``BlobServiceClient.from_connection_string``.
        """
        with self._lock:
            if self._blob_service_client is None:
                self._blob_service_client = BlobServiceClient.from_connection_string(
                    connection_string, **(options or {})
                )
                logger.info("Connected %s (account: %s)", AZURE_BACKEND_NAME, self._blob_service_client.account_name)
            elif options:
                logger.debug("%s already connected; ignoring new options", AZURE_BACKEND_NAME)
            return self._blob_service_client

    def connect_object_store_backend(self, config: dict[str, Any]) -> BaseClient:
        """Create the S3 client once; afterwards return the existing one.

        *config* is translated by :meth:`ObjectStoreDescriptor.client_kwargs`.
        """
        with self._lock:
            if self._s3 is None:
                kwargs = ObjectStoreDescriptor(config=config).client_kwargs()
                self._s3 = boto3.client("s3", **kwargs)
                logger.info("Connected %s (region: %s)", S3_BACKEND_NAME, kwargs.get("region_name", "default"))
            else:
                logger.debug("%s already connected; ignoring new configuration", S3_BACKEND_NAME)
            return self._s3

    def connect(self, descriptor: BlobDescriptor | ObjectStoreDescriptor) -> BlobServiceClient | BaseClient:
        """Connect the backend a descriptor describes."""
        if isinstance(descriptor, BlobDescriptor):
            return self.connect_blob_backend(descriptor.connection_string, descriptor.pipeline_options)
        if isinstance(descriptor, ObjectStoreDescriptor):
            return self.connect_object_store_backend(descriptor.config)
        raise TypeError(f"Unsupported connection descriptor: {type(descriptor).__name__}")

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    @property
    def blob_connected(self) -> bool:
        return self._blob_service_client is not None

    @property
    def object_store_connected(self) -> bool:
        return self._s3 is not None

    def get_blob_backend(self) -> BlobServiceClient:
        """Return the Azure client.

        Raises:
            BackendNotInitializedError: If no Azure client was ever connected.
        """
        if self._blob_service_client is None:
            raise BackendNotInitializedError(AZURE_BACKEND_NAME)
        return self._blob_service_client

    def get_object_store_backend(self) -> BaseClient:
        """Return the S3 client.

        Raises:
            BackendNotInitializedError: If no S3 client was ever connected.
        """
        if self._s3 is None:
            raise BackendNotInitializedError(S3_BACKEND_NAME)
        return self._s3

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def aclose(self) -> None:
        """Close whichever clients were connected.

        Handles are kept, so a closed registry should be discarded rather
        than reused.
        """
        if self._blob_service_client is not None:
            await self._blob_service_client.close()
        if self._s3 is not None:
            self._s3.close()
        logger.debug("Client registry closed")

    async def __aenter__(self) -> ClientRegistry:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()


@lru_cache(maxsize=1)
def get_registry() -> ClientRegistry:
    """Return the process-wide default :class:`ClientRegistry` (cached singleton)."""
    return ClientRegistry()


def resolve_registry(registry: ClientRegistry | None) -> ClientRegistry:
    """Return *registry*, or the default registry when it is ``None``."""
    return registry if registry is not None else get_registry()


# ------------------------------------------------------------------
# Default-registry shortcuts
# ------------------------------------------------------------------


def connect_azure_blob_storage(connection_string: str, options: dict[str, Any] | None = None) -> BlobServiceClient:
    return get_registry().connect_blob_backend(connection_string, options)


def connect_s3(config: dict[str, Any]) -> BaseClient:
    return get_registry().connect_object_store_backend(config)


def get_blob_service_client() -> BlobServiceClient:
    return get_registry().get_blob_backend()


def get_s3() -> BaseClient:
    return get_registry().get_object_store_backend()
