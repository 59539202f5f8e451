# SPDX-License-Identifier: MIT
"""One interface for Azure Blob Storage and Amazon S3.

Connect with a connection string, then upload, delete and check objects on
either backend through the same calls.

Usage::

    from omnistore import connect_storage, upload_to_storage

    connect_storage(os.environ["AZURE_STORAGE_CONNECTION_STRING"])
    result = await upload_to_storage(
        azure_or_s3="azure",
        buffer=data,
        file_name="photo.png",
        container_or_bucket_name="images",
    )
"""

from .backends.azure import content_type_for, delete_blob, is_blob_exists, upload_blob
from .backends.s3 import delete_from_s3, is_object_exists, upload_to_s3
from .connector import ConnectedClients, connect_from_env, connect_storage
from .descriptors import (
    Backend,
    BlobDescriptor,
    ConnectionOptions,
    ObjectStoreDescriptor,
    parse_connection_string,
)
from .dispatch import (
    DeleteResult,
    UploadResult,
    delete_from_storage,
    is_blob_or_object_exists,
    upload_file_to_storage,
    upload_to_storage,
)
from .errors import BackendNotInitializedError
from .registry import (
    ClientRegistry,
    connect_azure_blob_storage,
    connect_s3,
    get_blob_service_client,
    get_registry,
    get_s3,
)

__all__ = [
    "Backend",
    "BackendNotInitializedError",
    "BlobDescriptor",
    "ClientRegistry",
    "ConnectedClients",
    "ConnectionOptions",
    "DeleteResult",
    "ObjectStoreDescriptor",
    "UploadResult",
    "connect_azure_blob_storage",
    "connect_from_env",
    "connect_s3",
    "connect_storage",
    "content_type_for",
    "delete_blob",
    "delete_from_s3",
    "delete_from_storage",
    "get_blob_service_client",
    "get_registry",
    "get_s3",
    "is_blob_exists",
    "is_blob_or_object_exists",
    "is_object_exists",
    "parse_connection_string",
    "upload_blob",
    "upload_file_to_storage",
    "upload_to_s3",
    "upload_to_storage",
]
