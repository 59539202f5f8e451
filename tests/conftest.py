# SPDX-License-Identifier: MIT
"""Shared pytest fixtures for omnistore tests.

SDK clients are replaced with mocks; no test touches the network.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from omnistore.registry import ClientRegistry, get_registry

AZURE_CONNECTION_STRING = (
    "DefaultEndpointsProtocol=https;AccountName=devstore;AccountKey=a2V5;EndpointSuffix=core.windows.net"
)
S3_CONNECTION_STRING = "accessKeyId=AKIA;secretAccessKey=SECRET;region=us-east-1"


@pytest.fixture(autouse=True)
def clear_default_registry():
    """Give every test a fresh process-wide registry."""
    get_registry.cache_clear()
    yield
    get_registry.cache_clear()


@pytest.fixture
def registry() -> ClientRegistry:
    return ClientRegistry()


# ==================== Azure ====================


@pytest.fixture
def blob_client() -> MagicMock:
    """Mocked ``azure.storage.blob.aio.BlobClient``."""
    client = MagicMock()
    client.upload_blob = AsyncMock(return_value={"etag": '"0x8DC"', "request_id": "req-1"})
    client.delete_blob = AsyncMock(return_value=None)
    client.exists = AsyncMock(return_value=True)
    return client


@pytest.fixture
def blob_service(blob_client) -> MagicMock:
    """Mocked ``BlobServiceClient`` whose container always yields *blob_client*."""
    service = MagicMock()
    service.account_name = "devstore"
    service.get_container_client.return_value.get_blob_client.return_value = blob_client
    service.close = AsyncMock()
    return service


@pytest.fixture
def mock_blob_service_cls(mocker, blob_service) -> MagicMock:
    cls = mocker.patch("omnistore.registry.BlobServiceClient")
    cls.from_connection_string.return_value = blob_service
    return cls


@pytest.fixture
def azure_registry(registry, mock_blob_service_cls) -> ClientRegistry:
    registry.connect_blob_backend(AZURE_CONNECTION_STRING)
    return registry


# ==================== S3 ====================


@pytest.fixture
def s3_client() -> MagicMock:
    """Mocked boto3 S3 client."""
    client = MagicMock()
    client.meta.endpoint_url = "https://s3.us-east-1.amazonaws.com"
    client.upload_fileobj.return_value = None
    client.delete_object.return_value = {"DeleteMarker": False, "ResponseMetadata": {"HTTPStatusCode": 204}}
    client.head_object.return_value = {"ContentLength": 3, "ETag": '"abc"'}
    return client


@pytest.fixture
def mock_boto3_client(mocker, s3_client) -> MagicMock:
    return mocker.patch("omnistore.registry.boto3.client", return_value=s3_client)


@pytest.fixture
def s3_registry(registry, mock_boto3_client) -> ClientRegistry:
    registry.connect_object_store_backend({"region": "us-east-1"})
    return registry
