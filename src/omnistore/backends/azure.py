# SPDX-License-Identifier: MIT
"""Azure Blob Storage operations.

Each function resolves the container and blob clients from the registry's
``BlobServiceClient`` and forwards caller options to the SDK unchanged.
SDK errors (``azure.core.exceptions``) propagate to the caller.
"""

from __future__ import annotations

import mimetypes
import os
from collections.abc import Callable, Mapping
from typing import Any

from azure.storage.blob import ContentSettings
from azure.storage.blob.aio import BlobClient

from ..config import logger
from ..registry import ClientRegistry, resolve_registry

# Common web types missing from older interpreters' built-in table
_EXTRA_TYPES: dict[str, str] = {
    ".webp": "image/webp",
    ".avif": "image/avif",
    ".md": "text/markdown",
    ".markdown": "text/markdown",
    ".woff": "font/woff",
    ".woff2": "font/woff2",
    ".yaml": "text/yaml",
    ".yml": "text/yaml",
    ".mjs": "text/javascript",
}
for _ext, _type in _EXTRA_TYPES.items():
    mimetypes.add_type(_type, _ext)


def content_type_for(blob_name: str) -> str | None:
    """Look up the MIME type for *blob_name*'s extension.

    Only the last extension counts, so ``archive.tar.gz`` is looked up as
    ``.gz``. Returns ``None`` if the name has no extension or the extension
    is unknown.
    """
    ext = os.path.splitext(blob_name)[1].lower()
    if not ext:
        return None
    mime, _ = mimetypes.guess_type(f"blob{ext}")
    return mime


def _blob_client(container_name: str, blob_name: str, registry: ClientRegistry | None) -> BlobClient:
    service = resolve_registry(registry).get_blob_backend()
    return service.get_container_client(container_name).get_blob_client(blob_name)


async def upload_blob(
    *,
    blob_name: str,
    container_name: str,
    buffer: Any,
    upload_options: Mapping[str, Any] | None = None,
    registry: ClientRegistry | None = None,
) -> dict[str, Any]:
    """Upload *buffer* (bytes, str or a readable stream) as *blob_name*, replacing any existing blob.

    The content type is derived from the blob name's extension. Keys in
    *upload_options* override the defaults (``content_settings``,
    ``overwrite``).

    Returns:
        The SDK's upload response (``etag``, ``last_modified``, ...)
    """
    content_type = content_type_for(blob_name)
    blob_client = _blob_client(container_name, blob_name, registry)

    options: dict[str, Any] = {
        "content_settings": ContentSettings(content_type=content_type),
        "overwrite": True,
        **(upload_options or {}),
    }
    logger.debug("Uploading blob %s/%s (content type: %s)", container_name, blob_name, content_type)
    return await blob_client.upload_blob(buffer, **options)


async def delete_blob(
    *,
    container_name: str,
    blob_name: str,
    blob_delete_options: Mapping[str, Any] | None = None,
    registry: ClientRegistry | None = None,
) -> dict[str, str]:
    """Delete *blob_name* from *container_name*.

    ``BlobClient.delete_blob`` returns nothing, so the response headers are
    captured with azure-core's ``raw_response_hook``. A hook passed in
    *blob_delete_options* still runs.

    Returns:
        Response headers of the delete call (``x-ms-request-id``, ``date``, ...)
    """
    blob_client = _blob_client(container_name, blob_name, registry)
    options = dict(blob_delete_options or {})
    caller_hook: Callable[[Any], None] | None = options.pop("raw_response_hook", None)
    headers: dict[str, str] = {}

    def _capture_headers(response: Any) -> None:
        headers.update(response.http_response.headers)
        if caller_hook is not None:
            caller_hook(response)

    logger.debug("Deleting blob %s/%s", container_name, blob_name)
    await blob_client.delete_blob(raw_response_hook=_capture_headers, **options)
    return headers


async def is_blob_exists(
    *,
    container_name: str,
    blob_name: str,
    blob_exists_options: Mapping[str, Any] | None = None,
    registry: ClientRegistry | None = None,
) -> bool:
    """Return whether *blob_name* exists in *container_name*."""
    blob_client = _blob_client(container_name, blob_name, registry)
    return await blob_client.exists(**(blob_exists_options or {}))
