# SPDX-License-Identifier: MIT
"""Backend-agnostic upload, delete and existence checks.

Every function takes an ``azure_or_s3`` selector: ``"azure"`` routes to
Azure Blob Storage, anything else routes to S3 (see
:meth:`omnistore.descriptors.Backend.from_selector`).

Usage::

    from omnistore.dispatch import upload_to_storage

    result = await upload_to_storage(
        azure_or_s3="azure",
        buffer=b"...",
        file_name="reports/summary.pdf",
        container_or_bucket_name="documents",
    )
    result.azure  # upload response; result.s3 is None
"""

from __future__ import annotations

import os
import pathlib
from dataclasses import dataclass
from typing import Any

import aiofiles

from .backends.azure import delete_blob, is_blob_exists, upload_blob
from .backends.s3 import delete_from_s3, is_object_exists, upload_to_s3
from .config import logger
from .descriptors import Backend
from .registry import ClientRegistry


@dataclass(frozen=True)
class UploadResult:
    """Result of :func:`upload_to_storage`. Exactly one field is set."""

    azure: dict[str, Any] | None = None
    s3: dict[str, str] | None = None


@dataclass(frozen=True)
class DeleteResult:
    """Result of :func:`delete_from_storage`. Exactly one field is set."""

    blob_delete_response: dict[str, str] | None = None
    delete_object_output: dict[str, Any] | None = None


async def upload_to_storage(
    *,
    azure_or_s3: str | Backend,
    buffer: bytes,
    file_name: str,
    container_or_bucket_name: str,
    registry: ClientRegistry | None = None,
) -> UploadResult:
    """Upload *buffer* as *file_name* to the selected backend.

    Only the Azure path sets a content type (from the file extension). S3
    uploads are sent without one.
    """
    backend = Backend.from_selector(azure_or_s3)
    logger.debug("upload_to_storage -> %s", backend.value)

    if backend is Backend.AZURE:
        return UploadResult(
            azure=await upload_blob(
                container_name=container_or_bucket_name,
                blob_name=file_name,
                buffer=buffer,
                registry=registry,
            )
        )
    return UploadResult(
        s3=await upload_to_s3(
            {"Bucket": container_or_bucket_name, "Key": file_name, "Body": buffer},
            registry=registry,
        )
    )


async def upload_file_to_storage(
    *,
    azure_or_s3: str | Backend,
    path: str | os.PathLike[str],
    container_or_bucket_name: str,
    file_name: str | None = None,
    registry: ClientRegistry | None = None,
) -> UploadResult:
    """Read a local file and upload it with :func:`upload_to_storage`.

    *file_name* defaults to the file's base name.
    """
    local = pathlib.Path(path)
    async with aiofiles.open(local, "rb") as f:
        data = await f.read()
    return await upload_to_storage(
        azure_or_s3=azure_or_s3,
        buffer=data,
        file_name=file_name or local.name,
        container_or_bucket_name=container_or_bucket_name,
        registry=registry,
    )


async def delete_from_storage(
    *,
    azure_or_s3: str | Backend,
    file_name: str,
    container_or_bucket_name: str,
    registry: ClientRegistry | None = None,
) -> DeleteResult:
    """Delete *file_name* from the selected backend."""
    backend = Backend.from_selector(azure_or_s3)
    logger.debug("delete_from_storage -> %s", backend.value)

    if backend is Backend.AZURE:
        return DeleteResult(
            blob_delete_response=await delete_blob(
                container_name=container_or_bucket_name,
                blob_name=file_name,
                registry=registry,
            )
        )
    return DeleteResult(
        delete_object_output=await delete_from_s3(
            {"Bucket": container_or_bucket_name, "Key": file_name},
            registry=registry,
        )
    )


async def is_blob_or_object_exists(
    *,
    azure_or_s3: str | Backend,
    file_name: str,
    container_or_bucket_name: str,
    registry: ClientRegistry | None = None,
) -> bool:
    """Return whether *file_name* exists on the selected backend.

    Unlike upload and delete this returns a plain bool, not a result object.
    """
    if Backend.from_selector(azure_or_s3) is Backend.AZURE:
        return await is_blob_exists(
            container_name=container_or_bucket_name,
            blob_name=file_name,
            registry=registry,
        )
    return await is_object_exists(
        {"Bucket": container_or_bucket_name, "Key": file_name},
        registry=registry,
    )
