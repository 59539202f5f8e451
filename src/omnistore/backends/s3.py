# SPDX-License-Identifier: MIT
"""Amazon S3 operations.

boto3 is synchronous, so every call runs in a worker thread via
``anyio.to_thread.run_sync``. Parameters use S3's own names (``Bucket``,
``Key``, ``Body``) and are forwarded to boto3 unchanged.
"""

from __future__ import annotations

import functools
import io
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

import anyio
from boto3.s3.transfer import TransferConfig
from botocore.exceptions import ClientError

from ..config import logger
from ..registry import ClientRegistry, resolve_registry

# Error codes S3 uses for a missing object on HEAD
NOT_FOUND_CODES: frozenset[str] = frozenset({"404", "NotFound", "NoSuchKey"})


def is_not_found(error: ClientError) -> bool:
    """Return True if *error* reports a missing object."""
    return str(error.response.get("Error", {}).get("Code", "")) in NOT_FOUND_CODES


def _as_fileobj(body: Any) -> Any:
    if isinstance(body, (bytes, bytearray, memoryview)):
        return io.BytesIO(body)
    if isinstance(body, str):
        return io.BytesIO(body.encode())
    return body


async def upload_to_s3(
    params: Mapping[str, Any],
    options: Mapping[str, Any] | None = None,
    *,
    registry: ClientRegistry | None = None,
) -> dict[str, str]:
    """Managed (multipart-capable) upload of ``params["Body"]``.

    No content type is inferred; pass ``ContentType`` in *params* to set one.

    Args:
        params: ``Bucket``, ``Key`` and ``Body`` plus any ``ExtraArgs`` keys
        options: ``TransferConfig`` keyword arguments (chunk size, concurrency)
        registry: Registry holding the S3 client (default: process-wide registry)

    Returns:
        ``Location``, ``Bucket`` and ``Key`` of the uploaded object.
        ``upload_fileobj`` returns nothing, so ``Location`` is built here as
        a path-style URL from the client's endpoint; it is not a value
        reported by S3.
    """
    client = resolve_registry(registry).get_object_store_backend()
    extra_args = dict(params)
    bucket = extra_args.pop("Bucket")
    key = extra_args.pop("Key")
    body = extra_args.pop("Body")

    upload = functools.partial(
        client.upload_fileobj,
        _as_fileobj(body),
        bucket,
        key,
        ExtraArgs=extra_args or None,
        Config=TransferConfig(**(options or {})),
    )
    logger.debug("Uploading object s3://%s/%s", bucket, key)
    await anyio.to_thread.run_sync(upload)

    return {
        "Location": f"{client.meta.endpoint_url}/{bucket}/{quote(key)}",
        "Bucket": bucket,
        "Key": key,
    }


async def delete_from_s3(
    params: Mapping[str, Any],
    *,
    registry: ClientRegistry | None = None,
) -> dict[str, Any]:
    """Delete an object. *params* are ``delete_object`` arguments (``Bucket``, ``Key``, ...)."""
    client = resolve_registry(registry).get_object_store_backend()
    logger.debug("Deleting object s3://%s/%s", params.get("Bucket"), params.get("Key"))
    return await anyio.to_thread.run_sync(functools.partial(client.delete_object, **params))


async def is_object_exists(
    params: Mapping[str, Any],
    *,
    registry: ClientRegistry | None = None,
) -> bool:
    """Return whether an object exists, using ``head_object``.

    A not-found error means ``False``. Any other error is re-raised.
    """
    client = resolve_registry(registry).get_object_store_backend()
    try:
        await anyio.to_thread.run_sync(functools.partial(client.head_object, **params))
    except ClientError as e:
        if is_not_found(e):
            return False
        raise
    return True
