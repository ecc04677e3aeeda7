"""
Supabase Storage bootstrap helpers.

Intent:
    Ensure the product images bucket exists before policies are attached and
    files are uploaded.

Security & Safety:
    - Requires an adapter wired with the service key.
    - Idempotent: lists buckets first, creates only when missing.
    - Fatal: listing or creation failures abort the setup run.
"""
from __future__ import annotations

import logging

from .config import BucketConfig
from .ports import StorageAdminPort

_log = logging.getLogger("discshop.storage")


class ContainerSetupError(RuntimeError):
    """Raised when the bucket cannot be listed or created."""


def ensure_container(storage: StorageAdminPort, bucket: BucketConfig) -> bool:
    """Ensure `bucket` exists; create it if missing.

    Parameters:
        storage: Admin storage port (service key).
        bucket: Name, public flag and file size limit for creation.

    Behavior:
        - Lists existing buckets and short-circuits when the name is present.
        - Otherwise creates the bucket with the configured options.

    Returns:
        True when a bucket was created, False when it already existed.

    Raises:
        ContainerSetupError when listing or creating fails. The underlying
        client error is chained.
    """
    try:
        names = set(storage.list_bucket_names())
    except Exception as exc:
        raise ContainerSetupError(f"Error listing buckets: {exc}") from exc

    if bucket.name in names:
        _log.info("Bucket already exists, skipping creation.")
        return False

    _log.info("Creating bucket: %s", bucket.name)
    try:
        storage.create_bucket(bucket.name, public=bucket.public, file_size_limit=bucket.file_size_limit)
    except Exception as exc:
        raise ContainerSetupError(f"Error creating bucket: {exc}") from exc
    _log.info("Bucket created successfully!")
    return True


__all__ = ["ContainerSetupError", "ensure_container"]
