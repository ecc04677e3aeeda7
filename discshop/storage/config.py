"""
Centralized storage configuration for the product image bucket.

Intent:
    Provide a single source of truth for the bucket name, its size limit, the
    object path prefix and the Supabase credentials used by the setup tool.
    Prevents drift between provisioning, uploads and the generated helper.

Behavior:
    - PRODUCT_IMAGES_BUCKET_DEFAULT / PRODUCT_IMAGES_MAX_BYTES_DEFAULT define
      canonical defaults ("disc-product-images" / 2 MiB).
    - Getters read env overrides with sane fallbacks.
    - settings_from_env() collects SUPABASE_URL, the service key and the anon
      key and fails early when one of them is missing.

Permissions:
    Pure configuration; no external calls or privileges required.
"""
from __future__ import annotations

import os
from dataclasses import dataclass


PRODUCT_IMAGES_BUCKET_DEFAULT = "disc-product-images"
PRODUCT_IMAGES_MAX_BYTES_DEFAULT = 2 * 1024 * 1024
PRODUCT_IMAGES_PREFIX = "product-images/"

IMAGES_DIR_DEFAULT = "images"
UTILS_DIR_DEFAULT = "utils"
HELPER_FILENAME = "storage_helper.py"
HELPER_CLIENT_MODULE_DEFAULT = "config.supabase_client"


class MissingSettingsError(RuntimeError):
    """Raised when required Supabase credentials are not configured."""


@dataclass(frozen=True)
class BucketConfig:
    """Parameters used when the bucket has to be created."""

    name: str
    public: bool = True
    file_size_limit: int = PRODUCT_IMAGES_MAX_BYTES_DEFAULT


@dataclass(frozen=True)
class SupabaseSettings:
    url: str
    service_key: str
    anon_key: str


def get_product_images_bucket() -> str:
    """Return the configured product images bucket name.

    Env:
        PRODUCT_IMAGES_BUCKET – optional override; otherwise defaults to
        PRODUCT_IMAGES_BUCKET_DEFAULT.
    """
    return (os.getenv("PRODUCT_IMAGES_BUCKET") or "").strip() or PRODUCT_IMAGES_BUCKET_DEFAULT


def _parse_int_env(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    if value <= 0:
        return default
    return value


def get_max_object_bytes() -> int:
    """Maximum object size enforced on the bucket (default 2 MiB)."""
    return _parse_int_env("PRODUCT_IMAGES_MAX_BYTES", PRODUCT_IMAGES_MAX_BYTES_DEFAULT)


def bucket_config(name: str | None = None) -> BucketConfig:
    """Build the public bucket config, using env defaults for missing values."""
    return BucketConfig(
        name=(name or "").strip() or get_product_images_bucket(),
        public=True,
        file_size_limit=get_max_object_bytes(),
    )


def settings_from_env() -> SupabaseSettings:
    """Read Supabase credentials from the environment.

    Env:
        - SUPABASE_URL
        - SUPABASE_SERVICE_KEY (SUPABASE_SERVICE_ROLE_KEY accepted as fallback)
        - SUPABASE_ANON_KEY

    Raises:
        MissingSettingsError naming every missing variable. Values are never
        included in the message.
    """
    url = (os.getenv("SUPABASE_URL") or "").strip()
    service_key = (
        os.getenv("SUPABASE_SERVICE_KEY") or os.getenv("SUPABASE_SERVICE_ROLE_KEY") or ""
    ).strip()
    anon_key = (os.getenv("SUPABASE_ANON_KEY") or "").strip()
    missing = [
        name
        for name, val in (
            ("SUPABASE_URL", url),
            ("SUPABASE_SERVICE_KEY", service_key),
            ("SUPABASE_ANON_KEY", anon_key),
        )
        if not val
    ]
    if missing:
        raise MissingSettingsError(f"Missing required environment variables: {', '.join(missing)}")
    return SupabaseSettings(url=url, service_key=service_key, anon_key=anon_key)


__all__ = [
    "PRODUCT_IMAGES_BUCKET_DEFAULT",
    "PRODUCT_IMAGES_MAX_BYTES_DEFAULT",
    "PRODUCT_IMAGES_PREFIX",
    "IMAGES_DIR_DEFAULT",
    "UTILS_DIR_DEFAULT",
    "HELPER_FILENAME",
    "HELPER_CLIENT_MODULE_DEFAULT",
    "BucketConfig",
    "SupabaseSettings",
    "MissingSettingsError",
    "bucket_config",
    "get_product_images_bucket",
    "get_max_object_bytes",
    "settings_from_env",
]
