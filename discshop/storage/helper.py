"""
Generator for the public URL helper module.

The generated file exposes `get_public_image_url(image_name)`, which maps an
image name to its public URL in the product images bucket. The bucket name and
path prefix are interpolated as string literals; the file is rewritten on
every run.
"""
from __future__ import annotations

import logging
from pathlib import Path

from .config import HELPER_CLIENT_MODULE_DEFAULT, HELPER_FILENAME, PRODUCT_IMAGES_PREFIX

_log = logging.getLogger("discshop.storage")

HELPER_TEMPLATE = '''"""Public URL helper for product images.

Generated by discshop-setup-storage. Manual edits are overwritten on the next run.
"""
from {client_module} import supabase

BUCKET_NAME = {bucket!r}
PATH_PREFIX = {prefix!r}


def get_public_image_url(image_name: str) -> str:
    return supabase.storage.from_(BUCKET_NAME).get_public_url(f"{{PATH_PREFIX}}{{image_name}}")
'''


def render_helper(
    bucket: str,
    *,
    prefix: str = PRODUCT_IMAGES_PREFIX,
    client_module: str = HELPER_CLIENT_MODULE_DEFAULT,
) -> str:
    prefix = prefix.rstrip("/") + "/"
    return HELPER_TEMPLATE.format(bucket=bucket, prefix=prefix, client_module=client_module)


def write_helper(
    utils_dir: Path,
    bucket: str,
    *,
    prefix: str = PRODUCT_IMAGES_PREFIX,
    client_module: str = HELPER_CLIENT_MODULE_DEFAULT,
) -> Path:
    """Write the helper module into `utils_dir`, creating the directory if needed.

    Returns:
        Path of the written file. Existing content is always replaced.
    """
    utils_dir.mkdir(parents=True, exist_ok=True)
    target = utils_dir / HELPER_FILENAME
    _log.info("Updating public URL helper function...")
    target.write_text(render_helper(bucket, prefix=prefix, client_module=client_module), encoding="utf-8")
    return target


__all__ = ["HELPER_TEMPLATE", "render_helper", "write_helper"]
