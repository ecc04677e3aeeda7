"""
Helpers to derive object keys and content types for product images.

Conventions:
    - Product images: product-images/{filename}
    - The filename is kept verbatim so the generated helper can resolve the
      same key from the plain image name.

Security:
    - Directory components are dropped; only the base name is used.
"""
from __future__ import annotations

import os

from .config import PRODUCT_IMAGES_PREFIX

SUPPORTED_IMAGE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".gif"})

_CONTENT_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
}


def _extension(filename: str) -> str:
    # ".png" alone counts as a png file; splitext would treat it as a stem
    name = os.path.basename(filename or "").lower()
    dot = name.rfind(".")
    return name[dot:] if dot >= 0 else ""


def is_supported_image(filename: str) -> bool:
    """True for jpg/jpeg/png/gif names, case-insensitive."""
    return _extension(filename) in SUPPORTED_IMAGE_EXTENSIONS


def content_type_for(filename: str) -> str:
    """Return the image MIME type for `filename`.

    Raises:
        ValueError for unsupported extensions.
    """
    ext = _extension(filename)
    try:
        return _CONTENT_TYPES[ext]
    except KeyError:
        raise ValueError(f"unsupported image extension: {ext or '<none>'}") from None


def make_product_image_key(filename: str, *, prefix: str = PRODUCT_IMAGES_PREFIX) -> str:
    """Build a storage key for a product image.

    Returns: product-images/{filename}
    """
    name = os.path.basename((filename or "").replace("\\", "/"))
    if not name:
        raise ValueError("filename must not be empty")
    return f"{prefix.rstrip('/')}/{name}"


__all__ = [
    "SUPPORTED_IMAGE_EXTENSIONS",
    "content_type_for",
    "is_supported_image",
    "make_product_image_key",
]
