"""
Bulk upload of local product images into the bucket.

Every supported file is attempted independently: a failed read or upload is
logged and counted, and the remaining files are still processed. There is no
batching and no retry; a failed file simply stays absent or stale remotely.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .config import PRODUCT_IMAGES_PREFIX
from .keys import content_type_for, is_supported_image, make_product_image_key
from .ports import StorageAdminPort

_log = logging.getLogger("discshop.storage")


@dataclass(frozen=True)
class LocalAsset:
    path: Path
    key: str
    content_type: str

    @property
    def name(self) -> str:
        return self.path.name


@dataclass
class UploadReport:
    uploaded: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


def scan_images_dir(images_dir: Path, *, prefix: str = PRODUCT_IMAGES_PREFIX) -> tuple[list[LocalAsset], list[str]]:
    """Split directory entries into uploadable assets and skipped names.

    Entries are sorted by name. Directories and non-image files are skipped.

    Raises:
        OSError (e.g., FileNotFoundError) when the directory cannot be listed.
    """
    assets: list[LocalAsset] = []
    skipped: list[str] = []
    for entry in sorted(images_dir.iterdir(), key=lambda p: p.name):
        if not entry.is_file() or not is_supported_image(entry.name):
            skipped.append(entry.name)
            continue
        assets.append(
            LocalAsset(
                path=entry,
                key=make_product_image_key(entry.name, prefix=prefix),
                content_type=content_type_for(entry.name),
            )
        )
    return assets, skipped


def upload_assets(
    storage: StorageAdminPort,
    bucket: str,
    images_dir: Path,
    *,
    prefix: str = PRODUCT_IMAGES_PREFIX,
    public: StorageAdminPort | None = None,
) -> UploadReport:
    """Upload every supported image in `images_dir` with upsert semantics.

    Parameters:
        storage: Admin storage port used for uploads.
        bucket: Target bucket name.
        images_dir: Local directory to scan (not recursive).
        prefix: Object key prefix.
        public: Optional anon port; when given, the public URL of each
            uploaded file is logged at debug level.

    Returns:
        UploadReport with uploaded, failed and skipped file names.
    """
    assets, skipped = scan_images_dir(images_dir, prefix=prefix)
    _log.info("Found %d files to upload", len(assets) + len(skipped))
    report = UploadReport(skipped=skipped)

    for asset in assets:
        _log.info("Uploading: %s", asset.name)
        try:
            body = asset.path.read_bytes()
            storage.upload_object(
                bucket=bucket,
                key=asset.key,
                body=body,
                content_type=asset.content_type,
                upsert=True,
            )
        except Exception as exc:
            _log.error("Error uploading %s: %s", asset.name, exc)
            report.failed.append(asset.name)
            continue
        _log.info("Successfully uploaded: %s", asset.name)
        report.uploaded.append(asset.name)
        if public is not None:
            try:
                _log.debug("Public URL for %s: %s", asset.name, public.public_url(bucket=bucket, key=asset.key))
            except Exception as exc:
                _log.debug("Public URL lookup failed for %s: %s", asset.name, exc)
    return report


__all__ = ["LocalAsset", "UploadReport", "scan_images_dir", "upload_assets"]
