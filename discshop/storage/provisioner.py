"""
Sequential provisioning run for the product images bucket.

Steps:
    ensure bucket -> enable RLS -> create policies -> upload images -> write helper

Bucket failures abort the run (ContainerSetupError propagates). Policy and
upload failures are collected in the report and never stop later steps.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .access_policy import PolicyReport, ensure_access_rules
from .bootstrap import ensure_container
from .config import BucketConfig, HELPER_CLIENT_MODULE_DEFAULT, PRODUCT_IMAGES_PREFIX
from .helper import write_helper
from .ports import StorageAdminPort
from .uploads import UploadReport, upload_assets

_log = logging.getLogger("discshop.storage")


@dataclass(frozen=True)
class SetupReport:
    bucket_created: bool
    policies: PolicyReport
    uploads: UploadReport
    helper_path: Path


def run_setup(
    admin: StorageAdminPort,
    bucket: BucketConfig,
    *,
    images_dir: Path,
    utils_dir: Path,
    prefix: str = PRODUCT_IMAGES_PREFIX,
    client_module: str = HELPER_CLIENT_MODULE_DEFAULT,
    public: StorageAdminPort | None = None,
) -> SetupReport:
    created = ensure_container(admin, bucket)
    policies = ensure_access_rules(admin, bucket.name)
    uploads = upload_assets(admin, bucket.name, images_dir, prefix=prefix, public=public)
    helper_path = write_helper(utils_dir, bucket.name, prefix=prefix, client_module=client_module)
    _log.info("Storage setup completed successfully!")
    return SetupReport(bucket_created=created, policies=policies, uploads=uploads, helper_path=helper_path)


__all__ = ["SetupReport", "run_setup"]
