"""Provision Supabase Storage for product images.

Why:
    The shop serves disc product images straight from a public Supabase
    bucket. This tool creates that bucket, attaches the public access
    policies, uploads the local images and regenerates the URL helper module
    used by the application.

Usage:
    python -m discshop.tools.setup_storage \
      --images-dir images \
      --utils-dir utils

Environment (a `.env` in the working directory is loaded first):
    SUPABASE_URL, SUPABASE_SERVICE_KEY, SUPABASE_ANON_KEY
    PRODUCT_IMAGES_BUCKET, PRODUCT_IMAGES_MAX_BYTES (optional)
    LOG_LEVEL (optional, default INFO)

Notes:
    - Idempotent: existing buckets and policies are left in place, uploads
      overwrite, the helper is rewritten.
    - Exit code 1 only for fatal errors (credentials, bucket listing or
      creation, unreadable images directory).
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import click
from dotenv import load_dotenv

from discshop.storage.config import (
    HELPER_CLIENT_MODULE_DEFAULT,
    IMAGES_DIR_DEFAULT,
    UTILS_DIR_DEFAULT,
    bucket_config,
    settings_from_env,
)
from discshop.storage.provisioner import SetupReport, run_setup
from discshop.storage.wiring import build_storage_clients

logger = logging.getLogger("discshop.tools.setup_storage")


def _configure_logging(verbose: bool) -> None:
    level_name = "DEBUG" if verbose else os.getenv("LOG_LEVEL", "INFO")
    level = getattr(logging, str(level_name).strip().upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(levelname)s:%(name)s:%(message)s")


def _summary(report: SetupReport) -> str:
    return (
        "bucket={bucket} policies: created={pc}, existing={pe}, failed={pf} "
        "uploads: ok={uo}, failed={uf}, skipped={us} helper={helper}".format(
            bucket="created" if report.bucket_created else "existing",
            pc=len(report.policies.created),
            pe=len(report.policies.existing),
            pf=len(report.policies.failed),
            uo=len(report.uploads.uploaded),
            uf=len(report.uploads.failed),
            us=len(report.uploads.skipped),
            helper=report.helper_path,
        )
    )


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--images-dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=IMAGES_DIR_DEFAULT,
    show_default=True,
    help="Directory with product images to upload.",
)
@click.option(
    "--utils-dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=UTILS_DIR_DEFAULT,
    show_default=True,
    help="Directory receiving the generated storage_helper.py.",
)
@click.option("--bucket", required=False, help="Bucket name (defaults to PRODUCT_IMAGES_BUCKET or disc-product-images).")
@click.option(
    "--client-module",
    default=HELPER_CLIENT_MODULE_DEFAULT,
    show_default=True,
    help="Module the generated helper imports its `supabase` client from.",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
def cli(images_dir: Path, utils_dir: Path, bucket: str | None, client_module: str, verbose: bool) -> None:
    """Create the product images bucket, its policies, uploads and URL helper.

    Behaviour:
        - Aborts (exit 1) when credentials are missing or the bucket cannot be
          listed or created; nothing else is attempted in that case.
        - Policy and per-file upload failures are logged; the run continues
          and exits 0.
    """
    load_dotenv(Path.cwd() / ".env", override=False)
    _configure_logging(verbose)
    try:
        settings = settings_from_env()
        clients = build_storage_clients(settings)
        report = run_setup(
            clients.admin,
            bucket_config(bucket),
            images_dir=images_dir,
            utils_dir=utils_dir,
            client_module=client_module,
            public=clients.public,
        )
    except Exception as exc:
        logger.error("Setup failed: %s", exc)
        raise click.ClickException(f"Setup failed: {exc}") from exc
    click.echo(_summary(report))


if __name__ == "__main__":  # pragma: no cover - manual entry
    cli()
