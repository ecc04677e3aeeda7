"""
Pytest configuration for storage setup tests.

Why: Every test talks to a fake storage port instead of Supabase, and must not
pick up credentials or a `.env` from the developer machine.
"""
from __future__ import annotations

from typing import Any, Mapping

import pytest


class FakeStorage:
    """In-memory StorageAdminPort recording every call in order."""

    def __init__(
        self,
        buckets: list[str] | None = None,
        *,
        list_error: Exception | None = None,
        create_error: Exception | None = None,
        rpc_errors: Mapping[str, Exception] | None = None,
        upload_errors: Mapping[str, Exception] | None = None,
    ):
        self.buckets = list(buckets or [])
        self.list_error = list_error
        self.create_error = create_error
        # keyed by rpc function name or policy_name
        self.rpc_errors = dict(rpc_errors or {})
        # keyed by object key
        self.upload_errors = dict(upload_errors or {})
        self.calls: list[tuple[str, Any]] = []
        self.objects: dict[str, tuple[bytes, str]] = {}

    def list_bucket_names(self) -> list[str]:
        self.calls.append(("list", None))
        if self.list_error is not None:
            raise self.list_error
        return list(self.buckets)

    def create_bucket(self, name: str, *, public: bool, file_size_limit: int) -> None:
        self.calls.append(("create", {"name": name, "public": public, "file_size_limit": file_size_limit}))
        if self.create_error is not None:
            raise self.create_error
        self.buckets.append(name)

    def call_rpc(self, function: str, params: Mapping[str, Any]) -> Any:
        self.calls.append(("rpc", (function, dict(params))))
        err = self.rpc_errors.get(str(params.get("policy_name") or "")) or self.rpc_errors.get(function)
        if err is not None:
            raise err
        return None

    def upload_object(self, *, bucket: str, key: str, body: bytes, content_type: str, upsert: bool = True) -> None:
        self.calls.append(("upload", {"bucket": bucket, "key": key, "content_type": content_type, "upsert": upsert}))
        if key in self.upload_errors:
            raise self.upload_errors[key]
        self.objects[key] = (body, content_type)

    def public_url(self, *, bucket: str, key: str) -> str:
        return f"https://project.supabase.co/storage/v1/object/public/{bucket}/{key}"

    # --- assertion helpers -----------------------------------------------------

    def kinds(self) -> list[str]:
        return [kind for kind, _ in self.calls]

    def policy_names(self) -> list[str]:
        return [
            params["policy_name"]
            for kind, payload in self.calls
            if kind == "rpc"
            for function, params in [payload]
            if function == "create_storage_policy"
        ]


@pytest.fixture
def fake_storage_factory():
    return FakeStorage


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    for name in (
        "SUPABASE_URL",
        "SUPABASE_SERVICE_KEY",
        "SUPABASE_SERVICE_ROLE_KEY",
        "SUPABASE_ANON_KEY",
        "PRODUCT_IMAGES_BUCKET",
        "PRODUCT_IMAGES_MAX_BYTES",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
