"""
Storage ports used by the provisioning steps.

Keep these small and framework-agnostic so tests can supply simple fakes.
"""
from __future__ import annotations

from typing import Any, Mapping, Protocol


class StorageAdminPort(Protocol):
    """Administrative operations against a hosted storage backend.

    Intent:
        Let the provisioning steps create buckets, attach policies and write
        objects without depending on a specific SDK.

    Permissions:
        Implementations are expected to run with a privileged (service) key.
        Errors are raised, never returned.
    """

    def list_bucket_names(self) -> list[str]: ...

    def create_bucket(self, name: str, *, public: bool, file_size_limit: int) -> None: ...

    def call_rpc(self, function: str, params: Mapping[str, Any]) -> Any: ...

    def upload_object(self, *, bucket: str, key: str, body: bytes, content_type: str, upsert: bool = True) -> None: ...

    def public_url(self, *, bucket: str, key: str) -> str: ...


__all__ = ["StorageAdminPort"]
