"""
Supabase-backed storage adapter for the provisioning tool.

This adapter implements StorageAdminPort using a provided Supabase client.
It is intentionally duck-typed to avoid a hard dependency during testing. The
client is expected to expose:

- storage.list_buckets() -> [Bucket | {id, name}]
- storage.create_bucket(id, options={public, file_size_limit})
- storage.from_(bucket) offering upload(path, file, file_options) and
  get_public_url(path)
- rpc(function, params) returning a builder with execute()

Security:
- Provisioning calls require a client initialized with the service key.
- A client built from the anon key is sufficient for public URL lookups.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping

from .ports import StorageAdminPort


class SupabaseStorageAdapter(StorageAdminPort):
    """Storage adapter using a supabase client for admin operations."""

    def __init__(self, client: Any):
        # Duck-typed supabase client, e.g., from `supabase import create_client(...)`.
        self._client = client

    # --- Helpers -----------------------------------------------------------------

    def _storage(self) -> Any:
        """Return the storage API from either a supabase client or a storage3 client.

        Supports two client shapes:
        - supabase.create_client(...): expose `.storage`
        - storage3 SyncStorageClient: expose `list_buckets`/`from_` directly
        """
        c = self._client
        storage = getattr(c, "storage", None)
        if storage is not None and hasattr(storage, "from_"):
            return storage
        if hasattr(c, "from_"):
            return c
        raise RuntimeError("invalid_supabase_client")

    def _bucket(self, bucket: str) -> Any:
        return self._storage().from_(bucket)

    @staticmethod
    def _normalize_key(key: str) -> str:
        # Keys are already bucket-relative; a first segment equal to the bucket
        # name belongs to the key.
        return key.lstrip("/")

    @staticmethod
    def _bucket_name(item: Any) -> str:
        if isinstance(item, dict):
            return str(item.get("name") or item.get("id") or "")
        return str(getattr(item, "name", None) or getattr(item, "id", None) or "")

    # --- Port methods ------------------------------------------------------------

    def list_bucket_names(self) -> list[str]:
        """Return the names of all buckets visible to the client.

        Raises:
            Propagates client exceptions (e.g., storage3 StorageException).
        """
        res = self._storage().list_buckets()
        # Some client versions wrap the payload as {"data": [...]}.
        if isinstance(res, dict):
            res = res.get("data") or []
        return [name for name in (self._bucket_name(it) for it in (res or [])) if name]

    def create_bucket(self, name: str, *, public: bool, file_size_limit: int) -> None:
        options: Dict[str, Any] = {"public": public, "file_size_limit": file_size_limit}
        self._storage().create_bucket(name, options=options)

    def call_rpc(self, function: str, params: Mapping[str, Any]) -> Any:
        """Invoke a Postgres function through PostgREST.

        Raises:
            Propagates postgrest APIError for failed calls.
        """
        rpc = getattr(self._client, "rpc", None)
        if rpc is None:
            raise RuntimeError("rpc_not_supported_by_client")
        builder = rpc(function, dict(params))
        execute = getattr(builder, "execute", None)
        return execute() if callable(execute) else builder

    def upload_object(self, *, bucket: str, key: str, body: bytes, content_type: str, upsert: bool = True) -> None:
        """Upload a binary object to Supabase Storage.

        Behavior:
            - Strips a leading slash from the key.
            - Passes `upsert` as a string; storage3 forwards file options as
              HTTP headers (x-upsert).

        Raises:
            Propagates client exceptions. No return value on success.
        """
        b = self._bucket(bucket)
        opts = {"content-type": content_type, "upsert": "true" if upsert else "false"}
        b.upload(self._normalize_key(key), body, file_options=opts)

    def public_url(self, *, bucket: str, key: str) -> str:
        res = self._bucket(bucket).get_public_url(self._normalize_key(key))
        # Older clients returned {"publicURL": ...} or {"data": {"publicUrl": ...}}.
        if isinstance(res, dict):
            data = res.get("data") if isinstance(res.get("data"), dict) else res
            res = data.get("publicUrl") or data.get("publicURL") or data.get("public_url")
        if not res:
            raise RuntimeError("failed_to_resolve_public_url")
        return str(res).rstrip("?")


__all__ = ["SupabaseStorageAdapter"]
