"""
Helper for wiring Supabase-backed storage adapters.

Why:
    The setup tool needs two clients: a privileged one (service key) for
    provisioning and a public one (anon key) for resolving public URLs. This
    module builds both adapters from SupabaseSettings in one place.

Security:
    The service key bypasses RLS. It is only used server-side by the setup
    tool and is never logged.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from supabase import create_client

from .config import SupabaseSettings
from .storage_supabase import SupabaseStorageAdapter

_log = logging.getLogger("discshop.storage")


@dataclass(frozen=True)
class StorageClients:
    admin: SupabaseStorageAdapter
    public: SupabaseStorageAdapter


def build_storage_clients(settings: SupabaseSettings) -> StorageClients:
    """Create admin and public adapters for the configured project.

    Raises:
        Propagates client construction errors (e.g., invalid URL or key
        format) so the caller can abort the run.
    """
    admin = SupabaseStorageAdapter(create_client(settings.url, settings.service_key))
    public = SupabaseStorageAdapter(create_client(settings.url, settings.anon_key))
    _log.debug("Supabase clients wired for %s", settings.url)
    return StorageClients(admin=admin, public=public)


__all__ = ["StorageClients", "build_storage_clients"]
