"""
Access policies for the product images bucket.

Centralises the four public rules on `storage.objects` so that the setup run
and the tests reference a single source of truth. Policy creation is
best-effort per rule: duplicates count as success, other failures are logged
and the next rule is still attempted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .ports import StorageAdminPort

_log = logging.getLogger("discshop.storage")

ENABLE_RLS_RPC = "enable_rls"
CREATE_POLICY_RPC = "create_storage_policy"
ALREADY_EXISTS_MARKER = "already exists"


@dataclass(frozen=True, slots=True)
class AccessRule:
    """Immutable policy definition bound to one bucket."""

    name: str
    action: str
    using: str | None = None
    with_check: str | None = None

    @property
    def slug(self) -> str:
        return self.name.lower().replace(" ", "_")

    def definition(self) -> str:
        lines = [
            f'CREATE POLICY "{self.slug}"',
            f"ON storage.objects FOR {self.action}",
        ]
        if self.using:
            lines.append(f"USING ({self.using})")
        if self.with_check:
            lines.append(f"WITH CHECK ({self.with_check})")
        return "\n".join(lines)


@dataclass
class PolicyReport:
    created: list[str] = field(default_factory=list)
    existing: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


def build_access_rules(bucket: str) -> list[AccessRule]:
    """Return the public insert/select/update/delete rules scoped to `bucket`."""
    in_bucket = f"bucket_id = '{bucket}'"
    return [
        AccessRule("Allow public uploads", "INSERT", with_check=f"{in_bucket} AND auth.role() = 'anon'"),
        AccessRule("Allow public reads", "SELECT", using=in_bucket),
        AccessRule("Allow public updates", "UPDATE", using=in_bucket, with_check=in_bucket),
        AccessRule("Allow public deletes", "DELETE", using=in_bucket),
    ]


def _error_message(exc: Exception) -> str:
    # postgrest APIError carries the server text on `.message`
    message = getattr(exc, "message", None)
    return str(message) if message else str(exc)


def enable_row_level_security(storage: StorageAdminPort) -> None:
    """Enable RLS on storage.objects. Outcome is not checked."""
    try:
        storage.call_rpc(ENABLE_RLS_RPC, {"table_name": "objects", "schema_name": "storage"})
    except Exception as exc:
        _log.debug("enable_rls returned an error (ignored): %s", _error_message(exc))


def ensure_access_rules(storage: StorageAdminPort, bucket: str) -> PolicyReport:
    """Enable RLS and create each access rule for `bucket`.

    Behavior:
        - Errors mentioning "already exists" count as existing rules.
        - Any other error is logged and the next rule is attempted.

    Returns:
        PolicyReport listing rule names per outcome.
    """
    _log.info("Setting up storage policies...")
    enable_row_level_security(storage)

    report = PolicyReport()
    for rule in build_access_rules(bucket):
        _log.info("Creating policy: %s", rule.name)
        try:
            storage.call_rpc(
                CREATE_POLICY_RPC,
                {"bucket_id": bucket, "policy_name": rule.slug, "definition": rule.definition()},
            )
        except Exception as exc:
            message = _error_message(exc)
            if ALREADY_EXISTS_MARKER in message:
                _log.info("Policy %s already exists", rule.name)
                report.existing.append(rule.name)
            else:
                _log.error("Error creating policy %s: %s", rule.name, message)
                report.failed.append(rule.name)
            continue
        report.created.append(rule.name)
    return report


__all__ = [
    "AccessRule",
    "PolicyReport",
    "build_access_rules",
    "enable_row_level_security",
    "ensure_access_rules",
]
