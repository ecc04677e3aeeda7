"""
Access policies — public rules on storage.objects for the product bucket.

Why:
    Reruns must tolerate rules that already exist, and a broken rule must not
    prevent the remaining ones from being created.
"""
from __future__ import annotations

import logging

from discshop.storage.access_policy import build_access_rules, ensure_access_rules


class _ApiError(Exception):
    """Mimics postgrest APIError, which carries the server text on `.message`."""

    def __init__(self, message: str):
        super().__init__({"message": message})
        self.message = message


def test_rules_cover_all_actions_scoped_to_bucket():
    rules = build_access_rules("disc-product-images")

    assert [r.action for r in rules] == ["INSERT", "SELECT", "UPDATE", "DELETE"]
    assert [r.slug for r in rules] == [
        "allow_public_uploads",
        "allow_public_reads",
        "allow_public_updates",
        "allow_public_deletes",
    ]
    for rule in rules:
        assert "bucket_id = 'disc-product-images'" in rule.definition()
        assert rule.definition().startswith(f'CREATE POLICY "{rule.slug}"')


def test_insert_rule_requires_anon_role_and_update_checks_both_sides():
    uploads, _, updates, _ = build_access_rules("b")

    assert "FOR INSERT" in uploads.definition()
    assert "WITH CHECK (bucket_id = 'b' AND auth.role() = 'anon')" in uploads.definition()
    assert "USING" not in uploads.definition()
    assert "USING (bucket_id = 'b')" in updates.definition()
    assert "WITH CHECK (bucket_id = 'b')" in updates.definition()


def test_enables_rls_then_creates_each_policy(fake_storage_factory):
    storage = fake_storage_factory()

    report = ensure_access_rules(storage, "disc-product-images")

    function, params = storage.calls[0][1]
    assert function == "enable_rls"
    assert params == {"table_name": "objects", "schema_name": "storage"}
    assert storage.policy_names() == [
        "allow_public_uploads",
        "allow_public_reads",
        "allow_public_updates",
        "allow_public_deletes",
    ]
    assert len(report.created) == 4
    assert report.failed == [] and report.existing == []


def test_enable_rls_errors_are_not_checked(fake_storage_factory):
    storage = fake_storage_factory(rpc_errors={"enable_rls": _ApiError("function enable_rls does not exist")})

    report = ensure_access_rules(storage, "disc-product-images")

    assert len(report.created) == 4


def test_already_exists_is_not_a_failure(fake_storage_factory, caplog):
    storage = fake_storage_factory(
        rpc_errors={"allow_public_reads": _ApiError('policy "allow_public_reads" already exists')}
    )
    caplog.set_level(logging.INFO, logger="discshop.storage")

    report = ensure_access_rules(storage, "disc-product-images")

    assert report.existing == ["Allow public reads"]
    assert report.failed == []
    assert "Policy Allow public reads already exists" in caplog.text
    assert not [r for r in caplog.records if r.levelno >= logging.ERROR]


def test_other_errors_are_logged_and_later_policies_still_created(fake_storage_factory, caplog):
    storage = fake_storage_factory(rpc_errors={"allow_public_uploads": RuntimeError("permission denied")})
    caplog.set_level(logging.INFO, logger="discshop.storage")

    report = ensure_access_rules(storage, "disc-product-images")

    assert report.failed == ["Allow public uploads"]
    assert report.created == ["Allow public reads", "Allow public updates", "Allow public deletes"]
    errors = [r.getMessage() for r in caplog.records if r.levelno == logging.ERROR]
    assert errors == ["Error creating policy Allow public uploads: permission denied"]
