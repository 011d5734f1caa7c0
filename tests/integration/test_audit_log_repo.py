"""Audit log repository integration tests. Require Postgres; session is rolled back after each test."""

from datetime import timedelta

import pytest

from hrms.application.dtos.audit_log import AuditLogEntryCreate, AuditLogFilters
from hrms.domain.enums import AuditAction
from hrms.infrastructure.persistence.repositories import AuditLogRepository
from hrms.shared.utils.datetime import utc_now


def _entry(action: AuditAction = AuditAction.READ, resource_id: str = "emp-1") -> AuditLogEntryCreate:
    return AuditLogEntryCreate(
        actor_id="repo-test-actor",
        action=action,
        resource_type="employee",
        resource_id=resource_id,
        before_snapshot=None,
        after_snapshot={"status": "ACTIVE"},
        ip_address="10.0.0.1",
        user_agent="pytest",
        request_id="req-repo",
    )


@pytest.mark.requires_db
async def test_append_and_filter(db_session) -> None:
    repo = AuditLogRepository(db_session)
    created = await repo.create(_entry())
    await repo.create(_entry(AuditAction.UPDATE))

    assert created.timestamp is not None
    found = await repo.get_by_id(created.id)
    assert found is not None
    assert found.after_snapshot == {"status": "ACTIVE"}

    filters = AuditLogFilters(actor_id="repo-test-actor", action=AuditAction.UPDATE)
    assert await repo.count(filters) == 1
    page = await repo.list_page(AuditLogFilters(actor_id="repo-test-actor"), 0, 10)
    assert {e.action for e in page} == {AuditAction.READ, AuditAction.UPDATE}


@pytest.mark.requires_db
async def test_purge_only_touches_older_rows(db_session) -> None:
    repo = AuditLogRepository(db_session)
    await repo.create(_entry())
    cutoff = utc_now() - timedelta(days=1)
    before = await repo.count_older_than(cutoff)

    assert await repo.delete_older_than(cutoff) == before
    assert await repo.count(AuditLogFilters(actor_id="repo-test-actor")) == 1
