# tests/test_database_service.py
import asyncio
import logging
from datetime import datetime, timezone

import pytest

from jobportal.db.collection import Collection
from jobportal.db.errors import StorageWriteError
from jobportal.db.query import Eq
from jobportal.models.job import JobUpdate
from jobportal.services.database_service import INDEX_SPECS, DatabaseService


def job_payload(**overrides):
    data = {
        "title": "Senior Python Developer",
        "description": "Build APIs for the portal",
        "location": "Kathmandu",
        "company_id": "c1",
        "category_id": "cat1",
        "posted_by": "u1",
        "salary_min": 80000,
        "salary_max": 120000,
    }
    data.update(overrides)
    return data


@pytest.mark.asyncio
async def test_job_lifecycle(service):
    job = await service.create_job(job_payload())
    assert job.id and job.mongo_id == job.id
    assert job.status == "active"
    assert job.salary_currency == "NPR"

    listed = await service.get_jobs({"status": "active"})
    assert [j.id for j in listed] == [job.id]

    updated = await service.update_job(job.id, {"status": "expired"})
    assert updated.status == "expired"
    assert await service.get_jobs({"status": "active"}) == []
    assert [j.id for j in await service.get_jobs({"status": "expired"})] == [job.id]

    assert await service.delete_job(job.id) is True
    assert await service.get_jobs({"status": "expired"}) == []
    assert await service.get_job_by_id(job.id) is None
    assert await service.delete_job(job.id) is False


@pytest.mark.asyncio
async def test_get_jobs_paginates(service):
    for i in range(5):
        await service.create_job(job_payload(title=f"Job {i}"))
    page = await service.get_jobs({}, limit=2, skip=1)
    assert [j.title for j in page] == ["Job 1", "Job 2"]
    assert len(await service.get_jobs()) == 5


@pytest.mark.asyncio
async def test_filters_accept_typed_clauses(service):
    await service.create_job(job_payload(status="expired"))
    await service.create_job(job_payload())
    expired = await service.get_jobs(Eq("status", "expired"))
    assert [j.status for j in expired] == ["expired"]


@pytest.mark.asyncio
async def test_create_stamps_timestamps_from_clock(service, clock):
    company = await service.create_company({"name": "TechVision Nepal"})
    assert company.created_at == datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert company.updated_at == company.created_at
    assert company.is_featured is False


@pytest.mark.asyncio
async def test_update_refreshes_only_updated_at(service, clock):
    company = await service.create_company({"name": "Green Energy Nepal"})
    clock.advance(60)
    updated = await service.update_company(company.id, {"is_featured": True})
    assert updated.is_featured is True
    assert updated.created_at == company.created_at
    assert updated.updated_at == datetime(2024, 1, 1, 0, 1, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_update_cannot_rewrite_identity_or_creation_time(service):
    company = await service.create_company({"name": "Himalayan Bank Ltd"})
    updated = await service.update_company(
        company.id, {"id": "other", "created_at": "1999-01-01T00:00:00+00:00", "size": "500+"},
    )
    assert updated.id == company.id
    assert updated.created_at == company.created_at
    assert updated.size == "500+"


@pytest.mark.asyncio
async def test_partial_update_only_touches_set_fields(service):
    job = await service.create_job(job_payload(requirements="3 years"))
    updated = await service.update_job(job.id, JobUpdate(title="Lead Python Developer"))
    assert updated.title == "Lead Python Developer"
    assert updated.requirements == "3 years"


@pytest.mark.asyncio
async def test_update_missing_returns_none(service):
    assert await service.update_job("missing", {"title": "x"}) is None
    assert await service.update_user("missing", {"full_name": "x"}) is None


@pytest.mark.asyncio
async def test_lookup_by_legacy_identifier(service):
    db = await service.init()
    # written by an older client that only set _id
    db.set_collection_data("users", [{
        "_id": "legacy-1",
        "email": "old@megajobnepal.com",
        "password_hash": "x",
        "user_type": "job_seeker",
        "full_name": "Old Account",
    }])
    user = await service.get_user_by_id("legacy-1")
    assert user is not None
    assert user.email == "old@megajobnepal.com"
    assert await service.update_user("legacy-1", {"full_name": "Renamed"}) is not None
    assert db.get_collection_data("users")[0]["full_name"] == "Renamed"


@pytest.mark.asyncio
async def test_invalid_legacy_document_still_renders(service, caplog):
    db = await service.init()
    await db["companies"].insert_one({"id": "c-old", "name": "No Timestamps Co"})
    with caplog.at_level(logging.WARNING):
        company = await service.get_company_by_id("c-old")
    assert company.name == "No Timestamps Co"
    assert "failed validation" in caplog.text


@pytest.mark.asyncio
async def test_applications_use_applied_at(service):
    app = await service.create_application({"job_id": "j1", "job_seeker_id": "u1"})
    assert app.status == "pending"
    assert app.applied_at == datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert "created_at" not in app.model_dump()

    reviewed = await service.update_application(app.id, {"status": "shortlisted"})
    assert reviewed.status == "shortlisted"
    assert [a.id for a in await service.get_applications({"job_id": "j1"})] == [app.id]


@pytest.mark.asyncio
async def test_write_failure_propagates(service, backend):
    await service.init()
    backend.fail_writes = True
    with pytest.raises(StorageWriteError):
        await service.create_job(job_payload())
    assert await service.get_jobs() == []


@pytest.mark.asyncio
async def test_get_jobs_degrades_on_read_error(service, monkeypatch):
    await service.create_job(job_payload())

    def broken_find(self, filter=None):
        raise RuntimeError("cursor exploded")

    monkeypatch.setattr(Collection, "find", broken_find)
    assert await service.get_jobs() == []


@pytest.mark.asyncio
async def test_unfiltered_categories_are_cached(service, clock, monkeypatch):
    await service.create_job_category({"name": "Engineering", "tier": 1})
    db = await service.init()
    reads = []
    original = db.get_collection_data

    def spy(name):
        reads.append(name)
        return original(name)

    monkeypatch.setattr(db, "get_collection_data", spy)

    first = await service.get_job_categories()
    second = await service.get_job_categories({})
    assert [c.name for c in first] == [c.name for c in second] == ["Engineering"]
    assert reads.count("job_categories") == 1

    # writes do not invalidate the cached list
    await service.create_job_category({"name": "Finance & Banking", "tier": 1})
    assert [c.name for c in await service.get_job_categories()] == ["Engineering"]

    clock.advance(30)
    assert [c.name for c in await service.get_job_categories()] == ["Engineering", "Finance & Banking"]


@pytest.mark.asyncio
async def test_filtered_categories_bypass_cache(service):
    await service.get_job_categories()
    parent = await service.create_job_category({"name": "Information Technology", "tier": 1})
    await service.create_job_category({"name": "Software Development", "tier": 2, "parent_id": parent.id})
    tier_two = await service.get_job_categories({"tier": 2})
    assert [c.name for c in tier_two] == ["Software Development"]
    assert tier_two[0].parent_id == parent.id


@pytest.mark.asyncio
async def test_unfiltered_categories_are_capped(service):
    for i in range(25):
        await service.create_job_category({"name": f"Category {i}", "tier": 1})
    assert len(await service.get_job_categories()) == 20
    assert len(await service.get_job_categories({"tier": 1})) == 25


@pytest.mark.asyncio
async def test_check_connection_is_cached(service, clock, monkeypatch):
    probes = []

    def probe():
        probes.append(1)
        return True

    monkeypatch.setattr(service.connection.backing, "probe", probe)
    assert await service.check_connection() is True
    assert await service.check_connection() is True
    assert len(probes) == 1
    clock.advance(5)
    assert await service.check_connection() is True
    assert len(probes) == 2


@pytest.mark.asyncio
async def test_failed_connection_check_is_cached(service, clock, monkeypatch):
    monkeypatch.setattr(service.connection.backing, "probe", lambda: False)
    assert await service.check_connection() is False
    monkeypatch.setattr(service.connection.backing, "probe", lambda: True)
    assert await service.check_connection() is False
    clock.advance(5)
    assert await service.check_connection() is True


@pytest.mark.asyncio
async def test_setup_database_is_idempotent(service, caplog):
    with caplog.at_level(logging.INFO):
        await service.setup_database()
        await service.setup_database()
    assert caplog.text.count("Database setup completed") == 2
    assert caplog.text.count("Created index email_1 on users") == 2


@pytest.mark.asyncio
async def test_setup_survives_failing_index(service, monkeypatch, caplog):
    original = Collection.create_index
    created = []

    async def flaky_create_index(self, keys, **options):
        if self.name == "users":
            raise RuntimeError("index build failed")
        created.append(await original(self, keys, **options))
        return created[-1]

    monkeypatch.setattr(Collection, "create_index", flaky_create_index)
    with caplog.at_level(logging.WARNING):
        await service.setup_database()
    assert "Failed to create index" in caplog.text
    assert len(created) == len([name for name, _ in INDEX_SPECS if name != "users"])


@pytest.mark.asyncio
async def test_setup_times_out_without_raising(connection, clock, test_settings, monkeypatch, caplog):
    cfg = test_settings.model_copy(update={"SETUP_TIMEOUT_SEC": 0.05})
    service = DatabaseService(connection, now=clock.now, cfg=cfg, monotonic=clock.monotonic)

    async def slow_create_index(self, keys, **options):
        await asyncio.sleep(5)

    monkeypatch.setattr(Collection, "create_index", slow_create_index)
    with caplog.at_level(logging.WARNING):
        await service.setup_database()
    assert "timed out" in caplog.text


@pytest.mark.asyncio
async def test_cached_categories_are_returned_as_copies(service):
    await service.create_job_category({"name": "Engineering", "tier": 1})
    first = await service.get_job_categories()
    first[0].name = "Renamed by caller"
    second = await service.get_job_categories()
    assert second[0].name == "Engineering"


@pytest.mark.asyncio
async def test_partial_salary_update_keeps_range_valid(service):
    job = await service.create_job(job_payload(salary_min=10, salary_max=20))
    with pytest.raises(ValueError):
        await service.update_job(job.id, {"salary_min": 500})
    with pytest.raises(ValueError):
        await service.update_job(job.id, {"salary_max": 5})

    stored = await service.get_job_by_id(job.id)
    assert (stored.salary_min, stored.salary_max) == (10, 20)

    raised = await service.update_job(job.id, {"salary_max": 500})
    assert raised.salary_max == 500
