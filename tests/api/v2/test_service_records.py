"""
Tests for the service records API endpoints.

Walks a job through check-in, completion and post-completion revisions.
"""
import uuid

import pytest
from httpx import AsyncClient

from tests.factories import CheckInFactory, CompletionFactory, photo_url


def _completion_update(**overrides) -> dict:
    body = CompletionFactory(**overrides)
    body.pop("completed_at")
    return body


class TestCheckInEndpoint:
    async def test_check_in(self, client: AsyncClient, assigned_job):
        body = CheckInFactory(job_id=assigned_job.id)

        response = await client.post("/api/v2/service-records/check-in", json=body)

        assert response.status_code == 201
        data = response.json()
        assert data["job_id"] == assigned_job.id
        assert data["is_check_in_complete"] is True
        assert data["before_photos"] == body["before_photos"]

        job = (await client.get(f"/api/v2/jobs/{assigned_job.id}")).json()
        assert job["status"] == "IN_PROGRESS"
        assert job["service_record"]["id"] == data["id"]

    async def test_second_check_in_rejected(self, client, assigned_job):
        body = CheckInFactory(job_id=assigned_job.id)
        first = await client.post("/api/v2/service-records/check-in", json=body)
        assert first.status_code == 201

        second = await client.post("/api/v2/service-records/check-in", json=body)

        assert second.status_code == 400
        assert second.json()["code"] == "BIZ_001"
        assert "Job must be ASSIGNED" in second.json()["detail"]

    async def test_too_many_photos(self, client, photo_store, assigned_job):
        body = CheckInFactory(job_id=assigned_job.id, before_photos=[photo_url() for _ in range(5)])

        response = await client.post("/api/v2/service-records/check-in", json=body)

        assert response.status_code == 422
        assert photo_store.deleted_urls == []

    @pytest.mark.parametrize("hours", [0, -5])
    async def test_engine_hours_must_be_positive(self, client, assigned_job, hours):
        body = CheckInFactory(job_id=assigned_job.id, before_engine_hours=hours)

        response = await client.post("/api/v2/service-records/check-in", json=body)

        assert response.status_code == 422

    async def test_notes_too_long(self, client, assigned_job):
        body = CheckInFactory(job_id=assigned_job.id, before_notes="x" * 2001)

        response = await client.post("/api/v2/service-records/check-in", json=body)

        assert response.status_code == 422

    async def test_malformed_job_id(self, client):
        response = await client.post(
            "/api/v2/service-records/check-in", json=CheckInFactory(job_id="job-1")
        )

        assert response.status_code == 422
        assert any("job_id" in e["field"] for e in response.json()["errors"])

    async def test_unknown_job(self, client):
        response = await client.post(
            "/api/v2/service-records/check-in", json=CheckInFactory(job_id=str(uuid.uuid4()))
        )

        assert response.status_code == 404


class TestCompleteEndpoint:
    async def test_complete(self, client, checked_in_job):
        job, record = checked_in_job

        response = await client.post(
            f"/api/v2/service-records/{record.id}/complete", json=CompletionFactory()
        )

        assert response.status_code == 200
        assert response.json()["is_job_complete"] is True

        completed = await client.get("/api/v2/jobs/completed", params={"technician_id": "tech-1"})
        assert [j["id"] for j in completed.json()] == [job.id]

    async def test_engine_hours_below_check_in(self, client, checked_in_job):
        _, record = checked_in_job

        response = await client.post(
            f"/api/v2/service-records/{record.id}/complete",
            json=CompletionFactory(after_engine_hours=record.before_engine_hours - 1),
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "After engine hours cannot be less than before engine hours"

    async def test_diagnosis_required(self, client, checked_in_job):
        _, record = checked_in_job

        response = await client.post(
            f"/api/v2/service-records/{record.id}/complete", json=CompletionFactory(diagnosis="")
        )

        assert response.status_code == 422

    async def test_unknown_record(self, client):
        response = await client.post(
            f"/api/v2/service-records/{uuid.uuid4()}/complete", json=CompletionFactory()
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "Service record not found"


class TestRevisionEndpoints:
    async def test_full_lifecycle_with_revisions(self, client, assigned_job):
        checked_in = await client.post(
            "/api/v2/service-records/check-in", json=CheckInFactory(job_id=assigned_job.id)
        )
        record_id = checked_in.json()["id"]

        # Edits before completion are not revisions
        edit = await client.put(
            f"/api/v2/service-records/{record_id}/check-in",
            json={"before_photos": [], "before_notes": "Fixed typo", "before_engine_hours": 1201},
        )
        assert edit.json()["revision_count"] == 0

        done = await client.post(
            f"/api/v2/service-records/{record_id}/complete", json=CompletionFactory()
        )
        assert done.status_code == 200

        revised = await client.put(
            f"/api/v2/service-records/{record_id}/completion",
            json=_completion_update(diagnosis="Cracked hose, replaced"),
        )
        assert revised.status_code == 200
        assert revised.json()["revision_count"] == 1
        assert revised.json()["revised_at"] is not None

        revised_again = await client.put(
            f"/api/v2/service-records/{record_id}/check-in",
            json={"before_photos": [], "before_engine_hours": 1201},
        )
        assert revised_again.json()["revision_count"] == 2

    async def test_update_completion_before_completion(self, client, checked_in_job):
        _, record = checked_in_job

        response = await client.put(
            f"/api/v2/service-records/{record.id}/completion", json=_completion_update()
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Job has not been completed yet"


class TestPhotoEndpoints:
    async def test_delete_before_photo(self, client, checked_in_job):
        _, record = checked_in_job
        keep, remove = record.before_photos

        response = await client.delete(
            f"/api/v2/service-records/{record.id}/before-photos", params={"photo_url": remove}
        )

        assert response.status_code == 200
        assert response.json()["before_photos"] == [keep]

    async def test_delete_after_photo_counts_as_revision(self, client, completed_job):
        _, record = completed_job

        response = await client.delete(
            f"/api/v2/service-records/{record.id}/after-photos",
            params={"photo_url": record.after_photos[0]},
        )

        assert response.status_code == 200
        assert response.json()["after_photos"] == []
        assert response.json()["revision_count"] == 1

    async def test_photo_url_must_be_url(self, client, checked_in_job):
        _, record = checked_in_job

        response = await client.delete(
            f"/api/v2/service-records/{record.id}/before-photos", params={"photo_url": "not a url"}
        )

        assert response.status_code == 422


class TestRecentEndpoint:
    async def test_recent(self, client, completed_job, checked_in_job):
        job, record = completed_job

        response = await client.get("/api/v2/service-records/recent")

        assert response.status_code == 200
        data = response.json()
        assert [r["id"] for r in data] == [record.id]
        assert data[0]["job"]["id"] == job.id
        assert data[0]["job"]["equipment"]["serial_number"]

    @pytest.mark.parametrize("limit", [0, 51])
    async def test_limit_bounds(self, client, limit):
        response = await client.get("/api/v2/service-records/recent", params={"limit": limit})

        assert response.status_code == 422
