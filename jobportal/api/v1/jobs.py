# jobportal/api/v1/jobs.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from jobportal.api.v1.deps import get_service
from jobportal.models.job import JobCreate, JobStatus, JobUpdate
from jobportal.services.database_service import DatabaseService

router = APIRouter()


@router.get("/jobs")
async def list_jobs(
    status: Optional[JobStatus] = Query(None),
    company_id: Optional[str] = Query(None),
    category_id: Optional[str] = Query(None),
    limit: int = Query(20, ge=1, le=100),
    skip: int = Query(0, ge=0),
    service: DatabaseService = Depends(get_service),
):
    query = {"status": status, "company_id": company_id, "category_id": category_id}
    query = {k: v for k, v in query.items() if v is not None}
    rows = await service.get_jobs(query, limit=limit, skip=skip)
    return {"items": rows, "count": len(rows)}


@router.get("/jobs/{job_id}")
async def get_job(job_id: str, service: DatabaseService = Depends(get_service)):
    job = await service.get_job_by_id(job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return job


@router.post("/jobs", status_code=201)
async def create_job(payload: JobCreate, service: DatabaseService = Depends(get_service)):
    return await service.create_job(payload)


@router.patch("/jobs/{job_id}")
async def update_job(job_id: str, payload: JobUpdate, service: DatabaseService = Depends(get_service)):
    try:
        job = await service.update_job(job_id, payload)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return job


@router.delete("/jobs/{job_id}")
async def delete_job(job_id: str, service: DatabaseService = Depends(get_service)):
    if not await service.delete_job(job_id):
        raise HTTPException(status_code=404, detail="Not found or already deleted")
    return {"deleted": True}
