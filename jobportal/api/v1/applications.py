# jobportal/api/v1/applications.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from jobportal.api.v1.deps import get_service
from jobportal.models.application import ApplicationCreate, ApplicationUpdate
from jobportal.services.database_service import DatabaseService

router = APIRouter()


@router.post("/applications", status_code=201)
async def create_application(payload: ApplicationCreate, service: DatabaseService = Depends(get_service)):
    job = await service.get_job_by_id(payload.job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    existing = await service.get_applications({"job_id": payload.job_id, "job_seeker_id": payload.job_seeker_id})
    if existing:
        raise HTTPException(status_code=400, detail="Already applied for this job")
    return await service.create_application(payload)


@router.get("/applications")
async def list_applications(
    job_id: Optional[str] = Query(None),
    job_seeker_id: Optional[str] = Query(None),
    service: DatabaseService = Depends(get_service),
):
    query = {"job_id": job_id, "job_seeker_id": job_seeker_id}
    rows = await service.get_applications({k: v for k, v in query.items() if v is not None})
    return {"items": rows, "count": len(rows)}


@router.patch("/applications/{application_id}")
async def update_application(
    application_id: str, payload: ApplicationUpdate, service: DatabaseService = Depends(get_service)
):
    application = await service.update_application(application_id, payload)
    if not application:
        raise HTTPException(status_code=404, detail="Application not found")
    return application
