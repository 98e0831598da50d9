# jobportal/api/v1/routes.py
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException

from jobportal.api.v1.deps import get_service
from jobportal.db.database import DEFAULT_COLLECTIONS
from jobportal.services.database_service import DatabaseService
from jobportal.services.seed import seed_default_data

router = APIRouter()
health_router = APIRouter()


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@health_router.get("/health")
async def health(service: DatabaseService = Depends(get_service)):
    return {
        "status": "OK",
        "timestamp": _timestamp(),
        "database": "Connected" if service.connection.connected else "Disconnected",
    }


@router.get("/status")
async def status(service: DatabaseService = Depends(get_service)):
    if not await service.check_connection():
        raise HTTPException(status_code=503, detail="Database connection error")
    db = await service.init()
    counts = {name: await db.collection(name).count_documents({}) for name in DEFAULT_COLLECTIONS}
    return {
        "status": "Connected",
        "database": db.name,
        "collections": counts,
        "timestamp": _timestamp(),
    }


@router.post("/setup")
async def setup(service: DatabaseService = Depends(get_service)):
    created = await seed_default_data(service)
    return {"created": created}
