# jobportal/main.py
import logging

from fastapi import FastAPI

from jobportal.api.v1.applications import router as applications_router
from jobportal.api.v1.companies import router as companies_router
from jobportal.api.v1.jobs import router as jobs_router
from jobportal.api.v1.routes import health_router, router as api_router
from jobportal.core.config import settings
from jobportal.db.store import close_db, get_db

logging.basicConfig(level=logging.INFO)

app = FastAPI(title=f"{settings.APP_NAME} API")

app.include_router(health_router)
app.include_router(api_router, prefix="/api/v1")
app.include_router(jobs_router, prefix="/api/v1")
app.include_router(companies_router, prefix="/api/v1")
app.include_router(applications_router, prefix="/api/v1")


@app.on_event("startup")
async def startup_event():
    await get_db()


@app.on_event("shutdown")
async def shutdown_event():
    await close_db()
