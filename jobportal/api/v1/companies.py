# jobportal/api/v1/companies.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from jobportal.api.v1.deps import get_service
from jobportal.services.database_service import DatabaseService

router = APIRouter()


@router.get("/companies")
async def list_companies(
    is_featured: Optional[bool] = Query(None),
    is_top_hiring: Optional[bool] = Query(None),
    service: DatabaseService = Depends(get_service),
):
    query = {"is_featured": is_featured, "is_top_hiring": is_top_hiring}
    rows = await service.get_companies({k: v for k, v in query.items() if v is not None})
    return {"items": rows, "count": len(rows)}


@router.get("/companies/{company_id}")
async def get_company(company_id: str, service: DatabaseService = Depends(get_service)):
    company = await service.get_company_by_id(company_id)
    if not company:
        raise HTTPException(status_code=404, detail="Company not found")
    return company


@router.get("/categories")
async def list_categories(tier: Optional[int] = Query(None, ge=1, le=3), service: DatabaseService = Depends(get_service)):
    rows = await service.get_job_categories({"tier": tier} if tier is not None else {})
    return {"items": rows, "count": len(rows)}
