"""
Company Routes

POST /companies - Create company (admin only)
GET /companies - List companies, filterable by minEmployees, maxEmployees, name
GET /companies/{handle} - Get company with its jobs
PATCH /companies/{handle} - Partial update (admin only)
DELETE /companies/{handle} - Delete company (admin only)
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from app.db.postgres import get_db
from app.core.auth import ensure_admin
from app.models import company as company_model
from app.schemas.schemas import (
    CompanyCreate, CompanyUpdate, CompanyResponse, CompanyDetailResponse,
    CompanyListResponse, DeletedResponse
)

router = APIRouter(prefix="/companies", tags=["Companies"])


@router.post("", response_model=CompanyResponse, status_code=201)
async def create_company(data: CompanyCreate, admin: dict = Depends(ensure_admin), db: Session = Depends(get_db)):
    """Create a company. Admins only."""
    company = company_model.create(db, data.model_dump(by_alias=True))
    return CompanyResponse(company=company)


@router.get("", response_model=CompanyListResponse)
async def list_companies(
    min_employees: Optional[int] = Query(None, alias="minEmployees", ge=0),
    max_employees: Optional[int] = Query(None, alias="maxEmployees", ge=0),
    name: Optional[str] = Query(None, description="Case-insensitive match in name"),
    db: Session = Depends(get_db)
):
    """List companies. Unknown query parameters are ignored."""
    filters = {"minEmployees": min_employees, "maxEmployees": max_employees, "name": name}
    companies = company_model.find_all(db, {k: v for k, v in filters.items() if v is not None})
    return CompanyListResponse(companies=companies)


@router.get("/{handle}", response_model=CompanyDetailResponse)
async def get_company(handle: str, db: Session = Depends(get_db)):
    """Get a company and its jobs."""
    return CompanyDetailResponse(company=company_model.get(db, handle))


@router.patch("/{handle}", response_model=CompanyResponse)
async def update_company(
    handle: str,
    update: CompanyUpdate,
    admin: dict = Depends(ensure_admin),
    db: Session = Depends(get_db)
):
    """Update some of name, description, numEmployees, logoUrl. Admins only."""
    return CompanyResponse(company=company_model.update(db, handle, update.changes()))


@router.delete("/{handle}", response_model=DeletedResponse)
async def delete_company(handle: str, admin: dict = Depends(ensure_admin), db: Session = Depends(get_db)):
    """Delete a company. Its jobs go with it. Admins only."""
    company_model.remove(db, handle)
    return DeletedResponse(deleted=handle)
