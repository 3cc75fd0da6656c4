"""
Job Routes

POST /jobs - Create job posting (admin only)
GET /jobs - List jobs, filterable by title, minSalary, hasEquity
GET /jobs/{job_id} - Get job details
PATCH /jobs/{job_id} - Update title/salary/equity (admin only)
DELETE /jobs/{job_id} - Delete job (admin only)
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from app.db.postgres import get_db
from app.core.auth import ensure_admin
from app.models import job as job_model
from app.schemas.schemas import (
    JobCreate, JobUpdate, JobResponse, JobListResponse, DeletedResponse
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])


@router.post("", response_model=JobResponse, status_code=201)
async def create_job(job: JobCreate, admin: dict = Depends(ensure_admin), db: Session = Depends(get_db)):
    """Create a job for an existing company. Admins only."""
    return JobResponse(job=job_model.create(db, job.model_dump(by_alias=True)))


@router.get("", response_model=JobListResponse)
async def list_jobs(
    title: Optional[str] = Query(None, description="Case-insensitive match in title"),
    min_salary: Optional[int] = Query(None, alias="minSalary", ge=0),
    has_equity: Optional[bool] = Query(None, alias="hasEquity"),
    db: Session = Depends(get_db)
):
    """List jobs. Unknown query parameters are ignored."""
    filters = {"title": title, "minSalary": min_salary, "hasEquity": has_equity}
    jobs = job_model.find_all(db, {k: v for k, v in filters.items() if v is not None})
    return JobListResponse(jobs=jobs)


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(job_id: int, db: Session = Depends(get_db)):
    """Get details of a specific job."""
    return JobResponse(job=job_model.get(db, job_id))


@router.patch("/{job_id}", response_model=JobResponse)
async def update_job(
    job_id: int,
    update: JobUpdate,
    admin: dict = Depends(ensure_admin),
    db: Session = Depends(get_db)
):
    """Update a job posting. id and companyHandle cannot change."""
    return JobResponse(job=job_model.update(db, job_id, update.changes()))


@router.delete("/{job_id}", response_model=DeletedResponse)
async def delete_job(job_id: int, admin: dict = Depends(ensure_admin), db: Session = Depends(get_db)):
    """Delete a job posting. Cascades to applications."""
    job_model.remove(db, job_id)
    return DeletedResponse(deleted=str(job_id))
