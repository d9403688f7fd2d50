from datetime import datetime
import json
import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.job import Job
from ..schemas.candidate import skills_list
from ..services.accounts import candidate_profile_for, hr_profile_for
from ..services.applications import (
    application_payload,
    applications_by_job,
    apply_to_job,
    get_job,
    job_stats,
)
from ..utils.dependencies import get_current_user
from ..utils.error_handlers import get_error_message, handle_database_error
from ..utils.roles import candidate_only, hr_only
from ..utils.validation import (
    validate_integer_field,
    validate_job_status,
    validate_string_field,
    validate_string_list,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/jobs", tags=["Jobs"])


def _job_to_public(job: Job) -> dict:
    salary_range = None
    if job.salary_min is not None and job.salary_max is not None:
        salary_range = {"min": int(job.salary_min), "max": int(job.salary_max)}
    return {
        "id": job.id,
        "hr_id": job.hr_id,
        "title": job.title,
        "description": job.description,
        "department": job.department,
        "location": job.location,
        "required_skills": skills_list(job.required_skills),
        "min_experience": int(job.min_experience or 0),
        "min_education": job.min_education,
        "salary_range": salary_range,
        "status": job.status or "active",
        "created_at": job.created_at.isoformat() if isinstance(job.created_at, datetime) else job.created_at,
        "applicant_count": len(job.applications),
    }


def _owned_job(db: Session, job_id: int, user: dict) -> Job:
    job = get_job(db, job_id)
    if not job:
        raise HTTPException(status_code=404, detail=get_error_message("job_not_found"))
    hr = hr_profile_for(db, int(user.get("sub")))
    if job.hr_id != hr.id:
        raise HTTPException(status_code=403, detail="You can only manage your own jobs")
    return job


class JobCreateRequest(BaseModel):
    title: str
    description: str | None = None
    department: str | None = Field(default=None, max_length=100)
    location: str | None = Field(default=None, max_length=100)
    required_skills: list[str] | None = None
    min_experience: int | None = 0
    min_education: str | None = Field(default=None, max_length=100)
    salary_min: int | None = None
    salary_max: int | None = None
    status: str | None = Field(default="active")  # active/draft/closed


@router.post("", status_code=201)
def create_job(payload: JobCreateRequest, db: Session = Depends(get_db), user=Depends(hr_only)):
    hr = hr_profile_for(db, int(user.get("sub")))
    title = validate_string_field(payload.title, "Title", min_length=2, max_length=150)
    status = validate_job_status(payload.status)
    min_experience = validate_integer_field(payload.min_experience or 0, "Minimum experience", min_value=0, max_value=60)
    salary_min = validate_integer_field(payload.salary_min, "Minimum salary", min_value=0, required=False)
    salary_max = validate_integer_field(payload.salary_max, "Maximum salary", min_value=0, required=False)
    if salary_min is not None and salary_max is not None and salary_min > salary_max:
        raise HTTPException(status_code=400, detail="Minimum salary cannot exceed maximum salary")

    job = Job(
        hr_id=hr.id,
        title=title,
        description=validate_string_field(payload.description, "Description", max_length=10000, required=False),
        department=payload.department,
        location=payload.location,
        required_skills=json.dumps(validate_string_list(payload.required_skills, "Required skills")),
        min_experience=min_experience,
        min_education=payload.min_education,
        salary_min=salary_min,
        salary_max=salary_max,
        status=status,
    )
    try:
        db.add(job)
        db.commit()
        db.refresh(job)
    except SQLAlchemyError as e:
        db.rollback()
        raise handle_database_error(e, "creating job")
    logger.info("HR %s created job %s", hr.id, job.id)
    return {"success": True, "job": _job_to_public(job)}


@router.get("")
def list_jobs(db: Session = Depends(get_db), user=Depends(get_current_user)):
    if user.get("role") == "hr":
        hr = hr_profile_for(db, int(user.get("sub")))
        jobs = db.query(Job).filter(Job.hr_id == hr.id).order_by(Job.id.asc()).all()
        return {
            "success": True,
            "jobs": [{**_job_to_public(j), "stats": job_stats(db, j.id)} for j in jobs],
        }

    jobs = db.query(Job).filter(Job.status == "active").order_by(Job.id.asc()).all()
    return {"success": True, "jobs": [_job_to_public(j) for j in jobs]}


@router.get("/dashboard")
def dashboard(db: Session = Depends(get_db), user=Depends(hr_only)):
    hr = hr_profile_for(db, int(user.get("sub")))
    jobs = db.query(Job).filter(Job.hr_id == hr.id).order_by(Job.id.asc()).all()

    totals = {"jobs": len(jobs), "active_jobs": 0, "total": 0, "shortlisted": 0, "rejected": 0, "pending": 0}
    items = []
    for job in jobs:
        stats = job_stats(db, job.id)
        if (job.status or "active") == "active":
            totals["active_jobs"] += 1
        for key in ("total", "shortlisted", "rejected", "pending"):
            totals[key] += stats[key]
        items.append({**_job_to_public(job), "stats": stats})

    return {"success": True, "totals": totals, "jobs": items}


@router.get("/{job_id:int}")
def job_details(job_id: int, db: Session = Depends(get_db), user=Depends(get_current_user)):
    job = get_job(db, job_id)
    if not job:
        raise HTTPException(status_code=404, detail=get_error_message("job_not_found"))
    if user.get("role") == "candidate" and job.status != "active":
        raise HTTPException(status_code=404, detail=get_error_message("job_not_found"))
    return {"success": True, "job": _job_to_public(job)}


@router.post("/{job_id:int}/apply", status_code=201)
def apply(job_id: int, db: Session = Depends(get_db), user=Depends(candidate_only)):
    candidate = candidate_profile_for(db, int(user.get("sub")))
    application = apply_to_job(db, job_id=job_id, candidate_id=candidate.id)
    return {"success": True, "application": application_payload(application)}


@router.get("/{job_id:int}/applications")
def job_applications(job_id: int, db: Session = Depends(get_db), user=Depends(hr_only)):
    job = _owned_job(db, job_id, user)
    items = []
    for a in applications_by_job(db, job.id):
        cand = a.candidate
        items.append(
            {
                **application_payload(a),
                "candidate": {
                    "id": cand.id if cand else None,
                    "full_name": cand.full_name if cand else None,
                    "email": cand.email if cand else None,
                },
            }
        )
    return {"success": True, "job": _job_to_public(job), "applications": items, "stats": job_stats(db, job.id)}
