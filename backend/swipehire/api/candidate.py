import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.candidate import CandidateProfile
from ..schemas.session import CandidateProfileOut
from ..services.accounts import candidate_profile_for, update_candidate_profile
from ..services.applications import application_payload, applications_by_candidate
from ..utils.error_handlers import get_error_message
from ..utils.roles import candidate_only, hr_only
from ..utils.validation import validate_integer_field, validate_string_field, validate_string_list

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/candidates", tags=["Candidates"])

_URL_PATTERN = r"^https?://\S+$"


class EducationIn(BaseModel):
    institution: str = Field(min_length=1, max_length=255)
    degree: str = Field(min_length=1, max_length=255)
    field: str | None = Field(default=None, max_length=255)
    start_year: int | None = Field(default=None, ge=1900, le=2100)
    end_year: int | None = Field(default=None, ge=1900, le=2100)
    is_current: bool = False


class ProfileUpdateRequest(BaseModel):
    full_name: str | None = None
    phone: str | None = Field(default=None, max_length=50)
    location: str | None = Field(default=None, max_length=100)
    years_of_experience: int | None = None
    skills: list[str] | None = None
    bio: str | None = None
    resume_filename: str | None = Field(default=None, max_length=255)
    cv_filename: str | None = Field(default=None, max_length=255)
    portfolio: str | None = None
    linkedin: str | None = None
    github: str | None = None
    personal_website: str | None = None
    education: list[EducationIn] | None = None


def _profile_out(profile: CandidateProfile) -> dict:
    return CandidateProfileOut.model_validate(profile).model_dump(mode="json")


@router.get("/me")
def my_profile(db: Session = Depends(get_db), user=Depends(candidate_only)):
    profile = candidate_profile_for(db, int(user.get("sub")))
    return {"success": True, "profile": _profile_out(profile)}


@router.put("/me")
def update_my_profile(payload: ProfileUpdateRequest, db: Session = Depends(get_db), user=Depends(candidate_only)):
    profile = candidate_profile_for(db, int(user.get("sub")))
    changes = payload.model_dump(exclude_unset=True)

    if "full_name" in changes:
        changes["full_name"] = validate_string_field(changes["full_name"], "Full name", max_length=255)
    if "years_of_experience" in changes:
        changes["years_of_experience"] = validate_integer_field(
            changes["years_of_experience"], "Years of experience", min_value=0, max_value=60
        )
    if "skills" in changes:
        changes["skills"] = validate_string_list(changes["skills"], "Skills")
    if "bio" in changes:
        changes["bio"] = validate_string_field(changes["bio"], "Bio", max_length=2000, required=False)
    for link in ("portfolio", "linkedin", "github", "personal_website"):
        if link in changes:
            changes[link] = validate_string_field(
                changes[link], link.replace("_", " ").capitalize(), max_length=255, required=False, pattern=_URL_PATTERN
            )
    if "education" in changes:
        for entry in changes["education"] or []:
            if entry.get("end_year") and entry.get("start_year") and entry["end_year"] < entry["start_year"]:
                raise HTTPException(status_code=400, detail="Education end year cannot be before start year")

    profile = update_candidate_profile(db, profile, changes)
    return {"success": True, "profile": _profile_out(profile)}


@router.get("/me/applications")
def my_applications(db: Session = Depends(get_db), user=Depends(candidate_only)):
    profile = candidate_profile_for(db, int(user.get("sub")))
    items = []
    for a in applications_by_candidate(db, profile.id):
        job = a.job
        items.append(
            {
                **application_payload(a),
                "job": {"id": job.id, "title": job.title, "location": job.location} if job else None,
            }
        )
    return {"success": True, "applications": items}


@router.get("/{candidate_id:int}")
def candidate_profile(candidate_id: int, db: Session = Depends(get_db), user=Depends(hr_only)):
    profile = db.query(CandidateProfile).filter(CandidateProfile.id == int(candidate_id)).first()
    if not profile:
        raise HTTPException(status_code=404, detail=get_error_message("profile_not_found"))
    return {"success": True, "profile": _profile_out(profile)}
