import json
import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..models.candidate import CandidateProfile, EducationEntry
from ..models.hr_profile import HRProfile
from ..models.user import User
from ..schemas.session import (
    AccountOut,
    CandidateProfileOut,
    AuthSession,
    CandidateSession,
    HRProfileOut,
    HRSession,
)
from ..utils.error_handlers import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    get_error_message,
)
from ..utils.security import hash_password, verify_password

logger = logging.getLogger(__name__)

# Columns a candidate may change on their own profile.
EDITABLE_PROFILE_FIELDS = (
    "full_name",
    "phone",
    "location",
    "years_of_experience",
    "bio",
    "resume_filename",
    "cv_filename",
    "portfolio",
    "linkedin",
    "github",
    "personal_website",
)


def register_account(db: Session, *, email: str, password: str, name: str, role: str) -> User:
    """Create a user and the profile that goes with its role. Email must be unused."""
    if db.query(User).filter(User.email == email).first():
        raise ConflictError(get_error_message("email_exists"))

    user = User(name=name, email=email, password=hash_password(password), role=role)
    db.add(user)
    try:
        db.flush()
        if role == "candidate":
            db.add(
                CandidateProfile(
                    user_id=user.id,
                    full_name=name or email.split("@", 1)[0],
                    email=email,
                    years_of_experience=0,
                    skills=json.dumps([]),
                )
            )
        else:
            db.add(HRProfile(user_id=user.id, company_name=""))
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(get_error_message("email_exists"))

    db.refresh(user)
    logger.info("Registered %s account %s", role, user.id)
    return user


def authenticate(db: Session, *, email: str, password: str, role: str | None = None) -> User:
    user = db.query(User).filter(User.email == email).first()
    if not user or not verify_password(password, user.password):
        raise UnauthorizedError(get_error_message("invalid_credentials"))
    if role and user.role != role:
        raise ForbiddenError(get_error_message("role_mismatch"))
    logger.info("User %s logged in", user.id)
    return user


def get_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == int(user_id)).first()
    if not user:
        raise UnauthorizedError("Invalid user")
    return user


def auth_session(user: User) -> AuthSession:
    """The signed-in view for a user; the variant is picked by role."""
    account = AccountOut.model_validate(user)
    if user.role == "candidate":
        if user.candidate_profile is None:
            raise NotFoundError(get_error_message("profile_not_found"))
        return CandidateSession(
            user=account,
            candidate_profile=CandidateProfileOut.model_validate(user.candidate_profile),
        )
    if user.role == "hr":
        if user.hr_profile is None:
            raise NotFoundError(get_error_message("profile_not_found"))
        return HRSession(user=account, hr_profile=HRProfileOut.model_validate(user.hr_profile))
    raise ForbiddenError(get_error_message("forbidden"))


def candidate_profile_for(db: Session, user_id: int) -> CandidateProfile:
    profile = db.query(CandidateProfile).filter(CandidateProfile.user_id == int(user_id)).first()
    if not profile:
        raise NotFoundError(get_error_message("profile_not_found"))
    return profile


def hr_profile_for(db: Session, user_id: int) -> HRProfile:
    profile = db.query(HRProfile).filter(HRProfile.user_id == int(user_id)).first()
    if not profile:
        raise NotFoundError(get_error_message("profile_not_found"))
    return profile


def update_candidate_profile(
    db: Session,
    profile: CandidateProfile,
    changes: dict[str, Any],
) -> CandidateProfile:
    """Partial update. `skills` and `education`, when given, replace the stored lists."""
    for key in EDITABLE_PROFILE_FIELDS:
        if key in changes:
            setattr(profile, key, changes[key])

    if "skills" in changes:
        profile.skills = json.dumps(list(changes["skills"] or []))

    if "education" in changes:
        profile.education = [
            EducationEntry(
                institution=e["institution"],
                degree=e["degree"],
                field=e.get("field"),
                start_year=e.get("start_year"),
                end_year=e.get("end_year"),
                is_current=bool(e.get("is_current", False)),
            )
            for e in (changes["education"] or [])
        ]

    profile.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(profile)
    logger.info("Candidate profile %s updated (%s)", profile.id, ", ".join(sorted(changes)) or "no fields")
    return profile
