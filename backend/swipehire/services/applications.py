"""
Application records: the lookups and status writes the screening queue and
the job/candidate endpoints share.
"""
import logging
import threading
from datetime import datetime, timezone
from typing import Callable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..models.application import Application
from ..models.candidate import CandidateProfile
from ..models.job import Job
from ..schemas.candidate import CandidateSummary, summarize_candidate
from ..utils.error_handlers import ConflictError, NotFoundError, ValidationError, get_error_message

logger = logging.getLogger(__name__)

STATUS_APPLIED = "applied"
STATUS_SHORTLISTED = "shortlisted"
STATUS_REJECTED = "rejected"


def get_job(db: Session, job_id: int) -> Job | None:
    return db.query(Job).filter(Job.id == int(job_id)).first()


def applications_by_job(db: Session, job_id: int) -> list[Application]:
    return (
        db.query(Application)
        .filter(Application.job_id == int(job_id))
        .order_by(Application.id.asc())
        .all()
    )


def applications_by_candidate(db: Session, candidate_id: int) -> list[Application]:
    return (
        db.query(Application)
        .filter(Application.candidate_id == int(candidate_id))
        .order_by(Application.id.asc())
        .all()
    )


def swipe_candidates_for_job(db: Session, job_id: int) -> list[CandidateSummary]:
    """Applicants for a job, in candidate-list order."""
    profiles = (
        db.query(CandidateProfile)
        .join(Application, Application.candidate_id == CandidateProfile.id)
        .filter(Application.job_id == int(job_id))
        .order_by(CandidateProfile.id.asc())
        .all()
    )
    return [summarize_candidate(p) for p in profiles]


def set_application_status(db: Session, application_id: int, status: str) -> Application:
    application = db.query(Application).filter(Application.id == int(application_id)).first()
    if not application:
        raise NotFoundError(get_error_message("application_not_found"))

    if status == application.status:
        return application
    if status not in (STATUS_SHORTLISTED, STATUS_REJECTED):
        raise ValidationError(get_error_message("invalid_status_transition"))

    now = datetime.now(timezone.utc)
    application.status = status
    if status == STATUS_SHORTLISTED:
        application.shortlisted_at = now
    else:
        application.rejected_at = now
    db.commit()
    db.refresh(application)
    logger.info("Application %s -> %s", application.id, status)
    return application


def apply_to_job(db: Session, *, job_id: int, candidate_id: int) -> Application:
    job = get_job(db, job_id)
    if not job:
        raise NotFoundError(get_error_message("job_not_found"))
    if (job.status or "active") != "active":
        raise ValidationError(get_error_message("job_closed"))

    existing = (
        db.query(Application)
        .filter(Application.job_id == int(job_id), Application.candidate_id == int(candidate_id))
        .first()
    )
    if existing:
        raise ConflictError(get_error_message("already_applied"))

    application = Application(job_id=int(job_id), candidate_id=int(candidate_id), status=STATUS_APPLIED)
    try:
        db.add(application)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(get_error_message("already_applied"))
    db.refresh(application)
    logger.info("Candidate %s applied to job %s", candidate_id, job_id)
    return application


def job_stats(db: Session, job_id: int) -> dict[str, int]:
    apps = applications_by_job(db, job_id)
    shortlisted = sum(1 for a in apps if a.status == STATUS_SHORTLISTED)
    rejected = sum(1 for a in apps if a.status == STATUS_REJECTED)
    pending = sum(1 for a in apps if a.status == STATUS_APPLIED)
    return {"shortlisted": shortlisted, "rejected": rejected, "pending": pending, "total": len(apps)}


def application_payload(application: Application) -> dict:
    def _iso(value):
        return value.isoformat() if isinstance(value, datetime) else value

    return {
        "id": int(application.id),
        "job_id": int(application.job_id),
        "candidate_id": int(application.candidate_id),
        "status": application.status,
        "applied_at": _iso(application.applied_at),
        "shortlisted_at": _iso(application.shortlisted_at),
        "rejected_at": _iso(application.rejected_at),
    }


class ApplicationStore:
    """
    Application lookups for work that outlives a single request.

    Every call opens and closes its own Session. Calls are serialized: with the
    in-memory default every Session shares one SQLite connection.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory
        self._lock = threading.Lock()

    def get_job(self, job_id: int) -> dict | None:
        with self._lock, self._session_factory() as db:
            job = get_job(db, job_id)
            if not job:
                return None
            return {"id": int(job.id), "hr_id": int(job.hr_id), "title": job.title, "location": job.location}

    def swipe_candidates_for_job(self, job_id: int) -> list[CandidateSummary]:
        with self._lock, self._session_factory() as db:
            return swipe_candidates_for_job(db, job_id)

    def applications_by_job(self, job_id: int) -> list[dict]:
        with self._lock, self._session_factory() as db:
            return [application_payload(a) for a in applications_by_job(db, job_id)]

    def set_application_status(self, application_id: int, status: str) -> dict:
        with self._lock, self._session_factory() as db:
            return application_payload(set_application_status(db, application_id, status))
