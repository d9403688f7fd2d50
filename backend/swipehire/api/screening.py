"""
Swipe screening over HTTP.

Handlers are `async def`: queue and gesture state is only ever touched from
the event loop thread.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.screening import CardEvent, ScreeningStateOut
from ..services.accounts import hr_profile_for
from ..services.applications import get_job
from ..services.gesture import Decision
from ..services.screening_sessions import ScreeningSession, ScreeningSessionRegistry
from ..utils.error_handlers import get_error_message
from ..utils.roles import hr_only

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/screening", tags=["Screening"])


class DecisionRequest(BaseModel):
    candidate_id: int
    decision: Decision


def get_registry(request: Request) -> ScreeningSessionRegistry:
    return request.app.state.screening_sessions


def _state(session: ScreeningSession) -> dict:
    return ScreeningStateOut.model_validate(session.public_view()).model_dump(mode="json")


def _owned_session(registry: ScreeningSessionRegistry, session_id: str, user: dict) -> ScreeningSession:
    session = registry.get(session_id)
    if session is None or session.owner_id != int(user.get("sub")):
        raise HTTPException(status_code=404, detail=get_error_message("screening_session_not_found"))
    return session


@router.post("/jobs/{job_id:int}", status_code=201)
async def start_screening(
    job_id: int,
    db: Session = Depends(get_db),
    user=Depends(hr_only),
    registry: ScreeningSessionRegistry = Depends(get_registry),
):
    job = get_job(db, job_id)
    if not job:
        raise HTTPException(status_code=404, detail=get_error_message("job_not_screenable"))
    hr = hr_profile_for(db, int(user.get("sub")))
    if job.hr_id != hr.id:
        raise HTTPException(status_code=403, detail="You can only screen candidates for your own jobs")

    session = registry.open(job_id=job_id, owner_id=int(user.get("sub")))
    return {
        "success": True,
        "job": {"id": job.id, "title": job.title, "location": job.location},
        "state": _state(session),
    }


@router.get("/{session_id}")
async def screening_state(
    session_id: str,
    user=Depends(hr_only),
    registry: ScreeningSessionRegistry = Depends(get_registry),
):
    session = _owned_session(registry, session_id, user)
    return {"success": True, "state": _state(session)}


@router.post("/{session_id}/events")
async def card_event(
    session_id: str,
    event: CardEvent,
    user=Depends(hr_only),
    registry: ScreeningSessionRegistry = Depends(get_registry),
):
    session = _owned_session(registry, session_id, user)
    decision = session.handle_event(event)
    return {
        "success": True,
        "decision": decision.value if decision else None,
        "state": _state(session),
    }


@router.post("/{session_id}/decisions")
async def decide(
    session_id: str,
    payload: DecisionRequest,
    user=Depends(hr_only),
    registry: ScreeningSessionRegistry = Depends(get_registry),
):
    session = _owned_session(registry, session_id, user)
    recorded = session.decide(payload.candidate_id, payload.decision)
    return {"success": True, "recorded": recorded, "state": _state(session)}


@router.post("/{session_id}/reset")
async def reset(
    session_id: str,
    user=Depends(hr_only),
    registry: ScreeningSessionRegistry = Depends(get_registry),
):
    session = _owned_session(registry, session_id, user)
    session.reset()
    return {"success": True, "state": _state(session)}


@router.delete("/{session_id}")
async def close(
    session_id: str,
    user=Depends(hr_only),
    registry: ScreeningSessionRegistry = Depends(get_registry),
):
    _owned_session(registry, session_id, user)
    registry.discard(session_id)
    return {"success": True, "closed": session_id}
