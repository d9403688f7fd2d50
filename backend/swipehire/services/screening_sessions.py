import logging
from dataclasses import dataclass
from uuid import uuid4

from ..config import SWIPE_THRESHOLD
from ..schemas.screening import CardEvent
from .card_input import dispatch_event
from .gesture import Decision, GestureInterpreter
from .screening_queue import ApplicationLookup, ScreeningQueue

logger = logging.getLogger(__name__)

STACK_PREVIEW = 3


@dataclass
class ScreeningSession:
    id: str
    owner_id: int
    queue: ScreeningQueue
    gesture: GestureInterpreter
    # Candidate the gesture state belongs to.
    card_id: int | None = None
    last_decision: Decision | None = None

    def sync_card(self) -> None:
        current = self.queue.current()
        current_id = current.id if current else None
        if current_id != self.card_id:
            self.gesture.reset()
            self.card_id = current_id

    def handle_event(self, event: CardEvent) -> Decision | None:
        """Route one input event to the top card. Events after the last card are ignored."""
        self.sync_card()
        if self.card_id is None:
            return None

        decision = dispatch_event(self.gesture, event)
        if decision in (Decision.ACCEPT, Decision.REJECT):
            self.queue.decide(self.card_id, decision)
            self.sync_card()
        if decision is not None:
            self.last_decision = decision
        return decision

    def decide(self, candidate_id: int, decision: Decision | str) -> bool:
        recorded = self.queue.decide(candidate_id, decision)
        if recorded:
            self.last_decision = Decision(decision)
        self.sync_card()
        return recorded

    def reset(self) -> None:
        self.queue.reset()
        self.gesture.reset()
        self.card_id = None
        self.last_decision = None
        self.sync_card()

    def public_view(self, stack_limit: int = STACK_PREVIEW) -> dict:
        queue = self.queue
        current = queue.current()
        total = len(queue.candidates)
        return {
            "session_id": self.id,
            "job_id": queue.job_id,
            "total": total,
            "remaining": total - queue.processed_count,
            "processed": queue.processed_count,
            "progress_percent": queue.progress_percent,
            "complete": queue.is_complete(),
            "stats": queue.stats(),
            "current": current,
            "stack": queue.stack(stack_limit),
            "gesture": self.gesture.feedback(),
        }


class ScreeningSessionRegistry:
    """Open screening sessions for one application instance."""

    def __init__(self, store: ApplicationLookup, *, threshold: float = SWIPE_THRESHOLD):
        self._store = store
        self._threshold = threshold
        self._sessions: dict[str, ScreeningSession] = {}

    def open(self, *, job_id: int, owner_id: int) -> ScreeningSession:
        """Start screening a job; replaces the owner's previous session for that job."""
        queue = ScreeningQueue(self._store, job_id)
        stale = [
            sid
            for sid, s in self._sessions.items()
            if s.owner_id == int(owner_id) and s.queue.job_id == int(job_id)
        ]
        for sid in stale:
            self.discard(sid)
        session = ScreeningSession(
            id=uuid4().hex,
            owner_id=int(owner_id),
            queue=queue,
            gesture=GestureInterpreter(threshold=self._threshold),
        )
        session.sync_card()
        self._sessions[session.id] = session
        logger.info(
            "Opened screening session %s for job %s (%d candidates)",
            session.id,
            job_id,
            len(queue.candidates),
        )
        return session

    def get(self, session_id: str) -> ScreeningSession | None:
        return self._sessions.get(session_id)

    def discard(self, session_id: str) -> bool:
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        logger.info("Closed screening session %s", session_id)
        return True

    def __len__(self) -> int:
        return len(self._sessions)
