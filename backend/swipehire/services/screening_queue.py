"""
Screening queue: the ordered worklist of applicants for one job.

Candidates keep their original order for the whole session. A decision marks
a candidate processed, bumps the matching counter and writes the new status
to the candidate's application. Deciding on an already processed candidate
does nothing, so a handler that fires twice can't double count.
"""
import logging
from typing import Protocol

from ..schemas.candidate import CandidateSummary
from ..utils.error_handlers import NotFoundError, get_error_message
from .gesture import Decision

logger = logging.getLogger(__name__)

_STATUS_FOR_DECISION = {
    Decision.ACCEPT: "shortlisted",
    Decision.REJECT: "rejected",
}


class ApplicationLookup(Protocol):
    def get_job(self, job_id: int) -> dict | None: ...

    def swipe_candidates_for_job(self, job_id: int) -> list[CandidateSummary]: ...

    def applications_by_job(self, job_id: int) -> list[dict]: ...

    def set_application_status(self, application_id: int, status: str) -> dict: ...


class ScreeningQueue:
    def __init__(self, store: ApplicationLookup, job_id: int):
        job = store.get_job(job_id)
        if job is None:
            raise NotFoundError(get_error_message("job_not_found"), details={"job_id": job_id})
        candidates = store.swipe_candidates_for_job(job_id)

        self._store = store
        self.job_id = int(job_id)
        self.job = job
        self.candidates: tuple[CandidateSummary, ...] = tuple(candidates)
        self._index_by_id = {c.id: i for i, c in enumerate(self.candidates)}
        self._processed: set[int] = set()
        self.shortlisted = 0
        self.rejected = 0

    # -------------------- reads --------------------

    def current(self) -> CandidateSummary | None:
        for index, candidate in enumerate(self.candidates):
            if index not in self._processed:
                return candidate
        return None

    def remaining(self) -> list[CandidateSummary]:
        """Unprocessed candidates by ascending original index (the card stack, top first)."""
        return [c for i, c in enumerate(self.candidates) if i not in self._processed]

    def stack(self, limit: int | None = None) -> list[CandidateSummary]:
        upcoming = self.remaining()
        return upcoming if limit is None else upcoming[: max(limit, 0)]

    @property
    def processed_count(self) -> int:
        return len(self._processed)

    def is_processed(self, candidate_id: int) -> bool:
        index = self._index_by_id.get(candidate_id)
        return index is not None and index in self._processed

    def is_complete(self) -> bool:
        return len(self._processed) == len(self.candidates)

    @property
    def progress_percent(self) -> float:
        if not self.candidates:
            return 100.0
        return round(len(self._processed) / len(self.candidates) * 100.0, 2)

    def stats(self) -> dict[str, int]:
        return {"shortlisted": self.shortlisted, "rejected": self.rejected}

    # -------------------- writes --------------------

    def decide(self, candidate_id: int, decision: Decision | str) -> bool:
        """
        Apply an accept/reject decision to a candidate.

        Returns True when the decision was recorded, False when it was a no-op
        (cancel, unknown candidate, or candidate already processed).
        """
        try:
            decision = Decision(decision)
        except ValueError:
            logger.debug("Ignoring unknown decision %r", decision)
            return False

        status = _STATUS_FOR_DECISION.get(decision)
        if status is None:
            return False

        index = self._index_by_id.get(candidate_id)
        if index is None:
            logger.debug("Job %s: candidate %s is not in this queue", self.job_id, candidate_id)
            return False
        if index in self._processed:
            logger.debug("Job %s: candidate %s already decided", self.job_id, candidate_id)
            return False

        application = self._find_application(candidate_id)
        if application is not None:
            self._store.set_application_status(application["id"], status)
        else:
            logger.warning("Job %s: no application found for candidate %s", self.job_id, candidate_id)

        self._processed.add(index)
        if decision is Decision.ACCEPT:
            self.shortlisted += 1
        else:
            self.rejected += 1
        logger.info(
            "Job %s: candidate %s %s (%d/%d processed)",
            self.job_id,
            candidate_id,
            status,
            len(self._processed),
            len(self.candidates),
        )
        return True

    def decide_current(self, decision: Decision | str) -> bool:
        candidate = self.current()
        if candidate is None:
            return False
        return self.decide(candidate.id, decision)

    def reset(self) -> None:
        """Review again: every candidate back in the queue, counters to zero."""
        self._processed.clear()
        self.shortlisted = 0
        self.rejected = 0
        logger.info("Job %s: screening reset (%d candidates)", self.job_id, len(self.candidates))

    def _find_application(self, candidate_id: int) -> dict | None:
        for application in self._store.applications_by_job(self.job_id):
            if int(application["candidate_id"]) == int(candidate_id):
                return application
        return None
