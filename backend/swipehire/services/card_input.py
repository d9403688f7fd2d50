import logging

from ..schemas.screening import CardEvent
from .gesture import Decision, GestureInterpreter

logger = logging.getLogger(__name__)

PRESS_EVENTS = {"pointerdown", "touchstart"}
MOVE_EVENTS = {"pointermove", "touchmove"}
RELEASE_EVENTS = {"pointerup", "touchend"}

KEY_DECISIONS = {
    "ArrowRight": Decision.ACCEPT,
    "ArrowLeft": Decision.REJECT,
}


def dispatch_event(interpreter: GestureInterpreter, event: CardEvent) -> Decision | None:
    """Feed one raw UI event to the card's interpreter; returns the decision it produced, if any."""
    kind = event.type

    if kind in PRESS_EVENTS:
        interpreter.begin(event.x, event.y, interactive_target=event.target != "card")
        return None

    if kind in MOVE_EVENTS:
        interpreter.move(event.x, event.y)
        return None

    if kind in RELEASE_EVENTS:
        return interpreter.end()

    if kind == "pointerleave":
        return interpreter.leave()

    if kind == "keydown":
        decision = KEY_DECISIONS.get(event.key or "")
        if decision is None:
            return None
        return interpreter.accept() if decision is Decision.ACCEPT else interpreter.reject()

    if kind == "click":
        if event.action == "accept":
            return interpreter.accept()
        if event.action == "reject":
            return interpreter.reject()
        return None

    logger.debug("Ignoring card event %s", kind)
    return None
