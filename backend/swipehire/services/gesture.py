"""
Swipe gesture interpreter for a single candidate card.

Turns pointer/touch samples into one of three decisions:

- accept: released with the card dragged right past the threshold
- reject: released with the card dragged left past the threshold
- cancel: released inside the threshold; the card snaps back to rest

Keyboard shortcuts and the card buttons skip drag tracking and call
`accept()` / `reject()` directly. Calls that make no sense in the current
state (moving before a drag started, releasing twice) are ignored.
"""
import logging
from enum import Enum
from typing import Callable

from ..config import SWIPE_THRESHOLD

logger = logging.getLogger(__name__)

# Degrees of tilt per 100 units of horizontal travel.
ROTATION_PER_100 = 5.0
# Horizontal travel at which the card would be fully transparent, before the floor applies.
FADE_DISTANCE = 500.0
MIN_OPACITY = 0.5


class Decision(str, Enum):
    ACCEPT = "accept"
    REJECT = "reject"
    CANCEL = "cancel"


class GestureInterpreter:
    def __init__(
        self,
        threshold: float = SWIPE_THRESHOLD,
        on_decision: Callable[[Decision], None] | None = None,
    ) -> None:
        if threshold <= 0:
            raise ValueError("Swipe threshold must be positive")
        self.threshold = float(threshold)
        self.on_decision = on_decision
        self.dx = 0.0
        self.dy = 0.0
        self.dragging = False
        self._origin_x = 0.0
        self._origin_y = 0.0

    # -------------------- analog path --------------------

    def begin(self, origin_x: float, origin_y: float, *, interactive_target: bool = False) -> bool:
        """Start tracking a drag. Returns False when the press is ignored."""
        if self.dragging:
            return False
        if interactive_target:
            # Presses on links/buttons inside the card are clicks, not drags.
            return False
        self.dragging = True
        # Continue from wherever the card currently sits.
        self._origin_x = float(origin_x) - self.dx
        self._origin_y = float(origin_y) - self.dy
        return True

    def move(self, current_x: float, current_y: float) -> None:
        if not self.dragging:
            return
        self.dx = float(current_x) - self._origin_x
        self.dy = float(current_y) - self._origin_y

    def end(self) -> Decision | None:
        """Resolve the drag. Returns None if no drag was in progress."""
        if not self.dragging:
            return None
        self.dragging = False

        if abs(self.dx) > self.threshold:
            decision = Decision.ACCEPT if self.dx > 0 else Decision.REJECT
        else:
            decision = Decision.CANCEL
            self.dx = 0.0
            self.dy = 0.0
        return self._emit(decision)

    def leave(self) -> Decision | None:
        """Pointer left the card surface; same rule as releasing it."""
        return self.end()

    # -------------------- digital path --------------------

    def accept(self) -> Decision:
        self.dragging = False
        return self._emit(Decision.ACCEPT)

    def reject(self) -> Decision:
        self.dragging = False
        return self._emit(Decision.REJECT)

    # -------------------- presentation --------------------

    @property
    def rotation(self) -> float:
        return (self.dx / 100.0) * ROTATION_PER_100

    @property
    def opacity(self) -> float:
        return max(1.0 - abs(self.dx) / FADE_DISTANCE, MIN_OPACITY)

    @property
    def hint(self) -> str | None:
        """Label shown once the card is halfway to a decision."""
        half = self.threshold * 0.5
        if self.dx > half:
            return "shortlist"
        if self.dx < -half:
            return "reject"
        return None

    def reset(self) -> None:
        """Back to rest, ready for the next card."""
        self.dx = 0.0
        self.dy = 0.0
        self.dragging = False
        self._origin_x = 0.0
        self._origin_y = 0.0

    def feedback(self) -> dict:
        return {
            "dx": self.dx,
            "dy": self.dy,
            "dragging": self.dragging,
            "rotation": self.rotation,
            "opacity": self.opacity,
            "hint": self.hint,
        }

    def _emit(self, decision: Decision) -> Decision:
        logger.debug("Gesture resolved: %s (dx=%.1f)", decision.value, self.dx)
        if self.on_decision is not None:
            self.on_decision(decision)
        return decision
