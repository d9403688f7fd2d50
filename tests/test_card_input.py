from backend.swipehire.schemas.screening import CardEvent
from backend.swipehire.services.card_input import dispatch_event
from backend.swipehire.services.gesture import Decision, GestureInterpreter


def _run(g: GestureInterpreter, *events: dict):
    return [dispatch_event(g, CardEvent(**e)) for e in events]


def test_pointer_drag_to_accept():
    g = GestureInterpreter(threshold=100)
    results = _run(
        g,
        {"type": "pointerdown", "x": 100, "y": 100},
        {"type": "pointermove", "x": 180, "y": 110},
        {"type": "pointermove", "x": 250, "y": 120},
        {"type": "pointerup"},
    )
    assert results == [None, None, None, Decision.ACCEPT]


def test_touch_drag_to_reject():
    g = GestureInterpreter(threshold=100)
    results = _run(
        g,
        {"type": "touchstart", "x": 200, "y": 50},
        {"type": "touchmove", "x": 60, "y": 50},
        {"type": "touchend"},
    )
    assert results[-1] is Decision.REJECT


def test_pointer_leave_mid_drag_resolves():
    g = GestureInterpreter(threshold=100)
    results = _run(
        g,
        {"type": "pointerdown", "x": 0, "y": 0},
        {"type": "pointermove", "x": 60, "y": 0},
        {"type": "pointerleave"},
    )
    assert results[-1] is Decision.CANCEL
    assert g.dx == 0.0


def test_drag_starting_on_link_is_ignored():
    g = GestureInterpreter(threshold=100)
    results = _run(
        g,
        {"type": "pointerdown", "x": 0, "y": 0, "target": "link"},
        {"type": "pointermove", "x": 300, "y": 0},
        {"type": "pointerup"},
    )
    assert results == [None, None, None]


def test_arrow_keys():
    g = GestureInterpreter()
    assert _run(g, {"type": "keydown", "key": "ArrowRight"}) == [Decision.ACCEPT]
    assert _run(g, {"type": "keydown", "key": "ArrowLeft"}) == [Decision.REJECT]
    assert _run(g, {"type": "keydown", "key": "Enter"}) == [None]


def test_button_clicks():
    g = GestureInterpreter()
    assert _run(g, {"type": "click", "target": "button", "action": "accept"}) == [Decision.ACCEPT]
    assert _run(g, {"type": "click", "target": "button", "action": "reject"}) == [Decision.REJECT]
    assert _run(g, {"type": "click", "target": "card"}) == [None]
