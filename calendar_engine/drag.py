"""
Drag-to-reschedule interaction for sessions on the time grid.

The interaction is a small state machine::

    IDLE -> PENDING -> DRAGGING -> COMMITTING | CANCELLED -> IDLE

A press starts a short hold timer. Releasing before it fires is a click.
Once the timer fires the session follows the pointer, snapped to the grid, and
releasing it at a new time issues exactly one reschedule mutation.

The machine owns at most one timer handle and one ``ListenerScope``; every
exit path cancels the first and releases the second.
"""

import logging
from enum import Enum

from .conf import get_engine_settings
from .styles import StatusKind, status_kind
from .time_grid import TimeGridMapper, format_time, parse_time
from .types import CompletedMove, DragState

logger = logging.getLogger(__name__)

POINTER_MOVE = 'pointermove'
POINTER_UP = 'pointerup'
KEY_DOWN = 'keydown'

ESCAPE = 'Escape'


class DragPhase(Enum):
    IDLE = 'idle'
    PENDING = 'pending'
    DRAGGING = 'dragging'
    COMMITTING = 'committing'
    CANCELLED = 'cancelled'


class DropOutcome(Enum):
    IGNORED = 'ignored'
    CLICK = 'click'
    UNCHANGED = 'unchanged'
    COMMITTED = 'committed'
    FAILED = 'failed'


class EventRegistry:
    """Listener registry keyed by event kind."""

    def __init__(self):
        self._listeners = {}

    def add_listener(self, kind, handler):
        self._listeners.setdefault(kind, []).append(handler)

    def remove_listener(self, kind, handler):
        handlers = self._listeners.get(kind, [])
        if handler in handlers:
            handlers.remove(handler)

    def listener_count(self, kind=None):
        if kind is not None:
            return len(self._listeners.get(kind, []))
        return sum(len(handlers) for handlers in self._listeners.values())

    def dispatch(self, kind, *args, **kwargs):
        for handler in list(self._listeners.get(kind, [])):
            handler(*args, **kwargs)


class ListenerScope:
    """Listeners installed together and removed together."""

    def __init__(self, events):
        self._events = events
        self._installed = []

    def add(self, kind, handler):
        self._events.add_listener(kind, handler)
        self._installed.append((kind, handler))

    def release(self):
        while self._installed:
            kind, handler = self._installed.pop()
            self._events.remove_listener(kind, handler)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()
        return False


def _noop(*args, **kwargs):
    return None


class DragRescheduler:
    """
    Drive one drag interaction at a time.

    Args:
        scheduler: object with ``call_later(delay, callback)`` returning a
            handle with ``cancel()``; an asyncio event loop qualifies
        events: listener registry (``add_listener`` / ``remove_listener``)
        commit: callable(session_id, new_time) performing the reschedule
        mapper: TimeGridMapper used to snap pointer positions
        notify: callable(message, level) for user-facing messages
        refresh: callable() that refetches calendar data
        on_click: callable(session) for presses that resolve as a click
        hold_ms: press duration that turns a press into a drag
    """

    def __init__(self, scheduler, events, commit, mapper=None, notify=None,
                 refresh=None, on_click=None, hold_ms=150):
        self.scheduler = scheduler
        self.events = events
        self.commit = commit
        self.mapper = mapper or TimeGridMapper()
        self.notify = notify or _noop
        self.refresh = refresh or _noop
        self.on_click = on_click or _noop
        self.hold_ms = hold_ms

        self.phase = DragPhase.IDLE
        self.drag_state = None
        self.last_move = None

        self._session = None
        self._top = 0.0
        self._timer = None
        self._scope = None

    @classmethod
    def from_settings(cls, scheduler, events, commit, **kwargs):
        kwargs.setdefault('mapper', TimeGridMapper.from_settings())
        kwargs.setdefault('hold_ms', get_engine_settings().drag_hold_ms)
        return cls(scheduler, events, commit, **kwargs)

    @property
    def is_dragging(self):
        return self.phase is DragPhase.DRAGGING

    def pointer_down(self, session, top):
        """
        Start a press on a session.

        Returns:
            True if the press was accepted, False if another interaction is live
        """
        if self.phase is not DragPhase.IDLE:
            return False

        self._session = session
        self._top = top
        self.phase = DragPhase.PENDING

        self._scope = ListenerScope(self.events)
        self._scope.add(POINTER_UP, self.pointer_up)
        self._timer = self.scheduler.call_later(self.hold_ms / 1000, self._hold_elapsed)
        return True

    def _hold_elapsed(self):
        self._timer = None
        if self.phase is not DragPhase.PENDING:
            return

        session = self._session
        kind = status_kind(session)
        if kind is not StatusKind.AVAILABLE:
            logger.debug("Session %s is %s; drag not started", session.pk, kind.value)
            self._reset()
            return

        original_time = parse_time(session.start_time)
        self.drag_state = DragState(
            session=session,
            original_time=original_time,
            original_top=self._top,
            current_top=self._top,
            proposed_time=original_time,
        )
        self.phase = DragPhase.DRAGGING
        self._scope.add(POINTER_MOVE, self.pointer_move)
        self._scope.add(KEY_DOWN, self.key_down)

    def pointer_move(self, client_y, grid_top, scroll_top=0):
        """
        Follow the pointer while dragging.

        Returns:
            The proposed time of day, or None when not dragging
        """
        if self.phase is not DragPhase.DRAGGING:
            return None

        relative_y = client_y - grid_top + scroll_top
        proposed = self.mapper.offset_to_time(max(0, relative_y))
        if proposed != self.drag_state.proposed_time:
            self.drag_state.proposed_time = proposed
            self.drag_state.current_top = self.mapper.time_to_offset(proposed)
        return proposed

    def key_down(self, key):
        if key == ESCAPE and self.phase is DragPhase.DRAGGING:
            self.cancel()

    def cancel(self):
        """Abandon the live interaction without issuing any mutation."""
        if self.phase is DragPhase.IDLE:
            return
        if self.phase is DragPhase.DRAGGING:
            self.phase = DragPhase.CANCELLED
            logger.debug("Drag of session %s cancelled", self._session.pk)
        self._reset()

    def teardown(self):
        """Release everything held by the interaction (e.g. on unmount)."""
        self.cancel()

    def pointer_up(self, *args, **kwargs):
        """
        Finish a press.

        Returns:
            DropOutcome describing what the release did
        """
        if self.phase is DragPhase.PENDING:
            session = self._session
            self._reset()
            self.on_click(session)
            return DropOutcome.CLICK

        if self.phase is not DragPhase.DRAGGING:
            return DropOutcome.IGNORED

        state = self.drag_state
        if not state.has_moved:
            self._reset()
            return DropOutcome.UNCHANGED

        self.phase = DragPhase.COMMITTING
        self._release()
        self.drag_state = None
        try:
            return self._commit_move(state)
        finally:
            self._reset()

    def _commit_move(self, state):
        session_id = state.session.pk
        new_time = state.proposed_time
        try:
            self.commit(session_id, new_time)
        except Exception:
            logger.exception("Failed to move session %s to %s", session_id, format_time(new_time))
            self.notify("Failed to move session", 'error')
            self.refresh()
            return DropOutcome.FAILED

        self.last_move = CompletedMove(
            session_id=session_id,
            previous_time=state.original_time,
            new_time=new_time,
        )
        logger.info("Session %s moved to %s", session_id, format_time(new_time))
        self.notify(f"Moved to {format_time(new_time)}", 'success')
        self.refresh()
        return DropOutcome.COMMITTED

    def undo(self):
        """
        Move the last committed session back to its previous time.

        Returns:
            True if the reverse mutation succeeded
        """
        move = self.last_move
        if move is None:
            return False

        self.last_move = None
        try:
            self.commit(move.session_id, move.previous_time)
        except Exception:
            logger.exception("Failed to undo move of session %s", move.session_id)
            self.notify("Failed to undo", 'error')
            return False
        finally:
            self.refresh()
        return True

    def _release(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if self._scope is not None:
            self._scope.release()
            self._scope = None

    def _reset(self):
        self._release()
        self._session = None
        self.drag_state = None
        self.phase = DragPhase.IDLE
