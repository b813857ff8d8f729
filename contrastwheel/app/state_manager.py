"""Centralized state mutation and change notification.

StateManager mediates every AppState mutation coming from the UI, providing:
- A single update path that delegates to ``app.actions``
- Per-key subscriber notifications
- Rejection of invalid input without notifying anyone

Everything runs synchronously on the caller's thread: ``update()`` returns
only after all subscribers (including the render orchestrator) have run.
"""

from __future__ import annotations

import enum
import logging
from typing import Any, Callable

from contrastwheel.app import actions
from contrastwheel.app.core import AppState

logger = logging.getLogger(__name__)


class StateKey(enum.Enum):
    """Keys for managed state."""

    # Background (two-stage: pending text, then confirmed color)
    PENDING_BACKGROUND = "pending_background"
    APPLIED_BACKGROUND = "applied_background"

    # Field input
    LIGHTNESS = "lightness"

    # Interaction state
    SELECTION = "selection"

    # Derived output (set by the orchestrator, notify-only)
    READOUT = "readout"


class StateManager:
    """Mutation and notification hub for AppState.

    Subscriber callback signature: ``(key, value)`` where ``value`` is the
    state after the update (e.g. the applied RGB, not the submitted text).
    """

    # Keys whose change invalidates the generated field.
    REGENERATE_KEYS: frozenset[StateKey] = frozenset({
        StateKey.APPLIED_BACKGROUND,
        StateKey.LIGHTNESS,
    })

    def __init__(self, state: AppState) -> None:
        self._state = state
        self._subscribers: dict[StateKey, list[Callable]] = {}

    @property
    def state(self) -> AppState:
        return self._state

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def update(self, key: StateKey, value: Any) -> bool:
        """Request a state change.

        Args:
            key: Which value to change.
            value: PENDING_BACKGROUND: text; APPLIED_BACKGROUND: hex text or
                RGB; LIGHTNESS: fraction; SELECTION: (x, y); READOUT: Readout.

        Returns:
            False if the value was rejected (state unchanged, no notification)
        """
        if not self._apply_update(key, value):
            return False
        self._notify(key, self._current(key))
        return True

    def confirm_background(self) -> bool:
        """Apply the pending background text."""
        return self.update(StateKey.APPLIED_BACKGROUND, self._state.pending_background)

    def subscribe(self, key: StateKey, callback: Callable) -> None:
        """Register *callback* for notifications when *key* changes."""
        self._subscribers.setdefault(key, []).append(callback)

    def unsubscribe(self, key: StateKey, callback: Callable) -> None:
        """Remove a previously registered callback."""
        callbacks = self._subscribers.get(key)
        if callbacks:
            try:
                callbacks.remove(callback)
            except ValueError:
                pass

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _apply_update(self, key: StateKey, value: Any) -> bool:
        state = self._state
        if key is StateKey.PENDING_BACKGROUND:
            actions.set_pending_background(state, value)
            return True
        if key is StateKey.APPLIED_BACKGROUND:
            return actions.apply_background(state, value)
        if key is StateKey.LIGHTNESS:
            return actions.set_lightness(state, value)
        if key is StateKey.SELECTION:
            x, y = value
            actions.set_selection(state, int(x), int(y))
            return True
        if key is StateKey.READOUT:
            state.readout = value
            return True
        raise ValueError(f"Unknown state key {key!r}")

    def _current(self, key: StateKey) -> Any:
        state = self._state
        return {
            StateKey.PENDING_BACKGROUND: state.pending_background,
            StateKey.APPLIED_BACKGROUND: state.applied_background,
            StateKey.LIGHTNESS: state.lightness,
            StateKey.SELECTION: state.selection,
            StateKey.READOUT: state.readout,
        }[key]

    def _notify(self, key: StateKey, value: Any) -> None:
        """Call all subscribers registered for *key*, isolating exceptions."""
        callbacks = self._subscribers.get(key)
        if not callbacks:
            return
        for cb in list(callbacks):
            try:
                cb(key, value)
            except Exception:
                logger.warning(
                    "Subscriber %r raised for %s", cb, key, exc_info=True,
                )
