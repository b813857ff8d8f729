"""Canvas interaction controller - pointer drag state machine."""

from __future__ import annotations

import enum
import logging
from typing import Callable, Optional, Tuple

from contrastwheel.app.state_manager import StateKey, StateManager
from contrastwheel.sampling import CanvasRect, PointerEvent, canvas_point_from_event

logger = logging.getLogger(__name__)

try:
    import dearpygui.dearpygui as dpg  # type: ignore
except ImportError:
    dpg = None


class DragMode(enum.Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


class CanvasController:
    """Turns pointer events into selection updates.

    Idle -> Dragging on pointer-down over the canvas; Dragging -> Idle on
    pointer-up or cancel. While dragging the pointer is captured: moves keep
    updating the selection even outside the canvas (they are clamped onto the
    wheel). Moves while idle are ignored.
    """

    def __init__(self, manager: StateManager, rect_provider: Optional[Callable[[], Optional[CanvasRect]]] = None):
        self.manager = manager
        self.rect_provider = rect_provider

        self.mode: DragMode = DragMode.IDLE
        self.captured_pointer: Optional[int] = None

        # Per-frame polling state (Dear PyGui)
        self.mouse_down_last: bool = False
        self.mouse_pos_last: Tuple[float, float] = (0.0, 0.0)

    @property
    def drag_active(self) -> bool:
        return self.mode is DragMode.DRAGGING

    # ------------------------------------------------------------------
    # Pointer events
    # ------------------------------------------------------------------

    def on_pointer_down(self, event: PointerEvent, rect: CanvasRect) -> bool:
        """Start dragging if the pointer went down over the canvas."""
        pos = event.client_position()
        if pos is None or not rect.contains(*pos):
            return False
        self.mode = DragMode.DRAGGING
        self.captured_pointer = event.pointer_id
        self._select(event, rect)
        return True

    def on_pointer_move(self, event: PointerEvent, rect: CanvasRect) -> bool:
        """Update the selection while dragging; ignored when idle."""
        if self.mode is not DragMode.DRAGGING:
            return False
        return self._select(event, rect)

    def on_pointer_up(self, event: Optional[PointerEvent] = None) -> None:
        self.mode = DragMode.IDLE
        self.captured_pointer = None

    def on_pointer_cancel(self) -> None:
        if self.drag_active:
            logger.debug("Drag cancelled (pointer %s)", self.captured_pointer)
        self.mode = DragMode.IDLE
        self.captured_pointer = None

    def _select(self, event: PointerEvent, rect: CanvasRect) -> bool:
        point = canvas_point_from_event(event, rect, self.manager.state.settings.canvas_size)
        if point is None:
            return False
        return self.manager.update(StateKey.SELECTION, point)

    # ------------------------------------------------------------------
    # Dear PyGui polling
    # ------------------------------------------------------------------

    def poll_mouse(self) -> None:
        """Translate this frame's mouse state into pointer events."""
        if dpg is None or self.rect_provider is None:
            return
        rect = self.rect_provider()
        if rect is None:
            return

        if self.drag_active and dpg.is_key_pressed(dpg.mvKey_Escape):
            self.on_pointer_cancel()
            self.mouse_down_last = True  # Stay idle until the button is released
            return

        mouse_down = dpg.is_mouse_button_down(dpg.mvMouseButton_Left)
        mouse_x, mouse_y = dpg.get_mouse_pos(local=False)
        event = PointerEvent(client_x=mouse_x, client_y=mouse_y)

        if mouse_down and not self.mouse_down_last:
            self.on_pointer_down(event, rect)
        elif mouse_down and (mouse_x, mouse_y) != self.mouse_pos_last:
            self.on_pointer_move(event, rect)
        elif not mouse_down and self.mouse_down_last:
            self.on_pointer_up(event)

        self.mouse_down_last = mouse_down
        self.mouse_pos_last = (mouse_x, mouse_y)

