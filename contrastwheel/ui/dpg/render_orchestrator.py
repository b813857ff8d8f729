"""Render orchestrator: decides what to recompute when state changes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from contrastwheel.app import actions
from contrastwheel.app.state_manager import StateKey, StateManager
from contrastwheel.pipeline import compose_display, perform_render

if TYPE_CHECKING:
    from contrastwheel.ui.dpg.texture_manager import TextureManager

logger = logging.getLogger(__name__)


class RenderOrchestrator:
    """Sequences field generation, isolines, labels, selection and marker.

    Background confirmation and lightness changes regenerate everything.
    Selection moves only re-resolve the selected color and redraw the
    marker on top of the existing labelled image.
    """

    def __init__(self, manager: StateManager, texture_manager: Optional["TextureManager"] = None):
        """Initialize orchestrator and subscribe to the keys it reacts to.

        Args:
            manager: State manager owning the AppState
            texture_manager: Display surface; None for headless use
        """
        self.manager = manager
        self.state = manager.state
        self.texture_manager = texture_manager

        # Number of full regenerations so far
        self.render_count: int = 0

        for key in StateManager.REGENERATE_KEYS:
            manager.subscribe(key, self._on_field_input)
        manager.subscribe(StateKey.SELECTION, self._on_selection)

    def _on_field_input(self, key: StateKey, value) -> None:
        self.regenerate()

    def _on_selection(self, key: StateKey, value) -> None:
        self.refresh_selection()

    def regenerate(self) -> None:
        """Rebuild the field, isolines and labels, then refresh the selection."""
        state = self.state
        settings = state.settings
        result = perform_render(
            state.applied_background,
            state.lightness,
            settings.canvas_size,
            settings.levels,
            min_ratio=settings.min_visible_ratio,
            strength=settings.strength_fn(),
        )
        # Swap in the complete result; readers never see a partial field.
        state.render = result
        state.field_dirty = False
        self.render_count += 1
        logger.debug("Regenerated wheel #%d", self.render_count)
        self.refresh_selection()

    def refresh_selection(self) -> None:
        """Re-clamp and re-sample the selection, push the readout, draw the marker."""
        state = self.state
        if state.render is None or state.field_dirty:
            self.regenerate()
            return

        readout = actions.resolve_selection(state)
        if readout is not None:
            self.manager.update(StateKey.READOUT, readout)

        sel = state.selection
        state.display = compose_display(state.render, sel.x, sel.y)
        if self.texture_manager is not None:
            self.texture_manager.upload_wheel(state.display)
