"""Dear PyGui application for the contrast wheel."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass, field
from typing import Optional, Sequence

from contrastwheel import defaults
from contrastwheel.app.core import AppState, WheelSettings
from contrastwheel.app.state_manager import StateKey, StateManager
from contrastwheel.colorspace import parse_hex_color, rgb_to_hex
from contrastwheel.errors import ColorError
from contrastwheel.isolines import parse_levels
from contrastwheel.sampling import CanvasRect
from contrastwheel.ui.dpg.canvas_controller import CanvasController
from contrastwheel.ui.dpg.readout_panel import ReadoutPanel
from contrastwheel.ui.dpg.render_orchestrator import RenderOrchestrator
from contrastwheel.ui.dpg.texture_manager import TextureManager

try:
    import dearpygui.dearpygui as dpg  # type: ignore
except ImportError:
    dpg = None

logger = logging.getLogger(__name__)


@dataclass
class ContrastWheelApp:
    """Coordinator for Dear PyGui widgets and the render pipeline."""

    state: AppState = field(default_factory=AppState)
    display_scale: float = 1.0

    canvas_image_id: Optional[int] = None
    viewport_created: bool = False

    def __post_init__(self) -> None:
        self.manager = StateManager(self.state)
        self.texture_manager = TextureManager(self.state.settings.canvas_size)
        self.readout_panel = ReadoutPanel(self.manager)
        self.render_orchestrator = RenderOrchestrator(self.manager, self.texture_manager)
        self.canvas_controller = CanvasController(self.manager, self.canvas_rect)

    def require_backend(self) -> None:
        if dpg is None:
            raise RuntimeError("Dear PyGui is not installed. Please `pip install dearpygui` to run the GUI.")

    # ------------------------------------------------------------------
    # Building the interface
    # ------------------------------------------------------------------
    def build(self) -> None:
        """Create viewport, windows, and widgets."""
        self.require_backend()
        dpg.create_context()
        # Callbacks run on the main loop, so every handler runs to completion on one thread.
        dpg.configure_app(manual_callback_management=True)
        self.texture_manager.create_registries()

        width, height = self.state.settings.canvas_size
        disp_w = int(width * self.display_scale)
        disp_h = int(height * self.display_scale)

        dpg.create_viewport(title="Contrast Wheel", width=disp_w + 420, height=max(disp_h + 60, 560))
        self.viewport_created = True

        with dpg.window(label="Wheel", tag="wheel_window", pos=(10, 10),
                        width=disp_w + 20, height=disp_h + 40, no_scrollbar=True):
            self.canvas_image_id = dpg.add_image(self.texture_manager.wheel_texture_id,
                                                 width=disp_w, height=disp_h)

        with dpg.window(label="Controls", tag="controls_window", pos=(disp_w + 40, 10),
                        width=370, height=-1, no_scroll_with_mouse=True) as controls:
            dpg.add_text("Background")
            with dpg.group(horizontal=True):
                dpg.add_input_text(tag="bg_input", default_value=self.state.pending_background,
                                   width=120, hint="#rrggbb", callback=self._on_pending_background)
                dpg.add_button(label="Apply", callback=self._on_confirm_background)
            dpg.add_spacer(height=6)
            with dpg.group(horizontal=True):
                dpg.add_text("Lightness")
                dpg.add_text(str(self.state.lightness_percent), tag="lightness_value")
                dpg.add_text("%")
            dpg.add_slider_int(tag="lightness_slider", min_value=0, max_value=100,
                               default_value=self.state.lightness_percent, width=300,
                               callback=self._on_lightness)
            dpg.add_separator()
            self.readout_panel.build(controls)

    # ------------------------------------------------------------------
    # Callbacks
    # ------------------------------------------------------------------
    def _on_pending_background(self, sender, app_data) -> None:
        self.manager.update(StateKey.PENDING_BACKGROUND, app_data)

    def _on_confirm_background(self, sender=None, app_data=None) -> None:
        if not self.manager.confirm_background():
            if dpg is not None and self.readout_panel.built:
                dpg.set_value("bg_pending_hex", f"{self.state.pending_background} (invalid)")

    def _on_lightness(self, sender, app_data) -> None:
        self.manager.update(StateKey.LIGHTNESS, float(app_data) / 100.0)

    def canvas_rect(self) -> Optional[CanvasRect]:
        """On-screen rectangle of the wheel image."""
        if dpg is None or self.canvas_image_id is None:
            return None
        rect_min = dpg.get_item_rect_min(self.canvas_image_id)
        rect_size = dpg.get_item_rect_size(self.canvas_image_id)
        if rect_min is None or rect_size is None:
            return None
        return CanvasRect(rect_min[0], rect_min[1], rect_size[0], rect_size[1])

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------
    def run(self) -> None:
        self.build()
        dpg.setup_dearpygui()
        dpg.show_viewport()
        self.render_orchestrator.regenerate()

        try:
            while dpg.is_dearpygui_running():
                dpg.run_callbacks(dpg.get_callback_queue())
                self.canvas_controller.poll_mouse()
                dpg.render_dearpygui_frame()
        finally:
            dpg.destroy_context()


def _hex_arg(text: str):
    try:
        return parse_hex_color(text)
    except ColorError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _levels_arg(text: str):
    try:
        return parse_levels(text)
    except ColorError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _size_arg(text: str) -> int:
    size = int(text)
    if not defaults.MIN_CANVAS_SIZE <= size <= defaults.MAX_CANVAS_SIZE:
        raise argparse.ArgumentTypeError(
            f"size must be between {defaults.MIN_CANVAS_SIZE} and {defaults.MAX_CANVAS_SIZE}"
        )
    return size


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="contrastwheel",
        description="Pick foreground colors that meet WCAG contrast against a background.",
    )
    parser.add_argument("--background", type=_hex_arg, default=defaults.DEFAULT_BACKGROUND_HEX,
                        help="initial background as #RRGGBB (default %(default)s)")
    parser.add_argument("--lightness", type=float, default=defaults.DEFAULT_LIGHTNESS,
                        help="initial HSL lightness in [0, 1] (default %(default)s)")
    parser.add_argument("--size", type=_size_arg, default=defaults.DEFAULT_CANVAS_SIZE[0],
                        help="wheel canvas size in pixels (default %(default)s)")
    parser.add_argument("--levels", type=_levels_arg, default=defaults.DEFAULT_ISOLINE_LEVELS,
                        help="comma-separated isoline contrast levels, each > 1 (default 3,4.5,7)")
    parser.add_argument("--graded-isolines", action="store_true",
                        help="shade isolines by level instead of drawing them black")
    parser.add_argument("--scale", type=float, default=1.0,
                        help="display scale of the wheel image (default %(default)s)")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def state_from_args(args: argparse.Namespace) -> AppState:
    """Build the initial AppState from parsed command-line options."""
    settings = WheelSettings(
        canvas_size=(args.size, args.size),
        levels=args.levels,
        graded_isolines=args.graded_isolines,
    )
    state = AppState(settings=settings)
    state.applied_background = args.background
    state.pending_background = rgb_to_hex(args.background)
    state.lightness = min(1.0, max(0.0, args.lightness))
    return state


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    app = ContrastWheelApp(state=state_from_args(args), display_scale=max(args.scale, 0.1))
    try:
        app.require_backend()
    except RuntimeError as exc:
        logger.error("%s", exc)
        return 1
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
