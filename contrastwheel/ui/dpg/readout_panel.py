"""Readout panel: hex echoes, contrast ratio, guideline badges and previews."""

from __future__ import annotations

from typing import Optional

from contrastwheel import defaults
from contrastwheel.app.core import Readout
from contrastwheel.app.state_manager import StateKey, StateManager
from contrastwheel.colorspace import hex_to_rgb, rgb_to_hex

try:
    import dearpygui.dearpygui as dpg  # type: ignore
except ImportError:
    dpg = None


PASS_COLOR = (0, 200, 0, 31)
FAIL_COLOR = (200, 0, 0, 31)

SWATCH_SIZE = 28


def badge_text(ok: bool) -> str:
    return "PASS" if ok else "FAIL"


def badge_color(ok: bool) -> tuple[int, int, int, int]:
    return PASS_COLOR if ok else FAIL_COLOR


def badge_tag(level: float) -> str:
    return f"badge_{str(level).replace('.', '_')}"


def _rgba(hex_color: str) -> tuple[int, int, int, int]:
    rgb = hex_to_rgb(hex_color)
    if rgb is None:
        return (0, 0, 0, 0)
    return (rgb.r, rgb.g, rgb.b, 255)


class ReadoutPanel:
    """Display collaborators for everything the state manager reports."""

    def __init__(self, manager: StateManager):
        self.manager = manager
        self.levels = manager.state.settings.guideline_levels
        self._preview_themes: dict[str, dict[str, int]] = {}
        self._badge_themes: dict[float, int] = {}
        self.built: bool = False

        manager.subscribe(StateKey.APPLIED_BACKGROUND, self._on_applied_background)
        manager.subscribe(StateKey.PENDING_BACKGROUND, self._on_pending_background)
        manager.subscribe(StateKey.LIGHTNESS, self._on_lightness)
        manager.subscribe(StateKey.READOUT, self._on_readout)

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------

    def build(self, parent) -> None:
        """Create readout widgets under *parent*."""
        if dpg is None:
            return
        state = self.manager.state

        with dpg.group(parent=parent):
            with dpg.group(horizontal=True):
                dpg.add_text("Background")
                with dpg.drawlist(width=SWATCH_SIZE, height=SWATCH_SIZE):
                    dpg.draw_rectangle((0, 0), (SWATCH_SIZE, SWATCH_SIZE), tag="bg_swatch",
                                       fill=_rgba(state.applied_background_hex),
                                       color=(128, 128, 128, 255))
                dpg.add_text(state.applied_background_hex, tag="bg_applied_hex")
            with dpg.group(horizontal=True):
                dpg.add_text("Pending")
                dpg.add_text(state.pending_background, tag="bg_pending_hex")

            dpg.add_spacer(height=6)
            with dpg.group(horizontal=True):
                dpg.add_text("Foreground")
                with dpg.drawlist(width=SWATCH_SIZE, height=SWATCH_SIZE):
                    dpg.draw_rectangle((0, 0), (SWATCH_SIZE, SWATCH_SIZE), tag="fg_swatch",
                                       fill=_rgba(rgb_to_hex(state.selection.rgb)),
                                       color=(128, 128, 128, 255))
                dpg.add_text(rgb_to_hex(state.selection.rgb), tag="fg_hex")
            with dpg.group(horizontal=True):
                dpg.add_text("Contrast")
                dpg.add_text("-", tag="contrast_text")

            with dpg.group(horizontal=True):
                for level in self.levels:
                    dpg.add_text(f"{level:g}:1")
                    dpg.add_button(label="----", tag=badge_tag(level), width=48)
                    self._badge_themes[level] = self._make_badge_theme(level)

            dpg.add_spacer(height=6)
            self._build_preview("preview_sans", defaults.PREVIEW_SANS_TEXT)
            self._build_preview("preview_serif", defaults.PREVIEW_SERIF_TEXT)
        self.built = True

    def _make_badge_theme(self, level: float) -> int:
        with dpg.theme() as theme:
            with dpg.theme_component(dpg.mvButton):
                dpg.add_theme_color(dpg.mvThemeCol_Button, FAIL_COLOR, tag=f"{badge_tag(level)}_bg")
        dpg.bind_item_theme(badge_tag(level), theme)
        return theme

    def _build_preview(self, tag: str, text: str) -> None:
        with dpg.theme() as theme:
            with dpg.theme_component(dpg.mvAll):
                bg = dpg.add_theme_color(dpg.mvThemeCol_ChildBg, (250, 250, 250, 255),
                                         category=dpg.mvThemeCat_Core)
                fg = dpg.add_theme_color(dpg.mvThemeCol_Text, (0, 0, 0, 255),
                                         category=dpg.mvThemeCat_Core)
        with dpg.child_window(tag=tag, height=44, border=False):
            dpg.add_text(text, wrap=320)
        dpg.bind_item_theme(tag, theme)
        self._preview_themes[tag] = {"bg": bg, "fg": fg}

    # ------------------------------------------------------------------
    # Subscribers
    # ------------------------------------------------------------------

    def _on_applied_background(self, key: StateKey, value) -> None:
        if dpg is None or not self.built:
            return
        hex_color = rgb_to_hex(value)
        dpg.set_value("bg_applied_hex", hex_color)
        dpg.configure_item("bg_swatch", fill=_rgba(hex_color))

    def _on_pending_background(self, key: StateKey, value: str) -> None:
        if dpg is None or not self.built:
            return
        dpg.set_value("bg_pending_hex", value)

    def _on_lightness(self, key: StateKey, value: float) -> None:
        if dpg is None or not self.built:
            return
        dpg.set_value("lightness_value", f"{self.manager.state.lightness_percent}")

    def _on_readout(self, key: StateKey, readout: Optional[Readout]) -> None:
        if dpg is None or not self.built or readout is None:
            return
        dpg.set_value("fg_hex", readout.foreground_hex)
        dpg.configure_item("fg_swatch", fill=_rgba(readout.foreground_hex))
        dpg.set_value("contrast_text", readout.contrast_text)

        for level, ok in readout.passes.items():
            tag = badge_tag(level)
            if not dpg.does_item_exist(tag):
                continue
            dpg.configure_item(tag, label=badge_text(ok))
            dpg.set_value(f"{tag}_bg", badge_color(ok))

        for tag, (bg_hex, fg_hex) in zip(("preview_sans", "preview_serif"), readout.previews):
            theme_items = self._preview_themes.get(tag)
            if theme_items is None:
                continue
            dpg.set_value(theme_items["bg"], _rgba(bg_hex))
            dpg.set_value(theme_items["fg"], _rgba(fg_hex))
