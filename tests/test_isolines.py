"""Tests for contrastwheel.isolines."""

import logging
import math

import numpy as np
import pytest

from contrastwheel.errors import InvalidThresholdError
from contrastwheel.field import WheelGeometry, generate_field
from contrastwheel.isolines import (
    boundary_masks,
    darken,
    extract_isolines,
    graded_isoline_strength,
    isoline_strength,
    normalize_levels,
    parse_levels,
    select_label_anchors,
)


def step_field(h=5, w=6, low=2.0, high=5.0, split=3):
    """Contrast field that jumps from low to high at column ``split``."""
    contrast = np.full((h, w), low)
    contrast[:, split:] = high
    return contrast


class TestLevels:

    def test_normalize_sorts_and_dedupes(self):
        assert normalize_levels([7, 3, 4.5, 3.0]) == (3.0, 4.5, 7.0)

    def test_normalize_drops_invalid(self, caplog):
        with caplog.at_level(logging.WARNING):
            levels = normalize_levels([4.5, 1.0, 0.5, float("nan"), float("inf"), "x", None])
        assert levels == (4.5,)
        assert "Ignoring" in caplog.text

    def test_parse(self):
        assert parse_levels("7, 3,4.5") == (3.0, 4.5, 7.0)

    def test_parse_ignores_empty_tokens(self):
        assert parse_levels("3,,4.5,") == (3.0, 4.5)

    @pytest.mark.parametrize("text", ["", " , ", "3,abc", "3,1", "0.5", "nan", "3,inf"])
    def test_parse_rejects(self, text):
        with pytest.raises(InvalidThresholdError):
            parse_levels(text)


class TestStrength:

    def test_default_is_full_strength(self):
        for level in (2.0, 3.0, 4.5, 7.0, 12.0):
            assert isoline_strength(level) == 1.0

    def test_graded_endpoints(self):
        assert graded_isoline_strength(2.0) == pytest.approx(0.22)
        assert graded_isoline_strength(12.0) == pytest.approx(0.85)

    def test_graded_is_linear_between(self):
        assert graded_isoline_strength(7.0) == pytest.approx(0.535)

    def test_graded_clamps(self):
        assert graded_isoline_strength(1.5) == pytest.approx(0.22)
        assert graded_isoline_strength(20.0) == pytest.approx(0.85)

    def test_graded_increases_with_level(self):
        values = [graded_isoline_strength(t) for t in (3.0, 4.5, 7.0)]
        assert values == sorted(values)


class TestBoundaryMasks:

    def test_horizontal_crossing(self):
        masks = boundary_masks(step_field(), [3.0])
        expected = np.zeros((5, 6), dtype=bool)
        expected[1:4, 2] = True
        np.testing.assert_array_equal(masks[3.0], expected)

    def test_vertical_crossing(self):
        contrast = np.full((6, 5), 2.0)
        contrast[3:, :] = 5.0
        masks = boundary_masks(contrast, [3.0])
        expected = np.zeros((6, 5), dtype=bool)
        expected[2, 1:4] = True
        np.testing.assert_array_equal(masks[3.0], expected)

    def test_level_outside_range_has_no_pixels(self):
        masks = boundary_masks(step_field(), [7.0])
        assert not masks[7.0].any()

    def test_border_excluded(self):
        # Crossing sits between row 0 and row 1 only
        contrast = np.full((5, 5), 5.0)
        contrast[0, :] = 2.0
        masks = boundary_masks(contrast, [3.0])
        assert not masks[3.0].any()

    def test_undefined_neighbors_skipped(self):
        contrast = step_field()
        contrast[2, 3] = np.nan
        mask = boundary_masks(contrast, [3.0])[3.0]
        assert not mask[2, 2]
        assert not mask[2, 3]
        assert mask[1, 2] and mask[3, 2]

    def test_one_mask_per_level(self):
        masks = boundary_masks(step_field(), [3.0, 4.5])
        assert set(masks) == {3.0, 4.5}
        np.testing.assert_array_equal(masks[3.0], masks[4.5])

    def test_tiny_field(self):
        masks = boundary_masks(np.ones((2, 2)), [3.0])
        assert masks[3.0].shape == (2, 2)
        assert not masks[3.0].any()


class TestDarken:

    def test_full_strength_blackens_rgb_keeps_alpha(self):
        rgba = np.full((3, 3, 4), 200, dtype=np.uint8)
        mask = np.zeros((3, 3), dtype=bool)
        mask[1, 1] = True
        darken(rgba, mask, 1.0)
        assert tuple(rgba[1, 1]) == (0, 0, 0, 200)
        assert tuple(rgba[0, 0]) == (200, 200, 200, 200)

    def test_partial_strength_rounds_half_up(self):
        rgba = np.zeros((1, 2, 4), dtype=np.uint8)
        rgba[0, 0] = (255, 101, 1, 255)
        rgba[0, 1] = (10, 20, 30, 255)
        mask = np.array([[True, False]])
        darken(rgba, mask, 0.5)
        assert tuple(rgba[0, 0]) == (128, 51, 1, 255)
        assert tuple(rgba[0, 1]) == (10, 20, 30, 255)

    def test_zero_strength_is_noop(self):
        rgba = np.full((2, 2, 4), 90, dtype=np.uint8)
        darken(rgba, np.ones((2, 2), dtype=bool), 0.0)
        assert np.all(rgba == 90)


class TestLabelAnchors:

    @pytest.fixture
    def geometry(self):
        return WheelGeometry.for_canvas(101, 101)

    def test_first_row_major_pixel_in_annulus(self, geometry):
        mask = np.zeros((101, 101), dtype=bool)
        mask[50, 50] = True   # center, inside inner radius
        mask[50, 97] = True   # near the rim, outside outer radius
        mask[50, 70] = True   # distance 20
        mask[30, 50] = True   # distance 20, earlier row
        anchors = select_label_anchors({3.0: mask}, geometry)
        assert anchors == {3.0: (50, 30)}

    def test_no_candidate_no_anchor(self, geometry):
        mask = np.zeros((101, 101), dtype=bool)
        mask[50, 50] = True
        assert select_label_anchors({4.5: mask}, geometry) == {}

    def test_rim_excluded(self, geometry):
        mask = np.zeros((101, 101), dtype=bool)
        mask[50, 2] = True  # distance 48, outside 0.92 R
        assert select_label_anchors({7.0: mask}, geometry) == {}


class TestExtractIsolines:

    @pytest.fixture
    def wheel(self):
        return generate_field((255, 255, 255), 0.5, 121, 121)

    def test_base_untouched(self, wheel):
        before = wheel.rgba.copy()
        extract_isolines(wheel, (3.0, 4.5, 7.0))
        np.testing.assert_array_equal(wheel.rgba, before)

    def test_boundary_pixels_darkened(self, wheel):
        overlay = extract_isolines(wheel, (3.0, 4.5, 7.0))
        assert overlay.levels == (3.0, 4.5, 7.0)
        union = np.zeros(wheel.contrast.shape, dtype=bool)
        for level in overlay.levels:
            union |= overlay.masks[level]
        assert union.any()
        assert np.all(overlay.rgba[union, :3] == 0)
        np.testing.assert_array_equal(overlay.rgba[union, 3], wheel.rgba[union, 3])
        np.testing.assert_array_equal(overlay.rgba[~union], wheel.rgba[~union])

    def test_boundaries_only_inside_wheel(self, wheel):
        overlay = extract_isolines(wheel, (3.0, 4.5, 7.0))
        for mask in overlay.masks.values():
            assert not (mask & ~wheel.inside).any()

    def test_anchors_lie_on_boundary_in_annulus(self, wheel):
        overlay = extract_isolines(wheel, (3.0, 4.5, 7.0))
        assert 3.0 in overlay.anchors
        geom = wheel.geometry
        for level, (x, y) in overlay.anchors.items():
            assert overlay.masks[level][y, x]
            d = geom.pixel_distance(x, y)
            assert 0.25 * geom.radius < d < 0.92 * geom.radius

    def test_boundary_pixels_straddle_level(self, wheel):
        overlay = extract_isolines(wheel, (4.5,))
        c = wheel.contrast
        ys, xs = np.nonzero(overlay.masks[4.5])
        for y, x in zip(ys, xs):
            here = c[y, x] >= 4.5
            assert here != (c[y, x + 1] >= 4.5) or here != (c[y + 1, x] >= 4.5)

    def test_graded_strength_is_lighter(self, wheel):
        full = extract_isolines(wheel, (3.0,))
        graded = extract_isolines(wheel, (3.0,), strength=graded_isoline_strength)
        mask = full.masks[3.0]
        assert graded.rgba[mask, :3].astype(int).sum() > full.rgba[mask, :3].astype(int).sum()

    def test_levels_normalized(self, wheel):
        overlay = extract_isolines(wheel, [7.0, 3.0, 0.5])
        assert overlay.levels == (3.0, 7.0)
        assert set(overlay.masks) == {3.0, 7.0}

    def test_uniform_field_has_no_isolines(self):
        wheel = generate_field((250, 250, 250), 0.0, 61, 61)
        overlay = extract_isolines(wheel, (3.0, 4.5, 7.0))
        assert all(not m.any() for m in overlay.masks.values())
        assert overlay.anchors == {}
        np.testing.assert_array_equal(overlay.rgba, wheel.rgba)
        assert math.isfinite(wheel.contrast[30, 30])
