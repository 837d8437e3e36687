"""Tests for token_ramp.core.colour_space — LAB, ΔE, HSL and lerp helpers."""

import numpy as np
import pytest
from token_ramp.core.colour_space import (
    boost_color,
    darken_color,
    delta_e,
    hsl_to_rgb,
    lerp_color,
    lighten_color,
    parse_colour,
    rgb_array_to_lab,
    rgb_to_hsl,
    rgb_to_lab,
    to_hex,
)

SAMPLES = [
    (0.0, 0.0, 0.0),
    (1.0, 1.0, 1.0),
    (0.5, 0.5, 0.5),
    (0.2, 0.2, 0.2),
    (1.0, 0.0, 0.0),
    (0.0, 0.6, 0.3),
    (0.13, 0.45, 0.87),
    (0.9, 0.85, 0.1),
    (0.03, 0.02, 0.04),
]


class TestRgbToLab:
    def test_white(self):
        L, a, b = rgb_to_lab((1.0, 1.0, 1.0))
        assert L == pytest.approx(100.0, abs=0.05)
        assert a == pytest.approx(0.0, abs=0.1)
        assert b == pytest.approx(0.0, abs=0.1)

    def test_black(self):
        L, a, b = rgb_to_lab((0.0, 0.0, 0.0))
        assert L == pytest.approx(0.0, abs=1e-9)
        assert a == pytest.approx(0.0, abs=1e-9)
        assert b == pytest.approx(0.0, abs=1e-9)

    def test_mid_gray_lightness(self):
        L, _a, _b = rgb_to_lab((0.5, 0.5, 0.5))
        assert L == pytest.approx(53.4, abs=0.2)

    def test_red_is_positive_a(self):
        L, a, b = rgb_to_lab((1.0, 0.0, 0.0))
        assert L == pytest.approx(53.2, abs=0.5)
        assert a > 75
        assert b > 60

    def test_vectorised_matches_scalar(self):
        labs = rgb_array_to_lab(np.array(SAMPLES))
        for rgb, lab in zip(SAMPLES, labs):
            assert tuple(lab) == pytest.approx(rgb_to_lab(rgb), abs=1e-9)


class TestDeltaE:
    def test_identical_is_zero(self):
        for c in SAMPLES:
            assert delta_e(c, c) < 1e-6

    def test_symmetry(self):
        for a in SAMPLES:
            for b in SAMPLES:
                assert delta_e(a, b) == pytest.approx(delta_e(b, a), abs=1e-12)

    def test_black_white(self):
        assert delta_e((0.0, 0.0, 0.0), (1.0, 1.0, 1.0)) == pytest.approx(100.0, abs=0.1)

    def test_small_gray_step(self):
        d = delta_e((0.5, 0.5, 0.5), (0.52, 0.52, 0.52))
        assert 0.5 < d < 10


class TestHsl:
    @pytest.mark.parametrize('rgb', SAMPLES)
    def test_round_trip(self, rgb):
        back = hsl_to_rgb(*rgb_to_hsl(rgb))
        assert back == pytest.approx(rgb, abs=1e-9)

    @pytest.mark.parametrize('v', [0.0, 0.25, 0.5, 1.0])
    def test_achromatic_has_no_hue_or_saturation(self, v):
        h, s, light = rgb_to_hsl((v, v, v))
        assert h == 0.0
        assert s == 0.0
        assert light == pytest.approx(v)

    def test_red(self):
        h, s, light = rgb_to_hsl((1.0, 0.0, 0.0))
        assert h == 0.0
        assert s == pytest.approx(1.0)
        assert light == pytest.approx(0.5)

    def test_hue_wraps(self):
        assert hsl_to_rgb(1.0 + 1 / 3, 1.0, 0.5) == pytest.approx((0.0, 1.0, 0.0))


class TestLerp:
    def test_endpoints(self):
        a, b = (0.1, 0.2, 0.3), (0.9, 0.8, 0.7)
        assert lerp_color(a, b, 0.0) == a
        assert lerp_color(a, b, 1.0) == pytest.approx(b)

    def test_midpoint(self):
        assert lerp_color((1.0, 0.0, 0.0), (0.0, 0.0, 1.0), 0.5) == (0.5, 0.0, 0.5)

    def test_unclamped_extrapolates(self):
        assert lerp_color((0.0, 0.0, 0.0), (0.5, 0.5, 0.5), 2.0) == (1.0, 1.0, 1.0)

    @pytest.mark.parametrize('rgb', SAMPLES)
    def test_full_lighten_is_white(self, rgb):
        assert lighten_color(rgb, 1.0) == pytest.approx((1.0, 1.0, 1.0))

    @pytest.mark.parametrize('rgb', SAMPLES)
    def test_full_darken_is_black(self, rgb):
        assert darken_color(rgb, 1.0) == pytest.approx((0.0, 0.0, 0.0))

    def test_zero_amount_is_identity(self):
        c = (0.3, 0.6, 0.9)
        assert lighten_color(c, 0.0) == c
        assert darken_color(c, 0.0) == c


class TestBoost:
    def test_raises_saturation_and_lightness(self):
        before = rgb_to_hsl((0.4, 0.2, 0.2))
        after = rgb_to_hsl(boost_color((0.4, 0.2, 0.2), 7, 2))
        assert after[1] == pytest.approx(before[1] + 0.07, abs=1e-9)
        assert after[2] == pytest.approx(before[2] + 0.02, abs=1e-9)
        assert after[0] == pytest.approx(before[0], abs=1e-9)

    def test_clamps_saturation(self):
        _h, s, light = rgb_to_hsl(boost_color((0.4, 0.2, 0.2), 100, 0))
        assert s == pytest.approx(1.0)
        assert light == pytest.approx(0.3)

    def test_clamps_lightness_to_white(self):
        assert boost_color((0.4, 0.2, 0.2), 0, 100) == pytest.approx((1.0, 1.0, 1.0))

    def test_white_stays_white(self):
        assert boost_color((1.0, 1.0, 1.0), 7, 2) == pytest.approx((1.0, 1.0, 1.0))


class TestParseColour:
    def test_hex(self):
        assert parse_colour('#ff0000') == ((1.0, 0.0, 0.0), 1.0)

    def test_short_hex(self):
        assert parse_colour('#fff') == ((1.0, 1.0, 1.0), 1.0)

    def test_hex_with_alpha(self):
        rgb, alpha = parse_colour('#0000ff80')
        assert rgb == (0.0, 0.0, 1.0)
        assert alpha == pytest.approx(128 / 255)

    def test_css_name(self):
        assert parse_colour('white') == ((1.0, 1.0, 1.0), 1.0)

    def test_invalid_raises(self):
        with pytest.raises(ValueError):
            parse_colour('not-a-colour')


class TestToHex:
    def test_opaque(self):
        assert to_hex((1.0, 0.0, 0.0)) == '#ff0000'

    def test_alpha_appended_below_one(self):
        assert to_hex((0.0, 0.0, 1.0), 0.2) == '#0000ff33'

    def test_full_alpha_omitted(self):
        assert to_hex((0.0, 0.0, 1.0), 1.0) == '#0000ff'

    def test_clamps_out_of_range(self):
        assert to_hex((1.2, -0.1, 0.5)) == '#ff0080'
