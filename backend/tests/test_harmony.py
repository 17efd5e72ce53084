"""
Unit tests for the Color Harmony Engine

Tests hue rotation mathematics, the scheme table and the monochromatic
lightness ramp.
"""

import pytest

from palette_studio.errors import InvalidColor
from palette_studio.services.colors.harmony import (
    HUE_OFFSETS, HarmonyScheme, generate_all_harmonies, harmony, hue_separation,
    lightness_ramp, rotate_hue
)
from palette_studio.services.colors.lab import from_lch, in_gamut, max_chroma, to_lch
from palette_studio.services.colors.model import Color, luminance, to_hsl, to_rgb


BASES = ["#3B82F6", "#EF4444", "#10B981", "#F59E0B", "#8B5CF6", "#0C4A6E", "#FDE68A"]


class TestHueRotation:
    """Test hue rotation mathematics."""

    def test_complementary_rotation(self):
        assert rotate_hue(0.0, 180) == 180.0
        assert rotate_hue(240.0, 180) == 60.0

    def test_hue_wraparound(self):
        """Test hue wraparound at boundaries."""
        assert abs(rotate_hue(350.0, 30) - 20.0) < 1e-9
        assert abs(rotate_hue(10.0, -30) - 340.0) < 1e-9
        assert rotate_hue(0.0, 360) == 0.0

    def test_hue_separation(self):
        assert abs(hue_separation(0.0, 180.0) - 180) < 1e-9
        # Adjacent hues should consider wraparound
        assert abs(hue_separation(350.0, 10.0) - 20.0) < 1e-9


class TestHarmonySchemes:
    """Test the scheme table."""

    @pytest.mark.parametrize("scheme,count", [
        (HarmonyScheme.COMPLEMENTARY, 2),
        (HarmonyScheme.ANALOGOUS, 3),
        (HarmonyScheme.TRIADIC, 3),
        (HarmonyScheme.SPLIT_COMPLEMENTARY, 3),
        (HarmonyScheme.TETRADIC, 4),
        (HarmonyScheme.MONOCHROMATIC, 5),
    ])
    def test_scheme_sizes(self, scheme, count):
        assert len(harmony("#3B82F6", scheme)) == count

    def test_scheme_names_accepted(self):
        assert harmony("#FF0000", "split-complementary") == harmony("#FF0000", HarmonyScheme.SPLIT_COMPLEMENTARY)

    def test_complementary_of_red(self):
        assert harmony("#FF0000", "complementary") == [Color("#FF0000"), Color("#00FFFF")]

    def test_triadic_of_red(self):
        assert harmony("#FF0000", "triadic") == [Color("#FF0000"), Color("#00FF00"), Color("#0000FF")]

    @pytest.mark.parametrize("base", BASES)
    def test_complementary_hues_differ_by_180(self, base):
        first, second = harmony(base, HarmonyScheme.COMPLEMENTARY)
        assert first == Color(base)
        h1, s1, l1 = to_hsl(first)
        h2, s2, l2 = to_hsl(second)
        assert abs(hue_separation(h1, h2) - 180.0) < 1.5
        assert abs(s1 - s2) < 0.02
        assert abs(l1 - l2) < 0.01

    @pytest.mark.parametrize("base", BASES)
    def test_triadic_spacing(self, base):
        """Triadic hues are 120 degrees apart in increasing rotation order"""
        colors = harmony(base, HarmonyScheme.TRIADIC)
        hues = [to_hsl(c)[0] for c in colors]
        base_h = hues[0]
        for i, h in enumerate(hues):
            expected = (base_h + 120 * i) % 360
            assert hue_separation(h, expected) < 1.5

    @pytest.mark.parametrize("scheme", [s for s in HUE_OFFSETS])
    def test_offsets_hold_saturation_and_lightness(self, scheme):
        base_h, base_s, base_l = to_hsl("#3B82F6")
        for color, offset in zip(harmony("#3B82F6", scheme), HUE_OFFSETS[scheme]):
            h, s, l = to_hsl(color)
            assert hue_separation(h, (base_h + offset) % 360) < 1.5
            assert abs(s - base_s) < 0.02
            assert abs(l - base_l) < 0.01

    def test_analogous_scenario(self):
        """Base #3b82f6 (hue ~217) gives hues ~187, 217, 247"""
        colors = harmony("#3b82f6", HarmonyScheme.ANALOGOUS)
        hues = [to_hsl(c)[0] for c in colors]
        for h, expected in zip(hues, [187.2, 217.2, 247.2]):
            assert abs(h - expected) < 1.0
        assert colors[1] == Color("#3B82F6")

    def test_grey_complementary_repeats(self):
        """Achromatic bases rotate onto themselves"""
        assert harmony("#808080", "complementary") == [Color("#808080"), Color("#808080")]

    def test_invalid_base_raises(self):
        with pytest.raises(InvalidColor):
            harmony("not-a-color", HarmonyScheme.TRIADIC)

    def test_unknown_scheme_returns_base(self):
        assert harmony("#3B82F6", "pentadic") == [Color("#3B82F6")]

    def test_generate_all(self):
        result = generate_all_harmonies("#3B82F6")
        assert set(result) == {s.value for s in HarmonyScheme}
        assert all(colors[0] == Color("#3B82F6") for name, colors in result.items()
                   if name not in ("analogous", "monochromatic"))


class TestMonochromatic:
    """Test the LCh lightness ramp."""

    @pytest.mark.parametrize("base", BASES)
    def test_middle_is_base(self, base):
        ramp = harmony(base, HarmonyScheme.MONOCHROMATIC)
        assert ramp[2] == Color(base)

    def test_ramp_goes_dark_to_light(self):
        ramp = harmony("#3B82F6", HarmonyScheme.MONOCHROMATIC)
        lums = [luminance(c) for c in ramp]
        assert lums == sorted(lums)
        assert lums[0] < luminance("#3B82F6") < lums[-1]

    def test_ramp_lightness_steps(self):
        """Interior steps are 18 L* apart around the base"""
        ramp = harmony("#808080", HarmonyScheme.MONOCHROMATIC)
        lightness = [to_lch(c)[0] for c in ramp]
        base_l = lightness[2]
        assert abs(lightness[1] - (base_l - 18)) < 1.0
        assert abs(lightness[3] - (base_l + 18)) < 1.0

    def test_black_ramp_stays_valid(self):
        ramp = harmony("#000000", HarmonyScheme.MONOCHROMATIC)
        assert len(ramp) == 5
        assert ramp[0] == Color("#000000")
        assert all(isinstance(c, Color) for c in ramp)

    def test_short_ramp(self):
        assert lightness_ramp(Color("#3B82F6"), steps=1) == [Color("#3B82F6")]

    @pytest.mark.parametrize("base", BASES + ["#000000", "#FFFFFF"])
    def test_lch_roundtrip(self, base):
        original = to_rgb(base)
        converted = to_rgb(from_lch(*to_lch(base)))
        assert all(abs(a - b) <= 1 for a, b in zip(original, converted))

    @pytest.mark.parametrize("base", ["#F59E0B", "#8B5CF6", "#3B82F6", "#EF4444", "#10B981"])
    def test_ramp_holds_hue(self, base):
        """Every chromatic entry keeps the base's LCh hue"""
        _, base_c, base_h = to_lch(base)
        for color in harmony(base, HarmonyScheme.MONOCHROMATIC):
            _, c, h = to_lch(color)
            assert c <= base_c + 1.5
            if c >= 20:
                assert hue_separation(h, base_h) <= 4.0

    def test_out_of_gamut_lowers_chroma(self):
        assert not in_gamut(80, 120, 62)
        l, c, h = to_lch(from_lch(80, 120, 62))
        assert abs(l - 80) < 1.0
        assert 20 < c < 120
        assert hue_separation(h, 62) <= 3.0

    def test_max_chroma_keeps_in_gamut_values(self):
        l, c, h = to_lch("#3B82F6")
        assert max_chroma(l, c, h) == c
        assert max_chroma(100, 50, 62) < 1.0
