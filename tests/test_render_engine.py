"""
Unit tests for the render_engine module.

Tests the composed affine transform (rotation, scale, centering), the
brightness filter, buffer sizing, and the render dependency set.
"""

import pytest
from PIL import Image

from OT_Libs.ImageEditingLib.parameter_store import ParameterStore
from OT_Libs.ImageEditingLib.image_models import SourceImage
from OT_Libs.ImageEditingLib.render_engine import (
    RENDER_DEPENDENCIES,
    apply_brightness,
    build_affine_coefficients,
    needs_render,
    render,
)

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)


def assert_color_close(actual, expected, tolerance=1):
    """Compare RGBA tuples allowing for resampling rounding."""
    assert len(actual) == len(expected)
    for a, e in zip(actual, expected):
        assert abs(a - e) <= tolerance, f"{actual} != {expected}"


@pytest.fixture
def split_source():
    """A 40x40 source: left half red, right half blue."""
    image = Image.new("RGBA", (40, 40), BLUE)
    image.paste(Image.new("RGBA", (20, 40), RED), (0, 0))
    return SourceImage(file_name="split.png", declared_format="image/png", image=image)


class TestBuildAffineCoefficients:
    """Tests for build_affine_coefficients."""

    def test_identity(self):
        """Same size, no rotation, unit scale should be the identity."""
        coeffs = build_affine_coefficients((40, 20), (40, 20), 0, 1.0)
        assert coeffs == pytest.approx((1, 0, 0, 0, 1, 0))

    def test_centers_source_in_larger_target(self):
        """A 10x10 source in a 30x30 target should be offset by 10."""
        coeffs = build_affine_coefficients((10, 10), (30, 30), 0, 1.0)
        assert coeffs == pytest.approx((1, 0, -10, 0, 1, -10))

    def test_half_scale_doubles_sampling_step(self):
        a, b, c, d, e, f = build_affine_coefficients((40, 40), (40, 40), 0, 0.5)
        assert (a, e) == pytest.approx((2.0, 2.0))
        assert (b, d) == pytest.approx((0.0, 0.0))

    def test_quarter_turn_is_exact(self):
        a, b, c, d, e, f = build_affine_coefficients((40, 40), (40, 40), 90, 1.0)
        assert (a, b, d, e) == (0.0, 1.0, -1.0, 0.0)

    def test_center_maps_to_center_for_any_angle(self):
        """The buffer center should always sample the source center."""
        for angle in (0, 30, 90, 135, 270):
            a, b, c, d, e, f = build_affine_coefficients((60, 20), (30, 50), angle, 1.7)
            x, y = 15.0, 25.0
            assert (a * x + b * y + c, d * x + e * y + f) == pytest.approx((30.0, 10.0))

    def test_rejects_non_positive_scale(self):
        with pytest.raises(ValueError):
            build_affine_coefficients((10, 10), (10, 10), 0, 0)


class TestApplyBrightness:
    """Tests for apply_brightness."""

    def test_unchanged_at_100(self):
        image = Image.new("RGBA", (4, 4), (10, 20, 30, 255))
        assert apply_brightness(image, 100) is image

    def test_scales_color_not_alpha(self):
        image = Image.new("RGBA", (4, 4), (100, 50, 20, 128))
        result = apply_brightness(image, 50)
        assert result.getpixel((0, 0)) == (50, 25, 10, 128)

    def test_clamps_to_channel_range(self):
        image = Image.new("RGBA", (4, 4), (200, 100, 0, 255))
        result = apply_brightness(image, 200)
        assert result.getpixel((0, 0)) == (255, 200, 0, 255)

    def test_zero_is_black(self):
        image = Image.new("RGBA", (4, 4), (200, 100, 50, 255))
        assert apply_brightness(image, 0).getpixel((1, 1)) == (0, 0, 0, 255)


class TestRender:
    """Tests for render()."""

    def test_default_state_reproduces_source(self, split_source):
        store = ParameterStore(split_source)
        target = render(split_source, store.state)

        assert target.size == (40, 40)
        assert_color_close(target.image.getpixel((5, 20)), RED)
        assert_color_close(target.image.getpixel((35, 20)), BLUE)

    def test_buffer_matches_target_size(self, make_source):
        source = make_source(40, 20)
        store = ParameterStore(source)
        store.set_width(20)

        target = render(source, store.state)

        assert target.size == (20, 10)
        assert target.image.mode == "RGBA"

    def test_rotation_is_clockwise(self, split_source):
        """After 90 degrees clockwise, the left (red) half should be on top."""
        store = ParameterStore(split_source)
        store.rotate(90)

        target = render(split_source, store.state)

        assert_color_close(target.image.getpixel((20, 5)), RED)
        assert_color_close(target.image.getpixel((20, 35)), BLUE)

    def test_rotation_keeps_target_size(self, make_source):
        """A 40x20 source rotated 90 degrees leaves transparent side bands."""
        source = make_source(40, 20, RED)
        store = ParameterStore(source)
        store.rotate(90)

        target = render(source, store.state)

        assert target.size == (40, 20)
        assert_color_close(target.image.getpixel((20, 10)), RED)
        assert target.image.getpixel((2, 10))[3] == 0
        assert target.image.getpixel((37, 10))[3] == 0

    def test_scale_shrinks_about_center(self, make_source):
        """At 50% the image covers only the middle half of the buffer."""
        source = make_source(40, 20, RED)
        store = ParameterStore(source)
        store.set_scale(50)

        target = render(source, store.state)

        assert_color_close(target.image.getpixel((20, 10)), RED)
        assert target.image.getpixel((2, 2))[3] == 0
        assert target.image.getpixel((37, 17))[3] == 0

    def test_brightness_applied(self, make_source):
        source = make_source(40, 20, (100, 100, 100, 255))
        store = ParameterStore(source)

        store.set_brightness(50)
        assert_color_close(render(source, store.state).image.getpixel((20, 10)), (50, 50, 50, 255))

        store.set_brightness(200)
        assert_color_close(render(source, store.state).image.getpixel((20, 10)), (200, 200, 200, 255))

    def test_brightness_leaves_empty_area_transparent(self, make_source):
        source = make_source(40, 20, RED)
        store = ParameterStore(source)
        store.set_scale(50)
        store.set_brightness(200)

        target = render(source, store.state)

        assert target.image.getpixel((1, 1)) == (0, 0, 0, 0)

    def test_render_does_not_modify_source(self, make_source):
        source = make_source(40, 20, RED)
        before = source.image.tobytes()
        store = ParameterStore(source)
        store.rotate(45)
        store.set_brightness(10)

        render(source, store.state)

        assert source.image.tobytes() == before

    def test_each_render_is_a_new_buffer(self, make_source):
        source = make_source()
        store = ParameterStore(source)
        assert render(source, store.state).image is not render(source, store.state).image


class TestRenderDependencies:
    """Tests for the render dependency set."""

    def test_dependency_fields(self):
        assert RENDER_DEPENDENCIES == {
            "target_width", "target_height", "rotation_deg",
            "scale_percent", "brightness_percent",
        }

    @pytest.mark.parametrize("fields, expected", [
        ({"rotation_deg"}, True),
        ({"target_width", "target_height"}, True),
        ({"output_format"}, False),
        ({"output_quality"}, False),
        ({"output_format", "brightness_percent"}, True),
        (set(), False),
    ])
    def test_needs_render(self, fields, expected):
        assert needs_render(fields) is expected
