"""
Tests for the color filters.

Tests verify actual pixel values, including the truncate-toward-zero and
clamp behavior that makes pipelines order sensitive.
"""

import math
import warnings

import numpy as np
import pytest

from imgproc import (
    AverageColor,
    CancellationToken,
    EmptyImage,
    FilterId,
    InvalidFactor,
    PixelBuffer,
    ProcessingCancelled,
    UnknownFilter,
    calculate_average,
    get_filter,
)
from imgproc.core import RED, GREEN, BLUE, ALPHA
from imgproc.processing import (
    FILTER_REGISTRY,
    BrightnessFilter,
    ContrastFilter,
    RedBoostFilter,
    create_filter,
    list_filters,
    scale_truncate,
    clamp_channel,
)


def reds(buffer: PixelBuffer) -> list:
    return [p.red for p in buffer.to_pixels()]


# ============================================================================
# Average
# ============================================================================

class TestCalculateAverage:
    def test_scenario_average(self, scenario_buffer):
        # 350 / 4 = 87.5, truncated
        assert calculate_average(scenario_buffer) == AverageColor(87, 87, 87)

    def test_channels_averaged_independently(self):
        buf = PixelBuffer.from_pixels(2, 1, [(10, 20, 30, 0), (11, 21, 33, 255)])
        assert calculate_average(buf) == AverageColor(10, 20, 31)

    def test_alpha_ignored(self):
        opaque = PixelBuffer.filled(4, 4, (60, 70, 80, 255))
        clear = PixelBuffer.filled(4, 4, (60, 70, 80, 0))
        assert calculate_average(opaque) == calculate_average(clear)

    def test_empty_buffer_raises(self, empty_buffer):
        with pytest.raises(EmptyImage):
            calculate_average(empty_buffer)

    def test_zero_width_raises(self):
        with pytest.raises(EmptyImage):
            calculate_average(PixelBuffer(0, 10))

    def test_filter_method_matches_function(self, random_buffer):
        assert get_filter("contrast").calculate_average(random_buffer) == calculate_average(random_buffer)


# ============================================================================
# Numeric helpers
# ============================================================================

class TestNumeric:
    def test_scale_truncates_toward_zero(self):
        values = np.array([13, -87, -37, 3], dtype=np.int64)
        assert scale_truncate(values, 1.2).tolist() == [15, -104, -44, 3]

    def test_scale_huge_factor_saturates_quietly(self):
        values = np.array([0, 255, -255], dtype=np.int64)
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            result = scale_truncate(values, 1e308)
        assert result.tolist() == [0, math.inf, -math.inf]
        assert clamp_channel(result).tolist() == [0, 255, 0]

    def test_clamp_channel(self):
        values = np.array([-17.0, 0.0, 255.0, 313.0])
        result = clamp_channel(values)
        assert result.dtype == np.uint8
        assert result.tolist() == [0, 0, 255, 255]


# ============================================================================
# Brightness / Contrast
# ============================================================================

class TestBrightness:
    def test_scales_every_color_channel(self, scenario_buffer):
        result = BrightnessFilter().apply(scenario_buffer, 1.2)
        assert reds(result) == [120, 240, 0, 60]
        assert all(p.red == p.green == p.blue for p in result.to_pixels())

    def test_truncates_instead_of_rounding(self):
        buf = PixelBuffer.filled(1, 1, (255, 3, 1, 255))
        result = BrightnessFilter().apply(buf, 0.5)
        assert result.pixel_at(0, 0) == (127, 1, 0, 255)

    def test_zero_factor_blackens(self, random_buffer):
        result = BrightnessFilter().apply(random_buffer, 0.0)
        assert not result.data[..., :3].any()
        np.testing.assert_array_equal(result.data[..., ALPHA], random_buffer.data[..., ALPHA])


class TestContrast:
    def test_scenario_factor_two(self, scenario_buffer):
        result = ContrastFilter().apply(scenario_buffer, 2.0)
        # 100 -> 87 + 2*13; 200 clamps high; 0 -> 87 - 174 clamps low; 50 -> 87 - 74
        assert result.to_pixels()[0] == (113, 113, 113, 255)
        assert result.to_pixels()[2] == (0, 0, 0, 255)
        assert reds(result) == [113, 255, 0, 13]

    def test_negative_difference_truncates_toward_zero(self, scenario_buffer):
        result = ContrastFilter().apply(scenario_buffer, 1.2)
        # 50: -37 * 1.2 = -44.4 -> -44, so 87 - 44 = 43 (not 42)
        assert reds(result) == [102, 222, 0, 43]

    def test_negative_factor_inverts_around_average(self, scenario_buffer):
        result = ContrastFilter().apply(scenario_buffer, -1.0)
        assert reds(result) == [74, 0, 174, 124]

    def test_huge_factor_clamps_without_warnings(self, scenario_buffer):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            contrast = ContrastFilter().apply(scenario_buffer, 1e308)
            brightness = BrightnessFilter().apply(scenario_buffer, 1e308)
        assert reds(contrast) == [255, 255, 0, 0]
        assert reds(brightness) == [255, 255, 0, 255]

    def test_zero_factor_flattens_to_average(self, mixed_buffer):
        result = ContrastFilter().apply(mixed_buffer, 0.0)
        avg = calculate_average(mixed_buffer)
        for pixel in result.to_pixels():
            assert (pixel.red, pixel.green, pixel.blue) == avg.as_tuple()


@pytest.mark.parametrize("filter_id", [FilterId.BRIGHTNESS, FilterId.CONTRAST])
def test_unit_factor_is_identity(filter_id, random_buffer, scenario_buffer):
    color_filter = get_filter(filter_id)
    assert color_filter.apply(random_buffer, 1.0) == random_buffer
    assert color_filter.apply(scenario_buffer, 1.0) == scenario_buffer


# ============================================================================
# Channel boosts
# ============================================================================

class TestChannelBoost:
    def test_red_boost_above_average_only(self, mixed_buffer):
        result = RedBoostFilter().apply(mixed_buffer, 2.0)
        # average red 87: 100 -> 113, 200 -> 313 clamped, 0 and 50 untouched
        assert reds(result) == [113, 255, 0, 50]

    def test_attenuating_factor(self, mixed_buffer):
        result = RedBoostFilter().apply(mixed_buffer, 0.5)
        # 100: 87 + trunc(6.5); 200: 87 + trunc(56.5)
        assert reds(result) == [93, 143, 0, 50]

    @pytest.mark.parametrize(
        "filter_id, channel",
        [
            (FilterId.RED_BOOST, RED),
            (FilterId.GREEN_BOOST, GREEN),
            (FilterId.BLUE_BOOST, BLUE),
        ],
    )
    @pytest.mark.parametrize("factor", [0.0, 0.5, 1.5, 3.0, -2.0])
    def test_boost_touches_only_its_channel(self, filter_id, channel, factor, random_buffer):
        result = get_filter(filter_id).apply(random_buffer, factor)
        before = random_buffer.data
        after = result.data

        others = [c for c in (RED, GREEN, BLUE, ALPHA) if c != channel]
        np.testing.assert_array_equal(after[..., others], before[..., others])

        # Pixels at or below the average keep their value
        avg = calculate_average(random_buffer).as_tuple()[channel]
        at_or_below = before[..., channel] <= avg
        np.testing.assert_array_equal(after[..., channel][at_or_below], before[..., channel][at_or_below])

    @pytest.mark.parametrize("factor", [1.0, 1.5, 10.0])
    def test_amplifying_boost_never_decreases(self, factor, random_buffer):
        for filter_id, channel in [
            (FilterId.RED_BOOST, RED),
            (FilterId.GREEN_BOOST, GREEN),
            (FilterId.BLUE_BOOST, BLUE),
        ]:
            result = get_filter(filter_id).apply(random_buffer, factor)
            assert (result.data[..., channel] >= random_buffer.data[..., channel]).all()

    def test_uniform_image_unchanged(self):
        buf = PixelBuffer.filled(5, 5, (40, 90, 200, 255))
        for filter_id in (FilterId.RED_BOOST, FilterId.GREEN_BOOST, FilterId.BLUE_BOOST):
            assert get_filter(filter_id).apply(buf, 4.0) == buf


# ============================================================================
# Shared contract
# ============================================================================

@pytest.mark.parametrize("filter_id", list(FilterId))
@pytest.mark.parametrize("factor", [0.0, 1.2, 100.0, -3.5, 1e300])
def test_output_shape_range_and_alpha(filter_id, factor, random_buffer):
    result = get_filter(filter_id).apply(random_buffer, factor)
    assert (result.width, result.height) == (random_buffer.width, random_buffer.height)
    assert result.data.dtype == np.uint8
    assert result.data.min() >= 0 and result.data.max() <= 255
    np.testing.assert_array_equal(result.data[..., ALPHA], random_buffer.data[..., ALPHA])


@pytest.mark.parametrize("filter_id", list(FilterId))
def test_input_buffer_not_modified(filter_id, random_buffer):
    snapshot = random_buffer.copy()
    get_filter(filter_id).apply(random_buffer, 2.5)
    assert random_buffer == snapshot


@pytest.mark.parametrize("filter_id", list(FilterId))
def test_apply_to_empty_buffer_raises(filter_id, empty_buffer):
    with pytest.raises(EmptyImage):
        get_filter(filter_id).apply(empty_buffer, 1.0)


@pytest.mark.parametrize("factor", [math.nan, math.inf, -math.inf, "2", None, True])
def test_invalid_factor_rejected(factor, scenario_buffer):
    with pytest.raises(InvalidFactor):
        get_filter(FilterId.BRIGHTNESS).apply(scenario_buffer, factor)


def test_integer_factor_accepted(scenario_buffer):
    assert reds(get_filter(FilterId.BRIGHTNESS).apply(scenario_buffer, 2)) == [200, 255, 0, 100]


@pytest.mark.parametrize("filter_id", list(FilterId))
def test_band_size_and_workers_do_not_change_result(filter_id, random_buffer):
    color_filter = get_filter(filter_id)
    whole = color_filter.apply(random_buffer, 1.7)
    assert color_filter.apply(random_buffer, 1.7, band_rows=1) == whole
    assert color_filter.apply(random_buffer, 1.7, band_rows=4, max_workers=4) == whole


def test_band_average_is_taken_over_whole_image():
    # Top row bright, bottom row dark: a per-band average would leave both rows unchanged
    buf = PixelBuffer.from_pixels(1, 2, [(200, 200, 200, 255), (0, 0, 0, 255)])
    result = ContrastFilter().apply(buf, 2.0, band_rows=1)
    assert reds(result) == [255, 0]


def test_cancelled_token_stops_filter(random_buffer):
    token = CancellationToken()
    token.request_stop()
    with pytest.raises(ProcessingCancelled):
        BrightnessFilter().apply(random_buffer, 1.2, cancel_token=token)
    with pytest.raises(ProcessingCancelled):
        BrightnessFilter().apply(random_buffer, 1.2, cancel_token=token, band_rows=2, max_workers=3)


# ============================================================================
# Registry
# ============================================================================

class TestRegistry:
    def test_every_identifier_registered(self):
        assert set(FILTER_REGISTRY) == set(FilterId)
        for filter_id, color_filter in FILTER_REGISTRY.items():
            assert color_filter.filter_id is filter_id

    def test_get_filter_by_name(self):
        assert get_filter("Contrast") is FILTER_REGISTRY[FilterId.CONTRAST]
        assert get_filter("BlueFilter") is FILTER_REGISTRY[FilterId.BLUE_BOOST]

    def test_unknown_filter(self):
        with pytest.raises(UnknownFilter):
            get_filter("sepia")
        with pytest.raises(UnknownFilter):
            create_filter("sepia")

    def test_create_filter_returns_fresh_instance(self):
        created = create_filter(FilterId.RED_BOOST)
        assert isinstance(created, RedBoostFilter)
        assert created is not FILTER_REGISTRY[FilterId.RED_BOOST]

    def test_list_filters_in_registry_order(self):
        assert [f.filter_id for f in list_filters()] == list(FilterId)
