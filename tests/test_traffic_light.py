import numpy as np
import pytest

from lightpole.traffic_light import TrafficLightClassifier, classify
from lightpole.types import ColorLabel


def solid(rgb, width=8, height=8):
    region = np.zeros((height, width, len(rgb)), dtype=np.uint8)
    region[:, :] = rgb
    return region


def split(top_rgb, bottom_rgb, width=8, height=8):
    region = solid(top_rgb, width, height)
    region[height // 2:, :] = bottom_rgb
    return region


@pytest.mark.parametrize("rgb", [(0, 0, 0), (10, 10, 10), (5, 20, 5)])
def test_dark_region_is_unknown(rgb):
    assert classify(solid(rgb)) == ColorLabel.UNKNOWN


@pytest.mark.parametrize("size", [1, 3, 50])
def test_pure_green_any_size(size):
    assert classify(solid((0, 255, 0), size, size)) == ColorLabel.GREEN


def test_bright_red():
    assert classify(solid((200, 50, 50))) == ColorLabel.RED


def test_bright_yellow():
    assert classify(solid((150, 135, 50))) == ColorLabel.YELLOW


def test_red_rule_checked_before_yellow():
    # Satisfies both the bright red margin and the bright yellow thresholds
    assert classify(solid((150, 120, 50))) == ColorLabel.RED


def test_dim_bands():
    assert classify(solid((30, 45, 30))) == ColorLabel.GREEN
    assert classify(solid((60, 30, 30))) == ColorLabel.RED
    assert classify(solid((65, 60, 30))) == ColorLabel.YELLOW


def test_very_dim_bands():
    assert classify(solid((10, 20, 10))) == ColorLabel.GREEN
    assert classify(solid((20, 10, 10))) == ColorLabel.RED
    assert classify(solid((31, 29, 10))) == ColorLabel.YELLOW


def test_very_dim_green_needs_minimum_level():
    assert classify(solid((12, 15, 12))) == ColorLabel.UNKNOWN


def test_brightness_sixty_belongs_to_dim_band():
    # No bright rule matches this color, the dim red margin does
    assert classify(solid((80, 70, 30))) == ColorLabel.RED


def test_unmatched_band_falls_through_to_dimmer_band():
    region = split((100, 100, 100), (20, 50, 20))
    assert classify(region) == ColorLabel.GREEN


def test_matched_band_does_not_fall_through():
    region = split((200, 50, 50), (20, 50, 20))
    assert classify(region) == ColorLabel.RED


def test_whole_region_green_fallback():
    # Gray matches no band rule; the green background is ignored by the bands
    # but lifts the whole-region average
    region = split((100, 100, 100), (0, 30, 0))
    assert classify(region) == ColorLabel.GREEN


def test_gray_region_is_unknown():
    assert classify(solid((120, 120, 120))) == ColorLabel.UNKNOWN


@pytest.mark.parametrize("shape", [(0, 0, 3), (4, 0, 3), (0, 4, 4)])
def test_empty_region_is_unknown(shape):
    assert classify(np.zeros(shape, dtype=np.uint8)) == ColorLabel.UNKNOWN


def test_malformed_region_is_unknown():
    assert classify(np.full((4, 4), 200, dtype=np.uint8)) == ColorLabel.UNKNOWN


def test_alpha_channel_ignored():
    assert classify(solid((0, 255, 0, 0))) == ColorLabel.GREEN


def test_accepts_nested_lists():
    assert classify([[[200, 50, 50], [200, 50, 50]]]) == ColorLabel.RED


def test_classify_is_idempotent_and_does_not_mutate():
    region = split((200, 50, 50), (20, 50, 20))
    before = region.copy()
    first = classify(region)
    second = classify(region)
    assert first == second
    assert np.array_equal(region, before)


def test_band_averages_only_cover_band_pixels():
    classifier = TrafficLightClassifier()
    pixels = np.array([[90, 90, 90], [30, 30, 30], [0, 0, 0]], dtype=np.float64)
    averages = dict(classifier.band_averages(pixels))
    assert set(averages) == {"bright", "dim"}
    assert averages["bright"] == pytest.approx((90, 90, 90))
    assert averages["dim"] == pytest.approx((30, 30, 30))
