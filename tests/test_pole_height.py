import pytest

from lightpole.errors import InvalidGeometry
from lightpole.pole_height import PoleHeightEstimator, estimate
from lightpole.types import BoundingBox, ReferenceClass


def test_low_small_light_is_near_intersection_scaled_up():
    box = BoundingBox(500, 765, 510, 780)
    result = estimate(box, 1000, 1000)
    assert result.reference_class == ReferenceClass.NEAR_INTERSECTION
    assert result.estimated_height_m == pytest.approx(5.4)
    assert result.confidence == pytest.approx(0.7)


def test_high_light_without_adjustment_is_overpass():
    box = BoundingBox(480, 100, 520, 140)
    result = estimate(box, 1000, 1000)
    assert result.reference_class == ReferenceClass.OVERPASS
    assert result.estimated_height_m == pytest.approx(6.1)
    assert result.confidence == pytest.approx(0.6)


def test_large_light_mid_frame_is_scaled_down():
    box = BoundingBox(400, 450, 460, 650)
    result = estimate(box, 1000, 1000)
    assert result.reference_class == ReferenceClass.MAJOR_ROAD
    assert result.estimated_height_m == pytest.approx(4.7)
    assert result.confidence == pytest.approx(0.8)


def test_large_near_light_confidence_capped():
    box = BoundingBox(400, 700, 460, 900)
    result = estimate(box, 1000, 1000)
    assert result.reference_class == ReferenceClass.NEAR_INTERSECTION
    assert result.confidence == pytest.approx(0.9)


def test_position_ratio_band_edges_are_inclusive_above():
    # center exactly at 0.7 of the frame, size exactly 2%
    at_07 = estimate(BoundingBox(0, 690, 10, 710), 1000, 1000)
    assert at_07.reference_class == ReferenceClass.MAJOR_ROAD
    assert at_07.estimated_height_m == pytest.approx(5.2)
    assert at_07.confidence == pytest.approx(0.7)

    # center exactly at 0.4, tiny box
    at_04 = estimate(BoundingBox(0, 395, 10, 405), 1000, 1000)
    assert at_04.reference_class == ReferenceClass.OVERPASS
    assert at_04.estimated_height_m == pytest.approx(7.3)
    assert at_04.confidence == pytest.approx(0.5)


def test_height_rounded_to_one_decimal():
    result = estimate(BoundingBox(0, 300, 10, 310), 1000, 1000)
    assert result.estimated_height_m == round(result.estimated_height_m, 1)


@pytest.mark.parametrize("box", [
    BoundingBox(0, 0, 10, 10),
    BoundingBox(0, 0, 0, 0),
    BoundingBox(10, 20, 5, 5),
])
def test_zero_image_height_raises(box):
    with pytest.raises(InvalidGeometry):
        estimate(box, 640, 0)


def test_invalid_geometry_is_value_error():
    with pytest.raises(ValueError):
        PoleHeightEstimator().estimate(BoundingBox(0, 0, 1, 1), 1, 0)


def test_inverted_box_uses_absolute_height():
    result = estimate(BoundingBox(0, 650, 10, 450), 1000, 1000)
    assert result.reference_class == ReferenceClass.MAJOR_ROAD
    assert result.estimated_height_m == pytest.approx(4.7)


def test_confidence_always_within_clamp():
    height = 720
    for top in range(0, height, 24):
        for size in (1, 5, 14, 40, 72, 200, 400):
            box = BoundingBox(0, top, 10, top + size)
            result = estimate(box, 1280, height)
            assert 0.5 <= result.confidence <= 0.9
