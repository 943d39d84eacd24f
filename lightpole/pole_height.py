import logging
import math

from lightpole.config import POLE_HEIGHT_REFERENCES, SIZE_ADJUSTMENT
from lightpole.errors import InvalidGeometry
from lightpole.types import PoleHeightEstimate, ReferenceClass

logger = logging.getLogger(__name__)


def _round_half_up(value, digits=1):
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


class PoleHeightEstimator:
    """
    Estimates the physical height of a traffic light pole from where the
    light sits in the frame and how large it appears.

    Lights lower in the frame are assumed closer to the camera and mounted
    on standard intersection poles; lights near the top are assumed distant
    or mounted higher. A large box pulls the estimate down and raises the
    confidence, a tiny one pushes it up and lowers the confidence.
    """

    def __init__(self, references=None, size_adjustment=None):
        self.references = references or POLE_HEIGHT_REFERENCES
        self.size_adjustment = size_adjustment or SIZE_ADJUSTMENT

    def _reference_for(self, position_ratio):
        for ref in self.references:
            min_ratio = ref['MIN_POSITION_RATIO']
            if min_ratio is None or position_ratio > min_ratio:
                return ref
        return self.references[-1]

    def _adjust_for_size(self, height, confidence, size_ratio):
        adj = self.size_adjustment
        if size_ratio > adj['LARGE_RATIO']:
            height *= adj['LARGE_SCALE']
            confidence = min(confidence + adj['CONFIDENCE_STEP'], adj['MAX_CONFIDENCE'])
        elif size_ratio < adj['SMALL_RATIO']:
            height *= adj['SMALL_SCALE']
            confidence = max(confidence - adj['CONFIDENCE_STEP'], adj['MIN_CONFIDENCE'])
        return height, confidence

    def estimate(self, box, image_width, image_height):
        """
        Estimate the pole height for one classified light.

        Args:
            box (BoundingBox): Light bounding box in image pixel coordinates
            image_width (int): Width of the full image
            image_height (int): Height of the full image

        Returns:
            PoleHeightEstimate: Height in meters rounded to one decimal,
            confidence and reference class

        Raises:
            InvalidGeometry: If image_height is not positive
        """
        if image_height <= 0:
            raise InvalidGeometry(f"Image height must be positive, got {image_height}")

        position_ratio = box.center_y / image_height
        ref = self._reference_for(position_ratio)

        size_ratio = abs(box.ymax - box.ymin) / image_height
        height, confidence = self._adjust_for_size(ref['HEIGHT_M'], ref['CONFIDENCE'], size_ratio)

        logger.debug(
            f"position_ratio={position_ratio:.3f} size_ratio={size_ratio:.3f} "
            f"reference={ref['REFERENCE']} height={height:.2f}"
        )
        return PoleHeightEstimate(
            estimated_height_m=_round_half_up(height),
            confidence=confidence,
            reference_class=ReferenceClass(ref['REFERENCE']),
        )


_default_estimator = PoleHeightEstimator()


def estimate(box, image_width, image_height):
    """Estimate pole height with the default references and size adjustment."""
    return _default_estimator.estimate(box, image_width, image_height)
