from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Sequence

from lightpole.utils import confidence_level


class ColorLabel(str, Enum):
    """Illumination state of a traffic light"""
    RED = "Red"
    YELLOW = "Yellow"
    GREEN = "Green"
    UNKNOWN = "Unknown"


class ReferenceClass(str, Enum):
    """Installation standard a pole height estimate is modeled after"""
    NEAR_INTERSECTION = "near_intersection"
    MAJOR_ROAD = "major_road"
    OVERPASS = "overpass"

    @property
    def description(self) -> str:
        return _REFERENCE_DESCRIPTIONS[self]


_REFERENCE_DESCRIPTIONS = {
    ReferenceClass.NEAR_INTERSECTION: "Standard urban intersection",
    ReferenceClass.MAJOR_ROAD: "Highway or major road",
    ReferenceClass.OVERPASS: "Highway overpass",
}


@dataclass(frozen=True)
class BoundingBox:
    """Box in absolute image pixel coordinates (x_min, y_min, x_max, y_max)"""
    xmin: float
    ymin: float
    xmax: float
    ymax: float

    @classmethod
    def from_xyxy(cls, coords: Sequence[float]) -> "BoundingBox":
        xmin, ymin, xmax, ymax = coords
        return cls(float(xmin), float(ymin), float(xmax), float(ymax))

    @property
    def width(self) -> float:
        return self.xmax - self.xmin

    @property
    def height(self) -> float:
        return self.ymax - self.ymin

    @property
    def center_y(self) -> float:
        return (self.ymin + self.ymax) / 2

    @property
    def is_degenerate(self) -> bool:
        return self.xmin > self.xmax or self.ymin > self.ymax

    def clip(self, image_width: int, image_height: int) -> "BoundingBox":
        """
        Clamp the box into the image bounds.

        Coordinates are clamped independently, so a box lying entirely
        outside the image collapses to zero area instead of being rejected.
        """
        return BoundingBox(
            min(max(self.xmin, 0.0), image_width),
            min(max(self.ymin, 0.0), image_height),
            min(max(self.xmax, 0.0), image_width),
            min(max(self.ymax, 0.0), image_height),
        )

    def as_list(self) -> List[float]:
        return [self.xmin, self.ymin, self.xmax, self.ymax]


@dataclass(frozen=True)
class Detection:
    """Raw detector output: free-text label, score in [0, 1] and box"""
    label: str
    score: float
    box: BoundingBox


@dataclass(frozen=True)
class ClassifiedDetection:
    """Detection whose crop was classified as an illuminated light"""
    color: ColorLabel
    confidence: float
    box: BoundingBox

    def __post_init__(self):
        if self.color == ColorLabel.UNKNOWN:
            raise ValueError("ClassifiedDetection cannot carry an Unknown color")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.color.value,
            "confidence": self.confidence,
            "confidence_level": confidence_level(self.confidence),
            "bbox": self.box.as_list(),
        }


@dataclass(frozen=True)
class PoleHeightEstimate:
    estimated_height_m: float
    confidence: float
    reference_class: ReferenceClass

    def to_dict(self) -> Dict[str, Any]:
        return {
            "estimated_height_m": self.estimated_height_m,
            "confidence": self.confidence,
            "reference_class": self.reference_class.value,
            "reference": self.reference_class.description,
        }


@dataclass(frozen=True)
class AnalyzedLight:
    """A classified light together with its pole height estimate"""
    detection: ClassifiedDetection
    pole_height: PoleHeightEstimate

    def to_dict(self) -> Dict[str, Any]:
        record = self.detection.to_dict()
        record["pole_height"] = self.pole_height.to_dict()
        return record
