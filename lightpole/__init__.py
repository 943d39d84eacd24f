from lightpole.errors import InvalidGeometry
from lightpole.pole_height import PoleHeightEstimator, estimate
from lightpole.traffic_light import TrafficLightClassifier, classify
from lightpole.types import (
    AnalyzedLight,
    BoundingBox,
    ClassifiedDetection,
    ColorLabel,
    Detection,
    PoleHeightEstimate,
    ReferenceClass,
)
