"""Turns raw detector output into classified lights with pole height estimates."""

import logging
from collections import Counter
from typing import Iterable, List, Optional, Sequence

from lightpole.config import DETECTION
from lightpole.pole_height import estimate
from lightpole.traffic_light import classify
from lightpole.types import AnalyzedLight, ClassifiedDetection, ColorLabel, Detection
from lightpole.utils import confidence_level, crop_region

logger = logging.getLogger(__name__)


def filter_candidates(detections: Iterable[Detection],
                      keywords: Optional[Sequence[str]] = tuple(DETECTION['LABEL_KEYWORDS']),
                      min_score: float = DETECTION['MIN_SCORE']) -> List[Detection]:
    """
    Keep detections that could plausibly be traffic signals.

    Args:
        detections: Raw detector output
        keywords: Label substrings to accept (case-insensitive). None accepts any label.
        min_score: Detections at or below this score are dropped

    Returns:
        list: The accepted detections, in input order
    """
    candidates = []
    for det in detections:
        if det.score <= min_score:
            continue
        if keywords is not None:
            label = det.label.lower()
            if not any(k in label for k in keywords):
                continue
        candidates.append(det)
    return candidates


def classify_detection(image, detection: Detection) -> Optional[ClassifiedDetection]:
    """Classify the crop of one detection; returns None when the color is Unknown."""
    if detection.box.is_degenerate:
        logger.debug(f"Dropping '{detection.label}': inverted box {detection.box.as_list()}")
        return None
    height, width = image.shape[:2]
    box = detection.box.clip(width, height)
    color = classify(crop_region(image, box))
    if color == ColorLabel.UNKNOWN:
        logger.debug(f"Dropping '{detection.label}' at {box.as_list()}: no clear signal")
        return None
    return ClassifiedDetection(color=color, confidence=detection.score, box=box)


def analyze_detections(image, detections: Iterable[Detection],
                       keywords: Optional[Sequence[str]] = tuple(DETECTION['LABEL_KEYWORDS']),
                       min_score: float = DETECTION['MIN_SCORE']) -> List[AnalyzedLight]:
    """
    Classify every candidate detection and estimate pole heights for the lit ones.

    Args:
        image (np.ndarray): Full image in RGB(A) order
        detections: Raw detector output for this image
        keywords: Label pre-filter, see filter_candidates
        min_score: Score pre-filter, see filter_candidates

    Returns:
        list: AnalyzedLight records sorted by detection confidence, highest first
    """
    height, width = image.shape[:2]
    candidates = filter_candidates(detections, keywords, min_score)

    classified = []
    for det in candidates:
        result = classify_detection(image, det)
        if result is not None:
            classified.append(result)
    classified.sort(key=lambda d: d.confidence, reverse=True)

    lights = [
        AnalyzedLight(detection=d, pole_height=estimate(d.box, width, height))
        for d in classified
    ]
    logger.info(f"{len(candidates)} candidate(s), {len(lights)} illuminated light(s)")
    return lights


def summarize(lights: List[AnalyzedLight]) -> dict:
    """Aggregate counts and confidence for a list of analyzed lights."""
    if not lights:
        return {"count": 0, "average_confidence": 0.0, "confidence_level": None, "colors": {}}

    average = sum(light.detection.confidence for light in lights) / len(lights)
    colors = Counter(light.detection.color.value for light in lights)
    return {
        "count": len(lights),
        "average_confidence": average,
        "confidence_level": confidence_level(average),
        "colors": dict(colors),
    }
