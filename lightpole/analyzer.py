import cv2
import os
import time
import json
import csv
import logging
from typing import List, Optional

from lightpole.config import DETECTION, EXPORT, YOLO_DETECTION
from lightpole.pipeline import analyze_detections, summarize
from lightpole.types import AnalyzedLight
from lightpole.utils import to_rgb
from lightpole.yolo_detector import YOLODetector


class TrafficLightAnalyzer:

    def __init__(self,
                 model_path: str = YOLO_DETECTION['MODEL_PATH'],
                 confidence: float = YOLO_DETECTION['DEFAULT_CONFIDENCE'],
                 log_level: int = logging.INFO,
                 export_format: str = "json",
                 detector=None):
        """
        Initialize the TrafficLightAnalyzer

        Args:
            model_path: Path to YOLO model file
            confidence: Minimum detector score, also used as the candidate pre-filter
            log_level: Logging level
            export_format: Format to export results ("json" or "csv")
            detector: Object with a detect(image) method returning Detection
                records. A YOLODetector is loaded from model_path when omitted.
        """
        self.setup_logging(log_level)

        self.confidence = confidence
        self.export_format = export_format
        self.keywords = tuple(DETECTION['LABEL_KEYWORDS'])

        if detector is None:
            self.logger.info("Loading YOLO detector...")
            detector = YOLODetector(model_path=model_path, confidence=confidence)
        self.detector = detector

    def setup_logging(self, log_level):
        """Setup logging configuration"""
        # Rely on the root logger's handlers, only the level is set here
        self.logger = logging.getLogger(__name__)
        self.logger.setLevel(log_level)

    @staticmethod
    def load_image(path):
        """
        Read an image from disk

        Returns:
            tuple: (BGR image for the detector, RGB image for classification)
        """
        image = cv2.imread(path, cv2.IMREAD_COLOR)
        if image is None:
            raise ValueError(f"Could not read image: {path}")
        return image, to_rgb(image)

    def analyze(self, image_bgr, image_rgb=None) -> List[AnalyzedLight]:
        """Detect traffic lights in one image and classify them"""
        if image_rgb is None:
            image_rgb = to_rgb(image_bgr)
        detections = self.detector.detect(image_bgr)
        self.logger.debug(f"Detector returned {len(detections)} object(s)")
        return analyze_detections(
            image_rgb,
            detections,
            keywords=self.keywords,
            min_score=self.confidence,
        )

    def analyze_file(self, path) -> List[AnalyzedLight]:
        """Load an image from disk and analyze it"""
        self.logger.info(f"Analyzing image {path}")
        start_time = time.time()

        image_bgr, image_rgb = self.load_image(path)
        lights = self.analyze(image_bgr, image_rgb)

        if not lights:
            self.logger.warning("No illuminated traffic lights detected")
        for i, light in enumerate(lights, start=1):
            det, pole = light.detection, light.pole_height
            self.logger.info(
                f"Light {i}: {det.color.value} ({det.confidence:.1%}) at {det.box.as_list()}, "
                f"pole ~{pole.estimated_height_m}m ({pole.reference_class.description})"
            )

        end_time = time.time()
        self.logger.info(f"Analysis complete. Total time: {end_time - start_time:.2f} seconds")
        return lights

    def export_results(self, lights: List[AnalyzedLight], output_path: str) -> Optional[str]:
        """
        Export analysis results to a JSON or CSV file

        Returns:
            str or None: Path written, or None when nothing was exported
        """
        fmt = self.export_format.lower()
        if fmt not in EXPORT['FORMATS']:
            self.logger.warning(f"Unsupported export format: {self.export_format}")
            return None

        base_name = os.path.splitext(output_path)[0]
        export_path = f"{base_name}.{fmt}"

        if fmt == 'json':
            payload = {
                "summary": summarize(lights),
                "detections": [light.to_dict() for light in lights],
            }
            with open(export_path, 'w') as f:
                json.dump(payload, f, indent=4)

        elif fmt == 'csv':
            with open(export_path, 'w', newline='') as f:
                writer = csv.writer(f)
                writer.writerow(EXPORT['CSV_FIELDS'])
                for light in lights:
                    det, pole = light.detection, light.pole_height
                    writer.writerow([
                        det.color.value,
                        det.confidence,
                        *det.box.as_list(),
                        pole.estimated_height_m,
                        pole.confidence,
                        pole.reference_class.value,
                    ])

        self.logger.info(f"Exported {len(lights)} light(s) to {export_path}")
        return export_path
