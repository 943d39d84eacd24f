# yolo_detector.py
from lightpole.config import YOLO_DETECTION
from lightpole.model_cache import ModelCache
from lightpole.types import BoundingBox, Detection


class YOLODetector:
    def __init__(self, model_path=YOLO_DETECTION['MODEL_PATH'],
                 confidence=YOLO_DETECTION['DEFAULT_CONFIDENCE']):
        self.model_cache = ModelCache()
        self.model = self.model_cache.get_yolo_detector(model_path)
        self.conf = confidence
        self.class_names = self.model.names

    def detect(self, image):
        """Run the model on an image and return Detection records in pixel coordinates."""
        results = self.model.predict(source=image, conf=self.conf, verbose=False)
        detections = []
        for result in results:
            for box in result.boxes:
                x1, y1, x2, y2 = map(float, box.xyxy[0])
                cls = int(box.cls)
                detections.append(Detection(
                    label=self.class_names[cls],
                    score=float(box.conf),
                    box=BoundingBox(x1, y1, x2, y2),
                ))
        return detections
