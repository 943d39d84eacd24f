import logging

import torch
from ultralytics import YOLO

logger = logging.getLogger(__name__)


class ModelCache:
    _instance = None
    _models = {}

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ModelCache, cls).__new__(cls)
            cls._instance._initialize_cache()
        return cls._instance

    def _initialize_cache(self):
        """Pick the inference device once for every cached model"""
        self.device = torch.device("cuda" if torch.cuda.is_available() else "cpu")
        logger.info(f"Model cache initialized using device: {self.device}")

    def get_yolo_detector(self, model_path):
        """Get or load YOLO detector model"""
        cache_key = f"yolo_detector_{model_path}"
        if cache_key not in self._models:
            logger.info(f"Loading YOLO detector from {model_path}")
            model = YOLO(model_path)
            model.to(self.device)
            self._models[cache_key] = model
        return self._models[cache_key]
