"""Configuration constants for traffic light analysis"""

# Brightness bands, evaluated brightest first.
# A pixel belongs to a band when LOWER < brightness <= UPPER.
BRIGHTNESS_BANDS = {
    'bright': {'lower': 60, 'upper': None},
    'dim': {'lower': 25, 'upper': 60},
    'very_dim': {'lower': 10, 'upper': 25},
}

# Per-band color rules applied to the band's mean R, G, B.
# Evaluation order inside a band is green, red, yellow.
TRAFFIC_LIGHT_COLORS = {
    'bright': {
        'green': {'margin': 8, 'min_green': None},
        'red': {'margin': 20},
        'yellow': {'min_red': 130, 'min_green': 100, 'max_blue': 100},
    },
    'dim': {
        'green': {'margin': 3, 'min_green': None},
        'red': {'margin': 8},
        'yellow': {'min_red': 60, 'min_green': 45, 'max_blue': 60},
    },
    'very_dim': {
        'green': {'margin': 1, 'min_green': 15},
        'red': {'margin': 3},
        'yellow': {'min_red': 30, 'min_green': 25, 'max_blue': 40},
    },
}

# Whole-region green check used when no band produced a label
FALLBACK_GREEN = {
    'MARGIN': 1,
    'MIN_GREEN': 20,
}

# Pole height references by vertical position of the light in frame.
# Checked in order, first MIN_POSITION_RATIO exceeded wins.
POLE_HEIGHT_REFERENCES = [
    {'MIN_POSITION_RATIO': 0.7, 'HEIGHT_M': 4.5, 'CONFIDENCE': 0.8,
     'REFERENCE': 'near_intersection'},
    {'MIN_POSITION_RATIO': 0.4, 'HEIGHT_M': 5.2, 'CONFIDENCE': 0.7,
     'REFERENCE': 'major_road'},
    {'MIN_POSITION_RATIO': None, 'HEIGHT_M': 6.1, 'CONFIDENCE': 0.6,
     'REFERENCE': 'overpass'},
]

# Apparent size adjustment of the height estimate
SIZE_ADJUSTMENT = {
    'LARGE_RATIO': 0.1,
    'LARGE_SCALE': 0.9,
    'SMALL_RATIO': 0.02,
    'SMALL_SCALE': 1.2,
    'CONFIDENCE_STEP': 0.1,
    'MAX_CONFIDENCE': 0.9,
    'MIN_CONFIDENCE': 0.5,
}

# Candidate filtering of raw detector output
DETECTION = {
    'MIN_SCORE': 0.1,
    'LABEL_KEYWORDS': [
        'traffic', 'light', 'signal', 'stop', 'arrow', 'directional',
        'red', 'green', 'yellow', 'amber', 'go', 'turn', 'sign',
        'lamp', 'circle', 'square',
    ],
}

# YOLO detection
YOLO_DETECTION = {
    'MODEL_PATH': 'models/yolo11n.pt',
    'DEFAULT_CONFIDENCE': 0.1,
}

# Confidence levels shown with results
CONFIDENCE_LEVELS = {
    'HIGH': 0.8,
    'MEDIUM': 0.6,
}

# Export
EXPORT = {
    'FORMATS': ['json', 'csv'],
    'CSV_FIELDS': [
        'color', 'confidence', 'xmin', 'ymin', 'xmax', 'ymax',
        'estimated_height_m', 'height_confidence', 'reference_class',
    ],
}
