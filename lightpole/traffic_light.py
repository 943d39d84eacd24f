import logging

import numpy as np

from lightpole.config import BRIGHTNESS_BANDS, TRAFFIC_LIGHT_COLORS, FALLBACK_GREEN
from lightpole.types import ColorLabel

logger = logging.getLogger(__name__)


def _is_green(avg, rule):
    r, g, b = avg
    margin = rule['margin']
    if not (g > r + margin and g > b + margin):
        return False
    return rule['min_green'] is None or g > rule['min_green']


def _is_red(avg, rule):
    r, g, b = avg
    margin = rule['margin']
    return r > g + margin and r > b + margin


def _is_yellow(avg, rule):
    r, g, b = avg
    return r > rule['min_red'] and g > rule['min_green'] and b < rule['max_blue']


# Order inside a band is significant: the rules can overlap.
_COLOR_RULES = [
    (ColorLabel.GREEN, 'green', _is_green),
    (ColorLabel.RED, 'red', _is_red),
    (ColorLabel.YELLOW, 'yellow', _is_yellow),
]


class TrafficLightClassifier:
    """
    Classifies the illumination state of a cropped traffic light region.

    Pixels are split into brightness bands (bright, dim, very dim) and the
    mean color of each band is tested against that band's color rules,
    brightest band first. Dimmer bands use narrower margins so dull or
    backlit arrow lights are still recovered. Pixels at or below the
    lowest band are treated as background and ignored.

    Attributes:
        bands (list): (name, lower, upper) brightness bands, brightest first
        color_rules (dict): Per-band rule parameters keyed by band name
    """

    def __init__(self, bands=None, color_rules=None, fallback_green=None):
        bands = bands or BRIGHTNESS_BANDS
        self.bands = [
            (name, band['lower'], band['upper'])
            for name, band in bands.items()
        ]
        self.color_rules = color_rules or TRAFFIC_LIGHT_COLORS
        self.fallback_green = fallback_green or FALLBACK_GREEN

    @staticmethod
    def _pixels(region):
        """
        Flatten a region into an (N, 3) float array of RGB samples.

        Args:
            region: Array-like of shape (height, width, channels) in RGB(A) order

        Returns:
            numpy.ndarray or None: RGB samples, or None for a region that has
            no usable pixels
        """
        pixels = np.asarray(region)
        if pixels.ndim != 3 or pixels.shape[2] < 3 or pixels.size == 0:
            return None
        # astype copies, the caller's buffer is never touched
        return pixels[:, :, :3].reshape(-1, 3).astype(np.float64)

    def band_averages(self, pixels):
        """
        Mean RGB of each non-empty brightness band.

        Args:
            pixels (numpy.ndarray): (N, 3) RGB samples

        Returns:
            list: (band name, (avg_r, avg_g, avg_b)) brightest band first
        """
        brightness = pixels.sum(axis=1) / 3
        averages = []
        for name, lower, upper in self.bands:
            mask = brightness > lower
            if upper is not None:
                mask &= brightness <= upper
            if not mask.any():
                continue
            averages.append((name, tuple(pixels[mask].mean(axis=0))))
        return averages

    def match_band(self, band, avg):
        """Return the first color whose rule matches the band average, or None."""
        rules = self.color_rules[band]
        for label, key, predicate in _COLOR_RULES:
            if predicate(avg, rules[key]):
                return label
        return None

    def fallback_classification(self, pixels):
        """Whole-region green check for regions no band could label."""
        r, g, b = pixels.mean(axis=0)
        margin = self.fallback_green['MARGIN']
        if g > r + margin and g > b + margin and g > self.fallback_green['MIN_GREEN']:
            return ColorLabel.GREEN
        return ColorLabel.UNKNOWN

    def classify(self, region):
        """
        Classify a cropped traffic light region.

        Args:
            region: Pixel buffer of shape (height, width, 3 or 4) in RGB(A) order

        Returns:
            ColorLabel: RED, YELLOW, GREEN, or UNKNOWN when no clear signal
            is present (including empty regions)
        """
        pixels = self._pixels(region)
        if pixels is None:
            logger.debug("Empty or malformed region, returning Unknown")
            return ColorLabel.UNKNOWN

        for band, avg in self.band_averages(pixels):
            label = self.match_band(band, avg)
            if label is not None:
                logger.debug(f"Band '{band}' average {avg} classified as {label.value}")
                return label

        return self.fallback_classification(pixels)


_default_classifier = TrafficLightClassifier()


def classify(region):
    """Classify a region with the default brightness bands and color rules."""
    return _default_classifier.classify(region)
