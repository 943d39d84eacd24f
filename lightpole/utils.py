import cv2

from lightpole.config import CONFIDENCE_LEVELS


def to_rgb(image):
    """
    Convert an OpenCV image to RGB channel order.

    Args:
        image (np.ndarray): Image in BGR or BGRA format.

    Returns:
        np.ndarray: The image in RGB or RGBA format.
    """
    if image.ndim == 3 and image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2RGBA)
    return cv2.cvtColor(image, cv2.COLOR_BGR2RGB)


def crop_region(image, box):
    """
    Crop the pixels covered by a box.

    Args:
        image (np.ndarray): Full image, shape (height, width, channels).
        box (BoundingBox): Box already clipped to the image bounds.

    Returns:
        np.ndarray: View of the cropped region. Empty when the box has no area.
    """
    if box.width <= 0 or box.height <= 0:
        return image[0:0, 0:0]
    x1, y1 = int(box.xmin), int(box.ymin)
    # Extent is truncated, never rounded up past the box
    x2, y2 = x1 + int(box.width), y1 + int(box.height)
    return image[y1:y2, x1:x2]


def confidence_level(confidence):
    """Bucket a detection confidence into 'High', 'Medium' or 'Low'."""
    if confidence >= CONFIDENCE_LEVELS['HIGH']:
        return "High"
    if confidence >= CONFIDENCE_LEVELS['MEDIUM']:
        return "Medium"
    return "Low"
