class InvalidGeometry(ValueError):
    """Raised when image dimensions make a geometric ratio meaningless."""
