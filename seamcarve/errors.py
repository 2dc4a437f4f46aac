"""
Exceptions raised by the seam carving core.

Every error is a deterministic validation failure reported before any
pixel is written, so the caller's image is never left half-modified.
"""


class SeamCarvingError(ValueError):
    """Base class for all seam carving validation errors."""


class InvalidImage(SeamCarvingError):
    """Image is missing, has an unsupported shape, or has no pixels."""


class EmptyEnergyMap(SeamCarvingError):
    """Energy map has zero rows or zero columns."""


class SeamMismatch(SeamCarvingError):
    """Seam length does not match the image dimension it spans."""


class SeamOutOfRange(SeamCarvingError):
    """A seam entry indexes outside the image."""


class DimensionExhausted(SeamCarvingError):
    """The carved axis is already at its minimum extent of 1."""
