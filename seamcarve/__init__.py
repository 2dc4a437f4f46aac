"""
Content-aware image resizing by seam carving.

Based on "Seam Carving for Content-Aware Image Resizing"
by Avidan & Shamir, 2007.
"""

__version__ = "0.1.0"

from .errors import (SeamCarvingError, InvalidImage, EmptyEnergyMap,
                     SeamMismatch, SeamOutOfRange, DimensionExhausted)
from .image import validate_image, to_grayscale, from_array, to_array
from .energy import gradient_magnitude_energy, compute_energy, normalize_energy
from .seam import (dp_seam, dp_tables, greedy_seam, find_seam_optimal,
                   find_seam_greedy, seam_energy, is_connected)
from .carving import (
    remove_seam,
    visualize_seam,
    carve_image,
    CarvingState,
    SeamCarver,
)

__all__ = [
    'SeamCarvingError',
    'InvalidImage',
    'EmptyEnergyMap',
    'SeamMismatch',
    'SeamOutOfRange',
    'DimensionExhausted',
    'validate_image',
    'to_grayscale',
    'from_array',
    'to_array',
    'gradient_magnitude_energy',
    'compute_energy',
    'normalize_energy',
    'dp_seam',
    'dp_tables',
    'greedy_seam',
    'find_seam_optimal',
    'find_seam_greedy',
    'seam_energy',
    'is_connected',
    'remove_seam',
    'visualize_seam',
    'carve_image',
    'CarvingState',
    'SeamCarver',
]
