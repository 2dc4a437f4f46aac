"""
Image tensor helpers.

The core works on (C, H, W) tensors with 1 or 3 channels, or (H, W)
grayscale tensors. Decoders such as PIL hand out (H, W, C) arrays, so
conversion between the two layouts lives here too.
"""

import numpy as np
import torch
from typing import Tuple

from .errors import InvalidImage

SUPPORTED_CHANNELS = (1, 3)


def validate_image(image: torch.Tensor) -> Tuple[torch.Tensor, bool]:
    """
    Check an image and bring it to (C, H, W) layout.

    Args:
        image: Image tensor (C, H, W) or grayscale (H, W)

    Returns:
        (image, squeezed) - the (C, H, W) view and whether the input was 2-D

    Raises:
        InvalidImage: on None, non-tensor, wrong rank, unsupported channel
            count, or zero height/width
    """
    if image is None:
        raise InvalidImage("Image is None")
    if not isinstance(image, torch.Tensor):
        raise InvalidImage(f"Expected a torch.Tensor, got {type(image).__name__}")

    if image.dim() == 2:
        image = image.unsqueeze(0)
        squeezed = True
    elif image.dim() == 3:
        squeezed = False
    else:
        raise InvalidImage(f"Expected (H, W) or (C, H, W) image, got shape {tuple(image.shape)}")

    C, H, W = image.shape
    if C not in SUPPORTED_CHANNELS:
        raise InvalidImage(f"Unsupported channel count: {C}")
    if H == 0 or W == 0:
        raise InvalidImage(f"Image is empty: {H}x{W}")

    return image, squeezed


def to_grayscale(image: torch.Tensor) -> torch.Tensor:
    """
    Luminance of an image as a floating (H, W) tensor.

    RGB uses the ITU-R 601 weights. Integer images are promoted to
    float32; float64 input stays float64.
    """
    image, _ = validate_image(image)

    dtype = torch.float64 if image.dtype == torch.float64 else torch.float32
    image = image.to(dtype)

    if image.shape[0] == 3:
        return 0.299 * image[0] + 0.587 * image[1] + 0.114 * image[2]
    return image[0]


def from_array(array: np.ndarray) -> torch.Tensor:
    """Convert an (H, W) or (H, W, C) array to an (H, W) or (C, H, W) tensor."""
    array = np.ascontiguousarray(array)
    tensor = torch.from_numpy(array)
    if tensor.dim() == 3:
        tensor = tensor.permute(2, 0, 1).contiguous()
    return tensor


def to_array(image: torch.Tensor) -> np.ndarray:
    """Convert an (H, W) or (C, H, W) tensor back to (H, W) or (H, W, C)."""
    image = image.detach().cpu()
    if image.dim() == 3:
        image = image.permute(1, 2, 0)
    return image.contiguous().numpy()
