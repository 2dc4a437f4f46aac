"""
Energy functions for seam carving.

The energy function determines which pixels are "important".
Low-energy seams are preferred for removal.

For images, we use the Sobel gradient magnitude (Avidan & Shamir 2007).
"""

import torch
import torch.nn.functional as F

from .image import to_grayscale


def gradient_magnitude_energy(image: torch.Tensor) -> torch.Tensor:
    """
    Compute gradient magnitude energy for an image.

    E(i,j) = sqrt(Gx(i,j)^2 + Gy(i,j)^2)

    where Gx, Gy are 3x3 Sobel derivatives of the luminance. Borders are
    replicated, so a constant image has exactly zero energy everywhere,
    including the outermost rows and columns.

    Args:
        image: RGB image tensor (3, H, W), single channel (1, H, W),
            or grayscale (H, W)

    Returns:
        Energy map (H, W)

    Raises:
        InvalidImage: if the image is empty or malformed
    """
    gray = to_grayscale(image)

    sobel_x = torch.tensor([[-1, 0, 1],
                           [-2, 0, 2],
                           [-1, 0, 1]], dtype=gray.dtype, device=gray.device)
    sobel_x = sobel_x.view(1, 1, 3, 3)

    sobel_y = torch.tensor([[-1, -2, -1],
                           [ 0,  0,  0],
                           [ 1,  2,  1]], dtype=gray.dtype, device=gray.device)
    sobel_y = sobel_y.view(1, 1, 3, 3)

    # (1, 1, H+2, W+2) with edge pixels repeated
    padded = F.pad(gray.reshape(1, 1, *gray.shape), (1, 1, 1, 1), mode='replicate')

    grad_x = F.conv2d(padded, sobel_x)
    grad_y = F.conv2d(padded, sobel_y)

    energy = torch.sqrt(grad_x ** 2 + grad_y ** 2)

    return energy.view(gray.shape)


compute_energy = gradient_magnitude_energy


def normalize_energy(energy: torch.Tensor, eps: float = 1e-8) -> torch.Tensor:
    """Remap energy to [0, 1] range for display.

    This is a monotonic transform so seam positions are unchanged.

    Args:
        energy: Energy map (H, W)
        eps: Small value to avoid division by zero

    Returns:
        Normalized energy map in [0, 1]
    """
    e_min = energy.min()
    e_max = energy.max()
    return (energy - e_min) / (e_max - e_min + eps)
