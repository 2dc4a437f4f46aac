"""
Seam removal, seam visualization, and the carving loop built on them.
"""

import enum

import torch
from typing import Optional, Sequence, Union

from .energy import gradient_magnitude_energy
from .errors import DimensionExhausted, SeamMismatch, SeamOutOfRange
from .image import validate_image
from .seam import _check_direction, dp_seam, greedy_seam

METHODS = {
    'dp': dp_seam,
    'greedy': greedy_seam,
}

Color = Union[float, int, Sequence[float]]


def _check_method(method: str):
    if method not in METHODS:
        raise ValueError(f"Invalid method: {method!r}. Must be 'dp' or 'greedy'.")


def _check_seam(seam: torch.Tensor, n_lines: int, direction: str) -> torch.Tensor:
    """Seam as a 1-D long tensor with one entry per row/column it spans."""
    seam = torch.as_tensor(seam)
    if seam.dtype == torch.bool or seam.is_floating_point() or seam.is_complex():
        raise SeamMismatch(f"Seam entries must be integers, got {seam.dtype}")
    seam = seam.to(torch.long)
    if seam.dim() != 1 or seam.shape[0] != n_lines:
        raise SeamMismatch(
            f"{direction.capitalize()} seam must have {n_lines} entries, "
            f"got shape {tuple(seam.shape)}")
    return seam


def _check_seam_range(seam: torch.Tensor, extent: int):
    bad = (seam < 0) | (seam >= extent)
    if bad.any():
        line = int(torch.nonzero(bad)[0])
        raise SeamOutOfRange(
            f"Seam position {int(seam[line])} at index {line} outside [0, {extent})")


def remove_seam(image: torch.Tensor, seam: torch.Tensor,
                direction: str = 'vertical') -> torch.Tensor:
    """
    Remove a seam from an image.

    The input is never modified. For a vertical seam, row i of the result
    holds image[:, i, :col] followed by image[:, i, col+1:], so everything
    right of the seam shifts left by one. Horizontal removal is the same
    operation on the transposed image.

    Args:
        image: Image tensor (C, H, W) or (H, W)
        seam: Seam indices - (H,) for vertical, (W,) for horizontal
        direction: 'vertical' or 'horizontal'

    Returns:
        Carved image with one column (vertical) or row (horizontal) removed

    Raises:
        InvalidImage: if the image is empty or malformed
        SeamMismatch: if the seam length does not match the image
        DimensionExhausted: if the carved axis already has extent 1
        SeamOutOfRange: if a seam entry is outside the image
    """
    _check_direction(direction)
    image, squeeze_output = validate_image(image)
    C, H, W = image.shape

    # Work on a view where the seam runs down the rows
    source = image if direction == 'vertical' else image.transpose(1, 2)
    _, n_lines, extent = source.shape

    seam = _check_seam(seam, n_lines, direction)
    if extent <= 1:
        raise DimensionExhausted(
            f"Cannot remove a {direction} seam from a {H}x{W} image")
    _check_seam_range(seam, extent)

    # Fresh destination buffer: source and destination never alias
    carved = torch.empty(C, n_lines, extent - 1, dtype=image.dtype, device=image.device)

    for i, pos in enumerate(seam.tolist()):
        carved[:, i, :pos] = source[:, i, :pos]
        carved[:, i, pos:] = source[:, i, pos + 1:]

    if direction == 'horizontal':
        carved = carved.transpose(1, 2).contiguous()

    if squeeze_output:
        carved = carved.squeeze(0)

    return carved


def _default_color(image: torch.Tensor) -> torch.Tensor:
    C = image.shape[0]
    if image.dtype.is_floating_point:
        full = 1.0
    else:
        full = float(torch.iinfo(image.dtype).max)
    color = torch.zeros(C, dtype=torch.float64)
    color[0] = full
    return color


def _color_tensor(image: torch.Tensor, color: Optional[Color]) -> torch.Tensor:
    C = image.shape[0]
    if color is None:
        color = _default_color(image)
    color = torch.as_tensor(color, dtype=torch.float64).flatten()
    if color.numel() == 1:
        color = color.expand(C)
    if color.numel() != C:
        raise ValueError(f"Color has {color.numel()} values for a {C}-channel image")
    return color.to(image.device).view(C, 1, 1)


def visualize_seam(image: torch.Tensor, seam: torch.Tensor,
                   direction: str = 'vertical',
                   color: Optional[Color] = None) -> torch.Tensor:
    """
    Highlight a seam on a copy of an image.

    Seam pixels take `color`. Pixels directly above, below, left or right
    of a seam pixel (and not on the seam) are blended 50/50 with `color`.
    Every other pixel is bit-identical to the input, which is not modified.
    Seam entries outside the image are skipped.

    Args:
        image: Image tensor (C, H, W) or (H, W)
        seam: Seam indices - (H,) for vertical, (W,) for horizontal
        direction: 'vertical' or 'horizontal'
        color: Scalar or per-channel highlight value. Defaults to full
            intensity on channel 0 (red for RGB, white for grayscale)

    Returns:
        Annotated copy with the same shape and dtype as `image`

    Raises:
        SeamMismatch: if the seam length or dtype does not match the image
    """
    _check_direction(direction)
    image, squeeze_output = validate_image(image)
    C, H, W = image.shape

    n_lines, extent = (H, W) if direction == 'vertical' else (W, H)
    seam = _check_seam(seam, n_lines, direction).to(image.device)

    lines = torch.arange(n_lines, device=image.device)
    inside = (seam >= 0) & (seam < extent)
    lines, seam = lines[inside], seam[inside]

    on_seam = torch.zeros(H, W, dtype=torch.bool, device=image.device)
    if direction == 'vertical':
        on_seam[lines, seam] = True
    else:
        on_seam[seam, lines] = True

    near_seam = torch.zeros_like(on_seam)
    near_seam[1:, :] |= on_seam[:-1, :]
    near_seam[:-1, :] |= on_seam[1:, :]
    near_seam[:, 1:] |= on_seam[:, :-1]
    near_seam[:, :-1] |= on_seam[:, 1:]
    near_seam &= ~on_seam

    color = _color_tensor(image, color)
    blended = 0.5 * image.to(torch.float64) + 0.5 * color
    painted = color.expand(C, H, W)
    if not image.dtype.is_floating_point:
        blended = blended.round()
        painted = painted.round()

    result = image.clone()
    result[:, near_seam] = blended[:, near_seam].to(image.dtype)
    result[:, on_seam] = painted[:, on_seam].to(image.dtype)

    if squeeze_output:
        result = result.squeeze(0)

    return result


def carve_image(image: torch.Tensor, n_seams: int,
                direction: str = 'vertical', method: str = 'dp') -> torch.Tensor:
    """
    Remove n_seams seams, recomputing energy before every search.

    Args:
        image: Image tensor (C, H, W) or (H, W)
        n_seams: Number of seams to remove
        direction: 'vertical' or 'horizontal'
        method: 'dp' (optimal, default) or 'greedy' (fast, may wander)

    Returns:
        Carved image
    """
    _check_direction(direction)
    _check_method(method)
    if n_seams < 0:
        raise ValueError(f"n_seams must be non-negative, got {n_seams}")

    find_seam = METHODS[method]
    validate_image(image)
    carved = image.clone()

    for _ in range(n_seams):
        energy = gradient_magnitude_energy(carved)
        seam = find_seam(energy, direction=direction)
        carved = remove_seam(carved, seam, direction=direction)

    return carved


class CarvingState(enum.Enum):
    LOADED = 'loaded'
    ENERGY_COMPUTED = 'energy_computed'
    SEAM_FOUND = 'seam_found'
    VISUALIZED = 'visualized'
    ENERGY_STALE = 'energy_stale'


class SeamCarver:
    """
    Interactive carving session over one image.

    The session owns a working copy of the image. Every removal replaces
    that copy and marks the energy map stale, so the next search always
    runs on energy computed from the current pixels.
    """

    def __init__(self, image: torch.Tensor, method: str = 'dp'):
        _check_method(method)
        validate_image(image)
        self.original = image.clone()
        self.method = method
        self._image = image.clone()
        self._energy = None
        self.seam = None
        self.seam_direction = None
        self.state = CarvingState.LOADED
        self.vertical_seams_removed = 0
        self.horizontal_seams_removed = 0

    @property
    def image(self) -> torch.Tensor:
        return self._image

    @property
    def height(self) -> int:
        return self._image.shape[-2]

    @property
    def width(self) -> int:
        return self._image.shape[-1]

    def toggle_method(self) -> str:
        """Switch between 'dp' and 'greedy' search; returns the new method."""
        self.method = 'greedy' if self.method == 'dp' else 'dp'
        return self.method

    def compute_energy(self) -> torch.Tensor:
        self._energy = gradient_magnitude_energy(self._image)
        self.state = CarvingState.ENERGY_COMPUTED
        return self._energy

    @property
    def energy(self) -> torch.Tensor:
        """Energy of the current image, recomputed if the image changed."""
        if self.state in (CarvingState.LOADED, CarvingState.ENERGY_STALE):
            return self.compute_energy()
        return self._energy

    def find_seam(self, direction: str = 'vertical') -> torch.Tensor:
        """Search the current image for a seam with the session's method."""
        _check_direction(direction)
        seam = METHODS[self.method](self.energy, direction=direction)
        self.seam = seam
        self.seam_direction = direction
        self.state = CarvingState.SEAM_FOUND
        return seam

    def preview(self, direction: str = 'vertical',
                color: Optional[Color] = None) -> torch.Tensor:
        """Return a copy of the current image with the next seam highlighted."""
        seam = self.find_seam(direction)
        annotated = visualize_seam(self._image, seam, direction=direction, color=color)
        self.state = CarvingState.VISUALIZED
        return annotated

    def remove_seam(self, direction: str = 'vertical',
                    seam: Optional[torch.Tensor] = None) -> torch.Tensor:
        """
        Remove one seam from the current image.

        With no seam given, a fresh one is found first. On any error the
        image, counters and state are left as they were.
        """
        _check_direction(direction)
        if seam is None:
            extent = self.width if direction == 'vertical' else self.height
            if extent <= 1:
                raise DimensionExhausted(
                    f"Cannot remove a {direction} seam from a "
                    f"{self.height}x{self.width} image")
            seam = self.find_seam(direction)

        carved = remove_seam(self._image, seam, direction=direction)

        self._image = carved
        self._energy = None
        self.seam = None
        self.seam_direction = None
        self.state = CarvingState.ENERGY_STALE
        if direction == 'vertical':
            self.vertical_seams_removed += 1
        else:
            self.horizontal_seams_removed += 1
        return carved

    def carve(self, n_seams: int, direction: str = 'vertical') -> torch.Tensor:
        if n_seams < 0:
            raise ValueError(f"n_seams must be non-negative, got {n_seams}")
        for _ in range(n_seams):
            self.remove_seam(direction)
        return self._image

    def reset(self):
        """Restore the original image and clear the seam counters."""
        self._image = self.original.clone()
        self._energy = None
        self.seam = None
        self.seam_direction = None
        self.state = CarvingState.LOADED
        self.vertical_seams_removed = 0
        self.horizontal_seams_removed = 0
