"""
Seam computation algorithms.

Two approaches:
1. Dynamic programming: optimal seam, O(H*W) time and table storage
2. Greedy: local walk from the best starting pixel, O(H + W), no tables,
   not guaranteed to find the minimum-energy seam

Both search vertical seams natively. Horizontal seams are vertical seams
of the transposed energy map.
"""

import torch
from typing import Tuple

from .errors import EmptyEnergyMap

DIRECTIONS = ('vertical', 'horizontal')

# Predecessor candidates in tie-break order: above, above-left, above-right
_NEIGHBOR_OFFSETS = (0, -1, 1)


def _check_direction(direction: str):
    if direction not in DIRECTIONS:
        raise ValueError(f"Invalid direction: {direction}")


def _check_energy(energy: torch.Tensor):
    if not isinstance(energy, torch.Tensor):
        raise EmptyEnergyMap(f"Expected a torch.Tensor energy map, got {type(energy).__name__}")
    if energy.dim() != 2:
        raise EmptyEnergyMap(f"Expected a 2-D energy map, got shape {tuple(energy.shape)}")
    H, W = energy.shape
    if H == 0 or W == 0:
        raise EmptyEnergyMap(f"Energy map has zero dimensions: {H}x{W}")


def _oriented(energy: torch.Tensor, direction: str) -> torch.Tensor:
    """Energy laid out so the seam runs down the rows."""
    _check_direction(direction)
    _check_energy(energy)
    if direction == 'horizontal':
        return energy.t()
    return energy


def dp_tables(energy: torch.Tensor) -> Tuple[torch.Tensor, torch.Tensor]:
    """
    Fill the cumulative-cost and backtrack tables for vertical seams.

    dp[i, j] = energy[i, j] + min(dp[i-1, j-1], dp[i-1, j], dp[i-1, j+1])

    Neighbors outside the map are excluded. When predecessors tie, the
    one directly above wins, then the left, then the right.

    Args:
        energy: Energy map (H, W)

    Returns:
        dp: float64 (H, W) cumulative minimum energy from row 0
        backtrack: long (H, W) predecessor column in the row above
            (row 0 points at itself)
    """
    _check_energy(energy)
    H, W = energy.shape
    device = energy.device

    # Accumulate in double precision regardless of the energy dtype
    cost = energy.to(torch.float64)
    dp = torch.empty(H, W, dtype=torch.float64, device=device)
    backtrack = torch.empty(H, W, dtype=torch.long, device=device)

    cols = torch.arange(W, device=device)
    offsets = torch.tensor(_NEIGHBOR_OFFSETS, dtype=torch.long, device=device)

    dp[0] = cost[0]
    backtrack[0] = cols

    inf = torch.full((1,), float('inf'), dtype=torch.float64, device=device)

    for i in range(1, H):
        prev = dp[i - 1]
        prev_left = torch.cat([inf, prev[:-1]])
        prev_right = torch.cat([prev[1:], inf])

        # (3, W) in tie-break order; argmin returns the first minimum
        candidates = torch.stack([prev, prev_left, prev_right])
        choice = torch.argmin(candidates, dim=0)

        dp[i] = cost[i] + candidates.gather(0, choice.unsqueeze(0)).squeeze(0)
        backtrack[i] = cols + offsets[choice]

    return dp, backtrack


def dp_seam(energy: torch.Tensor, direction: str = 'vertical') -> torch.Tensor:
    """
    Compute the minimum-energy seam with dynamic programming.

    The seam ends at the cheapest cell of the last row (lowest column on
    ties) and is traced back to row 0 through the backtrack table.

    Args:
        energy: Energy map (H, W)
        direction: 'vertical' or 'horizontal'

    Returns:
        Seam indices - for vertical: (H,) with column index per row
                      for horizontal: (W,) with row index per column

    Raises:
        EmptyEnergyMap: if the map has zero rows or columns
    """
    oriented = _oriented(energy, direction)
    dp, backtrack = dp_tables(oriented)
    n_lines = dp.shape[0]

    seam = torch.empty(n_lines, dtype=torch.long, device=oriented.device)
    seam[-1] = torch.argmin(dp[-1])
    for i in range(n_lines - 2, -1, -1):
        seam[i] = backtrack[i + 1, seam[i + 1]]

    return seam


def greedy_seam(energy: torch.Tensor, direction: str = 'vertical') -> torch.Tensor:
    """
    Compute a seam by walking greedily from the cheapest starting pixel.

    Starts at the minimum of the first row (first column for horizontal
    seams, lowest index on ties). Each step looks at the previous index
    and its two neighbors and only moves for strictly lower energy, so
    staying put wins ties, and left wins a tie against right.

    Args:
        energy: Energy map (H, W)
        direction: 'vertical' or 'horizontal'

    Returns:
        Seam indices (same format as dp_seam)

    Raises:
        EmptyEnergyMap: if the map has zero rows or columns
    """
    oriented = _oriented(energy, direction)
    H, W = oriented.shape

    seam = torch.empty(H, dtype=torch.long, device=oriented.device)
    col = int(torch.argmin(oriented[0]))
    seam[0] = col

    for i in range(1, H):
        # Only the (up to) three cells next to the previous position are read
        left = max(0, col - 1)
        right = min(W - 1, col + 1)
        window = oriented[i, left:right + 1].tolist()

        best_col = col
        best_energy = window[col - left]
        for offset in _NEIGHBOR_OFFSETS[1:]:
            candidate = col + offset
            if left <= candidate <= right and window[candidate - left] < best_energy:
                best_col = candidate
                best_energy = window[candidate - left]
        col = best_col
        seam[i] = col

    return seam


find_seam_optimal = dp_seam
find_seam_greedy = greedy_seam


def seam_energy(energy: torch.Tensor, seam: torch.Tensor,
                direction: str = 'vertical') -> float:
    """Total energy along a seam, accumulated in float64."""
    oriented = _oriented(energy, direction)
    lines = torch.arange(oriented.shape[0], device=oriented.device)
    return oriented.to(torch.float64)[lines, seam.to(oriented.device)].sum().item()


def is_connected(seam: torch.Tensor) -> bool:
    """True when consecutive seam entries differ by at most 1."""
    if seam.numel() < 2:
        return True
    return bool((seam[1:] - seam[:-1]).abs().max() <= 1)
