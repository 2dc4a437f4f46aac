"""Shared test fixtures for the seam carving test suite."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest


@pytest.fixture
def known_energy():
    """4x4 energy map whose optimal and greedy seams differ.

    Hand-computed DP table (vertical):
        [2, 5,  5,  1]
        [3, 7,  6,  5]
        [4, 8, 10, 14]
        [5, 9, 13, 19]
    Optimal seam: [0, 0, 0, 0] with cost 5.
    Greedy seam:  [3, 3, 2, 2] with cost 15.
    """
    return torch.tensor([[2., 5., 5., 1.],
                         [1., 5., 5., 4.],
                         [1., 5., 5., 9.],
                         [1., 5., 5., 9.]])


@pytest.fixture
def rgb_image():
    torch.manual_seed(42)
    return torch.rand(3, 12, 16)


def make_column_index_image(H, W, channels=1):
    """Pixel value equals its column index, so carved columns are traceable."""
    cols = torch.arange(W, dtype=torch.float32).unsqueeze(0).expand(H, W)
    return cols.unsqueeze(0).expand(channels, H, W).clone()
