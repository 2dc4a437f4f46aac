"""Tests for energy functions."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest
from seamcarve.energy import gradient_magnitude_energy, normalize_energy
from seamcarve.errors import InvalidImage


class TestGradientMagnitudeEnergy:
    def test_uniform_image_is_zero_everywhere(self):
        """Replicated borders mean a solid color has no energy, edges included."""
        image = torch.ones(3, 20, 20) * 0.5
        energy = gradient_magnitude_energy(image)
        assert (energy == 0).all()

    def test_flat_5x5_is_zero(self):
        image = torch.full((3, 5, 5), 128, dtype=torch.uint8)
        energy = gradient_magnitude_energy(image)
        assert energy.shape == (5, 5)
        assert (energy == 0).all()

    def test_vertical_edge_has_horizontal_energy(self):
        """An image with a single vertical edge should have energy along that edge."""
        image = torch.zeros(1, 20, 20)
        image[:, :, 10:] = 1.0
        energy = gradient_magnitude_energy(image)
        edge_energy = energy[2:-2, 9:11].mean()
        bg_energy = energy[2:-2, 2:7].mean()
        assert edge_energy > 0
        assert bg_energy == 0

    def test_horizontal_edge_has_vertical_energy(self):
        """An image with a horizontal edge should have energy along that edge."""
        image = torch.zeros(1, 20, 20)
        image[:, 10:, :] = 1.0
        energy = gradient_magnitude_energy(image)
        assert energy[9:11, :].min() > 0
        assert energy[:8, :].max() == 0

    def test_ramp_magnitude_with_replicated_border(self):
        """Pixel value = column index: Sobel gives 8 inside and 4 at the side borders."""
        H, W = 6, 7
        image = torch.arange(W, dtype=torch.float32).unsqueeze(0).expand(H, W).clone()
        energy = gradient_magnitude_energy(image)
        assert torch.allclose(energy[:, 1:-1], torch.full((H, W - 2), 8.0))
        assert torch.allclose(energy[:, 0], torch.full((H,), 4.0))
        assert torch.allclose(energy[:, -1], torch.full((H,), 4.0))

    def test_color_uses_luminance(self):
        """Only the green channel varies; energy scales with its 0.587 weight."""
        H, W = 5, 6
        image = torch.zeros(3, H, W, dtype=torch.float64)
        image[1] = torch.arange(W, dtype=torch.float64)
        energy = gradient_magnitude_energy(image)
        assert energy.dtype == torch.float64
        assert torch.allclose(energy[:, 2], torch.full((H,), 8.0 * 0.587, dtype=torch.float64))

    def test_output_shape_matches_input(self):
        """Energy map should have same spatial dimensions as input."""
        image = torch.rand(3, 32, 48)
        energy = gradient_magnitude_energy(image)
        assert energy.shape == (32, 48)

    def test_grayscale_input(self):
        """Should work with 2D grayscale input."""
        image = torch.rand(20, 20)
        energy = gradient_magnitude_energy(image)
        assert energy.shape == (20, 20)

    def test_uint8_input_is_promoted(self):
        image = torch.randint(0, 256, (3, 8, 9), dtype=torch.uint8)
        energy = gradient_magnitude_energy(image)
        assert energy.dtype == torch.float32
        assert energy.shape == (8, 9)

    def test_energy_nonnegative(self):
        """Energy is a gradient magnitude, so never negative."""
        torch.manual_seed(42)
        image = torch.rand(3, 30, 30)
        energy = gradient_magnitude_energy(image)
        assert (energy >= 0).all()

    def test_does_not_modify_input(self, rgb_image):
        before = rgb_image.clone()
        gradient_magnitude_energy(rgb_image)
        assert torch.equal(rgb_image, before)

    @pytest.mark.parametrize('image', [
        None,
        torch.zeros(3, 0, 4),
        torch.zeros(0, 5),
        torch.zeros(2, 5, 5),
        torch.zeros(1, 3, 5, 5),
    ])
    def test_invalid_image(self, image):
        with pytest.raises(InvalidImage):
            gradient_magnitude_energy(image)


class TestNormalizeEnergy:
    def test_output_range(self):
        """Normalized energy should be in [0, 1]."""
        torch.manual_seed(42)
        energy = torch.rand(20, 30) * 100 + 5
        normed = normalize_energy(energy)
        assert normed.min() >= -1e-6
        assert normed.max() <= 1.0 + 1e-6

    def test_min_is_zero_max_is_one(self):
        energy = torch.tensor([[1.0, 5.0], [3.0, 10.0]])
        normed = normalize_energy(energy)
        assert abs(normed.min().item()) < 1e-6
        assert abs(normed.max().item() - 1.0) < 1e-6

    def test_uniform_energy_produces_zeros(self):
        energy = torch.ones(10, 10) * 5.0
        normed = normalize_energy(energy)
        assert normed.max() < 1e-6
