"""
Seam carving demo: DP vs greedy seam search on one image.

Loads an image, previews the next vertical and horizontal seams, removes
seams with both search methods, and writes the results plus an energy
map figure to the output directory.

Run:
    python examples/basic_seam_carving.py photo.jpg --vertical 50 --horizontal 20
"""

import argparse
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

import torch
import numpy as np
import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import matplotlib.pyplot as plt
from PIL import Image

from seamcarve import (SeamCarver, from_array, to_array, normalize_energy,
                       seam_energy, dp_seam, greedy_seam)

OUTPUT_DIR = Path(__file__).parent.parent / "output"


def load_image(path: str) -> torch.Tensor:
    """Load image as a (3, H, W) float tensor in [0, 1]."""
    img = Image.open(path).convert('RGB')
    img_array = np.array(img, dtype=np.float32) / 255.0
    return from_array(img_array)


def save_image(tensor: torch.Tensor, path: Path):
    """Save a (3, H, W) float tensor as an 8-bit image."""
    img_array = to_array(tensor.clamp(0, 1))
    img_array = (img_array * 255).round().astype(np.uint8)
    Image.fromarray(img_array).save(path)
    print(f"  Saved: {path}")


def save_energy_figure(energy: torch.Tensor, path: Path):
    fig, ax = plt.subplots(figsize=(8, 6))
    ax.imshow(normalize_energy(energy).cpu().numpy(), cmap='inferno')
    ax.set_title('Gradient magnitude energy')
    ax.axis('off')
    fig.savefig(path, dpi=100, bbox_inches='tight')
    plt.close(fig)
    print(f"  Saved: {path}")


def main():
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument('image', help='Input image path')
    parser.add_argument('--vertical', type=int, default=50,
                        help='Vertical seams to remove (narrows the image)')
    parser.add_argument('--horizontal', type=int, default=0,
                        help='Horizontal seams to remove (shortens the image)')
    parser.add_argument('--output', type=Path, default=OUTPUT_DIR,
                        help='Output directory')
    args = parser.parse_args()

    args.output.mkdir(parents=True, exist_ok=True)

    print("Loading image...")
    image = load_image(args.image)
    C, H, W = image.shape
    print(f"Image size: {W}x{H}")

    if args.vertical >= W or args.horizontal >= H:
        print(f"Cannot remove {args.vertical}x{args.horizontal} seams from a {W}x{H} image")
        return 1

    carver = SeamCarver(image)

    print("\nComputing energy...")
    energy = carver.energy
    save_energy_figure(energy, args.output / 'energy.png')

    dp_cost = seam_energy(energy, dp_seam(energy))
    greedy_cost = seam_energy(energy, greedy_seam(energy))
    print(f"First vertical seam cost - DP: {dp_cost:.3f}, greedy: {greedy_cost:.3f}")

    print("\nPreviewing next seams...")
    save_image(carver.preview('vertical', color=(1.0, 0.0, 0.0)),
               args.output / 'preview_vertical.png')
    save_image(carver.preview('horizontal', color=(0.0, 1.0, 0.0)),
               args.output / 'preview_horizontal.png')

    for method in ('dp', 'greedy'):
        carver.reset()
        carver.method = method
        print(f"\nCarving with {method}...")

        for i in range(args.vertical):
            carver.remove_seam('vertical')
            if (i + 1) % 20 == 0:
                print(f"  Removed {i + 1}/{args.vertical} vertical seams, "
                      f"size: {carver.width}x{carver.height}")
        for i in range(args.horizontal):
            carver.remove_seam('horizontal')
            if (i + 1) % 20 == 0:
                print(f"  Removed {i + 1}/{args.horizontal} horizontal seams, "
                      f"size: {carver.width}x{carver.height}")

        print(f"  V-Seams: {carver.vertical_seams_removed} | "
              f"H-Seams: {carver.horizontal_seams_removed} | "
              f"Size: {carver.width}x{carver.height}")
        save_image(carver.image, args.output / f'carved_{method}.png')

    print(f"\nDone! Check {args.output}/ for results.")
    return 0


if __name__ == '__main__':
    sys.exit(main())
