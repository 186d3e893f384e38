#!/usr/bin/env python3
"""Render the sphere-only Cornell box scene to a PNG file.

This script demonstrates end-to-end rendering: it builds the Cornell box
preset, renders it on the best available device and writes the result with
Pillow.

Usage:
    python examples/render_cornell_box.py [options]

Options:
    --width WIDTH       Image width in pixels (default: 256)
    --height HEIGHT     Image height in pixels (default: 256)
    --samples SAMPLES   Number of samples per pixel (default: 64)
    --output OUTPUT     Output file path (default: cornell_box.png)
    --cpu               Render on the host CPU even if a GPU is available
    --verbose           Log per-render details

Example:
    python examples/render_cornell_box.py --width 128 --height 128 --samples 32
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from PIL import Image as PILImage

logger = logging.getLogger("render_cornell_box")


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the Cornell box scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=256,
        help="Image width in pixels (default: 256)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=256,
        help="Image height in pixels (default: 256)",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=64,
        help="Number of samples per pixel (default: 64)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="cornell_box.png",
        help="Output file path (default: cornell_box.png)",
    )
    parser.add_argument(
        "--cpu",
        action="store_true",
        help="Render on the host CPU",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log per-render details",
    )
    return parser.parse_args()


def render_cornell_box(
    width: int = 256,
    height: int = 256,
    samples_per_pixel: int = 64,
    output_path: str = "cornell_box.png",
    force_host_cpu: bool = False,
) -> Path:
    """Render the Cornell box scene and save it as a PNG.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        samples_per_pixel: Number of samples per pixel.
        output_path: Output file path.
        force_host_cpu: Render on the CPU even if a GPU is available.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports so logging is configured before Taichi starts
    from tracer.core.renderer import Renderer, RendererConfig
    from tracer.scene.cornell_box import create_cornell_box_scene

    renderer = Renderer(RendererConfig(force_host_cpu=force_host_cpu))
    logger.info("Rendering using %s", renderer.device_name)
    logger.info("Samples per pixel: %d", samples_per_pixel)

    scene, camera = create_cornell_box_scene()
    image = renderer.render(scene, camera, samples_per_pixel, width, height)

    output_file = Path(output_path)
    PILImage.fromarray(image.to_array()).save(output_file)
    logger.info("Saved to %s", output_file.absolute())
    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        render_cornell_box(
            width=args.width,
            height=args.height,
            samples_per_pixel=args.samples,
            output_path=args.output,
            force_host_cpu=args.cpu,
        )
        return 0
    except (ValueError, RuntimeError) as e:
        logger.error("Error: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
