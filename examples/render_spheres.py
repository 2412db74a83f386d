#!/usr/bin/env python3
"""Render the sphere demo scene, or a scene loaded from a JSON file.

This script renders one primary ray per pixel with Phong lighting and hard
shadows, then writes the 8-bit image to disk.

Usage:
    python -m examples.render_spheres [options]

Options:
    --width WIDTH       Image width in pixels (default: 300, or the scene file's)
    --height HEIGHT     Image height in pixels (default: 450, or the scene file's)
    --fov RADIANS       Field of view in radians (default: pi/3, or the scene file's)
    --scene PATH        JSON scene file to render instead of the demo scene
    --output OUTPUT     Output file path (default: ray.png)
    --rows-per-batch N  Rows rendered per progress update (default: 10)
    --quiet             Suppress progress output

Example:
    python -m examples.render_spheres --width 150 --height 225 --output small.png
"""

from __future__ import annotations

import argparse
import dataclasses
import sys
import time
from pathlib import Path

import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render spheres with Phong lighting and hard shadows.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=None,
        help="Image width in pixels (default: 300, or the scene file's)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=None,
        help="Image height in pixels (default: 450, or the scene file's)",
    )
    parser.add_argument(
        "--fov",
        type=float,
        default=None,
        help="Field of view in radians (default: pi/3, or the scene file's)",
    )
    parser.add_argument(
        "--scene",
        type=str,
        default=None,
        help="JSON scene file to render instead of the demo scene",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="ray.png",
        help="Output file path (default: ray.png)",
    )
    parser.add_argument(
        "--rows-per-batch",
        type=int,
        default=10,
        help="Rows rendered per progress update (default: 10)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def render_spheres(
    width: int | None = None,
    height: int | None = None,
    field_of_view: float | None = None,
    scene_path: str | None = None,
    output_path: str = "ray.png",
    rows_per_batch: int = 10,
    quiet: bool = False,
) -> Path:
    """Render the demo or configured scene and save to file.

    Args:
        width: Image width in pixels; None keeps the scene's.
        height: Image height in pixels; None keeps the scene's.
        field_of_view: Field of view in radians; None keeps the scene's.
        scene_path: Optional JSON scene file. The demo scene is used if None.
        output_path: Output file path.
        rows_per_batch: Rows rendered between progress updates.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from src.phong.core.integrator import render
    from src.phong.preview.export import save_image
    from src.phong.scene.config import load_scene_config
    from src.phong.scene.demo import DemoSceneParams, create_demo_scene

    overrides = {
        key: value
        for key, value in (("hsize", width), ("vsize", height), ("field_of_view", field_of_view))
        if value is not None
    }

    if scene_path is not None:
        if not quiet:
            print(f"Loading scene from {scene_path}...")
        config = load_scene_config(scene_path)
        config.camera = dataclasses.replace(config.camera, **overrides)
        world, camera = config.build()
    else:
        params = dataclasses.replace(DemoSceneParams(), **overrides)
        if not quiet:
            print(f"Creating demo scene ({params.hsize}x{params.vsize})...")
        world, camera = create_demo_scene(params)

    if not quiet:
        print(f"Rendering {len(world.objects)} spheres at {camera.hsize}x{camera.vsize}...")

    start_time = time.time()

    def progress_callback(rows_done: int, total_rows: int) -> None:
        if not quiet:
            elapsed = time.time() - start_time
            progress_pct = (rows_done / total_rows) * 100 if total_rows > 0 else 0
            rows_per_sec = rows_done / elapsed if elapsed > 0 else 0
            print(
                f"\r  Progress: {rows_done}/{total_rows} rows "
                f"({progress_pct:.1f}%) - {rows_per_sec:.1f} rows/s",
                end="",
                flush=True,
            )

    image = render(camera, world, rows_per_batch=rows_per_batch, callback=progress_callback)

    if not quiet:
        print()  # Newline after progress

    output_file = Path(output_path)
    save_image(image, output_file)

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    # Rendering is serial, so the CPU backend is used
    ti.init(arch=ti.cpu)

    try:
        render_spheres(
            width=args.width,
            height=args.height,
            field_of_view=args.fov,
            scene_path=args.scene,
            output_path=args.output,
            rows_per_batch=args.rows_per_batch,
            quiet=args.quiet,
        )
        return 0
    except (OSError, ValueError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
