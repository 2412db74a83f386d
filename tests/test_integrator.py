"""Tests for the render loop.

This module tests rendering the default world and the demo scene:
- Output shape, dtype and row/column addressing
- The reference center pixel of the default world
- Background pixels
- Row batching and progress callbacks
- Error handling for unlit worlds and invalid batch sizes

Note: Imports are done inside test methods to avoid Taichi initialization issues.
The conftest.py fixture initializes Taichi before tests run, so module-level
imports of modules containing ti.field() declarations would fail.
"""

import math

import numpy as np
import pytest


def _default_camera(hsize=11, vsize=11):
    from src.phong.camera import Camera
    from src.phong.core.transforms import view_transform

    return Camera(
        hsize=hsize,
        vsize=vsize,
        field_of_view=math.pi / 2.0,
        transform=view_transform((0.0, 0.0, -5.0), (0.0, 0.0, 0.0), (0.0, 1.0, 0.0)),
    )


class TestRenderDefaultWorld:
    """Test rendering the default world through an 11x11 camera."""

    def test_image_shape_and_dtype(self):
        """Test that render returns a (vsize, hsize, 3) uint8 array."""
        from src.phong.core.integrator import render
        from src.phong.scene.world import default_world

        image = render(_default_camera(hsize=11, vsize=7), default_world())
        assert image.shape == (7, 11, 3)
        assert image.dtype == np.uint8

    def test_center_pixel(self):
        """Test the reference color of the center pixel."""
        from src.phong.core.color import quantize_color
        from src.phong.core.integrator import render
        from src.phong.scene.world import default_world

        image = render(_default_camera(), default_world())
        assert tuple(int(c) for c in image[5, 5]) == quantize_color((0.38066, 0.47583, 0.2855))

    def test_view_transform_assigned_after_construction(self):
        """Test rendering with a transform set on an existing camera."""
        from src.phong.camera import Camera
        from src.phong.core.color import quantize_color
        from src.phong.core.integrator import render
        from src.phong.core.transforms import view_transform
        from src.phong.scene.world import default_world

        camera = Camera(hsize=11, vsize=11, field_of_view=math.pi / 2.0)
        camera.transform = view_transform((0.0, 0.0, -5.0), (0.0, 0.0, 0.0), (0.0, 1.0, 0.0))
        image = render(camera, default_world())
        assert tuple(int(c) for c in image[5, 5]) == quantize_color((0.38066, 0.47583, 0.2855))

    def test_corner_pixels_are_background(self):
        """Test that rays missing the sphere are black."""
        from src.phong.core.integrator import render
        from src.phong.scene.world import default_world

        image = render(_default_camera(), default_world())
        for y, x in [(0, 0), (0, 10), (10, 0), (10, 10)]:
            assert tuple(image[y, x]) == (0, 0, 0)

    def test_render_pixel_matches_image(self):
        """Test that render_pixel reports the unquantized center color."""
        from src.phong.core.integrator import render, render_pixel
        from src.phong.scene.world import default_world

        render(_default_camera(), default_world())
        color = render_pixel(5, 5)
        for got, want in zip(color, (0.38066, 0.47583, 0.2855)):
            assert abs(got - want) < 1e-4

    def test_rows_are_addressed_top_down(self):
        """Test that image[y, x] has row 0 at the top of the view."""
        from src.phong.core.integrator import render
        from src.phong.core.transforms import translation
        from src.phong.scene.world import WorldBuilder

        # A single sphere above the view axis lights up only the top rows
        builder = WorldBuilder()
        builder.add_sphere(radius=0.5, transform=translation(0.0, 2.0, 0.0))
        builder.add_light(position=(0.0, 10.0, -10.0))
        image = render(_default_camera(), builder.build())

        lit_rows = [y for y in range(11) if image[y].any()]
        assert lit_rows
        assert max(lit_rows) < 5


class TestRenderBatching:
    """Test row batching and progress reporting."""

    def test_callback_reports_progress(self):
        """Test that the callback is called after every batch."""
        from src.phong.core.integrator import render
        from src.phong.scene.world import default_world

        calls = []
        render(
            _default_camera(),
            default_world(),
            rows_per_batch=4,
            callback=lambda done, total: calls.append((done, total)),
        )
        assert calls == [(4, 11), (8, 11), (11, 11)]

    def test_batched_render_matches_single_batch(self):
        """Test that batching does not change the image."""
        from src.phong.core.integrator import render
        from src.phong.scene.world import default_world

        single = render(_default_camera(), default_world())
        batched = render(_default_camera(), default_world(), rows_per_batch=3)
        assert np.array_equal(single, batched)

    def test_invalid_batch_size_raises(self):
        """Test that rows_per_batch must be positive."""
        from src.phong.core.integrator import render
        from src.phong.scene.world import default_world

        with pytest.raises(ValueError, match="rows_per_batch must be positive"):
            render(_default_camera(), default_world(), rows_per_batch=0)


class TestRenderErrors:
    """Test rendering error handling."""

    def test_world_without_light_raises(self):
        """Test that a world needs a light to be rendered."""
        from src.phong.core.integrator import render
        from src.phong.scene.world import WorldBuilder

        builder = WorldBuilder()
        builder.add_sphere()

        with pytest.raises(ValueError, match="World has no light source"):
            render(_default_camera(), builder.build())

    def test_world_without_objects_is_black(self):
        """Test that an empty but lit world renders the background."""
        from src.phong.core.integrator import render
        from src.phong.scene.world import WorldBuilder

        builder = WorldBuilder()
        builder.add_light(position=(-10.0, 10.0, -10.0))
        image = render(_default_camera(hsize=5, vsize=5), builder.build())
        assert not image.any()


class TestRenderDemoScene:
    """Test rendering the demo scene at reduced size."""

    def test_demo_scene_renders(self):
        """Test that the demo scene produces a non-empty image."""
        from src.phong.core.integrator import render
        from src.phong.scene.demo import DemoSceneParams, create_demo_scene

        world, camera = create_demo_scene(DemoSceneParams(hsize=30, vsize=45))
        image = render(camera, world)
        assert image.shape == (45, 30, 3)
        assert image.any()
