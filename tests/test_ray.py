"""Unit tests for the Ray dataclass and kernel vector helpers.

Tests cover:
- Ray creation and evaluation at parameter t
- Dot, cross, length and normalize
- Reflection about a normal
- Point/vector/ray transformation by 4x4 matrices
"""

import math

import taichi as ti


class TestRay:
    """Tests for Ray creation and evaluation."""

    def test_ray_at_computes_position(self):
        """Test that ray_at returns origin + t * direction."""
        from src.phong.core.ray import make_ray, ray_at, vec3

        results = ti.Vector.field(3, dtype=ti.f32, shape=4)

        @ti.kernel
        def test_kernel():
            ray = make_ray(vec3(2.0, 3.0, 4.0), vec3(1.0, 0.0, 0.0))
            results[0] = ray_at(ray, 0.0)
            results[1] = ray_at(ray, 1.0)
            results[2] = ray_at(ray, -1.0)
            results[3] = ray_at(ray, 2.5)

        test_kernel()
        expected = [(2.0, 3.0, 4.0), (3.0, 3.0, 4.0), (1.0, 3.0, 4.0), (4.5, 3.0, 4.0)]
        for i, point in enumerate(expected):
            for c in range(3):
                assert abs(results[i][c] - point[c]) < 1e-6

    def test_ray_keeps_unnormalized_direction(self):
        """Test that Ray stores its direction as given."""
        from src.phong.core.ray import Ray, vec3

        direction = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, 2.0))
            direction[None] = ray.direction

        test_kernel()
        assert abs(direction[None][2] - 2.0) < 1e-6


class TestVectorHelpers:
    """Tests for dot, cross, length and normalize."""

    def test_cross_product(self):
        """Test that cross is anticommutative and follows the right-hand rule."""
        from src.phong.core.ray import cross, vec3

        results = ti.Vector.field(3, dtype=ti.f32, shape=3)

        @ti.kernel
        def test_kernel():
            results[0] = cross(vec3(1.0, 2.0, 3.0), vec3(2.0, 3.0, 4.0))
            results[1] = cross(vec3(2.0, 3.0, 4.0), vec3(1.0, 2.0, 3.0))
            results[2] = cross(vec3(1.0, 0.0, 0.0), vec3(0.0, 1.0, 0.0))

        test_kernel()
        expected = [(-1.0, 2.0, -1.0), (1.0, -2.0, 1.0), (0.0, 0.0, 1.0)]
        for i, exp in enumerate(expected):
            for j in range(3):
                assert abs(results[i][j] - exp[j]) < 1e-6

    def test_dot_length_normalize(self):
        """Test dot products, magnitudes and unit vectors."""
        from src.phong.core.ray import dot, length, normalize, vec3

        scalars = ti.field(dtype=ti.f32, shape=2)
        unit = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            scalars[0] = dot(vec3(1.0, 2.0, 3.0), vec3(2.0, 3.0, 4.0))
            scalars[1] = length(vec3(1.0, 2.0, 3.0))
            unit[None] = normalize(vec3(1.0, 2.0, 3.0))

        test_kernel()
        assert abs(scalars[0] - 20.0) < 1e-5
        assert abs(scalars[1] - math.sqrt(14.0)) < 1e-5
        s = math.sqrt(14.0)
        for got, want in zip(unit[None], (1.0 / s, 2.0 / s, 3.0 / s)):
            assert abs(got - want) < 1e-6


class TestReflect:
    """Tests for reflection about a normal."""

    def test_reflect_approaching_at_45_degrees(self):
        """Test reflecting a vector approaching at 45 degrees."""
        from src.phong.core.ray import reflect, vec3

        result = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = reflect(vec3(1.0, -1.0, 0.0), vec3(0.0, 1.0, 0.0))

        test_kernel()
        r = result[None]
        assert abs(r[0] - 1.0) < 1e-6
        assert abs(r[1] - 1.0) < 1e-6
        assert abs(r[2]) < 1e-6

    def test_reflect_off_slanted_surface(self):
        """Test reflecting straight down off a 45 degree surface."""
        from src.phong.core.ray import reflect, vec3

        result = ti.Vector.field(3, dtype=ti.f32, shape=())
        s = math.sqrt(2.0) / 2.0

        @ti.kernel
        def test_kernel():
            result[None] = reflect(vec3(0.0, -1.0, 0.0), vec3(s, s, 0.0))

        test_kernel()
        r = result[None]
        assert abs(r[0] - 1.0) < 1e-5
        assert abs(r[1]) < 1e-5
        assert abs(r[2]) < 1e-5


class TestTransformHelpers:
    """Tests for applying 4x4 matrices inside kernels."""

    def test_transform_point_applies_translation(self):
        """Test that points are translated."""
        from src.phong.core.ray import transform_point, vec3
        from src.phong.core.transforms import translation

        m = translation(5.0, -3.0, 2.0)
        result = ti.Vector.field(3, dtype=ti.f32, shape=())
        matrix = ti.Matrix.field(4, 4, dtype=ti.f32, shape=())
        matrix[None] = ti.Matrix(m.tolist())

        @ti.kernel
        def test_kernel():
            result[None] = transform_point(matrix[None], vec3(-3.0, 4.0, 5.0))

        test_kernel()
        r = result[None]
        assert abs(r[0] - 2.0) < 1e-6
        assert abs(r[1] - 1.0) < 1e-6
        assert abs(r[2] - 7.0) < 1e-6

    def test_transform_vector_ignores_translation(self):
        """Test that vectors are not translated."""
        from src.phong.core.ray import transform_vector, vec3
        from src.phong.core.transforms import translation

        result = ti.Vector.field(3, dtype=ti.f32, shape=())
        matrix = ti.Matrix.field(4, 4, dtype=ti.f32, shape=())
        matrix[None] = ti.Matrix(translation(5.0, -3.0, 2.0).tolist())

        @ti.kernel
        def test_kernel():
            result[None] = transform_vector(matrix[None], vec3(-3.0, 4.0, 5.0))

        test_kernel()
        r = result[None]
        assert abs(r[0] + 3.0) < 1e-6
        assert abs(r[1] - 4.0) < 1e-6
        assert abs(r[2] - 5.0) < 1e-6

    def test_transform_ray_scales_without_normalizing(self):
        """Test that a scaled ray keeps an unnormalized direction."""
        from src.phong.core.ray import make_ray, transform_ray, vec3
        from src.phong.core.transforms import scaling

        origin = ti.Vector.field(3, dtype=ti.f32, shape=())
        direction = ti.Vector.field(3, dtype=ti.f32, shape=())
        matrix = ti.Matrix.field(4, 4, dtype=ti.f32, shape=())
        matrix[None] = ti.Matrix(scaling(2.0, 3.0, 4.0).tolist())

        @ti.kernel
        def test_kernel():
            ray = transform_ray(matrix[None], make_ray(vec3(1.0, 2.0, 3.0), vec3(0.0, 1.0, 0.0)))
            origin[None] = ray.origin
            direction[None] = ray.direction

        test_kernel()
        assert abs(origin[None][0] - 2.0) < 1e-6
        assert abs(origin[None][1] - 6.0) < 1e-6
        assert abs(origin[None][2] - 12.0) < 1e-6
        assert abs(direction[None][0]) < 1e-6
        assert abs(direction[None][1] - 3.0) < 1e-6
        assert abs(direction[None][2]) < 1e-6
