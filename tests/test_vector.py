"""Unit tests for vector algebra and random vector sampling.

Tests cover:
- length, length_squared, unit, dot, cross
- reflect and refract
- near_zero
- Rejection samplers (unit ball, unit disk) and random unit vectors
"""

import math

import numpy as np
import pytest
import taichi as ti

NUM_SAMPLES = 2000


class TestGeometricOperations:
    """Tests for the deterministic vector operations."""

    def test_length_and_length_squared(self):
        """Test length of a 3-4-12 vector."""
        from weekend_tracer.core.vector import length, length_squared, vec3

        len_result = ti.field(dtype=ti.f32, shape=())
        len_sq_result = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            v = vec3(3.0, 4.0, 12.0)
            len_result[None] = length(v)
            len_sq_result[None] = length_squared(v)

        test_kernel()
        assert abs(len_result[None] - 13.0) < 1e-5
        assert abs(len_sq_result[None] - 169.0) < 1e-4

    def test_dot_of_self_equals_length_squared(self):
        """Test dot(v, v) == length_squared(v)."""
        from weekend_tracer.core.vector import dot, length_squared, vec3

        dot_result = ti.field(dtype=ti.f32, shape=())
        len_sq_result = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            v = vec3(1.5, -2.25, 0.75)
            dot_result[None] = dot(v, v)
            len_sq_result[None] = length_squared(v)

        test_kernel()
        assert dot_result[None] == len_sq_result[None]

    @pytest.mark.parametrize(
        "vector",
        [(3.0, 4.0, 0.0), (-0.001, 0.002, 0.003), (100.0, -250.0, 7.0)],
    )
    def test_unit_has_length_one(self, vector):
        """Test that unit(v) has length 1 for non-zero v."""
        from weekend_tracer.core.vector import length, unit, vec3

        result = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel(x: ti.f32, y: ti.f32, z: ti.f32):
            result[None] = length(unit(vec3(x, y, z)))

        test_kernel(*vector)
        assert abs(result[None] - 1.0) < 1e-5

    def test_cross_is_anticommutative(self):
        """Test cross(a, b) == -cross(b, a)."""
        from weekend_tracer.core.vector import cross, vec3

        ab = ti.field(dtype=ti.math.vec3, shape=())
        ba = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            a = vec3(1.0, 2.0, 3.0)
            b = vec3(-4.0, 0.5, 2.0)
            ab[None] = cross(a, b)
            ba[None] = cross(b, a)

        test_kernel()
        for k in range(3):
            assert abs(ab[None][k] + ba[None][k]) < 1e-6

    def test_cross_of_axes(self):
        """Test x cross y == z."""
        from weekend_tracer.core.vector import cross, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = cross(vec3(1.0, 0.0, 0.0), vec3(0.0, 1.0, 0.0))

        test_kernel()
        r = result[None]
        assert abs(r[0]) < 1e-6
        assert abs(r[1]) < 1e-6
        assert abs(r[2] - 1.0) < 1e-6

    def test_native_operators(self):
        """Test negation, component-wise multiply and scalar divide on vec3."""
        from weekend_tracer.core.vector import vec3

        neg = ti.field(dtype=ti.math.vec3, shape=())
        mul = ti.field(dtype=ti.math.vec3, shape=())
        div = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            a = vec3(1.0, -2.0, 4.0)
            b = vec3(2.0, 3.0, 0.5)
            neg[None] = -a
            mul[None] = a * b
            div[None] = a / 2.0

        test_kernel()
        assert np.allclose(neg[None].to_numpy(), [-1.0, 2.0, -4.0])
        assert np.allclose(mul[None].to_numpy(), [2.0, -6.0, 2.0])
        assert np.allclose(div[None].to_numpy(), [0.5, -1.0, 2.0])


class TestReflectRefract:
    """Tests for reflect and refract."""

    def test_reflect_flips_normal_component(self):
        """Test dot(reflect(v, n), n) == -dot(v, n) for unit n."""
        from weekend_tracer.core.vector import dot, reflect, unit, vec3

        reflected_dot = ti.field(dtype=ti.f32, shape=())
        incident_dot = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            v = vec3(0.3, -0.9, 0.2)
            n = unit(vec3(0.1, 1.0, -0.3))
            reflected_dot[None] = dot(reflect(v, n), n)
            incident_dot[None] = dot(v, n)

        test_kernel()
        assert abs(reflected_dot[None] + incident_dot[None]) < 1e-5

    def test_reflect_off_floor(self):
        """Test a 45-degree ray bouncing off a horizontal floor."""
        from weekend_tracer.core.vector import reflect, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = reflect(vec3(1.0, -1.0, 0.0), vec3(0.0, 1.0, 0.0))

        test_kernel()
        assert np.allclose(result[None].to_numpy(), [1.0, 1.0, 0.0], atol=1e-6)

    def test_refract_with_equal_indices_passes_straight(self):
        """Test that eta_ratio = 1 leaves the direction unchanged."""
        from weekend_tracer.core.vector import refract, unit, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())
        expected = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            uv = unit(vec3(1.0, -1.0, 0.0))
            expected[None] = uv
            result[None] = refract(uv, vec3(0.0, 1.0, 0.0), 1.0)

        test_kernel()
        assert np.allclose(result[None].to_numpy(), expected[None].to_numpy(), atol=1e-5)

    def test_refract_follows_snells_law(self):
        """Test sin(theta_out) == eta_ratio * sin(theta_in) for air to glass."""
        from weekend_tracer.core.vector import refract, unit, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            uv = unit(vec3(1.0, -1.0, 0.0))
            result[None] = refract(uv, vec3(0.0, 1.0, 0.0), 1.0 / 1.5)

        test_kernel()
        r = result[None].to_numpy()
        sin_out = abs(r[0]) / np.linalg.norm(r)
        sin_in = math.sin(math.radians(45.0))
        assert abs(sin_out - sin_in / 1.5) < 1e-5
        # Still heading down through the surface
        assert r[1] < 0.0


class TestNearZero:
    """Tests for near_zero."""

    def test_tiny_vector_is_near_zero(self):
        """Test that components below 1e-8 count as zero."""
        from weekend_tracer.core.vector import near_zero, vec3

        result = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = near_zero(vec3(1e-9, -1e-9, 0.0))

        test_kernel()
        assert result[None] == 1

    def test_one_large_component_is_not_near_zero(self):
        """Test that a single component above 1e-8 is enough."""
        from weekend_tracer.core.vector import near_zero, vec3

        result = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = near_zero(vec3(0.0, 0.0, 1e-6))

        test_kernel()
        assert result[None] == 0


def _sample(sampler):
    """Collect NUM_SAMPLES vectors from a sampler in a serialized loop."""
    values = ti.Vector.field(3, dtype=ti.f32, shape=NUM_SAMPLES)

    @ti.kernel
    def draw():
        ti.loop_config(serialize=True)
        for k in range(NUM_SAMPLES):
            values[k] = sampler()

    draw()
    return values.to_numpy()


class TestRandomVectors:
    """Tests for the random vector constructors."""

    def test_random_vec3_in_unit_cube(self):
        """Test that random_vec3 components lie in [0, 1)."""
        from weekend_tracer.core.vector import random_vec3

        samples = _sample(random_vec3)
        assert np.all(samples >= 0.0)
        assert np.all(samples < 1.0)

    def test_random_vec3_range(self):
        """Test that random_vec3_range components lie in [min, max)."""
        from weekend_tracer.core.vector import random_vec3_range

        values = ti.Vector.field(3, dtype=ti.f32, shape=NUM_SAMPLES)

        @ti.kernel
        def draw():
            ti.loop_config(serialize=True)
            for k in range(NUM_SAMPLES):
                values[k] = random_vec3_range(2.0, 3.0)

        draw()
        samples = values.to_numpy()
        assert np.all(samples >= 2.0)
        assert np.all(samples < 3.0)

    def test_in_unit_sphere_inside_ball(self):
        """Test that every unit-ball sample has squared length < 1."""
        from weekend_tracer.core.vector import random_in_unit_sphere

        samples = _sample(random_in_unit_sphere)
        assert np.all(np.sum(samples**2, axis=1) < 1.0)

    def test_in_unit_sphere_mean_near_zero(self):
        """Test that the component means of unit-ball samples approach 0."""
        from weekend_tracer.core.vector import random_in_unit_sphere

        samples = _sample(random_in_unit_sphere)
        assert np.all(np.abs(samples.mean(axis=0)) < 0.05)

    def test_in_unit_sphere_fills_the_ball(self):
        """Test that samples are spread through the ball, not on a shell."""
        from weekend_tracer.core.vector import random_in_unit_sphere

        samples = _sample(random_in_unit_sphere)
        radii = np.linalg.norm(samples, axis=1)
        # Uniform in the ball: P(r < 0.5) = 0.125
        assert 0.08 < np.mean(radii < 0.5) < 0.17

    def test_unit_vector_has_length_one(self):
        """Test that random unit vectors are normalized."""
        from weekend_tracer.core.vector import random_unit_vector

        samples = _sample(random_unit_vector)
        assert np.allclose(np.linalg.norm(samples, axis=1), 1.0, atol=1e-5)

    def test_unit_vector_mean_near_zero(self):
        """Test that random unit vectors cover the whole sphere."""
        from weekend_tracer.core.vector import random_unit_vector

        samples = _sample(random_unit_vector)
        assert np.all(np.abs(samples.mean(axis=0)) < 0.06)

    def test_in_unit_disk_flat_and_inside(self):
        """Test that unit-disk samples have z == 0 and squared length < 1."""
        from weekend_tracer.core.vector import random_in_unit_disk

        samples = _sample(random_in_unit_disk)
        assert np.all(samples[:, 2] == 0.0)
        assert np.all(np.sum(samples**2, axis=1) < 1.0)

    def test_in_unit_disk_mean_near_zero(self):
        """Test that the component means of unit-disk samples approach 0."""
        from weekend_tracer.core.vector import random_in_unit_disk

        samples = _sample(random_in_unit_disk)
        assert np.all(np.abs(samples[:, :2].mean(axis=0)) < 0.05)
