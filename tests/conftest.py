"""Pytest configuration for ray tracer tests.

Provides seeded random streams, a constant-value stream for deterministic
material decisions, and small reference scenes.
"""

import random

import pytest

from core.vector import Vector3


class ConstantRandom(random.Random):
    """Random stream whose uniform draws always return the same value."""

    def __init__(self, value: float):
        self.value = value
        super().__init__(0)

    def random(self):
        return self.value


def assert_vec_close(actual, expected, tol=1e-9):
    """Component-wise comparison of two Vector3 values."""
    for a, e in zip(actual, expected):
        assert a == pytest.approx(e, abs=tol), f"{actual!r} != {expected!r}"


@pytest.fixture
def rng():
    """Seeded random stream so that tests are reproducible."""
    return random.Random(42)


@pytest.fixture
def constant_rng():
    """Factory for ConstantRandom streams."""
    return ConstantRandom


@pytest.fixture
def single_sphere_world():
    """One grey Lambertian sphere at (0, 0, -1) with radius 0.5."""
    from geometry.sphere import Sphere
    from geometry.world import HittableList
    from materials.lambertian import Lambertian

    world = HittableList()
    world.add(Sphere(Vector3(0, 0, -1), 0.5, Lambertian(Vector3(0.5, 0.5, 0.5))))
    return world


@pytest.fixture
def random_spheres():
    """Factory building a list of non-degenerate random spheres."""
    from geometry.sphere import MovingSphere, Sphere
    from materials.lambertian import Lambertian

    def _build(count, seed=0, moving=False):
        gen = random.Random(seed)
        material = Lambertian(Vector3(0.5, 0.5, 0.5))
        spheres = []
        for _ in range(count):
            center = Vector3.random(gen, -10, 10)
            radius = gen.uniform(0.1, 1.5)
            if moving and gen.random() < 0.5:
                center1 = center + Vector3.random(gen, -1, 1)
                spheres.append(MovingSphere(center, center1, 0.0, 1.0, radius, material))
            else:
                spheres.append(Sphere(center, radius, material))
        return spheres

    return _build
