"""Unit tests for sphere intersection.

Tests cover:
- Ray hitting sphere from outside (front face)
- Ray missing sphere
- Ray starting inside sphere (back face)
- Ray tangent to sphere
- Normal orientation against the incident ray
- Moving spheres and their swept bounds
"""

import random

import pytest

from conftest import assert_vec_close
from core.aabb import AABB
from core.ray import Ray
from core.vector import Vector3
from geometry.hittable import HitRecord, Hittable
from geometry.sphere import MovingSphere, Sphere
from materials.lambertian import Lambertian

MATERIAL = Lambertian(Vector3(0.5, 0.5, 0.5))
INF = float("inf")


class TestSphereIntersection:
    """Tests for Sphere.hit."""

    def test_direct_hit(self):
        """Ray hitting sphere head-on from outside."""
        sphere = Sphere(Vector3(0, 0, 0), 1.0, MATERIAL)
        rec = sphere.hit(Ray(Vector3(0, 0, 5), Vector3(0, 0, -1)), 0.001, 1000.0)
        assert rec is not None
        assert rec.t == pytest.approx(4.0)
        assert_vec_close(rec.p, Vector3(0, 0, 1))
        assert_vec_close(rec.normal, Vector3(0, 0, 1))
        assert rec.front_face
        assert rec.material is MATERIAL

    def test_unnormalized_direction(self):
        """The hit parameter accounts for direction length."""
        sphere = Sphere(Vector3(0, 0, 0), 1.0, MATERIAL)
        rec = sphere.hit(Ray(Vector3(0, 0, 5), Vector3(0, 0, -2)), 0.001, INF)
        assert rec.t == pytest.approx(2.0)
        assert_vec_close(rec.p, Vector3(0, 0, 1))

    def test_tangent_ray(self):
        """A ray grazing the sphere accepts the tangent point."""
        sphere = Sphere(Vector3(1, 0, -5), 1.0, MATERIAL)
        rec = sphere.hit(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)), 0.001, INF)
        assert rec is not None
        assert rec.t == pytest.approx(5.0)
        assert_vec_close(rec.p, Vector3(0, 0, -5))

    def test_near_miss(self):
        """A ray passing just outside the radius has no real root."""
        sphere = Sphere(Vector3(1.01, 0, -5), 1.0, MATERIAL)
        assert sphere.hit(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)), 0.001, INF) is None

    def test_ray_pointing_away(self):
        """Both roots behind the origin means no hit."""
        sphere = Sphere(Vector3(0, 0, -5), 1.0, MATERIAL)
        assert sphere.hit(Ray(Vector3(0, 0, 0), Vector3(0, 0, 1)), 0.001, INF) is None

    def test_inside_sphere_hits_back_face(self):
        """From inside, the far root is used and the normal is flipped."""
        sphere = Sphere(Vector3(0, 0, 0), 1.0, MATERIAL)
        rec = sphere.hit(Ray(Vector3(0, 0, 0), Vector3(1, 0, 0)), 0.001, INF)
        assert rec.t == pytest.approx(1.0)
        assert not rec.front_face
        assert_vec_close(rec.normal, Vector3(-1, 0, 0))

    def test_t_max_limits_hits(self):
        """Roots past t_max are rejected, roots within are accepted."""
        sphere = Sphere(Vector3(0, 0, -5), 1.0, MATERIAL)
        ray = Ray(Vector3(0, 0, 0), Vector3(0, 0, -1))
        assert sphere.hit(ray, 0.001, 3.9) is None
        rec = sphere.hit(ray, 0.001, 5.0)
        assert rec.t == pytest.approx(4.0)

    def test_near_root_rejected_uses_far_root(self):
        """When the near root is below t_min the far root is returned."""
        sphere = Sphere(Vector3(0, 0, -5), 1.0, MATERIAL)
        rec = sphere.hit(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)), 4.5, INF)
        assert rec.t == pytest.approx(6.0)
        assert not rec.front_face

    def test_normal_orientation_invariant(self):
        """Returned normals always oppose the incident direction."""
        gen = random.Random(9)
        sphere = Sphere(Vector3(0.3, -0.2, 0.1), 1.3, MATERIAL)
        hits = 0
        for _ in range(500):
            origin = Vector3.random(gen, -3, 3)
            direction = Vector3.random(gen, -1, 1)
            rec = sphere.hit(Ray(origin, direction), 0.001, INF)
            if rec is None:
                continue
            hits += 1
            outward = (rec.p - sphere.center) / sphere.radius
            assert rec.normal.dot(direction) <= 0
            assert rec.normal.length() == pytest.approx(1.0)
            if rec.front_face:
                assert outward.dot(direction) < 0
            else:
                assert outward.dot(direction) >= 0
        assert hits > 50

    def test_bounding_box(self):
        """Static sphere box is center +/- radius."""
        box = Sphere(Vector3(1, 2, 3), 0.5, MATERIAL).bounding_box()
        assert box == AABB(Vector3(0.5, 1.5, 2.5), Vector3(1.5, 2.5, 3.5))

    def test_negative_radius_bounding_box(self):
        """Inward-facing spheres still get a well-formed box."""
        box = Sphere(Vector3(0, 0, 0), -0.5, MATERIAL).bounding_box()
        assert box == AABB(Vector3(-0.5, -0.5, -0.5), Vector3(0.5, 0.5, 0.5))

    def test_negative_radius_flips_normal(self):
        """A negative radius makes the outside hit report a back face."""
        sphere = Sphere(Vector3(0, 0, 0), -1.0, MATERIAL)
        rec = sphere.hit(Ray(Vector3(0, 0, 5), Vector3(0, 0, -1)), 0.001, INF)
        assert not rec.front_face
        assert_vec_close(rec.normal, Vector3(0, 0, 1))

    def test_zero_length_direction_misses(self):
        """A degenerate ray reports no hit instead of dividing by zero."""
        sphere = Sphere(Vector3(0, 0, -1), 0.5, MATERIAL)
        assert sphere.hit(Ray(Vector3(0, 0, 0), Vector3(0, 0, 0)), 0.001, INF) is None
        # Starting inside does not change that
        assert sphere.hit(Ray(Vector3(0, 0, -1), Vector3(0, 0, 0)), 0.001, INF) is None

    def test_zero_radius_misses(self):
        """A point-sized sphere is invisible, even to a ray through its center."""
        sphere = Sphere(Vector3(0, 0, -1), 0.0, MATERIAL)
        assert sphere.hit(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)), 0.001, INF) is None
        assert sphere.bounding_box() == AABB(Vector3(0, 0, -1), Vector3(0, 0, -1))


class TestMovingSphere:
    """Tests for MovingSphere."""

    def make(self):
        return MovingSphere(Vector3(0, 0, -5), Vector3(2, 0, -5), 0.0, 1.0, 0.5, MATERIAL)

    def test_center_interpolation(self):
        """Center moves linearly over its own time interval."""
        sphere = self.make()
        assert_vec_close(sphere.center(0.0), Vector3(0, 0, -5))
        assert_vec_close(sphere.center(0.5), Vector3(1, 0, -5))
        assert_vec_close(sphere.center(1.0), Vector3(2, 0, -5))

    def test_hit_depends_on_ray_time(self):
        """The same ray hits or misses depending on when it is cast."""
        sphere = self.make()
        origin = Vector3(0, 0, 0)
        direction = Vector3(0, 0, -1)
        assert sphere.hit(Ray(origin, direction, 0.0), 0.001, INF) is not None
        assert sphere.hit(Ray(origin, direction, 1.0), 0.001, INF) is None

        rec = sphere.hit(Ray(Vector3(2, 0, 0), direction, 1.0), 0.001, INF)
        assert rec.t == pytest.approx(4.5)
        assert_vec_close(rec.normal, Vector3(0, 0, 1))

    def test_swept_bounding_box(self):
        """Bounds cover the sphere at both ends of the interval."""
        box = self.make().bounding_box(0.0, 1.0)
        assert box == AABB(Vector3(-0.5, -0.5, -5.5), Vector3(2.5, 0.5, -4.5))

    def test_bounding_box_over_subinterval(self):
        """Bounds follow the queried interval, not the sphere's own."""
        box = self.make().bounding_box(0.0, 0.5)
        assert box == AABB(Vector3(-0.5, -0.5, -5.5), Vector3(1.5, 0.5, -4.5))

    def test_instant_interval_stays_put(self):
        """A sphere whose interval is a single instant sits at center0."""
        center = Vector3(0, 0, -5)
        sphere = MovingSphere(center, Vector3(3, 0, -5), 0.0, 0.0, 0.5, MATERIAL)
        assert sphere.center(0.7) == center
        rec = sphere.hit(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1), 0.7), 0.001, INF)
        assert rec.t == pytest.approx(4.5)
        assert sphere.bounding_box(0.0, 1.0) == AABB(Vector3(-0.5, -0.5, -5.5),
                                                     Vector3(0.5, 0.5, -4.5))


class TestHitRecord:
    """Tests for HitRecord construction."""

    def test_from_outward_normal_front(self):
        ray = Ray(Vector3(0, 0, 0), Vector3(0, 0, -1))
        rec = HitRecord.from_outward_normal(ray, 2.0, Vector3(0, 0, 1), MATERIAL)
        assert rec.front_face
        assert rec.normal == Vector3(0, 0, 1)
        assert rec.p == Vector3(0, 0, -2)

    def test_from_outward_normal_back(self):
        ray = Ray(Vector3(0, 0, 0), Vector3(0, 0, -1))
        rec = HitRecord.from_outward_normal(ray, 2.0, Vector3(0, 0, -1), MATERIAL)
        assert not rec.front_face
        assert rec.normal == Vector3(0, 0, 1)

    def test_base_hittable_is_abstract(self):
        with pytest.raises(NotImplementedError):
            Hittable().hit(Ray(Vector3(0, 0, 0), Vector3(0, 0, 1)), 0.0, 1.0)
        with pytest.raises(NotImplementedError):
            Hittable().bounding_box()
