# geometry/sphere.py
import math
from typing import Optional
from core.vector import Vector3
from core.ray import Ray
from core.aabb import AABB
from geometry.hittable import Hittable, HitRecord

def _nearest_root(center: Vector3, radius: float, ray: Ray,
                  t_min: float, t_max: float) -> Optional[float]:
    oc = ray.origin - center
    a = ray.direction.length_squared()
    # A zero-length direction or a point-sized sphere never yields a usable hit
    if a == 0.0 or radius == 0.0:
        return None
    half_b = oc.dot(ray.direction)
    c = oc.length_squared() - radius * radius
    discriminant = half_b * half_b - a * c

    if discriminant < 0:
        return None

    sqrt_disc = math.sqrt(discriminant)
    # Find the nearest root that lies in the acceptable range
    root = (-half_b - sqrt_disc) / a
    if root < t_min or root > t_max:
        root = (-half_b + sqrt_disc) / a
        if root < t_min or root > t_max:
            return None
    return root

def _box_around(center: Vector3, radius: float) -> AABB:
    # Negative radii (inward-facing normals) still enclose the same volume
    r = abs(radius)
    offset = Vector3(r, r, r)
    return AABB(center - offset, center + offset)

class Sphere(Hittable):
    """
    Represents a sphere defined by its center, radius, and material.
    """
    def __init__(self, center: Vector3, radius: float, material):
        self.center = center
        self.radius = radius
        self.material = material

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        root = _nearest_root(self.center, self.radius, ray, t_min, t_max)
        if root is None:
            return None

        outward_normal = (ray.at(root) - self.center) / self.radius
        return HitRecord.from_outward_normal(ray, root, outward_normal, self.material)

    def bounding_box(self, time0: float = 0.0, time1: float = 0.0) -> AABB:
        # The bounding box of a sphere is center ± radius
        return _box_around(self.center, self.radius)

    def __repr__(self) -> str:
        return f"Sphere({self.center!r}, {self.radius})"

class MovingSphere(Hittable):
    """
    A sphere whose center moves linearly from center0 at time0 to center1 at
    time1. Rays sample the position at their own time.
    """
    def __init__(self, center0: Vector3, center1: Vector3,
                 time0: float, time1: float, radius: float, material):
        self.center0 = center0
        self.center1 = center1
        self.time0 = time0
        self.time1 = time1
        self.radius = radius
        self.material = material

    def center(self, time: float) -> Vector3:
        if self.time1 == self.time0:
            return self.center0
        fraction = (time - self.time0) / (self.time1 - self.time0)
        return self.center0 + (self.center1 - self.center0) * fraction

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        center = self.center(ray.time)
        root = _nearest_root(center, self.radius, ray, t_min, t_max)
        if root is None:
            return None

        outward_normal = (ray.at(root) - center) / self.radius
        return HitRecord.from_outward_normal(ray, root, outward_normal, self.material)

    def bounding_box(self, time0: float = 0.0, time1: float = 0.0) -> AABB:
        # Union of the boxes at both ends of the interval covers the sweep.
        box0 = _box_around(self.center(time0), self.radius)
        box1 = _box_around(self.center(time1), self.radius)
        return box0 + box1

    def __repr__(self) -> str:
        return (f"MovingSphere({self.center0!r} -> {self.center1!r}, "
                f"t=[{self.time0}, {self.time1}], r={self.radius})")
