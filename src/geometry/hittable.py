# geometry/hittable.py
from typing import Optional
from core.vector import Vector3
from core.ray import Ray
from core.aabb import AABB

class HitRecord:
    """
    Records details of a ray-object intersection.
    """
    __slots__ = ("p", "normal", "t", "front_face", "material")

    def __init__(self, p: Vector3, normal: Vector3, t: float,
                 front_face: bool, material=None):
        self.p = p              # Intersection point
        self.normal = normal    # Surface normal, always facing against the ray
        self.t = t              # Ray parameter at intersection
        self.front_face = front_face  # Whether the ray hit the outside surface
        self.material = material

    @classmethod
    def from_outward_normal(cls, ray: Ray, t: float, outward_normal: Vector3,
                            material=None) -> "HitRecord":
        """
        Builds a record at ray.at(t), flipping the geometric normal so that it
        points against the incident ray.
        """
        front_face = ray.direction.dot(outward_normal) < 0
        normal = outward_normal if front_face else -outward_normal
        return cls(ray.at(t), normal, t, front_face, material)

    def __repr__(self) -> str:
        return (f"HitRecord(t={self.t}, p={self.p!r}, normal={self.normal!r}, "
                f"front_face={self.front_face})")

class Hittable:
    """
    Abstract class for objects that can be hit by a ray.
    """
    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        raise NotImplementedError("hit() must be implemented by subclasses.")

    def bounding_box(self, time0: float = 0.0, time1: float = 0.0) -> Optional[AABB]:
        """
        Returns a box enclosing the object over the shutter interval
        [time0, time1], or None if the object is unbounded.
        """
        raise NotImplementedError("bounding_box() must be implemented by subclasses.")
