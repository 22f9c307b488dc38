# geometry/__init__.py
from geometry.hittable import Hittable, HitRecord
from geometry.sphere import Sphere, MovingSphere
from geometry.bvh import BVHNode
from geometry.world import HittableList

__all__ = [
    "Hittable",
    "HitRecord",
    "Sphere",
    "MovingSphere",
    "BVHNode",
    "HittableList",
]
