# src/geometry/world.py
from geometry.hittable import Hittable, HitRecord
from geometry.bvh import BVHNode
from typing import Optional, List
from core.aabb import AABB
from core.ray import Ray

class HittableList(Hittable):
    """
    An ordered list of Hittable objects. Once build_bvh() has been called,
    queries go through the hierarchy instead of scanning every object.
    """
    def __init__(self, objects: Optional[List[Hittable]] = None):
        self.objects: List[Hittable] = list(objects) if objects else []
        self.bvh_root = None  # top-level BVH node

    def add(self, obj: Hittable):
        self.objects.append(obj)
        self.bvh_root = None

    def clear(self):
        self.objects.clear()
        self.bvh_root = None

    def __len__(self) -> int:
        return len(self.objects)

    def build_bvh(self, time0: float = 0.0, time1: float = 0.0):
        if len(self.objects) == 0:
            self.bvh_root = None
            return
        # The builder reorders its input, so hand it a copy.
        self.bvh_root = BVHNode(list(self.objects), 0, len(self.objects), time0, time1)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        if self.bvh_root is not None:
            return self.bvh_root.hit(ray, t_min, t_max)

        hit_record = None
        closest_so_far = t_max
        for obj in self.objects:
            rec = obj.hit(ray, t_min, closest_so_far)
            if rec is not None:
                closest_so_far = rec.t
                hit_record = rec
        return hit_record

    def bounding_box(self, time0: float = 0.0, time1: float = 0.0) -> Optional[AABB]:
        return AABB.union(obj.bounding_box(time0, time1) for obj in self.objects)
