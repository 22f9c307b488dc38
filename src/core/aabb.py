# src/core/aabb.py
import math
from typing import Optional
from core.vector import Vector3

def _reciprocal(d: float) -> float:
    # Python raises on float division by zero where IEEE yields a signed infinity.
    if d == 0.0:
        return math.copysign(math.inf, d)
    return 1.0 / d

class AABB:
    """
    Axis-aligned bounding box given by its minimum and maximum corners.
    """
    __slots__ = ("minimum", "maximum")

    def __init__(self, minimum: Vector3, maximum: Vector3):
        self.minimum = minimum
        self.maximum = maximum

    def hit(self, ray, t_min: float, t_max: float) -> bool:
        # Slab method: for each axis, narrow the [t_min, t_max] interval.
        origin = ray.origin
        direction = ray.direction
        for a in range(3):
            invD = _reciprocal(direction[a])
            t0 = (self.minimum[a] - origin[a]) * invD
            t1 = (self.maximum[a] - origin[a]) * invD
            if invD < 0:
                t0, t1 = t1, t0
            t_min = t0 if t0 > t_min else t_min
            t_max = t1 if t1 < t_max else t_max
            if t_max <= t_min:
                return False
        return True

    def surface_area(self) -> float:
        d = self.maximum - self.minimum
        return 2 * (d.x * d.y + d.x * d.z + d.y * d.z)

    def centroid(self, axis: int) -> float:
        return (self.minimum[axis] + self.maximum[axis]) * 0.5

    def longest_axis(self) -> int:
        d = self.maximum - self.minimum
        if d.x > d.y and d.x > d.z:
            return 0
        return 1 if d.y > d.z else 2

    def __add__(self, other: "AABB") -> "AABB":
        return AABB.surrounding_box(self, other)

    def __eq__(self, other) -> bool:
        if not isinstance(other, AABB):
            return NotImplemented
        return self.minimum == other.minimum and self.maximum == other.maximum

    __hash__ = None

    def __repr__(self) -> str:
        return f"AABB({self.minimum!r}, {self.maximum!r})"

    @staticmethod
    def surrounding_box(box0: "AABB", box1: "AABB") -> "AABB":
        small = Vector3(
            min(box0.minimum.x, box1.minimum.x),
            min(box0.minimum.y, box1.minimum.y),
            min(box0.minimum.z, box1.minimum.z)
        )
        big = Vector3(
            max(box0.maximum.x, box1.maximum.x),
            max(box0.maximum.y, box1.maximum.y),
            max(box0.maximum.z, box1.maximum.z)
        )
        return AABB(small, big)

    @staticmethod
    def union(boxes) -> Optional["AABB"]:
        """
        Folds an iterable of boxes into one. Returns None when any box is None
        or the iterable is empty.
        """
        result = None
        for box in boxes:
            if box is None:
                return None
            result = box if result is None else result + box
        return result
