# src/geometry/bvh.py
from typing import List, Optional, Tuple
from core.aabb import AABB
from core.ray import Ray
from geometry.hittable import Hittable, HitRecord

class BVHNode(Hittable):
    """
    Binary bounding volume hierarchy over objects[start:end].

    Leaves are the primitives themselves; a node over a single object stores
    it as both children. The node box is computed once here and reused for
    every query.
    """
    def __init__(self, objects: list, start: int, end: int,
                 time0: float = 0.0, time1: float = 0.0, max_bin_count: int = 16):
        object_span = end - start
        if object_span < 1:
            raise ValueError("Cannot build a BVH node over an empty range of objects")

        boxes = []
        for obj in objects[start:end]:
            box = obj.bounding_box(time0, time1)
            if box is None:
                raise ValueError(f"Object {obj!r} has no bounding box and cannot be placed in a BVH")
            boxes.append(box)

        # Compute the bounding box of all objects for this node
        self.box = AABB.union(boxes)

        if object_span == 1:
            self.left = self.right = objects[start]
            return
        if object_span == 2:
            self.left = objects[start]
            self.right = objects[start + 1]
            return

        split = _binned_sah_split(boxes, max_bin_count)
        if split is None:
            # All centroids coincide or no bin split separates them: median split.
            best_axis = self.box.longest_axis()
            split_count = object_span // 2
        else:
            best_axis, split_count = split

        # Sort along the best axis by centroid; the SAH split count maps onto
        # this order because bins are monotonic in centroid.
        order = sorted(range(object_span), key=lambda i: boxes[i].centroid(best_axis))
        objects[start:end] = [objects[start + i] for i in order]

        mid = start + split_count
        self.left = BVHNode(objects, start, mid, time0, time1, max_bin_count)
        self.right = BVHNode(objects, mid, end, time0, time1, max_bin_count)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        if not self.box.hit(ray, t_min, t_max):
            return None

        hit_left = self.left.hit(ray, t_min, t_max)

        # Anything on the right must be closer than the left hit to matter
        if hit_left is not None:
            t_max = hit_left.t

        if self.right is self.left:
            return hit_left

        hit_right = self.right.hit(ray, t_min, t_max)
        return hit_right if hit_right is not None else hit_left

    def bounding_box(self, time0: float = 0.0, time1: float = 0.0) -> AABB:
        return self.box

    def depth(self) -> int:
        """
        Number of BVH levels below and including this node.
        """
        child_depths = [child.depth() for child in (self.left, self.right)
                        if isinstance(child, BVHNode)]
        return 1 + max(child_depths, default=0)

def _binned_sah_split(boxes: List[AABB], max_bin_count: int) -> Optional[Tuple[int, int]]:
    """
    Binned surface-area-heuristic split. Returns (axis, number of objects on the
    left) for the cheapest split, or None if no split separates the objects.
    """
    object_span = len(boxes)
    best_cost = float('inf')
    best = None

    # Try splitting along each axis (0: x, 1: y, 2: z)
    for axis in range(3):
        centroids = [box.centroid(axis) for box in boxes]
        min_val = min(centroids)
        max_val = max(centroids)

        # Skip if the extent is too small
        if max_val - min_val < 1e-9:
            continue

        bin_count = min(max_bin_count, object_span)
        counts = [0] * bin_count
        bin_boxes: List[Optional[AABB]] = [None] * bin_count
        scale = bin_count / (max_val - min_val)

        # Place objects in bins based on centroid
        for box, centroid in zip(boxes, centroids):
            bin_idx = min(bin_count - 1, int((centroid - min_val) * scale))
            counts[bin_idx] += 1
            bin_boxes[bin_idx] = box if bin_boxes[bin_idx] is None else bin_boxes[bin_idx] + box

        # Left-to-right sweep: boxes and counts of bins [0, i]
        left_boxes, left_counts = _sweep(bin_boxes, counts)
        # Right-to-left sweep: boxes and counts of bins [i, bin_count)
        right_boxes, right_counts = _sweep(bin_boxes[::-1], counts[::-1])
        right_boxes.reverse()
        right_counts.reverse()

        # Evaluate SAH for each split position
        for i in range(1, bin_count):
            left_count = left_counts[i - 1]
            right_count = right_counts[i]
            if left_count == 0 or right_count == 0:
                continue

            cost = (left_count * left_boxes[i - 1].surface_area() +
                    right_count * right_boxes[i].surface_area())
            if cost < best_cost:
                best_cost = cost
                best = (axis, left_count)

    return best

def _sweep(bin_boxes, counts):
    boxes = []
    totals = []
    running_box = None
    running_count = 0
    for box, count in zip(bin_boxes, counts):
        if count:
            running_count += count
            running_box = box if running_box is None else running_box + box
        boxes.append(running_box)
        totals.append(running_count)
    return boxes, totals
