# camera/camera.py
import math
from core.vector import Vector3
from core.ray import Ray
from core.utils import random_in_unit_disk

class Camera:
    """
    Positionable thin-lens camera.

    The viewing basis is derived once from look_from / look_at / view_up and is
    never changed afterwards. vfov is the vertical field of view in degrees.
    The image plane sits at focus_dist, so objects at that distance stay sharp
    for any aperture. Rays are stamped with a time drawn from [time0, time1]
    to produce motion blur.
    """
    def __init__(self, look_from: Vector3, look_at: Vector3, view_up: Vector3,
                 vfov: float, aspect_ratio: float, aperture: float = 0.0,
                 focus_dist: float = 1.0, time0: float = 0.0, time1: float = 0.0):
        theta = math.radians(vfov)
        h = math.tan(theta / 2)
        viewport_height = 2.0 * h
        viewport_width = aspect_ratio * viewport_height

        # Orthonormal basis: w points backwards, u right, v up
        self.w = (look_from - look_at).normalize()
        self.u = view_up.cross(self.w).normalize()
        self.v = self.w.cross(self.u)

        self.origin = look_from
        self.horizontal = self.u * (viewport_width * focus_dist)
        self.vertical = self.v * (viewport_height * focus_dist)
        self.lower_left_corner = (self.origin -
                                  self.horizontal * 0.5 -
                                  self.vertical * 0.5 -
                                  self.w * focus_dist)

        self.lens_radius = aperture / 2.0
        self.time0 = time0
        self.time1 = time1

    def get_ray(self, s: float, t: float, rng) -> Ray:
        """Generates a ray through image-plane coordinates (s, t) in [0, 1]^2."""
        origin = self.origin
        if self.lens_radius > 0:
            # Generate random point on lens
            rd = random_in_unit_disk(rng) * self.lens_radius
            origin = origin + self.u * rd.x + self.v * rd.y

        direction = (self.lower_left_corner +
                     self.horizontal * s +
                     self.vertical * t -
                     origin)

        time = self.time0
        if self.time1 > self.time0:
            time = rng.uniform(self.time0, self.time1)

        return Ray(origin, direction, time)
