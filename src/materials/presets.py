# materials/presets.py
from core.vector import Color
from materials.metal import Metal
from materials.lambertian import Lambertian
from materials.dielectric import Dielectric

class MetalPresets:
    """Predefined metal materials."""

    @staticmethod
    def gold() -> Metal:
        return Metal(Color(0.8, 0.6, 0.2), fuzz=0.0)

    @staticmethod
    def silver() -> Metal:
        return Metal(Color(0.8, 0.8, 0.8), fuzz=0.3)

    @staticmethod
    def chrome() -> Metal:
        return Metal(Color(0.7, 0.6, 0.5), fuzz=0.0)

class DielectricPresets:
    """Predefined dielectric materials with realistic refractive indices."""

    @staticmethod
    def glass() -> Dielectric:
        return Dielectric(1.5)

    @staticmethod
    def water() -> Dielectric:
        return Dielectric(1.33)

    @staticmethod
    def diamond() -> Dielectric:
        return Dielectric(2.42)

    @staticmethod
    def air_bubble() -> Dielectric:
        # Air pocket inside water, for bubbles in a water drop
        return Dielectric(1.0 / 1.33)

class ColorPresets:
    """Common diffuse albedos."""

    RED = Color(1.0, 0.0, 0.0)
    BLUE = Color(0.0, 0.0, 1.0)
    GROUND = Color(0.5, 0.5, 0.5)
    MEADOW = Color(0.8, 0.8, 0.0)
    CLAY = Color(0.1, 0.2, 0.5)
    BROWN = Color(0.4, 0.2, 0.1)

    @staticmethod
    def matte(color: Color) -> Lambertian:
        """Create a matte material with the given color."""
        return Lambertian(color)
