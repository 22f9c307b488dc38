# renderer/tone_mapping.py
import math
import numpy as np
from numba import njit

# Largest channel value before 8-bit quantization; keeps 1.0 from wrapping to 256.
MAX_INTENSITY = 0.999

@njit
def _gamma_quantize_kernel(accumulated, scale, output_image):
    height, width, channels = accumulated.shape
    for y in range(height):
        for x in range(width):
            for c in range(channels):
                v = accumulated[y, x, c] * scale
                # NaN and negative samples resolve to black
                if not v > 0.0:
                    v = 0.0
                # Gamma correct for gamma = 2.0
                v = math.sqrt(v)
                if v > MAX_INTENSITY:
                    v = MAX_INTENSITY
                output_image[y, x, c] = int(256.0 * v)

def resolve_samples(accumulated: np.ndarray, samples_per_pixel: int) -> np.ndarray:
    """
    Averages summed samples, applies gamma 2 correction and quantizes to 8 bits.

    Args:
        accumulated: (height, width, 3) array of per-pixel color sums.
        samples_per_pixel: Number of samples that went into each sum.

    Returns:
        (height, width, 3) uint8 array.
    """
    if accumulated.ndim != 3 or accumulated.shape[2] != 3:
        raise ValueError(f"Expected a (height, width, 3) buffer, got shape {accumulated.shape}")
    if samples_per_pixel < 1:
        raise ValueError(f"samples_per_pixel must be positive, got {samples_per_pixel}")

    output_image = np.zeros(accumulated.shape, dtype=np.uint8)
    _gamma_quantize_kernel(np.ascontiguousarray(accumulated, dtype=np.float64),
                           1.0 / samples_per_pixel, output_image)
    return output_image
