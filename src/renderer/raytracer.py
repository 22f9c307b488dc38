# renderer/raytracer.py
import math
import random
import sys
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import List, Optional, Tuple

import numpy as np

from core.color import BLACK, WHITE, SKY_BLUE
from core.ray import Ray
from core.vector import Color
from geometry.hittable import Hittable

# Rays start this far along to avoid re-hitting the surface they left.
T_MIN = 0.001
DEFAULT_MAX_DEPTH = 50
DEFAULT_SAMPLES = 100
DEFAULT_TILE_SIZE = 16

Tile = Tuple[int, int, int, int]

def background(ray: Ray) -> Color:
    """
    Sky gradient: white at the horizon blending to blue overhead.
    """
    unit_direction = ray.direction.normalize()
    t = 0.5 * (unit_direction.y + 1.0)
    return WHITE * (1.0 - t) + SKY_BLUE * t

def ray_color(rng, ray: Ray, world: Hittable, depth: int) -> Color:
    """
    Returns the color seen along the ray. If the ray hits an object, the material
    scatter is computed recursively up to 'depth' bounces.
    """
    if depth <= 0:
        return BLACK  # Exceeded recursion depth.

    rec = world.hit(ray, T_MIN, math.inf)
    if rec is None:
        return background(ray)

    scatter_result = rec.material.scatter(ray, rec, rng)
    if scatter_result is None:
        return BLACK
    scattered, attenuation = scatter_result
    return attenuation * ray_color(rng, scattered, world, depth - 1)

def make_tiles(width: int, height: int, tile: int) -> List[Tile]:
    """Splits the image into (x0, x1, y0, y1) rectangles, top rows first."""
    tiles = []
    for y in range(0, height, tile):
        for x in range(0, width, tile):
            tiles.append((x, min(x + tile, width), y, min(y + tile, height)))
    return tiles

def render_tile(tile: Tile, world: Hittable, camera, width: int, height: int,
                samples_per_pixel: int, max_depth: int, rng) -> np.ndarray:
    """
    Traces every pixel of a tile and returns the summed (not averaged) sample
    colors as a (rows, cols, 3) array. Row 0 of the image is the top row.
    """
    x0, x1, y0, y1 = tile
    block = np.zeros((y1 - y0, x1 - x0, 3), dtype=np.float64)
    for row in range(y0, y1):
        # Camera coordinates count scanlines from the bottom
        j = height - 1 - row
        for i in range(x0, x1):
            r = g = b = 0.0
            for _ in range(samples_per_pixel):
                u = (i + rng.random()) / (width - 1)
                v = (j + rng.random()) / (height - 1)
                c = ray_color(rng, camera.get_ray(u, v, rng), world, max_depth)
                r += c.x
                g += c.y
                b += c.z
            block[row - y0, i - x0] = (r, g, b)
    return block

# Per-process scene state, set once by the pool initializer.
_worker_scene = None

def _init_worker(world, camera, width, height, samples_per_pixel, max_depth):
    global _worker_scene
    _worker_scene = (world, camera, width, height, samples_per_pixel, max_depth)

def _render_tile_worker(args):
    tile, seed = args
    world, camera, width, height, samples_per_pixel, max_depth = _worker_scene
    block = render_tile(tile, world, camera, width, height,
                        samples_per_pixel, max_depth, random.Random(seed))
    return tile, block

class Renderer:
    """
    CPU path tracer front end. Splits the frame into tiles and traces them either
    in-process or across a pool of worker processes. Every tile has its own
    random stream derived from (seed, tile index), so a given seed produces the
    same image whatever the number of workers.
    """
    def __init__(self, width: int, height: int, samples_per_pixel: int = DEFAULT_SAMPLES,
                 max_depth: int = DEFAULT_MAX_DEPTH, workers: int = 1,
                 tile_size: int = DEFAULT_TILE_SIZE, seed: Optional[int] = None,
                 verbose: bool = True):
        if width < 2 or height < 2:
            raise ValueError(f"Image must be at least 2x2 pixels, got {width}x{height}")
        if samples_per_pixel < 1:
            raise ValueError(f"samples_per_pixel must be positive, got {samples_per_pixel}")
        if max_depth < 1:
            raise ValueError(f"max_depth must be positive, got {max_depth}")
        if workers < 1:
            raise ValueError(f"workers must be positive, got {workers}")
        if tile_size < 1:
            raise ValueError(f"tile_size must be positive, got {tile_size}")

        self.width = width
        self.height = height
        self.samples_per_pixel = samples_per_pixel
        self.max_depth = max_depth
        self.workers = workers
        self.tile_size = tile_size
        self.seed = seed if seed is not None else random.randrange(2 ** 32)
        self.verbose = verbose

    def _tile_seed(self, index: int) -> str:
        return f"{self.seed}:{index}"

    def _log(self, message: str):
        if self.verbose:
            print(message, file=sys.stderr, flush=True)

    def render(self, world: Hittable, camera) -> np.ndarray:
        """
        Renders the scene and returns a (height, width, 3) float64 array holding
        the sum of samples_per_pixel color samples for each pixel.
        """
        tiles = make_tiles(self.width, self.height, self.tile_size)
        accumulation_buffer = np.zeros((self.height, self.width, 3), dtype=np.float64)

        self._log("\n=== Rendering ===")
        self._log(f"Resolution: {self.width}x{self.height}, samples per pixel: "
                  f"{self.samples_per_pixel}, max depth: {self.max_depth}")
        self._log(f"Tiles: {len(tiles)}, workers: {self.workers}, seed: {self.seed}")
        start = time.perf_counter()

        remaining = len(tiles)
        if self.workers == 1:
            for index, tile in enumerate(tiles):
                block = render_tile(tile, world, camera, self.width, self.height,
                                    self.samples_per_pixel, self.max_depth,
                                    random.Random(self._tile_seed(index)))
                self._store(accumulation_buffer, tile, block)
                remaining -= 1
                self._log(f"Tiles remaining: {remaining}")
        else:
            initargs = (world, camera, self.width, self.height,
                        self.samples_per_pixel, self.max_depth)
            with ProcessPoolExecutor(max_workers=self.workers,
                                     initializer=_init_worker,
                                     initargs=initargs) as exe:
                futures = [exe.submit(_render_tile_worker, (tile, self._tile_seed(index)))
                           for index, tile in enumerate(tiles)]
                for future in as_completed(futures):
                    tile, block = future.result()
                    self._store(accumulation_buffer, tile, block)
                    remaining -= 1
                    self._log(f"Tiles remaining: {remaining}")

        self._log(f"Done in {time.perf_counter() - start:.2f}s")
        return accumulation_buffer

    @staticmethod
    def _store(buffer: np.ndarray, tile: Tile, block: np.ndarray):
        x0, x1, y0, y1 = tile
        buffer[y0:y1, x0:x1, :] = block
