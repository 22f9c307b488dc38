# main.py
import argparse
import math
import random
import sys
from typing import Tuple

from core.vector import Vector3, Color
from camera.camera import Camera
from geometry.world import HittableList
from geometry.sphere import Sphere, MovingSphere
from materials.lambertian import Lambertian
from materials.metal import Metal
from materials.presets import ColorPresets, DielectricPresets, MetalPresets
from renderer.raytracer import Renderer
from renderer.tone_mapping import resolve_samples
from renderer.output import save_image, write_ppm

# Samples per pixel and bounce limit per quality level
QUALITY_LEVELS = {
    "preview": {"samples": 10, "bounces": 10},
    "balanced": {"samples": 50, "bounces": 25},
    "final": {"samples": 100, "bounces": 50},
}
DEFAULT_QUALITY = "balanced"
DEFAULT_WIDTH = 400
DEFAULT_ASPECT_RATIO = 16.0 / 9.0

def log(message: str, quiet: bool = False):
    if not quiet:
        print(message, file=sys.stderr)

def create_two_spheres(aspect_ratio: float, rng: random.Random, quiet: bool = False) -> Tuple[HittableList, Camera]:
    """
    Blue and red diffuse spheres touching at the view axis, seen through a 90
    degree lens from the origin.
    """
    radius = math.cos(math.pi / 4)
    world = HittableList()
    world.add(Sphere(Vector3(-radius, 0, -1), radius, ColorPresets.matte(ColorPresets.BLUE)))
    world.add(Sphere(Vector3(radius, 0, -1), radius, ColorPresets.matte(ColorPresets.RED)))
    log(f"Added two spheres with radius {radius:.4f}", quiet)

    camera = Camera(Vector3(0, 0, 0), Vector3(0, 0, -1), Vector3(0, 1, 0),
                    vfov=90.0, aspect_ratio=aspect_ratio)
    return world, camera

def create_materials_showcase(aspect_ratio: float, rng: random.Random, quiet: bool = False) -> Tuple[HittableList, Camera]:
    """
    Ground plane with a diffuse, a hollow glass and a gold sphere side by side,
    and a few small dielectric and metal props in front of them.
    """
    world = HittableList()
    world.add(Sphere(Vector3(0, -100.5, -1), 100, Lambertian(ColorPresets.MEADOW)))
    world.add(Sphere(Vector3(0, 0, -1), 0.5, Lambertian(ColorPresets.CLAY)))
    # A negative radius flips the normals, making the inner sphere a bubble.
    world.add(Sphere(Vector3(-1, 0, -1), 0.5, DielectricPresets.glass()))
    world.add(Sphere(Vector3(-1, 0, -1), -0.45, DielectricPresets.glass()))
    world.add(Sphere(Vector3(1, 0, -1), 0.5, MetalPresets.gold()))
    # Small props on the ground in front: a water drop holding an air bubble,
    # a diamond and a silver ball
    world.add(Sphere(Vector3(-0.45, -0.3, -0.2), 0.2, DielectricPresets.water()))
    world.add(Sphere(Vector3(-0.45, -0.3, -0.2), 0.08, DielectricPresets.air_bubble()))
    world.add(Sphere(Vector3(0.05, -0.4, -0.1), 0.1, DielectricPresets.diamond()))
    world.add(Sphere(Vector3(0.5, -0.35, -0.2), 0.15, MetalPresets.silver()))
    log(f"Added {len(world)} spheres", quiet)

    look_from = Vector3(3, 3, 2)
    look_at = Vector3(0, 0, -1)
    camera = Camera(look_from, look_at, Vector3(0, 1, 0), vfov=20.0,
                    aspect_ratio=aspect_ratio, aperture=2.0,
                    focus_dist=(look_from - look_at).length())
    return world, camera

def create_random_scene(aspect_ratio: float, rng: random.Random,
                        quiet: bool = False) -> Tuple[HittableList, Camera]:
    """
    Large field of small random spheres, some bouncing during the shutter
    interval, around three large feature spheres.
    """
    world = HittableList()
    world.add(Sphere(Vector3(0, -1000, 0), 1000, Lambertian(ColorPresets.GROUND)))
    log("Added ground sphere at y=-1000 with radius 1000", quiet)

    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = rng.random()
            center = Vector3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())

            if (center - Vector3(4, 0.2, 0)).length() <= 0.9:
                continue

            if choose_mat < 0.8:
                # diffuse, bouncing up during the shutter
                albedo = Color.random(rng) * Color.random(rng)
                center1 = center + Vector3(0, rng.uniform(0, 0.5), 0)
                world.add(MovingSphere(center, center1, 0.0, 1.0, 0.2, Lambertian(albedo)))
            elif choose_mat < 0.95:
                albedo = Color.random(rng, 0.5, 1)
                fuzz = rng.uniform(0, 0.5)
                world.add(Sphere(center, 0.2, Metal(albedo, fuzz)))
            else:
                world.add(Sphere(center, 0.2, DielectricPresets.glass()))

    world.add(Sphere(Vector3(0, 1, 0), 1.0, DielectricPresets.glass()))
    world.add(Sphere(Vector3(-4, 1, 0), 1.0, Lambertian(ColorPresets.BROWN)))
    world.add(Sphere(Vector3(4, 1, 0), 1.0, MetalPresets.chrome()))
    log(f"Added {len(world)} spheres in total", quiet)

    camera = Camera(Vector3(13, 2, 3), Vector3(0, 0, 0), Vector3(0, 1, 0),
                    vfov=20.0, aspect_ratio=aspect_ratio, aperture=0.1,
                    focus_dist=10.0, time0=0.0, time1=1.0)
    return world, camera

SCENES = {
    "two_spheres": create_two_spheres,
    "materials": create_materials_showcase,
    "random": create_random_scene,
}

def create_world(name: str, aspect_ratio: float, rng: random.Random,
                 use_bvh: bool = True, quiet: bool = False) -> Tuple[HittableList, Camera]:
    log(f"\n=== Creating World: {name} ===", quiet)
    world, camera = SCENES[name](aspect_ratio, rng, quiet)

    if use_bvh:
        log(f"Building BVH for {len(world)} objects...", quiet)
        world.build_bvh(camera.time0, camera.time1)
        log(f"BVH built, depth {world.bvh_root.depth()}", quiet)
    return world, camera

def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render a scene with the Monte Carlo ray tracer.")
    parser.add_argument("--scene", choices=sorted(SCENES), default="random",
                        help="Scene to render (default: random)")
    parser.add_argument("--width", type=int, default=DEFAULT_WIDTH,
                        help=f"Image width in pixels (default: {DEFAULT_WIDTH})")
    parser.add_argument("--aspect-ratio", type=float, default=DEFAULT_ASPECT_RATIO,
                        help="Width / height (default: 16/9)")
    parser.add_argument("--quality", choices=list(QUALITY_LEVELS), default=DEFAULT_QUALITY,
                        help=f"Preset for samples and bounces (default: {DEFAULT_QUALITY})")
    parser.add_argument("--samples", type=int, default=None,
                        help="Samples per pixel, overrides the quality preset")
    parser.add_argument("--max-depth", type=int, default=None,
                        help="Maximum ray bounces, overrides the quality preset")
    parser.add_argument("--workers", type=int, default=1,
                        help="Number of worker processes (default: 1)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for scene generation and sampling")
    parser.add_argument("--output", default="image.ppm",
                        help="Output path; .ppm is written as text, other extensions via Pillow, "
                             "'-' writes PPM to stdout (default: image.ppm)")
    parser.add_argument("--no-bvh", action="store_true",
                        help="Test every object instead of building a BVH")
    parser.add_argument("--show", action="store_true",
                        help="Display the finished image in a window")
    parser.add_argument("--quiet", action="store_true",
                        help="Suppress progress output")
    args = parser.parse_args(argv)

    quality = QUALITY_LEVELS[args.quality]
    if args.samples is None:
        args.samples = quality["samples"]
    if args.max_depth is None:
        args.max_depth = quality["bounces"]

    for name in ("width", "samples", "max_depth", "workers"):
        if getattr(args, name) < 1:
            parser.error(f"--{name.replace('_', '-')} must be at least 1")
    if args.aspect_ratio <= 0:
        parser.error("--aspect-ratio must be positive")
    return args

def main(argv=None) -> int:
    args = parse_args(argv)
    seed = args.seed if args.seed is not None else random.randrange(2 ** 32)
    image_width = args.width
    image_height = int(image_width / args.aspect_ratio)

    try:
        world, camera = create_world(args.scene, args.aspect_ratio, random.Random(seed),
                                     use_bvh=not args.no_bvh, quiet=args.quiet)
        renderer = Renderer(image_width, image_height,
                            samples_per_pixel=args.samples,
                            max_depth=args.max_depth,
                            workers=args.workers,
                            seed=seed,
                            verbose=not args.quiet)
        accumulated = renderer.render(world, camera)
    except KeyboardInterrupt:
        log("Interrupted, nothing written.")
        return 130
    except ValueError as e:
        log(f"Error: {e}")
        return 2

    image = resolve_samples(accumulated, args.samples)
    if args.output == "-":
        write_ppm(image, sys.stdout)
    else:
        save_image(image, args.output)
        log(f"Wrote {args.output}", args.quiet)

    if args.show:
        from renderer.display import show_image
        show_image(image, title=f"Ray Tracer - {args.scene}")
    return 0

if __name__ == "__main__":
    sys.exit(main())
