"""
CPU Whitted-style ray tracer for spheres under point lights.
Supports shadows, Phong highlights, mirror reflection and refraction,
recursing up to max_bounces.
"""
import math
import os
from datetime import datetime
from typing import Callable, List, NamedTuple, Optional, Sequence

from PIL import Image

from geometry import Vec3, ZERO, add, dot, length, mul, norm, reflect, refract, sub, to_byte
from objects import Light, Material, SceneObject
from scene import (
    BACKGROUND_COLOR, MAX_BOUNCES, Scene,
    build_scene, default_scene, load_scene, validate_scene,
)

WHITE: Vec3 = (1.0, 1.0, 1.0)
# Offset of secondary ray origins along the normal, avoids self-intersection
SURFACE_BIAS = 1e-3

Frame = List[Vec3]
Sink = Callable[[Sequence[Vec3], int, int], None]

class RayIntersectInfo(NamedTuple):
    hit: bool
    material: Optional[Material] = None
    point: Optional[Vec3] = None
    normal: Optional[Vec3] = None

NO_HIT = RayIntersectInfo(False)

def scene_intersect(orig: Vec3, rd: Vec3, objects: Sequence[SceneObject]) -> RayIntersectInfo:
    """Nearest hit of the ray among objects. Ties go to the earlier object."""
    nearest_dist = math.inf
    nearest = None
    for obj in objects:
        hit, dist = obj.ray_intersect(orig, rd)
        if hit and dist < nearest_dist:
            nearest_dist = dist
            nearest = obj

    if nearest is None:
        return NO_HIT

    point = add(orig, mul(rd, nearest_dist))
    normal = norm(sub(point, nearest.get_position()))
    return RayIntersectInfo(True, nearest.get_material(), point, normal)

def offset_origin(point: Vec3, rd: Vec3, normal: Vec3) -> Vec3:
    """Nudge point off the surface toward the side rd is heading."""
    if dot(rd, normal) < 0:
        return sub(point, mul(normal, SURFACE_BIAS))
    return add(point, mul(normal, SURFACE_BIAS))

def cast_ray(orig: Vec3, rd: Vec3, lights: Sequence[Light], objects: Sequence[SceneObject],
             depth: int = 0, max_bounces: int = MAX_BOUNCES,
             background: Vec3 = BACKGROUND_COLOR) -> Vec3:
    """
    Colour seen along the ray from orig in unit direction rd.

    Each reflective or refractive bounce recurses with depth + 1; rays that
    miss everything, or go deeper than max_bounces, return background.
    The result is not clamped.
    """
    info = scene_intersect(orig, rd, objects)
    if not info.hit or depth > max_bounces:
        return background

    material = info.material
    point = info.point
    n = info.normal
    albedo = material.albedo

    reflect_dir = reflect(rd, n)
    reflect_orig = offset_origin(point, reflect_dir, n)
    reflect_color = cast_ray(reflect_orig, reflect_dir, lights, objects,
                             depth + 1, max_bounces, background)

    refract_color = ZERO
    if material.refractive_index != 1.0:
        refract_dir = refract(rd, n, material.refractive_index)
        # ZERO means total internal reflection
        if refract_dir != ZERO:
            refract_orig = offset_origin(point, refract_dir, n)
            refract_color = cast_ray(refract_orig, refract_dir, lights, objects,
                                     depth + 1, max_bounces, background)

    diffuse_intensity = 0.0
    specular_intensity = 0.0
    for light in lights:
        to_light = sub(light.position, point)
        light_distance = length(to_light)
        light_dir = norm(to_light)

        # Shadow ray
        shadow_orig = offset_origin(point, light_dir, n)
        shadow = scene_intersect(shadow_orig, light_dir, objects)
        if shadow.hit and length(sub(shadow.point, shadow_orig)) < light_distance:
            continue

        diffuse_intensity += light.intensity * max(0.0, dot(light_dir, n))
        specular_intensity += light.intensity * \
            max(0.0, dot(reflect(light_dir, n), rd)) ** material.specular_exponent

    diffuse = mul(mul(material.color, diffuse_intensity), albedo[0])
    specular = mul(mul(WHITE, specular_intensity), albedo[1])
    return add(add(add(diffuse, specular), mul(reflect_color, albedo[2])),
               mul(refract_color, albedo[3]))

def camera_ray(i: int, j: int, width: int, height: int, fov: float) -> Vec3:
    """
    Unit direction through the centre of pixel (i, j) for a camera at the
    origin looking down -Z. fov is the horizontal half-angle in radians.
    """
    scale = math.tan(fov)
    x = (2.0 * (i + 0.5) / width - 1.0) * scale
    y = -(2.0 * (j + 0.5) / height - 1.0) * scale * height / width
    return norm((x, y, -1.0))

def to_bytes(frame: Sequence[Vec3]) -> bytes:
    """Raw RGB payload, row-major, top-to-bottom."""
    return bytes(to_byte(c) for color in frame for c in color)

def to_image(frame: Sequence[Vec3], width: int, height: int) -> Image.Image:
    return Image.frombytes("RGB", (width, height), to_bytes(frame))

def image_sink(output_path: str) -> Sink:
    """
    Sink that saves the frame with Pillow. The format follows the file
    extension; .ppm gives binary P6.
    """
    def save(frame: Sequence[Vec3], width: int, height: int) -> None:
        to_image(frame, width, height).save(output_path)
        print(f"Saved {output_path}")
    return save

def render(lights: Sequence[Light], objects: Sequence[SceneObject],
           width: int, height: int, fov: float,
           output_sink: Optional[Sink] = None,
           max_bounces: int = MAX_BOUNCES,
           background: Vec3 = BACKGROUND_COLOR) -> Frame:
    """Trace one primary ray per pixel and hand the frame to output_sink."""
    frame: Frame = []

    print(f"Rendering {width}x{height} image with {max_bounces} max bounces...")

    for j in range(height):
        if j % 50 == 0:
            print(f"Progress: {j}/{height} ({100*j//height}%)")
        for i in range(width):
            rd = camera_ray(i, j, width, height, fov)
            frame.append(cast_ray((0.0, 0.0, 0.0), rd, lights, objects,
                                  0, max_bounces, background))

    if output_sink is not None:
        output_sink(frame, width, height)
    return frame

def render_scene(scene: Scene, output_path: str = "render.png") -> Frame:
    return render(scene.lights, scene.objects, scene.width, scene.height, scene.fov,
                  image_sink(output_path), scene.max_bounces, scene.background)

def main() -> None:
    # Try to find scene.json in parent directory or current directory
    if os.path.exists("../scene.json"):
        scene_path = "../scene.json"
    elif os.path.exists("scene.json"):
        scene_path = "scene.json"
    else:
        scene_path = None

    if scene_path is None:
        print("No scene.json found, using the default scene")
        scene = default_scene()
    else:
        scene_data = load_scene(scene_path)
        validate_scene(scene_data)
        scene = build_scene(scene_data)

    renders_dir = "../renders" if scene_path == "../scene.json" else "renders"
    os.makedirs(renders_dir, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    filename = (f"render_{timestamp}_b{scene.max_bounces}_s{len(scene.objects)}"
                f"_l{len(scene.lights)}_{scene.width}x{scene.height}.png")
    render_scene(scene, os.path.join(renders_dir, filename))

if __name__ == "__main__":
    main()
