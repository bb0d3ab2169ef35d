"""
Ray Path Visualization - Follow a single ray through its chain of mirror
reflections and draw the path over the rendered scene.
"""
import math
import os
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from PIL import ImageDraw

from geometry import Vec3, add, mul, norm, reflect
from objects import SceneObject
from raytrace_cpu import offset_origin, render, scene_intersect, to_image
from scene import MAX_BOUNCES, Scene, build_scene, default_scene, load_scene, validate_scene

# Length of the segment drawn for a ray that escapes the scene
ESCAPE_DISTANCE = 100.0

class RayPath:
    """Represents a traced ray path with segments and weights."""
    def __init__(self):
        self.segments: List[Tuple[Vec3, Vec3, float]] = []
        # Each segment: (start_pos, end_pos, weight)
        self.weight_history: List[float] = []  # Weight at each bounce

    def add_segment(self, start: Vec3, end: Vec3, weight: float):
        self.segments.append((start, end, weight))
        self.weight_history.append(weight)

def trace_ray_path(objects: Sequence[SceneObject], start_pos: Vec3, start_dir: Vec3,
                   max_bounces: int = MAX_BOUNCES,
                   min_weight: float = 0.01) -> RayPath:
    """
    Trace a ray from start position along its mirror reflections and record
    its complete path.

    Args:
        objects: Scene objects to trace through
        start_pos: Starting position of ray
        start_dir: Starting direction
        max_bounces: Maximum number of reflections followed
        min_weight: Stop once the accumulated reflection weight drops below this

    Returns:
        RayPath object with all segments
    """
    path = RayPath()
    ro = start_pos
    rd = norm(start_dir)
    weight = 1.0
    bounce = 0

    while True:
        info = scene_intersect(ro, rd, objects)
        if not info.hit:
            # Ray escaped
            path.add_segment(ro, add(ro, mul(rd, ESCAPE_DISTANCE)), weight)
            break

        path.add_segment(ro, info.point, weight)

        weight *= info.material.albedo[2]
        if bounce >= max_bounces or weight < min_weight:
            break

        rd_reflected = reflect(rd, info.normal)
        ro = offset_origin(info.point, rd_reflected, info.normal)
        rd = rd_reflected
        bounce += 1

    return path

def project_point(p3d: Vec3, width: int, height: int, fov: float) -> Optional[Tuple[int, int]]:
    """Project 3D point to pixel coordinates of the camera at the origin looking down -Z."""
    depth = -p3d[2]
    if depth < 0.1:  # Behind camera
        return None

    scale = math.tan(fov)
    ndc_x = p3d[0] / depth / scale
    ndc_y = p3d[1] / depth / (scale * height / width)

    px = int((ndc_x + 1.0) * 0.5 * width)
    py = int((1.0 - ndc_y) * 0.5 * height)
    if 0 <= px < width and 0 <= py < height:
        return (px, py)
    return None

def render_with_ray_path(scene: Scene, ray_start: Vec3, ray_dir: Vec3,
                         output_path: str = "render_path.png") -> RayPath:
    """
    Render scene with a highlighted ray path visualization.
    """
    W, H, fov = scene.width, scene.height, scene.fov

    print(f"Rendering {W}x{H} scene with ray path visualization...")

    ray_path = trace_ray_path(scene.objects, ray_start, ray_dir, max_bounces=scene.max_bounces)

    print(f"Ray path traced: {len(ray_path.segments)} segments, "
          f"final weight: {ray_path.weight_history[-1]:.3f}")

    frame = render(scene.lights, scene.objects, W, H, fov,
                   max_bounces=scene.max_bounces, background=scene.background)
    img = to_image(frame, W, H)
    draw = ImageDraw.Draw(img)

    # Draw ray path segments with weight-based color
    for i, (start, end, weight) in enumerate(ray_path.segments):
        start_2d = project_point(start, W, H, fov)
        end_2d = project_point(end, W, H, fov)

        if start_2d and end_2d:
            if weight > 0.7:
                color = (255, 255, 200)  # Bright yellow-white
            elif weight > 0.4:
                color = (255, 200, 100)  # Yellow-orange
            elif weight > 0.2:
                color = (255, 150, 50)   # Orange
            else:
                color = (200, 100, 50)   # Red-orange (fading)

            draw.line([start_2d, end_2d], fill=color, width=max(1, int(weight * 3)))

            # Mark each bounce point
            if i < len(ray_path.segments) - 1:
                draw.ellipse([end_2d[0]-2, end_2d[1]-2, end_2d[0]+2, end_2d[1]+2],
                             fill=color, outline=color)

    # Highlight light positions
    for light in scene.lights:
        light_2d = project_point(light.position, W, H, fov)
        if light_2d:
            for radius in [8, 6, 4]:
                draw.ellipse([light_2d[0]-radius, light_2d[1]-radius,
                              light_2d[0]+radius, light_2d[1]+radius],
                             fill=(255, 255, 200), outline=(255, 255, 150))

    img.save(output_path)
    print(f"Saved ray path visualization: {output_path}")
    return ray_path

if __name__ == "__main__":
    if os.path.exists("../scene.json"):
        scene_data = load_scene("../scene.json")
        validate_scene(scene_data)
        scene = build_scene(scene_data)
        renders_dir = "../renders"
    else:
        scene = default_scene()
        renders_dir = "renders"
    os.makedirs(renders_dir, exist_ok=True)

    # Aim from the camera at the last sphere so the path shows reflections
    target = scene.objects[-1].get_position()
    ray_dir = norm(target)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    output_path = os.path.join(renders_dir, f"raypath_{timestamp}.png")

    render_with_ray_path(scene, (0.0, 0.0, 0.0), ray_dir, output_path)
