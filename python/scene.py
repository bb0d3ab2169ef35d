"""Scene loading, validation and construction from scene.json"""
import json
import math
from typing import Any, Dict, List, NamedTuple

from geometry import Vec3
from objects import Light, Material, SceneObject, Sphere

MAX_BOUNCES = 4
BACKGROUND_COLOR: Vec3 = (0.2, 0.7, 0.8)

class Scene(NamedTuple):
    """Everything a render needs. Read-only once built."""
    objects: List[SceneObject]
    lights: List[Light]
    width: int
    height: int
    fov: float
    max_bounces: int = MAX_BOUNCES
    background: Vec3 = BACKGROUND_COLOR

def load_scene(json_path: str = "scene.json") -> Dict[str, Any]:
    """Load scene configuration from JSON file."""
    with open(json_path, 'r') as f:
        return json.load(f)

def validate_scene(scene: Dict[str, Any]) -> None:
    """Basic validation of scene structure."""
    assert "render" in scene, "Scene must have render settings"
    assert "materials" in scene, "Scene must have materials"
    assert "spheres" in scene, "Scene must have spheres"
    assert "lights" in scene, "Scene must have lights"

    # Validate render settings
    render = scene["render"]
    assert render.get("width", 0) > 0 and render.get("height", 0) > 0, \
        "Render width and height must be positive"
    assert "fov" in render and 0 < render["fov"] < math.pi / 2, \
        "Render fov must be a half-angle in (0, pi/2) radians"
    assert render.get("max_bounces", MAX_BOUNCES) >= 0
    if "background" in render:
        assert len(render["background"]) == 3

    # Validate materials
    for name, mat in scene["materials"].items():
        assert "color" in mat and len(mat["color"]) == 3, f"Material {name}: color needs 3 values"
        assert "albedo" in mat and len(mat["albedo"]) == 4, f"Material {name}: albedo needs 4 values"
        assert mat.get("specular_exponent", 0) > 0, f"Material {name}: specular_exponent must be positive"
        assert mat.get("refractive_index", 1.0) >= 1.0, f"Material {name}: refractive_index must be >= 1.0"

    # Validate spheres
    for i, sphere in enumerate(scene["spheres"]):
        assert "center" in sphere and len(sphere["center"]) == 3, f"Sphere {i}: center needs 3 values"
        assert sphere.get("radius", 0) > 0, f"Sphere {i}: radius must be positive"
        assert sphere.get("material") in scene["materials"], \
            f"Sphere {i}: unknown material {sphere.get('material')!r}"

    # Validate lights
    for i, light in enumerate(scene["lights"]):
        assert "position" in light and len(light["position"]) == 3, f"Light {i}: position needs 3 values"
        assert light.get("intensity", 0) > 0, f"Light {i}: intensity must be positive"

    print("Scene validation passed!")

def build_material(mat: Dict[str, Any]) -> Material:
    return Material(
        color=tuple(float(c) for c in mat["color"]),
        albedo=tuple(float(a) for a in mat["albedo"]),
        specular_exponent=float(mat["specular_exponent"]),
        refractive_index=float(mat.get("refractive_index", 1.0)),
    )

def build_scene(scene: Dict[str, Any]) -> Scene:
    """Turn a validated scene dictionary into objects and lights."""
    materials = {name: build_material(mat) for name, mat in scene["materials"].items()}

    objects = [
        Sphere(sphere["center"], sphere["radius"], materials[sphere["material"]])
        for sphere in scene["spheres"]
    ]
    lights = [
        Light(tuple(float(p) for p in light["position"]), float(light["intensity"]))
        for light in scene["lights"]
    ]

    render = scene["render"]
    return Scene(
        objects=objects,
        lights=lights,
        width=int(render["width"]),
        height=int(render["height"]),
        fov=float(render["fov"]),
        max_bounces=int(render.get("max_bounces", MAX_BOUNCES)),
        background=tuple(float(c) for c in render.get("background", BACKGROUND_COLOR)),
    )

DEFAULT_SCENE: Dict[str, Any] = {
    "render": {"width": 1024, "height": 768, "fov": math.pi / 4, "max_bounces": MAX_BOUNCES},
    "materials": {
        "ivory": {"color": [0.4, 0.4, 0.3], "albedo": [0.6, 0.3, 0.1, 0.0], "specular_exponent": 50},
        "glass": {"color": [0.6, 0.7, 0.8], "albedo": [0.0, 0.5, 0.1, 0.8],
                  "specular_exponent": 125, "refractive_index": 1.5},
        "red_rubber": {"color": [0.3, 0.1, 0.1], "albedo": [0.9, 0.1, 0.0, 0.0], "specular_exponent": 10},
        "mirror": {"color": [1.0, 1.0, 1.0], "albedo": [0.0, 10.0, 0.8, 0.0], "specular_exponent": 1425},
    },
    "spheres": [
        {"center": [-3, 0, -16], "radius": 2, "material": "ivory"},
        {"center": [-1.0, -1.5, -12], "radius": 2, "material": "glass"},
        {"center": [1.5, -0.5, -18], "radius": 3, "material": "red_rubber"},
        {"center": [7, 5, -18], "radius": 4, "material": "mirror"},
    ],
    "lights": [
        {"position": [-20, 20, 20], "intensity": 1.5},
        {"position": [30, 50, -25], "intensity": 1.8},
        {"position": [30, 20, 30], "intensity": 1.7},
    ],
}

def default_scene() -> Scene:
    """Ivory, glass, rubber and mirror spheres under three lights."""
    return build_scene(DEFAULT_SCENE)
