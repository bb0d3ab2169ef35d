"""Scene primitives: materials, point lights and intersectable objects."""
import math
from typing import NamedTuple, Tuple

from geometry import Vec3, dot, sub

class Material(NamedTuple):
    """
    Surface properties shared by reference between objects.

    albedo weights, in order: diffuse, specular, reflection, refraction.
    They need not sum to 1. A refractive_index of 1.0 means the surface
    does not refract.
    """
    color: Vec3
    albedo: Tuple[float, float, float, float]
    specular_exponent: float
    refractive_index: float = 1.0

class Light(NamedTuple):
    position: Vec3
    intensity: float

class SceneObject:
    """Anything a ray can hit. Subclasses must be immutable."""

    def ray_intersect(self, orig: Vec3, rd: Vec3) -> Tuple[bool, float]:
        """
        Returns (hit, dist): whether the ray from orig along unit vector rd
        hits this object, and the distance to the first hit along the ray.
        """
        raise NotImplementedError

    def get_position(self) -> Vec3:
        """Anchor point used to derive the surface normal."""
        raise NotImplementedError

    def get_material(self) -> Material:
        raise NotImplementedError

class Sphere(SceneObject):
    def __init__(self, center: Vec3, radius: float, material: Material):
        self.center = tuple(float(c) for c in center)
        self.radius = float(radius)
        self.material = material

    def __repr__(self) -> str:
        return f"Sphere(center={self.center}, radius={self.radius})"

    def ray_intersect(self, orig: Vec3, rd: Vec3) -> Tuple[bool, float]:
        l = sub(self.center, orig)
        tca = dot(l, rd)
        d2 = dot(l, l) - tca * tca
        r2 = self.radius * self.radius
        if d2 > r2:
            return False, 0.0

        thc = math.sqrt(r2 - d2)
        t0 = tca - thc
        t1 = tca + thc
        if t0 < 0:
            t0 = t1
        return t0 >= 0, t0

    def get_position(self) -> Vec3:
        return self.center

    def get_material(self) -> Material:
        return self.material
