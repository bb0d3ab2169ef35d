"""
Vector math on plain float tuples (2, 3 or 4 components).
Every operation returns a new tuple.
"""
import math
from typing import Tuple

Vec = Tuple[float, ...]
Vec3 = Tuple[float, float, float]

ZERO: Vec3 = (0.0, 0.0, 0.0)

def _check(a: Vec, b: Vec) -> None:
    if len(a) != len(b):
        raise ValueError(f"vector length mismatch: {len(a)} != {len(b)}")

# Vector math utilities
def add(a: Vec, b: Vec) -> Vec:
    _check(a, b)
    return tuple(x + y for x, y in zip(a, b))

def sub(a: Vec, b: Vec) -> Vec:
    _check(a, b)
    return tuple(x - y for x, y in zip(a, b))

def mul(a: Vec, s: float) -> Vec:
    return tuple(x * s for x in a)

def neg(a: Vec) -> Vec:
    return tuple(-x for x in a)

def dot(a: Vec, b: Vec) -> float:
    _check(a, b)
    return sum(x * y for x, y in zip(a, b))

def length(v: Vec) -> float:
    return math.sqrt(dot(v, v))

def norm(v: Vec) -> Vec:
    """Unit vector along v. A zero vector raises ZeroDivisionError."""
    l = length(v)
    return tuple(x / l for x in v)

def reflect(rd: Vec, n: Vec) -> Vec:
    """Reflect ray direction rd off surface with normal n (both unit length)."""
    return sub(rd, mul(n, 2.0 * dot(rd, n)))

def refract(rd: Vec3, n: Vec3, refractive_index: float) -> Vec3:
    """
    Refracted direction of unit ray rd entering a medium of the given index
    through a surface with unit normal n (vector form of Snell's law).

    Returns ZERO on total internal reflection.
    """
    cos_i = -dot(n, rd)
    n1, n2 = refractive_index, 1.0
    if cos_i < 0:
        # Ray starts inside the object
        n1, n2 = 1.0, refractive_index
        n = neg(n)
        cos_i = -cos_i

    ratio = n2 / n1
    k = 1.0 - ratio * ratio * (1.0 - cos_i * cos_i)
    if k < 0:
        return ZERO
    return norm(add(mul(rd, ratio), mul(n, ratio * cos_i - math.sqrt(k))))

def clamp01(x: float) -> float:
    return max(0.0, min(1.0, x))

def to_byte(x: float) -> int:
    """Output channel value in [0, 255]."""
    return int(round(255 * clamp01(x)))
